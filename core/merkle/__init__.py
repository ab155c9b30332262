"""
Merkle Tree and Commitments
Symmetric-pair Merkle tree construction + proof generation/verification.

This module provides:
- pair_hash: Commutative parent computation (XOR, then hash)
- build_merkle_root: Compute root from leaf values
- build_merkle_proof: Generate the sibling list for a specific leaf
- verify_merkle_proof: Fold a proof against a claimed leaf and root
- MerkleTree: Full layer stack for a fixed leaf sequence

Canonical Commitment Rules:
1. Leaves: 256-bit unsigned integers, never equal to EMPTY_LEAF
2. Parent hashing: keccak256(bytes32(left ^ right))
3. Padding: Append EMPTY_LEAF (0) to any odd layer
4. Empty tree: rejected
5. Single leaf: root = leaf

Usage:
    from core.merkle import build_merkle_root, build_merkle_proof, verify_merkle_proof
    from core.crypto import leaf_from_bytes

    leaves = [leaf_from_bytes(record) for record in records]
    root = build_merkle_root(leaves)
    proof = build_merkle_proof(leaves, index=2)
    assert verify_merkle_proof(root, leaves[2], proof)
"""
from .merkle_tree import (
    EMPTY_LEAF,
    MerkleTree,
    pair_hash,
    next_layer,
    build_layers,
    build_merkle_root,
    build_merkle_proof,
    verify_merkle_proof,
    compute_proof_length,
    compute_tree_depth,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "EMPTY_LEAF",
    "MerkleTree",
    # Core functions
    "pair_hash",
    "next_layer",
    "build_layers",
    "build_merkle_root",
    "build_merkle_proof",
    "verify_merkle_proof",
    "compute_proof_length",
    "compute_tree_depth",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
