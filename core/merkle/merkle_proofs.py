"""
Merkle Proofs Convenience Wrappers
Class-based API producing and consuming the ProofBundle wire model.

This module provides:
- MerkleProver: Generate roots and proofs
- MerkleVerifier: Verify proofs

These are thin wrappers around the functions in merkle_tree.py.
"""
from __future__ import annotations

import logging
from typing import Sequence

from core.crypto.hashing import DEFAULT_ALGORITHM, leaf_from_bytes
from core.merkle.merkle_tree import (
    build_merkle_proof,
    build_merkle_root,
    verify_merkle_proof,
)
from core.schemas.errors import SymMerkleException
from core.schemas.proof import ProofBundle


logger = logging.getLogger(__name__)


class MerkleProver:
    """
    Convenience class for generating Merkle roots and proofs.

    Provides static methods for proof generation from:
    - Pre-encoded leaves (256-bit integers)
    - Raw byte records (hashed into leaves with leaf_from_bytes)

    Example:
        >>> leaves = [leaf_from_bytes(b"a"), leaf_from_bytes(b"b"), leaf_from_bytes(b"c")]
        >>> bundle = MerkleProver.prove(leaves, index=1)
        >>> bundle.leaf_value == leaves[1]
        True
    """

    @staticmethod
    def prove(
        leaves: Sequence[int],
        index: int,
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> ProofBundle:
        """
        Generate a proof bundle for the leaf at the given index.

        Raises:
            IndexOutOfRangeException: If index is out of range
            InvalidInputException: If leaves is empty or invalid
        """
        siblings = build_merkle_proof(leaves, index, algorithm)
        root = build_merkle_root(leaves, algorithm)
        logger.debug(
            f"Generated proof for leaf {index} of {len(leaves)} ({len(siblings)} siblings)"
        )
        return ProofBundle.from_values(
            root=root,
            leaf=leaves[index],
            siblings=siblings,
            algorithm=algorithm,
        )

    @staticmethod
    def prove_bytes(
        items: Sequence[bytes],
        index: int,
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> ProofBundle:
        """Generate a proof bundle for a raw record; records become leaves via leaf_from_bytes."""
        leaves = [leaf_from_bytes(item, algorithm) for item in items]
        return MerkleProver.prove(leaves, index, algorithm)

    @staticmethod
    def compute_root(
        leaves: Sequence[int],
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> int:
        """Compute the Merkle root for a sequence of leaves."""
        return build_merkle_root(leaves, algorithm)

    @staticmethod
    def compute_root_from_bytes(
        items: Sequence[bytes],
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> int:
        leaves = [leaf_from_bytes(item, algorithm) for item in items]
        return build_merkle_root(leaves, algorithm)


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    None of these methods raise; malformed input is a failed verification.

    Example:
        >>> bundle = MerkleProver.prove(leaves, index=1)
        >>> MerkleVerifier.verify(bundle)
        True
    """

    @staticmethod
    def verify(bundle: ProofBundle) -> bool:
        """Verify a proof bundle against the root it carries."""
        try:
            root = bundle.root_value
            leaf = bundle.leaf_value
            siblings = bundle.sibling_values
        except (SymMerkleException, AttributeError, TypeError) as e:
            # Reachable for bundles built with model_construct()
            logger.debug(f"Rejecting undecodable proof bundle: {e}")
            return False

        ok = verify_merkle_proof(root, leaf, siblings, bundle.algorithm)
        if not ok:
            logger.debug(f"Proof bundle does not fold to its root {bundle.root}")
        return ok

    @staticmethod
    def verify_leaf_in_root(
        leaf: int,
        siblings: Sequence[int],
        root: int,
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> bool:
        """
        Verify a leaf is included in a Merkle root using raw components.

        Args:
            leaf: The claimed leaf value
            siblings: Sibling values (bottom-up)
            root: The published root
            algorithm: Hash primitive name

        Returns:
            True if the proof is valid, False otherwise
        """
        return verify_merkle_proof(root, leaf, siblings, algorithm)

    @staticmethod
    def verify_bytes_in_root(
        data: bytes,
        siblings: Sequence[int],
        root: int,
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> bool:
        """Verify a raw record is included in a Merkle root."""
        try:
            leaf = leaf_from_bytes(data, algorithm)
        except (SymMerkleException, TypeError):
            return False
        return verify_merkle_proof(root, leaf, siblings, algorithm)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
