"""
Merkle Tree Implementation
Symmetric-pair Merkle tree: root construction, proof generation, verification.

This module provides:
- Commutative pair hashing (XOR, then hash)
- Deterministic root computation over 256-bit integer leaves
- Proof generation for any leaf index
- Proof verification that never raises
- Zero-padding rule for odd layers

Canonical Commitment Rules (Hard Contracts):
1. Leaves are 256-bit unsigned integers, supplied already encoded
2. Parent: parent = int(H(bytes32(left XOR right)))
3. Padding rule: append EMPTY_LEAF (0) to any odd layer, at every level
4. Empty leaves: rejected with InvalidInputException
5. Single leaf: root = leaf
6. Proofs are the sibling values only, leaf layer first. Because the
   pair hash is commutative no direction bits are needed.

Determinism Notes:
- No randomness or non-deterministic ordering
- This module never sorts leaves; order defines the pairing structure
- Input sequences are never mutated
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Sequence

from core.crypto.hashing import (
    DEFAULT_ALGORITHM,
    get_hash_function,
    hash_to_int,
    int_to_bytes32,
    is_word,
)
from core.schemas.errors import (
    IndexOutOfRangeException,
    InvalidInputException,
    SymMerkleException,
)

if TYPE_CHECKING:
    from core.schemas.proof import TreeCommitment


# Padding value for odd layers. Real leaves must never take this value.
EMPTY_LEAF: int = 0


def pair_hash(a: int, b: int, algorithm: str = DEFAULT_ALGORITHM) -> int:
    """
    Combine two node values into their parent.

    parent = int(H(bytes32(a ^ b)))

    XOR makes the result independent of argument order, so
    pair_hash(a, b) == pair_hash(b, a).

    Args:
        a: Node value in [0, 2**256)
        b: Node value in [0, 2**256)
        algorithm: Registered hash primitive name

    Returns:
        Parent node value in [0, 2**256)
    """
    hash_fn = get_hash_function(algorithm)
    return hash_to_int(hash_fn(int_to_bytes32(a ^ b)))


def _validate_leaves(leaves: Sequence[int]) -> list[int]:
    """Copy leaves into a list, rejecting empty input and out-of-domain values."""
    if len(leaves) == 0:
        raise InvalidInputException("Cannot build a Merkle tree from an empty leaf list")

    layer = list(leaves)
    for position, leaf in enumerate(layer):
        if not is_word(leaf):
            raise InvalidInputException(
                f"Leaf at position {position} is not a 256-bit unsigned integer: {leaf!r}",
                position=position,
            )
        if leaf == EMPTY_LEAF:
            raise InvalidInputException(
                f"Leaf at position {position} equals the padding sentinel",
                position=position,
            )
    return layer


def next_layer(layer: Sequence[int], algorithm: str = DEFAULT_ALGORITHM) -> list[int]:
    """
    Fold one layer into the layer above it.

    An odd layer is padded with EMPTY_LEAF first (on a copy).
    Example: [a, b, c] -> [a, b, c, 0] -> [pair(a,b), pair(c,0)]
    """
    return _fold(layer, get_hash_function(algorithm))


def _fold(layer: Sequence[int], hash_fn: Callable[[bytes], bytes]) -> list[int]:
    current = list(layer)
    if len(current) % 2 == 1:
        current.append(EMPTY_LEAF)

    return [
        hash_to_int(hash_fn(int_to_bytes32(current[i] ^ current[i + 1])))
        for i in range(0, len(current), 2)
    ]


def build_layers(leaves: Sequence[int], algorithm: str = DEFAULT_ALGORITHM) -> list[list[int]]:
    """
    Build every layer of the tree, leaves first and the root layer last.

    Stored layers are unpadded; padding happens inside next_layer.

    Raises:
        InvalidInputException: If leaves is empty or holds an invalid value
    """
    hash_fn = get_hash_function(algorithm)
    layers = [_validate_leaves(leaves)]
    while len(layers[-1]) > 1:
        layers.append(_fold(layers[-1], hash_fn))
    return layers


def build_merkle_root(leaves: Sequence[int], algorithm: str = DEFAULT_ALGORITHM) -> int:
    """
    Build a Merkle root from a sequence of leaf values.

    Algorithm:
    1. If empty: raise InvalidInputException
    2. While more than one node remains:
       - If odd number of nodes, append EMPTY_LEAF
       - Pair adjacent nodes and compute parent values
    3. Return the sole remaining node (a single leaf is its own root)

    Args:
        leaves: Sequence of 256-bit leaf values. Order matters and is preserved.
        algorithm: Registered hash primitive name

    Returns:
        Root value

    Raises:
        InvalidInputException: If leaves is empty or holds an invalid value
    """
    hash_fn = get_hash_function(algorithm)
    current_level = _validate_leaves(leaves)

    while len(current_level) > 1:
        current_level = _fold(current_level, hash_fn)

    return current_level[0]


def _check_index(index: int, leaf_count: int) -> None:
    if (
        not isinstance(index, int)
        or isinstance(index, bool)
        or index < 0
        or index >= leaf_count
    ):
        raise IndexOutOfRangeException(index, leaf_count)


def _siblings_from_layers(layers: Sequence[Sequence[int]], index: int) -> list[int]:
    """Walk precomputed layers upward collecting one sibling per fold."""
    siblings: list[int] = []
    current_index = index

    for layer in layers[:-1]:
        if current_index % 2 == 1:
            siblings.append(layer[current_index - 1])
        elif current_index + 1 < len(layer):
            siblings.append(layer[current_index + 1])
        else:
            # Right neighbour is the padding slot
            siblings.append(EMPTY_LEAF)
        current_index //= 2

    return siblings


def build_merkle_proof(
    leaves: Sequence[int],
    index: int,
    algorithm: str = DEFAULT_ALGORITHM,
) -> list[int]:
    """
    Generate a Merkle proof for the leaf at the given index.

    The proof is the list of sibling values needed to recompute the
    root, leaf layer first. It carries no index or direction bits.

    Algorithm:
    1. Start at the target leaf index
    2. At each level:
       - If odd number of nodes, pad with EMPTY_LEAF
       - Record cur[i-1] if i is odd, else cur[i+1]
       - Move up: i = i // 2
    3. Continue until the root level

    Args:
        leaves: Sequence of leaf values
        index: 0-based index of the leaf to prove
        algorithm: Registered hash primitive name

    Returns:
        Sibling values, bottom-up

    Raises:
        InvalidInputException: If leaves is empty or holds an invalid value
        IndexOutOfRangeException: If index is out of range
    """
    hash_fn = get_hash_function(algorithm)
    current_level = _validate_leaves(leaves)
    _check_index(index, len(current_level))

    siblings: list[int] = []
    current_index = index

    while len(current_level) > 1:
        if len(current_level) % 2 == 1:
            current_level.append(EMPTY_LEAF)

        if current_index % 2 == 1:
            siblings.append(current_level[current_index - 1])
        else:
            siblings.append(current_level[current_index + 1])

        current_index //= 2
        current_level = _fold(current_level, hash_fn)

    return siblings


def verify_merkle_proof(
    root: int,
    leaf: int,
    proof: Sequence[int],
    algorithm: str = DEFAULT_ALGORITHM,
) -> bool:
    """
    Verify a Merkle proof.

    Folds each sibling into the running value, h = pair(sibling, h),
    and compares the result with the root. Exactly one pair hash per
    proof entry.

    Never raises: a wrong leaf, wrong root, wrong proof length,
    out-of-domain value or unknown algorithm all yield False.

    Args:
        root: Claimed root value
        leaf: Claimed leaf value
        proof: Sibling values, bottom-up
        algorithm: Registered hash primitive name

    Returns:
        True if the folded value equals the root, False otherwise
    """
    try:
        hash_fn = get_hash_function(algorithm)
        siblings = list(proof)
    except (SymMerkleException, TypeError):
        return False

    if not is_word(root) or not is_word(leaf):
        return False
    if not all(is_word(sibling) for sibling in siblings):
        return False

    current_hash = leaf
    for sibling in siblings:
        current_hash = hash_to_int(hash_fn(int_to_bytes32(sibling ^ current_hash)))

    return current_hash == root


def compute_proof_length(num_leaves: int) -> int:
    """
    Number of folding steps (and proof entries) for a tree of num_leaves.

    ceil(log2 n) for every n >= 1, since padding each odd layer is the
    same as rounding the layer size up at each step. 0 for n <= 1.
    """
    steps = 0
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        steps += 1
    return steps


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of layers from leaves to root, inclusive.

    A single leaf has depth 1, two leaves have depth 2, an empty tree 0.
    """
    if num_leaves <= 0:
        return 0
    return compute_proof_length(num_leaves) + 1


@dataclass(frozen=True)
class MerkleTree:
    """
    Full stack of layers for a fixed leaf sequence.

    Any change to the leaves needs a new tree; nothing is updated
    incrementally.

    Attributes:
        layers: Unpadded layers, leaves first, root layer last
        algorithm: Hash primitive used for every fold
    """
    layers: tuple[tuple[int, ...], ...]
    algorithm: str = DEFAULT_ALGORITHM

    @classmethod
    def from_leaves(
        cls,
        leaves: Sequence[int],
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> "MerkleTree":
        layers = build_layers(leaves, algorithm)
        return cls(
            layers=tuple(tuple(layer) for layer in layers),
            algorithm=algorithm,
        )

    @property
    def leaves(self) -> tuple[int, ...]:
        return self.layers[0]

    @property
    def root(self) -> int:
        return self.layers[-1][0]

    @property
    def leaf_count(self) -> int:
        return len(self.layers[0])

    @property
    def depth(self) -> int:
        return len(self.layers)

    def proof(self, index: int) -> list[int]:
        """Proof for the leaf at index, read from the cached layers."""
        _check_index(index, self.leaf_count)
        return _siblings_from_layers(self.layers, index)

    def verify(self, leaf: int, proof: Sequence[int]) -> bool:
        """Check a proof against this tree's root."""
        return verify_merkle_proof(self.root, leaf, proof, self.algorithm)

    def commitment(self) -> "TreeCommitment":
        """Wire summary of this tree: root, leaf count, depth."""
        from core.schemas.proof import TreeCommitment

        return TreeCommitment.from_tree(self)


__all__ = [
    "EMPTY_LEAF",
    "MerkleTree",
    "pair_hash",
    "next_layer",
    "build_layers",
    "build_merkle_root",
    "build_merkle_proof",
    "verify_merkle_proof",
    "compute_proof_length",
    "compute_tree_depth",
]
