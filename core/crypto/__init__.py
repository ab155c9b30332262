"""
Core cryptographic utilities.

Hash primitives and fixed-width value conversions used by the Merkle tree.
"""
from .hashing import (
    WORD_BITS,
    WORD_BYTES,
    MAX_WORD,
    DEFAULT_ALGORITHM,
    HASH_FUNCTIONS,
    keccak256,
    sha256,
    get_hash_function,
    is_word,
    int_to_bytes32,
    hash_to_int,
    leaf_from_bytes,
    to_hex,
    from_hex,
)

__all__ = [
    "WORD_BITS",
    "WORD_BYTES",
    "MAX_WORD",
    "DEFAULT_ALGORITHM",
    "HASH_FUNCTIONS",
    "keccak256",
    "sha256",
    "get_hash_function",
    "is_word",
    "int_to_bytes32",
    "hash_to_int",
    "leaf_from_bytes",
    "to_hex",
    "from_hex",
]
