"""
Hashing Utilities
Fixed-width hash primitives and integer/hex conversions for Merkle commitments.

This module provides:
- Keccak-256 and SHA-256 over raw bytes
- A registry mapping algorithm names to hash functions
- Conversion between 32-byte digests and 256-bit unsigned integers
- Hex encoding/decoding of node values with 0x prefix

Determinism Notes:
- Node values are always serialized as 32 big-endian bytes
- keccak256 is the Ethereum variant (pre-standard Keccak padding),
  matching on-chain verifiers bit for bit
"""
from __future__ import annotations

import hashlib
from typing import Callable

from eth_utils import keccak

from core.schemas.errors import (
    ProofFormatException,
    UnsupportedAlgorithmException,
)


# Width of every node value
WORD_BITS: int = 256
WORD_BYTES: int = WORD_BITS // 8
MAX_WORD: int = (1 << WORD_BITS) - 1

DEFAULT_ALGORITHM: str = "keccak256"

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def keccak256(data: bytes) -> bytes:
    """
    Compute the Ethereum Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte digest

    Example:
        >>> keccak256(bytes([0x12, 0x34])).hex()
        '56570de287d73cd1cb6092bb8fdee6173974955fdef345ae579ee9f475ea7432'
    """
    return keccak(primitive=data)


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest
    """
    return hashlib.sha256(data).digest()


HASH_FUNCTIONS: dict[str, Callable[[bytes], bytes]] = {
    "keccak256": keccak256,
    "sha256": sha256,
}


def get_hash_function(algorithm: str) -> Callable[[bytes], bytes]:
    """
    Look up a hash primitive by name.

    Raises:
        UnsupportedAlgorithmException: If the name is not registered
    """
    try:
        return HASH_FUNCTIONS[algorithm]
    except (KeyError, TypeError):
        raise UnsupportedAlgorithmException(algorithm) from None


def is_word(value: object) -> bool:
    """Return True if value is an int in [0, 2**256). bool is rejected."""
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 <= value <= MAX_WORD
    )


def int_to_bytes32(value: int) -> bytes:
    """Serialize a node value as 32 big-endian bytes."""
    return value.to_bytes(WORD_BYTES, "big")


def hash_to_int(digest: bytes) -> int:
    """Reinterpret a digest as an unsigned big-endian integer."""
    return int.from_bytes(digest, "big")


def leaf_from_bytes(data: bytes, algorithm: str = DEFAULT_ALGORITHM) -> int:
    """
    Derive a leaf value from a raw record.

    leaf = int(H(data)), the same way the reference demo turns
    literal records into leaves.
    """
    return hash_to_int(get_hash_function(algorithm)(data))


def to_hex(value: int) -> str:
    """
    Format a node value as a 0x-prefixed, 64-digit hex string.

    Example:
        >>> to_hex(255)
        '0x00000000000000000000000000000000000000000000000000000000000000ff'
    """
    return "0x" + int_to_bytes32(value).hex()


def from_hex(hex_string: str) -> int:
    """
    Parse a 0x-prefixed hex string into a node value.

    Shorter strings are accepted (leading zeros implied); longer than
    64 digits is a domain violation.

    Raises:
        ProofFormatException: On missing prefix, bad digits or overflow
    """
    if not isinstance(hex_string, str) or not hex_string.startswith("0x"):
        raise ProofFormatException(
            f"Hex string must start with '0x' prefix, got: {str(hex_string)[:10]}..."
        )

    hex_content = hex_string[2:]
    if not hex_content:
        raise ProofFormatException("Hex string has no digits after 0x prefix")
    if len(hex_content) > WORD_BYTES * 2:
        raise ProofFormatException(
            f"Hex value wider than {WORD_BITS} bits ({len(hex_content)} digits)"
        )

    # int() alone would accept signs, underscores and whitespace
    if any(ch not in _HEX_DIGITS for ch in hex_content):
        raise ProofFormatException(f"Invalid hex characters in string: {hex_string!r}")

    return int(hex_content, 16)


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
