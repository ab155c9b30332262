"""
Common factory helpers for tests.
"""

from core.crypto.hashing import hash_to_int, keccak256


def leaf_of(data: bytes) -> int:
    """keccak256(data) as a 256-bit leaf value."""
    return hash_to_int(keccak256(data))


def make_leaves(count: int, prefix: str = "leaf") -> list[int]:
    """Leaves H(prefix0), H(prefix1), ... as 256-bit integers."""
    return [leaf_of(f"{prefix}{i}".encode()) for i in range(count)]


def write_leaves_file(path, leaves: list[int]) -> str:
    """Write leaves as 0x-hex, one per line, and return the path as str."""
    path.write_text("\n".join(hex(leaf) for leaf in leaves) + "\n")
    return str(path)
