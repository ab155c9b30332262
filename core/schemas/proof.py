"""
Schemas - Proof Wire Format
File: proof.py

Purpose: JSON wire models for published roots and membership proofs.

All node values travel as 0x-prefixed, 64-digit hex strings. A proof
carries only the sibling values: no leaf index, no leaf count and no
direction bits.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.crypto.hashing import (
    DEFAULT_ALGORITHM,
    HASH_FUNCTIONS,
    from_hex,
    to_hex,
)
from .versioning import SCHEMA_VERSION, SchemaVersion

if TYPE_CHECKING:
    from core.merkle.merkle_tree import MerkleTree


def _check_hex_word(value: str) -> str:
    # ProofFormatException is a ValueError, so pydantic reports it as a ValidationError
    return to_hex(from_hex(value))


def _check_algorithm(value: str) -> str:
    if value not in HASH_FUNCTIONS:
        raise ValueError(f"Unknown algorithm: {value}")
    return value


class ProofBundle(BaseModel):
    """
    Membership proof for one leaf, as handed to a claimant.

    Hex values are normalized to 64 lowercase digits on input.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: SchemaVersion = Field(default=SCHEMA_VERSION)
    algorithm: str = Field(
        default=DEFAULT_ALGORITHM,
        description="Hash primitive used for every pair hash",
    )
    root: str = Field(..., description="Published root, 0x-hex")
    leaf: str = Field(..., description="Claimed leaf value, 0x-hex")
    siblings: list[str] = Field(
        default_factory=list,
        description="Sibling values, leaf layer first, 0x-hex",
    )

    @field_validator("algorithm")
    @classmethod
    def _validate_algorithm(cls, v: str) -> str:
        return _check_algorithm(v)

    @field_validator("root", "leaf")
    @classmethod
    def _normalize_value(cls, v: str) -> str:
        return _check_hex_word(v)

    @field_validator("siblings")
    @classmethod
    def _normalize_siblings(cls, v: list[str]) -> list[str]:
        return [_check_hex_word(s) for s in v]

    @classmethod
    def from_values(
        cls,
        root: int,
        leaf: int,
        siblings: Sequence[int],
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> "ProofBundle":
        """Build a bundle from integer node values."""
        return cls(
            algorithm=algorithm,
            root=to_hex(root),
            leaf=to_hex(leaf),
            siblings=[to_hex(s) for s in siblings],
        )

    @property
    def root_value(self) -> int:
        return from_hex(self.root)

    @property
    def leaf_value(self) -> int:
        return from_hex(self.leaf)

    @property
    def sibling_values(self) -> list[int]:
        return [from_hex(s) for s in self.siblings]

    @property
    def depth(self) -> int:
        """Number of folding steps this proof encodes."""
        return len(self.siblings)


class TreeCommitment(BaseModel):
    """Published summary of a tree: the root plus its shape."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: SchemaVersion = Field(default=SCHEMA_VERSION)
    algorithm: str = Field(default=DEFAULT_ALGORITHM)
    root: str = Field(..., description="Root value, 0x-hex")
    leaf_count: int = Field(..., ge=1)
    depth: int = Field(..., ge=1, description="Layers including leaves and root")

    @field_validator("algorithm")
    @classmethod
    def _validate_algorithm(cls, v: str) -> str:
        return _check_algorithm(v)

    @field_validator("root")
    @classmethod
    def _normalize_root(cls, v: str) -> str:
        return _check_hex_word(v)

    @classmethod
    def from_tree(cls, tree: "MerkleTree") -> "TreeCommitment":
        return cls(
            algorithm=tree.algorithm,
            root=to_hex(tree.root),
            leaf_count=tree.leaf_count,
            depth=tree.depth,
        )

    @property
    def root_value(self) -> int:
        return from_hex(self.root)


__all__ = [
    "ProofBundle",
    "TreeCommitment",
]
