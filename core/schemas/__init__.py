"""
Schemas
File: __init__.py

Purpose: Export the error taxonomy and version constants.

Wire models live in core.schemas.proof and are imported from there
directly; they depend on core.crypto, which itself depends on the
errors exported here.
"""

from .versioning import (
    SCHEMA_VERSION,
    SchemaVersion,
)

from .errors import (
    ErrorCodes,
    IndexOutOfRangeException,
    InvalidInputException,
    ProofFormatException,
    SymMerkleError,
    SymMerkleException,
    UnsupportedAlgorithmException,
)

__all__ = [
    # Versioning
    "SCHEMA_VERSION",
    "SchemaVersion",
    # Errors
    "ErrorCodes",
    "SymMerkleError",
    "SymMerkleException",
    "InvalidInputException",
    "IndexOutOfRangeException",
    "UnsupportedAlgorithmException",
    "ProofFormatException",
]
