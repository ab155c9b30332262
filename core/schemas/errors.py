"""
Schemas - Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy for tree construction, proof generation
and wire decoding. Defines both Pydantic models for structured error
communication and Python exceptions for control flow.

Verification itself never raises: a mismatch is reported as False.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Input Errors
    INVALID_INPUT = "INVALID_INPUT"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"

    # Hashing Errors
    UNSUPPORTED_ALGORITHM = "UNSUPPORTED_ALGORITHM"

    # Wire Format Errors
    PROOF_FORMAT_ERROR = "PROOF_FORMAT_ERROR"

    # Verification Outcomes (reported, never raised by the verifier)
    ROOT_MISMATCH = "ROOT_MISMATCH"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class SymMerkleError(BaseModel):
    """
    Base error model for structured error reporting.

    Used by the CLI's JSON output so failures serialize the same way
    regardless of which layer produced them.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_INPUT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "SymMerkleException":
        """Convert this error model to a raised exception."""
        return SymMerkleException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class SymMerkleException(Exception):
    """
    Base exception for all symmerkle errors.

    Carries structured error information and can be converted
    to a SymMerkleError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "SYMMERKLE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> SymMerkleError:
        """Convert this exception to a SymMerkleError model."""
        return SymMerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidInputException(SymMerkleException, ValueError):
    """Raised for an empty leaf sequence or a leaf outside the value domain."""

    def __init__(
        self,
        message: str,
        position: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if position is not None:
            full_details["position"] = position
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_INPUT,
            details=full_details,
            retryable=False,
        )


class IndexOutOfRangeException(SymMerkleException, IndexError):
    """Raised when a proof is requested for an index outside [0, n)."""

    def __init__(
        self,
        index: Any,
        leaf_count: int,
    ) -> None:
        super().__init__(
            message=f"Leaf index {index!r} out of range for {leaf_count} leaves",
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details={"index": repr(index), "leaf_count": leaf_count},
            retryable=False,
        )


class UnsupportedAlgorithmException(SymMerkleException, ValueError):
    """Raised when a hash algorithm name is not registered."""

    def __init__(self, algorithm: Any) -> None:
        super().__init__(
            message=f"Unknown algorithm: {algorithm}",
            code=ErrorCodes.UNSUPPORTED_ALGORITHM,
            details={"algorithm": str(algorithm)},
            retryable=False,
        )


class ProofFormatException(SymMerkleException, ValueError):
    """Raised when wire data (hex values, proof JSON) cannot be decoded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.PROOF_FORMAT_ERROR,
            details=details,
            retryable=False,
        )
