"""
Error Taxonomy Unit Tests
Tests for core/schemas/errors.py
"""
import pytest

from core.schemas.errors import (
    ErrorCodes,
    IndexOutOfRangeException,
    InvalidInputException,
    ProofFormatException,
    SymMerkleError,
    SymMerkleException,
    UnsupportedAlgorithmException,
)


class TestExceptionHierarchy:
    """Exceptions are catchable as both SymMerkleException and builtins."""

    @pytest.mark.parametrize(
        "exc,builtin,code",
        [
            (InvalidInputException("bad"), ValueError, ErrorCodes.INVALID_INPUT),
            (IndexOutOfRangeException(7, 5), IndexError, ErrorCodes.INDEX_OUT_OF_RANGE),
            (UnsupportedAlgorithmException("md5"), ValueError, ErrorCodes.UNSUPPORTED_ALGORITHM),
            (ProofFormatException("bad hex"), ValueError, ErrorCodes.PROOF_FORMAT_ERROR),
        ],
    )
    def test_hierarchy(self, exc, builtin, code):
        assert isinstance(exc, SymMerkleException)
        assert isinstance(exc, builtin)
        assert exc.code == code
        assert exc.retryable is False

    def test_position_in_details(self):
        exc = InvalidInputException("leaf is zero", position=3)

        assert exc.details == {"position": 3}

    def test_index_details(self):
        exc = IndexOutOfRangeException(-1, 4)

        assert exc.details == {"index": "-1", "leaf_count": 4}
        assert "out of range" in str(exc)

    def test_repr(self):
        exc = UnsupportedAlgorithmException("md5")

        assert repr(exc) == (
            "UnsupportedAlgorithmException(code='UNSUPPORTED_ALGORITHM', "
            "message='Unknown algorithm: md5')"
        )


class TestErrorModel:
    """Tests for SymMerkleError conversion."""

    def test_exception_to_model(self):
        model = ProofFormatException("bad", details={"field": "root"}).to_error_model()

        assert model == SymMerkleError(
            code=ErrorCodes.PROOF_FORMAT_ERROR,
            message="bad",
            details={"field": "root"},
        )

    def test_model_to_exception(self):
        error = SymMerkleError(code=ErrorCodes.ROOT_MISMATCH, message="no fold")

        exc = error.to_exception()

        assert isinstance(exc, SymMerkleException)
        assert exc.code == ErrorCodes.ROOT_MISMATCH
        assert exc.message == "no fold"

    def test_model_rejects_extra(self):
        with pytest.raises(ValueError):
            SymMerkleError(code="X", message="m", unexpected=1)
