"""
Schemas - Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy for the Merkle tree core.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

All errors raised by the core are deterministic functions of their
input, so none of them is retryable.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the package."""

    # Input Errors
    HASH_VALUE_MALFORMED = "HASH_VALUE_MALFORMED"

    # Lookup Errors
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"
    LEAF_POSITION_OUT_OF_RANGE = "LEAF_POSITION_OUT_OF_RANGE"

    # Configuration Errors
    UNKNOWN_HASH_ALGORITHM = "UNKNOWN_HASH_ALGORITHM"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Base error model for structured error communication.

    Used by embedders that report failures without exceptions,
    e.g. across a process boundary.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.LEAF_NOT_FOUND],
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

    def to_exception(self) -> "MerkleException":
        """Convert this error model to a raised exception."""
        return MerkleException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleException(Exception):
    """
    Base exception for all Merkle tree errors.

    This exception carries structured error information and can be
    converted to/from MerkleError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> MerkleError:
        """Convert this exception to a MerkleError model."""
        return MerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class HashValueException(MerkleException):
    """Raised when a digest is built from the wrong number of bytes or bad hex."""

    def __init__(
        self,
        message: str,
        expected_size: int | None = None,
        actual_size: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if expected_size is not None:
            full_details["expected_size"] = expected_size
        if actual_size is not None:
            full_details["actual_size"] = actual_size
        super().__init__(
            message=message,
            code=ErrorCodes.HASH_VALUE_MALFORMED,
            details=full_details,
            retryable=False,
        )


class LeafNotFoundException(MerkleException):
    """Raised when a digest or position does not identify an occupied leaf."""

    def __init__(
        self,
        message: str,
        digest: str | None = None,
        position: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if digest:
            full_details["digest"] = digest
        if position is not None:
            full_details["position"] = position
        super().__init__(
            message=message,
            code=ErrorCodes.LEAF_NOT_FOUND,
            details=full_details,
            retryable=False,
        )


class LeafPositionException(MerkleException):
    """Raised when a leaf position lies outside the current leaf level."""

    def __init__(
        self,
        message: str,
        position: int | None = None,
        size: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if position is not None:
            full_details["position"] = position
        if size is not None:
            full_details["size"] = size
        super().__init__(
            message=message,
            code=ErrorCodes.LEAF_POSITION_OUT_OF_RANGE,
            details=full_details,
            retryable=False,
        )


class UnknownHashAlgorithmException(MerkleException):
    """Raised when configuration names a hash algorithm with no hasher."""

    def __init__(
        self,
        message: str,
        algorithm: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if algorithm:
            full_details["algorithm"] = algorithm
        super().__init__(
            message=message,
            code=ErrorCodes.UNKNOWN_HASH_ALGORITHM,
            details=full_details,
            retryable=False,
        )
