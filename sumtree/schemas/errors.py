"""
Module 01 - Schemas & Canonicalization
File: errors.py

Purpose: Standard error taxonomy for sum tree construction and proofs.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Schema & Validation Errors
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Construction Errors
    EMPTY_INPUT = "EMPTY_INPUT"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    AMOUNT_OVERFLOW = "AMOUNT_OVERFLOW"

    # Proof Errors
    POSITION_OUT_OF_RANGE = "POSITION_OUT_OF_RANGE"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class SumTreeError(BaseModel):
    """
    Base error model for structured error communication.

    Used to hand errors to callers that serialize them (storage, transport)
    rather than propagate exceptions.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.EMPTY_INPUT],
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

    def to_exception(self) -> "SumTreeException":
        """Convert this error model to a raised exception."""
        return SumTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class SumTreeException(Exception):
    """
    Base exception for all sum tree errors.

    This exception carries structured error information and can be
    converted to/from SumTreeError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUMTREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> SumTreeError:
        """Convert this exception to a SumTreeError model."""
        return SumTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class CanonicalizationException(SumTreeException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class SchemaValidationException(SumTreeException):
    """Exception raised when schema or configuration validation fails."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.SCHEMA_VALIDATION_ERROR,
            details=full_details,
            retryable=False,
        )


class EmptyInputException(SumTreeException):
    """Exception raised when a tree is built from zero balances."""

    def __init__(
        self,
        message: str = "Cannot build a sum tree from an empty balance list",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
            retryable=False,
        )


class PositionOutOfRangeException(SumTreeException):
    """Exception raised when a proof is requested for a nonexistent leaf."""

    def __init__(
        self,
        position: Any,
        leaf_count: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["position"] = position
        full_details["leaf_count"] = leaf_count
        super().__init__(
            message=f"Leaf position {position!r} out of range for {leaf_count} leaves",
            code=ErrorCodes.POSITION_OUT_OF_RANGE,
            details=full_details,
            retryable=False,
        )
        self.position = position
        self.leaf_count = leaf_count


class InvalidAmountException(SumTreeException):
    """Exception raised when a balance is not a non-negative integer."""

    def __init__(
        self,
        amount: Any,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["amount"] = repr(amount)
        super().__init__(
            message=f"Amount must be a non-negative integer, got {amount!r}",
            code=ErrorCodes.INVALID_AMOUNT,
            details=full_details,
            retryable=False,
        )


class AmountOverflowException(SumTreeException):
    """Exception raised when an amount or a combined sum exceeds the u64 range."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.AMOUNT_OVERFLOW,
            details=details,
            retryable=False,
        )
