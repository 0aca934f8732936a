"""Error types and classification utilities for care-record derivation."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel

from src.core.config import Constants


class PetLedgerError(Exception):
    """Base class for errors raised by the care-status engine."""


class InvalidDateError(PetLedgerError):
    """A date input was malformed or impossible.

    Not a ValueError subclass, so it propagates unchanged through pydantic
    field validators rather than surfacing as a ValidationError.
    """


class PetNotFoundError(PetLedgerError, LookupError):
    """A dashboard was requested for a pet that does not exist."""

    def __init__(self, pet_id: int) -> None:
        self.pet_id = pet_id
        super().__init__(f"Pet not found: {pet_id}")


class FetchError(PetLedgerError, RuntimeError):
    """The data access layer failed to read a collection or record."""


class ErrorCategory(Enum):
    """Categories of errors surfaced by the dashboard API."""

    PET_NOT_FOUND = "pet_not_found"
    INVALID_DATE = "invalid_date"
    FETCH_FAILED = "fetch_failed"
    STORAGE_UNAVAILABLE = "storage_unavailable"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Lookup errors
    ERR_PET_NOT_FOUND = "ERR_PET_NOT_FOUND"

    # Input errors
    ERR_INVALID_DATE = "ERR_INVALID_DATE"

    # Data layer errors
    ERR_FETCH_FAILED = "ERR_FETCH_FAILED"
    ERR_STORAGE_UNAVAILABLE = "ERR_STORAGE_UNAVAILABLE"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity
    status_code: int


_ERROR_PATTERNS: dict[Literal["storage"], dict[str, list[str] | set[str]]] = {
    "storage": {
        "phrases": [
            "database is locked",
            "unable to open database",
            "disk i/o error",
            "connection",
            "timeout",
        ],
        "exception_types": {"ConnectionError", "TimeoutError", "OperationalError"},
    },
}


def _match_error_pattern(
    *,
    error_str: str,
    exception_type: str,
    pattern_type: Literal["storage"],
) -> bool:
    """Return True if the error matches the configured pattern type."""
    patterns = _ERROR_PATTERNS[pattern_type]
    return any(phrase in error_str for phrase in patterns["phrases"]) or exception_type in patterns["exception_types"]


def classify_error(exception: Exception) -> ErrorCategory:
    """Return the category of an error raised while building a dashboard."""
    if isinstance(exception, PetNotFoundError):
        return ErrorCategory.PET_NOT_FOUND
    if isinstance(exception, InvalidDateError):
        return ErrorCategory.INVALID_DATE
    if isinstance(exception, FetchError):
        return ErrorCategory.FETCH_FAILED

    if _match_error_pattern(
        error_str=str(exception).lower(),
        exception_type=type(exception).__name__,
        pattern_type="storage",
    ):
        return ErrorCategory.STORAGE_UNAVAILABLE

    return ErrorCategory.UNKNOWN


def classify_error_with_response(exception: Exception) -> ErrorResponse:
    """Classify an error and return a structured response with recovery suggestions.

    Args:
        exception: The exception raised during execution

    Returns:
        ErrorResponse with code, message, suggestion, severity and HTTP status
    """
    category = classify_error(exception)

    if category is ErrorCategory.PET_NOT_FOUND:
        return ErrorResponse(
            code=ErrorCode.ERR_PET_NOT_FOUND,
            message=str(exception),
            suggestion="Check the pet ID. The pet may have been removed.",
            severity=ErrorSeverity.LOW,
            status_code=Constants.HTTP_NOT_FOUND,
        )

    if category is ErrorCategory.INVALID_DATE:
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_DATE,
            message=f"Invalid date: {exception}",
            suggestion="Use ISO dates such as 2025-03-15.",
            severity=ErrorSeverity.LOW,
            status_code=Constants.HTTP_UNPROCESSABLE,
        )

    if category is ErrorCategory.FETCH_FAILED:
        return ErrorResponse(
            code=ErrorCode.ERR_FETCH_FAILED,
            message="Care records could not be loaded.",
            suggestion="Please try again later.",
            severity=ErrorSeverity.HIGH,
            status_code=Constants.HTTP_SERVICE_UNAVAILABLE,
        )

    if category is ErrorCategory.STORAGE_UNAVAILABLE:
        return ErrorResponse(
            code=ErrorCode.ERR_STORAGE_UNAVAILABLE,
            message="The record store is unavailable.",
            suggestion="Please try again later.",
            severity=ErrorSeverity.CRITICAL,
            status_code=Constants.HTTP_SERVICE_UNAVAILABLE,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
        suggestion="Please try again later. If the problem persists, contact support.",
        severity=ErrorSeverity.MEDIUM,
        status_code=Constants.HTTP_SERVER_ERROR,
    )
