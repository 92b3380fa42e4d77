"""
Custom exceptions for runnr-training.

The prediction and planning core never raises for sparse data: missing
history is reported as an unavailable result. Exceptions are reserved for
malformed input crossing the package boundary (activity payloads, race
goals, CLI arguments). Each exception carries:
- A descriptive message
- An error code for structured output
- Optional details for debugging
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Error codes for consistent structured error output."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Input errors
    ACTIVITY_PARSE_ERROR = "ACTIVITY_PARSE_ERROR"
    RACE_GOAL_INVALID = "RACE_GOAL_INVALID"
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"


class RunnrError(Exception):
    """
    Base exception for all runnr-training errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured output."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Validation Errors
# ============================================================================

class ValidationError(RunnrError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            details=error_details,
        )


class ActivityParseError(ValidationError):
    """Raised when an activity payload cannot be turned into an ActivityRecord."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, field=field, details=details)
        self.code = ErrorCode.ACTIVITY_PARSE_ERROR


class InvalidRaceGoalError(ValidationError):
    """Raised when a race goal is incomplete or inconsistent."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, field=field, details=details)
        self.code = ErrorCode.RACE_GOAL_INVALID


# ============================================================================
# Data Errors
# ============================================================================

class InsufficientDataError(RunnrError):
    """
    Raised by outer surfaces that cannot render anything useful.

    The core itself reports sparsity through unavailable predictions.
    """

    def __init__(
        self,
        message: str,
        required: Optional[int] = None,
        available: Optional[int] = None,
    ) -> None:
        details: Dict[str, Any] = {}
        if required is not None:
            details["required"] = required
        if available is not None:
            details["available"] = available
        super().__init__(
            message=message,
            code=ErrorCode.INSUFFICIENT_DATA,
            details=details,
        )
