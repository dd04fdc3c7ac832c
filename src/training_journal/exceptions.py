"""
Custom exceptions for the Training Journal.

This module defines a hierarchy of exceptions that provide clear error
handling throughout the application. Each exception includes:
- A descriptive message
- An error code for API responses
- HTTP status code mapping
- Optional details for debugging

Risk scoring itself never raises for missing data; these exceptions cover
the storage, validation and configuration layers around it.
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent API error responses."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Journal errors
    ENTRY_NOT_FOUND = "ENTRY_NOT_FOUND"
    ENTRY_VALIDATION_ERROR = "ENTRY_VALIDATION_ERROR"
    METRICS_VALIDATION_ERROR = "METRICS_VALIDATION_ERROR"
    INVALID_DATE = "INVALID_DATE"

    # Risk errors
    RISK_NOT_FOUND = "RISK_NOT_FOUND"
    RISK_PERSISTENCE_FAILED = "RISK_PERSISTENCE_FAILED"

    # Data/Database errors
    DATABASE_ERROR = "DATABASE_ERROR"


class TrainingJournalError(Exception):
    """
    Base exception for all Training Journal errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        status_code: HTTP status code for API responses
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response."""
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
# Validation Errors (400)
# ============================================================================

class ValidationError(TrainingJournalError):
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
            status_code=400,
            details=error_details,
        )


class InvalidDateError(ValidationError):
    """Raised when a date cannot be normalized to YYYY-MM-DD."""

    def __init__(
        self,
        value: Any,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        error_details["value"] = str(value)
        super().__init__(
            message=f"Invalid date: {value!r}",
            field="date",
            details=error_details,
        )
        self.code = ErrorCode.INVALID_DATE


class EntryValidationError(ValidationError):
    """Raised when daily entry data validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, field=field, details=details)
        self.code = ErrorCode.ENTRY_VALIDATION_ERROR


class MetricsValidationError(ValidationError):
    """Raised when daily metrics data validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, field=field, details=details)
        self.code = ErrorCode.METRICS_VALIDATION_ERROR


# ============================================================================
# Not Found Errors (404)
# ============================================================================

class NotFoundError(TrainingJournalError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        message = f"{resource_type} with ID '{resource_id}' not found"
        error_details = details or {}
        error_details["resource_type"] = resource_type
        error_details["resource_id"] = resource_id
        super().__init__(
            message=message,
            code=ErrorCode.NOT_FOUND,
            status_code=404,
            details=error_details,
        )


class EntryNotFoundError(NotFoundError):
    """Raised when a daily entry is not found."""

    def __init__(self, user_id: str, date: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            resource_type="Daily entry",
            resource_id=f"{user_id}/{date}",
            details=details,
        )
        self.code = ErrorCode.ENTRY_NOT_FOUND


class RiskNotFoundError(NotFoundError):
    """Raised when no risk score has been persisted for a user and date."""

    def __init__(self, user_id: str, date: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            resource_type="Risk score",
            resource_id=f"{user_id}/{date}",
            details=details,
        )
        self.code = ErrorCode.RISK_NOT_FOUND


# ============================================================================
# Configuration Errors
# ============================================================================

class ConfigurationError(TrainingJournalError):
    """Raised when settings are missing or inconsistent."""

    def __init__(
        self,
        message: str,
        setting: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if setting:
            error_details["setting"] = setting
        super().__init__(
            message=message,
            code=ErrorCode.CONFIGURATION_ERROR,
            status_code=500,
            details=error_details,
        )


# ============================================================================
# Database Errors
# ============================================================================

class DatabaseError(TrainingJournalError):
    """Raised when a database operation fails."""

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if operation:
            error_details["operation"] = operation
        super().__init__(
            message=message,
            code=ErrorCode.DATABASE_ERROR,
            status_code=500,
            details=error_details,
        )


class RiskPersistenceError(DatabaseError):
    """
    Raised by a risk sink that cannot store a result.

    The risk engine catches this (and any other sink failure) at the sink
    boundary, so it never reaches the code that saved the daily entry.
    """

    def __init__(
        self,
        message: str = "Failed to persist risk scores",
        user_id: Optional[str] = None,
        date: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if user_id:
            error_details["user_id"] = user_id
        if date:
            error_details["date"] = date
        super().__init__(message=message, operation="save_risk", details=error_details)
        self.code = ErrorCode.RISK_PERSISTENCE_FAILED
