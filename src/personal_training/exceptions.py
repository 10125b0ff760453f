"""
Custom exceptions for the Personal Training Manager.

This module defines the error taxonomy used across the application.
Validators and repositories raise these typed errors; managers only
add context and re-raise; the CLI is the single place they are
caught for display. Each exception includes:
- A descriptive (Spanish, user-facing) message
- An error code
- Optional details for debugging
"""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


class ErrorCode(str, Enum):
    """Error codes for consistent error reporting."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DUPLICATE = "DUPLICATE"
    NOT_FOUND = "NOT_FOUND"
    CANCELLED = "CANCELLED"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"


class TrainingAppError(Exception):
    """
    Base exception for all Personal Training Manager errors.

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
        """Convert exception to dictionary for structured logging."""
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

class ValidationError(TrainingAppError):
    """Raised when an entity fails its self-check or a validator rule set.

    Carries the full list of violated rules, not just the first one.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.errors: List[str] = list(errors or [])
        error_details = details or {}
        if self.errors:
            error_details["errors"] = self.errors
            message = f"{message}: {', '.join(self.errors)}"
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            details=error_details,
        )


# ============================================================================
# Conflict Errors
# ============================================================================

class DuplicateError(TrainingAppError):
    """Raised when an entity with the same name (or id) already exists."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.DUPLICATE,
            details=details,
        )


# ============================================================================
# Not Found Errors
# ============================================================================

class NotFoundError(TrainingAppError):
    """Raised when operating on an entity id that does not exist."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type} con ID '{resource_id}' no encontrado"
        error_details = details or {}
        error_details["resource_type"] = resource_type
        error_details["resource_id"] = resource_id
        super().__init__(
            message=message,
            code=ErrorCode.NOT_FOUND,
            details=error_details,
        )


# ============================================================================
# Cancellation
# ============================================================================

class CancelledError(TrainingAppError):
    """Raised when the user declines a confirmation."""

    def __init__(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.operation = operation
        super().__init__(
            message=f"Operación '{operation}' cancelada por el usuario",
            code=ErrorCode.CANCELLED,
            details=details,
        )


# ============================================================================
# Persistence Errors
# ============================================================================

class PersistenceError(TrainingAppError):
    """Raised when reading or writing a backing file fails.

    The underlying exception is kept in ``cause`` and is also chained
    via ``raise ... from``.
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        cause: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.path = path
        self.cause = cause
        error_details = details or {}
        if path is not None:
            error_details["path"] = str(path)
        if cause is not None:
            error_details["cause"] = f"{type(cause).__name__}: {cause}"
            message = f"{message}: {cause}"
        super().__init__(
            message=message,
            code=ErrorCode.PERSISTENCE_ERROR,
            details=error_details,
        )
