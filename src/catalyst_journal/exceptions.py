"""
Custom exceptions for Catalyst Journal.

This module defines a hierarchy of exceptions that provide clear error
handling throughout the application. Each exception includes:
- A descriptive message
- An error code for API responses
- HTTP status code mapping
- Optional details for debugging
"""

from typing import Any, Dict, Iterable, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent API error responses."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    UNAUTHORIZED = "UNAUTHORIZED"
    RATE_LIMITED = "RATE_LIMITED"

    # Account errors
    EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Curriculum errors
    DAY_NOT_FOUND = "DAY_NOT_FOUND"
    STEP_NOT_FOUND = "STEP_NOT_FOUND"
    TOOL_NOT_FOUND = "TOOL_NOT_FOUND"
    CATALOG_INVALID = "CATALOG_INVALID"

    # Progress and process errors
    INVALID_TRANSITION = "INVALID_TRANSITION"
    PROCESS_NOT_FOUND = "PROCESS_NOT_FOUND"

    # Data/Database errors
    DATABASE_ERROR = "DATABASE_ERROR"


class CatalystError(Exception):
    """
    Base exception for all Catalyst Journal errors.

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
        result: Dict[str, Any] = {"error": self.message, "code": self.code.value}
        if self.details:
            result["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Validation Errors (400)
# ============================================================================

class ValidationError(CatalystError):
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


class InvalidTransitionError(ValidationError):
    """Raised when a progress status change is not allowed."""

    def __init__(
        self,
        from_status: str,
        to_status: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        error_details["from_status"] = from_status
        error_details["to_status"] = to_status
        super().__init__(
            message=f"Cannot move step from '{from_status}' to '{to_status}'",
            details=error_details,
        )
        self.code = ErrorCode.INVALID_TRANSITION


# ============================================================================
# Authentication Errors (401)
# ============================================================================

class UnauthorizedError(CatalystError):
    """Raised when credentials are missing or wrong."""

    def __init__(
        self,
        message: str = "Unauthorized",
        code: ErrorCode = ErrorCode.UNAUTHORIZED,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            status_code=401,
            details=details,
        )


class InvalidCredentialsError(UnauthorizedError):
    """Raised when a login attempt does not match a stored account."""

    def __init__(self) -> None:
        super().__init__(
            message="Invalid credentials",
            code=ErrorCode.INVALID_CREDENTIALS,
        )


# ============================================================================
# Not Found Errors (404)
# ============================================================================

class NotFoundError(CatalystError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Any,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        message = f"{resource_type} with ID '{resource_id}' not found"
        error_details = details or {}
        error_details["resource_type"] = resource_type
        error_details["resource_id"] = str(resource_id)
        super().__init__(
            message=message,
            code=ErrorCode.NOT_FOUND,
            status_code=404,
            details=error_details,
        )


class DayNotFoundError(NotFoundError):
    """Raised when a training day is not found."""

    def __init__(self, day_id: Any, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(resource_type="Training day", resource_id=day_id, details=details)
        self.code = ErrorCode.DAY_NOT_FOUND


class StepNotFoundError(NotFoundError):
    """Raised when a training step is not found."""

    def __init__(self, step_id: Any, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(resource_type="Training step", resource_id=step_id, details=details)
        self.code = ErrorCode.STEP_NOT_FOUND


class ToolNotFoundError(NotFoundError):
    """Raised when a tool card is not in the reference library."""

    def __init__(self, name: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(resource_type="Tool", resource_id=name, details=details)
        self.code = ErrorCode.TOOL_NOT_FOUND


class ProcessNotFoundError(NotFoundError):
    """Raised when a process is missing or owned by another user."""

    def __init__(self, process_id: Any, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(resource_type="Process", resource_id=process_id, details=details)
        self.code = ErrorCode.PROCESS_NOT_FOUND


# ============================================================================
# Conflict Errors (409)
# ============================================================================

class ConflictError(CatalystError):
    """Raised when there's a resource conflict."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.CONFLICT,
            status_code=409,
            details=details,
        )


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str) -> None:
        super().__init__(message="User already exists", details={"email": email})
        self.code = ErrorCode.EMAIL_ALREADY_REGISTERED


# ============================================================================
# Data / Catalog Errors
# ============================================================================

class DatabaseError(CatalystError):
    """Raised when a database operation fails."""

    def __init__(
        self,
        message: str,
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


class CatalogError(CatalystError):
    """Raised when the curriculum catalog has dangling or malformed references."""

    def __init__(self, problems: Iterable[str]) -> None:
        self.problems = list(problems)
        super().__init__(
            message=f"Curriculum catalog is invalid ({len(self.problems)} problem(s))",
            code=ErrorCode.CATALOG_INVALID,
            status_code=500,
            details={"problems": self.problems},
        )
