"""
Structured error types for myfinance.

Every failure a request can end in is one of the classes below.  Each class
carries a default HTTP ``status`` and a machine-readable ``code`` so the API
layer can render it without knowing where it was raised.

Hierarchy::

    AppError
    ├── ValidationError            400  VALIDATION_FAILED
    │   └── InvalidIdentifierError
    ├── AuthenticationError        401  UNAUTHORIZED
    │   ├── MissingTokenError
    │   ├── InvalidTokenError
    │   ├── TokenExpiredError
    │   ├── MalformedTokenError
    │   └── InvalidCredentialsError
    ├── NotFoundError              404  NOT_FOUND
    ├── ConflictError              400  CONFLICT
    ├── StoreUnavailableError      503  UNAVAILABLE
    ├── RequestTimeoutError        503  UNAVAILABLE
    ├── InternalError              500  INTERNAL
    └── ConfigError                (startup only)

Usage:
    from myfinance.core.errors import NotFoundError

    if row is None:
        raise NotFoundError("Financial transaction not found")
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Coarse classification used for logging and status mapping."""

    VALIDATION = "VALIDATION"
    AUTH = "AUTH"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    DATABASE = "DATABASE"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"


class AppError(Exception):
    """Base exception for all application errors.

    Subclasses set ``default_status``, ``default_code`` and
    ``default_category``; instances may override ``status`` and attach
    field-level ``errors`` for validation failures.
    """

    default_status: int = 500
    default_code: str = "INTERNAL"
    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        code: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status or self.default_status
        self.code = code or self.default_code
        self.category = self.default_category
        self.errors = errors or []
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "status": self.status,
            "code": self.code,
            "category": self.category.value,
        }
        if self.errors:
            result["errors"] = self.errors
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, status={self.status})"


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(AppError):
    """Payload or parameter failed validation."""

    default_status = 400
    default_code = "VALIDATION_FAILED"
    default_category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str = "Validation error",
        *,
        field: str | None = None,
        **kwargs: Any,
    ):
        if field and "errors" not in kwargs:
            kwargs["errors"] = [{"code": "INVALID", "message": message, "field": field}]
        super().__init__(message, **kwargs)
        self.field = field


class InvalidIdentifierError(ValidationError, ValueError):
    """A string that was required to be a UUID is not one."""

    def __init__(self, value: Any, *, field: str = "id"):
        self.value = value
        super().__init__(f"Invalid {field} format. Expected UUID.", field=field)


# =============================================================================
# AUTHENTICATION ERRORS
# =============================================================================


class AuthenticationError(AppError):
    """Caller could not be authenticated."""

    default_status = 401
    default_code = "UNAUTHORIZED"
    default_category = ErrorCategory.AUTH


class MissingTokenError(AuthenticationError):
    def __init__(self, message: str = "Access token is required"):
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class TokenExpiredError(AuthenticationError):
    def __init__(self, message: str = "Token expired"):
        super().__init__(message)


class MalformedTokenError(AuthenticationError):
    """Token verified but its subject is not a usable user id."""

    def __init__(self, message: str = "Invalid token format"):
        super().__init__(message)


class InvalidCredentialsError(AuthenticationError):
    """Unknown email and wrong password share this one message."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


# =============================================================================
# RESOURCE ERRORS
# =============================================================================


class NotFoundError(AppError):
    """Resource is absent, or exists but belongs to someone else."""

    default_status = 404
    default_code = "NOT_FOUND"
    default_category = ErrorCategory.NOT_FOUND


class ConflictError(AppError):
    """Unique constraint violation (e.g. duplicate email)."""

    default_status = 400
    default_code = "CONFLICT"
    default_category = ErrorCategory.CONFLICT


# =============================================================================
# INFRASTRUCTURE ERRORS
# =============================================================================


class StoreUnavailableError(AppError):
    """The database could not be reached."""

    default_status = 503
    default_code = "UNAVAILABLE"
    default_category = ErrorCategory.DATABASE

    def __init__(self, message: str = "Service temporarily unavailable", **kwargs: Any):
        super().__init__(message, **kwargs)


class RequestTimeoutError(AppError):
    default_status = 503
    default_code = "UNAVAILABLE"

    def __init__(self, message: str = "Request timed out", **kwargs: Any):
        super().__init__(message, **kwargs)


class InternalError(AppError):
    """Unexpected fault.  The message is never shown to callers."""


class ConfigError(AppError):
    """Configuration is missing or invalid; raised at startup."""

    default_code = "CONFIG"
    default_category = ErrorCategory.CONFIG
