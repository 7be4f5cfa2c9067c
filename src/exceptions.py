"""Typed failures raised by the services.

The API layer converts these to HTTP responses; services never build
responses or raise ``HTTPException`` themselves.
"""

from typing import Any


class AppError(Exception):
    """Base class for failures that map to an HTTP status."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = 400
    default_message = "Validation Error"


class AuthError(AppError):
    """Bad credentials or a missing, invalid, or expired token."""

    status_code = 401
    default_message = "Invalid credentials"


class NotFoundError(AppError):
    """Missing resource, or one the caller does not own."""

    status_code = 404
    default_message = "Not found"


class ConflictError(AppError):
    """Uniqueness violation, e.g. a duplicate email."""

    status_code = 409
    default_message = "Conflict"


class InternalError(AppError):
    """Store or unexpected failure."""

    status_code = 500
