"""Service-level error taxonomy.

Services raise these; the application converts them into JSON error
responses carrying ``status_code``.
"""

from __future__ import annotations


class ServiceError(RuntimeError):
    """Base error for service failures."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None, *, detail: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message
        self.detail = detail


class NotFoundError(ServiceError):
    """Raised when a referenced entity could not be located."""

    status_code = 404
    message = "Not found"


class BadRequestError(ServiceError):
    status_code = 400
    message = "Invalid data"


class DuplicateEmailError(BadRequestError):
    """Raised when an email address is already registered."""

    message = "User already exists"


class UnauthorizedError(ServiceError):
    status_code = 401
    message = "Not authorized"


class ForbiddenError(ServiceError):
    status_code = 403
    message = "Forbidden"
