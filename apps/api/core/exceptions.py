"""API exceptions.

Views and services raise these; ApiErrorMiddleware renders them as the
standard error envelope.
"""

from typing import Any


class ApiError(Exception):
    """Base exception for errors surfaced to API clients."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class FieldError:
    """A single field-level validation problem."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class ValidationError(ApiError):
    """Malformed or out-of-range input."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(
        self,
        message: str | None = None,
        errors: list[FieldError] | None = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, errors=[FieldError(field, message)])


class AuthenticationError(ApiError):
    """Missing, invalid or expired credential."""

    status_code = 401
    default_message = "Authentication required."


class AuthorizationError(ApiError):
    """Role or ownership mismatch."""

    status_code = 403
    default_message = "Access denied."


class NotFoundError(ApiError):
    """Referenced entity does not exist."""

    status_code = 404
    default_message = "Not found"


class MethodNotAllowed(ApiError):
    """HTTP method not supported by the endpoint."""

    status_code = 405
    default_message = "Method not allowed"


class ConflictError(ApiError):
    """Request conflicts with the current state of the resource."""

    status_code = 409
    default_message = "Conflict"


class InternalError(ApiError):
    """Unexpected store or runtime failure. Never carries internal detail."""

    status_code = 500


def error_payload(exc: ApiError) -> dict[str, Any]:
    """Build the error envelope for an ApiError."""
    payload: dict[str, Any] = {"status": "error", "message": exc.message}
    if isinstance(exc, ValidationError) and exc.errors:
        payload["errors"] = [error.as_dict() for error in exc.errors]
    return payload
