"""Application error taxonomy; every variant maps to one HTTP status."""

from collections.abc import Mapping


class AppError(Exception):
    """Base for errors rendered as ``{"success": false, "message": ...}`` responses."""

    status_code = 500
    default_message = "internal server error"

    def __init__(
        self,
        message: str | None = None,
        errors: Mapping[str, str] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.errors = dict(errors) if errors else None
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed input; ``errors`` maps each offending field to its message."""

    status_code = 400
    default_message = "invalid data"


class ConflictError(AppError):
    """A unique field (username or email) is already taken."""

    status_code = 400
    default_message = "username or email already in use"


class AuthError(AppError):
    """Base for 401/403 failures; 401 responses advertise the Bearer scheme."""

    status_code = 401
    default_message = "unauthenticated"


class TokenExpired(AuthError):
    default_message = "token expired"


class TokenInvalid(AuthError):
    default_message = "invalid token"


class Unauthenticated(AuthError):
    default_message = "access token required"


class Forbidden(AuthError):
    status_code = 403
    default_message = "insufficient permissions"


class NotFound(AppError):
    status_code = 404
    default_message = "resource not found"


class Internal(AppError):
    status_code = 500
    default_message = "internal server error"
