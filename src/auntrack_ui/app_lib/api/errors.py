"""
Client-side error taxonomy for backend calls.

Every failed request surfaces as one ``APIError`` subclass so callers can
tell a rejected login from a forbidden action or an unreachable server.
"""
from typing import Optional


class APIError(Exception):
    """Base class for backend failures."""

    def __init__(self, message: str, status_code: Optional[int] = None, error_code: Optional[str] = None):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(message)


class ValidationError(APIError):
    """Request rejected as malformed (missing fields, bad interval, ...)."""


class AuthenticationError(APIError):
    """Credentials missing, wrong, or the session token is no longer valid."""


class AuthorizationError(APIError):
    """Authenticated, but the role or capabilities forbid the action."""


class ConflictError(APIError):
    """Duplicate category name, username or email."""


class NotFoundError(APIError):
    """Target entity does not exist."""


class TransportError(APIError):
    """Backend unreachable, timed out, or answered with something unreadable."""


ERROR_CODE_MAP = {
    "VALIDATION_ERROR": ValidationError,
    "UNAUTHORIZED": AuthenticationError,
    "INVALID_TOKEN": AuthenticationError,
    "FORBIDDEN": AuthorizationError,
    "CONFLICT": ConflictError,
    "NOT_FOUND": NotFoundError,
}

STATUS_MAP = {
    400: ValidationError,
    401: AuthenticationError,
    403: AuthorizationError,
    404: NotFoundError,
    409: ConflictError,
}


def error_for(status_code: int, error_code: Optional[str], message: str) -> APIError:
    """Pick the error class by ``error_code`` first, then by HTTP status."""
    error_cls = ERROR_CODE_MAP.get(error_code or "") or STATUS_MAP.get(status_code, APIError)
    return error_cls(message, status_code=status_code, error_code=error_code)
