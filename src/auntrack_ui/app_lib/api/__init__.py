from .client import APIClient
from .errors import (
    APIError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    TransportError,
)

__all__ = [
    'APIClient',
    'APIError',
    'ValidationError',
    'AuthenticationError',
    'AuthorizationError',
    'ConflictError',
    'NotFoundError',
    'TransportError',
]
