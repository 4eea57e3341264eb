"""
Custom exceptions for the application.

This module defines domain-specific exceptions for better error handling
and more meaningful error messages throughout the application. Each carries
the HTTP status and error code the API reports for it.
"""

from typing import Optional, Any, Dict


class ApplicationException(Exception):
    """Base exception for all application-specific exceptions."""

    status_code = 500
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DatabaseException(ApplicationException):
    """Exception raised for database-related errors."""
    error_code = "DATABASE_ERROR"


class ValidationException(ApplicationException):
    """Exception raised for validation errors."""
    status_code = 400
    error_code = "VALIDATION_ERROR"


class AuthorizationException(ApplicationException):
    """Exception raised when the caller's role or capabilities forbid an action."""
    status_code = 403
    error_code = "FORBIDDEN"

    def __init__(self, message: str = "Access denied", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class NotFoundException(ApplicationException):
    """Exception raised when a requested resource is not found."""
    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, resource: str, identifier: Any):
        message = f"{resource} not found"
        super().__init__(message, {"resource": resource, "identifier": identifier})


class DuplicateException(ApplicationException):
    """Exception raised when attempting to create a duplicate resource."""
    status_code = 400
    error_code = "CONFLICT"

    def __init__(self, resource: str, field: str, value: Any, message: Optional[str] = None):
        message = message or f"{resource} already exists with {field}: {value}"
        super().__init__(message, {"resource": resource, "field": field, "value": value})


class AuthenticationException(ApplicationException):
    """Exception raised when credentials are missing or wrong."""
    status_code = 401
    error_code = "UNAUTHORIZED"


class InvalidTokenException(ApplicationException):
    """Exception raised when a bearer token cannot be verified."""
    status_code = 403
    error_code = "INVALID_TOKEN"

    def __init__(self, message: str = "Invalid or expired token", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
