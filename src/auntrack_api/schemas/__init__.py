"""
Pydantic schemas for API requests and responses.

Usage:
    from auntrack_api.schemas import CategoryResponse, LoginRequest
"""

from auntrack_api.schemas.common import (
    MessageResponse,
    ExportResponse,
    StorageDatetime,
    UtcDatetime,
)
from auntrack_api.schemas.user import (
    CreateUserRequest,
    UpdateUserRequest,
    UserResponse,
)
from auntrack_api.schemas.auth import LoginRequest, LoginResponse, TokenUser
from auntrack_api.schemas.calendar import (
    CreateCategoryRequest,
    UpdateCategoryRequest,
    CategoryResponse,
    CreateCalendarEventRequest,
    UpdateCalendarEventRequest,
    CalendarEventResponse,
    INVALID_INTERVAL_MESSAGE,
)

__all__ = [
    "MessageResponse",
    "ExportResponse",
    "StorageDatetime",
    "UtcDatetime",
    "CreateUserRequest",
    "UpdateUserRequest",
    "UserResponse",
    "LoginRequest",
    "LoginResponse",
    "TokenUser",
    "CreateCategoryRequest",
    "UpdateCategoryRequest",
    "CategoryResponse",
    "CreateCalendarEventRequest",
    "UpdateCalendarEventRequest",
    "CalendarEventResponse",
    "INVALID_INTERVAL_MESSAGE",
]
