from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

from auntrack_common.permissions import Role


# Calendar Models
class Category(BaseModel):
    """Row of the calendar grid"""
    id: int
    name: str
    color: str
    created_at: Optional[datetime] = None


class Event(BaseModel):
    """Event as returned by the backend, joined with its category"""
    id: int
    title: str
    category_id: int
    category_name: Optional[str] = None
    category_color: Optional[str] = None
    start_date: datetime
    end_date: datetime
    color: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "TownHall",
                "category_id": 1,
                "category_name": "HR Events",
                "start_date": "2025-08-04T00:00:00Z",
                "end_date": "2025-08-04T23:59:59Z",
                "color": "#fb923c",
            }
        }
    )


# User Models
class SessionUser(BaseModel):
    """Snapshot of the logged-in user kept alongside the token"""
    id: int
    username: str
    email: str
    name: Optional[str] = None
    role: Role = Role.USER
    can_edit: bool = False
    can_add: bool = False


class UserAccount(SessionUser):
    """Account row shown in user management"""
    name: str
    created_at: Optional[datetime] = None


class UserDraft(BaseModel):
    """Form payload for creating or updating an account"""
    username: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    name: str = Field(..., min_length=1)
    password: Optional[str] = None
    role: Role = Role.USER
    can_edit: bool = False
    can_add: bool = False
