"""
User Pydantic Schemas
"""

from pydantic import BaseModel, Field, ConfigDict, model_validator
from typing import Optional

from auntrack_api.schemas.common import UtcDatetime
from auntrack_common.permissions import Role


class CreateUserRequest(BaseModel):
    """Request schema for creating a user."""

    username: Optional[str] = Field(None, max_length=150)
    email: Optional[str] = Field(None, max_length=255)
    password: Optional[str] = None
    name: Optional[str] = Field(None, max_length=255)
    role: Role = Role.USER
    can_edit: bool = False
    can_add: bool = False

    @model_validator(mode="after")
    def require_identity(self):
        if not (self.username and self.email and self.password and self.name):
            raise ValueError("Username, email, password, and name are required")
        return self


class UpdateUserRequest(BaseModel):
    """Request schema for updating a user. A blank password keeps the current one."""

    username: Optional[str] = Field(None, min_length=1, max_length=150)
    email: Optional[str] = Field(None, min_length=3, max_length=255)
    password: Optional[str] = None
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    role: Optional[Role] = None
    can_edit: Optional[bool] = None
    can_add: Optional[bool] = None


class UserResponse(BaseModel):
    """Response schema for a user. The password hash is never exposed."""

    id: int
    username: str
    email: str
    name: str
    role: Role
    can_edit: bool
    can_add: bool
    created_at: UtcDatetime

    model_config = ConfigDict(from_attributes=True)
