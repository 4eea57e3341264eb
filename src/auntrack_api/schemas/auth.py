"""
Authentication Pydantic Schemas
"""

from typing import Optional
from pydantic import AliasChoices, BaseModel, Field, model_validator

from auntrack_api.schemas.user import UserResponse
from auntrack_common.permissions import Role


class LoginRequest(BaseModel):
    """Credentials. The identifier may be a username or an email address."""

    username_or_email: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("username_or_email", "username", "email"),
    )
    password: Optional[str] = None

    @model_validator(mode="after")
    def require_credentials(self):
        if not self.username_or_email or not self.password:
            raise ValueError("Username/Email and password are required")
        return self


class TokenUser(BaseModel):
    """Identity carried inside an access token."""

    id: int
    username: str
    email: str
    role: Role
    can_edit: bool = False
    can_add: bool = False


class LoginResponse(BaseModel):
    """Access token plus the user snapshot the client keeps."""

    token: str
    user: UserResponse
