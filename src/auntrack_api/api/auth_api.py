"""
Authentication API
"""

from fastapi import APIRouter, Depends
import logging

from auntrack_api.core.dependencies import get_user_repository
from auntrack_api.core.exceptions import AuthenticationException
from auntrack_api.core.security import create_access_token, get_current_user, verify_password
from auntrack_api.repositories.user_repository import UserRepository
from auntrack_api.schemas.auth import LoginRequest, LoginResponse, TokenUser
from auntrack_api.schemas.user import UserResponse

logger = logging.getLogger("AUTH_API")

router = APIRouter(
    prefix="/auth",
    tags=["Auth"]
)


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    repo: UserRepository = Depends(get_user_repository)
):
    user = repo.get_by_login(request.username_or_email)
    if user is None or not verify_password(request.password, user.password_hash):
        logger.info(f"Failed login for '{request.username_or_email}'")
        raise AuthenticationException("Invalid credentials")

    logger.info(f"User '{user.username}' logged in")
    return LoginResponse(
        token=create_access_token(user),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=TokenUser)
async def me(current_user: TokenUser = Depends(get_current_user)):
    return current_user
