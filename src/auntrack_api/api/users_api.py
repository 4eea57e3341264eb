"""
User Management API
"""

from typing import Any, Dict, List
from fastapi import APIRouter, Depends, status
import logging

from auntrack_api.core.dependencies import get_user_repository
from auntrack_api.core.exceptions import AuthorizationException
from auntrack_api.core.security import hash_password, require_action
from auntrack_api.repositories.user_repository import UserRepository
from auntrack_api.schemas.auth import TokenUser
from auntrack_api.schemas.common import MessageResponse
from auntrack_api.schemas.user import (
    CreateUserRequest,
    UpdateUserRequest,
    UserResponse,
)
from auntrack_common.permissions import Action, Role, coerce_role, is_protected_account

logger = logging.getLogger("USERS_API")

router = APIRouter(
    prefix="/users",
    tags=["Users"]
)

administer_users = require_action(Action.ADMINISTER_USERS)


def _check_super_admin_rules(current_user: TokenUser, target: Any, role: Any) -> None:
    """
    Guard the protected tier: only a super admin may grant it or touch a super
    admin account, and a super admin account keeps its role.
    """
    caller_is_super_admin = is_protected_account(current_user)
    if role is not None and coerce_role(role) is Role.SUPER_ADMIN and not caller_is_super_admin:
        raise AuthorizationException("Only the super admin can grant the super_admin role")
    if target is None or not is_protected_account(target):
        return
    if not caller_is_super_admin:
        raise AuthorizationException("Cannot modify super admin users")
    if role is not None and coerce_role(role) is not Role.SUPER_ADMIN:
        raise AuthorizationException("Cannot change the role of super admin users")


def _with_password_hash(data: Dict[str, Any]) -> Dict[str, Any]:
    """Replace a plain ``password`` with ``password_hash``; a blank password is dropped."""
    password = data.pop("password", None)
    if password:
        data["password_hash"] = hash_password(password)
    return data


@router.get("", response_model=List[UserResponse], dependencies=[Depends(administer_users)])
async def list_users(repo: UserRepository = Depends(get_user_repository)):
    return [UserResponse.model_validate(user) for user in repo.list_newest_first()]


@router.get("/{user_id}", response_model=UserResponse, dependencies=[Depends(administer_users)])
async def get_user(user_id: int, repo: UserRepository = Depends(get_user_repository)):
    return UserResponse.model_validate(repo.get_or_fail(user_id))


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserRequest,
    current_user: TokenUser = Depends(administer_users),
    repo: UserRepository = Depends(get_user_repository)
):
    _check_super_admin_rules(current_user, None, request.role)
    user = repo.create_user(_with_password_hash(request.model_dump(mode="json")))
    logger.info(f"Created user '{user.username}' with role {user.role}")
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    request: UpdateUserRequest,
    current_user: TokenUser = Depends(administer_users),
    repo: UserRepository = Depends(get_user_repository)
):
    user = repo.get_or_fail(user_id)
    updates = {
        key: value
        for key, value in request.model_dump(mode="json", exclude_unset=True).items()
        if value is not None
    }
    _check_super_admin_rules(current_user, user, updates.get("role"))
    updates = _with_password_hash(updates)
    if not updates:
        return UserResponse.model_validate(user)

    user = repo.update_user(user_id, updates)
    logger.info(f"Updated user {user_id}: {sorted(k for k in updates if k != 'password_hash')}")
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    current_user: TokenUser = Depends(administer_users),
    repo: UserRepository = Depends(get_user_repository)
):
    user = repo.get_or_fail(user_id)
    if is_protected_account(user):
        raise AuthorizationException("Cannot delete super admin users")

    repo.delete(user)
    logger.info(f"User {current_user.username} deleted user {user_id}")
    return MessageResponse(message="User deleted successfully", id=user_id)
