"""
Password hashing, access tokens and the authentication dependencies.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
import logging

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext
from pydantic import ValidationError

from auntrack_api.core.config import get_settings, Settings
from auntrack_api.core.exceptions import (
    AuthenticationException,
    AuthorizationException,
    InvalidTokenException,
)
from auntrack_api.schemas.auth import TokenUser
from auntrack_common.permissions import Action, can_perform

logger = logging.getLogger('CORE_SECURITY')

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        # unrecognised hash format
        logger.warning("Stored password hash could not be identified")
        return False


def create_access_token(user: Any, settings: Optional[Settings] = None) -> str:
    """
    Sign a token for ``user`` (ORM row or anything with the same attributes).

    Claims: id, username, email, role, can_edit, can_add, exp.
    """
    settings = settings or get_settings()
    role = getattr(user.role, "value", user.role)
    payload: Dict[str, Any] = {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "role": role,
        "can_edit": bool(user.can_edit),
        "can_add": bool(user.can_add),
        "exp": datetime.now(timezone.utc) + timedelta(hours=settings.token_expire_hours),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Optional[Settings] = None) -> TokenUser:
    """
    Verify a token and return the identity it carries.

    Raises:
        InvalidTokenException: Bad signature, expired, or malformed claims
    """
    settings = settings or get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return TokenUser.model_validate(payload)
    except jwt.PyJWTError as e:
        logger.info(f"Rejected token: {e}")
        raise InvalidTokenException() from e
    except ValidationError as e:
        logger.warning(f"Token claims malformed: {e.error_count()} error(s)")
        raise InvalidTokenException() from e


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenUser:
    """
    Dependency resolving the caller from the Authorization header.

    Raises:
        AuthenticationException: No bearer token (401)
        InvalidTokenException: Token rejected (403)
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationException("Not authenticated")
    return decode_access_token(credentials.credentials)


def require_action(action: Action):
    """
    Dependency factory gating a route on one permission action.

    Example:
        @router.post("", dependencies=[Depends(require_action(Action.ADD_EVENT))])
    """

    def checker(current_user: TokenUser = Depends(get_current_user)) -> TokenUser:
        if not can_perform(current_user, action):
            logger.info(f"User {current_user.username} denied '{action.value}'")
            raise AuthorizationException()
        return current_user

    return checker
