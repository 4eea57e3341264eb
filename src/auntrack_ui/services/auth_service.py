"""
Client-side authentication: login, logout and session restore.
"""
import logging
from typing import Any, Dict, Optional

import jwt
from pydantic import ValidationError as ModelValidationError

from auntrack_common.permissions import Action, Role, can_perform
from auntrack_ui.app_lib.api.client import APIClient
from auntrack_ui.app_lib.api.errors import APIError
from auntrack_ui.models.models import SessionUser

logger = logging.getLogger("AUTH_SERVICE")

TOKEN_KEY = "authToken"
USER_KEY = "user"

MISSING_CREDENTIALS_MESSAGE = "Username/Email and password are required"


class AuthService:
    """
    Holds the current session and keeps it in durable storage.

    Installs an interceptor on ``client`` that adds the bearer token to
    every request while logged in.
    """

    def __init__(self, client: APIClient, storage: Any):
        self.client = client
        self.storage = storage
        self.token: Optional[str] = None
        self.current_user: Optional[SessionUser] = None
        self.last_error: Optional[str] = None
        client.add_interceptor(self._authorize)

    def _authorize(self, request_config: Dict[str, Any]) -> Dict[str, Any]:
        if self.token:
            request_config["headers"]["Authorization"] = f"Bearer {self.token}"
        return request_config

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None and self.current_user is not None

    @property
    def is_super_admin(self) -> bool:
        return self.current_user is not None and self.current_user.role is Role.SUPER_ADMIN

    def can(self, action: Action) -> bool:
        return can_perform(self.current_user, action)

    def restore(self) -> bool:
        """
        Reload the session kept in storage.

        Missing, unreadable or expired sessions are cleared from storage.
        """
        token = self.storage.get(TOKEN_KEY)
        snapshot = self.storage.get(USER_KEY)
        if not token or not snapshot:
            self._clear()
            return False

        try:
            jwt.decode(token, options={"verify_signature": False, "verify_exp": True})
            user = SessionUser.model_validate(snapshot)
        except jwt.ExpiredSignatureError:
            logger.info("Stored session expired")
            self._clear()
            return False
        except (jwt.PyJWTError, ModelValidationError) as e:
            logger.warning(f"Discarding unreadable stored session: {e}")
            self._clear()
            return False

        self.token, self.current_user = token, user
        return True

    def login(self, username_or_email: str, password: str) -> bool:
        """
        Exchange credentials for a token. Nothing is stored on failure;
        the reason is kept in ``last_error``.
        """
        self.last_error = None
        if not (username_or_email or "").strip() or not password:
            self.last_error = MISSING_CREDENTIALS_MESSAGE
            return False

        try:
            response = self.client.post(
                "/api/auth/login",
                data={"username_or_email": username_or_email.strip(), "password": password},
            )
            user = SessionUser.model_validate(response["user"])
            token = response["token"]
        except APIError as e:
            self.last_error = e.message
            logger.info(f"Login failed for '{username_or_email}': {e.message}")
            return False
        except (KeyError, TypeError, ModelValidationError) as e:
            self.last_error = "Unexpected login response"
            logger.error(f"Malformed login response: {e}")
            return False

        self.token, self.current_user = token, user
        self.storage.set(TOKEN_KEY, token)
        self.storage.set(USER_KEY, user.model_dump(mode="json"))
        logger.info(f"Logged in as {user.username}")
        return True

    def logout(self) -> None:
        if self.current_user is not None:
            logger.info(f"Logging out {self.current_user.username}")
        self._clear()

    def _clear(self) -> None:
        self.token = None
        self.current_user = None
        self.storage.remove(TOKEN_KEY)
        self.storage.remove(USER_KEY)
