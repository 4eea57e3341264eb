"""
Account management for the super admin's user screen.
"""
import logging
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError as ModelValidationError

from auntrack_common.permissions import Action, is_protected_account
from auntrack_ui.app_lib.api.client import APIClient
from auntrack_ui.app_lib.api.errors import APIError, AuthenticationError
from auntrack_ui.models.models import UserAccount, UserDraft

logger = logging.getLogger("USER_SERVICE")


class UserService:
    """Lists, creates, updates and deletes accounts through the backend."""

    def __init__(self, client: APIClient, auth: Any, notify: Optional[Callable[[str], Any]] = None):
        self.client = client
        self.auth = auth
        self.notify = notify or (lambda message: logger.info(message))
        self.users: List[UserAccount] = []

    def _permitted(self) -> bool:
        if self.auth.can(Action.MANAGE_USERS):
            return True
        self.notify("Only the super admin can manage users")
        return False

    def _report(self, error: APIError) -> None:
        self.notify(error.message)
        if isinstance(error, AuthenticationError):
            self.auth.logout()

    def load(self) -> List[UserAccount]:
        if not self._permitted():
            return []
        try:
            self.users = [UserAccount.model_validate(item) for item in self.client.get("/api/users")]
        except APIError as e:
            self._report(e)
        except (TypeError, ModelValidationError) as e:
            logger.error(f"Unexpected user list payload: {e}")
            self.notify("Could not load users")
        return self.users

    def create_user(self, draft: UserDraft) -> Optional[UserAccount]:
        if not self._permitted():
            return None
        if not draft.password:
            self.notify("Username, email, password, and name are required")
            return None
        try:
            created = UserAccount.model_validate(
                self.client.post("/api/users", data=draft.model_dump(mode="json"))
            )
        except APIError as e:
            self._report(e)
            return None
        except (TypeError, ModelValidationError) as e:
            logger.error(f"Unexpected user payload: {e}")
            self.notify("Could not save user")
            return None

        self.users = [created] + [user for user in self.users if user.id != created.id]
        return created

    def update_user(self, user_id: int, draft: UserDraft) -> Optional[UserAccount]:
        """A blank password in ``draft`` keeps the current one."""
        if not self._permitted():
            return None
        payload: Dict[str, Any] = draft.model_dump(mode="json", exclude={"password"})
        if draft.password:
            payload["password"] = draft.password
        try:
            updated = UserAccount.model_validate(self.client.put(f"/api/users/{user_id}", data=payload))
        except APIError as e:
            self._report(e)
            return None
        except (TypeError, ModelValidationError) as e:
            logger.error(f"Unexpected user payload: {e}")
            self.notify("Could not save user")
            return None

        self.users = [updated if user.id == user_id else user for user in self.users]
        return updated

    def delete_user(self, user: UserAccount) -> bool:
        if not self._permitted():
            return False
        if is_protected_account(user):
            self.notify("Cannot delete super admin users")
            return False
        try:
            self.client.delete(f"/api/users/{user.id}")
        except APIError as e:
            self._report(e)
            return False

        self.users = [item for item in self.users if item.id != user.id]
        return True
