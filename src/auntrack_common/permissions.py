"""
Permission evaluation shared by the API and the Streamlit client.

Every mutating surface asks ``can_perform`` instead of comparing role
strings and capability flags on its own.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Any, Mapping

logger = logging.getLogger("PERMISSIONS")


class Role(str, enum.Enum):
    """
    Coarse permission tiers.

    Attributes:
        USER: Plain account, capabilities come from flags only
        ADMIN: Blanket event and category management
        SUPER_ADMIN: Admin plus account management, cannot be deleted
    """
    USER = "user"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class Action(str, enum.Enum):
    """
    Actions gated by the evaluator.

    Attributes:
        ADD_EVENT: Create an event
        EDIT_EVENT: Modify or reschedule an event
        DELETE_EVENT: Remove an event
        MANAGE_CATEGORIES: Create, rename, recolor or delete categories
        MANAGE_USERS: Open the account-management surface in the client
        ADMINISTER_USERS: Call the user endpoints on the server
    """
    ADD_EVENT = "add_event"
    EDIT_EVENT = "edit_event"
    DELETE_EVENT = "delete_event"
    MANAGE_CATEGORIES = "manage_categories"
    MANAGE_USERS = "manage_users"
    ADMINISTER_USERS = "administer_users"


ADMIN_ROLES = frozenset({Role.ADMIN, Role.SUPER_ADMIN})


@dataclass(frozen=True)
class Principal:
    """Role plus the two independent capability bits."""

    role: Role = Role.USER
    can_edit: bool = False
    can_add: bool = False

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES

    @classmethod
    def from_user(cls, user: Any) -> "Principal":
        """
        Build a principal from a mapping or any object exposing
        ``role``, ``can_edit`` and ``can_add``.
        """
        if isinstance(user, Principal):
            return user
        if isinstance(user, Mapping):
            getter = user.get
        else:
            def getter(key, default=None):
                return getattr(user, key, default)

        return cls(
            role=coerce_role(getter("role", Role.USER)),
            can_edit=bool(getter("can_edit", False)),
            can_add=bool(getter("can_add", False)),
        )


def coerce_role(value: Any) -> Role:
    """Map a stored role value to ``Role``; unknown values get the least privilege."""
    if isinstance(value, Role):
        return value
    if value is None:
        return Role.USER
    try:
        return Role(str(value))
    except ValueError:
        logger.warning(f"Unknown role {value!r}, treating as '{Role.USER.value}'")
        return Role.USER


def can_perform(user: Any, action: Action) -> bool:
    """
    Decide whether ``user`` may perform ``action``.

    Args:
        user: Mapping, ORM row, token payload, pydantic model or Principal.
            ``None`` is denied everything.
        action: Action (or its string value) to check

    Returns:
        True if allowed
    """
    if user is None:
        return False

    principal = Principal.from_user(user)
    action = Action(action)

    if action is Action.MANAGE_USERS:
        return principal.role is Role.SUPER_ADMIN
    if action in (Action.MANAGE_CATEGORIES, Action.ADMINISTER_USERS):
        return principal.is_admin
    if action is Action.ADD_EVENT:
        return principal.can_add or principal.is_admin
    if action in (Action.EDIT_EVENT, Action.DELETE_EVENT):
        return principal.can_edit or principal.is_admin
    return False


def is_protected_account(user: Any) -> bool:
    """Super admin accounts can never be deleted through account management."""
    return Principal.from_user(user).role is Role.SUPER_ADMIN
