"""
User Repository

Data access layer for user records.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from auntrack_api.models.user import User
from auntrack_api.repositories.base import BaseRepository
from auntrack_api.core.exceptions import DuplicateException

DUPLICATE_USER_MESSAGE = "Username or email already exists"


class UserRepository(BaseRepository[User]):
    """Repository for user records."""

    def __init__(self, db: Session):
        super().__init__(User, db)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def list_newest_first(self) -> List[User]:
        return self.db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()

    def get_by_login(self, username_or_email: str) -> Optional[User]:
        """Look up by email when the identifier contains '@', otherwise by username."""
        if "@" in username_or_email:
            return self.get_by_email(username_or_email)
        return self.get_by_username(username_or_email)

    def _find_conflict(self, data: Dict[str, Any], exclude_id: Optional[int] = None) -> Optional[User]:
        clauses = []
        if data.get("username") is not None:
            clauses.append(User.username == data["username"])
        if data.get("email") is not None:
            clauses.append(User.email == data["email"])
        if not clauses:
            return None

        query = self.db.query(User).filter(or_(*clauses))
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return query.first()

    def _duplicate(self, data: Dict[str, Any]) -> DuplicateException:
        return DuplicateException(
            "User", "username/email",
            f"{data.get('username')}/{data.get('email')}",
            message=DUPLICATE_USER_MESSAGE,
        )

    def create_user(self, user_data: Dict[str, Any]) -> User:
        if self._find_conflict(user_data):
            raise self._duplicate(user_data)

        try:
            return self.create_from_dict(user_data)
        except IntegrityError as e:
            raise self._duplicate(user_data) from e

    def update_user(self, user_id: int, updates: Dict[str, Any]) -> Optional[User]:
        if self._find_conflict(updates, exclude_id=user_id):
            raise self._duplicate(updates)

        try:
            return self.update_by_id(user_id, updates)
        except IntegrityError as e:
            raise self._duplicate(updates) from e
