"""
User ORM model.

Stores accounts with their role and capability flags.
"""

from sqlalchemy import Column, Integer, String, Boolean

from auntrack_api.models.base import Base, TimestampMixin
from auntrack_common.permissions import Role


class User(TimestampMixin, Base):
    """Account with credentials, role and the two capability flags."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(150), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=Role.USER.value)
    name = Column(String(255), nullable=False)
    can_edit = Column(Boolean, nullable=False, default=False)
    can_add = Column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
