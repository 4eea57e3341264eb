"""
ORM Models package.

This package contains all SQLAlchemy ORM models organized by domain.
All models are imported here for easy access and to ensure proper
model registration with SQLAlchemy.

Usage:
    from auntrack_api.models import User, Category, CalendarEvent
    from auntrack_api.models.base import Base
"""

from auntrack_api.models.base import Base, TimestampMixin
from auntrack_api.models.user import User
from auntrack_api.models.calendar import Category, CalendarEvent

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",

    # Models
    "User",
    "Category",
    "CalendarEvent",
]
