"""
Base SQLAlchemy declarative class and common model mixins.

This module provides the foundation for all ORM models in the application.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base


# Create base declarative class
Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, the storage convention for every DateTime column."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TimestampMixin:
    """
    Mixin that adds a created_at timestamp field.

    Attributes:
        created_at: Timestamp when the record was created (UTC)
    """

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
