"""
Calendar ORM models.

Categories own events; deleting a category deletes its events through the
foreign key's ON DELETE CASCADE.
"""

from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship

from auntrack_api.models.base import Base, TimestampMixin


class Category(TimestampMixin, Base):
    """Named, colored row of the calendar grid."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    color = Column(String(32), nullable=False)

    events = relationship(
        "CalendarEvent",
        back_populates="category",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Category(id={self.id}, name='{self.name}')>"


class CalendarEvent(TimestampMixin, Base):
    """Event placed on the calendar under one category."""

    __tablename__ = "events"
    __entity_name__ = "Event"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    category_id = Column(
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    start_date = Column(DateTime, nullable=False, index=True)
    end_date = Column(DateTime, nullable=False)
    color = Column(String(32), nullable=False)
    description = Column(Text, nullable=True)

    category = relationship("Category", back_populates="events")

    @property
    def category_name(self):
        return self.category.name if self.category else None

    @property
    def category_color(self):
        return self.category.color if self.category else None

    def __repr__(self):
        return f"<CalendarEvent(id={self.id}, title='{self.title}', category_id={self.category_id})>"
