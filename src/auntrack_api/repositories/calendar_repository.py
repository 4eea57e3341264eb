"""
Calendar Repositories

Data access layer for categories and calendar events.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError

from auntrack_api.models.calendar import Category, CalendarEvent
from auntrack_api.repositories.base import BaseRepository
from auntrack_api.core.exceptions import DuplicateException

DUPLICATE_CATEGORY_MESSAGE = "Category name already exists"


class CategoryRepository(BaseRepository[Category]):
    """Repository for categories."""

    def __init__(self, db: Session):
        super().__init__(Category, db)

    def get_by_name(self, name: str) -> Optional[Category]:
        return self.db.query(Category).filter(Category.name == name).first()

    def list_by_name(self) -> List[Category]:
        return self.list_ordered(Category.name.asc())

    def _duplicate(self, name: str) -> DuplicateException:
        return DuplicateException("Category", "name", name, message=DUPLICATE_CATEGORY_MESSAGE)

    def create_category(self, data: Dict[str, Any]) -> Category:
        if self.get_by_name(data["name"]):
            raise self._duplicate(data["name"])

        try:
            return self.create_from_dict(data)
        except IntegrityError as e:
            raise self._duplicate(data["name"]) from e

    def update_category(self, category_id: int, updates: Dict[str, Any]) -> Optional[Category]:
        name = updates.get("name")
        if name is not None:
            existing = self.get_by_name(name)
            if existing and existing.id != category_id:
                raise self._duplicate(name)

        try:
            return self.update_by_id(category_id, updates)
        except IntegrityError as e:
            raise self._duplicate(name) from e


class CalendarEventRepository(BaseRepository[CalendarEvent]):
    """Repository for calendar events."""

    def __init__(self, db: Session):
        super().__init__(CalendarEvent, db)

    def list_with_categories(self) -> List[CalendarEvent]:
        """All events with their category loaded, ordered by start."""
        return (
            self.db.query(CalendarEvent)
            .options(joinedload(CalendarEvent.category))
            .order_by(CalendarEvent.start_date.asc(), CalendarEvent.id.asc())
            .all()
        )

    def count_for_category(self, category_id: int) -> int:
        return self.db.query(CalendarEvent).filter(CalendarEvent.category_id == category_id).count()
