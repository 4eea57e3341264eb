"""
Repositories package.

This package contains all data access layer repositories following the Repository Pattern.
Each repository extends BaseRepository and provides domain-specific data operations.

Usage:
    from auntrack_api.repositories import CategoryRepository
    from auntrack_api.core.database import get_db

    # In a FastAPI route with dependency injection:
    def get_categories(db: Session = Depends(get_db)):
        repo = CategoryRepository(db)
        return repo.list_by_name()
"""

from auntrack_api.repositories.base import BaseRepository
from auntrack_api.repositories.user_repository import UserRepository
from auntrack_api.repositories.calendar_repository import CategoryRepository, CalendarEventRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "CategoryRepository",
    "CalendarEventRepository",
]
