"""
FastAPI providers for repositories and services.

Each repository gets the request's session from ``get_db``, so every
router call works inside one session that is closed after the response.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from auntrack_api.core.database import get_db
from auntrack_api.repositories import (
    UserRepository,
    CategoryRepository,
    CalendarEventRepository,
)
from auntrack_api.services.export_service import EventExportService


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_category_repository(db: Session = Depends(get_db)) -> CategoryRepository:
    return CategoryRepository(db)


def get_event_repository(db: Session = Depends(get_db)) -> CalendarEventRepository:
    return CalendarEventRepository(db)


def get_export_service() -> EventExportService:
    return EventExportService()
