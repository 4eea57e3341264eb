"""
Database Seeding Module

Inserts the first-boot rows. Safe to run on every startup: each row is only
inserted when absent.

Seeds:
- the super admin account (credentials from settings)
- the default categories
- sample events, when SEED_SAMPLE_EVENTS is on and no events exist yet
"""

from datetime import datetime
from typing import List, Optional, Tuple
import logging

from sqlalchemy.orm import Session

from auntrack_api.core.config import get_settings, Settings
from auntrack_api.core.security import hash_password
from auntrack_api.db.session import get_db_context
from auntrack_api.models import User, Category, CalendarEvent
from auntrack_common.permissions import Role

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES: List[Tuple[str, str]] = [
    ("HR Events", "#fb923c"),
    ("Automotive", "#facc15"),
]

# (title, category name, start, end, color, description)
SAMPLE_EVENTS = [
    ("HR Awards", "HR Events", datetime(2025, 8, 1, 0, 0, 0), datetime(2025, 8, 2, 23, 59, 59),
     "#fb923c", "Annual HR Awards Ceremony"),
    ("TownHall", "HR Events", datetime(2025, 8, 4, 0, 0, 0), datetime(2025, 8, 4, 23, 59, 59),
     "#fb923c", "Monthly Town Hall Meeting"),
    ("Marathon Run", "Automotive", datetime(2025, 8, 1, 0, 0, 0), datetime(2025, 8, 6, 23, 59, 59),
     "#facc15", "Annual Marathon Event"),
]


def seed_super_admin(db: Session, settings: Settings) -> bool:
    """Create the super admin unless an account with its username exists."""
    existing = db.query(User).filter(User.username == settings.superadmin_username).first()
    if existing:
        logger.info(f"Super admin '{settings.superadmin_username}' already present")
        return False

    db.add(User(
        username=settings.superadmin_username,
        email=settings.superadmin_email,
        password_hash=hash_password(settings.superadmin_password),
        role=Role.SUPER_ADMIN.value,
        name=settings.superadmin_name,
        can_edit=True,
        can_add=True,
    ))
    db.flush()
    logger.info(f"Created super admin '{settings.superadmin_username}'")
    return True


def seed_categories(db: Session) -> int:
    created = 0
    for name, color in DEFAULT_CATEGORIES:
        if db.query(Category).filter(Category.name == name).first():
            continue
        db.add(Category(name=name, color=color))
        created += 1
    db.flush()
    if created:
        logger.info(f"Created {created} default categories")
    return created


def seed_sample_events(db: Session) -> int:
    if db.query(CalendarEvent).count() > 0:
        return 0

    created = 0
    for title, category_name, start, end, color, description in SAMPLE_EVENTS:
        category = db.query(Category).filter(Category.name == category_name).first()
        if category is None:
            logger.warning(f"Skipping sample event '{title}': category '{category_name}' missing")
            continue
        db.add(CalendarEvent(
            title=title,
            category_id=category.id,
            start_date=start,
            end_date=end,
            color=color,
            description=description,
        ))
        created += 1
    db.flush()
    logger.info(f"Inserted {created} sample events")
    return created


def _seed(db: Session, settings: Settings) -> None:
    seed_super_admin(db, settings)
    seed_categories(db)
    if settings.seed_sample_events:
        seed_sample_events(db)


def seed_database(db: Optional[Session] = None, settings: Optional[Settings] = None) -> None:
    """
    Seed the database.

    Args:
        db: Session to seed through; the caller commits. When omitted a
            session is opened and committed here.
        settings: Defaults to the cached application settings
    """
    settings = settings or get_settings()
    if db is not None:
        _seed(db, settings)
        return

    with get_db_context() as session:
        _seed(session, settings)
