"""
Sessions opened outside a request, for startup seeding and scripts.
"""

from contextlib import contextmanager
from typing import Generator
from sqlalchemy.orm import Session

from auntrack_api.core import database
from auntrack_api.core.exceptions import ApplicationException, DatabaseException


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
    One unit of work: committed when the block exits cleanly, rolled back otherwise.

    Domain exceptions raised inside the block pass through unchanged; any
    other failure is wrapped in ``DatabaseException``.

    Example:
        with get_db_context() as db:
            seed_categories(db)
    """
    db = database.SessionLocal()
    try:
        yield db
        db.commit()
    except ApplicationException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        raise DatabaseException(f"Database operation failed: {e}") from e
    finally:
        db.close()
