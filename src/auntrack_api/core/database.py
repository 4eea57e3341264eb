"""
Database connection and session management.

This module handles:
- Database engine creation (connection pooling for server databases,
  foreign keys switched on for SQLite so category deletes cascade)
- Session factory setup
- Connection health checks
- Retry logic for database initialization
"""

import sqlite3
import time
from typing import Generator, Dict, Any
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool
import logging

from auntrack_api.core.config import get_settings, Settings
from auntrack_api.core.exceptions import DatabaseException

logger = logging.getLogger('CORE_DATABASE')

# Get settings
settings = get_settings()

RETRY_DELAYS = [1, 2, 3, 5, 8]


def _engine_config(settings: Settings) -> Dict[str, Any]:
    """Engine keyword arguments for the configured backend."""
    if settings.is_sqlite():
        config: Dict[str, Any] = {
            'connect_args': {'check_same_thread': False},
            'echo': settings.db_echo,
        }
        if settings.get_database_name() in (None, ':memory:'):
            # in-memory databases must share one connection
            config['poolclass'] = StaticPool
        return config

    return {
        'poolclass': QueuePool,
        'pool_size': settings.db_pool_size,
        'max_overflow': settings.db_max_overflow,
        'pool_timeout': settings.db_pool_timeout,
        'pool_recycle': settings.db_pool_recycle,
        'pool_pre_ping': settings.db_pool_pre_ping,
        'echo': settings.db_echo,
    }


def create_db_engine(settings: Settings) -> Engine:
    """
    Create the engine, retrying while the database is not reachable.

    Raises:
        DatabaseException: If the database cannot be reached after all retries
    """
    logger.info(f"Initializing database connection to: {settings.safe_database_url()}")

    for i, delay in enumerate(RETRY_DELAYS):
        try:
            new_engine = create_engine(settings.database_url, **_engine_config(settings))
            # Test connection with health check
            with new_engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info(f"Database connection established successfully on attempt {i+1}")
            return new_engine
        except OperationalError as e:
            logger.error(f"Database not ready (attempt {i+1}/{len(RETRY_DELAYS)}): {e}")
            if i < len(RETRY_DELAYS) - 1:
                logger.info(f"  Retrying in {delay} seconds...")
                time.sleep(delay)
            else:
                raise DatabaseException(f"Could not connect to the database after {len(RETRY_DELAYS)} attempts") from e


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores ON DELETE CASCADE unless foreign keys are enabled per connection."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_db_engine(settings)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session; repositories commit their own writes."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_database_health() -> Dict[str, Any]:
    """Probe the database with SELECT 1 for the health endpoint; never raises."""
    try:
        with engine.connect() as conn:
            result = conn.execute(text("SELECT 1"))
            result.fetchone()
            return {
                "status": "healthy",
                "connection_pool": engine.pool.status(),
                "database": settings.get_database_name(),
            }
    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e),
            "database": settings.get_database_name(),
        }


def init_db() -> None:
    """
    Initialize the database.

    Safe to call on every startup: tables are created if missing and seed
    rows are only inserted when absent.
    """
    from auntrack_api.models import Base
    from auntrack_api.db.init_db import seed_database

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Base database tables ensured")

        seed_database()
        logger.info("Database initialization completed successfully")
    except Exception as e:
        logger.error(f"Error during database initialization: {e}")
        # Re-raise to prevent app startup if critical initialization fails
        raise
