"""
Application configuration management using Pydantic Settings.

This module centralizes all environment-based configuration for the application,
providing type-safe access to configuration values with validation.
"""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
import logging

logger = logging.getLogger('CORE_CONFIG')


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Name of the application
        debug: Debug mode flag
        log_level: Level applied to the application loggers at startup

        # Database Configuration
        database_url: SQLAlchemy database URL
        db_pool_size: Database connection pool size (server databases only)
        db_max_overflow: Maximum overflow connections
        db_pool_timeout: Pool checkout timeout in seconds
        db_pool_recycle: Connection recycle time in seconds

        # Authentication
        jwt_secret: Secret used to sign access tokens
        jwt_algorithm: Signing algorithm
        token_expire_hours: Token validity window

        # Seeding
        superadmin_username / superadmin_email / superadmin_password: first boot account
        seed_sample_events: Insert demo events when the events table is empty
    """

    # Application Settings
    app_name: str = "AunTrack Calendar"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 3001
    cors_origins: List[str] = ["*"]

    # Database Configuration
    database_url: str = "sqlite:///./calendar.db"
    db_pool_size: int = 20
    db_max_overflow: int = 30
    db_pool_timeout: int = 10
    db_pool_recycle: int = 3600
    db_pool_pre_ping: bool = True
    db_echo: bool = False

    # Authentication
    jwt_secret: str = "auntrack-development-secret-change-in-production"
    jwt_algorithm: str = "HS256"
    token_expire_hours: int = 24

    # Seeding
    superadmin_username: str = "superadmin"
    superadmin_email: str = "superadmin@auntrack.com"
    superadmin_password: str = "admin123"
    superadmin_name: str = "Super Administrator"
    seed_sample_events: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    def is_sqlite(self) -> bool:
        """True when the configured database is SQLite."""
        return self.database_url.startswith("sqlite")

    def safe_database_url(self) -> str:
        """Database URL with the password masked, for logging."""
        url = self.database_url
        if "@" not in url or "://" not in url:
            return url
        scheme, rest = url.split("://", 1)
        credentials, host = rest.rsplit("@", 1)
        username = credentials.split(":", 1)[0]
        return f"{scheme}://{username}:***@{host}"

    def get_database_name(self) -> Optional[str]:
        """Database name (or file path for SQLite) taken from the URL."""
        tail = self.database_url.rsplit("/", 1)
        return tail[1] if len(tail) == 2 and tail[1] else None


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Cached settings object
    """
    return Settings()
