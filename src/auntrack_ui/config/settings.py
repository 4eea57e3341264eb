"""
Application Settings
Backend URLs, timeouts and the display timezone, resolved once from the environment.
"""
from dataclasses import dataclass
from datetime import tzinfo
import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .env import env, EnvironmentConfig

logger = logging.getLogger("UI_SETTINGS")


@dataclass
class APIEndpoints:
    base: str
    api: str
    health: str


def load_timezone(name: str) -> tzinfo:
    """ZoneInfo for ``name``; an unknown zone falls back to UTC."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown DISPLAY_TIMEZONE {name!r}, falling back to UTC")
        return ZoneInfo("UTC")


class AppConfig:
    def __init__(self, environment: EnvironmentConfig = env):
        self.env = environment
        self.fastapi_url = environment.fastapi_url.rstrip('/')
        self.endpoints = APIEndpoints(
            base=self.fastapi_url,
            api=f"{self.fastapi_url}/api",
            health=f"{self.fastapi_url}/api/health",
        )

        self.request_timeout = environment.request_timeout
        self.session_dir = environment.session_dir
        self.display_timezone = load_timezone(environment.display_timezone)

    @classmethod
    def get_instance(cls):
        if not hasattr(cls, '_instance'):
            cls._instance = cls()
        return cls._instance


config = AppConfig.get_instance()
