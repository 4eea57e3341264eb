"""
Client environment variables.

FASTAPI_URL       backend base URL
DISPLAY_TIMEZONE  IANA zone used to lay events out on calendar days
SESSION_DIR       directory holding one login session file per browser
REQUEST_TIMEOUT   seconds per backend call
"""
import logging
import os
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger("UI_ENV")

DEFAULT_SESSION_DIR = Path.home() / ".auntrack" / "sessions"


def get_env(key: str, default: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> str:
    environ = os.environ if environ is None else environ
    value = environ.get(key)
    return default if value is None or value.strip() == "" else value.strip()


def get_env_int(key: str, default: int, environ: Optional[Mapping[str, str]] = None) -> int:
    value = get_env(key, None, environ)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        logger.warning(f"{key}={value!r} is not an integer, using {default}")
        return default
    return parsed if parsed > 0 else default


class EnvironmentConfig:
    """Snapshot of the client's environment, read once per process."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self.fastapi_url = get_env("FASTAPI_URL", "http://localhost:3001", environ)
        self.environment = get_env("ENVIRONMENT", "development", environ).lower()
        self.log_level = get_env("LOG_LEVEL", "INFO", environ)

        self.display_timezone = get_env("DISPLAY_TIMEZONE", "UTC", environ)
        self.session_dir = get_env("SESSION_DIR", str(DEFAULT_SESSION_DIR), environ)
        self.request_timeout = get_env_int("REQUEST_TIMEOUT", 30, environ)

    @classmethod
    def get_instance(cls):
        if not hasattr(cls, '_instance'):
            cls._instance = cls()
        return cls._instance


env = EnvironmentConfig.get_instance()
