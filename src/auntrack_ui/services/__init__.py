from .auth_service import AuthService
from .calendar_store import CalendarStore
from .export_service import ExportService
from .session_storage import BrowserSessionStorage, InMemoryStorage, JsonFileStorage
from .user_service import UserService

__all__ = [
    'AuthService',
    'BrowserSessionStorage',
    'CalendarStore',
    'ExportService',
    'InMemoryStorage',
    'JsonFileStorage',
    'UserService',
]
