from auntrack_api.api.auth_api import router as auth_router
from auntrack_api.api.categories_api import router as categories_router
from auntrack_api.api.events_api import router as events_router
from auntrack_api.api.users_api import router as users_router
from auntrack_api.api.export_api import router as export_router
from auntrack_api.api.health_api import health_api_router

__all__ = [
    "auth_router",
    "categories_router",
    "events_router",
    "users_router",
    "export_router",
    "health_api_router",
]
