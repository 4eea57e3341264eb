from datetime import datetime, timezone
from fastapi import APIRouter
import logging

from auntrack_api.core.database import get_database_health

logger = logging.getLogger("HEALTH_API_LOGGER")

health_api_router = APIRouter(prefix="/health", tags=["health"])


@health_api_router.get("")
async def health_status():
    """
    Aggregate health check used by the Streamlit sidebar.
    Reports the database status so the UI can show one consolidated line.
    """
    database = get_database_health()
    overall_status = "healthy" if database.get("status") == "healthy" else "unhealthy"
    if overall_status != "healthy":
        logger.warning(f"Health check failed: {database.get('error')}")

    return {
        "status": overall_status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "services": {"database": database},
    }
