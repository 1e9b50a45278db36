"""
Health check logic.
"""

from typing import Any, Dict

from xrpl_dashboard.config.database import MongoConnectionManager
from xrpl_dashboard.config.settings import settings
from xrpl_dashboard.utils.dates import utc_now
from xrpl_dashboard.utils.logger import get_logger

logger = get_logger(__name__)


async def check_health(manager: MongoConnectionManager) -> Dict[str, Any]:
    """
    Report application and MongoDB status.

    A database that cannot be reached is reported in the body with
    ``status: "error"``; this function does not raise for it.
    """
    base = {
        "timestamp": utc_now(),
        "environment": settings.ENVIRONMENT,
    }

    try:
        connected = await manager.ping()
        database = await manager.get_database()
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        return {
            "status": "error",
            **base,
            "error": str(e),
            "mongodb": {
                "status": "error",
                "uri": manager.masked_uri,
            },
        }

    try:
        server_info = await manager.server_info()
        version = server_info.get("version", "unknown")
    except Exception as e:
        logger.warning(f"Could not read MongoDB server info: {str(e)}")
        version = "unknown"

    return {
        "status": "ok",
        **base,
        "mongodb": {
            "status": "connected" if connected else "disconnected",
            "uri": manager.masked_uri,
            "db": database.name,
            "version": version,
        },
    }
