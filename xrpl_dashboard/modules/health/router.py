"""
Health API endpoint.
"""

from fastapi import APIRouter, Depends, status

from xrpl_dashboard.config.database import MongoConnectionManager
from xrpl_dashboard.core.dependencies import get_connection_manager
from xrpl_dashboard.core.responses import to_json_safe
from xrpl_dashboard.modules.health import service as health_service
from xrpl_dashboard.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_description="Health status"
)
async def health_check(
    manager: MongoConnectionManager = Depends(get_connection_manager)
):
    """
    Health check. Degraded states are reported in the body.
    """
    logger.info("Health check requested")
    result = await health_service.check_health(manager)
    return to_json_safe(result)
