"""
Dashboard API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from xrpl_dashboard.core.dependencies import get_query_executor
from xrpl_dashboard.core.responses import error_json_response, status_for, success_response
from xrpl_dashboard.modules.dashboard import service as dashboard_service
from xrpl_dashboard.repositories.query_executor import QueryExecutor
from xrpl_dashboard.shared.exceptions import AppException
from xrpl_dashboard.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get(
    "/stats",
    status_code=status.HTTP_200_OK,
    response_description="Dashboard statistics retrieved successfully"
)
async def get_dashboard_stats(
    userId: Optional[str] = Query(None, description="Restrict metrics to one user"),
    executor: QueryExecutor = Depends(get_query_executor)
):
    """
    Get user, wallet, transaction and volume metrics.
    """
    try:
        stats = await dashboard_service.get_dashboard_stats(executor, userId)
        return success_response(stats=stats)
    except AppException as e:
        logger.error(f"Error fetching dashboard stats: {e.message}")
        return error_json_response(
            status_for(e.status_code),
            f"Failed to fetch dashboard statistics: {e.message}"
        )
    except Exception as e:
        logger.error(f"Unexpected error fetching dashboard stats: {str(e)}")
        return error_json_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Failed to fetch dashboard statistics: {str(e)}"
        )
