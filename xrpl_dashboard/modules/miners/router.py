"""
Miners API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from xrpl_dashboard.config.settings import settings
from xrpl_dashboard.core.dependencies import get_order_repository, get_query_executor
from xrpl_dashboard.core.responses import error_json_response, paginated_response, status_for
from xrpl_dashboard.modules.miners import service as miners_service
from xrpl_dashboard.repositories.order_repository import OrderRepository
from xrpl_dashboard.repositories.query_executor import QueryExecutor
from xrpl_dashboard.shared.exceptions import AppException
from xrpl_dashboard.utils.logger import get_logger
from xrpl_dashboard.utils.pagination import get_pagination_params

logger = get_logger(__name__)

router = APIRouter(prefix="/miners", tags=["Miners"])


@router.get(
    "/orders",
    status_code=status.HTTP_200_OK,
    response_description="Order history retrieved successfully"
)
async def list_order_history(
    userId: Optional[str] = Query(None, description="Owner identifier"),
    tradingPair: Optional[str] = Query(None, description="Trading pair id, e.g. XRP/RLUSD, or ALL"),
    side: Optional[str] = Query(None, description="BUY or SELL"),
    status_filter: Optional[str] = Query(None, alias="status", description="Filled, Cancelled or ALL"),
    page: Optional[int] = Query(None, description="Page number (1-based)"),
    limit: Optional[int] = Query(None, description="Number of items per page"),
    repository: OrderRepository = Depends(get_order_repository)
):
    """
    Filled and canceled orders merged newest first, with pagination.
    """
    try:
        page, limit = get_pagination_params(page, limit)
        result = await miners_service.list_order_history(
            repository,
            page,
            limit,
            user_id=userId,
            trading_pair=tradingPair,
            side=side,
            status=status_filter
        )
        return paginated_response(result)
    except AppException as e:
        logger.error(f"Error fetching order history: {e.message}")
        return error_json_response(status_for(e.status_code), f"Failed to fetch order history: {e.message}")
    except Exception as e:
        logger.error(f"Unexpected error fetching order history: {str(e)}")
        return error_json_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Failed to fetch order history: {str(e)}"
        )


@router.get(
    "/open-orders",
    status_code=status.HTTP_200_OK,
    response_description="Open orders retrieved successfully"
)
async def list_open_orders(
    userId: Optional[str] = Query(None, description="Owner identifier"),
    tradingPair: Optional[str] = Query(None, description="Trading pair id, e.g. XRP/RLUSD, or ALL"),
    page: Optional[int] = Query(None, description="Page number (1-based)"),
    limit: Optional[int] = Query(None, description="Number of items per page"),
    repository: OrderRepository = Depends(get_order_repository)
):
    """
    Open orders, newest first, with pagination.
    """
    try:
        page, limit = get_pagination_params(page, limit, settings.OPEN_ORDERS_PAGE_SIZE)
        result = await miners_service.list_open_orders(
            repository,
            page,
            limit,
            user_id=userId,
            trading_pair=tradingPair
        )
        return paginated_response(result)
    except AppException as e:
        logger.error(f"Error fetching open orders: {e.message}")
        return error_json_response(status_for(e.status_code), f"Failed to fetch open orders: {e.message}")
    except Exception as e:
        logger.error(f"Unexpected error fetching open orders: {str(e)}")
        return error_json_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Failed to fetch open orders: {str(e)}"
        )


@router.get(
    "/deposits-withdrawals",
    status_code=status.HTTP_200_OK,
    response_description="Deposits and withdrawals retrieved successfully"
)
async def list_deposits_withdrawals(
    userId: Optional[str] = Query(None, description="Owner identifier"),
    type: Optional[str] = Query(None, description="deposit or withdrawal"),
    currency: Optional[str] = Query(None, description="Currency code"),
    page: Optional[int] = Query(None, description="Page number (1-based)"),
    limit: Optional[int] = Query(None, description="Number of items per page"),
    executor: QueryExecutor = Depends(get_query_executor)
):
    """
    Deposits and withdrawals, newest first, with pagination.
    """
    try:
        page, limit = get_pagination_params(page, limit)
        result = await miners_service.list_deposits_withdrawals(
            executor,
            page,
            limit,
            user_id=userId,
            type=type,
            currency=currency
        )
        return paginated_response(result)
    except AppException as e:
        logger.error(f"Error fetching deposits and withdrawals: {e.message}")
        return error_json_response(
            status_for(e.status_code),
            f"Failed to fetch deposits and withdrawals: {e.message}"
        )
    except Exception as e:
        logger.error(f"Unexpected error fetching deposits and withdrawals: {str(e)}")
        return error_json_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Failed to fetch deposits and withdrawals: {str(e)}"
        )
