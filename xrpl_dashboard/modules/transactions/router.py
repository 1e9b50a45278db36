"""
Transactions API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from xrpl_dashboard.core.dependencies import get_query_executor
from xrpl_dashboard.core.responses import (
    error_json_response,
    paginated_response,
    status_for,
    success_response,
)
from xrpl_dashboard.modules.transactions import service as transactions_service
from xrpl_dashboard.modules.transactions.schemas import TransactionCreate
from xrpl_dashboard.repositories.query_executor import QueryExecutor
from xrpl_dashboard.shared.exceptions import AppException
from xrpl_dashboard.utils.logger import get_logger
from xrpl_dashboard.utils.pagination import get_pagination_params

logger = get_logger(__name__)

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_description="Transactions retrieved successfully"
)
async def list_transactions(
    page: Optional[int] = Query(None, description="Page number (1-based)"),
    limit: Optional[int] = Query(None, description="Number of items per page"),
    startDate: Optional[str] = Query(None, description="Only transactions created at or after this ISO date"),
    endDate: Optional[str] = Query(None, description="Only transactions created at or before this ISO date"),
    executor: QueryExecutor = Depends(get_query_executor)
):
    """
    List transactions, newest first, with pagination.
    """
    try:
        page, limit = get_pagination_params(page, limit)
        result = await transactions_service.list_transactions(
            executor,
            page,
            limit,
            start_date=startDate,
            end_date=endDate
        )
        return paginated_response(result)
    except AppException as e:
        logger.error(f"Error fetching transactions: {e.message}")
        return error_json_response(status_for(e.status_code), f"Failed to fetch transactions: {e.message}")
    except Exception as e:
        logger.error(f"Unexpected error fetching transactions: {str(e)}")
        return error_json_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Failed to fetch transactions: {str(e)}"
        )


@router.get(
    "/date-range",
    status_code=status.HTTP_200_OK,
    response_description="Transaction date range retrieved successfully"
)
async def get_transaction_date_range(
    executor: QueryExecutor = Depends(get_query_executor)
):
    """
    Get the earliest and latest transaction dates and the transaction count.
    """
    try:
        result = await transactions_service.get_date_range(executor)
        return success_response(**result)
    except AppException as e:
        logger.error(f"Error fetching transaction date range: {e.message}")
        return error_json_response(
            status_for(e.status_code),
            f"Failed to fetch transaction date range: {e.message}"
        )
    except Exception as e:
        logger.error(f"Unexpected error fetching transaction date range: {str(e)}")
        return error_json_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Failed to fetch transaction date range: {str(e)}"
        )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_description="Transaction created successfully"
)
async def create_transaction(
    transaction_data: TransactionCreate,
    executor: QueryExecutor = Depends(get_query_executor)
):
    """
    Create a transaction. Answers 409 when the txid already exists.
    """
    try:
        transaction = await transactions_service.create_transaction(
            executor,
            transaction_data.model_dump(exclude_unset=True)
        )
        return JSONResponse(
            status_code=status.HTTP_201_CREATED,
            content=success_response(data=transaction)
        )
    except AppException as e:
        if e.status_code >= 500:
            logger.error(f"Error creating transaction: {e.message}")
            return error_json_response(status_for(e.status_code), f"Failed to create transaction: {e.message}")
        logger.warning(f"Transaction rejected: {e.message}")
        return error_json_response(status_for(e.status_code), e.message)
    except Exception as e:
        logger.error(f"Unexpected error creating transaction: {str(e)}")
        return error_json_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Failed to create transaction: {str(e)}"
        )
