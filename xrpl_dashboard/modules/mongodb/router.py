"""
MongoDB tool API endpoints.

These endpoints answer ``{"status": "success" | "error", ...}`` envelopes,
except the collection info endpoint which follows the dashboard envelope.
"""

from fastapi import APIRouter, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from xrpl_dashboard.core.dependencies import get_database, get_query_executor
from xrpl_dashboard.core.responses import (
    error_json_response,
    result_count,
    status_for,
    success_response,
    tool_error_json_response,
    tool_success_response,
)
from xrpl_dashboard.modules.mongodb import service as mongodb_service
from xrpl_dashboard.modules.mongodb.schemas import QueryToolRequest
from xrpl_dashboard.repositories.query_executor import QueryExecutor
from xrpl_dashboard.shared.exceptions import AppException
from xrpl_dashboard.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/mongodb", tags=["MongoDB"])
info_router = APIRouter(tags=["MongoDB"])


@router.get(
    "/collections",
    status_code=status.HTTP_200_OK,
    response_description="Collections retrieved successfully"
)
async def list_collections(
    db: AsyncIOMotorDatabase = Depends(get_database),
    executor: QueryExecutor = Depends(get_query_executor)
):
    """
    List collections with their document counts.
    """
    try:
        collections = await mongodb_service.list_collections(db, executor)
        return tool_success_response(collections=collections)
    except AppException as e:
        logger.error(f"Failed to fetch MongoDB collections: {e.message}")
        return tool_error_json_response(status_for(e.status_code), e.message)
    except Exception as e:
        logger.error(f"Failed to fetch MongoDB collections: {str(e)}")
        return tool_error_json_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))


@router.post(
    "/query",
    status_code=status.HTTP_200_OK,
    response_description="Query executed successfully"
)
async def run_query(
    request_data: QueryToolRequest,
    executor: QueryExecutor = Depends(get_query_executor)
):
    """
    Run a query against any collection.

    Supports find, findOne, count, aggregate, insertOne, updateOne and
    deleteOne. There is no authentication; expose on trusted networks only.
    """
    try:
        query_request = request_data.to_query_request()
        result = await mongodb_service.run_tool_query(executor, query_request)
        return tool_success_response(
            operation=query_request.operation,
            collection=query_request.collection,
            result=result,
            count=result_count(result),
        )
    except AppException as e:
        logger.error(f"Failed to execute MongoDB query: {e.message}")
        return tool_error_json_response(status_for(e.status_code), e.message)
    except Exception as e:
        logger.error(f"Failed to execute MongoDB query: {str(e)}")
        return tool_error_json_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))


@info_router.get(
    "/mongodb-info",
    status_code=status.HTTP_200_OK,
    response_description="Collection information retrieved successfully"
)
async def get_mongodb_info(
    db: AsyncIOMotorDatabase = Depends(get_database),
    executor: QueryExecutor = Depends(get_query_executor)
):
    """
    Describe every collection: count, inferred schema and sample documents.
    """
    try:
        collections = await mongodb_service.get_collection_info(db, executor)
        return success_response(collections=collections)
    except AppException as e:
        logger.error(f"Error fetching MongoDB info: {e.message}")
        return error_json_response(status_for(e.status_code), "Failed to fetch MongoDB information")
    except Exception as e:
        logger.error(f"Error fetching MongoDB info: {str(e)}")
        return error_json_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to fetch MongoDB information"
        )
