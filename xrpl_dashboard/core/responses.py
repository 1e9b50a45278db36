"""
Standardized response helpers for API endpoints.

The dashboard endpoints answer ``{"success": ..., ...}`` envelopes while the
database tool endpoints answer ``{"status": "success" | "error", ...}``.
Both families are built here so routers never hand-roll JSON.
"""

from datetime import datetime
from typing import Any, Dict

from bson import ObjectId
from bson.decimal128 import Decimal128
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from xrpl_dashboard.utils.dates import to_iso
from xrpl_dashboard.utils.pagination import Page

_BSON_ENCODERS = {
    ObjectId: str,
    Decimal128: str,
    datetime: to_iso,
}


class PaginationInfo(BaseModel):
    """Pagination envelope returned next to list data."""
    page: int = Field(..., description="Current page (1-based)")
    limit: int = Field(..., description="Items per page")
    totalPages: int = Field(..., description="Total number of pages")
    totalCount: int = Field(..., description="Total number of matching items")


def to_json_safe(value: Any) -> Any:
    """
    Convert MongoDB documents into JSON-compatible data.

    ObjectId and Decimal128 become strings, datetimes become ISO 8601 UTC.
    """
    return jsonable_encoder(value, custom_encoder=_BSON_ENCODERS)


def success_response(**payload: Any) -> Dict[str, Any]:
    """
    Create a dashboard success envelope.

    Example:
        >>> success_response(minDate="2025-01-01T00:00:00.000Z")
        {'success': True, 'minDate': '2025-01-01T00:00:00.000Z'}
    """
    return {"success": True, **to_json_safe(payload)}


def error_response(error: str) -> Dict[str, Any]:
    """Create a dashboard error envelope."""
    return {"success": False, "error": error}


def error_json_response(status_code: int, error: str) -> JSONResponse:
    """Helper to create JSON error response with proper status code."""
    return JSONResponse(status_code=status_code, content=error_response(error))


def pagination_dict(page: Page) -> Dict[str, int]:
    return PaginationInfo(
        page=page.page,
        limit=page.limit,
        totalPages=page.total_pages,
        totalCount=page.total_count,
    ).model_dump()


def paginated_response(page: Page) -> Dict[str, Any]:
    """
    Create a paginated dashboard response.

    Example:
        >>> paginated_response(Page(items=[{"hash": "A1"}], page=1, limit=15, total_count=1))
        {
            "success": True,
            "data": [{"hash": "A1"}],
            "pagination": {"page": 1, "limit": 15, "totalPages": 1, "totalCount": 1}
        }
    """
    return {
        "success": True,
        "data": to_json_safe(page.items),
        "pagination": pagination_dict(page),
    }


def tool_success_response(**payload: Any) -> Dict[str, Any]:
    """Create a database tool success envelope."""
    return {"status": "success", **to_json_safe(payload)}


def tool_error_json_response(status_code: int, error: str) -> JSONResponse:
    """Create a database tool error response."""
    return JSONResponse(status_code=status_code, content={"status": "error", "error": error})


def result_count(result: Any) -> int:
    """Number of documents in a query result: list length, otherwise 1."""
    if isinstance(result, list):
        return len(result)
    return 1


def status_for(exc_status: int) -> int:
    """Map an exception status to the HTTP status a handler returns."""
    if exc_status in (400, 409):
        return exc_status
    return 500
