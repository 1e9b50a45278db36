"""
MongoDB tool Pydantic schemas.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from xrpl_dashboard.config.settings import settings
from xrpl_dashboard.repositories.query_executor import QueryOperation, QueryRequest
from xrpl_dashboard.shared.exceptions import ValidationError


class QueryToolRequest(BaseModel):
    """Schema for a query submitted through the database tool."""
    collection: Optional[str] = Field(None, description="Collection name")
    operation: str = Field(QueryOperation.FIND.value, description="find, findOne, count, aggregate, insertOne, updateOne or deleteOne")
    query: Optional[Any] = Field(None, description="Filter document, or pipeline for aggregate")
    limit: Optional[int] = Field(default_factory=lambda: settings.QUERY_TOOL_DEFAULT_LIMIT, ge=0)
    sort: Optional[Any] = None
    skip: Optional[int] = Field(0, ge=0)
    projection: Optional[Dict[str, Any]] = None
    document: Optional[Dict[str, Any]] = None
    update: Optional[Dict[str, Any]] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "collection": "open_orders",
                "operation": "find",
                "query": {"trading_pair.id": "XRP/RLUSD"},
                "sort": {"created_date": -1},
                "limit": 10
            }
        }
    }

    def to_query_request(self) -> QueryRequest:
        """
        Convert to an executor request.

        Raises:
            ValidationError: Collection name missing
        """
        if not self.collection or not self.collection.strip():
            raise ValidationError("Collection name is required")
        return QueryRequest(
            collection=self.collection.strip(),
            operation=self.operation or QueryOperation.FIND.value,
            query=self.query if self.query is not None else {},
            sort=self.sort,
            limit=self.limit,
            skip=self.skip or 0,
            projection=self.projection,
            document=self.document,
            update=self.update,
        )
