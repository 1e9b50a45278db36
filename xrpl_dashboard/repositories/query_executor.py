"""
Generic Query Executor

Runs a declarative query request against the resolved database.
Every endpoint reads through this class; the database tool exposes it
directly to operators.
"""

import asyncio
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import BaseModel, Field

from xrpl_dashboard.shared.exceptions import (
    AppException,
    ConnectionTimeout,
    QueryExecutionError,
    UnsupportedOperation,
    ValidationError,
)
from xrpl_dashboard.utils.logger import get_logger

logger = get_logger(__name__)


class QueryOperation(str, Enum):
    """Operations the executor knows how to run."""
    FIND = "find"
    FIND_ONE = "findOne"
    COUNT = "count"
    AGGREGATE = "aggregate"
    INSERT_ONE = "insertOne"
    UPDATE_ONE = "updateOne"
    DELETE_ONE = "deleteOne"


class QueryRequest(BaseModel):
    """
    Declarative query.

    ``query`` is a filter document for every operation except ``aggregate``,
    where it is the pipeline (list of stages).
    """
    collection: str = Field(..., min_length=1, description="Collection name")
    operation: str = Field(default=QueryOperation.FIND.value, description="Operation to run")
    query: Optional[Any] = Field(default=None, description="Filter document or aggregation pipeline")
    sort: Optional[Any] = Field(default=None, description="Sort specification")
    limit: Optional[int] = Field(default=None, ge=0)
    skip: Optional[int] = Field(default=None, ge=0)
    projection: Optional[Dict[str, Any]] = None
    document: Optional[Dict[str, Any]] = Field(default=None, description="Document for insertOne")
    update: Optional[Dict[str, Any]] = Field(default=None, description="Update document for updateOne")


def normalize_sort(sort: Any) -> List[Tuple[str, int]]:
    """
    Turn a sort specification into the driver's list of (field, direction).

    Accepts ``{"field": -1}``, ``[["field", -1]]``, ``[("field", -1)]`` or a
    bare field name (ascending).
    Directions must be integers; anything else raises ``ValueError``.

    Example:
        >>> normalize_sort({"created_date": -1, "hash": 1})
        [('created_date', -1), ('hash', 1)]
    """
    if not sort:
        return []
    if isinstance(sort, str):
        return [(sort, 1)]
    if isinstance(sort, dict):
        return [(str(key), int(direction)) for key, direction in sort.items()]
    pairs = []
    for item in sort:
        if isinstance(item, str):
            pairs.append((item, 1))
        else:
            key, direction = item
            pairs.append((str(key), int(direction)))
    return pairs


class QueryExecutor:
    """
    Executes one of a fixed set of operations against a database.

    Each call is bounded by ``timeout_seconds``; driver failures are wrapped
    with the operation and collection that produced them.

    Usage:
        executor = QueryExecutor(db, timeout_seconds=30)
        orders = await executor.find("open_orders", {"user_id": "david"}, limit=15)
        total = await executor.count("open_orders", {"user_id": "david"})
    """

    def __init__(self, db: AsyncIOMotorDatabase, timeout_seconds: Optional[float] = None):
        """
        Initialize executor.

        Args:
            db: MongoDB database instance
            timeout_seconds: Per-request time budget (None disables it)
        """
        self.db = db
        self.timeout_seconds = timeout_seconds

    @property
    def database_name(self) -> str:
        return getattr(self.db, "name", "unknown")

    async def run_query(self, request: QueryRequest) -> Any:
        """
        Run a query request.

        Returns:
            list for find/aggregate, dict or None for findOne, int for count,
            write summary dict for insertOne/updateOne/deleteOne

        Raises:
            UnsupportedOperation: Unknown operation
            ValidationError: Malformed sort or aggregation pipeline
            ConnectionTimeout: The request exceeded its time budget
            QueryExecutionError: The driver raised
        """
        try:
            operation = QueryOperation(request.operation)
        except ValueError:
            raise UnsupportedOperation(request.operation)

        try:
            sort = normalize_sort(request.sort)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid sort specification: {request.sort!r}")

        if operation == QueryOperation.AGGREGATE and request.query not in (None, {}) \
                and not isinstance(request.query, list):
            raise ValidationError("Aggregation pipeline must be a list of stages")

        logger.info(
            "Executing %s on %s collection (database=%s)",
            operation.value,
            request.collection,
            self.database_name,
        )

        try:
            if self.timeout_seconds:
                return await asyncio.wait_for(
                    self._execute(operation, request, sort),
                    timeout=self.timeout_seconds,
                )
            return await self._execute(operation, request, sort)
        except asyncio.TimeoutError:
            logger.error(
                "Query timed out after %ss (%s.%s)",
                self.timeout_seconds,
                request.collection,
                operation.value,
            )
            raise ConnectionTimeout(
                f"Query {request.collection}.{operation.value} exceeded {self.timeout_seconds}s"
            )
        except AppException:
            raise
        except Exception as e:
            logger.error(f"MongoDB query error ({request.collection}.{operation.value}): {str(e)}")
            raise QueryExecutionError(operation.value, request.collection, e) from e

    async def _execute(
        self,
        operation: QueryOperation,
        request: QueryRequest,
        sort: List[Tuple[str, int]]
    ) -> Any:
        collection = self.db[request.collection]
        query = request.query

        if operation == QueryOperation.FIND:
            cursor = collection.find(query or {}, request.projection)
            if sort:
                cursor = cursor.sort(sort)
            if request.skip:
                cursor = cursor.skip(request.skip)
            if request.limit:
                cursor = cursor.limit(request.limit)
            results = await cursor.to_list(length=request.limit or None)
            logger.info(f"Found {len(results)} documents in {request.collection}")
            return results

        if operation == QueryOperation.FIND_ONE:
            result = await collection.find_one(query or {}, request.projection)
            logger.info(f"FindOne result: {'Document found' if result else 'No document found'}")
            return result

        if operation == QueryOperation.COUNT:
            count = await collection.count_documents(query or {})
            logger.info(f"Count result for {request.collection}: {count}")
            return count

        if operation == QueryOperation.AGGREGATE:
            pipeline = query or []
            results = await collection.aggregate(pipeline).to_list(length=None)
            logger.info(f"Aggregation returned {len(results)} results")
            return results

        if operation == QueryOperation.INSERT_ONE:
            result = await collection.insert_one(request.document or {})
            logger.info(f"Inserted document with ID: {result.inserted_id}")
            return {
                "acknowledged": result.acknowledged,
                "inserted_id": result.inserted_id,
            }

        if operation == QueryOperation.UPDATE_ONE:
            result = await collection.update_one(query or {}, request.update or {"$set": {}})
            logger.info(f"Updated {result.modified_count} document(s)")
            return {
                "acknowledged": result.acknowledged,
                "matched_count": result.matched_count,
                "modified_count": result.modified_count,
                "upserted_id": result.upserted_id,
            }

        result = await collection.delete_one(query or {})
        logger.info(f"Deleted {result.deleted_count} document(s)")
        return {
            "acknowledged": result.acknowledged,
            "deleted_count": result.deleted_count,
        }

    # Convenience wrappers used by the domain services

    async def find(
        self,
        collection: str,
        query: Optional[Dict[str, Any]] = None,
        sort: Optional[Any] = None,
        skip: int = 0,
        limit: int = 0,
        projection: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        return await self.run_query(QueryRequest(
            collection=collection,
            operation=QueryOperation.FIND.value,
            query=query or {},
            sort=sort,
            skip=skip,
            limit=limit,
            projection=projection,
        ))

    async def find_one(
        self,
        collection: str,
        query: Optional[Dict[str, Any]] = None
    ) -> Optional[Dict[str, Any]]:
        return await self.run_query(QueryRequest(
            collection=collection,
            operation=QueryOperation.FIND_ONE.value,
            query=query or {},
        ))

    async def count(self, collection: str, query: Optional[Dict[str, Any]] = None) -> int:
        return await self.run_query(QueryRequest(
            collection=collection,
            operation=QueryOperation.COUNT.value,
            query=query or {},
        ))

    async def aggregate(self, collection: str, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return await self.run_query(QueryRequest(
            collection=collection,
            operation=QueryOperation.AGGREGATE.value,
            query=pipeline,
        ))

    async def insert_one(self, collection: str, document: Dict[str, Any]) -> Dict[str, Any]:
        return await self.run_query(QueryRequest(
            collection=collection,
            operation=QueryOperation.INSERT_ONE.value,
            document=document,
        ))

    async def update_one(
        self,
        collection: str,
        query: Dict[str, Any],
        update: Dict[str, Any]
    ) -> Dict[str, Any]:
        return await self.run_query(QueryRequest(
            collection=collection,
            operation=QueryOperation.UPDATE_ONE.value,
            query=query,
            update=update,
        ))

    async def delete_one(self, collection: str, query: Dict[str, Any]) -> Dict[str, Any]:
        return await self.run_query(QueryRequest(
            collection=collection,
            operation=QueryOperation.DELETE_ONE.value,
            query=query,
        ))
