"""
MongoDB tool business logic.
"""

import asyncio
from datetime import datetime
from typing import Any, Dict, List

from bson import ObjectId
from bson.decimal128 import Decimal128
from motor.motor_asyncio import AsyncIOMotorDatabase

from xrpl_dashboard.repositories.query_executor import QueryExecutor, QueryRequest
from xrpl_dashboard.utils.logger import get_logger

logger = get_logger(__name__)

# Documents sampled per collection for schema inference
SAMPLE_SIZE = 5

_TYPE_NAMES = (
    (bool, "bool"),
    (int, "int"),
    (float, "double"),
    (str, "string"),
    (datetime, "date"),
    (ObjectId, "objectId"),
    (Decimal128, "decimal"),
    (dict, "object"),
    (list, "array"),
    (bytes, "binData"),
)


def bson_type_name(value: Any) -> str:
    """
    Short BSON type name of a decoded value.

    Example:
        >>> bson_type_name("rPEPPER")
        'string'
        >>> bson_type_name(None)
        'null'
    """
    if value is None:
        return "null"
    for python_type, name in _TYPE_NAMES:
        if isinstance(value, python_type):
            return name
    return type(value).__name__


def infer_schema(documents: List[Dict[str, Any]]) -> Dict[str, List[str]]:
    """Top-level field names mapped to the type names seen across documents."""
    schema: Dict[str, set] = {}
    for document in documents:
        for field, value in document.items():
            schema.setdefault(field, set()).add(bson_type_name(value))
    return {field: sorted(types) for field, types in sorted(schema.items())}


async def list_collections(
    db: AsyncIOMotorDatabase,
    executor: QueryExecutor
) -> List[Dict[str, Any]]:
    """
    Collections of the resolved database with document counts.

    Returns:
        list: name, count and the server's collection info per collection
    """
    result = await db.command("listCollections")
    infos = sorted(result.get("cursor", {}).get("firstBatch", []), key=lambda info: info.get("name", ""))
    logger.info(f"Found {len(infos)} collections in {executor.database_name}")

    counts = await asyncio.gather(*[executor.count(info["name"]) for info in infos])
    return [
        {"name": info["name"], "count": count, "info": info}
        for info, count in zip(infos, counts)
    ]


async def _describe_collection(executor: QueryExecutor, name: str) -> Dict[str, Any]:
    count, samples = await asyncio.gather(
        executor.count(name),
        executor.find(name, limit=SAMPLE_SIZE),
    )
    return {
        "name": name,
        "count": count,
        "schema": infer_schema(samples),
        "sampleDocs": samples,
    }


async def get_collection_info(
    db: AsyncIOMotorDatabase,
    executor: QueryExecutor
) -> List[Dict[str, Any]]:
    """
    Count, inferred schema and sample documents for every collection.
    """
    names = sorted(await db.list_collection_names())
    return list(await asyncio.gather(*[_describe_collection(executor, name) for name in names]))


async def run_tool_query(executor: QueryExecutor, request: QueryRequest) -> Any:
    """Run an operator query through the executor."""
    logger.info(f"Query tool: {request.operation} on {request.collection}")
    return await executor.run_query(request)
