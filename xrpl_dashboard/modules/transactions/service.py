"""
Transactions business logic.
"""

import asyncio
from typing import Any, Dict, Optional

from xrpl_dashboard.domain import collections
from xrpl_dashboard.repositories.query_executor import QueryExecutor
from xrpl_dashboard.services.filters import build_date_window_filter
from xrpl_dashboard.services.shapers import transaction_date_range
from xrpl_dashboard.shared.exceptions import ConflictError, ValidationError
from xrpl_dashboard.utils.dates import utc_now
from xrpl_dashboard.utils.logger import get_logger
from xrpl_dashboard.utils.pagination import Page, paginate

logger = get_logger(__name__)

# Transactions sampled from each end of the created_date ordering
DATE_RANGE_SAMPLE_SIZE = 10


async def list_transactions(
    executor: QueryExecutor,
    page: int,
    limit: int,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None
) -> Page:
    """
    List transactions, newest first.

    Args:
        executor: Query executor
        page: 1-based page
        limit: Items per page
        start_date: Optional inclusive lower bound on createdAt
        end_date: Optional inclusive upper bound on createdAt

    Returns:
        Page: Raw transactions with pagination metadata
    """
    query = build_date_window_filter("createdAt", start_date, end_date)
    result = await paginate(
        executor,
        collections.TRANSACTIONS,
        query,
        page,
        limit,
        sort={"createdAt": -1},
    )
    logger.info(
        f"Retrieved {len(result.items)} transactions (page {result.page}/{result.total_pages})"
    )
    return result


async def get_date_range(executor: QueryExecutor) -> Dict[str, Any]:
    """
    Earliest and latest transaction dates with the transaction count.

    The range is computed from a sample at each end of the created_date
    ordering; each sampled transaction is dated by the date extraction
    chain, so documents without created_date still contribute.
    """
    transaction_count, oldest, newest = await asyncio.gather(
        executor.count(collections.TRANSACTIONS),
        executor.find(
            collections.TRANSACTIONS,
            sort={"created_date": 1},
            limit=DATE_RANGE_SAMPLE_SIZE,
        ),
        executor.find(
            collections.TRANSACTIONS,
            sort={"created_date": -1},
            limit=DATE_RANGE_SAMPLE_SIZE,
        ),
    )

    transactions = list(oldest) + list(newest)
    date_range = transaction_date_range(transactions)

    if transactions:
        logger.info(f"Date range: {date_range['minDate']} - {date_range['maxDate']}")
    else:
        logger.info("No transactions found, using current date")

    return {**date_range, "transactionCount": transaction_count}


async def create_transaction(
    executor: QueryExecutor,
    payload: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Insert a transaction unless one with the same txid exists.

    Args:
        executor: Query executor
        payload: Transaction fields as sent by the client

    Returns:
        dict: Stored transaction including _id, createdAt and updatedAt

    Raises:
        ValidationError: txid or account missing
        ConflictError: A transaction with this txid already exists
    """
    if not payload.get("txid") or not payload.get("account"):
        raise ValidationError("Missing required fields: txid and account are required")

    existing = await executor.find_one(collections.TRANSACTIONS, {"txid": payload["txid"]})
    if existing:
        logger.warning(f"Transaction {payload['txid']} already exists")
        raise ConflictError("Transaction with this txid already exists")

    now = utc_now()
    transaction = {**payload, "createdAt": now, "updatedAt": now}

    result = await executor.insert_one(collections.TRANSACTIONS, dict(transaction))
    logger.info(f"Transaction created successfully: {payload['txid']} ({result['inserted_id']})")

    return {"_id": result["inserted_id"], **transaction}
