"""
Miners business logic.
"""

from typing import Optional

from xrpl_dashboard.domain import collections
from xrpl_dashboard.domain.models.order import parse_history_status
from xrpl_dashboard.repositories.order_repository import OrderRepository
from xrpl_dashboard.repositories.query_executor import QueryExecutor
from xrpl_dashboard.services.filters import (
    build_deposit_withdrawal_filter,
    build_open_order_filter,
    build_order_filter,
)
from xrpl_dashboard.services.shapers import shape_deposit_withdrawal
from xrpl_dashboard.utils.logger import get_logger
from xrpl_dashboard.utils.pagination import Page, paginate

logger = get_logger(__name__)


async def list_order_history(
    repository: OrderRepository,
    page: int,
    limit: int,
    user_id: Optional[str] = None,
    trading_pair: Optional[str] = None,
    side: Optional[str] = None,
    status: Optional[str] = None
) -> Page:
    """
    Filled and canceled orders merged newest first.

    Args:
        repository: Order repository
        page: 1-based page
        limit: Items per page
        user_id: Owner identifier, matched through the identity aliases
        trading_pair: Pair id such as "XRP/RLUSD" ("ALL" for any)
        side: "BUY" or "SELL"
        status: "Filled", "Cancelled" or "ALL"

    Returns:
        Page: Shaped orders

    Raises:
        ValidationError: Unknown status
    """
    statuses = parse_history_status(status)
    query = build_order_filter(user_id=user_id, trading_pair=trading_pair, side=side)
    logger.info(
        f"Order history query: {query} over {sorted(state.collection for state in statuses)}"
    )
    return await repository.find_page(statuses, query, page, limit)


async def list_open_orders(
    repository: OrderRepository,
    page: int,
    limit: int,
    user_id: Optional[str] = None,
    trading_pair: Optional[str] = None
) -> Page:
    """Open orders, newest first."""
    query = build_open_order_filter(user_id=user_id, trading_pair=trading_pair)
    result = await repository.find_open_page(query, page, limit)
    logger.info(
        f"Found {len(result.items)} open orders for page {result.page}/{result.total_pages} "
        f"(total count: {result.total_count})"
    )
    return result


async def list_deposits_withdrawals(
    executor: QueryExecutor,
    page: int,
    limit: int,
    user_id: Optional[str] = None,
    type: Optional[str] = None,
    currency: Optional[str] = None
) -> Page:
    """Deposits and withdrawals, newest first, shaped."""
    query = build_deposit_withdrawal_filter(user_id=user_id, type=type, currency=currency)
    result = await paginate(
        executor,
        collections.DEPOSITS_WITHDRAWALS,
        query,
        page,
        limit,
        sort={"timestamp": -1},
    )
    result.items = [shape_deposit_withdrawal(document) for document in result.items]
    logger.info(
        f"Found {len(result.items)} deposits/withdrawals out of {result.total_count} total"
    )
    return result
