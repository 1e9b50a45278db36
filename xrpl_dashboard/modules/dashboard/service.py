"""
Dashboard business logic.
"""

import asyncio
from typing import Any, Dict, Optional

from xrpl_dashboard.config.settings import settings
from xrpl_dashboard.domain import collections
from xrpl_dashboard.repositories.query_executor import QueryExecutor
from xrpl_dashboard.services.filters import build_user_scope_filters
from xrpl_dashboard.services.shapers import compute_dashboard_stats
from xrpl_dashboard.utils.logger import get_logger

logger = get_logger(__name__)


async def get_dashboard_stats(
    executor: QueryExecutor,
    user_id: Optional[str] = None
) -> Dict[str, Any]:
    """
    Compute dashboard metrics, optionally for a single user.

    Volume is computed over the newest DEFAULT_PAGE_SIZE trades.

    Args:
        executor: Query executor
        user_id: Restrict metrics to this user

    Returns:
        dict: userCount, walletCount, transactionCount, totalVolume,
        assetVolumes and assetSymbols
    """
    filters = build_user_scope_filters(user_id)

    users, transaction_count, trades = await asyncio.gather(
        executor.find(collections.USERS, filters["users"]),
        executor.count(collections.TRANSACTIONS, filters["transactions"]),
        executor.find(
            collections.TRADES,
            filters["trades"],
            sort={"_id": -1},
            limit=settings.DEFAULT_PAGE_SIZE,
        ),
    )

    stats = compute_dashboard_stats(users, transaction_count, trades)
    logger.info(
        f"Dashboard stats{' for ' + user_id if user_id else ''}: "
        f"{stats['userCount']} users, {stats['walletCount']} wallets, "
        f"{stats['transactionCount']} transactions, volume {stats['totalVolume']}"
    )
    return stats
