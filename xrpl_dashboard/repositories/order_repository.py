"""
Order Repository

Orders live in one collection per lifecycle state. This repository hides
that layout: callers ask for orders in a set of states matching a filter
and get one merged, date-ordered result.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Tuple

from xrpl_dashboard.domain.models.order import OrderStatus
from xrpl_dashboard.repositories.query_executor import QueryExecutor
from xrpl_dashboard.services.shapers import shape_order, shape_open_order
from xrpl_dashboard.utils.dates import parse_datetime
from xrpl_dashboard.utils.logger import get_logger
from xrpl_dashboard.utils.pagination import Page, calculate_skip, paginate

logger = get_logger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Fixed query order keeps merged results deterministic for equal dates
_STATUS_ORDER: Tuple[OrderStatus, ...] = (
    OrderStatus.FILLED,
    OrderStatus.CANCELLED,
    OrderStatus.OPEN,
)


def _ordered(statuses: Iterable[OrderStatus]) -> List[OrderStatus]:
    wanted = set(statuses)
    return [status for status in _STATUS_ORDER if status in wanted]


def _date_key(order: Dict[str, Any]) -> datetime:
    return parse_datetime(order.get("date")) or _EPOCH


class OrderRepository:
    """
    Repository for orders across lifecycle states.

    Usage:
        repo = OrderRepository(executor)
        page = await repo.find_page(
            {OrderStatus.FILLED, OrderStatus.CANCELLED},
            {"trading_pair.id": "XRP/RLUSD"},
            page=1,
            limit=20,
        )
    """

    def __init__(self, executor: QueryExecutor):
        """
        Initialize repository.

        Args:
            executor: Query executor bound to the resolved database
        """
        self.executor = executor

    async def _counts(self, ordered: List[OrderStatus], query: Dict[str, Any]) -> List[int]:
        return list(await asyncio.gather(*[
            self.executor.count(status.collection, query) for status in ordered
        ]))

    async def count(self, statuses: Iterable[OrderStatus], query: Dict[str, Any]) -> int:
        """Count orders in any of the given states matching query."""
        ordered = _ordered(statuses)
        if not ordered:
            return 0
        return sum(await self._counts(ordered, query))

    async def _fetch_state(
        self,
        status: OrderStatus,
        query: Dict[str, Any],
        limit: int
    ) -> List[Dict[str, Any]]:
        documents = await self.executor.find(
            status.collection,
            query,
            sort={status.date_field: -1},
            limit=limit,
        )
        return [shape_order(document, status) for document in documents]

    async def find_page(
        self,
        statuses: Iterable[OrderStatus],
        query: Dict[str, Any],
        page: int,
        limit: int
    ) -> Page:
        """
        One page of shaped orders merged across states, newest first.

        Counts run first. A page past the end returns empty without reading
        any documents; otherwise each state contributes its newest
        ``skip + limit`` orders, capped at its own count. The merge is sorted
        by shaped ``date`` and sliced to the requested page. The total is the
        sum of per-state counts.

        Args:
            statuses: Lifecycle states to include
            query: Filter applied to every state's collection
            page: 1-based page number
            limit: Items per page

        Returns:
            Page: Shaped orders with pagination metadata
        """
        page, limit = max(page, 1), max(limit, 1)
        skip = calculate_skip(page, limit)
        ordered = _ordered(statuses)

        if not ordered:
            return Page(items=[], page=page, limit=limit, total_count=0)

        counts = await self._counts(ordered, query)
        total_count = sum(counts)

        if skip >= total_count:
            logger.info(
                "Page %d is past the end of %d order(s), nothing fetched",
                page,
                total_count,
            )
            return Page(items=[], page=page, limit=limit, total_count=total_count)

        results = await asyncio.gather(*[
            self._fetch_state(status, query, min(skip + limit, state_count))
            for status, state_count in zip(ordered, counts)
            if state_count
        ])
        merged: List[Dict[str, Any]] = []
        for shaped in results:
            merged.extend(shaped)

        merged.sort(key=_date_key, reverse=True)
        items = merged[skip:skip + limit]

        logger.info(
            "Merged %d order(s) from %s, returning %d (page %d, total %d)",
            len(merged),
            ", ".join(status.collection for status in ordered),
            len(items),
            page,
            total_count,
        )
        return Page(items=items, page=page, limit=limit, total_count=total_count)

    async def find_open_page(
        self,
        query: Dict[str, Any],
        page: int,
        limit: int
    ) -> Page:
        """Open orders, newest first, returned as stored."""
        result = await paginate(
            self.executor,
            OrderStatus.OPEN.collection,
            query,
            page,
            limit,
            sort={OrderStatus.OPEN.date_field: -1},
        )
        result.items = [shape_open_order(document) for document in result.items]
        return result
