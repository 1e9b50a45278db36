"""
Pagination utilities for list endpoints.

Provides helper functions for consistent page/limit pagination across all
list endpoints, plus the coordinator that runs the page and count queries.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from xrpl_dashboard.config.settings import settings


@dataclass
class Page:
    """One page of results with its pagination metadata."""
    items: List[Any] = field(default_factory=list)
    page: int = 1
    limit: int = 1
    total_count: int = 0

    @property
    def total_pages(self) -> int:
        return calculate_total_pages(self.total_count, self.limit)

    @property
    def skip(self) -> int:
        return calculate_skip(self.page, self.limit)


def get_pagination_params(
    page: int | None = None,
    limit: int | None = None,
    default_limit: int | None = None
) -> Tuple[int, int]:
    """
    Get validated pagination parameters.

    Ensures page and limit are within acceptable ranges:
    - page: 1-based, values below 1 become 1 (default: 1)
    - limit: Between 1 and MAX_PAGE_SIZE (default: default_limit or DEFAULT_PAGE_SIZE)

    Args:
        page: Requested page (optional)
        limit: Number of items per page (optional)
        default_limit: Endpoint-specific default page size (optional)

    Returns:
        Tuple[int, int]: Validated (page, limit) tuple

    Example:
        >>> get_pagination_params(2, 15)
        (2, 15)
        >>> get_pagination_params(None, None, 15)
        (1, 15)
        >>> get_pagination_params(0, 10000)
        (1, 5000)  # Capped at MAX_PAGE_SIZE
    """
    if default_limit is None:
        default_limit = settings.DEFAULT_PAGE_SIZE

    if page is None or page < 1:
        page = 1

    if limit is None or limit <= 0:
        limit = default_limit
    elif limit > settings.MAX_PAGE_SIZE:
        limit = settings.MAX_PAGE_SIZE

    return page, limit


def calculate_skip(page: int, limit: int) -> int:
    """
    Number of documents to skip for a 1-based page.

    Example:
        >>> calculate_skip(1, 15)
        0
        >>> calculate_skip(3, 15)
        30
    """
    return (max(page, 1) - 1) * max(limit, 1)


def calculate_total_pages(
    total: int,
    limit: int
) -> int:
    """
    Calculate total number of pages.

    A limit below 1 is treated as 1.

    Example:
        >>> calculate_total_pages(150, 10)
        15
        >>> calculate_total_pages(155, 10)
        16
        >>> calculate_total_pages(0, 10)
        0
    """
    limit = max(limit, 1)
    if total <= 0:
        return 0
    return (total + limit - 1) // limit  # Ceiling division


async def paginate(
    executor: Any,
    collection: str,
    query: Optional[Dict[str, Any]],
    page: int,
    limit: int,
    sort: Optional[Any] = None
) -> Page:
    """
    Fetch one page and the total count with two independent queries.

    The find and the count are not run inside a snapshot, so the count can
    drift from the page under concurrent writes.

    Args:
        executor: QueryExecutor used to run both queries
        collection: Collection name
        query: MongoDB filter
        page: 1-based page number
        limit: Items per page
        sort: Sort specification

    Returns:
        Page: Items plus pagination metadata
    """
    page, limit = max(page, 1), max(limit, 1)
    skip = calculate_skip(page, limit)

    items, total_count = await asyncio.gather(
        executor.find(collection, query or {}, sort=sort, skip=skip, limit=limit),
        executor.count(collection, query or {}),
    )

    return Page(items=list(items), page=page, limit=limit, total_count=total_count)
