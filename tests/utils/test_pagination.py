"""
Pagination utility tests.
"""

import pytest

from xrpl_dashboard.config.settings import settings
from xrpl_dashboard.utils.pagination import (
    Page,
    calculate_skip,
    calculate_total_pages,
    get_pagination_params,
    paginate,
)


def test_pagination_defaults():
    assert get_pagination_params() == (1, settings.DEFAULT_PAGE_SIZE)
    assert get_pagination_params(None, None, 15) == (1, 15)


def test_pagination_clamps_values():
    """Page below 1 becomes 1, limit above the maximum is capped"""
    assert get_pagination_params(0, 10) == (1, 10)
    assert get_pagination_params(-3, 10) == (1, 10)
    assert get_pagination_params(2, settings.MAX_PAGE_SIZE + 1) == (2, settings.MAX_PAGE_SIZE)
    assert get_pagination_params(2, 0, 15) == (2, 15)


def test_calculate_skip():
    assert calculate_skip(1, 15) == 0
    assert calculate_skip(3, 15) == 30
    assert calculate_skip(0, 15) == 0


@pytest.mark.parametrize("total,limit,expected", [
    (0, 10, 0),
    (1, 10, 1),
    (10, 10, 1),
    (11, 10, 2),
    (155, 10, 16),
    (5, 0, 5),
])
def test_calculate_total_pages(total, limit, expected):
    assert calculate_total_pages(total, limit) == expected


def test_page_properties():
    page = Page(items=[1, 2], page=3, limit=2, total_count=7)

    assert page.total_pages == 4
    assert page.skip == 4


@pytest.mark.asyncio
async def test_paginate_runs_find_and_count(executor_factory):
    executor = executor_factory(
        find={"transactions": [{"txid": str(i)} for i in range(5)]},
        count={"transactions": 5},
    )

    page = await paginate(executor, "transactions", {"a": 1}, page=2, limit=2, sort={"createdAt": -1})

    assert [item["txid"] for item in page.items] == ["2", "3"]
    assert page.total_count == 5
    assert page.total_pages == 3
    executor.find.assert_awaited_once_with(
        "transactions", {"a": 1}, sort={"createdAt": -1}, skip=2, limit=2
    )
    executor.count.assert_awaited_once_with("transactions", {"a": 1})


@pytest.mark.asyncio
async def test_paginate_past_the_end(executor_factory):
    """A page beyond totalPages is empty but still reports the totals"""
    executor = executor_factory(
        find={"transactions": [{"txid": str(i)} for i in range(5)]},
        count={"transactions": 5},
    )

    page = await paginate(executor, "transactions", {}, page=4, limit=2)

    assert page.items == []
    assert page.total_count == 5
    assert page.total_pages == 3
