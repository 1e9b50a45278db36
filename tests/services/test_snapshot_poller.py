"""
SnapshotPoller Tests
"""

from unittest.mock import AsyncMock, patch

import pytest

from xrpl_dashboard.services.snapshot_poller import SnapshotPoller, diff_new_rows


# ==================== DIFF TESTS ====================

def test_diff_first_snapshot_reports_everything():
    rows = [{"orderId": "A"}, {"orderId": "B"}]
    assert diff_new_rows(None, rows, "orderId") == rows


def test_diff_keeps_current_order():
    previous = [{"orderId": "A"}]
    current = [{"orderId": "C"}, {"orderId": "A"}, {"orderId": "B"}]

    assert diff_new_rows(previous, current, "orderId") == [{"orderId": "C"}, {"orderId": "B"}]


def test_diff_ignores_rows_without_key():
    assert diff_new_rows([], [{"hash": "x"}], "orderId") == []


# ==================== POLLER TESTS ====================

@pytest.mark.asyncio
async def test_poll_once_diffs_against_previous():
    fetch = AsyncMock(side_effect=[
        [{"orderId": "A"}],
        [{"orderId": "B"}, {"orderId": "A"}],
    ])
    poller = SnapshotPoller(fetch, key="orderId")

    first = await poller.poll_once()
    second = await poller.poll_once()

    assert first.added == [{"orderId": "A"}]
    assert second.added == [{"orderId": "B"}]
    assert len(second.rows) == 2


@pytest.mark.asyncio
async def test_failed_fetch_keeps_previous_snapshot():
    fetch = AsyncMock(side_effect=[
        [{"orderId": "A"}],
        ConnectionError("dashboard unreachable"),
        [{"orderId": "A"}, {"orderId": "B"}],
    ])
    poller = SnapshotPoller(fetch, key="orderId")

    await poller.poll_once()
    assert await poller.poll_once() is None
    third = await poller.poll_once()

    assert third.added == [{"orderId": "B"}]


@pytest.mark.asyncio
async def test_iteration_stops_after_max_polls():
    fetch = AsyncMock(return_value=[{"orderId": "A"}])
    poller = SnapshotPoller(fetch, key="orderId", interval_seconds=30, max_polls=3)

    with patch("xrpl_dashboard.services.snapshot_poller.asyncio.sleep", new=AsyncMock()) as sleep:
        snapshots = [snapshot async for snapshot in poller]

    assert len(snapshots) == 3
    assert [len(snapshot.added) for snapshot in snapshots] == [1, 0, 0]
    assert sleep.await_count == 2
    sleep.assert_awaited_with(30)
