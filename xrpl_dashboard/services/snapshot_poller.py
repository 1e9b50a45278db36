"""
Snapshot Poller

Polls a read endpoint on a fixed interval and reports which rows are new
since the previous poll. Rows are matched by a primary key field, so
re-fetching the same page yields no additions.

Usage:
    async def fetch():
        response = await client.get("/api/miners/orders", params={"limit": 50})
        return response.json()["data"]

    poller = SnapshotPoller(fetch, key="orderId", interval_seconds=5)
    async for snapshot in poller:
        for row in snapshot.added:
            print(row["orderId"])
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from xrpl_dashboard.utils.dates import utc_now
from xrpl_dashboard.utils.logger import get_logger

logger = get_logger(__name__)

Row = Dict[str, Any]
FetchFn = Callable[[], Awaitable[Sequence[Row]]]


def diff_new_rows(
    previous: Optional[Sequence[Row]],
    current: Sequence[Row],
    key: str
) -> List[Row]:
    """
    Rows of ``current`` whose key does not appear in ``previous``.

    Order of ``current`` is kept. Rows without the key are never reported
    as new.

    Example:
        >>> diff_new_rows([{"id": 1}], [{"id": 2}, {"id": 1}], "id")
        [{'id': 2}]
    """
    seen = {row.get(key) for row in (previous or []) if row.get(key) is not None}
    return [
        row for row in current
        if row.get(key) is not None and row.get(key) not in seen
    ]


@dataclass
class Snapshot:
    """Result of one poll."""
    rows: List[Row] = field(default_factory=list)
    added: List[Row] = field(default_factory=list)
    fetched_at: datetime = field(default_factory=utc_now)


class SnapshotPoller:
    """
    Periodic poller yielding snapshots.

    Polls run one after another; a slow fetch delays the next poll rather
    than overlapping it. A failed fetch is logged and the previous rows are
    kept, so the next successful poll diffs against the last good snapshot.
    """

    def __init__(
        self,
        fetch: FetchFn,
        key: str,
        interval_seconds: float = 5.0,
        max_polls: Optional[int] = None
    ):
        """
        Initialize poller.

        Args:
            fetch: Coroutine function returning the current rows
            key: Primary key field used to diff rows
            interval_seconds: Pause between polls
            max_polls: Stop after this many polls (None polls forever)
        """
        self.fetch = fetch
        self.key = key
        self.interval_seconds = interval_seconds
        self.max_polls = max_polls
        self.previous: Optional[List[Row]] = None
        self.polls = 0

    async def poll_once(self) -> Optional[Snapshot]:
        """
        Fetch once and diff against the previous snapshot.

        The first successful poll reports every row as added.

        Returns:
            Snapshot, or None when the fetch failed
        """
        self.polls += 1
        try:
            rows = list(await self.fetch())
        except Exception as e:
            logger.error(f"Snapshot poll {self.polls} failed: {str(e)}")
            return None

        added = diff_new_rows(self.previous, rows, self.key)
        self.previous = rows
        if added:
            logger.info(f"Snapshot poll {self.polls}: {len(added)} new row(s)")
        return Snapshot(rows=rows, added=added)

    def _done(self) -> bool:
        return self.max_polls is not None and self.polls >= self.max_polls

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        while not self._done():
            snapshot = await self.poll_once()
            if snapshot is not None:
                yield snapshot
            if self._done():
                break
            await asyncio.sleep(self.interval_seconds)
