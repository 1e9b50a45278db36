#!/usr/bin/env python3
"""
Watch the order history endpoint and print newly seen orders.

Polls /api/miners/orders on an interval and prints each order the first
time it appears. The first poll prints the current page.

Usage:
    python scripts/watch_orders.py --base-url http://localhost:8000
    python scripts/watch_orders.py --user-id miner_001 --interval 10
"""

import argparse
import asyncio
import sys
from pathlib import Path

import httpx

# Add project directory to Python path for imports
project_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_dir))

from xrpl_dashboard.services.snapshot_poller import SnapshotPoller


def format_order(order: dict) -> str:
    return (
        f"{order.get('date', '?'):<25} {order.get('status', '?'):<10} "
        f"{order.get('side', '?'):<5} {order.get('pair', '?'):<10} "
        f"amount={order.get('amount', '0'):<12} price={order.get('executedPrice') or order.get('price', '0'):<14} "
        f"{order.get('orderId', '?')}"
    )


async def main(args):
    params = {"page": 1, "limit": args.limit}
    if args.user_id:
        params["userId"] = args.user_id
    if args.status:
        params["status"] = args.status

    async with httpx.AsyncClient(base_url=args.base_url, timeout=args.timeout) as client:

        async def fetch():
            response = await client.get("/api/miners/orders", params=params)
            response.raise_for_status()
            body = response.json()
            if not body.get("success"):
                raise RuntimeError(body.get("error", "request failed"))
            return body.get("data", [])

        poller = SnapshotPoller(
            fetch,
            key="orderId",
            interval_seconds=args.interval,
            max_polls=args.max_polls,
        )

        print(f"Watching {args.base_url}/api/miners/orders every {args.interval}s (Ctrl+C to stop)")
        async for snapshot in poller:
            for order in snapshot.added:
                print(format_order(order))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Print newly seen orders from the dashboard API")
    parser.add_argument("--base-url", default="http://localhost:8000", help="Dashboard API base URL")
    parser.add_argument("--user-id", default=None, help="Only orders for this user")
    parser.add_argument("--status", default=None, help="Filled, Cancelled or ALL")
    parser.add_argument("--limit", type=int, default=50, help="Orders fetched per poll")
    parser.add_argument("--interval", type=float, default=5.0, help="Seconds between polls")
    parser.add_argument("--timeout", type=float, default=10.0, help="HTTP timeout in seconds")
    parser.add_argument("--max-polls", type=int, default=None, help="Stop after this many polls")
    args = parser.parse_args()

    try:
        asyncio.run(main(args))
    except KeyboardInterrupt:
        print("\nStopped")
