#!/usr/bin/env python3
"""
Export collection structure to JSON.

Writes name, document count, inferred field types and sample documents for
every collection of the resolved database.

Usage:
    python scripts/inspect_mongodb.py
    python scripts/inspect_mongodb.py --output docs/mongo-collections.json
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Add project directory to Python path for imports
project_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_dir))

from xrpl_dashboard.config.database import MongoConnectionManager
from xrpl_dashboard.config.settings import settings
from xrpl_dashboard.config.trading import (
    currency_symbol,
    find_trading_pair,
    is_supported_trading_pair,
    is_whitelisted_token,
)
from xrpl_dashboard.core.responses import to_json_safe
from xrpl_dashboard.domain import collections
from xrpl_dashboard.modules.mongodb.service import get_collection_info
from xrpl_dashboard.repositories.query_executor import QueryExecutor

# Open orders sampled when checking recorded pairs against the whitelist
PAIR_AUDIT_SAMPLE = 200


async def audit_trading_pairs(executor: QueryExecutor) -> dict:
    """
    Check sampled open orders against the trading pair whitelist.

    An order is unsupported when its offer legs form no whitelisted pair, and
    mislabelled when the legs form a pair other than its recorded trading_pair.id.
    Currencies outside the token whitelist are listed by symbol.
    """
    orders = await executor.find(collections.OPEN_ORDERS, limit=PAIR_AUDIT_SAMPLE)
    unsupported, mislabelled = [], []
    unlisted_tokens = set()

    for order in orders:
        gets = order.get("taker_gets") or {}
        pays = order.get("taker_pays") or {}
        if not isinstance(gets, dict) or not isinstance(pays, dict):
            continue
        for leg in (gets, pays):
            if not is_whitelisted_token(leg.get("currency"), leg.get("issuer")):
                unlisted_tokens.add(currency_symbol(leg.get("currency")))
        args = (gets.get("currency"), gets.get("issuer"), pays.get("currency"), pays.get("issuer"))
        if not is_supported_trading_pair(*args):
            unsupported.append(order.get("hash"))
            continue
        pair = find_trading_pair(*args)
        recorded = (order.get("trading_pair") or {}).get("id")
        if recorded and pair and recorded != pair.id:
            mislabelled.append(order.get("hash"))

    return {
        "sampled": len(orders),
        "unsupported": unsupported,
        "mislabelled": mislabelled,
        "unlistedTokens": sorted(unlisted_tokens),
    }


async def main(output: Path):
    manager = MongoConnectionManager.from_settings(settings)
    print(f"Connecting to MongoDB at {manager.masked_uri}...")

    try:
        db = await manager.connect()
        print(f"Connected successfully, inspecting database '{db.name}'")

        executor = QueryExecutor(db, timeout_seconds=settings.QUERY_TIMEOUT_SECONDS)
        collections_info = await get_collection_info(db, executor)

        for info in collections_info:
            print(f"  {info['name']}: {info['count']} documents, {len(info['schema'])} fields")

        pair_audit = await audit_trading_pairs(executor)
        print(
            f"  open order pairs: {pair_audit['sampled']} sampled, "
            f"{len(pair_audit['unsupported'])} unsupported, {len(pair_audit['mislabelled'])} mislabelled, "
            f"unlisted tokens: {', '.join(pair_audit['unlistedTokens']) or 'none'}"
        )

        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(
            json.dumps(to_json_safe({"database": db.name, "collections": collections_info, "pairAudit": pair_audit}), indent=2),
            encoding="utf-8",
        )
        print(f"\n✅ Collection structure written to {output}")
        return True

    except Exception as e:
        print(f"❌ Inspection failed: {str(e)}")
        return False

    finally:
        await manager.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Export MongoDB collection structure to JSON")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("mongo-collections.json"),
        help="Output file (default: mongo-collections.json)"
    )
    args = parser.parse_args()

    success = asyncio.run(main(args.output))
    sys.exit(0 if success else 1)
