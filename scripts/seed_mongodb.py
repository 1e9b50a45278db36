#!/usr/bin/env python3
"""
Seed script to fill a development database with sample XRPL data.

Writes users, transactions, trades, open/filled/canceled orders and
deposits/withdrawals shaped like the ingestion pipeline's documents.

Usage:
    python scripts/seed_mongodb.py
    python scripts/seed_mongodb.py --users 20 --orders 500 --drop
"""

import argparse
import asyncio
import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List

# Add project directory to Python path for imports
project_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_dir))

from xrpl_dashboard.config.database import MongoConnectionManager
from xrpl_dashboard.config.settings import settings
from xrpl_dashboard.config.trading import TRADING_PAIRS, TradingPair, determine_market_side
from xrpl_dashboard.domain import collections

BASE58_ALPHABET = "rpshnaf39wBUDNEGHJKLM4PQRST7VWXYZ2bcdeCg65jkm8oFqi1tuvAxyz"
START_LEDGER = 87_000_000


def random_address(rng: random.Random) -> str:
    return "r" + "".join(rng.choice(BASE58_ALPHABET) for _ in range(33))


def random_hash(rng: random.Random) -> str:
    return "".join(rng.choice("0123456789ABCDEF") for _ in range(64))


def random_date(rng: random.Random, days: int) -> datetime:
    now = datetime.now(timezone.utc)
    return now - timedelta(seconds=rng.randint(0, days * 24 * 3600))


def legs(pair: TradingPair, buy: bool, base_amount: float, price: float) -> Dict[str, Dict[str, str]]:
    """TakerGets/TakerPays of an offer buying or selling the base token."""
    base = {"currency": pair.base_token.currency, "value": f"{base_amount:.6f}"}
    quote = {"currency": pair.quote_token.currency, "value": f"{base_amount * price:.6f}"}
    if buy:
        return {"gets": quote, "pays": base}
    return {"gets": base, "pays": quote}


def build_users(rng: random.Random, count: int) -> List[Dict[str, Any]]:
    return [
        {
            "id": f"miner_{index:03d}",
            "wallets": [random_address(rng) for _ in range(rng.randint(1, 3))],
        }
        for index in range(count)
    ]


def build_order(rng: random.Random, user: Dict[str, Any], days: int) -> Dict[str, Any]:
    pair = rng.choice(TRADING_PAIRS)
    amount = round(rng.uniform(10, 5000), 2)
    price = round(rng.uniform(0.2, 3.0), 6)
    created = random_date(rng, days)
    order_legs = legs(pair, rng.random() < 0.5, amount, price)
    side = determine_market_side(
        pair.id,
        order_legs["gets"]["currency"],
        order_legs["pays"]["currency"],
    ).lower()
    return {
        "hash": random_hash(rng),
        "account": rng.choice(user["wallets"]),
        "sequence": rng.randint(1, 10_000_000),
        "created_ledger_index": START_LEDGER + rng.randint(0, 1_000_000),
        "user_id": user["id"],
        "trading_pair": {"id": pair.id},
        "market_side": side,
        "original_amount": str(amount),
        "price": str(price),
        "fee_xrp": "0.000012",
        "taker_gets": order_legs["gets"],
        "taker_pays": order_legs["pays"],
        "created_date": created,
    }


def resolve_order(rng: random.Random, order: Dict[str, Any]) -> Dict[str, Any]:
    """Turn an open order into a filled or canceled one."""
    resolved_at = order["created_date"] + timedelta(minutes=rng.randint(1, 600))
    ledger = order["created_ledger_index"] + rng.randint(1, 5000)

    if rng.random() < 0.6:
        fill_ratio = rng.choice([1.0, 1.0, 0.5, 0.25])
        gets = dict(order["taker_gets"], value=f"{float(order['taker_gets']['value']) * fill_ratio:.6f}")
        pays = dict(order["taker_pays"], value=f"{float(order['taker_pays']['value']) * fill_ratio:.6f}")
        return dict(
            order,
            status="filled",
            resolved_ledger_index=ledger,
            resolution_date=resolved_at,
            filled_gets=gets,
            filled_pays=pays,
            executed_amount=f"{float(order['original_amount']) * fill_ratio:.2f}",
        )

    return dict(
        order,
        status="canceled",
        canceled_ledger_index=ledger,
        canceled_date=resolved_at,
        cancel_tx_hash=random_hash(rng),
    )


def build_transaction(rng: random.Random, order: Dict[str, Any]) -> Dict[str, Any]:
    created = order["created_date"]
    trade = {
        "timestamp": created,
        "TakerGets": order["taker_gets"],
        "TakerPays": order["taker_pays"],
    }
    return {
        "hash": order["hash"],
        "txid": order["hash"],
        "ledger_index": order["created_ledger_index"],
        "Account": order["account"],
        "Destination": order["account"],
        "user_id": order["user_id"],
        "TransactionType": "OfferCreate",
        "trades": [trade],
        "created_date": created,
        "close_time_iso": created.strftime("%Y-%m-%dT%H:%M:%SZ"),
    }


def build_trade(order: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "hash": order["hash"],
        "user_id": order["user_id"],
        "timestamp": order.get("resolution_date", order["created_date"]),
        "TakerGets": order["filled_gets"],
        "TakerPays": order["filled_pays"],
    }


def build_transfer(rng: random.Random, user: Dict[str, Any], days: int) -> Dict[str, Any]:
    kind = rng.choice(["deposit", "withdrawal"])
    wallet = rng.choice(user["wallets"])
    exchange = "rExchangeHotWa11et1111111111111111"
    pair = rng.choice(TRADING_PAIRS)
    token = rng.choice([pair.base_token, pair.quote_token])
    return {
        "hash": random_hash(rng),
        "user_id": user["id"],
        "type": kind,
        "amount": {"currency": token.currency, "value": f"{rng.uniform(5, 20000):.2f}"},
        "fee_xrp": "0.000012",
        "from_address": exchange if kind == "withdrawal" else wallet,
        "to_address": wallet if kind == "withdrawal" else exchange,
        "timestamp": random_date(rng, days),
        "ledger_index": START_LEDGER + rng.randint(0, 1_000_000),
    }


async def seed(args) -> bool:
    """Seed sample data into the resolved database."""
    rng = random.Random(args.seed)
    manager = MongoConnectionManager.from_settings(settings)

    print("Connecting to MongoDB...")
    print(f"URI: {manager.masked_uri}")
    print()

    try:
        await manager.get_client().admin.command("ping")
        print("✅ MongoDB connection successful!")

        # Seed into the configured primary database, creating it if needed
        db = manager.get_client()[settings.MONGO_DB_NAME]

        names = [
            collections.USERS,
            collections.TRANSACTIONS,
            collections.TRADES,
            collections.OPEN_ORDERS,
            collections.FILLED_ORDERS,
            collections.CANCELED_ORDERS,
            collections.DEPOSITS_WITHDRAWALS,
        ]

        if args.drop:
            for name in names:
                await db[name].drop()
            print(f"Dropped existing collections in '{db.name}'")

        users = build_users(rng, args.users)
        orders = [build_order(rng, rng.choice(users), args.days) for _ in range(args.orders)]

        open_orders: List[Dict[str, Any]] = []
        filled_orders: List[Dict[str, Any]] = []
        canceled_orders: List[Dict[str, Any]] = []
        for order in orders:
            if rng.random() < 0.25:
                open_orders.append(dict(order, status="open"))
                continue
            resolved = resolve_order(rng, order)
            if resolved["status"] == "filled":
                filled_orders.append(resolved)
            else:
                canceled_orders.append(resolved)

        documents = {
            collections.USERS: users,
            collections.TRANSACTIONS: [build_transaction(rng, order) for order in orders],
            collections.TRADES: [build_trade(order) for order in filled_orders],
            collections.OPEN_ORDERS: open_orders,
            collections.FILLED_ORDERS: filled_orders,
            collections.CANCELED_ORDERS: canceled_orders,
            collections.DEPOSITS_WITHDRAWALS: [
                build_transfer(rng, rng.choice(users), args.days) for _ in range(args.transfers)
            ],
        }

        for name, docs in documents.items():
            if docs:
                result = await db[name].insert_many(docs)
                print(f"✅ {name}: inserted {len(result.inserted_ids)} documents")
            else:
                print(f"⚠️  {name}: nothing to insert")

        return True

    except Exception as e:
        print(f"❌ Seeding failed: {str(e)}")
        return False

    finally:
        await manager.close()
        print("MongoDB connection closed")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed sample XRPL liquidity-mining data")
    parser.add_argument("--users", type=int, default=10, help="Number of users")
    parser.add_argument("--orders", type=int, default=200, help="Number of orders")
    parser.add_argument("--transfers", type=int, default=60, help="Number of deposits/withdrawals")
    parser.add_argument("--days", type=int, default=90, help="Spread dates over this many past days")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--drop", action="store_true", help="Drop existing collections first")
    args = parser.parse_args()

    success = asyncio.run(seed(args))
    sys.exit(0 if success else 1)
