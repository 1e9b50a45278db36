#!/usr/bin/env python3
"""
Quick script to check MongoDB connection and database resolution.

Usage:
    python scripts/check_mongodb.py
"""

import asyncio
import sys
from pathlib import Path

# Add project directory to Python path for imports
project_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_dir))

from xrpl_dashboard.config.database import MongoConnectionManager
from xrpl_dashboard.config.settings import settings
from xrpl_dashboard.domain import collections


EXPECTED_COLLECTIONS = [
    collections.USERS,
    collections.TRANSACTIONS,
    collections.TRADES,
    collections.OPEN_ORDERS,
    collections.FILLED_ORDERS,
    collections.CANCELED_ORDERS,
    collections.DEPOSITS_WITHDRAWALS,
]


async def check_mongodb():
    """Check MongoDB connection."""
    manager = MongoConnectionManager.from_settings(settings)

    print(f"Attempting to connect to MongoDB...")
    print(f"URI: {manager.masked_uri}")
    print(f"Database: {settings.MONGO_DB_NAME}")
    print(f"Fallbacks: {', '.join(settings.MONGO_FALLBACK_DB_NAMES) or '(none)'}")
    print()

    try:
        client = manager.get_client()

        # Test connection
        await client.admin.command("ping")
        print("✅ MongoDB connection successful!")

        info = await manager.server_info()
        print(f"Server version: {info.get('version', 'unknown')}")

        db_list = await client.list_database_names()
        print(f"\nAvailable databases: {', '.join(db_list)}")

        db = await manager.resolve_database()
        if db.name == settings.MONGO_DB_NAME:
            print(f"✅ Using primary database '{db.name}'")
        else:
            print(f"⚠️  Primary database unavailable, using '{db.name}'")

        names = set(await db.list_collection_names())
        print()
        for name in EXPECTED_COLLECTIONS:
            if name in names:
                count = await db[name].count_documents({})
                print(f"✅ {name}: {count} documents")
            else:
                print(f"⚠️  {name}: missing")

        return True

    except Exception as e:
        print(f"❌ MongoDB connection failed: {str(e)}")
        print("\nTroubleshooting:")
        print("1. Make sure MongoDB is running:")
        print("   - Linux/WSL: sudo systemctl start mongod")
        print("   - Docker: docker run -d -p 27017:27017 mongo")
        print("   - macOS: brew services start mongodb-community")
        print("2. Check MONGO_URI and MONGO_DB_NAME in your .env file")
        print("3. Verify MongoDB is listening on the correct port")
        return False

    finally:
        await manager.close()


if __name__ == "__main__":
    success = asyncio.run(check_mongodb())
    sys.exit(0 if success else 1)
