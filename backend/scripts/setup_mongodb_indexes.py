"""Setup MongoDB indexes for the auth collections.

Collections:
- users: User aggregate documents
- domain_events: Append-only user event log

Usage:
    python scripts/setup_mongodb_indexes.py

Environment Variables:
    MONGODB_URI: MongoDB connection string (required)
    MONGODB_DATABASE: Database name (default: auth_core)
"""

import asyncio
import logging
import sys
from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from infrastructure.config import (
    get_mongodb_database,
    get_mongodb_uri,
    load_environment,
)
from infrastructure.user.mongo_indexes import ensure_indexes

load_environment()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

COLLECTIONS = ("users", "domain_events")


async def list_existing_indexes(db: AsyncIOMotorDatabase[Dict[str, Any]]) -> None:
    """List all indexes for verification."""
    logger.info("\n📋 Existing indexes:")

    for coll_name in COLLECTIONS:
        indexes = await db[coll_name].list_indexes().to_list(length=None)

        logger.info(f"\n{coll_name}:")
        for idx in indexes:
            keys = idx.get("key", {})
            unique = " (unique)" if idx.get("unique", False) else ""
            keys_str = ", ".join(f"{k}:{v}" for k, v in keys.items())
            logger.info(f"  • {idx.get('name', 'unknown')}: [{keys_str}]{unique}")


async def setup_all_indexes() -> None:
    uri = get_mongodb_uri()
    if not uri:
        logger.error("MONGODB_URI not configured!")
        sys.exit(1)

    database_name = get_mongodb_database()
    logger.info(f"Connecting to MongoDB: {database_name}")

    client: AsyncIOMotorClient[Dict[str, Any]] = AsyncIOMotorClient(uri)
    db = client[database_name]

    try:
        await client.admin.command("ping")
        logger.info("✓ Connected to MongoDB successfully\n")

        await ensure_indexes(db)
        logger.info("\n✅ All indexes created successfully!")

        await list_existing_indexes(db)
    finally:
        client.close()
        logger.info("\n✓ MongoDB connection closed")


def main() -> None:
    try:
        asyncio.run(setup_all_indexes())
    except KeyboardInterrupt:
        logger.info("\n\n⚠️  Interrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.error(f"\n❌ Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
