"""Indexes for the ``users`` and ``domain_events`` collections."""

import logging
from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


async def create_user_indexes(db: AsyncIOMotorDatabase[Dict[str, Any]]) -> None:
    """Create indexes for users collection.

    Indexes:
    - _id: user UUID (automatic)
    - email: unique, backs the one-account-per-email rule
    """
    collection = db["users"]
    logger.info("Creating indexes for 'users' collection...")

    await collection.create_index(
        [("email", 1)],
        name="idx_email_unique",
        unique=True,
        background=True,
    )
    logger.info("  ✓ Created index: idx_email_unique")


async def create_event_indexes(db: AsyncIOMotorDatabase[Dict[str, Any]]) -> None:
    """Create indexes for domain_events collection.

    Indexes:
    - aggregate_id: all events of one user
    - aggregate_id + occurred_at: event history in order
    - event_name: events of one type
    """
    collection = db["domain_events"]
    logger.info("Creating indexes for 'domain_events' collection...")

    await collection.create_index(
        [("aggregate_id", 1)],
        name="idx_aggregate",
        background=True,
    )
    logger.info("  ✓ Created index: idx_aggregate")

    await collection.create_index(
        [("aggregate_id", 1), ("occurred_at", 1)],
        name="idx_aggregate_occurred",
        background=True,
    )
    logger.info("  ✓ Created index: idx_aggregate_occurred")

    await collection.create_index(
        [("event_name", 1)],
        name="idx_event_name",
        background=True,
    )
    logger.info("  ✓ Created index: idx_event_name")


async def ensure_indexes(db: AsyncIOMotorDatabase[Dict[str, Any]]) -> None:
    """Create every index the auth collections rely on. Idempotent."""
    await create_user_indexes(db)
    await create_event_indexes(db)
