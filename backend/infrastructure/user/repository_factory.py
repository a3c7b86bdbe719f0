"""Unit of work factory for environment-based selection.

This factory picks the persistence backend from the USER_REPOSITORY
environment variable:
- "inmemory": InMemoryUnitOfWork over a process-wide InMemoryDatabase
- "mongodb": MongoUnitOfWork over a shared Motor client (for production)

Default: inmemory
"""

from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorClient

from domain.user.core.ports.unit_of_work import IUnitOfWork, UnitOfWorkFactory
from infrastructure.config import (
    get_mongodb_database,
    get_mongodb_uri,
    get_user_repository_backend,
)
from infrastructure.user.in_memory_unit_of_work import (
    InMemoryDatabase,
    InMemoryUnitOfWork,
)
from infrastructure.user.mongo_unit_of_work import MongoUnitOfWork

# Singleton instances
_in_memory_database: Optional[InMemoryDatabase] = None
_mongo_client: Optional[AsyncIOMotorClient[Dict[str, Any]]] = None


def get_in_memory_database() -> InMemoryDatabase:
    global _in_memory_database

    if _in_memory_database is None:
        _in_memory_database = InMemoryDatabase()

    return _in_memory_database


def get_mongo_client() -> AsyncIOMotorClient[Dict[str, Any]]:
    """Get singleton Motor client.

    Raises:
        ValueError: If MONGODB_URI is not set
    """
    global _mongo_client

    if _mongo_client is None:
        uri = get_mongodb_uri()
        if not uri:
            raise ValueError(
                "MONGODB_URI environment variable is required "
                "when USER_REPOSITORY=mongodb"
            )
        _mongo_client = AsyncIOMotorClient(uri, tz_aware=True)

    return _mongo_client


def create_unit_of_work_factory() -> UnitOfWorkFactory:
    """Create a unit of work factory based on environment configuration.

    Returns:
        Callable producing a fresh IUnitOfWork per transaction

    Environment Variables:
        USER_REPOSITORY: "inmemory" | "mongodb" (default: inmemory)
        MONGODB_URI: MongoDB connection string (required for mongodb)
        MONGODB_DATABASE: Database name (default: auth_core)
    """
    backend = get_user_repository_backend()

    if backend == "mongodb":
        client = get_mongo_client()
        db = client[get_mongodb_database()]

        def mongo_factory() -> IUnitOfWork:
            return MongoUnitOfWork(client, db)

        return mongo_factory

    database = get_in_memory_database()

    def in_memory_factory() -> IUnitOfWork:
        return InMemoryUnitOfWork(database)

    return in_memory_factory


def reset_unit_of_work_factory() -> None:
    """Reset the singletons (for testing purposes)."""
    global _in_memory_database, _mongo_client

    if _mongo_client is not None:
        _mongo_client.close()
    _in_memory_database = None
    _mongo_client = None
