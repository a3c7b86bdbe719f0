"""MongoDB unit of work backed by a client session transaction.

Multi-document transactions need a replica set or a sharded cluster
(MongoDB Atlas qualifies).
"""

import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorClientSession,
    AsyncIOMotorDatabase,
)
from pymongo.errors import PyMongoError

from domain.user.core.exceptions.user_errors import DatabaseError
from domain.user.core.ports.unit_of_work import IUnitOfWork
from infrastructure.user.mongo_event_repository import MongoEventRepository
from infrastructure.user.mongo_user_repository import MongoUserRepository

logger = logging.getLogger(__name__)


class MongoUnitOfWork(IUnitOfWork):
    """One client session with an open transaction.

    Event documents published during the transaction are written after the
    commit succeeds; a failure there is logged and never undoes user data.

    Examples:
        >>> async with MongoUnitOfWork(client, client["auth_core"]) as uow:
        ...     await uow.users.save(user)
    """

    users: MongoUserRepository
    events: MongoEventRepository

    def __init__(
        self,
        client: AsyncIOMotorClient[Dict[str, Any]],
        db: AsyncIOMotorDatabase[Dict[str, Any]],
    ) -> None:
        self._client = client
        self._db = db
        self._session: Optional[AsyncIOMotorClientSession] = None
        self._pending_events: List[Dict[str, Any]] = []

    async def __aenter__(self) -> "MongoUnitOfWork":
        try:
            self._session = await self._client.start_session()
            self._session.start_transaction()
        except PyMongoError as e:
            if self._session is not None:
                await self._session.end_session()
                self._session = None
            raise DatabaseError(f"Failed to begin transaction: {e}", e) from e

        self._pending_events = []
        self.users = MongoUserRepository(self._db, self._session)
        self.events = MongoEventRepository(self._db, self._session, self._pending_events)
        return self

    def _require_session(self, operation: str) -> AsyncIOMotorClientSession:
        if self._session is None:
            raise DatabaseError(f"Failed to {operation}: transaction is not active")
        return self._session

    async def commit(self) -> None:
        session = self._require_session("commit transaction")
        try:
            await session.commit_transaction()
        except PyMongoError as e:
            raise DatabaseError(f"Failed to commit transaction: {e}", e) from e

        await self._flush_events()

    async def rollback(self) -> None:
        session = self._session
        self._pending_events.clear()
        if session is None or not session.in_transaction:
            return

        try:
            await session.abort_transaction()
        except PyMongoError as e:
            raise DatabaseError(f"Failed to roll back transaction: {e}", e) from e

    async def close(self) -> None:
        session, self._session = self._session, None
        if session is not None:
            await session.end_session()

    async def _flush_events(self) -> None:
        if not self._pending_events:
            return

        documents = list(self._pending_events)
        self._pending_events.clear()
        try:
            await self._db[self.events.collection_name].insert_many(
                documents, ordered=False
            )
        except PyMongoError as e:
            logger.error(
                "Failed to write domain events after commit",
                extra={
                    "event_names": [doc["event_name"] for doc in documents],
                    "error": str(e),
                },
                exc_info=True,
            )
