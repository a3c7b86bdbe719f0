"""MongoDB event repository (``domain_events`` collection)."""

import json
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorClientSession, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from domain.user.core.events import UserEvent, event_from_dict
from domain.user.core.exceptions.user_errors import DatabaseError
from domain.user.core.ports.event_repository import IEventRepository
from infrastructure.persistence.mongodb.base import MongoBaseRepository
from infrastructure.user.mongo_user_repository import as_utc, ensure_session_open


class MongoEventRepository(MongoBaseRepository[UserEvent], IEventRepository):
    """Append-only event log.

    A failed write inside a MongoDB transaction aborts the whole transaction,
    so published events are staged in ``pending`` and written by the unit of
    work after the user data has committed. Reads in the same transaction
    include the pending events.
    """

    def __init__(
        self,
        db: AsyncIOMotorDatabase[Dict[str, Any]],
        session: Optional[AsyncIOMotorClientSession] = None,
        pending: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        super().__init__(db, session)
        self.pending: List[Dict[str, Any]] = pending if pending is not None else []

    @property
    def collection_name(self) -> str:
        return "domain_events"

    def to_document(self, entity: UserEvent) -> Dict[str, Any]:
        """Raises TypeError or ValueError if the payload is not JSON-compatible."""
        return {
            "_id": str(uuid.uuid4()),
            "aggregate_id": entity.aggregate_id,
            "event_name": entity.event_name,
            "event_data": json.loads(json.dumps(entity.to_dict())),
            "occurred_at": entity.occurred_at,
            "created_at": datetime.now(timezone.utc),
        }

    def from_document(self, doc: Dict[str, Any]) -> UserEvent:
        return event_from_dict(doc["event_data"])

    async def publish(self, event: UserEvent) -> None:
        ensure_session_open(self._session, "publish event")
        try:
            document = self.to_document(event)
        except (TypeError, ValueError) as e:
            raise DatabaseError(f"Failed to publish event: {e}", e) from e
        self.pending.append(document)

    async def find_by_aggregate_id(self, aggregate_id: str) -> List[UserEvent]:
        ensure_session_open(self._session, "find events by aggregate ID")
        try:
            stored = await self._find_many(
                {"aggregate_id": aggregate_id}, sort=[("occurred_at", 1)]
            )
        except PyMongoError as e:
            raise DatabaseError(f"Failed to find events: {e}", e) from e

        docs = stored + [doc for doc in self.pending if doc["aggregate_id"] == aggregate_id]
        docs.sort(key=lambda doc: as_utc(doc["occurred_at"]))  # type: ignore[arg-type,return-value]
        return [self.from_document(doc) for doc in docs]
