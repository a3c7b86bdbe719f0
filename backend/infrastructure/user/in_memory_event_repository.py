"""In-memory event repository for testing."""

import json
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, List

from domain.user.core.events import UserEvent, event_from_dict
from domain.user.core.exceptions.user_errors import DatabaseError
from domain.user.core.ports.event_repository import IEventRepository

if TYPE_CHECKING:
    from infrastructure.user.in_memory_unit_of_work import InMemoryUnitOfWork


@dataclass(frozen=True)
class StoredEvent:
    """One row of the domain event log."""

    id: str
    aggregate_id: str
    event_name: str
    event_data: Dict[str, Any]
    occurred_at: datetime
    created_at: datetime


class InMemoryEventRepository(IEventRepository):
    """Append-only event log staged on an InMemoryUnitOfWork.

    Payloads go through a JSON round trip so stored rows hold plain data,
    like a JSON column would.
    """

    def __init__(self, uow: "InMemoryUnitOfWork") -> None:
        self._uow = uow

    async def publish(self, event: UserEvent) -> None:
        self._uow.ensure_active("publish event")

        try:
            payload = json.loads(json.dumps(event.to_dict()))
        except (TypeError, ValueError) as e:
            raise DatabaseError(f"Failed to publish event: {e}", e) from e

        self._uow.staged_events.append(
            StoredEvent(
                id=str(uuid.uuid4()),
                aggregate_id=event.aggregate_id,
                event_name=event.event_name,
                event_data=payload,
                occurred_at=event.occurred_at,
                created_at=datetime.now(timezone.utc),
            )
        )

    async def find_by_aggregate_id(self, aggregate_id: str) -> List[UserEvent]:
        self._uow.ensure_active("find events by aggregate ID")

        rows = [row for row in self._uow.event_rows() if row.aggregate_id == aggregate_id]
        rows.sort(key=lambda row: row.occurred_at)
        return [event_from_dict(row.event_data) for row in rows]
