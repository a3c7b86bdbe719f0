"""Get user events query."""

from dataclasses import dataclass
from typing import List

from domain.user.core.events import UserEvent
from domain.user.core.ports.event_repository import IEventRepository


@dataclass
class GetUserEventsQuery:
    """Replay the event history of one user, oldest first."""

    repository: IEventRepository

    async def execute(self, user_id: str) -> List[UserEvent]:
        return await self.repository.find_by_aggregate_id(user_id)
