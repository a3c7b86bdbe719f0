"""Event repository port (interface)."""

from abc import ABC, abstractmethod
from typing import List

from domain.user.core.events import UserEvent


class IEventRepository(ABC):
    """Append-only log of user domain events.

    Bound to a single transaction, like IUserRepository.
    """

    @abstractmethod
    async def publish(self, event: UserEvent) -> None:
        """Append one event.

        The stored record carries a generated id, the event's aggregate id,
        its name, the serialized payload, occurred_at and the append time.

        Raises:
            DatabaseError: If the event cannot be recorded
        """
        pass

    @abstractmethod
    async def find_by_aggregate_id(self, aggregate_id: str) -> List[UserEvent]:
        """Return all events of one aggregate, oldest first.

        Raises:
            DatabaseError: If the read fails
        """
        pass
