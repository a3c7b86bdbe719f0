"""Unit test configuration.

Unit tests run against the in-memory persistence adapters only and never
touch external services.
"""

from typing import List

import pytest

from domain.user.core.events import UserEvent
from domain.user.core.ports.event_repository import IEventRepository
from domain.user.core.ports.unit_of_work import UnitOfWorkFactory
from infrastructure.user.in_memory_unit_of_work import (
    InMemoryDatabase,
    InMemoryUnitOfWork,
)


class FailingEventRepository(IEventRepository):
    """Event repository whose writes always fail."""

    def __init__(self) -> None:
        self.attempts: List[UserEvent] = []

    async def publish(self, event: UserEvent) -> None:
        self.attempts.append(event)
        raise RuntimeError("event store unavailable")

    async def find_by_aggregate_id(self, aggregate_id: str) -> List[UserEvent]:
        return []


@pytest.fixture
def database() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def uow_factory(database: InMemoryDatabase) -> UnitOfWorkFactory:
    def factory() -> InMemoryUnitOfWork:
        return InMemoryUnitOfWork(database)

    return factory


@pytest.fixture
def failing_event_repository() -> FailingEventRepository:
    return FailingEventRepository()
