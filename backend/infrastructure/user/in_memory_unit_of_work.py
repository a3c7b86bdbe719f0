"""In-memory unit of work for testing and local runs.

``InMemoryDatabase`` plays the role of the database server: it holds the
committed ``users`` rows and the ``domain_events`` log. Each
``InMemoryUnitOfWork`` stages its writes privately and applies them in one
step at commit, so concurrent transactions never see each other's
uncommitted state and a rollback leaves no trace.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from domain.user.core.entities.user import UserPersistenceData
from domain.user.core.exceptions.user_errors import DatabaseError
from domain.user.core.ports.unit_of_work import IUnitOfWork
from infrastructure.user.in_memory_event_repository import (
    InMemoryEventRepository,
    StoredEvent,
)
from infrastructure.user.in_memory_user_repository import InMemoryUserRepository

logger = logging.getLogger(__name__)


@dataclass
class InMemoryDatabase:
    """Committed state shared by all transactions.

    Examples:
        >>> database = InMemoryDatabase()
        >>> async with InMemoryUnitOfWork(database) as uow:
        ...     await uow.users.save(user)
        >>> database.count_users()
        1
    """

    users: Dict[str, UserPersistenceData] = field(default_factory=dict)
    domain_events: List[StoredEvent] = field(default_factory=list)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    def count_users(self) -> int:
        return len(self.users)

    def count_events(self) -> int:
        return len(self.domain_events)

    def clear(self) -> None:
        """Drop all rows. Useful for test cleanup."""
        self.users.clear()
        self.domain_events.clear()


class InMemoryUnitOfWork(IUnitOfWork):
    """Transaction over an InMemoryDatabase.

    Reads see committed rows overlaid with this transaction's own staged
    writes. Commit re-checks the unique email constraint against committed
    rows before applying anything.
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database
        self.staged_users: Dict[str, UserPersistenceData] = {}
        self.staged_events: List[StoredEvent] = []
        self._active = False
        self.users = InMemoryUserRepository(self)
        self.events = InMemoryEventRepository(self)

    async def __aenter__(self) -> "InMemoryUnitOfWork":
        self._active = True
        return self

    @property
    def is_active(self) -> bool:
        return self._active

    def ensure_active(self, operation: str) -> None:
        """Reject repository use outside the transaction's lifetime."""
        if not self._active:
            raise DatabaseError(f"Failed to {operation}: transaction is not active")

    # ── row access used by the repositories ──────────────────

    def get_user_row(self, user_id: str) -> Optional[UserPersistenceData]:
        if user_id in self.staged_users:
            return self.staged_users[user_id]
        return self.database.users.get(user_id)

    def find_user_row_by_email(self, email: str) -> Optional[UserPersistenceData]:
        for row in self.staged_users.values():
            if row.email == email:
                return row
        for row in self.database.users.values():
            if row.email == email and row.id not in self.staged_users:
                return row
        return None

    def event_rows(self) -> List[StoredEvent]:
        return [*self.database.domain_events, *self.staged_events]

    # ── transaction control ──────────────────────────────────

    async def commit(self) -> None:
        self.ensure_active("commit transaction")

        async with self.database.lock:
            for row in self.staged_users.values():
                for other in self.database.users.values():
                    if other.email == row.email and other.id != row.id:
                        raise DatabaseError(
                            "Failed to commit transaction: "
                            f"duplicate key on users.email ({row.email})"
                        )

            self.database.users.update(self.staged_users)
            self.database.domain_events.extend(self.staged_events)

        logger.debug(
            "Transaction committed",
            extra={
                "users_written": len(self.staged_users),
                "events_written": len(self.staged_events),
            },
        )
        self._reset()

    async def rollback(self) -> None:
        if self.staged_users or self.staged_events:
            logger.debug(
                "Transaction rolled back",
                extra={
                    "users_discarded": len(self.staged_users),
                    "events_discarded": len(self.staged_events),
                },
            )
        self._reset()

    async def close(self) -> None:
        self._reset()
        self._active = False

    def _reset(self) -> None:
        self.staged_users = {}
        self.staged_events = []
