"""Unit of work port (transaction boundary)."""

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Awaitable, Callable, Optional, Type, TypeVar

from domain.user.core.ports.event_repository import IEventRepository
from domain.user.core.ports.user_repository import IUserRepository

T = TypeVar("T")


class IUnitOfWork(ABC):
    """One database transaction and the repositories bound to it.

    Used as an async context manager: a clean exit commits, an exception
    rolls back and propagates. Resources are released either way.

    Examples:
        >>> async with uow_factory() as uow:
        ...     await uow.users.save(user)
        ...     await uow.events.publish(UserRegistered(user.id, str(user.email)))
    """

    users: IUserRepository
    events: IEventRepository

    @abstractmethod
    async def __aenter__(self) -> "IUnitOfWork":
        pass

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        try:
            if exc_type is None:
                await self.commit()
            else:
                await self.rollback()
        finally:
            await self.close()

    @abstractmethod
    async def commit(self) -> None:
        pass

    @abstractmethod
    async def rollback(self) -> None:
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the transaction handle; repositories become unusable."""
        pass


UnitOfWorkFactory = Callable[[], IUnitOfWork]


async def run_in_transaction(
    uow_factory: UnitOfWorkFactory,
    fn: Callable[[IUnitOfWork], Awaitable[T]],
) -> T:
    """Run ``fn`` inside one unit of work and return its value.

    Any exception raised by ``fn`` rolls the whole transaction back.
    """
    async with uow_factory() as uow:
        return await fn(uow)
