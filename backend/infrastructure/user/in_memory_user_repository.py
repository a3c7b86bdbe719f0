"""In-memory User Repository for testing."""

from dataclasses import replace
from typing import TYPE_CHECKING, Optional

from domain.user.core.entities.user import User, UserPersistenceData
from domain.user.core.exceptions.user_errors import DatabaseError
from domain.user.core.ports.user_repository import IUserRepository
from domain.user.core.value_objects.email import Email
from domain.user.core.value_objects.user_id import UserId

if TYPE_CHECKING:
    from infrastructure.user.in_memory_unit_of_work import InMemoryUnitOfWork


class InMemoryUserRepository(IUserRepository):
    """In-memory implementation of User repository.

    Bound to one InMemoryUnitOfWork: writes are staged on it and only reach
    the shared InMemoryDatabase when the transaction commits.

    Examples:
        >>> async with InMemoryUnitOfWork(database) as uow:
        ...     await uow.users.save(user)
        ...     found = await uow.users.find_by_email(user.email)
    """

    def __init__(self, uow: "InMemoryUnitOfWork") -> None:
        self._uow = uow

    async def save(self, user: User) -> User:
        """Upsert user by id; created_at is kept from the first insert."""
        self._uow.ensure_active("save user")

        state = user.get_internal_state()
        existing = self._uow.get_user_row(state.id)

        if existing is not None:
            row = replace(
                existing,
                email=state.email,
                password_hash=state.password_hash,
                updated_at=state.updated_at,
                last_login=state.last_login,
            )
        else:
            row = state

        self._uow.staged_users[row.id] = row
        return user

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        self._uow.ensure_active("find user by ID")
        return self._to_entity(self._uow.get_user_row(str(user_id)))

    async def find_by_email(self, email: Email) -> Optional[User]:
        self._uow.ensure_active("find user by email")
        return self._to_entity(self._uow.find_user_row_by_email(str(email)))

    @staticmethod
    def _to_entity(row: Optional[UserPersistenceData]) -> Optional[User]:
        if row is None:
            return None
        try:
            return User.from_persistence(row)
        except ValueError as e:
            raise DatabaseError(f"Failed to load user {row.id!r}: {e}", e) from e
