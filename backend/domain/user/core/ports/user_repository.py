"""User repository port (interface)."""

from abc import ABC, abstractmethod
from typing import Optional

from domain.user.core.entities.user import User
from domain.user.core.exceptions.user_errors import (
    UserAlreadyExistsError,
    UserNotFoundError,
)
from domain.user.core.value_objects.email import Email
from domain.user.core.value_objects.user_id import UserId


class IUserRepository(ABC):
    """Repository interface for User aggregate.

    Implementations are bound to a single transaction and must not be used
    after that transaction ends.

    Examples:
        >>> async with uow_factory() as uow:
        ...     user = await uow.users.require_by_email(Email.create("a@b.co"))
    """

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save user (create or update).

        Upserts by id: an existing row gets email, password hash, updated_at
        and last_login rewritten; a new row is inserted with created_at.

        Args:
            user: User entity to persist

        Returns:
            The same user

        Raises:
            DatabaseError: If the write fails
        """
        pass

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find user by id.

        Returns:
            User entity if found, None otherwise

        Raises:
            DatabaseError: If the read fails
            InvalidEmailError, InvalidPasswordError: If the stored row is corrupt
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find user by normalized email.

        Returns:
            User entity if found, None otherwise

        Raises:
            DatabaseError: If the read fails
            InvalidEmailError, InvalidPasswordError: If the stored row is corrupt
        """
        pass

    async def require_by_id(self, user_id: UserId) -> User:
        """Find user by id or raise UserNotFoundError."""
        user = await self.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        return user

    async def require_by_email(self, email: Email) -> User:
        """Find user by email or raise UserNotFoundError."""
        user = await self.find_by_email(email)
        if user is None:
            raise UserNotFoundError(str(email))
        return user

    async def assert_email_unique(self, email: Email) -> None:
        """Raise UserAlreadyExistsError if the email is taken.

        Registration precondition. Storage keeps its own unique index on email
        as well.
        """
        existing = await self.find_by_email(email)
        if existing is not None:
            raise UserAlreadyExistsError(str(email))
