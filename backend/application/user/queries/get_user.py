"""Get user query."""

from dataclasses import dataclass

from domain.user.core.entities.user import User
from domain.user.core.exceptions.user_errors import UserNotFoundError
from domain.user.core.ports.user_repository import IUserRepository
from domain.user.core.value_objects.email import Email
from domain.user.core.value_objects.user_id import UserId


@dataclass
class GetUserQuery:
    """Query to get a user by identifier.

    Unlike login, absence here is an error the caller may report as such.

    Examples:
        >>> query = GetUserQuery(uow.users)
        >>> user = await query.by_id("e4b8c9d0-1234-4678-9abc-def012345678")
        >>> user = await query.by_email("test@example.com")
    """

    repository: IUserRepository

    async def by_id(self, user_id: str) -> User:
        """Get user by id.

        Raises:
            UserNotFoundError: If no user has this id (including ids that are
                not valid UUIDs)
        """
        try:
            parsed = UserId(user_id)
        except ValueError:
            raise UserNotFoundError(user_id) from None
        return await self.repository.require_by_id(parsed)

    async def by_email(self, email: str) -> User:
        """Get user by email.

        Raises:
            InvalidEmailError: If email is malformed
            UserNotFoundError: If no user has this email
        """
        return await self.repository.require_by_email(Email.create(email))
