"""Register user command."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from application.user.event_publishing import publish_best_effort
from domain.user.core.entities.user import User
from domain.user.core.events import UserRegistered
from domain.user.core.ports.event_repository import IEventRepository
from domain.user.core.ports.user_repository import IUserRepository
from domain.user.core.value_objects.email import Email
from domain.user.core.value_objects.password import Password


@dataclass(frozen=True)
class RegisterUserPayload:
    """Raw registration input."""

    email: str
    password: str


@dataclass(frozen=True)
class RegisterUserResult:
    user: User


@dataclass
class RegisterUserCommand:
    """Command to register a new user with email and password.

    Must run inside one unit of work: any exception leaves nothing behind
    once the transaction rolls back. The UserRegistered event is best effort.

    Examples:
        >>> async with uow_factory() as uow:
        ...     command = RegisterUserCommand(uow.users, uow.events)
        ...     result = await command.execute(
        ...         RegisterUserPayload("test@example.com", "validpassword123")
        ...     )
        >>> result.user.last_login is None
        True
    """

    user_repository: IUserRepository
    event_repository: Optional[IEventRepository] = None
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    async def execute(self, payload: RegisterUserPayload) -> RegisterUserResult:
        """Execute register user command.

        Args:
            payload: Email and plaintext password

        Returns:
            Result holding the saved user

        Raises:
            InvalidEmailError: Malformed email
            InvalidPasswordError: Password outside 8-100 characters
            UserAlreadyExistsError: Email already registered
            DatabaseError: User could not be saved
        """
        email = Email.create(payload.email)
        password = await Password.create(payload.password)

        await self.user_repository.assert_email_unique(email)

        user = User.create(email, password)
        saved_user = await self.user_repository.save(user)

        self.logger.info("User registered", extra={"user_id": saved_user.id})

        await publish_best_effort(
            self.event_repository,
            UserRegistered(user_id=saved_user.id, email=str(saved_user.email)),
            self.logger,
        )

        return RegisterUserResult(user=saved_user)
