"""Authenticate user command."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from application.user.event_publishing import publish_best_effort
from domain.user.core.entities.user import User
from domain.user.core.events import UserLoggedIn
from domain.user.core.exceptions.user_errors import (
    DatabaseError,
    InvalidCredentialsError,
    InvalidEmailError,
    InvalidPasswordError,
)
from domain.user.core.ports.event_repository import IEventRepository
from domain.user.core.ports.user_repository import IUserRepository
from domain.user.core.value_objects.email import Email
from domain.user.core.value_objects.password import Password


@dataclass(frozen=True)
class AuthenticateUserPayload:
    """Raw login input."""

    email: str
    password: str


@dataclass(frozen=True)
class AuthenticateUserResult:
    user: User


@dataclass
class AuthenticateUserCommand:
    """Command to verify email/password credentials and record the login.

    Every failure is reported as the same InvalidCredentialsError, and once
    the email parses exactly one bcrypt comparison runs whether or not the
    user exists, so neither the error nor the latency tells an unknown
    email from a wrong password.

    Examples:
        >>> async with uow_factory() as uow:
        ...     command = AuthenticateUserCommand(uow.users, uow.events)
        ...     result = await command.execute(
        ...         AuthenticateUserPayload("test@example.com", "validpassword123")
        ...     )
        >>> result.user.last_login is not None
        True
    """

    user_repository: IUserRepository
    event_repository: Optional[IEventRepository] = None
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    async def execute(self, payload: AuthenticateUserPayload) -> AuthenticateUserResult:
        """Execute authentication command.

        Args:
            payload: Email and plaintext password

        Returns:
            Result holding the user with last_login updated and persisted

        Raises:
            InvalidCredentialsError: Bad email format, unknown user or wrong
                password
            DatabaseError: Lookup or save failed, or the stored user is corrupt
        """
        try:
            email = Email.create(payload.email)
        except InvalidEmailError:
            raise InvalidCredentialsError() from None

        if not payload.password or not isinstance(payload.password, str):
            raise InvalidCredentialsError()

        try:
            user = await self.user_repository.find_by_email(email)
        except (InvalidEmailError, InvalidPasswordError) as e:
            # Corrupt stored row
            raise DatabaseError(f"Failed to load user: {e}", e) from e

        if user is None:
            await Password.verify_dummy(payload.password)
            self.logger.info("Login failed", extra={"reason": "unknown_email"})
            raise InvalidCredentialsError()

        if not await user.authenticate(payload.password):
            self.logger.info(
                "Login failed", extra={"reason": "wrong_password", "user_id": user.id}
            )
            raise InvalidCredentialsError()

        saved_user = await self.user_repository.save(user.update_last_login())

        self.logger.info("User logged in", extra={"user_id": saved_user.id})

        await publish_best_effort(
            self.event_repository,
            UserLoggedIn(user_id=saved_user.id),
            self.logger,
        )

        return AuthenticateUserResult(user=saved_user)
