"""Authentication service: transaction boundary for the user features.

Each call opens exactly one unit of work, runs one command or query inside
it, and translates the outcome for a transport layer:

- expected business failures (validation, unknown user, duplicate email,
  bad credentials) come back as ``Failure(error)``;
- infrastructure faults (``DatabaseError``) and unexpected exceptions
  propagate after the transaction has rolled back.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Awaitable, Callable, List, Optional, TypeVar

from application.user.commands.authenticate_user import (
    AuthenticateUserCommand,
    AuthenticateUserPayload,
)
from application.user.commands.register_user import (
    RegisterUserCommand,
    RegisterUserPayload,
)
from application.user.queries.get_user import GetUserQuery
from application.user.queries.get_user_events import GetUserEventsQuery
from domain.shared.result import Failure, Result, Success
from domain.user.auth.ports.token_provider import ITokenProvider
from domain.user.core.entities.user import User
from domain.user.core.events import UserEvent
from domain.user.core.exceptions.user_errors import DatabaseError, UserDomainError
from domain.user.core.ports.unit_of_work import (
    IUnitOfWork,
    UnitOfWorkFactory,
    run_in_transaction,
)

T = TypeVar("T")


@dataclass(frozen=True)
class AuthSession:
    """Outcome of a successful login."""

    user: User
    token: str
    expires_at: datetime


class AuthService:
    """Runs user features inside transactions and issues session tokens.

    Examples:
        >>> service = AuthService(uow_factory, token_provider)
        >>> result = await service.register("test@example.com", "validpassword123")
        >>> result.is_success
        True
        >>> session = (await service.login("test@example.com", "validpassword123")).unwrap()
        >>> session.token
        'eyJ...'
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        token_provider: Optional[ITokenProvider] = None,
        logger: Optional[logging.Logger] = None,
        publish_events: bool = True,
    ) -> None:
        """Initialize service.

        Args:
            uow_factory: Opens one unit of work per call
            token_provider: Required for login, which issues a session token
            logger: Injected logger (defaults to this module's logger)
            publish_events: Pass the event repository to commands
        """
        self._uow_factory = uow_factory
        self._token_provider = token_provider
        self._logger = logger or logging.getLogger(__name__)
        self._publish_events = publish_events

    async def register(self, email: str, password: str) -> Result[User, UserDomainError]:
        """Register a user."""

        async def _run(uow: IUnitOfWork) -> User:
            command = RegisterUserCommand(
                user_repository=uow.users,
                event_repository=uow.events if self._publish_events else None,
                logger=self._logger,
            )
            result = await command.execute(RegisterUserPayload(email=email, password=password))
            return result.user

        return await self._capture("register", _run)

    async def login(
        self, email: str, password: str, remember: bool = False
    ) -> Result[AuthSession, UserDomainError]:
        """Authenticate credentials and issue a session token.

        Raises:
            RuntimeError: If the service has no token provider
        """
        if self._token_provider is None:
            raise RuntimeError("AuthService.login requires a token provider")

        async def _run(uow: IUnitOfWork) -> User:
            command = AuthenticateUserCommand(
                user_repository=uow.users,
                event_repository=uow.events if self._publish_events else None,
                logger=self._logger,
            )
            result = await command.execute(
                AuthenticateUserPayload(email=email, password=password)
            )
            return result.user

        outcome = await self._capture("login", _run)
        if isinstance(outcome, Failure):
            return outcome

        user = outcome.value
        token = self._token_provider.generate_token(user.details, remember=remember)
        expires_at = self._token_provider.get_token_expiration(remember=remember)
        return Success(AuthSession(user=user, token=token, expires_at=expires_at))

    async def get_user(self, user_id: str) -> Result[User, UserDomainError]:
        """Load a user by id; unknown ids fail with UserNotFoundError."""

        async def _run(uow: IUnitOfWork) -> User:
            return await GetUserQuery(uow.users).by_id(user_id)

        return await self._capture("get_user", _run)

    async def get_events(self, user_id: str) -> List[UserEvent]:
        """Event history of one user, oldest first."""

        async def _run(uow: IUnitOfWork) -> List[UserEvent]:
            return await GetUserEventsQuery(uow.events).execute(user_id)

        return await run_in_transaction(self._uow_factory, _run)

    async def _capture(
        self, operation: str, fn: Callable[[IUnitOfWork], Awaitable[T]]
    ) -> Result[T, UserDomainError]:
        try:
            value = await run_in_transaction(self._uow_factory, fn)
        except DatabaseError as e:
            self._logger.error(
                "Persistence failure",
                extra={"operation": operation, "error": str(e)},
                exc_info=True,
            )
            raise
        except UserDomainError as e:
            self._logger.info(
                "Operation rejected",
                extra={"operation": operation, "code": e.code},
            )
            return Failure(e)
        return Success(value)
