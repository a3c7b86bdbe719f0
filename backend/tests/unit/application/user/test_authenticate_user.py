"""Unit tests for AuthenticateUserCommand."""

import time
from dataclasses import replace
from datetime import timedelta
from unittest.mock import AsyncMock

import bcrypt
import pytest
import pytest_asyncio

from application.user.commands.authenticate_user import (
    AuthenticateUserCommand,
    AuthenticateUserPayload,
)
from domain.user.core.events import UserLoggedIn, UserRegistered
from domain.user.core.exceptions import (
    DatabaseError,
    InvalidCredentialsError,
    InvalidEmailError,
    InvalidPasswordError,
)
from domain.user.core.value_objects import password as password_module


@pytest_asyncio.fixture
async def registered_user(uow_factory, user_builder):
    user = await user_builder.with_email("test@example.com").with_password(
        "validpassword123"
    ).build()
    async with uow_factory() as uow:
        await uow.users.save(user)
        await uow.events.publish(UserRegistered(user_id=user.id, email=str(user.email)))
    return user


async def authenticate(uow_factory, email, password):
    async with uow_factory() as uow:
        command = AuthenticateUserCommand(uow.users, uow.events)
        return await command.execute(AuthenticateUserPayload(email=email, password=password))


async def events_for(uow_factory, user_id):
    async with uow_factory() as uow:
        return await uow.events.find_by_aggregate_id(user_id)


class TestAuthenticateUser:
    """Test credential verification."""

    @pytest.mark.asyncio
    async def test_success_updates_last_login(self, uow_factory, registered_user):
        result = await authenticate(uow_factory, "test@example.com", "validpassword123")

        assert result.user.id == registered_user.id
        assert result.user.last_login is not None

        async with uow_factory() as uow:
            stored = await uow.users.require_by_id(registered_user.user_id)
        assert stored.last_login == result.user.last_login

    @pytest.mark.asyncio
    async def test_success_appends_one_logged_in_event(self, uow_factory, registered_user):
        await authenticate(uow_factory, "Test@Example.com", "validpassword123")

        events = await events_for(uow_factory, registered_user.id)
        assert [type(e) for e in events] == [UserRegistered, UserLoggedIn]

    @pytest.mark.asyncio
    async def test_last_login_strictly_increases(self, uow_factory, registered_user):
        first = await authenticate(uow_factory, "test@example.com", "validpassword123")
        time.sleep(0.002)
        second = await authenticate(uow_factory, "test@example.com", "validpassword123")

        assert second.user.last_login > first.user.last_login
        assert second.user.last_login - first.user.last_login < timedelta(seconds=5)

        events = await events_for(uow_factory, registered_user.id)
        assert sum(isinstance(e, UserLoggedIn) for e in events) == 2

    @pytest.mark.asyncio
    async def test_wrong_password(self, uow_factory, registered_user, database):
        with pytest.raises(InvalidCredentialsError):
            await authenticate(uow_factory, "test@example.com", "wrongpassword")

        assert database.users[registered_user.id].last_login is None
        events = await events_for(uow_factory, registered_user.id)
        assert not any(isinstance(e, UserLoggedIn) for e in events)

    @pytest.mark.asyncio
    async def test_unknown_email(self, uow_factory, registered_user):
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await authenticate(uow_factory, "nobody@example.com", "validpassword123")

        assert exc_info.value.message == "Invalid credentials"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email", ["invalid-email", "", "   "])
    async def test_malformed_email_is_generic_failure(self, uow_factory, email):
        with pytest.raises(InvalidCredentialsError):
            await authenticate(uow_factory, email, "validpassword123")

    @pytest.mark.asyncio
    async def test_empty_password(self, uow_factory, registered_user):
        with pytest.raises(InvalidCredentialsError):
            await authenticate(uow_factory, "test@example.com", "")

    @pytest.mark.asyncio
    async def test_unknown_email_runs_dummy_comparison(self, uow_factory, monkeypatch):
        verify_dummy = AsyncMock()
        monkeypatch.setattr(password_module.Password, "verify_dummy", verify_dummy)

        with pytest.raises(InvalidCredentialsError):
            await authenticate(uow_factory, "nobody@example.com", "validpassword123")

        verify_dummy.assert_awaited_once_with("validpassword123")

    @pytest.mark.asyncio
    async def test_save_failure_is_fatal(self, uow_factory, registered_user, database):
        with pytest.raises(DatabaseError):
            async with uow_factory() as uow:
                uow.users.save = AsyncMock(side_effect=DatabaseError("Failed to save user: boom"))
                await AuthenticateUserCommand(uow.users, uow.events).execute(
                    AuthenticateUserPayload(email="test@example.com", password="validpassword123")
                )

        assert database.users[registered_user.id].last_login is None
        events = await events_for(uow_factory, registered_user.id)
        assert not any(isinstance(e, UserLoggedIn) for e in events)

    @pytest.mark.asyncio
    async def test_corrupt_stored_hash_is_database_error(
        self, uow_factory, registered_user, database
    ):
        database.users[registered_user.id] = replace(
            database.users[registered_user.id], password_hash=""
        )

        with pytest.raises(DatabaseError, match="Failed to load user") as exc_info:
            await authenticate(uow_factory, "test@example.com", "whatever123")

        assert isinstance(exc_info.value.cause, InvalidPasswordError)
        assert exc_info.value.to_response()["error"]["code"] == "DATABASE_ERROR"

    @pytest.mark.asyncio
    async def test_corrupt_stored_email_is_database_error(self, uow_factory):
        async with uow_factory() as uow:
            uow.users.find_by_email = AsyncMock(side_effect=InvalidEmailError("Invalid email format"))
            with pytest.raises(DatabaseError) as exc_info:
                await AuthenticateUserCommand(uow.users, uow.events).execute(
                    AuthenticateUserPayload(email="test@example.com", password="validpassword123")
                )

        assert isinstance(exc_info.value.__cause__, InvalidEmailError)

    @pytest.mark.asyncio
    async def test_event_failure_keeps_login(
        self, uow_factory, registered_user, database, failing_event_repository
    ):
        async with uow_factory() as uow:
            result = await AuthenticateUserCommand(uow.users, failing_event_repository).execute(
                AuthenticateUserPayload(email="test@example.com", password="validpassword123")
            )

        assert database.users[registered_user.id].last_login == result.user.last_login
        assert len(failing_event_repository.attempts) == 1


class TestAuthenticationTiming:
    """Unknown email and wrong password must cost the same bcrypt work."""

    @pytest.fixture(autouse=True)
    def production_cost(self, monkeypatch):
        monkeypatch.setattr(password_module, "BCRYPT_ROUNDS", 12)

    @staticmethod
    async def measure(uow_factory, email, password) -> float:
        start = time.perf_counter()
        with pytest.raises(InvalidCredentialsError):
            await authenticate(uow_factory, email, password)
        return time.perf_counter() - start

    @pytest.mark.asyncio
    async def test_first_unknown_email_runs_one_comparison(self, uow_factory, monkeypatch):
        calls = []
        real_hashpw, real_checkpw = bcrypt.hashpw, bcrypt.checkpw

        def counting_hashpw(*args):
            calls.append("hashpw")
            return real_hashpw(*args)

        def counting_checkpw(*args):
            calls.append("checkpw")
            return real_checkpw(*args)

        monkeypatch.setattr(bcrypt, "hashpw", counting_hashpw)
        monkeypatch.setattr(bcrypt, "checkpw", counting_checkpw)

        await self.measure(uow_factory, "nobody@example.com", "validpassword123")

        assert calls == ["checkpw"]

    @pytest.mark.asyncio
    async def test_unknown_email_takes_hash_time(self, uow_factory):
        first = await self.measure(uow_factory, "nobody@example.com", "validpassword123")
        second = await self.measure(uow_factory, "other@example.com", "validpassword123")

        assert first > 0.05 and second > 0.05
        assert abs(first - second) / max(first, second) < 0.5

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_comparable(self, uow_factory, user_builder):
        user = await user_builder.build()
        async with uow_factory() as uow:
            await uow.users.save(user)

        unknown = min(
            [await self.measure(uow_factory, "nobody@example.com", "validpassword123") for _ in range(3)]
        )
        wrong = min(
            [await self.measure(uow_factory, "test@example.com", "wrongpassword") for _ in range(3)]
        )

        assert unknown > 0.05 and wrong > 0.05
        assert abs(unknown - wrong) / max(unknown, wrong) < 0.5
