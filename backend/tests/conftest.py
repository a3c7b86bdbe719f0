"""Shared test fixtures.

Loads ``.env`` / ``.env.test`` so integration tests can reach a real
database, and lowers the bcrypt cost for every test unless a test raises it
again itself.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

import pytest
from dotenv import load_dotenv

from domain.user.core.entities.user import User
from domain.user.core.value_objects import password as password_module
from domain.user.core.value_objects.email import Email
from domain.user.core.value_objects.password import Password

# Load .env first (default environment variables)
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

# Load .env.test for integration tests (overrides .env values)
env_test_path = Path(__file__).parent.parent / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path, override=True)

FAST_BCRYPT_ROUNDS = 4


class UserBuilder:
    """Fluent builder for User aggregates in tests.

    Examples:
        >>> user = await UserBuilder().with_email("a@b.io").build()
    """

    DEFAULT_EMAIL = "test@example.com"
    DEFAULT_PASSWORD = "defaultpassword123"

    def __init__(self) -> None:
        self._email = self.DEFAULT_EMAIL
        self._password = self.DEFAULT_PASSWORD
        self._last_login: Optional[datetime] = None

    def with_email(self, email: str) -> "UserBuilder":
        self._email = email
        return self

    def with_password(self, password: str) -> "UserBuilder":
        self._password = password
        return self

    def with_last_login(self, last_login: datetime) -> "UserBuilder":
        self._last_login = last_login
        return self

    async def build(self) -> User:
        user = User.create(Email.create(self._email), await Password.create(self._password))
        if self._last_login is not None:
            user = User(
                user_id=user.user_id,
                email=user.email,
                password=user.password,
                created_at=min(user.created_at, self._last_login),
                updated_at=self._last_login,
                last_login=self._last_login,
            )
        return user


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch: pytest.MonkeyPatch) -> None:
    """Use a cheap bcrypt cost; timing tests set the production cost back."""
    monkeypatch.setattr(password_module, "BCRYPT_ROUNDS", FAST_BCRYPT_ROUNDS)


@pytest.fixture
def user_builder() -> UserBuilder:
    return UserBuilder()
