"""Password value object."""

import asyncio
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

import bcrypt

from domain.user.core.exceptions.user_errors import InvalidPasswordError

BCRYPT_ROUNDS = 12
# bcrypt ignores everything past 72 bytes; recent releases refuse longer input
BCRYPT_MAX_BYTES = 72

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 100

_DUMMY_PLAINTEXT = "timing-equalization-placeholder"


def _encode(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]


def _hash(plaintext: str, rounds: int) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_encode(plaintext), salt).decode("utf-8")


def _check(plaintext: str, hashed: str) -> bool:
    return bcrypt.checkpw(_encode(plaintext), hashed.encode("utf-8"))


@lru_cache(maxsize=None)
def _dummy_hash(rounds: int) -> str:
    """Fixed hash used when there is no stored hash to compare against."""
    return _hash(_DUMMY_PLAINTEXT, rounds)


# Built at import so the first unknown-user login runs a single comparison
_dummy_hash(BCRYPT_ROUNDS)


def _dummy_check(plaintext: str, rounds: int) -> None:
    _check(plaintext, _dummy_hash(rounds))


@dataclass(frozen=True)
class Password:
    """One-way hashed password.

    Holds only a bcrypt hash; the plaintext is never stored. Hashing and
    verification run in a worker thread so the event loop stays responsive.

    Examples:
        >>> password = await Password.create("validpassword123")
        >>> await password.verify("validpassword123")
        True
        >>> await password.verify("wrong")
        False

        >>> stored = Password.from_hash(password.hash)
        >>> stored == password
        True
    """

    value: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.value or not isinstance(self.value, str):
            raise InvalidPasswordError("Password hash is required")

    @classmethod
    async def create(cls, plaintext: Any) -> "Password":
        """Validate plaintext and hash it.

        Args:
            plaintext: Candidate password, 8 to 100 characters

        Returns:
            Password holding the new salted hash

        Raises:
            InvalidPasswordError: If plaintext is empty, not a string, or
                outside the allowed length
        """
        if not plaintext or not isinstance(plaintext, str):
            raise InvalidPasswordError("Password is required")

        if len(plaintext) < MIN_PASSWORD_LENGTH:
            raise InvalidPasswordError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )

        if len(plaintext) > MAX_PASSWORD_LENGTH:
            raise InvalidPasswordError(
                f"Password must be less than {MAX_PASSWORD_LENGTH} characters"
            )

        hashed = await asyncio.to_thread(_hash, plaintext, BCRYPT_ROUNDS)
        return cls(hashed)

    @classmethod
    def from_hash(cls, hashed: Any) -> "Password":
        """Rebuild from a stored hash.

        Storage is trusted: the hash format is not checked beyond being a
        non-empty string.
        """
        return cls(hashed)

    @property
    def hash(self) -> str:
        return self.value

    async def verify(self, plaintext: Any) -> bool:
        """Check plaintext against the stored hash.

        Never raises: empty input, non-string input and malformed stored
        hashes all yield False.
        """
        if not plaintext or not isinstance(plaintext, str):
            return False

        try:
            return await asyncio.to_thread(_check, plaintext, self.value)
        except Exception:
            return False

    @staticmethod
    async def verify_dummy(plaintext: Any) -> None:
        """Run one comparison of real-verification cost and discard it.

        Called when no user matched, so that the unknown-user path costs the
        same as a wrong password.
        """
        candidate = plaintext if isinstance(plaintext, str) else ""
        try:
            await asyncio.to_thread(_dummy_check, candidate, BCRYPT_ROUNDS)
        except Exception:
            return

    def __repr__(self) -> str:
        return "Password('***')"
