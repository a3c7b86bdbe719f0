"""User entity - aggregate root."""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from domain.user.core.value_objects.email import Email
from domain.user.core.value_objects.password import Password
from domain.user.core.value_objects.user_id import UserId


@dataclass(frozen=True)
class UserPersistenceData:
    """Flat user state as stored by repositories (includes the hash)."""

    id: str
    email: str
    password_hash: str
    created_at: datetime
    updated_at: datetime
    last_login: Optional[datetime] = None


@dataclass(frozen=True)
class User:
    """User aggregate root.

    Immutable: lifecycle operations return a new instance, and callers
    persist the returned user.

    Invariants:
    - user_id is generated once and never changes
    - last_login cannot be before created_at
    - email and password are replaced only through lifecycle operations

    Examples:
        >>> email = Email.create("test@example.com")
        >>> password = await Password.create("validpassword123")
        >>> user = User.create(email, password)
        >>> user.last_login is None
        True

        >>> logged_in = user.update_last_login()
        >>> logged_in.last_login is not None
        True
        >>> logged_in.user_id == user.user_id
        True
    """

    user_id: UserId
    email: Email
    password: Password
    created_at: datetime
    updated_at: datetime
    last_login: Optional[datetime] = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.last_login and self.last_login < self.created_at:
            raise ValueError(
                "last_login cannot be before created_at: "
                f"{self.last_login} < {self.created_at}"
            )

    @staticmethod
    def create(email: Email, password: Password) -> "User":
        """Factory method to create a new user.

        Args:
            email: Validated email
            password: Hashed password

        Returns:
            New User with a fresh id and no login recorded
        """
        now = datetime.now(timezone.utc)
        return User(
            user_id=UserId.generate(),
            email=email,
            password=password,
            created_at=now,
            updated_at=now,
            last_login=None,
        )

    @staticmethod
    def from_persistence(data: UserPersistenceData) -> "User":
        """Rebuild a user from stored state.

        The email is validated again; the hash is trusted.

        Raises:
            InvalidEmailError: If the stored email is corrupt
            InvalidPasswordError: If the stored hash is empty
            ValueError: If the stored id is not a UUID or last_login precedes
                created_at; repositories report this as DatabaseError
        """
        email = Email.create(data.email)
        password = Password.from_hash(data.password_hash)

        return User(
            user_id=UserId(data.id),
            email=email,
            password=password,
            created_at=data.created_at,
            updated_at=data.updated_at,
            last_login=data.last_login,
        )

    @property
    def id(self) -> str:
        return str(self.user_id)

    async def authenticate(self, plaintext: str) -> bool:
        """Check a candidate password against this user's hash."""
        return await self.password.verify(plaintext)

    def update_last_login(self) -> "User":
        """Record a successful login.

        Returns:
            New User with last_login and updated_at set to now
        """
        now = datetime.now(timezone.utc)
        return replace(self, last_login=now, updated_at=now)

    @property
    def details(self) -> Dict[str, Any]:
        """Public projection for API responses (no password hash)."""
        return {
            "id": self.id,
            "email": str(self.email),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "last_login": self.last_login.isoformat() if self.last_login else None,
        }

    def get_internal_state(self) -> UserPersistenceData:
        """Full state for repositories, including the password hash."""
        return UserPersistenceData(
            id=self.id,
            email=str(self.email),
            password_hash=self.password.hash,
            created_at=self.created_at,
            updated_at=self.updated_at,
            last_login=self.last_login,
        )

    def __eq__(self, other: object) -> bool:
        """Equality based on user_id (aggregate identity)."""
        if not isinstance(other, User):
            return False
        return self.user_id == other.user_id

    def __hash__(self) -> int:
        """Hash based on user_id (aggregate identity)."""
        return hash(self.user_id)
