"""Session token provider port (interface)."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class TokenClaims:
    """Claims carried by a verified session token."""

    user_id: str
    email: str
    issued_at: datetime
    expires_at: datetime


class ITokenProvider(ABC):
    """Issues and verifies session tokens for authenticated users.

    Two lifetimes exist: a short one for regular logins and a long one when
    the user asked to be remembered.

    Examples:
        >>> token = provider.generate_token(user.details, remember=True)
        >>> claims = provider.verify_token(token)
        >>> claims.user_id == user.id
        True
    """

    @abstractmethod
    def generate_token(self, details: Mapping[str, Any], remember: bool = False) -> str:
        """Sign a token for a user's public details (needs ``id`` and ``email``)."""
        pass

    @abstractmethod
    def verify_token(self, token: str) -> Optional[TokenClaims]:
        """Return the token's claims, or None if invalid or expired."""
        pass

    @abstractmethod
    def get_token_expiration(self, remember: bool = False) -> datetime:
        """Expiry of a token issued now."""
        pass

    @abstractmethod
    def get_cookie_max_age(self, remember: bool = False) -> int:
        """Cookie lifetime in milliseconds matching the token lifetime."""
        pass
