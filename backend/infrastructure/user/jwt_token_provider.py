"""JWT session token provider implementation."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping, Optional

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError as JWTError

from domain.user.auth.ports.token_provider import ITokenProvider, TokenClaims
from infrastructure.config import MIN_JWT_SECRET_LENGTH, get_jwt_algorithm, get_jwt_secret

logger = logging.getLogger(__name__)

TOKEN_LIFETIME_SHORT = timedelta(hours=24)
TOKEN_LIFETIME_LONG = timedelta(days=30)


class JWTTokenProvider(ITokenProvider):
    """HMAC-signed JWT session tokens.

    Claims:
    - sub: user id
    - email: normalized email
    - iat / exp: issue and expiry timestamps

    Lifetimes: 24 hours by default, 30 days with ``remember=True``.

    Environment Variables:
    - JWT_SECRET: signing secret, at least 32 characters
    - JWT_ALGORITHM: signing algorithm (default HS256)

    Examples:
        >>> provider = JWTTokenProvider(secret="x" * 32)
        >>> token = provider.generate_token({"id": "uuid", "email": "a@b.co"})
        >>> provider.verify_token(token).email
        'a@b.co'
        >>> provider.verify_token("garbage") is None
        True
    """

    def __init__(self, secret: Optional[str] = None, algorithm: Optional[str] = None):
        """Initialize provider.

        Args:
            secret: Signing secret (defaults to env JWT_SECRET)
            algorithm: Signing algorithm (defaults to env JWT_ALGORITHM)

        Raises:
            ValueError: If the secret is missing or too short
        """
        self.secret = secret if secret is not None else get_jwt_secret()
        self.algorithm = algorithm or get_jwt_algorithm()

        if len(self.secret) < MIN_JWT_SECRET_LENGTH:
            raise ValueError(
                f"JWT secret must be at least {MIN_JWT_SECRET_LENGTH} characters long"
            )

    def generate_token(self, details: Mapping[str, Any], remember: bool = False) -> str:
        now = datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "sub": details["id"],
            "email": details["email"],
            "iat": now,
            "exp": now + self._lifetime(remember),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Optional[TokenClaims]:
        try:
            payload: Dict[str, Any] = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except ExpiredSignatureError:
            logger.debug("Session token expired")
            return None
        except JWTError as e:
            logger.debug(f"Session token rejected: {e}")
            return None

        return TokenClaims(
            user_id=str(payload["sub"]),
            email=str(payload.get("email", "")),
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )

    def get_token_expiration(self, remember: bool = False) -> datetime:
        return datetime.now(timezone.utc) + self._lifetime(remember)

    def get_cookie_max_age(self, remember: bool = False) -> int:
        return int(self._lifetime(remember).total_seconds() * 1000)

    @staticmethod
    def _lifetime(remember: bool) -> timedelta:
        return TOKEN_LIFETIME_LONG if remember else TOKEN_LIFETIME_SHORT
