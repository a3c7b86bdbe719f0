"""Email value object."""

import re
from dataclasses import dataclass
from typing import Any

from domain.user.core.exceptions.user_errors import InvalidEmailError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MAX_EMAIL_LENGTH = 255


@dataclass(frozen=True)
class Email:
    """Validated, normalized email address.

    The stored value is trimmed and lower-cased, so two addresses that differ
    only by case or surrounding whitespace are equal.

    Examples:
        >>> email = Email.create("  Test@Example.com ")
        >>> str(email)
        'test@example.com'
        >>> email == Email.create("test@example.com")
        True

    Raises:
        InvalidEmailError: If the value is empty, not a string, malformed
            or longer than 255 characters
    """

    value: str

    def __post_init__(self) -> None:
        """Normalize and validate."""
        if not self.value or not isinstance(self.value, str):
            raise InvalidEmailError()

        normalized = self.value.strip().lower()
        if not EMAIL_PATTERN.match(normalized) or len(normalized) > MAX_EMAIL_LENGTH:
            raise InvalidEmailError()

        object.__setattr__(self, "value", normalized)

    @classmethod
    def create(cls, raw: Any) -> "Email":
        """Build an Email from untrusted input."""
        return cls(raw)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Email('{self.value}')"
