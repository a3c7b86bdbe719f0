"""UserRegistered domain event."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar

from .base import DomainEvent, utc_now


@dataclass(frozen=True)
class UserRegistered(DomainEvent):
    """Domain event: a user registered with email and password.

    Attributes:
        user_id: Id of the new user (the aggregate id)
        email: Normalized email the user registered with
        occurred_at: When registration happened (UTC)

    Examples:
        >>> event = UserRegistered(user_id="e4b8c9d0-...", email="test@example.com")
        >>> event.event_name
        'UserRegistered'
    """

    event_name: ClassVar[str] = "UserRegistered"

    user_id: str
    email: str
    occurred_at: datetime = field(default_factory=utc_now)

    @property
    def aggregate_id(self) -> str:
        return self.user_id
