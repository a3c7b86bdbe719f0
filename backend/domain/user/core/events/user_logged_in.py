"""UserLoggedIn domain event."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar

from .base import DomainEvent, utc_now


@dataclass(frozen=True)
class UserLoggedIn(DomainEvent):
    """Domain event: a user authenticated successfully.

    Attributes:
        user_id: Id of the authenticated user (the aggregate id)
        occurred_at: When the login happened (UTC)
    """

    event_name: ClassVar[str] = "UserLoggedIn"

    user_id: str
    occurred_at: datetime = field(default_factory=utc_now)

    @property
    def aggregate_id(self) -> str:
        return self.user_id
