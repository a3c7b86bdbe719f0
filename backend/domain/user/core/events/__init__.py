"""Domain events for the user domain.

``UserEvent`` is the closed set of events this domain emits. Stored events
are turned back into instances with ``event_from_dict``, which dispatches on
the ``event_name`` discriminant.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Type, Union

from .base import DomainEvent
from .user_logged_in import UserLoggedIn
from .user_registered import UserRegistered

UserEvent = Union[UserRegistered, UserLoggedIn]

EVENT_TYPES: Dict[str, Type[DomainEvent]] = {
    UserRegistered.event_name: UserRegistered,
    UserLoggedIn.event_name: UserLoggedIn,
}


def event_from_dict(data: Mapping[str, Any]) -> UserEvent:
    """Rebuild an event from its serialized form.

    Raises:
        ValueError: If event_name is missing or unknown
    """
    name = data.get("event_name")
    event_type = EVENT_TYPES.get(name) if isinstance(name, str) else None
    if event_type is None:
        raise ValueError(f"Unknown event_name: {name!r}")

    fields = {k: v for k, v in data.items() if k != "event_name"}
    occurred_at = fields.get("occurred_at")
    if isinstance(occurred_at, str):
        occurred_at = datetime.fromisoformat(occurred_at)
    if isinstance(occurred_at, datetime) and occurred_at.tzinfo is None:
        occurred_at = occurred_at.replace(tzinfo=timezone.utc)
    if occurred_at is not None:
        fields["occurred_at"] = occurred_at

    return event_type(**fields)  # type: ignore[return-value]


__all__ = [
    "DomainEvent",
    "EVENT_TYPES",
    "UserEvent",
    "UserLoggedIn",
    "UserRegistered",
    "event_from_dict",
]
