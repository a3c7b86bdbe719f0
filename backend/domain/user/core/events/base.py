"""Base domain event.

Events are immutable records of facts that occurred to one aggregate.
"""

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, ClassVar, Dict


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DomainEvent:
    """Shared behaviour for user domain events.

    Concrete events declare their own fields, including ``occurred_at``
    and the aggregate id, and set the ``event_name`` discriminant.

    Raises:
        ValueError: If occurred_at is not timezone-aware.
    """

    event_name: ClassVar[str] = "DomainEvent"

    def __post_init__(self) -> None:
        """Validate event invariants."""
        occurred_at: datetime = getattr(self, "occurred_at")
        if occurred_at.tzinfo is None:
            raise ValueError("occurred_at must be timezone-aware (use UTC)")

    @property
    def aggregate_id(self) -> str:
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dict tagged with event_name."""
        data = asdict(self)
        data["occurred_at"] = data["occurred_at"].isoformat()
        data["event_name"] = self.event_name
        return data
