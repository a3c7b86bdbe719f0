"""Best-effort publication of user domain events."""

import logging
from typing import Optional

from domain.user.core.events import UserEvent
from domain.user.core.ports.event_repository import IEventRepository


async def publish_best_effort(
    event_repository: Optional[IEventRepository],
    event: UserEvent,
    logger: logging.Logger,
) -> bool:
    """Publish an event without letting failures escape.

    The event log is a side channel: a failed append is logged and the
    caller's primary write stands.

    Args:
        event_repository: Repository bound to the current transaction, or None
            to skip publication
        event: Event to append
        logger: Where failures are reported

    Returns:
        True if the event was recorded, False if skipped or failed
    """
    if event_repository is None:
        return False

    try:
        await event_repository.publish(event)
    except Exception as e:
        logger.error(
            "Failed to publish domain event",
            extra={
                "event_name": event.event_name,
                "aggregate_id": event.aggregate_id,
                "error": str(e),
            },
            exc_info=True,
        )
        return False

    logger.debug(
        "Domain event published",
        extra={"event_name": event.event_name, "aggregate_id": event.aggregate_id},
    )
    return True
