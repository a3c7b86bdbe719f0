"""Unit tests for best-effort event publication."""

import logging
from unittest.mock import AsyncMock

import pytest

from application.user.event_publishing import publish_best_effort
from domain.user.core.events import UserLoggedIn

USER_ID = "e4b8c9d0-1234-4678-9abc-def012345678"


@pytest.fixture
def logger():
    return logging.getLogger("tests.event_publishing")


class TestPublishBestEffort:
    @pytest.mark.asyncio
    async def test_publishes(self, logger):
        repository = AsyncMock()
        event = UserLoggedIn(user_id=USER_ID)

        assert await publish_best_effort(repository, event, logger) is True
        repository.publish.assert_awaited_once_with(event)

    @pytest.mark.asyncio
    async def test_no_repository(self, logger):
        assert await publish_best_effort(None, UserLoggedIn(user_id=USER_ID), logger) is False

    @pytest.mark.asyncio
    async def test_failure_is_logged_not_raised(self, logger, caplog):
        repository = AsyncMock()
        repository.publish.side_effect = RuntimeError("event store unavailable")

        with caplog.at_level(logging.ERROR, logger="tests.event_publishing"):
            published = await publish_best_effort(
                repository, UserLoggedIn(user_id=USER_ID), logger
            )

        assert published is False
        record = caplog.records[-1]
        assert record.getMessage() == "Failed to publish domain event"
        assert record.event_name == "UserLoggedIn"
        assert record.aggregate_id == USER_ID
        assert record.error == "event store unavailable"
        assert record.exc_info is not None
