"""Logging setup for entry points (scripts, the hosting web app)."""

import logging
from typing import Iterable

from infrastructure.config import get_log_level

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

AUTH_LOGGERS = (
    "application.user",
    "infrastructure.user",
)


def configure_logging(loggers: Iterable[str] = AUTH_LOGGERS) -> None:
    """Configure root logging from LOG_LEVEL.

    Named loggers without an explicit level are aligned to LOG_LEVEL too.
    Safe to call more than once: basicConfig is a no-op when the root logger
    already has handlers.
    """
    level = getattr(logging, get_log_level(), logging.INFO)
    logging.basicConfig(level=level, format=DEFAULT_FORMAT)

    for name in loggers:
        named = logging.getLogger(name)
        if named.level == logging.NOTSET:
            named.setLevel(level)
