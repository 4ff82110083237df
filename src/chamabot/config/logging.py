"""Process-wide logging setup."""

from __future__ import annotations

import logging

_QUIET_LOGGERS = ("aiogram.event", "psycopg.pool")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once at startup.

    Logs are internal diagnostics and are never sent to chat users.
    """

    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
