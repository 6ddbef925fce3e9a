"""Logging setup for the service process."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_configured = False


def configure_logging(level: str | int = "INFO") -> None:
    """Install a single stream handler on the root logger.

    Calling this more than once only adjusts the level.
    """
    global _configured
    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)
    if _configured:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    _configured = True
