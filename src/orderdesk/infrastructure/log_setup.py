"""Logging setup for the command-line entry point."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """Send ``orderdesk`` log records to stderr at *level*.

    Safe to call more than once; only one handler is ever installed.
    """
    logger = logging.getLogger("orderdesk")
    logger.setLevel(level)
    if not any(getattr(h, "_orderdesk", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._orderdesk = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
