from __future__ import annotations

import logging
import os

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def setup_logging(level: str | int | None = None) -> None:
    """
    Root logging for CLI and server runs: one line per event with logger name.
    The level comes from the argument, then $EURLEX_LOG_LEVEL, then INFO.
    """
    if level is None:
        level = os.getenv("EURLEX_LOG_LEVEL", "INFO")

    if isinstance(level, str):
        level = _LEVELS.get(level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
    # aiohttp logs every connection reset at DEBUG; keep our own pages readable.
    logging.getLogger("aiohttp").setLevel(max(level, logging.INFO))
