"""Loguru sink setup for entry points (CLI, demo)."""

import sys

from loguru import logger

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)


def setup_logging(level: str = "INFO", fmt: str | None = None) -> None:
    """Replace loguru's default sink with a single stderr sink.

    Library modules only log; sinks are installed by entry points.

    Args:
        level: Minimum level to emit
        fmt: Optional loguru format string
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=fmt or DEFAULT_FORMAT)
