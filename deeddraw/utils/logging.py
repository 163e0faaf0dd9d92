"""
Logging setup.

Configures loguru logger with stderr and rotating file sinks.
"""

import sys

from loguru import logger

from deeddraw.config.settings import settings


def setup_logging(log_file: str | None = None, level: str | None = None) -> None:
    """Configure logger with file rotation."""
    level = (level or settings.log_level).upper()

    logger.remove()
    logger.add(sys.stderr, level=level)
    logger.add(
        log_file or settings.log_file,
        rotation="1 day",
        retention="7 days",
        level=level,
        encoding="utf-8",
    )

    logger.info("Starting DeedDraw ledger...")
