"""
Logging setup for the coupon engine.

Library modules only ever call ``logging.getLogger(__name__)``; the
application or script that embeds the engine calls ``setup_logging()`` once.
"""

import logging
import sys

from couponengine.core.config import settings


def setup_logging(level: str | None = None):
    """
    Configure the root logger for scripts and services embedding the engine.

    Args:
        level: log level name, defaults to ``settings.LOG_LEVEL``.
    """
    logging.basicConfig(
        level=getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO),
        format=settings.LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
