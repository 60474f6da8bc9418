"""
Loguru setup for the API process.
"""

from __future__ import annotations

import os
import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def configure_logging() -> None:
    logger.remove()
    logger.add(
        sink=sys.stderr,
        level=log_level(),
        format=LOG_FORMAT,
        colorize=True,
    )
