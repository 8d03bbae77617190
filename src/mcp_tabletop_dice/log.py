"""Logging setup.

Console output goes to stderr so it never mixes with the stdio MCP transport.
"""
from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger


DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level:<8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
    "{level:<8} | "
    "{name}:{function}:{line} | "
    "{message}"
)


def setup_logging(
    level: str = "INFO",
    log_path: Optional[Path] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Configure loguru sinks.

    Args:
        level: console level; ``LOG_LEVEL`` in the environment wins
        log_path: directory for the rotating file log, skipped when None
        rotation: file rotation policy, e.g. "10 MB" or "1 day"
        retention: how long rotated files are kept, e.g. "7 days"
    """
    logger.remove()

    env_level = os.environ.get("LOG_LEVEL", level).upper()
    logger.add(
        sys.stderr,
        level=env_level,
        format=DEFAULT_FORMAT,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    if log_path:
        log_path = Path(log_path)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / "dice_{time:YYYY-MM-DD}.log",
            level="DEBUG",
            format=FILE_FORMAT,
            rotation=rotation,
            retention=retention,
            compression="zip",
            encoding="utf-8",
        )
