"""
Logging utility with loguru.
Provides structured logging with file rotation.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from bizassist.config.settings import settings


def setup_logger(level: Optional[str] = None, log_dir: Optional[Path] = None):
    """
    Configure loguru logger with file and console outputs.
    """
    # Remove default handler
    logger.remove()

    logger.add(
        sys.stdout,
        colorize=True,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level or settings.log_level,
    )

    log_dir = log_dir or settings.resolved_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_dir / "app.log",
        rotation="10 MB",
        retention="1 week",
        compression="zip",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        level="DEBUG",
    )

    logger.info("Logger initialized")
    return logger
