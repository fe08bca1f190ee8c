"""
Logging setup for feature photo resolution.

Core modules log through loguru. Third-party HTTP clients log through the
standard library and are kept at WARNING so that per-request chatter does
not drown out the resolver's own fetch and cache messages.
"""

import logging
import os
import sys
from pathlib import Path

from loguru import logger

from feature_photos.config import settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"

NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def setup_logging(
    level: str | None = None,
    log_file: Path | str | None = None,
    rotation: str = "10 MB",
    retention: str = "1 week",
) -> None:
    """
    Configure loguru sinks.

    Args:
        level: Log level; defaults to ``LOG_LEVEL``
        log_file: Optional log file; defaults to ``LOG_FILE``
        rotation: File rotation, e.g. "10 MB" or "1 day"
        retention: File retention, e.g. "1 week" or "10 files"
    """
    level = (level or settings.log_level).upper()
    log_file = log_file or settings.log_file

    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=level,
            format=FILE_FORMAT,
            rotation=rotation,
            retention=retention,
            compression="gz",
        )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug(f"Logging configured: level={level}, file={log_file or '-'}")


if os.environ.get("DISABLE_LOGGING") != "1":
    setup_logging()
