"""
Logging Setup
loguru sinks shared by all entry-point scripts
"""

import os
import sys
from typing import Optional
from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"


def configure_logging(level: str = "INFO", log_file: Optional[str] = None):
    """
    Route logs to stderr (and optionally a rotating file)

    Args:
        level: Console log level
        log_file: Optional log file path
    """
    logger.remove()

    # diagnose=False keeps local variables (private keys) out of tracebacks
    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=level,
        diagnose=False
    )

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format=FILE_FORMAT,
            level="DEBUG",
            diagnose=False
        )
