"""Logging configuration for the SOCKS4 client.

This module provides centralized logging configuration using Loguru.
The library itself only emits records; the command-line interface calls
:func:`configure_logging` to send them to the console and, optionally,
to a rotated log file.
"""

import sys
from pathlib import Path
from typing import Final

from loguru import logger

LOG_DIR: Final = Path.home() / ".socks4-client" / "logs"

CONSOLE_FORMAT: Final = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT: Final = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def configure_logging(level: str = "WARNING", log_file: Path | None = None) -> None:
    """Replace loguru's default handler with the client's handlers.

    Args:
        level: Minimum level printed to stderr
        log_file: When given, DEBUG and above also go to this rotated file
    """
    logger.remove()  # Remove default handler

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=level,
        backtrace=True,
        diagnose=False,
    )

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            rotation="10 MB",
            retention="1 week",
            compression="zip",
            format=FILE_FORMAT,
            level="DEBUG",
            backtrace=True,
            diagnose=False,
        )


__all__ = ["configure_logging", "logger", "LOG_DIR"]
