"""
Logging Setup

The library only ever logs through module loggers under the ``e621``
namespace. Applications that want output call setup_logging() once.
"""

import logging
import sys
from typing import Optional

from .config import LogConfig


def setup_logging(
    log_level: str = "INFO",
    log_config: Optional[LogConfig] = None,
    log_to_file: bool = False,
) -> logging.Logger:
    """
    Set up console (and optionally file) logging for the e621 package.

    Args:
        log_level: Level name for the console handler and the package logger.
        log_config: File/format settings; defaults to LogConfig().
        log_to_file: Also write DEBUG-level records to the configured log file.

    Returns:
        The configured ``e621`` logger.
    """
    log_config = log_config or LogConfig()
    level = getattr(logging, log_level.upper())

    logger = logging.getLogger("e621")
    logger.setLevel(logging.DEBUG if log_to_file else level)

    # Repeated calls replace handlers rather than stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_format = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S"
    )
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    if log_to_file:
        log_config.log_directory.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(
            log_config.log_file_path,
            mode='w',
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(log_config.log_format))
        logger.addHandler(file_handler)

    return logger
