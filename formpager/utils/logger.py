"""
Logging setup for formpager.

Modules log through ``logging.getLogger(__name__)``; this module only wires
handlers: a rich console handler (or a plain stream handler) and an optional
rotating log file.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level(level: str) -> int:
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level}")
    return getattr(logging, level.upper())


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance for module.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    if not name or not isinstance(name, str):
        raise ValueError("Logger name must be a non-empty string")
    return logging.getLogger(name)


def configure_logging(
    level: str = "INFO",
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
    use_rich: bool = True,
    max_file_size: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> None:
    """
    Configure logging for the application.

    Console output goes to stderr so that machine-readable CLI output on
    stdout stays clean.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string for the plain handlers
        log_file: Log file path
        use_rich: Use rich's colored handler for the console
        max_file_size: Maximum log file size in bytes
        backup_count: Number of backup files to keep
    """
    numeric_level = _level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt=DATE_FORMAT)

    if use_rich:
        console_handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_time=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        console_handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
    console_handler.setLevel(numeric_level)
    root_logger.addHandler(console_handler)

    if log_file:
        add_file_handler(root_logger, log_file, level, formatter, max_file_size, backup_count)


def set_log_level(level: str) -> None:
    """Set the level of the root logger and all of its handlers."""
    numeric_level = _level(level)
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers:
        handler.setLevel(numeric_level)


def add_file_handler(
    logger: logging.Logger,
    file_path: str,
    level: str = "INFO",
    formatter: Optional[logging.Formatter] = None,
    max_file_size: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> RotatingFileHandler:
    """
    Add a rotating file handler to logger.

    Args:
        logger: Logger instance
        file_path: Log file path
        level: Log level for this handler
        formatter: Log formatter
        max_file_size: Maximum log file size in bytes
        backup_count: Number of backup files to keep

    Returns:
        The handler that was added
    """
    if not isinstance(logger, logging.Logger):
        raise ValueError("Logger must be a logging.Logger instance")
    if not file_path or not isinstance(file_path, str):
        raise ValueError("File path must be a non-empty string")

    log_dir = os.path.dirname(file_path)
    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir)

    file_handler = RotatingFileHandler(file_path, maxBytes=max_file_size, backupCount=backup_count)
    file_handler.setLevel(_level(level))
    file_handler.setFormatter(formatter or logging.Formatter(DEFAULT_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(file_handler)
    return file_handler
