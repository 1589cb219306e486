"""Logging configuration for feedcomposer."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from feedcomposer.config.defaults import (
    DEFAULT_LOG_BACKUP_COUNT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOG_MAX_SIZE_MB,
    LOGS_DIR,
)
from feedcomposer.exceptions import ConfigurationError

if TYPE_CHECKING:
    from feedcomposer.config.settings import LoggingSettings

ROOT_LOGGER_NAME = "feedcomposer"

_loggers: dict[str, logging.Logger] = {}
_initialized = False


def _resolve_level(level: str) -> int:
    """Map a level name to its numeric value."""
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ConfigurationError(f"Unknown log level: {level}")
    return value


def setup_logging(
    level: str = DEFAULT_LOG_LEVEL,
    log_file: Path | None = None,
    max_size_mb: int = DEFAULT_LOG_MAX_SIZE_MB,
    backup_count: int = DEFAULT_LOG_BACKUP_COUNT,
    console_level: str = "WARNING",
) -> None:
    """
    Attach console and rotating file handlers to the feedcomposer logger.

    Only the first call has an effect; later calls are ignored so that
    handlers are never duplicated.

    Args:
        level: Log level for the package logger and the file handler.
        log_file: Path to log file. If None, uses the default logs directory.
        max_size_mb: Maximum log file size in MB before rotation.
        backup_count: Number of rotated files to keep.
        console_level: Level for messages echoed to stderr.
    """
    global _initialized

    if _initialized:
        return

    numeric_level = _resolve_level(level)

    if log_file is None:
        log_file = LOGS_DIR / f"{ROOT_LOGGER_NAME}.log"
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(numeric_level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(_resolve_level(console_level))
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=max_size_mb * 1024 * 1024,
        backupCount=backup_count,
    )
    file_handler.setLevel(numeric_level)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(file_handler)

    _initialized = True


def setup_logging_from_settings(settings: LoggingSettings, verbose: bool = False) -> None:
    """Configure logging from the ``logging`` section of the settings."""
    setup_logging(
        level="DEBUG" if verbose else settings.level,
        log_file=settings.file,
        max_size_mb=settings.max_size_mb,
        backup_count=settings.backup_count,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the feedcomposer namespace.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    if name not in _loggers:
        if not name.startswith(ROOT_LOGGER_NAME):
            name_in_namespace = f"{ROOT_LOGGER_NAME}.{name}"
        else:
            name_in_namespace = name
        _loggers[name] = logging.getLogger(name_in_namespace)

    return _loggers[name]
