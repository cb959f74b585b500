"""Logging utilities for the model catalog cache.

This module provides standardized logging functionality for cache operations.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional

# Type for log callback functions
LogCallback = Callable[[int, str, Dict[str, Any]], None]

LOGGER_NAME = "model_catalog_cache"

_callback: Optional[LogCallback] = None


class LogLevel(int, Enum):
    """Log levels for the catalog cache."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


class LogEvent(str, Enum):
    """Event types for catalog cache logging."""

    CATALOG_CACHE = "catalog_cache"
    CATALOG_STORE = "catalog_store"
    CATALOG_FETCH = "catalog_fetch"
    DEFAULT_CATALOG = "default_catalog"
    BOOTSTRAP = "bootstrap"


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package namespace.

    Args:
        name: Logger name; module paths inside the package are kept as-is

    Returns:
        Logger instance
    """
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def configure_logging(level: str = "WARNING") -> None:
    """Set the package log level.

    Warnings and errors reach stderr through logging's last-resort handler;
    a formatted stderr handler is attached once for INFO and DEBUG.

    Args:
        level: Level name such as "DEBUG" or "WARNING"
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(numeric_level)
    if numeric_level < logging.WARNING and not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        root.addHandler(handler)


def set_log_callback(callback: Optional[LogCallback]) -> None:
    """Install (or remove, with None) a callback receiving every cache log event."""
    global _callback
    _callback = callback


def _log(
    callback: LogCallback,
    level: LogLevel,
    event: LogEvent,
    data: Dict[str, Any],
) -> None:
    """Log an event with the provided callback.

    Args:
        callback: Function to call with the log data
        level: Severity level
        event: Event type
        data: Dictionary of event data
    """
    try:
        callback(level, str(event.value), data)
    except Exception as e:
        # Fallback to standard logging if callback fails
        logging.getLogger(LOGGER_NAME).error(
            f"Logging callback failed with error: {e}. Original log: "
            f"level={level}, event={event}, data={data}"
        )


def _emit(level: LogLevel, event: LogEvent, message: str, data: Dict[str, Any]) -> None:
    logger = get_logger(event.value)
    if data:
        details = ", ".join(f"{key}={value}" for key, value in data.items())
        logger.log(level, f"{message} ({details})")
    else:
        logger.log(level, message)

    if _callback is not None:
        _log(_callback, level, event, {"message": message, **data})


def log_debug(event: LogEvent, message: str, **data: Any) -> None:
    """Log a debug-level event."""
    _emit(LogLevel.DEBUG, event, message, data)


def log_info(event: LogEvent, message: str, **data: Any) -> None:
    """Log an info-level event."""
    _emit(LogLevel.INFO, event, message, data)


def log_warning(event: LogEvent, message: str, **data: Any) -> None:
    """Log a warning-level event."""
    _emit(LogLevel.WARNING, event, message, data)


def log_error(event: LogEvent, message: str, **data: Any) -> None:
    """Log an error-level event."""
    _emit(LogLevel.ERROR, event, message, data)
