"""Logging configuration and setup."""

import logging
import sys
from enum import Enum
from typing import Any

import structlog
from structlog.stdlib import LoggerFactory

from .correlation import CorrelationIDProcessor
from .formatters import ConsoleFormatter, JSONFormatter, KeyValueFormatter


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Logging formats."""

    JSON = "json"
    CONSOLE = "console"
    KEY_VALUE = "key_value"


def _renderer(format_type: LogFormat, enable_colors: bool) -> Any:
    if format_type == LogFormat.CONSOLE:
        return ConsoleFormatter(colors=enable_colors)
    if format_type == LogFormat.KEY_VALUE:
        return KeyValueFormatter()
    return JSONFormatter()


def setup_logging(
    level: LogLevel = LogLevel.INFO,
    format_type: LogFormat = LogFormat.JSON,
    log_file: str | None = None,
    enable_correlation: bool = True,
    enable_colors: bool = True,
    include_timestamps: bool = True,
    cache_loggers: bool = True,
) -> None:
    """Configure stdlib logging and structlog for the process.

    Args:
        level: Minimum level that is emitted
        format_type: Output renderer
        log_file: Write to this file instead of stdout
        enable_correlation: Stamp the current correlation ID on every event
        enable_colors: Colour console output
        include_timestamps: Add an ISO timestamp to every event
        cache_loggers: Let structlog cache bound loggers on first use
    """
    handler: logging.Handler
    if log_file:
        handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler(sys.stdout)

    logging.basicConfig(
        level=getattr(logging, level.value),
        format="%(message)s",
        handlers=[handler],
        force=True,
    )

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if enable_correlation:
        processors.append(CorrelationIDProcessor())

    if include_timestamps:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    processors.append(_renderer(format_type, enable_colors))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=cache_loggers,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    logger = structlog.get_logger(name)
    return logger  # type: ignore[no-any-return]
