"""Structured logging configuration and utilities."""

from .config import LogFormat, LogLevel, get_logger, setup_logging
from .correlation import (
    CorrelationContext,
    CorrelationIDProcessor,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from .formatters import ConsoleFormatter, JSONFormatter, KeyValueFormatter

__all__ = [
    "setup_logging",
    "get_logger",
    "LogLevel",
    "LogFormat",
    "JSONFormatter",
    "ConsoleFormatter",
    "KeyValueFormatter",
    "CorrelationContext",
    "CorrelationIDProcessor",
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
]
