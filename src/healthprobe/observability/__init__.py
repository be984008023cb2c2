"""Observability infrastructure for logging and metrics."""

from .logging import LogFormat, LogLevel, get_logger, setup_logging
from .metrics import MetricsSink, NoOpMetricsSink, PrometheusMetricsSink

__all__ = [
    "setup_logging",
    "get_logger",
    "LogLevel",
    "LogFormat",
    "MetricsSink",
    "NoOpMetricsSink",
    "PrometheusMetricsSink",
]
