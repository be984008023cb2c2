"""Metrics sinks and exposition."""

from .sink import (
    HEALTHY_VALUE,
    UNHEALTHY_VALUE,
    Exposition,
    MetricsSink,
    NoOpMetricsSink,
    PrometheusMetricsSink,
)

__all__ = [
    "HEALTHY_VALUE",
    "UNHEALTHY_VALUE",
    "Exposition",
    "MetricsSink",
    "NoOpMetricsSink",
    "PrometheusMetricsSink",
]
