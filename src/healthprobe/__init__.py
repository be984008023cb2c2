"""Health probe registry, concurrent executor and HTTP/metrics surface."""

__version__ = "0.1.0"
__description__ = (
    "Register named health probes, run them concurrently per category and "
    "publish the results over HTTP and Prometheus"
)

from .core import HealthService, ProbeContext, ProbeExecutor, ProbeRegistry, aggregate
from .domain import (
    CategoryReport,
    ExecutionResult,
    HealthState,
    Probe,
    ProbeKind,
)
from .factories import CheckFactory, ProbeBuilder
from .observability.metrics import (
    MetricsSink,
    NoOpMetricsSink,
    PrometheusMetricsSink,
)

__all__ = [
    "__version__",
    "__description__",
    "CategoryReport",
    "CheckFactory",
    "ExecutionResult",
    "HealthService",
    "HealthState",
    "MetricsSink",
    "NoOpMetricsSink",
    "Probe",
    "ProbeBuilder",
    "ProbeContext",
    "ProbeExecutor",
    "ProbeKind",
    "ProbeRegistry",
    "PrometheusMetricsSink",
    "aggregate",
]
