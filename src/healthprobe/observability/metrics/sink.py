"""Metrics sinks that publish per-probe health state."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Gauge, generate_latest

from ...domain.models import ExecutionResult, HealthState
from ..logging import get_logger

logger = get_logger(__name__)

HEALTHY_VALUE = 0.0
UNHEALTHY_VALUE = 1.0

_STATE_VALUES = {
    HealthState.HEALTHY: HEALTHY_VALUE,
    HealthState.UNHEALTHY: UNHEALTHY_VALUE,
}


@dataclass(frozen=True)
class Exposition:
    """Snapshot of a sink's state, ready to be served to a scraper."""

    content: bytes
    media_type: str


class MetricsSink(ABC):
    """Receives execution results and exposes per-probe health state."""

    @abstractmethod
    def update(self, *results: ExecutionResult) -> None:
        """Record the health of each result's probe."""

    @abstractmethod
    def exposition(self) -> Exposition:
        """Return the current state for an external scraper."""


class NoOpMetricsSink(MetricsSink):
    """Sink used when metrics are disabled."""

    def update(self, *results: ExecutionResult) -> None:
        return None

    def exposition(self) -> Exposition:
        return Exposition(content=b"", media_type="text/plain; charset=utf-8")


class PrometheusMetricsSink(MetricsSink):
    """Publishes ``<namespace>_healthcheck_status{kind, probe}`` gauges.

    The value is 0 for a healthy probe and 1 for an unhealthy one. Results
    whose probe never ran (state unknown) are ignored. prometheus_client
    locks each labelled child, so concurrent updates of different labels
    are independent.
    """

    def __init__(self, namespace: str = "", registry: CollectorRegistry | None = None):
        self.namespace = namespace
        self.registry = registry or CollectorRegistry()
        self.status_gauge = Gauge(
            "status",
            "Current probe check status (0=healthy, 1=unhealthy)",
            labelnames=["kind", "probe"],
            namespace=namespace,
            subsystem="healthcheck",
            registry=self.registry,
        )

    @property
    def metric_name(self) -> str:
        return "_".join(p for p in (self.namespace, "healthcheck", "status") if p)

    def update(self, *results: ExecutionResult) -> None:
        for result in results:
            probe = result.probe
            value = _STATE_VALUES.get(probe.health)
            if value is None:
                logger.debug(
                    "Skipping probe without execution state",
                    probe=probe.name,
                    kind=probe.kind.value,
                )
                continue
            self.status_gauge.labels(kind=probe.kind.value, probe=probe.name).set(value)

    def states(self) -> dict[tuple[str, str], float]:
        """Current gauge values keyed by ``(kind, probe)``."""
        values: dict[tuple[str, str], float] = {}
        for metric in self.registry.collect():
            for sample in metric.samples:
                if sample.name != self.metric_name:
                    continue
                values[(sample.labels["kind"], sample.labels["probe"])] = sample.value
        return values

    def exposition(self) -> Exposition:
        return Exposition(
            content=generate_latest(self.registry), media_type=CONTENT_TYPE_LATEST
        )
