"""Health service: registry, executor, status policy and metrics in one place."""

from ..domain.models import CategoryReport, ExecutionResult, Probe, ProbeKind
from ..observability.logging import get_logger
from ..observability.metrics import MetricsSink, NoOpMetricsSink
from .aggregation import aggregate
from .context import ProbeContext
from .executor import ProbeExecutor
from .registry import ProbeRegistry

logger = get_logger(__name__)


class HealthService:
    """Executes registered probes and publishes their state."""

    def __init__(
        self,
        registry: ProbeRegistry,
        metrics_sink: MetricsSink | None = None,
        executor: ProbeExecutor | None = None,
    ):
        """Initialize health service.

        Args:
            registry: Registry holding the probes to execute
            metrics_sink: Sink informed of every result, no-op when omitted
            executor: Engine used to run the probes
        """
        self.registry = registry
        self.metrics_sink = metrics_sink or NoOpMetricsSink()
        self.executor = executor or ProbeExecutor()

    async def execute_probes(
        self, ctx: ProbeContext | None = None, *probes: Probe
    ) -> list[ExecutionResult]:
        """Run the given probes and update the metrics sink with every result."""
        results = await self.executor.execute(
            ctx or ProbeContext.background(), list(probes)
        )
        self._publish(results)
        return results

    async def execute_all_probes(
        self, ctx: ProbeContext | None = None
    ) -> list[ExecutionResult]:
        return await self.execute_probes(ctx, *self.registry.get_all())

    async def execute_probes_by_kind(
        self, ctx: ProbeContext | None, kind: ProbeKind
    ) -> list[ExecutionResult]:
        """Run the probes of one category; HEALTH runs every probe."""
        return await self.execute_probes(ctx, *self.registry.get_by_kind(kind))

    async def evaluate(
        self, ctx: ProbeContext | None, kind: ProbeKind
    ) -> CategoryReport:
        """Run a category and aggregate its outcome."""
        results = await self.execute_probes_by_kind(ctx, kind)
        report = aggregate(kind, results)
        if not report.healthy:
            logger.info(
                "Category unhealthy",
                kind=kind.value,
                failed_probes=[r.probe.name for r in report.failures],
            )
        return report

    def _publish(self, results: list[ExecutionResult]) -> None:
        try:
            self.metrics_sink.update(*results)
        except Exception as e:
            # The outcome of a round never depends on the metrics backend.
            logger.error("Failed to update metrics sink", error=str(e))
