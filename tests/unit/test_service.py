"""Test the health service end to end, without HTTP."""

import asyncio
from unittest.mock import MagicMock

import pytest

from healthprobe.core import HealthService, ProbeContext
from healthprobe.domain import Probe, ProbeKind
from healthprobe.observability.metrics import (
    HEALTHY_VALUE,
    UNHEALTHY_VALUE,
    MetricsSink,
    NoOpMetricsSink,
)


class TestHealthService:
    """Test execution, aggregation and metrics publishing."""

    @pytest.mark.asyncio
    async def test_liveness_failure(self, service, registry, make_probe):
        """Test a failing liveness probe makes liveness unhealthy."""
        registry.add(
            make_probe("A", ProbeKind.LIVENESS),
            make_probe("B", ProbeKind.LIVENESS, healthy=False),
        )

        report = await service.evaluate(None, ProbeKind.LIVENESS)

        assert not report.healthy
        assert len(report.results) == 2

    @pytest.mark.asyncio
    async def test_informational_failure_still_published(
        self, service, registry, metrics_sink, make_probe
    ):
        """Test an informational failure keeps the category healthy but is exported."""
        registry.add(
            make_probe("A", ProbeKind.LIVENESS),
            make_probe("B", ProbeKind.LIVENESS, healthy=False, informational=True),
        )

        report = await service.evaluate(None, ProbeKind.LIVENESS)

        assert report.healthy
        states = metrics_sink.states()
        assert states[("liveness", "A")] == HEALTHY_VALUE
        assert states[("liveness", "B")] == UNHEALTHY_VALUE

    @pytest.mark.asyncio
    async def test_evaluate_uses_given_context(self, service, registry):
        """Test evaluate runs the category under the context passed first."""

        async def cooperating(ctx):
            await ctx.run(asyncio.sleep(10))

        registry.add(Probe("slow", kind=ProbeKind.READINESS, check=cooperating))
        ctx = ProbeContext()
        ctx.cancel("shutting down")

        report = await service.evaluate(ctx, ProbeKind.READINESS)

        assert not report.healthy
        assert report.failures[0].error == "context cancelled: shutting down"

    @pytest.mark.asyncio
    async def test_empty_category(self, service):
        """Test querying a category without probes."""
        report = await service.evaluate(None, ProbeKind.READINESS)

        assert report.healthy
        assert report.results == ()

    @pytest.mark.asyncio
    async def test_health_runs_every_category(self, service, registry, make_probe):
        """Test the on-demand query includes probes of any category."""
        registry.add(
            make_probe("C", ProbeKind.STARTUP),
            make_probe("L", ProbeKind.LIVENESS),
        )

        results = await service.execute_all_probes()

        assert {r.probe.name for r in results} == {"C", "L"}

    @pytest.mark.asyncio
    async def test_execute_probes_by_kind(self, service, registry, make_probe):
        registry.add(
            make_probe("R", ProbeKind.READINESS),
            make_probe("S", ProbeKind.STARTUP),
        )

        results = await service.execute_probes_by_kind(
            ProbeContext.background(), ProbeKind.STARTUP
        )

        assert [r.probe.name for r in results] == ["S"]

    @pytest.mark.asyncio
    async def test_execute_unregistered_probes(self, service, registry, make_probe):
        """Test ad-hoc probes run without being registered."""
        results = await service.execute_probes(None, make_probe("adhoc"))

        assert len(results) == 1
        assert "adhoc" not in registry

    @pytest.mark.asyncio
    async def test_sink_receives_every_result(self, registry, make_probe):
        """Test the sink is updated once per round with all results."""
        sink = MagicMock(spec=MetricsSink)
        service = HealthService(registry, sink)
        registry.add(make_probe("a"), make_probe("b", healthy=False))

        results = await service.execute_all_probes()

        sink.update.assert_called_once()
        assert set(sink.update.call_args.args) == set(results)

    @pytest.mark.asyncio
    async def test_sink_failure_does_not_break_round(self, registry, make_probe):
        """Test a broken metrics backend does not change the outcome."""
        sink = MagicMock(spec=MetricsSink)
        sink.update.side_effect = RuntimeError("backend down")
        service = HealthService(registry, sink)
        registry.add(make_probe("a", ProbeKind.READINESS))

        report = await service.evaluate(None, ProbeKind.READINESS)

        assert report.healthy

    def test_defaults(self, registry):
        service = HealthService(registry)

        assert isinstance(service.metrics_sink, NoOpMetricsSink)
