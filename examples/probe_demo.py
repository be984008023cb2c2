"""Demonstration of probe registration, execution and metrics.

This example registers a few probes, runs each category once and prints the
aggregate outcome together with the Prometheus exposition.
"""

import asyncio

from healthprobe import (
    HealthService,
    ProbeBuilder,
    ProbeContext,
    ProbeKind,
    ProbeRegistry,
    PrometheusMetricsSink,
)
from healthprobe.observability.logging import LogFormat, LogLevel, setup_logging


async def cache_warmed(ctx: ProbeContext) -> str | None:
    """Simulate a startup check that reports its failure reason."""
    await asyncio.sleep(0.05)
    return "cache is still warming up"


async def main() -> None:
    setup_logging(level=LogLevel.INFO, format_type=LogFormat.CONSOLE)

    components = {"queue consumer": True, "scheduler": False}
    builder = ProbeBuilder(default_timeout=2.0)

    registry = ProbeRegistry()
    registry.add(
        ProbeBuilder().build_liveness_probe(),
        ProbeBuilder().build_deadmans_snitch(),
        ProbeBuilder()
        .with_dns_resolve_check("localhost")
        .with_kind(ProbeKind.READINESS)
        .must_build(),
        ProbeBuilder()
        .with_name("cache warm")
        .with_kind(ProbeKind.STARTUP)
        .with_custom_check(cache_warmed)
        .must_build(),
        *builder.build_for_components(ProbeKind.READINESS, components),
    )

    sink = PrometheusMetricsSink(namespace="demo")
    service = HealthService(registry, sink)

    with ProbeContext(timeout=5.0) as ctx:
        for kind in (ProbeKind.LIVENESS, ProbeKind.READINESS, ProbeKind.STARTUP):
            report = await service.evaluate(ctx, kind)
            failed = ", ".join(r.probe.name for r in report.failures) or "-"
            print(f"{kind.value:>10}: healthy={report.healthy} failed=[{failed}]")

    print()
    print(sink.exposition().content.decode())


if __name__ == "__main__":
    asyncio.run(main())
