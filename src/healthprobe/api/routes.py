"""Probe endpoints: category status, full report, metrics and index."""

from fastapi import APIRouter, Response, status

from ..core.context import ProbeContext
from ..core.service import HealthService
from ..domain.models import ProbeKind
from ..observability.metrics import MetricsSink
from .schemas import ProbeResultSchema

LIVENESS_PATH = "/live"
READINESS_PATH = "/ready"
STARTUP_PATH = "/startup"
HEALTH_PATH = "/health"
METRICS_PATH = "/metrics"

ENDPOINTS = {
    "liveness": LIVENESS_PATH,
    "readiness": READINESS_PATH,
    "startup": STARTUP_PATH,
    "health": HEALTH_PATH,
    "metrics": METRICS_PATH,
}


def create_health_router(
    service: HealthService,
    metrics_sink: MetricsSink,
    request_timeout: float | None = None,
) -> APIRouter:
    """Create the router serving probe results.

    Every request runs its probes under a fresh :class:`ProbeContext` bounded
    by ``request_timeout``; the context is cancelled once the response is
    ready, which stops any check still in flight.
    """
    router = APIRouter(tags=["health"])

    async def category_status(kind: ProbeKind) -> Response:
        with ProbeContext(timeout=request_timeout) as ctx:
            report = await service.evaluate(ctx, kind)
        if report.healthy:
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        return Response(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    @router.get(LIVENESS_PATH, status_code=status.HTTP_204_NO_CONTENT)
    async def liveness() -> Response:
        """Liveness check for Kubernetes."""
        return await category_status(ProbeKind.LIVENESS)

    @router.get(READINESS_PATH, status_code=status.HTTP_204_NO_CONTENT)
    async def readiness() -> Response:
        """Readiness check for Kubernetes."""
        return await category_status(ProbeKind.READINESS)

    @router.get(STARTUP_PATH, status_code=status.HTTP_204_NO_CONTENT)
    async def startup() -> Response:
        """Startup check for Kubernetes."""
        return await category_status(ProbeKind.STARTUP)

    @router.get(
        HEALTH_PATH,
        response_model=list[ProbeResultSchema],
        response_model_exclude_none=True,
    )
    async def health() -> list[ProbeResultSchema]:
        """Run every registered probe and report each outcome."""
        with ProbeContext(timeout=request_timeout) as ctx:
            results = await service.execute_all_probes(ctx)
        return [ProbeResultSchema.from_result(r) for r in results]

    @router.get(METRICS_PATH)
    async def metrics() -> Response:
        """Expose probe health gauges for scraping."""
        exposition = metrics_sink.exposition()
        return Response(content=exposition.content, media_type=exposition.media_type)

    @router.get("/", response_model=dict[str, str])
    async def index() -> dict[str, str]:
        """List the available endpoints."""
        return dict(ENDPOINTS)

    return router
