"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import __description__, __version__
from .api.error_handlers import (
    health_probe_exception_handler,
    unexpected_exception_handler,
)
from .api.middleware import CorrelationIDMiddleware, RequestLoggingMiddleware
from .api.routes import create_health_router
from .config.settings import HealthProbeSettings, get_settings
from .core.registry import ProbeRegistry
from .core.service import HealthService
from .domain.exceptions import HealthProbeException
from .factories.builder import LIVENESS_PROBE_NAME, ProbeBuilder
from .observability.logging import get_logger, setup_logging
from .observability.metrics import MetricsSink, NoOpMetricsSink, PrometheusMetricsSink

logger = get_logger(__name__)


def create_metrics_sink(settings: HealthProbeSettings) -> MetricsSink:
    """Choose the metrics sink from the observability settings."""
    if not settings.observability.metrics_enabled:
        return NoOpMetricsSink()
    return PrometheusMetricsSink(namespace=settings.observability.metrics_namespace)


def create_app(
    settings: HealthProbeSettings | None = None,
    registry: ProbeRegistry | None = None,
    metrics_sink: MetricsSink | None = None,
) -> FastAPI:
    """Build the probe server.

    Args:
        settings: Application settings, loaded from the environment if omitted
        registry: Registry to serve; the application owns a new one if omitted
        metrics_sink: Sink for probe state, chosen from settings if omitted

    Returns:
        Configured FastAPI application. The registry, health service and
        metrics sink are available on ``app.state``.
    """
    settings = settings or get_settings()
    observability = settings.observability
    setup_logging(
        level=observability.log_level,
        format_type=observability.log_format,
        log_file=observability.log_file,
    )

    if registry is None:
        registry = ProbeRegistry()
    if metrics_sink is None:
        metrics_sink = create_metrics_sink(settings)

    if settings.register_liveness_probe and LIVENESS_PROBE_NAME not in registry:
        registry.add(ProbeBuilder(settings.check_timeout).build_liveness_probe())

    service = HealthService(registry, metrics_sink)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Probe server starting",
            environment=settings.environment.value,
            probes=registry.names(),
            metrics_enabled=observability.metrics_enabled,
        )
        yield
        logger.info("Probe server stopped")

    app = FastAPI(
        title=settings.app_name,
        description=__description__,
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.registry = registry
    app.state.metrics_sink = metrics_sink
    app.state.health_service = service

    # The last middleware added runs first.
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationIDMiddleware)

    app.add_exception_handler(HealthProbeException, health_probe_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)

    app.include_router(
        create_health_router(service, metrics_sink, settings.request_timeout)
    )

    return app
