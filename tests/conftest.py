"""Test configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient

# Select the testing profile before any settings are read
os.environ["HEALTHPROBE_ENVIRONMENT"] = "testing"

from healthprobe.config import TestingSettings, get_settings  # noqa: E402
from healthprobe.core import HealthService, ProbeContext, ProbeRegistry  # noqa: E402
from healthprobe.domain import Probe, ProbeKind  # noqa: E402
from healthprobe.main import create_app  # noqa: E402
from healthprobe.observability.metrics import PrometheusMetricsSink  # noqa: E402


async def always_ok(ctx: ProbeContext) -> None:
    return None


async def always_fail(ctx: ProbeContext) -> None:
    raise RuntimeError("dependency unavailable")


def make_probe(
    name: str,
    kind: ProbeKind = ProbeKind.HEALTH,
    healthy: bool = True,
    informational: bool = False,
) -> Probe:
    """Create a probe whose check always succeeds or always fails."""
    return Probe(
        name=name,
        kind=kind,
        check=always_ok if healthy else always_fail,
        informational=informational,
    )


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings afresh."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def registry():
    """Create an empty probe registry."""
    return ProbeRegistry()


@pytest.fixture
def metrics_sink():
    """Create a Prometheus sink backed by its own collector registry."""
    return PrometheusMetricsSink(namespace="test")


@pytest.fixture
def service(registry, metrics_sink):
    """Create a health service over the registry and sink fixtures."""
    return HealthService(registry, metrics_sink)


@pytest.fixture
def settings():
    """Create testing settings without the default liveness probe."""
    return TestingSettings(register_liveness_probe=False)


@pytest.fixture
def app(settings, registry, metrics_sink):
    """Create the probe server around the registry and sink fixtures."""
    return create_app(settings=settings, registry=registry, metrics_sink=metrics_sink)


@pytest.fixture
def client(app):
    """Create test client for the probe server."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(name="make_probe")
def make_probe_fixture():
    """Expose the probe factory to tests."""
    return make_probe
