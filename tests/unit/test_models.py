"""Test domain models and exceptions."""

import pytest

from healthprobe.domain import (
    CheckFailedError,
    ErrorCode,
    ExecutionResult,
    HealthProbeException,
    HealthState,
    Probe,
    ProbeKind,
    ProbeValidationException,
)


class TestProbe:
    """Test probe model functionality."""

    def test_defaults(self):
        probe = Probe(name="db")

        assert probe.kind == ProbeKind.HEALTH
        assert probe.check is None
        assert not probe.informational
        assert probe.health == HealthState.UNKNOWN

    def test_with_health_returns_copy(self):
        probe = Probe(name="db", kind=ProbeKind.READINESS)
        updated = probe.with_health(HealthState.HEALTHY)

        assert updated.health == HealthState.HEALTHY
        assert probe.health == HealthState.UNKNOWN
        assert updated.name == probe.name

    def test_probe_is_immutable(self):
        probe = Probe(name="db")

        with pytest.raises(AttributeError):
            probe.name = "cache"

    def test_to_dict(self):
        probe = Probe(name="db", kind=ProbeKind.STARTUP, informational=True)

        assert probe.to_dict() == {
            "name": "db",
            "kind": "startup",
            "informational": True,
            "health": "unknown",
        }


class TestExecutionResult:
    """Test execution result functionality."""

    def test_healthy_result_has_no_err(self):
        result = ExecutionResult(probe=Probe("db", health=HealthState.HEALTHY))

        assert result.healthy
        assert "err" not in result.to_dict()

    def test_failed_result(self):
        result = ExecutionResult(
            probe=Probe("db", health=HealthState.UNHEALTHY), error="refused"
        )

        assert result.failed
        assert result.to_dict()["err"] == "refused"


class TestExceptions:
    """Test the exception hierarchy."""

    def test_validation_exception(self):
        exc = ProbeValidationException(["no probe name"], probe_name=None)

        assert isinstance(exc, HealthProbeException)
        assert exc.error_code == ErrorCode.VALIDATION_ERROR
        assert str(exc) == "Invalid probe definition: no probe name"

    def test_check_failed_error(self):
        exc = CheckFailedError("status code: 503", {"status_code": 503})

        assert str(exc) == "probe check failed: status code: 503"
        assert exc.error_code == ErrorCode.CHECK_FAILED
        assert exc.details == {"status_code": 503}
