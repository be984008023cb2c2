"""Domain models for probes and their execution results."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from healthprobe.core.context import ProbeContext


# A check fails by raising, or by returning the failure reason as a string or
# exception. Any other return value, None included, is a success.
CheckFunc = Callable[["ProbeContext"], Awaitable[Any]]


class ProbeKind(str, Enum):
    """Probe categories.

    LIVENESS, READINESS and STARTUP mirror the orchestrator probe kinds.
    HEALTH is the on-demand category: querying it selects every probe.
    """

    LIVENESS = "liveness"
    READINESS = "readiness"
    STARTUP = "startup"
    HEALTH = "health"


class HealthState(str, Enum):
    """Outcome of the most recent execution of a probe."""

    UNKNOWN = "unknown"
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class ErrorCode(str, Enum):
    """Standardized error codes."""

    VALIDATION_ERROR = "validation_error"
    REGISTRATION_ERROR = "registration_error"
    CHECK_FAILED = "check_failed"
    CONTEXT_CANCELLED = "context_cancelled"
    DEADLINE_EXCEEDED = "deadline_exceeded"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class Probe:
    """A named, categorized health check."""

    name: str
    kind: ProbeKind = ProbeKind.HEALTH
    check: CheckFunc | None = field(default=None, compare=False, repr=False)
    informational: bool = False
    health: HealthState = HealthState.UNKNOWN

    def with_health(self, health: HealthState) -> "Probe":
        """Return a copy of the probe carrying the given health state."""
        return replace(self, health=health)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "kind": self.kind.value,
            "informational": self.informational,
            "health": self.health.value,
        }


@dataclass(frozen=True)
class ExecutionResult:
    """Result of running one probe in one execution round."""

    probe: Probe
    error: str | None = None
    error_type: str | None = None
    duration_ms: float = 0.0

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def healthy(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape served by the health endpoint."""
        data: dict[str, Any] = {"probe": self.probe.to_dict()}
        if self.error is not None:
            data["err"] = self.error
        return data


@dataclass(frozen=True)
class CategoryReport:
    """Aggregate outcome of an execution round for one category."""

    kind: ProbeKind
    healthy: bool
    results: tuple[ExecutionResult, ...] = ()

    @property
    def failures(self) -> list[ExecutionResult]:
        """Failed results of probes that count towards the outcome."""
        return [r for r in self.results if r.failed and not r.probe.informational]

    @property
    def informational_failures(self) -> list[ExecutionResult]:
        return [r for r in self.results if r.failed and r.probe.informational]
