"""Response models for the HTTP surface."""

from pydantic import BaseModel, Field

from ..domain.models import ExecutionResult, HealthState, ProbeKind


class ProbeSchema(BaseModel):
    """A probe as reported by the health endpoint."""

    name: str
    kind: ProbeKind
    informational: bool = False
    health: HealthState = HealthState.UNKNOWN


class ProbeResultSchema(BaseModel):
    """Outcome of one probe; ``err`` is only present on failure."""

    probe: ProbeSchema
    err: str | None = Field(default=None, description="Failure reason")

    @classmethod
    def from_result(cls, result: ExecutionResult) -> "ProbeResultSchema":
        return cls(
            probe=ProbeSchema(
                name=result.probe.name,
                kind=result.probe.kind,
                informational=result.probe.informational,
                health=result.probe.health,
            ),
            err=result.error,
        )
