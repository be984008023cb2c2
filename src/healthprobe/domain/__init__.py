"""Domain models and exceptions."""

from .exceptions import (
    CheckFailedError,
    ContextCancelledError,
    DeadlineExceededError,
    HealthProbeException,
    ProbeRegistrationException,
    ProbeValidationException,
)
from .models import (
    CategoryReport,
    CheckFunc,
    ErrorCode,
    ExecutionResult,
    HealthState,
    Probe,
    ProbeKind,
)

__all__ = [
    "CategoryReport",
    "CheckFunc",
    "ErrorCode",
    "ExecutionResult",
    "HealthState",
    "Probe",
    "ProbeKind",
    "CheckFailedError",
    "ContextCancelledError",
    "DeadlineExceededError",
    "HealthProbeException",
    "ProbeRegistrationException",
    "ProbeValidationException",
]
