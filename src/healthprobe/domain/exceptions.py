"""Exception hierarchy for the health probe library."""

from typing import Any

from .models import ErrorCode


class HealthProbeException(Exception):
    """Base exception for the health probe library."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ProbeValidationException(HealthProbeException):
    """A probe could not be built because required fields are missing."""

    def __init__(self, issues: list[str], probe_name: str | None = None):
        super().__init__(
            f"Invalid probe definition: {', '.join(issues)}",
            ErrorCode.VALIDATION_ERROR,
            {"issues": list(issues), "probe_name": probe_name},
        )
        self.issues = list(issues)


class ProbeRegistrationException(HealthProbeException):
    """A probe was rejected by the registry."""

    def __init__(self, message: str, probe_name: str | None = None):
        super().__init__(
            message, ErrorCode.REGISTRATION_ERROR, {"probe_name": probe_name}
        )


class CheckFailedError(HealthProbeException):
    """A stock check observed an unhealthy dependency."""

    def __init__(self, reason: str, details: dict[str, Any] | None = None):
        super().__init__(
            f"probe check failed: {reason}", ErrorCode.CHECK_FAILED, details
        )


class ContextCancelledError(HealthProbeException):
    """The probe context was cancelled before the work completed."""

    def __init__(self, reason: str | None = None):
        message = "context cancelled"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, ErrorCode.CONTEXT_CANCELLED, {"reason": reason})


class DeadlineExceededError(HealthProbeException):
    """The probe context deadline passed before the work completed."""

    def __init__(self, timeout: float | None = None):
        super().__init__(
            "context deadline exceeded",
            ErrorCode.DEADLINE_EXCEEDED,
            {"timeout": timeout},
        )
