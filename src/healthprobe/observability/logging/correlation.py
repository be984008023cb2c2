"""Correlation IDs shared by HTTP requests and the probe rounds they trigger."""

import contextvars
import uuid
from typing import Any

correlation_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)


class CorrelationIDProcessor:
    """structlog processor that stamps the current correlation ID on events."""

    def __init__(self, key: str = "correlation_id"):
        self.key = key

    def __call__(
        self, logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        correlation_id = correlation_id_var.get()
        if correlation_id and self.key not in event_dict:
            event_dict[self.key] = correlation_id
        return event_dict


def get_correlation_id() -> str | None:
    """Get current correlation ID from context."""
    return correlation_id_var.get()


def set_correlation_id(correlation_id: str | None) -> contextvars.Token[str | None]:
    """Set correlation ID in context."""
    return correlation_id_var.set(correlation_id)


def generate_correlation_id() -> str:
    return uuid.uuid4().hex


class CorrelationContext:
    """Scope a correlation ID to a block, restoring the previous one on exit."""

    def __init__(self, correlation_id: str | None = None):
        self.correlation_id = correlation_id or generate_correlation_id()
        self._token: contextvars.Token[str | None] | None = None

    def __enter__(self) -> "CorrelationContext":
        self._token = correlation_id_var.set(self.correlation_id)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._token is not None:
            correlation_id_var.reset(self._token)
            self._token = None
