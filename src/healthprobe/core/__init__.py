"""Probe registry, execution engine and status policy."""

from .context import ProbeContext
from .locking import ReadWriteLock
from .registry import ProbeRegistry
from .executor import ProbeExecutor
from .aggregation import aggregate, is_category_failure
from .service import HealthService

__all__ = [
    "ProbeContext",
    "ReadWriteLock",
    "ProbeRegistry",
    "ProbeExecutor",
    "aggregate",
    "is_category_failure",
    "HealthService",
]
