"""Probe builder and ready-made check functions."""

from .builder import DEADMANS_SNITCH_NAME, LIVENESS_PROBE_NAME, ProbeBuilder
from .checks import DEFAULT_TIMEOUT, CheckFactory, split_address

__all__ = [
    "DEADMANS_SNITCH_NAME",
    "DEFAULT_TIMEOUT",
    "LIVENESS_PROBE_NAME",
    "CheckFactory",
    "ProbeBuilder",
    "split_address",
]
