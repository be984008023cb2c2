"""Configuration package."""

from .settings import (
    DevelopmentSettings,
    Environment,
    HealthProbeSettings,
    ObservabilitySettings,
    ProductionSettings,
    TestingSettings,
    get_settings,
)

__all__ = [
    "Environment",
    "HealthProbeSettings",
    "ObservabilitySettings",
    "DevelopmentSettings",
    "TestingSettings",
    "ProductionSettings",
    "get_settings",
]
