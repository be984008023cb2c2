"""
Configuration management for the health probe service.

Settings are read from the environment (and an optional ``.env`` file) with
the ``HEALTHPROBE_`` prefix. Environment-specific subclasses adjust defaults.
"""

import os
from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..observability.logging import LogFormat, LogLevel


class Environment(str, Enum):
    """Deployment environments."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class ObservabilitySettings(BaseSettings):
    """Observability configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HEALTHPROBE_OBSERVABILITY_", env_file=".env", extra="ignore"
    )

    # Logging settings
    log_level: LogLevel = LogLevel.INFO
    log_format: LogFormat = LogFormat.JSON
    log_file: str | None = None

    # Metrics settings
    metrics_enabled: bool = True
    metrics_namespace: str = "healthprobe"


class HealthProbeSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="HEALTHPROBE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application info
    app_name: str = "healthprobe"
    environment: Environment = Environment.DEVELOPMENT

    # Server settings
    host: str = "0.0.0.0"
    port: int = 5090

    # Probe execution
    request_timeout: float = 10.0
    check_timeout: float = 5.0
    register_liveness_probe: bool = True

    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @field_validator("request_timeout", "check_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeouts must be positive")
        return v

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == Environment.PRODUCTION


class DevelopmentSettings(HealthProbeSettings):
    """Development environment settings."""

    environment: Environment = Environment.DEVELOPMENT

    # Verbose, human readable logging for development
    observability: ObservabilitySettings = Field(
        default_factory=lambda: ObservabilitySettings(
            log_level=LogLevel.DEBUG, log_format=LogFormat.CONSOLE
        )
    )


class TestingSettings(HealthProbeSettings):
    """Testing environment settings."""

    __test__ = False

    environment: Environment = Environment.TESTING
    request_timeout: float = 2.0
    check_timeout: float = 1.0

    observability: ObservabilitySettings = Field(
        default_factory=lambda: ObservabilitySettings(log_level=LogLevel.WARNING)
    )


class ProductionSettings(HealthProbeSettings):
    """Production environment settings."""

    environment: Environment = Environment.PRODUCTION


@lru_cache
def get_settings() -> HealthProbeSettings:
    """Get application settings based on ``HEALTHPROBE_ENVIRONMENT``."""
    environment = os.getenv("HEALTHPROBE_ENVIRONMENT", "development").lower()

    if environment == "development":
        return DevelopmentSettings()
    elif environment == "production":
        return ProductionSettings()
    elif environment == "testing":
        return TestingSettings()
    else:
        return HealthProbeSettings()
