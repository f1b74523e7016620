"""navperf configuration settings using pydantic-settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """navperf configuration settings.

    Settings are loaded from environment variables with NAVPERF_ prefix,
    or from a .env file in the current directory.

    Attributes:
        homeScreen: Screen whose entry/exit triggers the slide animation.
        slideDurationMs: Duration of the home slide transition.
        frameIntervalMs: Interval between animation frames.
        resourceLogging: Default for native resource-timing capture.
        maxEventHistory: Events kept in the bus history.
        maxMeasureHistory: Measures kept by the measure engine.
        maxMetricHistory: Metric records kept by the metrics recorder.
        logLevel: Logging level.
    """

    model_config = SettingsConfigDict(
        env_prefix="NAVPERF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Navigation
    homeScreen: str = Field(
        default="home",
        description="Screen whose entry/exit is animated",
        min_length=1,
    )
    slideDurationMs: float = Field(
        default=280.0,
        description="Home slide transition duration in milliseconds",
        gt=0,
    )
    frameIntervalMs: float = Field(
        default=16.0,
        description="Animation frame interval in milliseconds",
        gt=0,
    )

    # Performance monitoring
    resourceLogging: bool = Field(
        default=False,
        description="Enable native resource-timing capture by default",
    )
    maxEventHistory: int = Field(
        default=100,
        description="Maximum events kept in bus history",
        ge=0,
    )
    maxMeasureHistory: int = Field(
        default=1000,
        description="Maximum measures kept by the measure engine",
        ge=1,
    )
    maxMetricHistory: int = Field(
        default=10000,
        description="Maximum metric records kept in memory",
        ge=1,
    )

    # Logging
    logLevel: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level",
    )


# Global settings instance
_settings: Settings | None = None


def getSettings() -> Settings:
    """Get the global settings instance.

    Returns:
        The Settings instance, creating it if necessary.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def resetSettings() -> None:
    """Reset global settings (useful for testing)."""
    global _settings
    _settings = None
