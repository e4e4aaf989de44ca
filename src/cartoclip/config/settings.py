"""Configuration settings for Cartoclip."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class ClipConfig(BaseModel):
    """Configuration for the clipping engine."""

    max_iterations: int = Field(
        default=100_000,
        ge=1,
        description="Iteration budget for splitting and re-stitching before giving up",
    )
    close_path: bool = Field(
        default=False,
        description="Trace boundary edges so clipped shapes stay closed",
    )


class ProjectionConfig(BaseModel):
    """Configuration for the adaptive projector.

    The precision is measured in plane units of the projection output, so it
    has to be chosen together with the projection's scale.
    """

    precision: float = Field(
        default=0.01,
        gt=0.0,
        description="Longest projected chord allowed before a line is subdivided",
    )
    max_points: int = Field(
        default=100_000,
        ge=1,
        description="Budget of pending plus emitted points while subdividing",
    )
    central_meridian: float = Field(
        default=0.0,
        ge=-4.0,
        le=4.0,
        description="Central meridian in radians, applied before projecting",
    )
    north_up: bool = Field(
        default=True,
        description="Keep north at the top (False rotates the output 180 degrees)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: LogLevel = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: LogLevel = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )

    @field_validator("log_level", "file_log_level", mode="before")
    @classmethod
    def upper_case_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


class CartoclipSettings(BaseModel):
    """Main application settings."""

    clip: ClipConfig = Field(default_factory=ClipConfig)
    projection: ProjectionConfig = Field(default_factory=ProjectionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> CartoclipSettings:
    """Get default application settings."""
    return CartoclipSettings()
