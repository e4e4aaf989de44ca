"""Configuration management for cartoclip.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ClipConfig: Clipping engine settings
- ProjectionConfig: Adaptive projector settings
- LoggingConfig: Logging settings
- CartoclipSettings: Main application settings
"""

from cartoclip.config.settings import (
    CartoclipSettings,
    ClipConfig,
    LoggingConfig,
    ProjectionConfig,
    get_default_settings,
)

__all__ = [
    "CartoclipSettings",
    "ClipConfig",
    "LoggingConfig",
    "ProjectionConfig",
    "get_default_settings",
]
