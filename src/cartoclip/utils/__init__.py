"""Utility functions for cartoclip.

This module provides utility functions including:

- Logging setup and configuration
- Per-run statistics tracking
"""

from cartoclip.utils.logging import (
    ClippingLogger,
    ClipStats,
    configure_logging,
)

__all__ = [
    "ClipStats",
    "ClippingLogger",
    "configure_logging",
]
