"""Command-line interface for cartoclip.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- clip: crop a path to a boundary, optionally keeping it closed
- contains: classify a point against a polygon
- bounds: bounding box of a path
- project: adaptive projection with the equirectangular reference
"""

from cartoclip.cli.app import cli, main

__all__ = ["cli", "main"]
