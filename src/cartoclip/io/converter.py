"""Converters between path text, JSON data and domain models.

The text form is a compact SVG-like notation used for diagnostics and for
path files:

    M0,0 L1,0.5 A1,1,0,0,1,2,2 Φ0,1 Λ1,1 Z

Commands are single upper-case letters. Arguments are separated by commas or
whitespace. A Z without arguments closes back to the start of its run.
"""

import math
import re
from typing import Any

from cartoclip.domain import ClosePath, MoveTo, PathSegment, segment_from_args
from cartoclip.exceptions import MalformedPathError, PathFormatError

_COMMAND_PATTERN = re.compile(r"([MLZAQCΦΛ])([^MLZAQCΦΛ]*)")


def _format_number(value: float) -> str:
    if math.isfinite(value) and value == int(value) and abs(value) < 1e15:
        return str(int(value))
    return f"{value:.12g}"


def path_to_string(path: list[PathSegment]) -> str:
    """Render a path in the compact text notation.

    Args:
        path: The path to render

    Returns:
        Text such as "M0,0 L1,0.5 Z0,0"
    """
    return " ".join(
        segment.code + ",".join(_format_number(arg) for arg in segment.args)
        for segment in path
    )


def parse_path(text: str) -> list[PathSegment]:
    """Parse a path from the compact text notation.

    Args:
        text: Path text

    Returns:
        List of segments

    Raises:
        PathFormatError: If the text is not a valid path
    """
    stripped = text.strip()
    if not stripped:
        return []

    leading = _COMMAND_PATTERN.split(stripped, maxsplit=1)[0]
    if leading.strip():
        raise PathFormatError(f"unexpected text before the first command: {leading.strip()!r}")

    segments: list[PathSegment] = []
    run_start: MoveTo | None = None
    for match in _COMMAND_PATTERN.finditer(stripped):
        code, body = match.group(1), match.group(2)
        tokens = [token for token in re.split(r"[,\s]+", body.strip()) if token]
        try:
            args = [float(token) for token in tokens]
        except ValueError as e:
            raise PathFormatError(f"bad number in '{code}{body.strip()}': {e}") from e

        if code == "Z" and not args:
            if run_start is None:
                raise PathFormatError("'Z' before any 'M'")
            segments.append(ClosePath(run_start.s, run_start.t))
            continue

        try:
            segment = segment_from_args(code, args)
        except MalformedPathError as e:
            raise PathFormatError(str(e)) from e
        if isinstance(segment, MoveTo):
            run_start = segment
        segments.append(segment)
    return segments


def path_to_data(path: list[PathSegment]) -> list[dict[str, Any]]:
    """Convert a path to JSON-ready data."""
    return [segment.to_dict() for segment in path]


def path_from_data(data: Any) -> list[PathSegment]:
    """Build a path from JSON data.

    Args:
        data: A list of {"type": ..., "args": [...]} objects

    Returns:
        List of segments

    Raises:
        PathFormatError: If the data does not describe a path
    """
    if not isinstance(data, list):
        raise PathFormatError(f"expected a list of segments, got {type(data).__name__}")

    segments = []
    for i, item in enumerate(data):
        if not isinstance(item, dict) or "type" not in item or "args" not in item:
            raise PathFormatError(f"segment {i} needs 'type' and 'args' fields")
        try:
            segments.append(PathSegment.from_dict(item))
        except (MalformedPathError, TypeError, ValueError) as e:
            raise PathFormatError(f"segment {i}: {e}") from e
    return segments
