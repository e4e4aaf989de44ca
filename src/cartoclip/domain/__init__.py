"""Domain models for cartoclip.

This module contains the core domain models representing coordinates, path
segments and the capabilities the clipping core consumes. All models are
designed to be:

- Immutable (using frozen dataclasses)
- Serializable to plain dictionaries
- Independent of any projection or rendering library

Key classes:
- Location, Point, Place: coordinate pairs and their two readings
- PathSegment and its kinds: MoveTo, LineTo, ArcTo, QuadraticTo, CubicTo,
  ClosePath, MeridianArc, ParallelArc
- Side: result of a containment query
- Domain, MapProjection: capabilities supplied by the caller
- Plane, Sphere: the two stock domains
"""

from cartoclip.domain.capabilities import Domain, MapProjection, Plane, Side, Sphere
from cartoclip.domain.location import Location, Place, Point
from cartoclip.domain.segment import (
    ArcTo,
    ClosePath,
    CubicTo,
    LineTo,
    MeridianArc,
    MoveTo,
    ParallelArc,
    PathSegment,
    QuadraticTo,
    ensure_finite,
    segment_from_args,
)

__all__: list[str] = [
    # Enums
    "Side",
    # Coordinates
    "Location",
    "Place",
    "Point",
    # Segments
    "ArcTo",
    "ClosePath",
    "CubicTo",
    "LineTo",
    "MeridianArc",
    "MoveTo",
    "ParallelArc",
    "PathSegment",
    "QuadraticTo",
    "ensure_finite",
    "segment_from_args",
    # Capabilities
    "Domain",
    "MapProjection",
    "Plane",
    "Sphere",
]
