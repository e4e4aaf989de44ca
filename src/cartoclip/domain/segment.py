"""Path segment types.

A path is a list of segments that always starts with a MoveTo. Each kind of
segment is its own frozen dataclass carrying typed fields, so code never has
to index into positional argument lists:
- MoveTo, LineTo, ClosePath: straight moves on either domain
- ArcTo: circular arc on the plane (SVG arc semantics)
- QuadraticTo, CubicTo: Bezier curves on the plane
- MeridianArc: a line of constant longitude on the sphere (code Λ)
- ParallelArc: a line of constant latitude on the sphere (code Φ)

Every segment stores only its own endpoint; its start is the endpoint of the
segment before it.
"""

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from typing import Any, ClassVar

from cartoclip.domain.location import Location
from cartoclip.exceptions import MalformedPathError, NonFiniteCoordinateError


class PathSegment:
    """Common interface of every segment kind."""

    __slots__ = ()

    code: ClassVar[str] = "?"

    s: float
    t: float

    @property
    def args(self) -> tuple[float, ...]:
        """Positional arguments in SVG order, for text and JSON output."""
        return (self.s, self.t)

    @property
    def end(self) -> Location:
        """The endpoint of this segment."""
        return Location(self.s, self.t)

    def moved_to(self, location: Location) -> "PathSegment":
        """Return a segment of the same kind ending at a different location."""
        return replace(self, s=location.s, t=location.t)  # type: ignore[type-var]

    def transformed(self, transform: Callable[[Location], Location]) -> "PathSegment":
        """Apply a coordinate map to every coordinate pair of this segment."""
        return self.moved_to(transform(self.end))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with the segment code and its arguments
        """
        return {"type": self.code, "args": list(self.args)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PathSegment":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with type and args fields

        Returns:
            Segment of the kind named by the type field
        """
        return segment_from_args(data["type"], data["args"])


@dataclass(frozen=True, slots=True)
class MoveTo(PathSegment):
    """Start a new run of the path without drawing."""

    code: ClassVar[str] = "M"

    s: float
    t: float


@dataclass(frozen=True, slots=True)
class LineTo(PathSegment):
    """Straight line to the endpoint."""

    code: ClassVar[str] = "L"

    s: float
    t: float


@dataclass(frozen=True, slots=True)
class ClosePath(PathSegment):
    """Straight line back to the start of the current run."""

    code: ClassVar[str] = "Z"

    s: float
    t: float


@dataclass(frozen=True, slots=True)
class MeridianArc(PathSegment):
    """Arc along a meridian; latitude changes, longitude stays put."""

    code: ClassVar[str] = "Λ"

    s: float
    t: float


@dataclass(frozen=True, slots=True)
class ParallelArc(PathSegment):
    """Arc along a parallel; longitude changes, latitude stays put."""

    code: ClassVar[str] = "Φ"

    s: float
    t: float


@dataclass(frozen=True, slots=True)
class ArcTo(PathSegment):
    """Elliptical arc with SVG semantics.

    The engine only handles circular arcs (rx == ry); rotation is carried
    along but otherwise ignored.

    Attributes:
        rx: Horizontal radius
        ry: Vertical radius
        rotation: Rotation of the ellipse in degrees
        large_arc: Whether the arc spans more than half the circle
        sweep: Whether the arc runs toward increasing angle (clockwise on screen)
        s: Endpoint first coordinate
        t: Endpoint second coordinate
    """

    code: ClassVar[str] = "A"

    rx: float
    ry: float
    rotation: float
    large_arc: bool
    sweep: bool
    s: float
    t: float

    @property
    def args(self) -> tuple[float, ...]:
        return (
            self.rx, self.ry, self.rotation,
            int(self.large_arc), int(self.sweep),
            self.s, self.t,
        )


@dataclass(frozen=True, slots=True)
class QuadraticTo(PathSegment):
    """Quadratic Bezier curve with one control point."""

    code: ClassVar[str] = "Q"

    s1: float
    t1: float
    s: float
    t: float

    @property
    def args(self) -> tuple[float, ...]:
        return (self.s1, self.t1, self.s, self.t)

    @property
    def control_points(self) -> list[Location]:
        """Control points, excluding the endpoint."""
        return [Location(self.s1, self.t1)]

    def transformed(self, transform: Callable[[Location], Location]) -> "QuadraticTo":
        control = transform(Location(self.s1, self.t1))
        end = transform(self.end)
        return QuadraticTo(control.s, control.t, end.s, end.t)


@dataclass(frozen=True, slots=True)
class CubicTo(PathSegment):
    """Cubic Bezier curve with two control points."""

    code: ClassVar[str] = "C"

    s1: float
    t1: float
    s2: float
    t2: float
    s: float
    t: float

    @property
    def args(self) -> tuple[float, ...]:
        return (self.s1, self.t1, self.s2, self.t2, self.s, self.t)

    @property
    def control_points(self) -> list[Location]:
        """Control points, excluding the endpoint."""
        return [Location(self.s1, self.t1), Location(self.s2, self.t2)]

    def transformed(self, transform: Callable[[Location], Location]) -> "CubicTo":
        first = transform(Location(self.s1, self.t1))
        second = transform(Location(self.s2, self.t2))
        end = transform(self.end)
        return CubicTo(first.s, first.t, second.s, second.t, end.s, end.t)


SEGMENT_TYPES: dict[str, type[PathSegment]] = {
    kind.code: kind
    for kind in (MoveTo, LineTo, ClosePath, MeridianArc, ParallelArc, ArcTo, QuadraticTo, CubicTo)
}

ARG_COUNTS: dict[str, int] = {
    "M": 2, "L": 2, "Z": 2, "Λ": 2, "Φ": 2, "A": 7, "Q": 4, "C": 6,
}


def segment_from_args(code: str, args: Iterable[float]) -> PathSegment:
    """Build a segment from its code and positional arguments.

    Args:
        code: One-letter segment code (M, L, Z, A, Q, C, Λ or Φ)
        args: Arguments in SVG order

    Returns:
        The corresponding segment

    Raises:
        MalformedPathError: If the code is unknown or the argument count is wrong
    """
    values = [float(arg) for arg in args]
    if code not in SEGMENT_TYPES:
        raise MalformedPathError(f"Unknown segment type '{code}'")
    if len(values) != ARG_COUNTS[code]:
        raise MalformedPathError(
            f"'{code}' segments take {ARG_COUNTS[code]} arguments, got {len(values)}"
        )
    if code == "A":
        rx, ry, rotation, large_arc, sweep, s, t = values
        return ArcTo(rx, ry, rotation, large_arc != 0, sweep != 0, s, t)
    return SEGMENT_TYPES[code](*values)


def ensure_finite(segments: Iterable[PathSegment], where: str = "path") -> None:
    """Check that a path has no NaN or infinite arguments.

    Args:
        segments: The path to check
        where: Description of the path, used in the error message

    Raises:
        NonFiniteCoordinateError: On the first non-finite argument
    """
    for segment in segments:
        for arg in segment.args:
            if not math.isfinite(arg):
                raise NonFiniteCoordinateError(arg, where)
