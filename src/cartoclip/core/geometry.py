"""Geometric primitives for clipping and containment.

This module provides the basic math the rest of the core is built on:
- Wrapping values into a periodic window
- Inclusive range tests
- Line segment intersection
- Bounding boxes of paths, arcs included
- Midpoints of segments on the plane and on the sphere

All functions are pure and stateless.
"""

import math
from dataclasses import dataclass

from cartoclip.core._arcs import arc_center, circular_radius, is_on_arc
from cartoclip.domain import (
    ArcTo,
    ClosePath,
    CubicTo,
    LineTo,
    Location,
    MeridianArc,
    ParallelArc,
    PathSegment,
    Point,
    QuadraticTo,
)
from cartoclip.exceptions import ImpossibleArcError, MalformedPathError, UnsupportedSegmentError


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned bounding box of a path.

    Attributes:
        s_min: Smallest first coordinate
        s_max: Largest first coordinate
        t_min: Smallest second coordinate
        t_max: Largest second coordinate
    """

    s_min: float
    s_max: float
    t_min: float
    t_max: float

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Convert to a (s_min, s_max, t_min, t_max) tuple."""
        return (self.s_min, self.s_max, self.t_min, self.t_max)


def localize_in_range(value: float, minimum: float, maximum: float) -> float:
    """Wrap a value into the half-open window [minimum, maximum).

    Examples:
        >>> localize_in_range(3.0, -1.0, 1.0)
        -1.0
        >>> localize_in_range(0.5, 0.0, 1.0)
        0.5
    """
    span = maximum - minimum
    return value - math.floor((value - minimum) / span) * span


def is_between(value: float, a: float, b: float) -> bool:
    """Check whether value lies between a and b, ends included, in either order."""
    return min(a, b) <= value <= max(a, b)


def line_line_intersection(a0: Point, a1: Point, b0: Point, b1: Point) -> Point | None:
    """Find where segment a0-a1 crosses edge b0-b1.

    The edge is treated as the reference: a coordinate it holds constant is
    copied exactly into the result, and the result is clamped into the
    edge's bounding box. This keeps crossings with axis-aligned edges exactly
    on the edge so later lookups along the boundary find them.

    Args:
        a0: Start of the segment
        a1: End of the segment
        b0: Start of the edge
        b1: End of the edge

    Returns:
        The crossing point, or None if the segments are parallel or miss

    Examples:
        >>> line_line_intersection(Point(0, 0), Point(2, 2), Point(0, 2), Point(2, 0))
        Point(x=1.0, y=1.0)
    """
    denominator = (a0.x - a1.x) * (b0.y - b1.y) - (a0.y - a1.y) * (b0.x - b1.x)
    if denominator == 0:
        return None

    along_a = ((a0.x - b0.x) * (b0.y - b1.y) - (a0.y - b0.y) * (b0.x - b1.x)) / denominator
    along_b = -((a0.x - a1.x) * (a0.y - b0.y) - (a0.y - a1.y) * (a0.x - b0.x)) / denominator
    if not (0 <= along_a <= 1 and 0 <= along_b <= 1):
        return None

    if b0.x == b1.x:
        x = b0.x
    elif a0.x == a1.x:
        x = a0.x
    else:
        x = b0.x + along_b * (b1.x - b0.x)
    if b0.y == b1.y:
        y = b0.y
    elif a0.y == a1.y:
        y = a0.y
    else:
        y = b0.y + along_b * (b1.y - b0.y)

    x = min(max(x, min(b0.x, b1.x)), max(b0.x, b1.x))
    y = min(max(y, min(b0.y, b1.y)), max(b0.y, b1.y))
    return Point(x, y)


def _arc_extent(start: Point, arc: ArcTo) -> list[Point]:
    """Points whose bounding box is the bounding box of the arc, start excluded."""
    end = Point(arc.s, arc.t)
    radius = circular_radius(arc)
    chord = math.hypot(end.x - start.x, end.y - start.y)
    if chord == 0:
        raise ImpossibleArcError(f"start and end coincide at ({start.x}, {start.y})")
    if chord > 2 * radius:
        raise ImpossibleArcError(
            f"chord of length {chord} does not fit in a circle of radius {radius}"
        )

    center = arc_center(start, end, radius, arc.large_arc != arc.sweep)
    extrema = [
        Point(center.x + radius, center.y),
        Point(center.x - radius, center.y),
        Point(center.x, center.y + radius),
        Point(center.x, center.y - radius),
    ]
    return [end] + [point for point in extrema if is_on_arc(start, end, arc.sweep, point)]


def calculate_bounds(segments: list[PathSegment]) -> Bounds:
    """Compute the bounding box of a path.

    Bezier curves contribute their control points, so their boxes may be
    loose. Arcs contribute every axis extreme of their circle that falls on
    the swept part.

    Args:
        segments: The path

    Returns:
        The bounding box

    Raises:
        MalformedPathError: If the path is empty or starts with an arc
        ImpossibleArcError: If an arc is degenerate or too short for its chord
    """
    if not segments:
        raise MalformedPathError("cannot compute the bounds of an empty path")

    points: list[Point] = []
    previous: Location | None = None
    for segment in segments:
        if isinstance(segment, ArcTo):
            if previous is None:
                raise MalformedPathError("path cannot start with an arc")
            points.extend(_arc_extent(Point(previous.s, previous.t), segment))
        elif isinstance(segment, (QuadraticTo, CubicTo)):
            points.extend(Point(c.s, c.t) for c in segment.control_points)
            points.append(Point(segment.s, segment.t))
        elif not isinstance(segment, ClosePath):
            points.append(Point(segment.s, segment.t))
        previous = segment.end

    return Bounds(
        s_min=min(p.x for p in points),
        s_max=max(p.x for p in points),
        t_min=min(p.y for p in points),
        t_max=max(p.y for p in points),
    )


def _wrapped_mean(a: float, b: float, periodic: bool) -> float:
    mean = (a + b) / 2
    if periodic and abs(b - a) > math.pi:
        return localize_in_range(mean + math.pi, -math.pi, math.pi)
    return mean


def midpoint(prev: Location, segment: PathSegment, periodic: bool = False) -> Location:
    """Find a point halfway along a segment.

    Args:
        prev: Start of the segment (endpoint of the segment before it)
        segment: The segment
        periodic: Whether both coordinates wrap at plus or minus pi

    Returns:
        The midpoint. For lines on a periodic domain whose ends are more than
        pi apart, the midpoint is taken the short way around.

    Raises:
        UnsupportedSegmentError: For Bezier curves and moves
    """
    if isinstance(segment, (LineTo, ClosePath)):
        return Location(
            _wrapped_mean(prev.s, segment.s, periodic),
            _wrapped_mean(prev.t, segment.t, periodic),
        )
    if isinstance(segment, (MeridianArc, ParallelArc)):
        return Location((prev.s + segment.s) / 2, (prev.t + segment.t) / 2)
    if isinstance(segment, ArcTo):
        start = Point(prev.s, prev.t)
        end = Point(segment.s, segment.t)
        radius = circular_radius(segment)
        center = arc_center(start, end, radius, segment.large_arc != segment.sweep)
        angle0 = math.atan2(start.y - center.y, start.x - center.x)
        angle1 = math.atan2(end.y - center.y, end.x - center.x)
        if segment.sweep:
            angle = angle0 + ((angle1 - angle0) % (2 * math.pi)) / 2
        else:
            angle = angle0 - ((angle0 - angle1) % (2 * math.pi)) / 2
        return Location(center.x + radius * math.cos(angle), center.y + radius * math.sin(angle))
    raise UnsupportedSegmentError(segment.code, "midpoint")
