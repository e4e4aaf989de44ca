"""Boundary bookkeeping: edge loops, positions along them, and closure.

A boundary is a path made of one or more edge loops, each starting with a
MoveTo. The clipper needs to know where on those loops a point lies so it
can walk along the boundary from where one kept section leaves it to where
the next one comes back.
"""

import math
from dataclasses import dataclass

from cartoclip.core._arcs import arc_center, circular_radius, is_on_arc
from cartoclip.core.geometry import is_between, localize_in_range
from cartoclip.domain import (
    ArcTo,
    Domain,
    LineTo,
    Location,
    MeridianArc,
    MoveTo,
    ParallelArc,
    PathSegment,
    Point,
)
from cartoclip.exceptions import MalformedPathError


@dataclass(frozen=True, slots=True)
class BoundaryPosition:
    """Where a point sits on a boundary.

    Attributes:
        loop: Index of the edge loop, or None if the point is on no edge
        index: Index of the edge within its loop plus the fraction of the way
            along it, or None if the point is on no edge
    """

    loop: int | None
    index: float | None


def split_loops(path: list[PathSegment]) -> list[list[PathSegment]]:
    """Split a path into its MoveTo-initiated runs.

    Raises:
        MalformedPathError: If the path does not start with a MoveTo
    """
    loops: list[list[PathSegment]] = []
    for segment in path:
        if isinstance(segment, MoveTo):
            loops.append([])
        elif not loops:
            raise MalformedPathError(f"path must begin with a moveto, not '{segment.code}'")
        loops[-1].append(segment)
    return loops


def position_on_boundary(point: Location, boundary: list[PathSegment]) -> BoundaryPosition:
    """Find how far along the boundary a point lies.

    The first edge whose bounding box holds the point wins, so this is only
    meaningful for points that really are on an edge.

    Args:
        point: The point to place
        boundary: The boundary loops

    Returns:
        The loop index and the fractional edge index, both None when the point
        is on no edge
    """
    loop_index = 0
    segment_index = 0
    for i in range(1, len(boundary)):
        if isinstance(boundary[i], MoveTo):
            loop_index += 1
            segment_index = 0
            continue

        start = boundary[i - 1].end
        end = boundary[i].end
        on_this_edge = (
            min(start.s, end.s) <= point.s <= max(start.s, end.s)
            and min(start.t, end.t) <= point.t <= max(start.t, end.t)
        )
        if on_this_edge:
            ds, dt = end.s - start.s, end.t - start.t
            dot = (point.s - start.s) * ds + (point.t - start.t) * dt
            return BoundaryPosition(loop_index, segment_index + dot / (ds * ds + dt * dt))

        segment_index += 1
    return BoundaryPosition(None, None)


def is_on_boundary(point: Location, boundary: list[PathSegment], tolerance: float = 1e-9) -> bool:
    """Check whether a point lies on one of a boundary's edges.

    Unlike position_on_boundary this does not trust the point: it must be
    within the edge's bounding box and on the edge itself, up to a tolerance
    relative to the edge's size.

    Raises:
        UnsupportedSegmentError: If an arc edge is elliptical
    """
    for i in range(1, len(boundary)):
        edge = boundary[i]
        if isinstance(edge, MoveTo):
            continue
        start = boundary[i - 1].end
        end = edge.end

        if isinstance(edge, ArcTo):
            radius = circular_radius(edge)
            q0 = Point(start.s, start.t)
            q1 = Point(end.s, end.t)
            center = arc_center(q0, q1, radius, edge.large_arc != edge.sweep)
            off_circle = abs(math.hypot(point.s - center.x, point.t - center.y) - radius)
            if off_circle <= tolerance * radius and is_on_arc(
                q0, q1, edge.sweep, Point(point.s, point.t)
            ):
                return True
            continue

        if not (is_between(point.s, start.s, end.s) and is_between(point.t, start.t, end.t)):
            continue
        ds, dt = end.s - start.s, end.t - start.t
        cross = ds * (point.t - start.t) - dt * (point.s - start.s)
        if abs(cross) <= tolerance * (ds * ds + dt * dt):
            return True
    return False


def is_closed(path: list[PathSegment], domain: Domain) -> bool:
    """Check that every run of a path either closes or runs edge to edge.

    Args:
        path: The path to check
        domain: The domain the path lives in, which knows where its edges are

    Returns:
        True if every run ends where it started or starts and ends on the
        domain's edge

    Raises:
        MalformedPathError: If the path does not start with a MoveTo
    """
    start: Location | None = None
    for i, segment in enumerate(path):
        if isinstance(segment, MoveTo):
            start = segment.end
        if i + 1 < len(path) and not isinstance(path[i + 1], MoveTo):
            continue

        if start is None:
            raise MalformedPathError(f"path must begin with a moveto, not '{path[0].code}'")
        end = segment.end
        if domain.is_periodic():
            start = Location(
                localize_in_range(start.s, -math.pi, math.pi),
                localize_in_range(start.t, -math.pi, math.pi),
            )
            end = Location(
                localize_in_range(end.s, -math.pi, math.pi),
                localize_in_range(end.t, -math.pi, math.pi),
            )

        ends_on_start = start == end
        ends_on_edge = domain.is_on_edge(start.as_place()) and domain.is_on_edge(end.as_place())
        if not ends_on_start and not ends_on_edge:
            return False
    return True


def rectangle(s0: float, t0: float, s1: float, t1: float, geographic: bool) -> list[PathSegment]:
    """Build a closed rectangular boundary.

    The rectangle is drawn so that its interior counts as inside. On the
    sphere its sides are parallels and meridians, so it follows lines of
    constant latitude and longitude instead of cutting corners.

    Args:
        s0: First coordinate of the starting corner
        t0: Second coordinate of the starting corner
        s1: First coordinate of the opposite corner
        t1: Second coordinate of the opposite corner
        geographic: Whether to build it from parallels and meridians

    Returns:
        The boundary path
    """
    along_t = ParallelArc if geographic else LineTo
    along_s = MeridianArc if geographic else LineTo
    return [
        MoveTo(s0, t0),
        along_t(s0, t1),
        along_s(s1, t1),
        along_t(s1, t0),
        along_s(s0, t0),
    ]
