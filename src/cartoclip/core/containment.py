"""Point-in-region tests for directed polygons.

The direction of a polygon matters: walking along its edge, points on the
walker's left are IN and points on the right are OUT. The frame is
left-handed, as on an SVG screen, so with y pointing down a polygon drawn
clockwise on screen encloses its inside.

Rather than counting crossings of a probe line, contains() sums them,
weighting each by the inverse of its distance to the point. Two crossings of
opposite direction at the same spot (a vertex touching the probe) then
cancel exactly, and the sign of the sum follows the nearest crossing that
actually matters.
"""

import math

from cartoclip.core._arcs import arc_center, circular_radius, is_on_arc
from cartoclip.core.geometry import calculate_bounds, is_between, localize_in_range, midpoint
from cartoclip.domain import (
    ArcTo,
    ClosePath,
    LineTo,
    Location,
    MeridianArc,
    MoveTo,
    ParallelArc,
    PathSegment,
    Point,
    Side,
)
from cartoclip.exceptions import (
    AmbiguousContainmentError,
    MalformedPathError,
    UnsupportedSegmentError,
)


def _lies_on_edge(start: Location, end: Location, point: Location, wraps: bool, periodic: bool) -> bool:
    in_s_range = is_between(point.s, start.s, end.s)
    in_t_range = is_between(point.t, start.t, end.t)
    if periodic and wraps:
        if abs(start.s - end.s) > math.pi:
            in_s_range = not in_s_range
        if abs(start.t - end.t) > math.pi:
            in_t_range = not in_t_range
    if not (in_s_range and in_t_range):
        return False
    return (start.s == end.s == point.s) or (start.t == end.t == point.t)


def _line_probe(
    start: Location, end: Location, point: Location, periodic: bool
) -> list[tuple[float, bool]]:
    start_s, start_t = start.s, start.t
    end_s, end_t = end.s, end.t
    crosses = (start_t < point.t) != (end_t < point.t)
    going_east = end_t > start_t
    if periodic:
        if abs(end_t - start_t) > math.pi:
            crosses = not crosses
            going_east = not going_east
            start_t = localize_in_range(start_t, point.t - math.pi, point.t + math.pi)
            end_t = localize_in_range(end_t, point.t - math.pi, point.t + math.pi)
        end_s = localize_in_range(end_s, start_s - math.pi, start_s + math.pi)
    if not crosses:
        return []

    start_weight = (end_t - point.t) / (end_t - start_t)
    s = start_weight * start_s + (1 - start_weight) * end_s
    if periodic:
        s = localize_in_range(s, -math.pi, math.pi)
    return [(s, going_east)]


def _arc_probe(start: Location, arc: ArcTo, point: Location) -> list[tuple[float, bool]]:
    radius = circular_radius(arc)
    q0 = Point(start.s, start.t)
    q1 = Point(arc.s, arc.t)
    center = arc_center(q0, q1, radius, arc.large_arc != arc.sweep)

    discriminant = radius * radius - (point.t - center.y) ** 2
    if discriminant < 0:
        return []

    intersections = []
    for sign in (-1, 1):
        x = center.x + sign * math.sqrt(discriminant)
        vy = x - center.x if arc.sweep else center.x - x
        if vy == 0:  # tangent
            continue
        if not is_on_arc(q0, q1, arc.sweep, Point(x, point.t)):
            continue
        # an endpoint on the probe line counts as above it, as for lines
        if x == q0.x and point.t == q0.y and vy > 0:
            continue
        if x == q1.x and point.t == q1.y and vy < 0:
            continue
        intersections.append((x, vy > 0))
    return intersections


def _probe_crossings(
    start: Location, segment: PathSegment, point: Location, periodic: bool
) -> list[tuple[float, bool]]:
    """Where a polygon segment crosses the line of constant t through the point."""
    if isinstance(segment, (MoveTo, MeridianArc)):
        return []
    if isinstance(segment, ParallelArc):
        if (start.t < point.t) != (segment.t < point.t):
            return [(segment.s, segment.t > start.t)]
        return []
    if isinstance(segment, (LineTo, ClosePath)):
        return _line_probe(start, segment.end, point, periodic)
    if isinstance(segment, ArcTo):
        if periodic:
            raise UnsupportedSegmentError("A", "containment on a periodic domain")
        return _arc_probe(start, segment, point)
    raise UnsupportedSegmentError(segment.code, "containment")


def _outside_probe(polygon: list[PathSegment], point: Location, periodic: bool) -> Location:
    """Pick a point beyond the polygon's bounding box on a line the polygon crosses."""
    bounds = calculate_bounds(polygon)
    s_out = 2 * bounds.s_max - bounds.s_min
    crossable = False
    for i in range(1, len(polygon)):
        segment = polygon[i]
        if isinstance(segment, MoveTo):
            continue
        start = polygon[i - 1].end
        if isinstance(segment, ArcTo) or start.t != segment.t:
            crossable = True
            known = midpoint(start, segment, periodic)
            if known.s != point.s:
                return Location(s_out, known.t)
    if crossable:
        raise AmbiguousContainmentError(point.s, point.t)
    raise MalformedPathError("polygon has no segment a probe line could cross")


def contains(
    polygon: list[PathSegment], point: Location, periodic: bool, guaranteed: bool = False
) -> Side:
    """Find out whether a directed polygon contains a point.

    Args:
        polygon: The region. It may jump across the edges of a periodic
            domain but must not intersect itself.
        point: The point to test
        periodic: Whether coordinates wrap at plus or minus pi
        guaranteed: Set on the internal re-probe from outside the bounding
            box, which must not come out ambiguous again

    Returns:
        IN if the point is inside, OUT if outside, BORDERLINE if on the edge.
        An empty polygon contains everything.

    Raises:
        UnsupportedSegmentError: If the polygon has Bezier segments, or arcs
            on a periodic domain
        MalformedPathError: If the polygon has no area a probe line could cross
        AmbiguousContainmentError: If the re-probe cannot decide either
    """
    if not polygon:
        return Side.IN

    for i in range(1, len(polygon)):
        segment = polygon[i]
        if isinstance(segment, (LineTo, ClosePath, ParallelArc, MeridianArc)):
            wraps = isinstance(segment, (LineTo, ClosePath))
            if _lies_on_edge(polygon[i - 1].end, segment.end, point, wraps, periodic):
                return Side.BORDERLINE

    crossing_sum = 0.0
    for i in range(1, len(polygon)):
        for s, going_east in _probe_crossings(polygon[i - 1].end, polygon[i], point, periodic):
            distance = s - point.s
            if distance == 0:
                return Side.BORDERLINE
            crossing_sum += -1 / distance if going_east else 1 / distance

    if crossing_sum > 0:
        return Side.IN
    if crossing_sum < 0:
        return Side.OUT

    if guaranteed:
        raise AmbiguousContainmentError(point.s, point.t)
    return contains(polygon, _outside_probe(polygon, point, periodic), periodic, guaranteed=True)


def encompasses(polygon: list[PathSegment], points: list[PathSegment], periodic: bool) -> Side:
    """Find out whether a polygon contains a whole path.

    The endpoints of the path are tried first, then the midpoints of its
    segments; the first answer that is not BORDERLINE wins.

    Args:
        polygon: The region
        points: The path to test
        periodic: Whether coordinates wrap at plus or minus pi

    Returns:
        IN or OUT, or BORDERLINE if the path runs entirely along the edge
    """
    for segment in points:
        side = contains(polygon, segment.end, periodic)
        if side is not Side.BORDERLINE:
            return side
    for i in range(1, len(points)):
        if isinstance(points[i], MoveTo):
            continue
        side = contains(polygon, midpoint(points[i - 1].end, points[i], periodic), periodic)
        if side is not Side.BORDERLINE:
            return side
    return Side.BORDERLINE
