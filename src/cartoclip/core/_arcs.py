"""Internal circular-arc helpers.

This is an internal module containing the circle math shared by the bounds,
midpoint, crossing and containment code. Not intended for public use.

All functions follow SVG arc semantics in plain (x, y) arithmetic: an arc
with the sweep flag set runs toward increasing angle, which is clockwise on a
y-down screen. The points of such an arc lie on the right of its chord, the
points of an arc without the sweep flag on the left.
"""

import math

from cartoclip.domain import ArcTo, Point
from cartoclip.exceptions import ImpossibleArcError, UnsupportedSegmentError


def circular_radius(arc: ArcTo) -> float:
    """Get the radius of a circular arc.

    Raises:
        UnsupportedSegmentError: If the arc is elliptical
    """
    if arc.rx != arc.ry:
        raise UnsupportedSegmentError("A", "circular arc math (rx must equal ry)")
    return arc.rx


def side_of_chord(start: Point, end: Point, point: Point) -> float:
    """Cross product telling which side of the chord start->end a point is on.

    Returns:
        Positive on the left, negative on the right, zero on the chord's line
    """
    return (end.x - start.x) * (point.y - start.y) - (end.y - start.y) * (point.x - start.x)


def is_on_arc(start: Point, end: Point, sweep: bool, point: Point) -> bool:
    """Check whether a point of the arc's circle belongs to the swept arc.

    The endpoints themselves count as on the arc.
    """
    side = side_of_chord(start, end, point)
    return side == 0 or (side < 0) == sweep


def is_acute(a: Point, vertex: Point, c: Point) -> bool:
    """Check whether the angle a-vertex-c is strictly acute."""
    return (a.x - vertex.x) * (c.x - vertex.x) + (a.y - vertex.y) * (c.y - vertex.y) > 0


def arc_center(start: Point, end: Point, radius: float, left: bool) -> Point:
    """Find the center of a circle of given radius through two points.

    Args:
        start: First point on the circle
        end: Second point on the circle
        radius: Radius of the circle
        left: Pick the center on the left of the chord start->end

    Returns:
        The center point

    Raises:
        ImpossibleArcError: If the two points coincide
    """
    chord = math.hypot(end.x - start.x, end.y - start.y)
    if chord == 0:
        raise ImpossibleArcError(f"start and end coincide at ({start.x}, {start.y})")
    apothem = math.sqrt(max(0.0, radius * radius - chord * chord / 4))
    sign = 1.0 if left else -1.0
    return Point(
        (start.x + end.x) / 2 - sign * apothem * (end.y - start.y) / chord,
        (start.y + end.y) / 2 + sign * apothem * (end.x - start.x) / chord,
    )


def line_arc_intersections(
    v0: Point, v1: Point, center: Point, radius: float, q0: Point, q1: Point
) -> list[Point]:
    """Find where a line segment crosses a swept arc.

    The arc runs from q0 to q1 with the sweep flag set. A coordinate the line
    holds constant is copied exactly into the result, so crossings with
    axis-aligned edges land exactly on them.

    Args:
        v0: Start of the line segment
        v1: End of the line segment
        center: Center of the arc's circle
        radius: Radius of the arc's circle
        q0: Start of the arc
        q1: End of the arc

    Returns:
        Zero, one or two crossing points
    """
    dx = v1.x - v0.x
    dy = v1.y - v0.y
    fx = v0.x - center.x
    fy = v0.y - center.y

    a = dx * dx + dy * dy
    if a == 0:
        return []
    b = 2 * (fx * dx + fy * dy)
    c = fx * fx + fy * fy - radius * radius
    discriminant = b * b - 4 * a * c
    if discriminant < 0:
        return []

    root = math.sqrt(discriminant)
    roots = [-b / (2 * a)] if root == 0 else [(-b - root) / (2 * a), (-b + root) / (2 * a)]

    crossings = []
    for u in roots:
        if not 0 <= u <= 1:
            continue
        point = Point(
            v0.x if dx == 0 else v0.x + u * dx,
            v0.y if dy == 0 else v0.y + u * dy,
        )
        if is_on_arc(q0, q1, True, point):
            crossings.append(point)
    return crossings
