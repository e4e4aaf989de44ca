"""Unit tests for geometry primitives and arc helpers."""

import math

import pytest

from cartoclip.core._arcs import (
    arc_center,
    is_acute,
    is_on_arc,
    line_arc_intersections,
)
from cartoclip.core.geometry import (
    Bounds,
    calculate_bounds,
    is_between,
    line_line_intersection,
    localize_in_range,
    midpoint,
)
from cartoclip.domain import (
    ArcTo,
    CubicTo,
    LineTo,
    Location,
    MoveTo,
    ParallelArc,
    Point,
    QuadraticTo,
)
from cartoclip.exceptions import (
    ImpossibleArcError,
    MalformedPathError,
    UnsupportedSegmentError,
)


class TestLocalizeInRange:
    """Tests for localize_in_range."""

    def test_value_inside_is_unchanged(self) -> None:
        """Test that values already in the window stay put."""
        assert localize_in_range(0.5, 0.0, 1.0) == 0.5

    def test_wraps_down(self) -> None:
        """Test wrapping a value above the window."""
        assert localize_in_range(3.0, -1.0, 1.0) == -1.0

    def test_wraps_up(self) -> None:
        """Test wrapping a value below the window."""
        assert localize_in_range(-2.5, 0.0, 1.0) == pytest.approx(0.5)

    def test_window_is_half_open(self) -> None:
        """Test that the upper end maps onto the lower end."""
        assert localize_in_range(math.pi, -math.pi, math.pi) == -math.pi
        assert localize_in_range(-math.pi, -math.pi, math.pi) == -math.pi


class TestIsBetween:
    """Tests for is_between."""

    def test_inclusive_in_either_order(self) -> None:
        """Test that both orders and both ends count."""
        assert is_between(0.5, 1.0, 0.0)
        assert is_between(1.0, 0.0, 1.0)
        assert is_between(0.0, 0.0, 1.0)

    def test_outside(self) -> None:
        """Test values outside the range."""
        assert not is_between(1.5, 0.0, 1.0)
        assert not is_between(-0.1, 1.0, 0.0)


class TestLineLineIntersection:
    """Tests for line_line_intersection."""

    def test_diagonals_cross(self) -> None:
        """Test two crossing diagonals."""
        assert line_line_intersection(
            Point(0, 0), Point(2, 2), Point(0, 2), Point(2, 0)
        ) == Point(1.0, 1.0)

    def test_snaps_to_axis_aligned_edge(self) -> None:
        """Test that the coordinate an edge holds constant is exact."""
        point = line_line_intersection(Point(-1, 0.3), Point(2, 0.9), Point(1, 1), Point(1, 0))
        assert point is not None
        assert point.x == 1
        assert point.y == pytest.approx(0.7)

    def test_horizontal_segment_on_vertical_edge(self) -> None:
        """Test that both coordinates are exact for axis-aligned inputs."""
        point = line_line_intersection(Point(-1, 0.5), Point(2, 0.5), Point(0, 0), Point(0, 1))
        assert point == Point(0, 0.5)

    def test_parallel(self) -> None:
        """Test that parallel segments do not cross."""
        assert line_line_intersection(Point(0, 0), Point(1, 0), Point(0, 1), Point(1, 1)) is None

    def test_miss(self) -> None:
        """Test segments whose lines cross outside the segment."""
        assert line_line_intersection(Point(0, 0), Point(1, 0), Point(2, -1), Point(2, 1)) is None

    def test_touching_endpoint(self) -> None:
        """Test that a segment ending on the edge crosses it."""
        point = line_line_intersection(Point(0.5, 0.5), Point(1, 0.5), Point(1, 1), Point(1, 0))
        assert point == Point(1, 0.5)


class TestCalculateBounds:
    """Tests for calculate_bounds."""

    def test_lines(self) -> None:
        """Test the box of a polygon."""
        path = [MoveTo(0, 0), LineTo(0, 1), LineTo(2, 1), LineTo(-1, 0)]
        assert calculate_bounds(path) == Bounds(-1, 2, 0, 1)

    @pytest.mark.parametrize(
        ("large_arc", "sweep", "expected"),
        [
            (False, True, (0, 1, 0, 1)),
            (True, False, (-1, 1, -1, 1)),
            (False, False, (0, 1, 0, 1)),
            (True, True, (0, 2, 0, 2)),
        ],
    )
    def test_arc_flags(self, large_arc: bool, sweep: bool, expected: tuple) -> None:
        """Test that arcs contribute the circle extremes they sweep through."""
        path = [MoveTo(1, 0), ArcTo(1, 1, 0, large_arc, sweep, 0, 1)]
        assert calculate_bounds(path).to_tuple() == pytest.approx(expected, abs=1e-12)

    def test_beziers_use_control_points(self) -> None:
        """Test that Bezier boxes include their control points."""
        path = [MoveTo(0, 0), QuadraticTo(1, 3, 2, 0), CubicTo(3, -2, 4, 0, 5, 0)]
        assert calculate_bounds(path) == Bounds(0, 5, -2, 3)

    def test_empty_path(self) -> None:
        """Test that an empty path has no bounds."""
        with pytest.raises(MalformedPathError):
            calculate_bounds([])

    def test_starts_with_arc(self) -> None:
        """Test that an arc needs a start point."""
        with pytest.raises(MalformedPathError):
            calculate_bounds([ArcTo(1, 1, 0, False, True, 1, 1)])

    def test_chord_too_long(self) -> None:
        """Test that an arc whose chord exceeds its diameter is rejected."""
        with pytest.raises(ImpossibleArcError):
            calculate_bounds([MoveTo(0, 0), ArcTo(1, 1, 0, False, True, 3, 0)])

    def test_zero_chord(self) -> None:
        """Test that an arc ending where it starts is rejected."""
        with pytest.raises(ImpossibleArcError):
            calculate_bounds([MoveTo(0, 0), ArcTo(1, 1, 0, False, True, 0, 0)])

    def test_elliptical_arc(self) -> None:
        """Test that elliptical arcs are not supported."""
        with pytest.raises(UnsupportedSegmentError):
            calculate_bounds([MoveTo(0, 0), ArcTo(1, 2, 0, False, True, 1, 1)])


class TestMidpoint:
    """Tests for midpoint."""

    def test_line(self) -> None:
        """Test the midpoint of a line."""
        assert midpoint(Location(0, 0), LineTo(2, 4)) == Location(1, 2)

    def test_periodic_line_goes_the_short_way(self) -> None:
        """Test that a line across the antimeridian has its midpoint on it."""
        result = midpoint(Location(0, 3.0), LineTo(0, -3.0), periodic=True)
        assert result == Location(0, -math.pi)

    def test_plane_line_goes_straight(self) -> None:
        """Test that the same line on the plane goes through zero."""
        assert midpoint(Location(0, 3.0), LineTo(0, -3.0)) == Location(0, 0)

    def test_parallel(self) -> None:
        """Test the midpoint of a parallel."""
        assert midpoint(Location(0.5, 0), ParallelArc(0.5, 1)) == Location(0.5, 0.5)

    def test_arc_with_sweep(self) -> None:
        """Test the midpoint of a quarter circle."""
        result = midpoint(Location(1, 0), ArcTo(1, 1, 0, False, True, 0, 1))
        assert result.to_tuple() == pytest.approx((math.sqrt(0.5), math.sqrt(0.5)))

    def test_large_arc_without_sweep(self) -> None:
        """Test the midpoint of a three-quarter circle."""
        result = midpoint(Location(1, 0), ArcTo(1, 1, 0, True, False, 0, 1))
        assert result.to_tuple() == pytest.approx((-math.sqrt(0.5), -math.sqrt(0.5)))

    def test_unsupported(self) -> None:
        """Test that moves and Beziers have no midpoint."""
        with pytest.raises(UnsupportedSegmentError):
            midpoint(Location(0, 0), MoveTo(1, 1))
        with pytest.raises(UnsupportedSegmentError):
            midpoint(Location(0, 0), CubicTo(0, 1, 1, 1, 1, 0))


class TestArcHelpers:
    """Tests for the circular arc helpers."""

    def test_arc_center_left_and_right(self) -> None:
        """Test both centers of a chord."""
        left = arc_center(Point(1, 0), Point(0, 1), 1, left=True)
        right = arc_center(Point(1, 0), Point(0, 1), 1, left=False)
        assert (left.x, left.y) == pytest.approx((0, 0), abs=1e-12)
        assert (right.x, right.y) == pytest.approx((1, 1))

    def test_arc_center_zero_chord(self) -> None:
        """Test that coinciding ends have no center."""
        with pytest.raises(ImpossibleArcError):
            arc_center(Point(1, 1), Point(1, 1), 1, left=True)

    def test_is_acute(self) -> None:
        """Test acute and right angles."""
        assert is_acute(Point(1, 0), Point(0, 0), Point(1, 1))
        assert not is_acute(Point(1, 0), Point(0, 0), Point(0, 1))
        assert not is_acute(Point(1, 0), Point(0, 0), Point(-1, 1))

    def test_is_on_arc(self) -> None:
        """Test which side of the chord a swept arc lies on."""
        start, end = Point(1, 0), Point(-1, 0)
        assert is_on_arc(start, end, True, Point(0, 1))
        assert not is_on_arc(start, end, True, Point(0, -1))
        assert is_on_arc(start, end, False, Point(0, -1))
        assert is_on_arc(start, end, False, end)

    def test_line_arc_intersections(self) -> None:
        """Test a vertical line through a quarter circle."""
        points = line_arc_intersections(
            Point(0.5, -2), Point(0.5, 2), Point(0, 0), 1, Point(1, 0), Point(0, 1)
        )
        assert len(points) == 1
        assert points[0].x == 0.5
        assert points[0].y == pytest.approx(math.sqrt(0.75))

    def test_line_misses_circle(self) -> None:
        """Test a line that passes outside the circle."""
        assert line_arc_intersections(
            Point(2, -2), Point(2, 2), Point(0, 0), 1, Point(1, 0), Point(0, 1)
        ) == []
