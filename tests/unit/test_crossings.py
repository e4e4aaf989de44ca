"""Unit tests for boundary crossing finders."""

import math

import pytest

from cartoclip.core import rectangle
from cartoclip.core.crossings import (
    Crossing,
    GeographicCrossingFinder,
    PlanarCrossingFinder,
    crossing_finder,
    get_edge_crossings,
    parallel_crossing,
    quarter_turn,
    quarter_turn_back,
)
from cartoclip.domain import (
    ArcTo,
    CubicTo,
    LineTo,
    Location,
    MeridianArc,
    MoveTo,
    ParallelArc,
)
from cartoclip.exceptions import UnsupportedSegmentError

SQUARE = rectangle(0, 0, 1, 1, geographic=False)
WORLD = rectangle(-math.pi / 2, -math.pi, math.pi / 2, math.pi, geographic=True)


class TestPlanarCrossings:
    """Tests for crossings on the plane."""

    def test_line_through_square(self) -> None:
        """Test a line crossing two sides of a square."""
        crossings = get_edge_crossings(Location(-1, 0.5), LineTo(2, 0.5), SQUARE, periodic=False)
        assert crossings == [
            Crossing(Location(0, 0.5), Location(0, 0.5), 0),
            Crossing(Location(1, 0.5), Location(1, 0.5), 0),
        ]

    def test_line_inside_square(self) -> None:
        """Test a line that never reaches the boundary."""
        assert get_edge_crossings(
            Location(0.25, 0.5), LineTo(0.75, 0.5), SQUARE, periodic=False
        ) == []

    def test_loop_indices(self) -> None:
        """Test that crossings are tagged with the loop they lie on."""
        boundary = SQUARE + rectangle(2, 0, 3, 1, geographic=False)
        crossings = get_edge_crossings(Location(-1, 0.5), LineTo(4, 0.5), boundary, periodic=False)
        assert [crossing.loop_index for crossing in crossings] == [0, 0, 1, 1]
        assert [crossing.intersect0.s for crossing in crossings] == [0, 1, 2, 3]

    def test_arc_crossing(self) -> None:
        """Test a quarter circle crossing a vertical edge."""
        boundary = rectangle(0.5, -2, 3, 2, geographic=False)
        crossings = get_edge_crossings(
            Location(1, 0), ArcTo(1, 1, 0, False, True, 0, 1), boundary, periodic=False
        )
        assert len(crossings) == 1
        assert crossings[0].intersect0.s == 0.5
        assert crossings[0].intersect0.t == pytest.approx(math.sqrt(0.75))

    def test_arc_crossing_either_direction(self) -> None:
        """Test that drawing the same arc backward finds the same crossing."""
        boundary = rectangle(0.5, -2, 3, 2, geographic=False)
        crossings = get_edge_crossings(
            Location(0, 1), ArcTo(1, 1, 0, False, False, 1, 0), boundary, periodic=False
        )
        assert len(crossings) == 1
        assert crossings[0].intersect0.t == pytest.approx(math.sqrt(0.75))

    def test_curved_edge_rejected(self) -> None:
        """Test that planar boundaries must be made of lines."""
        boundary = [MoveTo(0, 0), ParallelArc(0, 1), LineTo(0, 0)]
        with pytest.raises(UnsupportedSegmentError):
            get_edge_crossings(Location(-1, 0.5), LineTo(2, 0.5), boundary, periodic=False)

    def test_bezier_segment_rejected(self) -> None:
        """Test that Bezier segments cannot be crossed."""
        with pytest.raises(UnsupportedSegmentError):
            get_edge_crossings(
                Location(-1, 0.5), CubicTo(0, 1, 1, 1, 2, 0.5), SQUARE, periodic=False
            )


class TestQuarterTurn:
    """Tests for the quarter-turn frame changes."""

    def test_turn(self) -> None:
        """Test a single turn."""
        assert quarter_turn(Location(1, 2)) == Location(2, -1)

    def test_turn_back_undoes_turn(self) -> None:
        """Test that turning back restores the location."""
        loc = Location(0.3, -1.2)
        assert quarter_turn_back(quarter_turn(loc)) == loc

    def test_four_turns(self) -> None:
        """Test that four turns are the identity."""
        loc = Location(0.3, -1.2)
        for _ in range(4):
            loc = quarter_turn(loc)
        assert loc == Location(0.3, -1.2)


class TestGeographicCrossings:
    """Tests for crossings on the sphere."""

    def test_antimeridian_has_two_sides(self) -> None:
        """Test a line crossing the antimeridian reports both copies of it."""
        start = Location(0, math.radians(-170))
        crossings = get_edge_crossings(start, LineTo(0, math.radians(170)), WORLD, periodic=True)
        assert len(crossings) == 2
        for crossing in crossings:
            assert crossing.intersect0 == Location(0, -math.pi)
            assert crossing.intersect1 == Location(0, math.pi)

    def test_short_line_has_no_crossing(self) -> None:
        """Test a line that stays away from the antimeridian."""
        assert get_edge_crossings(
            Location(0, -0.5), LineTo(0.2, 0.5), WORLD, periodic=True
        ) == []

    def test_meridian_crosses_parallels(self) -> None:
        """Test a meridian crossing the two parallel sides of a box."""
        box = rectangle(-1, -1, 1, 1, geographic=True)
        crossings = get_edge_crossings(Location(-2, 0.5), MeridianArc(2, 0.5), box, periodic=True)
        assert [crossing.intersect0 for crossing in crossings] == [
            Location(-1, 0.5),
            Location(1, 0.5),
        ]
        assert all(crossing.intersect0 == crossing.intersect1 for crossing in crossings)

    def test_line_edges_rejected(self) -> None:
        """Test that geographic boundaries must be meridians and parallels."""
        with pytest.raises(UnsupportedSegmentError):
            get_edge_crossings(Location(0, 0), LineTo(0, 1), SQUARE, periodic=True)

    def test_arc_segment_rejected(self) -> None:
        """Test that circular arcs have no meaning on the sphere."""
        with pytest.raises(UnsupportedSegmentError):
            get_edge_crossings(
                Location(0, 0), ArcTo(1, 1, 0, False, True, 0, 1), WORLD, periodic=True
            )


class TestParallelCrossing:
    """Tests for parallel_crossing."""

    def test_ordinary_parallel(self) -> None:
        """Test interpolation of the longitude at a parallel."""
        place0, place1 = parallel_crossing(0.0, 0.0, 2.0, 1.0, 1.0)
        assert place0 == place1 == Location(1.0, 0.5)

    def test_antipodal_parallel_jumps(self) -> None:
        """Test that crossing latitude pi gives one place on each side."""
        place0, place1 = parallel_crossing(3.0, 0.2, 3.5, 0.2, math.pi)
        assert place0.s == -math.pi
        assert place1.s == math.pi
        assert place0.t == pytest.approx(0.2)
        assert place1.t == place0.t

    def test_antipodal_parallel_jumps_back(self) -> None:
        """Test the jump in the other direction."""
        place0, place1 = parallel_crossing(3.5, 0.2, 3.0, 0.2, math.pi)
        assert (place0.s, place1.s) == (math.pi, -math.pi)

    def test_longitude_wraps(self) -> None:
        """Test interpolation across the antimeridian."""
        place0, _ = parallel_crossing(0.0, 3.0, 2.0, -3.0, 1.0)
        assert abs(place0.t) == pytest.approx(math.pi)


class TestCrossingFinder:
    """Tests for crossing_finder."""

    def test_picks_finder_by_domain(self) -> None:
        """Test that each domain gets its finder."""
        assert isinstance(crossing_finder(False), PlanarCrossingFinder)
        assert isinstance(crossing_finder(True), GeographicCrossingFinder)
