"""Unit tests for the path clipper."""

import math

import pytest

from cartoclip.config import ClipConfig
from cartoclip.core.boundary import rectangle
from cartoclip.core.clipping import PathClipper, clip, splice_segment
from cartoclip.domain import (
    ArcTo,
    ClosePath,
    CubicTo,
    LineTo,
    Location,
    MoveTo,
    Plane,
    Sphere,
)
from cartoclip.exceptions import (
    LoopBudgetExceededError,
    NonFiniteCoordinateError,
    OpenPathError,
    UnsupportedSegmentError,
)

SQUARE = rectangle(0, 0, 1, 1, geographic=False)
PARTIAL = [
    MoveTo(0.5, 0.25), LineTo(0.5, 0.75), LineTo(2, 0.75), LineTo(2, 0.25), LineTo(0.5, 0.25),
]
PARTIAL_CLIPPED = [
    MoveTo(0.5, 0.25), LineTo(0.5, 0.75), LineTo(1, 0.75), LineTo(1, 0.25), LineTo(0.5, 0.25),
]
# Circle of radius 0.5 around the middle of the square's right side.
HALF_OUT_DISC = [
    MoveTo(1.5, 0.5),
    ArcTo(0.5, 0.5, 0, False, False, 0.5, 0.5),
    ArcTo(0.5, 0.5, 0, False, False, 1.5, 0.5),
]


class TestSpliceSegment:
    """Tests for splice_segment."""

    def test_line_in_the_middle(self) -> None:
        """Test splitting a line at an interior crossing."""
        assert splice_segment(
            Location(0, 0), LineTo(2, 0), Location(1, 0), Location(1, 0)
        ) == [LineTo(1, 0), MoveTo(1, 0), LineTo(2, 0)]

    def test_crossing_at_start(self) -> None:
        """Test that a crossing at the start only adds a MoveTo before."""
        assert splice_segment(
            Location(0, 0), LineTo(2, 0), Location(0, 0), Location(0, 0)
        ) == [MoveTo(0, 0), LineTo(2, 0)]

    def test_crossing_at_end(self) -> None:
        """Test that a crossing at the end only adds a MoveTo after."""
        assert splice_segment(
            Location(0, 0), LineTo(2, 0), Location(2, 0), Location(2, 0)
        ) == [LineTo(2, 0), MoveTo(2, 0)]

    def test_two_sided_crossing(self) -> None:
        """Test that the MoveTo jumps to the far side of the cut."""
        assert splice_segment(
            Location(0, 3), LineTo(0, -3), Location(0, math.pi), Location(0, -math.pi)
        ) == [LineTo(0, math.pi), MoveTo(0, -math.pi), LineTo(0, -3)]

    def test_arc_recomputes_large_flag(self) -> None:
        """Test that each half of a split arc gets its own large-arc flag."""
        pieces = splice_segment(
            Location(1, 0), ArcTo(1, 1, 0, True, False, 0, 1), Location(-1, 0), Location(-1, 0)
        )
        assert pieces == [
            ArcTo(1, 1, 0, True, False, -1, 0),
            MoveTo(-1, 0),
            ArcTo(1, 1, 0, False, False, 0, 1),
        ]

    def test_bezier_rejected(self) -> None:
        """Test that Bezier curves cannot be split."""
        with pytest.raises(UnsupportedSegmentError):
            splice_segment(
                Location(0, 0), CubicTo(0, 1, 1, 1, 1, 0), Location(0.5, 0.75), Location(0.5, 0.75)
            )


class TestPathClipper:
    """Tests for PathClipper on the plane."""

    @pytest.fixture
    def clipper(self) -> PathClipper:
        """Create a clipper with default configuration."""
        return PathClipper()

    def test_open_line_through_square(self, clipper: PathClipper) -> None:
        """Test that an open stroke keeps only its inside part."""
        result = clipper.clip([MoveTo(-1, 0.5), LineTo(2, 0.5)], SQUARE, Plane())
        assert result == [MoveTo(0, 0.5), LineTo(1, 0.5)]

    def test_path_outside(self, clipper: PathClipper) -> None:
        """Test that a path entirely outside disappears."""
        assert clipper.clip([MoveTo(2, 2), LineTo(3, 3)], SQUARE, Plane()) == []

    def test_path_inside(self, clipper: PathClipper) -> None:
        """Test that a shape entirely inside is untouched."""
        inner = rectangle(0.25, 0.25, 0.75, 0.75, geographic=False)
        assert clipper.clip(inner, SQUARE, Plane(), close_path=True) == inner

    def test_boundary_clipped_to_itself(self, clipper: PathClipper) -> None:
        """Test that a shape equal to the boundary comes back whole."""
        assert clipper.clip(SQUARE, SQUARE, Plane(), close_path=True) == SQUARE

    def test_closed_shape_follows_boundary(self, clipper: PathClipper) -> None:
        """Test that a cut shape is closed along the boundary edge."""
        assert clipper.clip(PARTIAL, SQUARE, Plane(), close_path=True) == PARTIAL_CLIPPED

    def test_closed_shape_wraps_around_boundary(self, clipper: PathClipper) -> None:
        """Test that a reversed shape is closed the long way round the boundary."""
        path = [
            MoveTo(0.5, 0.25), LineTo(2, 0.25), LineTo(2, 0.75), LineTo(0.5, 0.75),
            LineTo(0.5, 0.25),
        ]
        assert clipper.clip(path, SQUARE, Plane(), close_path=True) == [
            MoveTo(0.5, 0.25), LineTo(1, 0.25), LineTo(1, 0), LineTo(0, 0), LineTo(0, 1),
            LineTo(1, 1), LineTo(1, 0.75), LineTo(0.5, 0.75), LineTo(0.5, 0.25),
        ]

    def test_hole_gets_boundary_added(self, clipper: PathClipper) -> None:
        """Test that a lone hole is wrapped in the boundary loop."""
        hole = [
            MoveTo(0.25, 0.25), LineTo(0.75, 0.25), LineTo(0.75, 0.75), LineTo(0.25, 0.75),
            LineTo(0.25, 0.25),
        ]
        assert clipper.clip(hole, SQUARE, Plane(), close_path=True) == hole + SQUARE

    def test_idempotent(self, clipper: PathClipper) -> None:
        """Test that clipping a clipped shape changes nothing."""
        once = clipper.clip(PARTIAL, SQUARE, Plane(), close_path=True)
        assert clipper.clip(once, SQUARE, Plane(), close_path=True) == once

    def test_close_path_segment_is_a_line(self, clipper: PathClipper) -> None:
        """Test that a ClosePath behaves like a line back to the start."""
        path = PARTIAL[:-1] + [ClosePath(0.5, 0.25)]
        assert clipper.clip(path, SQUARE, Plane(), close_path=True) == PARTIAL_CLIPPED

    def test_close_path_from_config(self) -> None:
        """Test that the configured mode is used when none is given."""
        clipper = PathClipper(ClipConfig(close_path=True))
        assert clipper.clip(PARTIAL, SQUARE, Plane()) == PARTIAL_CLIPPED

    def test_arc_stroke_enters_and_leaves(self, clipper: PathClipper) -> None:
        """Test that an arc stroke keeps the arcs between its two crossings."""
        result = clipper.clip(HALF_OUT_DISC, SQUARE, Plane())
        assert result == [
            MoveTo(1, 0),
            ArcTo(0.5, 0.5, 0, False, False, 0.5, 0.5),
            ArcTo(0.5, 0.5, 0, False, False, 1, 1),
        ]

    def test_disc_closed_along_boundary(self, clipper: PathClipper) -> None:
        """Test that a disc sticking out of the square is closed with a boundary edge."""
        result = clipper.clip(HALF_OUT_DISC, SQUARE, Plane(), close_path=True)
        assert result == [
            MoveTo(1, 0),
            ArcTo(0.5, 0.5, 0, False, False, 0.5, 0.5),
            ArcTo(0.5, 0.5, 0, False, False, 1, 1),
            LineTo(1, 0),
        ]

    def test_module_level_clip(self) -> None:
        """Test the one-off clip function."""
        assert clip([MoveTo(-1, 0.5), LineTo(2, 0.5)], SQUARE, Plane(), close_path=False) == [
            MoveTo(0, 0.5), LineTo(1, 0.5),
        ]


class TestPathClipperErrors:
    """Tests for PathClipper error handling."""

    def test_open_path_in_close_mode(self) -> None:
        """Test that filled shapes must be closed."""
        with pytest.raises(OpenPathError) as exc_info:
            clip([MoveTo(-1, 0.5), LineTo(2, 0.5)], SQUARE, Plane(), close_path=True)
        assert exc_info.value.what == "path"

    def test_open_boundary(self) -> None:
        """Test that the boundary must be closed."""
        with pytest.raises(OpenPathError) as exc_info:
            clip([MoveTo(0, 0), LineTo(1, 1)], [MoveTo(0, 0), LineTo(1, 0)], Plane(), False)
        assert exc_info.value.what == "boundary"

    def test_open_boundary_on_a_plane_with_edges(self) -> None:
        """Test that an open boundary is rejected even when it is the plane's own edge."""
        stroke = [MoveTo(-1, 0.5), LineTo(2, 0.5)]
        with pytest.raises(OpenPathError) as exc_info:
            PathClipper().clip(SQUARE, stroke, Plane(stroke))
        assert exc_info.value.what == "boundary"

    def test_non_finite_input(self) -> None:
        """Test that NaN coordinates are rejected."""
        with pytest.raises(NonFiniteCoordinateError):
            clip([MoveTo(0, 0), LineTo(math.nan, 1)], SQUARE, Plane(), close_path=False)

    def test_iteration_budget(self) -> None:
        """Test that the iteration budget stops a run."""
        clipper = PathClipper(ClipConfig(max_iterations=1))
        with pytest.raises(LoopBudgetExceededError):
            clipper.clip([MoveTo(-1, 0.5), LineTo(2, 0.5)], SQUARE, Plane())


class TestPathClipperOnSphere:
    """Tests for PathClipper on the sphere."""

    def test_antimeridian_split(self) -> None:
        """Test that a line across the antimeridian is cut into two strokes."""
        world = rectangle(-math.pi / 2, -math.pi, math.pi / 2, math.pi, geographic=True)
        path = [MoveTo(0, math.radians(-170)), LineTo(0, math.radians(170))]

        result = clip(path, world, Sphere(), close_path=False)

        assert [segment.code for segment in result] == ["M", "L", "M", "L"]
        assert [segment.end.to_tuple() for segment in result] == [
            pytest.approx((0, math.radians(-170))),
            pytest.approx((0, -math.pi)),
            pytest.approx((0, math.pi)),
            pytest.approx((0, math.radians(170))),
        ]
