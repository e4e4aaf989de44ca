"""Projection of geographic paths onto the map plane.

Straight lines in latitude and longitude are generally curves on a map, so
the projector subdivides each LineTo until every projected chord is shorter
than the precision bound. Meridians and parallels are handed to the
projection as a whole, since it knows best how to draw them.

Also here are the transforms applied around a projection:
- transform_input: shift longitudes to a central meridian
- transform_output: rotate the map for south-up output
- choose_central_meridian: pick the meridian that keeps a path in one piece
"""

import logging
import math

from cartoclip.config import ProjectionConfig
from cartoclip.core.geometry import localize_in_range, midpoint
from cartoclip.domain import (
    ArcTo,
    ClosePath,
    CubicTo,
    LineTo,
    Location,
    MapProjection,
    MeridianArc,
    MoveTo,
    ParallelArc,
    PathSegment,
    Place,
    Point,
    QuadraticTo,
    ensure_finite,
)
from cartoclip.exceptions import (
    LoopBudgetExceededError,
    MalformedPathError,
    UnsupportedSegmentError,
)

logger = logging.getLogger(__name__)


def _project_line(
    projection: MapProjection,
    start: Location,
    end: Location,
    last_out: Point,
    precision: float,
    budget: int,
    emitted: int,
) -> list[PathSegment]:
    """Project one geographic line, subdividing until every chord is short."""
    pending = [end.as_place()]
    completed = [start.as_place()]
    out: list[PathSegment] = []

    while pending:
        next_in = pending.pop()
        next_out = projection.project_point(next_in)
        last_in = completed[-1]
        if math.hypot(next_out.x - last_out.x, next_out.y - last_out.y) < precision:
            completed.append(next_in)
            out.append(LineTo(next_out.x, next_out.y))
            last_out = next_out
            continue

        if (
            abs(next_in.longitude - last_in.longitude) > math.pi
            or abs(next_in.latitude - last_in.latitude) > math.pi
        ):
            raise MalformedPathError(
                f"cannot draw a line from ({last_in.latitude}, {last_in.longitude}) to "
                f"({next_in.latitude}, {next_in.longitude}); clip the path first"
            )
        pending.append(next_in)
        pending.append(midpoint(
            last_in.as_location(), LineTo(next_in.latitude, next_in.longitude), periodic=True
        ).as_place())
        if len(pending) + emitted + len(out) > budget:
            raise LoopBudgetExceededError(
                budget, f"subdividing the line toward ({next_in.latitude}, {next_in.longitude})"
            )
    return out


def apply_projection_to_path(
    projection: MapProjection,
    path: list[PathSegment],
    precision: float,
    max_points: int = 100_000,
) -> list[PathSegment]:
    """Project a geographic path onto the plane.

    Args:
        projection: The map projection
        path: Path in (latitude, longitude) radians, already clipped so that
            no line spans more than pi in either coordinate
        precision: Longest projected chord allowed, in plane units
        max_points: Budget of pending plus emitted points

    Returns:
        The projected path

    Raises:
        NonFiniteCoordinateError: If the input or the output is not finite
        MalformedPathError: If a line is too long to be drawn unclipped, or a
            meridian or parallel does not line up with the point before it
        UnsupportedSegmentError: For segment kinds other than M, L, Λ and Φ
        LoopBudgetExceededError: If subdivision needs too many points
    """
    ensure_finite(path, "projector input")

    out: list[PathSegment] = []
    for i, segment in enumerate(path):
        if isinstance(segment, MoveTo):
            point = projection.project_point(segment.end.as_place())
            out.append(MoveTo(point.x, point.y))
            continue
        if i == 0 or not out:
            raise MalformedPathError(f"path must begin with a moveto, not '{segment.code}'")

        previous = path[i - 1].end
        if isinstance(segment, MeridianArc):
            if previous.t != segment.t:
                raise MalformedPathError(
                    f"meridian from longitude {previous.t} ends at longitude {segment.t}"
                )
            out.extend(projection.project_meridian(previous.s, segment.s, segment.t))
        elif isinstance(segment, ParallelArc):
            if previous.s != segment.s:
                raise MalformedPathError(
                    f"parallel from latitude {previous.s} ends at latitude {segment.s}"
                )
            out.extend(projection.project_parallel(previous.t, segment.t, segment.s))
        elif isinstance(segment, LineTo):
            last_out = out[-1].end
            out.extend(_project_line(
                projection, previous, segment.end, Point(last_out.s, last_out.t),
                precision, max_points, len(out),
            ))
        else:
            raise UnsupportedSegmentError(segment.code, "projection")

    ensure_finite(out, "projector output")
    return out


def transform_input(center: float, path: list[PathSegment]) -> list[PathSegment]:
    """Shift longitudes so that the central meridian lands on zero.

    A center of zero leaves the path untouched, so points sitting exactly on
    the antimeridian keep their sign.

    Raises:
        UnsupportedSegmentError: For segment kinds other than M, L, Λ and Φ
    """
    if center == 0:
        return path

    out = []
    for segment in path:
        if not isinstance(segment, (MoveTo, LineTo, MeridianArc, ParallelArc)):
            raise UnsupportedSegmentError(segment.code, "central meridian shift")
        out.append(segment.moved_to(Location(
            segment.s, localize_in_range(segment.t - center, -math.pi, math.pi)
        )))
    return out


def transform_output(north_up: bool, path: list[PathSegment]) -> list[PathSegment]:
    """Turn a projected path upside down for south-up maps.

    Raises:
        UnsupportedSegmentError: For meridians and parallels, which have no
            meaning on the plane
    """
    if north_up:
        return path

    out = []
    for segment in path:
        if not isinstance(segment, (MoveTo, LineTo, ClosePath, ArcTo, QuadraticTo, CubicTo)):
            raise UnsupportedSegmentError(segment.code, "south-up rotation")
        out.append(segment.transformed(lambda location: Location(-location.s, -location.t)))
    return out


def choose_central_meridian(path: list[PathSegment]) -> float:
    """Pick the central meridian that keeps a geographic path in one piece.

    This is the meridian opposite the middle of the widest band of longitude
    that the path never touches, so the map's cut falls in empty space.

    Returns:
        The central meridian in radians, or 0 if the path covers every longitude
    """
    intervals: list[tuple[float, float]] = []
    for i, segment in enumerate(path):
        end = segment.t
        if i > 0 and isinstance(segment, LineTo):
            start = path[i - 1].end.t
            end = start + localize_in_range(end - start, -math.pi, math.pi)
        elif i > 0 and isinstance(segment, ParallelArc):
            start = path[i - 1].end.t
        else:
            start = end
        low, high = min(start, end), max(start, end)
        if high - low >= 2 * math.pi:
            return 0.0
        low_wrapped = localize_in_range(low, -math.pi, math.pi)
        high_wrapped = low_wrapped + (high - low)
        if high_wrapped > math.pi:
            intervals.append((low_wrapped, math.pi))
            intervals.append((-math.pi, high_wrapped - 2 * math.pi))
        else:
            intervals.append((low_wrapped, high_wrapped))

    if not intervals:
        return 0.0

    intervals.sort()
    merged = [list(intervals[0])]
    for low, high in intervals[1:]:
        if low <= merged[-1][1]:
            merged[-1][1] = max(merged[-1][1], high)
        else:
            merged.append([low, high])

    gaps = [(merged[k][1], merged[k + 1][0]) for k in range(len(merged) - 1)]
    gaps.append((merged[-1][1], merged[0][0] + 2 * math.pi))
    gap_start, gap_end = max(gaps, key=lambda gap: gap[1] - gap[0])
    if gap_end - gap_start <= 0:
        return 0.0
    return localize_in_range((gap_start + gap_end) / 2 + math.pi, -math.pi, math.pi)


class Equirectangular:
    """The plate carrée: longitude to x, latitude to minus y.

    Meridians and parallels are straight on this projection, so they come
    out as single lines. Mostly useful as a reference and for tests.
    """

    def __init__(self, radius: float = 1.0) -> None:
        self.radius = radius

    def project_point(self, place: Place) -> Point:
        return Point(self.radius * place.longitude, -self.radius * place.latitude)

    def project_meridian(
        self, latitude0: float, latitude1: float, longitude: float  # noqa: ARG002
    ) -> list[PathSegment]:
        return [LineTo(self.radius * longitude, -self.radius * latitude1)]

    def project_parallel(
        self, longitude0: float, longitude1: float, latitude: float  # noqa: ARG002
    ) -> list[PathSegment]:
        return [LineTo(self.radius * longitude1, -self.radius * latitude)]


class PathProjector:
    """Projects geographic paths with a fixed projection and configuration.

    The full pipeline is: shift to the central meridian, project with
    adaptive subdivision, then rotate for south-up output if configured.

    Example:
        projector = PathProjector(Equirectangular(), ProjectionConfig(precision=0.05))
        plane_path = projector.project(clipped_path)
    """

    def __init__(self, projection: MapProjection, config: ProjectionConfig | None = None) -> None:
        """Initialize the projector.

        Args:
            projection: The map projection to apply
            config: Projection configuration (defaults if None)
        """
        self.projection = projection
        self.config = config or ProjectionConfig()

    def project(self, path: list[PathSegment]) -> list[PathSegment]:
        """Project a geographic path onto the plane.

        Args:
            path: Path in (latitude, longitude) radians

        Returns:
            The projected path
        """
        shifted = transform_input(self.config.central_meridian, path)
        projected = apply_projection_to_path(
            self.projection, shifted, self.config.precision, self.config.max_points
        )
        logger.debug("Projected %d segments into %d", len(path), len(projected))
        return transform_output(self.config.north_up, projected)
