"""Path clipping against a closed boundary.

This module provides the PathClipper class, which crops a path to the inside
of a boundary in three passes:

1. Cut: walk the path, splitting every segment where it crosses the
   boundary, so the path falls apart into sections that are each entirely
   inside or entirely outside.
2. Filter: keep only the sections inside the boundary.
3. Stitch: when the result must be closed, chain the kept sections back into
   closed runs, following the boundary from where one section leaves it to
   where the next one starts. Boundary loops that the result should be
   wrapped in are added last.
"""

import logging
import math
from collections.abc import Iterator

from cartoclip.config import ClipConfig
from cartoclip.core._arcs import circular_radius, is_acute
from cartoclip.core.boundary import is_closed, position_on_boundary, split_loops
from cartoclip.core.containment import encompasses
from cartoclip.core.crossings import BoundaryCrossingFinder, Crossing, crossing_finder
from cartoclip.domain import (
    ArcTo,
    ClosePath,
    Domain,
    LineTo,
    Location,
    MoveTo,
    PathSegment,
    Plane,
    Point,
    Side,
    Sphere,
    ensure_finite,
)
from cartoclip.exceptions import (
    LoopBudgetExceededError,
    MalformedPathError,
    MissingContinuationError,
    OpenPathError,
    RedrawnSectionError,
    UnsupportedSegmentError,
)
from cartoclip.io.converter import path_to_string

logger = logging.getLogger(__name__)


def splice_segment(
    start: Location, segment: PathSegment, intersect0: Location, intersect1: Location
) -> list[PathSegment]:
    """Split a segment at a crossing, stepping over the cut with a MoveTo.

    Args:
        start: Start of the segment
        segment: The segment to split
        intersect0: The crossing as seen from the start's side
        intersect1: The crossing as seen from the end's side

    Returns:
        Replacement segments: a MoveTo before or after the segment when the
        cut is at one of its ends, otherwise the part up to the cut, a
        MoveTo to the other side, and the part after it

    Raises:
        UnsupportedSegmentError: If the segment is neither a line nor an arc
    """
    end = segment.end
    if start == intersect0:
        return [MoveTo(start.s, start.t), segment]
    if intersect1 == end:
        return [segment, MoveTo(end.s, end.t)]

    if isinstance(segment, LineTo):
        return [
            LineTo(intersect0.s, intersect0.t),
            MoveTo(intersect1.s, intersect1.t),
            segment,
        ]

    if isinstance(segment, ArcTo):
        circular_radius(segment)
        a = Point(start.s, start.t)
        b = Point(intersect0.s, intersect0.t)
        d = Point(end.s, end.t)
        # a part is large exactly when the angle it subtends at the far end is obtuse
        first_large = not is_acute(b, d, a)
        second_large = not is_acute(b, a, d)
        return [
            ArcTo(segment.rx, segment.ry, segment.rotation, first_large, segment.sweep, b.x, b.y),
            MoveTo(intersect1.s, intersect1.t),
            ArcTo(segment.rx, segment.ry, segment.rotation, second_large, segment.sweep, d.x, d.y),
        ]

    raise UnsupportedSegmentError(segment.code, "splicing")


class PathClipper:
    """Crops paths to the inside of a boundary.

    Works on the plane and on the sphere. On the sphere the boundary must be
    drawn with meridians and parallels, and paths may cross the antimeridian.

    Example:
        clipper = PathClipper(ClipConfig(max_iterations=10_000))
        square = rectangle(0, 0, 1, 1, geographic=False)
        result = clipper.clip(path, square, Plane(), close_path=True)
    """

    def __init__(self, config: ClipConfig | None = None) -> None:
        """Initialize the clipper.

        Args:
            config: Clipping configuration (defaults if None)
        """
        self.config = config or ClipConfig()

    def clip(
        self,
        path: list[PathSegment],
        boundary: list[PathSegment],
        domain: Domain,
        close_path: bool | None = None,
    ) -> list[PathSegment]:
        """Crop a path to the inside of a boundary.

        Args:
            path: The path to crop
            boundary: Closed boundary; its left side is inside. Every loop
                must end where it starts, whatever edges the domain has.
            domain: The domain both live in
            close_path: Whether the path is a filled shape that must come out
                closed (config default if None). If False, the result is a
                set of open strokes.

        Returns:
            The cropped path

        Raises:
            NonFiniteCoordinateError: If either input or the result has NaN
                or infinite coordinates
            OpenPathError: If the boundary, or with close_path the path, is open
            ConsistencyError: If the pieces cannot be stitched back together
            LoopBudgetExceededError: If cutting or stitching fails to converge
        """
        if close_path is None:
            close_path = self.config.close_path

        ensure_finite(path, "path")
        ensure_finite(boundary, "boundary")
        path = _close_with_lines(path)
        boundary = _close_with_lines(boundary)
        if close_path and not is_closed(path, domain):
            raise OpenPathError("path", path_to_string(path))
        if not is_closed(boundary, _without_edges(domain)):
            raise OpenPathError("boundary", path_to_string(boundary))

        periodic = domain.is_periodic()
        edge_loops = split_loops(boundary)

        sections = self._cut(path, boundary, crossing_finder(periodic), periodic)
        output = self._stitch(sections, boundary, edge_loops, close_path)

        if close_path:
            for loop_index, edge_loop in enumerate(edge_loops):
                if output:
                    inside_out = encompasses(output, edge_loop, periodic) is Side.IN
                else:
                    inside_out = encompasses(path, edge_loop, periodic) is not Side.OUT
                if inside_out:
                    logger.debug("Adding boundary loop %d around the result", loop_index)
                    output.extend(edge_loop)

        output = _remove_degenerate(output)
        ensure_finite(output, "clipped output")
        return output

    def _cut(
        self,
        path: list[PathSegment],
        boundary: list[PathSegment],
        finder: BoundaryCrossingFinder,
        periodic: bool,
    ) -> list[list[PathSegment]]:
        """Split the path at every crossing and keep the sections inside."""
        queue = list(reversed(path))
        sections: list[list[PathSegment]] = []
        current: list[PathSegment] | None = None
        iterations = 0

        while True:
            segment = queue.pop() if queue else None

            if segment is None or isinstance(segment, MoveTo):
                if current is not None:
                    if encompasses(boundary, current, periodic) is Side.IN:
                        sections.append(current)
                        logger.debug("Kept section %s", path_to_string(current))
                    else:
                        logger.debug("Dropped section %s", path_to_string(current))
                if segment is None:
                    break
                current = [segment]

            else:
                if current is None:
                    raise MalformedPathError(f"path must begin with a moveto, not '{segment.code}'")
                last = current[-1]
                start = last.end
                crossings = [
                    crossing
                    for crossing in finder.find(start, segment, boundary)
                    if not _at_existing_break(crossing, start, segment.end, last, queue)
                ]
                if not crossings:
                    current.append(segment)
                else:
                    crossing = crossings[0]
                    logger.debug(
                        "Splicing %s at (%s, %s)",
                        path_to_string([segment]), crossing.intersect0.s, crossing.intersect0.t,
                    )
                    queue.extend(reversed(splice_segment(
                        start, segment, crossing.intersect0, crossing.intersect1
                    )))

            iterations += 1
            if iterations > self.config.max_iterations:
                raise LoopBudgetExceededError(
                    self.config.max_iterations, "cutting the path into sections"
                )

        return sections

    def _stitch(
        self,
        sections: list[list[PathSegment]],
        boundary: list[PathSegment],
        edge_loops: list[list[PathSegment]],
        close_path: bool,
    ) -> list[PathSegment]:
        """Chain kept sections into runs, following the boundary between them."""
        start_positions = [position_on_boundary(section[0].end, boundary) for section in sections]
        drawn = [False] * len(sections)
        output: list[PathSegment] = []

        section_index = 0
        chain_index = -1
        chain_start = Location(math.nan, math.nan)
        new_chain = True
        iterations = 0

        while not all(drawn):
            section = sections[section_index]
            if new_chain:
                chain_index = section_index
                chain_start = section[0].end
            else:
                section = section[1:]
            new_chain = False

            output.extend(section)
            drawn[section_index] = True

            if not close_path:
                new_chain = True
            else:
                section_end = sections[section_index][-1].end
                end_position = position_on_boundary(section_end, boundary)

                if section_end == chain_start:
                    new_chain = True

                elif end_position.loop is not None and end_position.index is not None:
                    edge_loop = edge_loops[end_position.loop]
                    best, best_index = None, None
                    for i, start_position in enumerate(start_positions):
                        if start_position.loop != end_position.loop or start_position.index is None:
                            continue
                        if drawn[i] and i != chain_index:
                            continue
                        relative_index = start_position.index
                        if relative_index < end_position.index:
                            relative_index += len(edge_loop) - 1
                        if best_index is None or relative_index < best_index:
                            best, best_index = i, relative_index
                    if best is None or best_index is None:
                        raise MissingContinuationError(
                            section_end.s, section_end.t,
                            f"no restart position on boundary loop {end_position.loop}",
                        )

                    output.extend(_walk_boundary(
                        edge_loop, end_position.index, best_index, sections[best][0].end
                    ))
                    if best == chain_index:
                        new_chain = True
                    else:
                        section_index = best

                else:
                    following = [i for i, s in enumerate(sections) if s[0].end == section_end]
                    if not following:
                        raise MissingContinuationError(
                            section_end.s, section_end.t, "no section continues from here"
                        )
                    section_index = following[0]
                    if drawn[section_index]:
                        raise RedrawnSectionError(
                            section_end.s, section_end.t, chain_start.to_tuple()
                        )

            if new_chain:
                undrawn = [i for i, done in enumerate(drawn) if not done]
                if not undrawn:
                    break
                section_index = undrawn[0]

            iterations += 1
            if iterations > self.config.max_iterations:
                raise LoopBudgetExceededError(
                    self.config.max_iterations, "stitching sections together"
                )

        return output


def _without_edges(domain: Domain) -> Domain:
    """The same kind of domain, but with no edge a boundary could end on."""
    return Sphere() if domain.is_periodic() else Plane()


def _close_with_lines(path: list[PathSegment]) -> list[PathSegment]:
    return [LineTo(s.s, s.t) if isinstance(s, ClosePath) else s for s in path]


def _at_existing_break(
    crossing: Crossing,
    start: Location,
    end: Location,
    last: PathSegment,
    queue: list[PathSegment],
) -> bool:
    """Whether a crossing coincides with a MoveTo the path already has there."""
    if crossing.intersect1 == start and isinstance(last, MoveTo):
        return True
    if crossing.intersect0 == end and (not queue or isinstance(queue[-1], MoveTo)):
        return True
    return False


def _walk_boundary(
    edge_loop: list[PathSegment], end_index: float, restart_index: float, next_start: Location
) -> Iterator[PathSegment]:
    """Edges leading forward along a loop from one position to another.

    The loop is cyclic, so restart_index may exceed the number of edges; it
    then wraps past the loop's MoveTo.
    """
    end_edge = math.trunc(end_index) + 1
    restart_edge = math.trunc(restart_index) + 1
    for i in range(end_edge, restart_edge + 1):
        edge = edge_loop[(i - 1) % (len(edge_loop) - 1) + 1]
        target = next_start if i == restart_edge else edge.end
        yield edge.moved_to(target)


def _remove_degenerate(output: list[PathSegment]) -> list[PathSegment]:
    """Drop zero-length segments, then MoveTos that lead nowhere."""
    cleaned = list(output)
    for i in range(len(cleaned) - 1, 0, -1):
        if cleaned[i - 1].end == cleaned[i].end:
            del cleaned[i]
    for i in range(len(cleaned) - 1, 0, -1):
        if isinstance(cleaned[i - 1], MoveTo) and isinstance(cleaned[i], MoveTo):
            del cleaned[i - 1]
    return cleaned


def clip(
    path: list[PathSegment],
    boundary: list[PathSegment],
    domain: Domain,
    close_path: bool,
    config: ClipConfig | None = None,
) -> list[PathSegment]:
    """Crop a path to the inside of a boundary with a one-off clipper.

    See PathClipper.clip for details.
    """
    return PathClipper(config).clip(path, boundary, domain, close_path)
