"""Crossings between a path segment and the edges of a boundary.

Two finders share one interface:
- PlanarCrossingFinder: boundary made of straight lines on the plane. Each
  crossing is a single point.
- GeographicCrossingFinder: boundary made of meridians and parallels on the
  sphere. Each crossing is reported as two places, one on each side of the
  cut, since the two sides of a cut along the antimeridian or a pole are
  different coordinates for the same spot.

Pick one with crossing_finder() and reuse it for the whole call.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

from cartoclip.core._arcs import arc_center, circular_radius, line_arc_intersections
from cartoclip.core.geometry import is_between, line_line_intersection, localize_in_range
from cartoclip.domain import (
    ArcTo,
    LineTo,
    Location,
    MeridianArc,
    MoveTo,
    ParallelArc,
    PathSegment,
)
from cartoclip.exceptions import UnsupportedSegmentError


@dataclass(frozen=True, slots=True)
class Crossing:
    """A point where a segment crosses the boundary.

    Attributes:
        intersect0: The crossing as seen from the segment's start side
        intersect1: The crossing as seen from the segment's end side
        loop_index: Index of the boundary loop that was crossed
    """

    intersect0: Location
    intersect1: Location
    loop_index: int


class BoundaryCrossingFinder(ABC):
    """Finds every crossing between one segment and a whole boundary."""

    def find(
        self, start: Location, segment: PathSegment, edges: list[PathSegment]
    ) -> list[Crossing]:
        """Find all crossings of a segment with the boundary.

        Points on an edge generally count as crossings, and a segment through
        the vertex between two edges may report the same crossing twice.

        Args:
            start: Start of the segment
            segment: The segment
            edges: The boundary, as one or more MoveTo-initiated loops

        Returns:
            Crossings in boundary order
        """
        crossings = []
        loop_index = 0
        for i in range(1, len(edges)):
            edge = edges[i]
            if isinstance(edge, MoveTo):
                loop_index += 1
                continue
            for side0, side1 in self.edge_crossings(start, segment, edges[i - 1].end, edge):
                crossings.append(Crossing(side0, side1, loop_index))
        return crossings

    @abstractmethod
    def edge_crossings(
        self, start: Location, segment: PathSegment, edge_start: Location, edge: PathSegment
    ) -> list[tuple[Location, Location]]:
        """Find the crossings of a segment with a single edge.

        Returns:
            One (start side, end side) pair per crossing
        """


class PlanarCrossingFinder(BoundaryCrossingFinder):
    """Crossings on the plane, where edges must be straight lines."""

    def edge_crossings(
        self, start: Location, segment: PathSegment, edge_start: Location, edge: PathSegment
    ) -> list[tuple[Location, Location]]:
        if not isinstance(edge, LineTo):
            raise UnsupportedSegmentError(edge.code, "planar boundary edge")

        segment_start = start.as_point()
        segment_end = segment.end.as_point()
        v0 = edge_start.as_point()
        v1 = edge.end.as_point()

        if isinstance(segment, LineTo):
            point = line_line_intersection(segment_start, segment_end, v0, v1)
            points = [] if point is None else [point]
        elif isinstance(segment, ArcTo):
            radius = circular_radius(segment)
            # reorder the ends so that the arc always has its sweep flag set
            if segment.sweep:
                q0, q1 = segment_start, segment_end
            else:
                q0, q1 = segment_end, segment_start
            center = arc_center(q0, q1, radius, not segment.large_arc)
            points = line_arc_intersections(v0, v1, center, radius, q0, q1)
        else:
            raise UnsupportedSegmentError(segment.code, "planar crossing")

        return [(point.as_location(), point.as_location()) for point in points]


def quarter_turn(location: Location) -> Location:
    """Rotate the (s, t) frame a quarter turn: (s, t) -> (t, -s)."""
    return Location(location.t, -location.s)


def quarter_turn_back(location: Location) -> Location:
    """Undo quarter_turn: (s, t) -> (-t, s)."""
    return Location(-location.t, location.s)


def _turn_segment(segment: PathSegment) -> PathSegment:
    end = quarter_turn(segment.end)
    if isinstance(segment, ParallelArc):
        return MeridianArc(end.s, end.t)
    if isinstance(segment, MeridianArc):
        return ParallelArc(end.s, end.t)
    return segment.moved_to(end)


class GeographicCrossingFinder(BoundaryCrossingFinder):
    """Crossings on the sphere, where edges must be meridians or parallels.

    The crossing is only solved for one reference case: an edge running
    along a parallel whose longitude does not increase. Every other edge is
    brought into that frame by repeated quarter turns, which swap meridians
    and parallels, and the answer is turned back afterward.
    """

    def edge_crossings(
        self, start: Location, segment: PathSegment, edge_start: Location, edge: PathSegment
    ) -> list[tuple[Location, Location]]:
        if not isinstance(edge, (ParallelArc, MeridianArc)):
            raise UnsupportedSegmentError(edge.code, "geographic boundary edge")
        if not isinstance(segment, (LineTo, ParallelArc, MeridianArc)):
            raise UnsupportedSegmentError(segment.code, "geographic crossing")

        turns = 0
        while isinstance(edge, MeridianArc) or edge.t > edge_start.t:
            start = quarter_turn(start)
            segment = _turn_segment(segment)
            edge_start = quarter_turn(edge_start)
            edge = _turn_segment(edge)
            turns += 1

        crossing = self._cross_parallel(start, segment, edge_start, edge)
        if crossing is None:
            return []

        place0, place1 = crossing
        for _ in range(turns):
            place0 = quarter_turn_back(place0)
            place1 = quarter_turn_back(place1)
        return [(place0, place1)]

    @staticmethod
    def _cross_parallel(
        start: Location, segment: PathSegment, edge_start: Location, edge: PathSegment
    ) -> tuple[Location, Location] | None:
        latitude0, longitude0 = start.s, start.t
        latitude1, longitude1 = segment.s, segment.t
        latitude_x = edge_start.s

        if isinstance(segment, LineTo):
            wrapped0 = localize_in_range(latitude0, latitude_x, latitude_x + 2 * math.pi)
            wrapped1 = localize_in_range(latitude1, latitude_x, latitude_x + 2 * math.pi)
            if abs(wrapped0 - wrapped1) >= math.pi:
                place0, place1 = parallel_crossing(
                    wrapped0, longitude0, wrapped1, longitude1, latitude_x
                )
                if is_between(place0.t, edge_start.t, edge.t):
                    return place0, place1
        elif isinstance(segment, MeridianArc):
            if is_between(longitude0, edge_start.t, edge.t):
                if (latitude0 >= latitude_x) != (latitude1 >= latitude_x):
                    place = Location(latitude_x, longitude0)
                    return place, place
        # two parallels never cross
        return None


def parallel_crossing(
    latitude0: float,
    longitude0: float,
    latitude1: float,
    longitude1: float,
    latitude_x: float = math.pi,
) -> tuple[Location, Location]:
    """Find where the line between two places crosses a parallel.

    Longitude is interpolated with weights taken from the latitude distances
    to the parallel. Crossing the antipodal parallel (latitude plus or minus
    pi) is a jump between its two coordinate copies, so the two returned
    places then sit on opposite sides of it.

    Args:
        latitude0: Latitude of the first place, wrapped relative to the parallel
        longitude0: Longitude of the first place
        latitude1: Latitude of the second place, wrapped relative to the parallel
        longitude1: Longitude of the second place
        latitude_x: Latitude of the parallel

    Returns:
        The crossing seen from the first place's side and from the second's
    """
    weight0 = localize_in_range(latitude1 - latitude_x, -math.pi, math.pi)
    weight1 = localize_in_range(latitude_x - latitude0, -math.pi, math.pi)
    if weight0 == 0:
        longitude_x = longitude1
    elif weight1 == 0:
        longitude_x = longitude0
    else:
        if abs(longitude1 - longitude0) > math.pi:
            low = max(longitude0, longitude1)
            longitude0 = localize_in_range(longitude0, low, low + 2 * math.pi)
            longitude1 = localize_in_range(longitude1, low, low + 2 * math.pi)
        longitude_x = localize_in_range(
            (weight0 * longitude0 + weight1 * longitude1) / (weight0 + weight1),
            -math.pi, math.pi,
        )

    if abs(latitude_x) == math.pi:
        if latitude0 < latitude1:
            return Location(-math.pi, longitude_x), Location(math.pi, longitude_x)
        return Location(math.pi, longitude_x), Location(-math.pi, longitude_x)
    place = Location(latitude_x, longitude_x)
    return place, place


def crossing_finder(periodic: bool) -> BoundaryCrossingFinder:
    """Pick the crossing finder for a domain."""
    return GeographicCrossingFinder() if periodic else PlanarCrossingFinder()


def get_edge_crossings(
    start: Location, segment: PathSegment, edges: list[PathSegment], periodic: bool
) -> list[Crossing]:
    """Find every crossing of one segment with a boundary.

    Args:
        start: Start of the segment
        segment: The segment
        edges: The boundary
        periodic: Whether the boundary lives on the sphere

    Returns:
        All crossings, each tagged with the index of the loop it lies on
    """
    return crossing_finder(periodic).find(start, segment, edges)
