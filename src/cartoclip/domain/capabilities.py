"""Capabilities the clipping core consumes from its surroundings.

The core does not know how planets are shaped or how map projections are
computed. It only talks to:
- Domain: tells whether coordinates wrap and where the edge of the surface is
- MapProjection: turns places, meridians and parallels into plane geometry

Two domains ship with the package: Plane for projected maps and Sphere for
latitude/longitude data.
"""

from enum import Enum, auto
from typing import Protocol, runtime_checkable

from cartoclip.domain.location import Place, Point
from cartoclip.domain.segment import PathSegment


class Side(Enum):
    """Result of a containment query.

    - IN: strictly inside the region
    - OUT: strictly outside the region
    - BORDERLINE: exactly on the region's edge
    """

    IN = auto()
    OUT = auto()
    BORDERLINE = auto()


@runtime_checkable
class Domain(Protocol):
    """The coordinate space a path lives in."""

    def is_periodic(self) -> bool:
        """Whether coordinates wrap around at plus or minus pi."""
        ...

    def is_on_edge(self, place: Place) -> bool:
        """Whether a place lies on the edge of the domain."""
        ...


@runtime_checkable
class MapProjection(Protocol):
    """Maps geographic geometry onto the plane."""

    def project_point(self, place: Place) -> Point:
        """Project a single place."""
        ...

    def project_meridian(
        self, latitude0: float, latitude1: float, longitude: float
    ) -> list[PathSegment]:
        """Project a meridian arc, returning the segments that draw it."""
        ...

    def project_parallel(
        self, longitude0: float, longitude1: float, latitude: float
    ) -> list[PathSegment]:
        """Project a parallel arc, returning the segments that draw it."""
        ...


class Plane:
    """The infinite Cartesian plane.

    A plane has no edge of its own, but a map drawn on it does. When built
    with the map's boundary, is_on_edge reports whether a point lies on it,
    which lets open paths that run from edge to edge count as closed.
    """

    def __init__(self, edges: list[PathSegment] | None = None) -> None:
        self.edges = edges

    def is_periodic(self) -> bool:
        return False

    def is_on_edge(self, place: Place) -> bool:
        if not self.edges:
            return False
        from cartoclip.core.boundary import is_on_boundary

        return is_on_boundary(place.as_location(), self.edges)


class Sphere:
    """The latitude/longitude domain of a sphere.

    Longitude wraps at plus or minus pi, and the surface has no edge.
    """

    def is_periodic(self) -> bool:
        return True

    def is_on_edge(self, place: Place) -> bool:  # noqa: ARG002
        return False
