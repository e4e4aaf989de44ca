"""Coordinate pairs used by the clipping engine.

The clipping and containment code works on abstract (s, t) pairs so that it
does not care whether it is looking at plane coordinates or at latitude and
longitude:
- Location: the generic (s, t) pair
- Point: a Location read as Cartesian (x, y)
- Place: a Location read as geographic (latitude, longitude), in radians
"""

import math
from dataclasses import dataclass

from cartoclip.exceptions import NonFiniteCoordinateError


@dataclass(frozen=True, slots=True)
class Location:
    """A coordinate pair in an abstract two-axis system.

    Attributes:
        s: First coordinate (x on the plane, latitude on the sphere)
        t: Second coordinate (y on the plane, longitude on the sphere)
    """

    s: float
    t: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to a simple (s, t) tuple."""
        return (self.s, self.t)

    def is_finite(self) -> bool:
        """Check that neither coordinate is NaN or infinite."""
        return math.isfinite(self.s) and math.isfinite(self.t)

    def as_point(self) -> "Point":
        """Reinterpret this location as a Cartesian point.

        Raises:
            NonFiniteCoordinateError: If either coordinate is not finite
        """
        self._check_finite("point")
        return Point(self.s, self.t)

    def as_place(self) -> "Place":
        """Reinterpret this location as a geographic place.

        Raises:
            NonFiniteCoordinateError: If either coordinate is not finite
        """
        self._check_finite("place")
        return Place(self.s, self.t)

    def _check_finite(self, what: str) -> None:
        for value in (self.s, self.t):
            if not math.isfinite(value):
                raise NonFiniteCoordinateError(value, what)


@dataclass(frozen=True, slots=True)
class Point:
    """A point on the map plane.

    Attributes:
        x: Horizontal coordinate
        y: Vertical coordinate (increasing downward, as in SVG)
    """

    x: float
    y: float

    def as_location(self) -> Location:
        """Convert to the generic (s, t) form."""
        return Location(self.x, self.y)


@dataclass(frozen=True, slots=True)
class Place:
    """A place on the surface of a planet.

    Attributes:
        latitude: Latitude in radians
        longitude: Longitude in radians
    """

    latitude: float
    longitude: float

    def as_location(self) -> Location:
        """Convert to the generic (s, t) form."""
        return Location(self.latitude, self.longitude)
