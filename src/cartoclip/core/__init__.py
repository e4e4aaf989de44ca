"""Core algorithms for cartoclip.

This module contains the core algorithms for:

- Geometry primitives (bounds, midpoints, intersections, wrapping)
- Boundary crossings on the plane and on the sphere
- Directed containment (which side of a boundary a point is on)
- Clipping and re-stitching paths against a boundary
- Adaptive projection of geographic paths onto the plane

All services are designed to be:
- Free of process-wide state (safe to call from several threads)
- Deterministic, with explicit budgets on every unbounded loop

Key functions:
- calculate_bounds: Bounding box of a path, arcs included
- midpoint: Point halfway along a segment
- get_edge_crossings: Crossings of a segment with a boundary
- contains: Side of a boundary a point is on
- encompasses: Side of a boundary a whole path is on
- position_on_boundary: Where along a boundary a point lies
- is_on_boundary: Whether a point lies on a boundary edge
- is_closed: Whether every run of a path closes or runs edge to edge
- rectangle: Rectangular boundary builder
- splice_segment: Split a segment at a crossing
- apply_projection_to_path: Project a path with adaptive subdivision

Key classes:
- PathClipper: Crops paths to the inside of a boundary
- PathProjector: Projects paths with a fixed projection and configuration
- PlanarCrossingFinder, GeographicCrossingFinder: Crossing finders
"""

from cartoclip.core.boundary import (
    BoundaryPosition,
    is_closed,
    is_on_boundary,
    position_on_boundary,
    rectangle,
    split_loops,
)
from cartoclip.core.clipping import PathClipper, clip, splice_segment
from cartoclip.core.containment import contains, encompasses
from cartoclip.core.crossings import (
    BoundaryCrossingFinder,
    Crossing,
    GeographicCrossingFinder,
    PlanarCrossingFinder,
    crossing_finder,
    get_edge_crossings,
    parallel_crossing,
)
from cartoclip.core.geometry import (
    Bounds,
    calculate_bounds,
    is_between,
    line_line_intersection,
    localize_in_range,
    midpoint,
)
from cartoclip.core.projection import (
    Equirectangular,
    PathProjector,
    apply_projection_to_path,
    choose_central_meridian,
    transform_input,
    transform_output,
)

__all__ = [
    # Boundary helpers
    "BoundaryPosition",
    "is_closed",
    "is_on_boundary",
    "position_on_boundary",
    "rectangle",
    "split_loops",
    # Clipping
    "PathClipper",
    "clip",
    "splice_segment",
    # Containment
    "contains",
    "encompasses",
    # Crossings
    "BoundaryCrossingFinder",
    "Crossing",
    "GeographicCrossingFinder",
    "PlanarCrossingFinder",
    "crossing_finder",
    "get_edge_crossings",
    "parallel_crossing",
    # Geometry functions
    "Bounds",
    "calculate_bounds",
    "is_between",
    "line_line_intersection",
    "localize_in_range",
    "midpoint",
    # Projection
    "Equirectangular",
    "PathProjector",
    "apply_projection_to_path",
    "choose_central_meridian",
    "transform_input",
    "transform_output",
]
