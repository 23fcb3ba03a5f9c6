"""Mini README: Route geometry for mission design.

Exports the waypoint records, great-circle distance helpers, the display
path smoother and the nearest-neighbour optimiser. Everything here is a
pure function of its inputs so the mission store can recompute on every
edit without caching.
"""

from .geometry import (
    EARTH_RADIUS_M,
    Coordinate,
    haversine_distance,
    max_distance_from,
    total_path_length,
)
from .optimizer import OptimizationOutcome, OptimizationResult, optimize_route
from .smoothing import DEFAULT_SAMPLES_PER_SEGMENT, catmull_rom, smooth_path
from .waypoints import MissionParameters, Waypoint, WaypointRole, validate_coordinate

__all__ = [
    "Coordinate",
    "DEFAULT_SAMPLES_PER_SEGMENT",
    "EARTH_RADIUS_M",
    "MissionParameters",
    "OptimizationOutcome",
    "OptimizationResult",
    "Waypoint",
    "WaypointRole",
    "catmull_rom",
    "haversine_distance",
    "max_distance_from",
    "optimize_route",
    "smooth_path",
    "total_path_length",
    "validate_coordinate",
]
