"""Mini README: Nearest-neighbour reordering of mission waypoints.

Structure:
    * OptimizationOutcome - whether the route was reordered.
    * OptimizationResult - new ordering plus path length before/after.
    * optimize_route - greedy nearest-neighbour pass honouring anchors.

This is a heuristic, not an exact travelling-salesman solver: it runs in
O(n^2) over the reorderable waypoints, which keeps interactive edits
instant for missions of a few hundred points. Anchors never move. The home
waypoint (or, without one, the first waypoint) starts the route and the
return-to-launch waypoint always closes it, even when another position
would be shorter. Distance ties go to the waypoint that came first.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from ..logging_utils import get_logger
from .geometry import haversine_distance, total_path_length
from .waypoints import Waypoint, WaypointRole

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..feasibility import FeasibilityResult

LOGGER = get_logger(__name__)

MIN_REORDERABLE_WAYPOINTS = 2


class OptimizationOutcome(str, Enum):
    """Signal returned alongside every optimisation attempt."""

    OPTIMIZED = "optimized"
    INSUFFICIENT_WAYPOINTS = "insufficient_waypoints"


@dataclass(slots=True)
class OptimizationResult:
    """Outcome of an optimisation pass over a read-only waypoint sequence."""

    waypoints: Tuple[Waypoint, ...]
    outcome: OptimizationOutcome
    distance_before_m: float
    distance_after_m: float
    feasibility: Optional["FeasibilityResult"] = field(default=None)

    @property
    def distance_saved_m(self) -> float:
        return self.distance_before_m - self.distance_after_m


def optimize_route(waypoints: Sequence[Waypoint]) -> OptimizationResult:
    """Reorder ordinary waypoints greedily by nearest neighbour."""

    original = tuple(waypoints)
    distance_before = total_path_length([waypoint.position for waypoint in original])
    ordinary = [waypoint for waypoint in original if not waypoint.role.is_anchor]
    if len(ordinary) < MIN_REORDERABLE_WAYPOINTS:
        LOGGER.info(
            "Skipping optimisation: %s reorderable waypoints (need %s)",
            len(ordinary),
            MIN_REORDERABLE_WAYPOINTS,
        )
        return OptimizationResult(
            waypoints=original,
            outcome=OptimizationOutcome.INSUFFICIENT_WAYPOINTS,
            distance_before_m=distance_before,
            distance_after_m=distance_before,
        )

    home = next((waypoint for waypoint in original if waypoint.role is WaypointRole.HOME), None)
    rtl = next((waypoint for waypoint in original if waypoint.role is WaypointRole.RTL), None)
    start = home if home is not None else original[0]

    route: List[Waypoint] = [start]
    remaining = [waypoint for waypoint in ordinary if waypoint is not start]
    while remaining:
        tail = route[-1].position
        nearest_index = 0
        nearest_distance = float("inf")
        for index, candidate in enumerate(remaining):
            distance = haversine_distance(tail, candidate.position)
            if distance < nearest_distance:
                nearest_distance = distance
                nearest_index = index
        route.append(remaining.pop(nearest_index))

    if rtl is not None:
        route.append(rtl)

    optimised = tuple(route)
    distance_after = total_path_length([waypoint.position for waypoint in optimised])
    LOGGER.info(
        "Optimised %s waypoints: %.1f m -> %.1f m",
        len(optimised),
        distance_before,
        distance_after,
    )
    return OptimizationResult(
        waypoints=optimised,
        outcome=OptimizationOutcome.OPTIMIZED,
        distance_before_m=distance_before,
        distance_after_m=distance_after,
    )
