"""Mini README: Tests for the nearest-neighbour route optimiser.

Validates that optimisation keeps the waypoint set intact, respects the
home and return-to-launch anchors, breaks ties deterministically and
shortens a deliberately scrambled survey.
"""

from __future__ import annotations

from typing import List

from uavplanner.route_planning import (
    OptimizationOutcome,
    Waypoint,
    WaypointRole,
    optimize_route,
    total_path_length,
)


def _waypoint(identifier: str, latitude: float, longitude: float, role: WaypointRole = WaypointRole.WAYPOINT) -> Waypoint:
    return Waypoint(
        id=identifier,
        latitude=latitude,
        longitude=longitude,
        altitude=50.0,
        speed=10.0,
        role=role,
    )


def _scrambled_mission() -> List[Waypoint]:
    return [
        _waypoint("home", 0.0, 0.0, WaypointRole.HOME),
        _waypoint("d", 0.0, 0.04),
        _waypoint("a", 0.0, 0.01),
        _waypoint("c", 0.0, 0.03),
        _waypoint("b", 0.0, 0.02),
        _waypoint("e", 0.0, 0.05),
    ]


def _length(waypoints) -> float:
    return total_path_length([waypoint.position for waypoint in waypoints])


def test_optimiser_shortens_scrambled_route() -> None:
    """A home plus five scattered waypoints ends up visited in distance order."""

    mission = _scrambled_mission()
    result = optimize_route(mission)

    assert result.outcome is OptimizationOutcome.OPTIMIZED
    assert [waypoint.id for waypoint in result.waypoints] == ["home", "a", "b", "c", "d", "e"]
    assert _length(result.waypoints) <= _length(mission)
    assert result.distance_after_m < result.distance_before_m
    assert result.distance_saved_m > 0


def test_optimiser_preserves_waypoint_set_and_anchors() -> None:
    mission = _scrambled_mission()
    mission.insert(3, _waypoint("extra", 0.02, 0.02))
    mission.append(_waypoint("rtl", 0.0, 0.0, WaypointRole.RTL))

    result = optimize_route(mission)

    assert sorted(waypoint.id for waypoint in result.waypoints) == sorted(waypoint.id for waypoint in mission)
    assert result.waypoints[0].id == "home"
    assert result.waypoints[-1].id == "rtl"


def test_optimiser_starts_from_first_waypoint_without_home() -> None:
    mission = [
        _waypoint("start", 0.0, 0.0),
        _waypoint("far", 0.0, 0.03),
        _waypoint("near", 0.0, 0.01),
    ]
    result = optimize_route(mission)
    assert [waypoint.id for waypoint in result.waypoints] == ["start", "near", "far"]


def test_optimiser_is_deterministic() -> None:
    mission = _scrambled_mission()
    assert optimize_route(mission).waypoints == optimize_route(mission).waypoints


def test_ties_go_to_the_earliest_waypoint() -> None:
    """Equidistant candidates are visited in their original order."""

    home = _waypoint("home", 0.0, 0.0, WaypointRole.HOME)
    east = _waypoint("east", 0.0, 0.01)
    north = _waypoint("north", 0.01, 0.0)

    assert [wp.id for wp in optimize_route([home, east, north]).waypoints] == ["home", "east", "north"]
    assert [wp.id for wp in optimize_route([home, north, east]).waypoints] == ["home", "north", "east"]


def test_insufficient_waypoints_is_a_no_op() -> None:
    mission = [
        _waypoint("home", 0.0, 0.0, WaypointRole.HOME),
        _waypoint("only", 0.0, 0.01),
        _waypoint("rtl", 0.0, 0.0, WaypointRole.RTL),
    ]
    result = optimize_route(mission)

    assert result.outcome is OptimizationOutcome.INSUFFICIENT_WAYPOINTS
    assert result.waypoints == tuple(mission)
    assert result.distance_before_m == result.distance_after_m
