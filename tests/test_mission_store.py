"""Mini README: Tests for the mission store command layer.

Covers waypoint creation defaults, anchor placement rules, validation at
the creation boundary, editing commands, optimisation through the store,
and the route analysis shown next to the verdict.
"""

from __future__ import annotations

import pytest

from uavplanner.configuration import UavPlannerSettings
from uavplanner.drones import DroneProfile
from uavplanner.errors import InvalidCoordinateError, InvalidWaypointError
from uavplanner.feasibility import FeasibilityStatus
from uavplanner.missions import MissionStore
from uavplanner.route_planning import OptimizationOutcome, WaypointRole, haversine_distance

SETTINGS = UavPlannerSettings(storage_backend="memory")
DRONE = DroneProfile(id="drone_0001", name="Surveyor", cruise_speed=12.0, max_flight_time=25.0)


def _store() -> MissionStore:
    return MissionStore(settings=SETTINGS)


def test_new_waypoints_take_mission_and_drone_defaults() -> None:
    store = _store()
    store.add_waypoint(51.5, -0.12)
    first = store.waypoints[0]
    assert first.id == "wp_0001"
    assert first.altitude == pytest.approx(50.0)
    assert first.speed == pytest.approx(15.0)
    assert first.role is WaypointRole.WAYPOINT

    store.select_drone(DRONE)
    store.add_waypoint(51.51, -0.12, altitude=80.0)
    second = store.waypoints[1]
    assert second.id == "wp_0002"
    assert second.altitude == pytest.approx(80.0)
    assert second.speed == pytest.approx(12.0)

    store.set_parameter("default_speed", 9.0)
    store.add_waypoint(51.52, -0.12)
    assert store.waypoints[2].speed == pytest.approx(9.0)


def test_every_command_returns_a_fresh_verdict() -> None:
    store = _store()
    assert store.feasibility().status is FeasibilityStatus.INDETERMINATE

    store.add_waypoint(51.5, -0.12)
    result = store.select_drone(DRONE)
    assert result.status is FeasibilityStatus.INDETERMINATE

    result = store.add_waypoint(51.51, -0.12)
    assert result.status is FeasibilityStatus.FEASIBLE
    assert result is store.feasibility()
    assert result.total_distance_m == pytest.approx(haversine_distance((51.5, -0.12), (51.51, -0.12)))


def test_invalid_coordinates_are_rejected_without_side_effects() -> None:
    store = _store()
    store.add_waypoint(10.0, 10.0)

    with pytest.raises(InvalidCoordinateError):
        store.add_waypoint(91.0, 0.0)
    with pytest.raises(InvalidCoordinateError):
        store.add_waypoint(0.0, -180.5)
    with pytest.raises(InvalidWaypointError):
        store.add_waypoint(0.0, 0.0, hover_time=-1.0)

    assert len(store.waypoints) == 1
    store.add_waypoint(11.0, 10.0)
    assert store.waypoints[-1].id == "wp_0002"


def test_home_goes_first_and_rtl_stays_last() -> None:
    store = _store()
    store.add_waypoint(0.0, 0.01)
    store.add_waypoint(0.0, 0.0, role=WaypointRole.HOME)
    store.add_waypoint(0.0, 0.0, role="rtl")
    store.add_waypoint(0.0, 0.02)

    roles = [waypoint.role for waypoint in store.waypoints]
    assert roles == [WaypointRole.HOME, WaypointRole.WAYPOINT, WaypointRole.WAYPOINT, WaypointRole.RTL]

    with pytest.raises(InvalidWaypointError):
        store.add_waypoint(0.0, 0.0, role=WaypointRole.HOME)
    with pytest.raises(InvalidWaypointError):
        store.add_waypoint(0.0, 0.0, role=WaypointRole.RTL)


def test_set_home_point_promotes_first_waypoint() -> None:
    store = _store()
    assert store.set_home_point() is store.feasibility()

    store.add_waypoint(0.0, 0.0)
    store.add_waypoint(0.0, 0.01)
    store.set_home_point()
    store.set_home_point()

    assert [waypoint.role for waypoint in store.waypoints] == [WaypointRole.HOME, WaypointRole.WAYPOINT]
    assert store.home.position == (0.0, 0.0)


def test_replace_contents_requires_home_first() -> None:
    store = _store()
    store.add_waypoint(5.0, 5.0)

    with pytest.raises(InvalidWaypointError, match="first"):
        store.replace_contents(
            [
                {"latitude": 0.0, "longitude": 0.05},
                {"latitude": 0.0, "longitude": 0.04},
                {"latitude": 0.0, "longitude": 0.0, "role": "home"},
            ],
            parameters=store.parameters,
            drone=None,
        )

    assert [waypoint.position for waypoint in store.waypoints] == [(5.0, 5.0)]


def test_return_to_launch_requires_home_and_is_added_once() -> None:
    store = _store()
    store.add_waypoint(1.0, 1.0)
    with pytest.raises(InvalidWaypointError):
        store.add_return_to_launch()

    store.set_home_point()
    store.add_waypoint(1.0, 1.01)
    store.add_return_to_launch()
    store.add_return_to_launch()

    last = store.waypoints[-1]
    assert last.role is WaypointRole.RTL
    assert last.position == store.home.position
    assert sum(1 for waypoint in store.waypoints if waypoint.role is WaypointRole.RTL) == 1


def test_editing_commands() -> None:
    store = _store()
    store.select_drone(DRONE)
    store.add_waypoint(0.0, 0.0)
    store.add_waypoint(0.0, 0.01)
    target = store.waypoints[1].id

    before = store.feasibility().estimated_flight_minutes
    result = store.update_waypoint(target, hover_time=120.0, altitude=70.0)
    assert result.estimated_flight_minutes == pytest.approx(before + 2.0)
    assert store.get_waypoint(target).altitude == pytest.approx(70.0)

    store.move_waypoint(target, 0.0, 0.02)
    assert store.feasibility().total_distance_m == pytest.approx(
        haversine_distance((0.0, 0.0), (0.0, 0.02))
    )

    with pytest.raises(KeyError):
        store.remove_waypoint("wp_9999")
    with pytest.raises(KeyError):
        store.update_waypoint("wp_9999", speed=3.0)
    with pytest.raises(InvalidCoordinateError):
        store.move_waypoint(target, 0.0, 200.0)


def test_parameters_are_validated() -> None:
    store = _store()
    store.set_parameters(wind_speed=4.0, safety_reserve_percent=30.0)
    assert store.parameters.wind_speed == pytest.approx(4.0)
    assert store.parameters.safety_reserve_percent == pytest.approx(30.0)

    with pytest.raises(ValueError):
        store.set_parameter("altitude_ceiling", 10.0)
    with pytest.raises(ValueError):
        store.set_parameter("wind_speed", -1.0)


def test_optimize_through_store() -> None:
    store = _store()
    store.add_waypoint(0.0, 0.0, role=WaypointRole.HOME)
    result = store.optimize()
    assert result.outcome is OptimizationOutcome.INSUFFICIENT_WAYPOINTS

    for longitude in (0.04, 0.01, 0.03, 0.02):
        store.add_waypoint(0.0, longitude)
    store.add_return_to_launch()
    before = store.feasibility().total_distance_m

    result = store.optimize()

    assert result.outcome is OptimizationOutcome.OPTIMIZED
    assert [waypoint.longitude for waypoint in store.waypoints] == [0.0, 0.01, 0.02, 0.03, 0.04, 0.0]
    assert result.feasibility is store.feasibility()
    assert store.feasibility().total_distance_m < before


def test_analysis_and_clear() -> None:
    store = _store()
    analysis = store.analysis()
    assert analysis.waypoint_count == 0
    assert analysis.segment_count == 0
    assert analysis.average_altitude == 0.0
    assert analysis.max_distance_from_home_m is None

    store.add_waypoint(0.0, 0.0, altitude=40.0, role=WaypointRole.HOME)
    store.add_waypoint(0.0, 0.03, altitude=60.0)
    store.add_waypoint(0.0, 0.01, altitude=80.0)

    analysis = store.analysis()
    assert analysis.waypoint_count == 3
    assert analysis.segment_count == 2
    assert analysis.average_altitude == pytest.approx(60.0)
    assert analysis.max_distance_from_home_m == pytest.approx(haversine_distance((0.0, 0.0), (0.0, 0.03)))
    assert len(store.smoothed_path()) == 41

    store.clear()
    assert store.waypoints == ()
    assert store.smoothed_path() == []


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_values_are_rejected(value: float) -> None:
    store = _store()
    with pytest.raises(InvalidWaypointError):
        store.add_waypoint(0.0, 0.0, altitude=value)
    with pytest.raises(InvalidWaypointError):
        store.add_waypoint(0.0, 0.0, speed=value)
    assert store.waypoints == ()

    store.add_waypoint(0.0, 0.0, altitude=40.0)
    target = store.waypoints[0].id
    with pytest.raises(InvalidWaypointError):
        store.update_waypoint(target, altitude=value)
    with pytest.raises(InvalidWaypointError):
        store.update_waypoint(target, hover_time=value)
    assert store.get_waypoint(target).altitude == pytest.approx(40.0)


def test_rejected_edit_leaves_waypoint_in_place() -> None:
    store = _store()
    store.add_waypoint(1.0, 1.0, speed=8.0)
    target = store.waypoints[0].id

    with pytest.raises(InvalidWaypointError):
        store.update_waypoint(target, latitude=2.0, speed=-5.0)
    with pytest.raises(InvalidCoordinateError):
        store.update_waypoint(target, latitude=120.0, altitude=90.0)

    waypoint = store.get_waypoint(target)
    assert waypoint.position == (1.0, 1.0)
    assert waypoint.speed == pytest.approx(8.0)
    assert waypoint.altitude == pytest.approx(50.0)

    store.update_waypoint(target, latitude=2.0, speed=6.0)
    assert store.get_waypoint(target).position == (2.0, 1.0)
    assert store.get_waypoint(target).speed == pytest.approx(6.0)
