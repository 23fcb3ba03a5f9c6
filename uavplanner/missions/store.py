"""Mini README: Mission store owning the editable mission state.

Structure:
    * MissionAnalysis - waypoint/segment counts, altitude and home excursion.
    * MissionStore - command layer over the waypoint sequence.

The store is the only component that creates, edits or removes waypoints.
Each command validates its input, applies the change, re-runs the
feasibility evaluator and returns the fresh ``FeasibilityResult``. Other
components receive tuples of frozen waypoints, so they can never mutate
the sequence behind the store's back.

Anchor rules kept on every edit:
    * at most one ``home`` waypoint; a newly added home goes first;
    * at most one ``rtl`` waypoint and it is always the last element;
      ordinary waypoints added later are inserted just before it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..configuration import UavPlannerSettings, get_settings
from ..drones.profile import DroneProfile
from ..errors import InvalidWaypointError
from ..feasibility import FeasibilityResult, evaluate_feasibility
from ..logging_utils import get_logger
from ..route_planning import (
    Coordinate,
    MissionParameters,
    OptimizationOutcome,
    OptimizationResult,
    Waypoint,
    WaypointRole,
    max_distance_from,
    optimize_route,
    smooth_path,
    validate_coordinate,
)

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class MissionAnalysis:
    """Route statistics shown next to the feasibility verdict."""

    waypoint_count: int
    segment_count: int
    average_altitude: float
    max_distance_from_home_m: Optional[float]

    def as_dict(self) -> Dict[str, object]:
        return {
            "waypointCount": self.waypoint_count,
            "segmentCount": self.segment_count,
            "averageAltitude": self.average_altitude,
            "maxDistanceFromHomeMeters": self.max_distance_from_home_m,
        }


def _finite(name: str, value: float) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise InvalidWaypointError(f"Waypoint {name} must be a finite number")
    return number


def _non_negative(name: str, value: float) -> float:
    number = _finite(name, value)
    if number < 0:
        raise InvalidWaypointError(f"Waypoint {name} must not be negative")
    return number


class MissionStore:
    """Own the ordered waypoints, mission parameters and selected drone."""

    def __init__(
        self,
        *,
        parameters: Optional[MissionParameters] = None,
        drone: Optional[DroneProfile] = None,
        settings: Optional[UavPlannerSettings] = None,
    ) -> None:
        settings = settings or get_settings()
        self._fallback_speed = settings.fallback_waypoint_speed
        self._smoothing_samples = settings.smoothing_samples
        self._parameters = parameters or MissionParameters(
            default_altitude=settings.default_altitude,
            safety_reserve_percent=settings.default_safety_reserve,
        )
        self._drone = drone
        self._waypoints: List[Waypoint] = []
        self._sequence = 0
        self._latest = self._recompute()
        LOGGER.debug("MissionStore initialised with parameters %s", self._parameters)

    # ------------------------------------------------------------------ views
    @property
    def waypoints(self) -> Tuple[Waypoint, ...]:
        return tuple(self._waypoints)

    @property
    def parameters(self) -> MissionParameters:
        return self._parameters

    @property
    def drone(self) -> Optional[DroneProfile]:
        return self._drone

    @property
    def home(self) -> Optional[Waypoint]:
        return next((wp for wp in self._waypoints if wp.role is WaypointRole.HOME), None)

    def get_waypoint(self, waypoint_id: str) -> Waypoint:
        """Retrieve a waypoint by identifier, raising ``KeyError`` when unknown."""

        return self._waypoints[self._index_of(waypoint_id)]

    def feasibility(self) -> FeasibilityResult:
        """Return the verdict for the current state."""

        return self._latest

    def smoothed_path(self) -> List[Coordinate]:
        """Return the display path through the current waypoints."""

        return smooth_path([wp.position for wp in self._waypoints], self._smoothing_samples)

    def analysis(self) -> MissionAnalysis:
        """Summarise counts, mean altitude and the furthest point from home."""

        count = len(self._waypoints)
        average = sum(wp.altitude for wp in self._waypoints) / count if count else 0.0
        home = self.home
        furthest = (
            max_distance_from(home.position, [wp.position for wp in self._waypoints])
            if home is not None
            else None
        )
        return MissionAnalysis(
            waypoint_count=count,
            segment_count=max(0, count - 1),
            average_altitude=average,
            max_distance_from_home_m=furthest,
        )

    # --------------------------------------------------------------- commands
    def add_waypoint(
        self,
        latitude: float,
        longitude: float,
        *,
        altitude: Optional[float] = None,
        speed: Optional[float] = None,
        hover_time: float = 0.0,
        role: WaypointRole | str = WaypointRole.WAYPOINT,
    ) -> FeasibilityResult:
        """Create a waypoint and insert it according to its role."""

        role = role if isinstance(role, WaypointRole) else WaypointRole.from_str(role)
        if role is WaypointRole.HOME and self.home is not None:
            raise InvalidWaypointError("Mission already has a home point")
        if role is WaypointRole.RTL and self._rtl_index() is not None:
            raise InvalidWaypointError("Mission already has a return-to-launch point")
        waypoint = self._build_waypoint(
            f"wp_{self._sequence + 1:04d}",
            latitude,
            longitude,
            altitude,
            speed,
            hover_time,
            role,
            parameters=self._parameters,
            drone=self._drone,
        )
        self._sequence += 1

        if role is WaypointRole.HOME:
            self._waypoints.insert(0, waypoint)
        elif role is WaypointRole.RTL or self._rtl_index() is None:
            self._waypoints.append(waypoint)
        else:
            self._waypoints.insert(self._rtl_index(), waypoint)
        LOGGER.info(
            "Added %s waypoint %s at (%.6f, %.6f)",
            role.value,
            waypoint.id,
            waypoint.latitude,
            waypoint.longitude,
        )
        return self._recompute()

    def remove_waypoint(self, waypoint_id: str) -> FeasibilityResult:
        """Delete a waypoint from the mission."""

        removed = self._waypoints.pop(self._index_of(waypoint_id))
        LOGGER.info("Removed %s waypoint %s", removed.role.value, removed.id)
        return self._recompute()

    def move_waypoint(self, waypoint_id: str, latitude: float, longitude: float) -> FeasibilityResult:
        """Relocate a waypoint, e.g. after a marker drag."""

        return self.update_waypoint(waypoint_id, latitude=latitude, longitude=longitude)

    def update_waypoint(
        self,
        waypoint_id: str,
        *,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        altitude: Optional[float] = None,
        speed: Optional[float] = None,
        hover_time: Optional[float] = None,
    ) -> FeasibilityResult:
        """Edit position, altitude, speed or hover time of one waypoint.

        Every value is validated before the waypoint is replaced, so a
        rejected edit leaves the waypoint untouched.
        """

        index = self._index_of(waypoint_id)
        current = self._waypoints[index]
        changes: Dict[str, float] = {}
        if latitude is not None or longitude is not None:
            changes["latitude"], changes["longitude"] = validate_coordinate(
                current.latitude if latitude is None else latitude,
                current.longitude if longitude is None else longitude,
            )
        if altitude is not None:
            changes["altitude"] = _finite("altitude", altitude)
        if speed is not None:
            changes["speed"] = _non_negative("speed", speed)
        if hover_time is not None:
            changes["hover_time"] = _non_negative("hover time", hover_time)
        if changes:
            self._waypoints[index] = replace(self._waypoints[index], **changes)
            LOGGER.info("Updated waypoint %s: %s", waypoint_id, changes)
        return self._recompute()

    def set_parameter(self, name: str, value: float) -> FeasibilityResult:
        """Change a single mission parameter by field name."""

        return self.set_parameters(**{name: value})

    def set_parameters(self, **values: float) -> FeasibilityResult:
        """Change several mission parameters at once."""

        self._parameters = self._parameters.updated(**values)
        LOGGER.info("Mission parameters now %s", self._parameters)
        return self._recompute()

    def select_drone(self, drone: Optional[DroneProfile]) -> FeasibilityResult:
        """Select the drone profile used for feasibility, or clear it with ``None``."""

        self._drone = drone
        LOGGER.info("Selected drone %s", drone.id if drone else None)
        return self._recompute()

    def set_home_point(self) -> FeasibilityResult:
        """Promote the first waypoint to home."""

        if not self._waypoints or self._waypoints[0].role is WaypointRole.HOME:
            LOGGER.debug("Home point unchanged")
            return self._latest
        if self._waypoints[0].role is WaypointRole.RTL:
            raise InvalidWaypointError("A return-to-launch point cannot become home")
        self._waypoints[0] = replace(self._waypoints[0], role=WaypointRole.HOME)
        LOGGER.info("Home point set to waypoint %s", self._waypoints[0].id)
        return self._recompute()

    def add_return_to_launch(self) -> FeasibilityResult:
        """Append a return-to-launch waypoint above the home position."""

        home = self.home
        if home is None:
            raise InvalidWaypointError("Set a home point before adding return to launch")
        if self._waypoints[-1].role is WaypointRole.RTL:
            LOGGER.debug("Mission already ends with return to launch")
            return self._latest
        return self.add_waypoint(
            home.latitude,
            home.longitude,
            altitude=self._parameters.default_altitude,
            role=WaypointRole.RTL,
        )

    def optimize(self) -> OptimizationResult:
        """Reorder ordinary waypoints by nearest neighbour and recompute."""

        result = optimize_route(self.waypoints)
        if result.outcome is OptimizationOutcome.OPTIMIZED:
            self._waypoints = list(result.waypoints)
            result.feasibility = self._recompute()
        else:
            result.feasibility = self._latest
        return result

    def clear(self) -> FeasibilityResult:
        """Remove every waypoint."""

        self._waypoints = []
        LOGGER.info("Cleared mission waypoints")
        return self._recompute()

    def replace_contents(
        self,
        entries: Iterable[Mapping[str, Any]],
        *,
        parameters: MissionParameters,
        drone: Optional[DroneProfile],
    ) -> FeasibilityResult:
        """Swap in a whole mission at once; nothing changes if any entry is invalid.

        Entries use ``latitude``, ``longitude``, ``altitude``, ``speed``,
        ``hover_time`` and ``role`` keys and keep their given order.
        """

        sequence = self._sequence
        staged: List[Waypoint] = []
        for entry in entries:
            sequence += 1
            role = entry.get("role", WaypointRole.WAYPOINT)
            role = role if isinstance(role, WaypointRole) else WaypointRole.from_str(role)
            staged.append(
                self._build_waypoint(
                    f"wp_{sequence:04d}",
                    entry["latitude"],
                    entry["longitude"],
                    entry.get("altitude"),
                    entry.get("speed"),
                    entry.get("hover_time") or 0.0,
                    role,
                    parameters=parameters,
                    drone=drone,
                )
            )

        roles = [waypoint.role for waypoint in staged]
        if roles.count(WaypointRole.HOME) > 1:
            raise InvalidWaypointError("A mission can have only one home point")
        if WaypointRole.HOME in roles and roles[0] is not WaypointRole.HOME:
            raise InvalidWaypointError("Home must be the first waypoint")
        if roles.count(WaypointRole.RTL) > 1:
            raise InvalidWaypointError("A mission can have only one return-to-launch point")
        if WaypointRole.RTL in roles and roles[-1] is not WaypointRole.RTL:
            raise InvalidWaypointError("Return to launch must be the last waypoint")

        self._sequence = sequence
        self._waypoints = staged
        self._parameters = parameters
        self._drone = drone
        LOGGER.info("Loaded mission with %s waypoints", len(staged))
        return self._recompute()

    # ---------------------------------------------------------------- helpers
    def _index_of(self, waypoint_id: str) -> int:
        for index, waypoint in enumerate(self._waypoints):
            if waypoint.id == waypoint_id:
                return index
        raise KeyError(f"Waypoint {waypoint_id} is not part of the mission")

    def _rtl_index(self) -> Optional[int]:
        for index, waypoint in enumerate(self._waypoints):
            if waypoint.role is WaypointRole.RTL:
                return index
        return None

    def _build_waypoint(
        self,
        waypoint_id: str,
        latitude: float,
        longitude: float,
        altitude: Optional[float],
        speed: Optional[float],
        hover_time: float,
        role: WaypointRole,
        *,
        parameters: MissionParameters,
        drone: Optional[DroneProfile],
    ) -> Waypoint:
        """Validate inputs and fill altitude/speed from mission or drone defaults."""

        latitude, longitude = validate_coordinate(latitude, longitude)
        if altitude is None:
            altitude = parameters.default_altitude
        if not speed:
            speed = (
                parameters.default_speed
                or (drone.cruise_speed if drone else 0)
                or self._fallback_speed
            )
        return Waypoint(
            id=waypoint_id,
            latitude=latitude,
            longitude=longitude,
            altitude=_finite("altitude", altitude),
            speed=_non_negative("speed", speed),
            hover_time=_non_negative("hover time", hover_time),
            role=role,
        )

    def _recompute(self) -> FeasibilityResult:
        self._latest = evaluate_feasibility(self.waypoints, self._drone, self._parameters)
        return self._latest
