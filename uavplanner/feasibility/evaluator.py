"""Mini README: Go/no-go classification of a mission.

Structure:
    * FeasibilityStatus - feasible, risky, cannot complete, or indeterminate.
    * WarningSeverity / MissionWarning - user-facing messages.
    * FeasibilityResult - figures, status and warnings for one mission state.
    * classify_status - threshold rule on battery demand with reserve.
    * evaluate_feasibility - run the energy model and collect warnings.

The evaluator holds no state; the mission store calls it after every edit
and presentation layers only render the returned data. Warnings always
appear in the same order: drone selection, waypoints, battery verdict,
altitude limit, wind limit, home point.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from ..drones.profile import DroneProfile
from ..logging_utils import get_logger
from ..route_planning.geometry import total_path_length
from ..route_planning.waypoints import MissionParameters, Waypoint, WaypointRole
from .energy import EnergyEstimate, estimate_energy

LOGGER = get_logger(__name__)

RISKY_THRESHOLD_PERCENT = 80.0
CANNOT_COMPLETE_THRESHOLD_PERCENT = 100.0


class FeasibilityStatus(str, Enum):
    """Mission verdict."""

    FEASIBLE = "feasible"
    RISKY = "risky"
    CANNOT_COMPLETE = "cannot_complete"
    INDETERMINATE = "indeterminate"


class WarningSeverity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class MissionWarning:
    severity: WarningSeverity
    message: str

    def as_dict(self) -> Dict[str, str]:
        return {"severity": self.severity.value, "message": self.message}


@dataclass(slots=True)
class FeasibilityResult:
    """Derived verdict; recomputed on demand and never persisted."""

    total_distance_m: float
    estimated_flight_minutes: Optional[float]
    battery_required_percent: Optional[float]
    battery_with_reserve_percent: Optional[float]
    battery_available_after_reserve_percent: Optional[float]
    status: FeasibilityStatus
    warnings: List[MissionWarning] = field(default_factory=list)
    energy: Optional[EnergyEstimate] = None

    def as_dict(self) -> Dict[str, object]:
        """Export with camelCase keys for JSON responses."""

        return {
            "totalDistanceMeters": self.total_distance_m,
            "estimatedFlightMinutes": self.estimated_flight_minutes,
            "batteryRequiredPercent": self.battery_required_percent,
            "batteryWithReservePercent": self.battery_with_reserve_percent,
            "batteryAvailableAfterReservePercent": self.battery_available_after_reserve_percent,
            "status": self.status.value,
            "warnings": [warning.as_dict() for warning in self.warnings],
        }


_STATUS_WARNINGS = {
    FeasibilityStatus.CANNOT_COMPLETE: MissionWarning(
        WarningSeverity.ERROR, "Mission exceeds drone battery capacity"
    ),
    FeasibilityStatus.RISKY: MissionWarning(
        WarningSeverity.WARNING, "Low battery margin - consider adding charging stop"
    ),
    FeasibilityStatus.FEASIBLE: MissionWarning(
        WarningSeverity.SUCCESS, "Mission is feasible with current parameters"
    ),
}


def classify_status(battery_with_reserve_percent: Optional[float]) -> FeasibilityStatus:
    """Map battery demand (reserve included) onto a verdict.

    The boundary values belong to the more severe class: exactly 80% is
    risky and exactly 100% cannot complete.
    """

    if battery_with_reserve_percent is None:
        return FeasibilityStatus.INDETERMINATE
    if battery_with_reserve_percent >= CANNOT_COMPLETE_THRESHOLD_PERCENT:
        return FeasibilityStatus.CANNOT_COMPLETE
    if battery_with_reserve_percent >= RISKY_THRESHOLD_PERCENT:
        return FeasibilityStatus.RISKY
    return FeasibilityStatus.FEASIBLE


def evaluate_feasibility(
    waypoints: Sequence[Waypoint],
    drone: Optional[DroneProfile],
    parameters: MissionParameters,
) -> FeasibilityResult:
    """Estimate energy for the straight route and classify the mission."""

    total_distance = total_path_length([waypoint.position for waypoint in waypoints])
    energy = estimate_energy(total_distance, waypoints, drone, parameters)

    if drone is None or len(waypoints) < 2:
        status = FeasibilityStatus.INDETERMINATE
    else:
        status = classify_status(energy.battery_with_reserve_percent)

    warnings: List[MissionWarning] = []
    if drone is None:
        warnings.append(MissionWarning(WarningSeverity.INFO, "Select a drone to start planning"))
    if not waypoints:
        warnings.append(MissionWarning(WarningSeverity.INFO, "Add waypoints to create a mission"))

    if status in _STATUS_WARNINGS:
        warnings.append(_STATUS_WARNINGS[status])
    elif drone is not None and waypoints:
        if len(waypoints) < 2:
            reason = "Add at least two waypoints to estimate the flight"
        else:
            reason = energy.indeterminate_reason or "Mission figures could not be computed"
        warnings.append(MissionWarning(WarningSeverity.INFO, reason))

    if drone is not None and waypoints and drone.max_altitude:
        highest = max(waypoint.altitude for waypoint in waypoints)
        if highest > drone.max_altitude:
            warnings.append(
                MissionWarning(
                    WarningSeverity.WARNING,
                    f"Waypoint exceeds max altitude ({drone.max_altitude:g}m)",
                )
            )

    if drone is not None and parameters.wind_speed > drone.effective_wind_resistance:
        warnings.append(
            MissionWarning(WarningSeverity.WARNING, "Wind speed exceeds drone capabilities")
        )

    if waypoints and not any(waypoint.role is WaypointRole.HOME for waypoint in waypoints):
        warnings.append(
            MissionWarning(
                WarningSeverity.INFO, "No home point set - consider setting one for safety"
            )
        )

    LOGGER.debug(
        "Feasibility: status=%s distance=%.1f m warnings=%s",
        status.value,
        total_distance,
        len(warnings),
    )
    return FeasibilityResult(
        total_distance_m=total_distance,
        estimated_flight_minutes=energy.total_flight_minutes,
        battery_required_percent=energy.battery_required_percent,
        battery_with_reserve_percent=energy.battery_with_reserve_percent,
        battery_available_after_reserve_percent=energy.battery_available_after_reserve_percent,
        status=status,
        warnings=warnings,
        energy=energy,
    )
