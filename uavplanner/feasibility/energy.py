"""Mini README: Energy model converting a route into time and battery figures.

Structure:
    * EnergyEstimate - flight time and battery usage for one mission state.
    * estimate_energy - apply speed, wind, hover and reserve rules.
    * max_flight_minutes / derived_max_flight_minutes - endurance lookup.
    * estimate_range_km - still-air range on the usable battery.
    * DroneMetrics / summarise_drone_performance - profile summary figures.

Rules:
    The mission speed wins over the drone's cruise speed when it is set.
    Wind is modelled as a scalar penalty, ``1 + wind / speed * 0.3``, which
    slows the effective ground speed; direction is ignored. Battery demand
    is the share of the drone's endurance the flight consumes. When the
    profile has no endurance figure, endurance is derived from capacity and
    hover current using only 80% of the nominal capacity. Every figure that
    cannot be computed is ``None`` and ``indeterminate_reason`` says why.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..drones.profile import DroneProfile
from ..logging_utils import get_logger
from ..route_planning.waypoints import MissionParameters, Waypoint

LOGGER = get_logger(__name__)

WIND_DRAG_FACTOR = 0.3
USABLE_CAPACITY_FRACTION = 0.8

NOMINAL_CELL_VOLTAGE = {
    "lipo": 3.7,
    "li-ion": 3.6,
    "lifepo4": 3.2,
    "nimh": 1.2,
}
DEFAULT_CELL_VOLTAGE = 3.7


@dataclass(slots=True)
class EnergyEstimate:
    """Time and battery figures; ``None`` marks an undefined value."""

    effective_speed: float
    adjusted_speed: Optional[float]
    travel_minutes: Optional[float]
    hover_minutes: float
    total_flight_minutes: Optional[float]
    max_flight_minutes: Optional[float]
    battery_required_percent: Optional[float]
    battery_with_reserve_percent: Optional[float]
    battery_available_after_reserve_percent: Optional[float]
    indeterminate_reason: Optional[str] = None

    @property
    def is_determinate(self) -> bool:
        return self.battery_with_reserve_percent is not None


def derived_max_flight_minutes(drone: DroneProfile) -> Optional[float]:
    """Endurance from capacity (mAh) and hover current (A) at 80% usable charge."""

    if drone.battery_capacity and drone.hover_current and drone.hover_current > 0:
        return (drone.battery_capacity / 1000) / drone.hover_current * 60 * USABLE_CAPACITY_FRACTION
    return None


def max_flight_minutes(drone: DroneProfile) -> Optional[float]:
    """Stated endurance when known, otherwise the derived estimate."""

    if drone.max_flight_time and drone.max_flight_time > 0:
        return drone.max_flight_time
    return derived_max_flight_minutes(drone)


def estimate_range_km(drone: DroneProfile) -> Optional[float]:
    """Still-air range at cruise speed on the usable battery charge."""

    if not drone.cruise_speed or not drone.battery_capacity:
        return None
    if not drone.hover_current or drone.hover_current <= 0:
        return None
    hours = (drone.battery_capacity / 1000) / drone.hover_current * USABLE_CAPACITY_FRACTION
    return drone.cruise_speed * hours * 3.6


def estimate_energy(
    total_distance_m: float,
    waypoints: Iterable[Waypoint],
    drone: Optional[DroneProfile],
    parameters: MissionParameters,
) -> EnergyEstimate:
    """Compute flight time and battery usage for a route of ``total_distance_m``."""

    hover_minutes = sum(waypoint.hover_time or 0.0 for waypoint in waypoints) / 60
    if parameters.default_speed > 0:
        effective_speed = parameters.default_speed
    else:
        effective_speed = drone.cruise_speed if drone is not None else 0.0

    if effective_speed <= 0:
        LOGGER.debug("Effective speed is %s; flight time undefined", effective_speed)
        return EnergyEstimate(
            effective_speed=effective_speed,
            adjusted_speed=None,
            travel_minutes=None,
            hover_minutes=hover_minutes,
            total_flight_minutes=None,
            max_flight_minutes=max_flight_minutes(drone) if drone is not None else None,
            battery_required_percent=None,
            battery_with_reserve_percent=None,
            battery_available_after_reserve_percent=None,
            indeterminate_reason="Set a mission speed or a drone cruise speed above zero",
        )

    wind_factor = 1 + (parameters.wind_speed / effective_speed) * WIND_DRAG_FACTOR
    adjusted_speed = effective_speed / wind_factor
    travel_minutes = (total_distance_m / adjusted_speed) / 60
    total_minutes = travel_minutes + hover_minutes

    endurance = max_flight_minutes(drone) if drone is not None else None
    if endurance is None:
        reason = (
            "Select a drone to estimate battery usage"
            if drone is None
            else "Drone profile needs a max flight time or battery capacity and hover current"
        )
        return EnergyEstimate(
            effective_speed=effective_speed,
            adjusted_speed=adjusted_speed,
            travel_minutes=travel_minutes,
            hover_minutes=hover_minutes,
            total_flight_minutes=total_minutes,
            max_flight_minutes=None,
            battery_required_percent=None,
            battery_with_reserve_percent=None,
            battery_available_after_reserve_percent=None,
            indeterminate_reason=reason,
        )

    required = (total_minutes / endurance) * 100
    with_reserve = required * (1 + parameters.safety_reserve_percent / 100)
    LOGGER.debug(
        "Energy estimate: %.1f m at %.2f m/s -> %.2f min, battery %.1f%% (%.1f%% with reserve)",
        total_distance_m,
        adjusted_speed,
        total_minutes,
        required,
        with_reserve,
    )
    return EnergyEstimate(
        effective_speed=effective_speed,
        adjusted_speed=adjusted_speed,
        travel_minutes=travel_minutes,
        hover_minutes=hover_minutes,
        total_flight_minutes=total_minutes,
        max_flight_minutes=endurance,
        battery_required_percent=required,
        battery_with_reserve_percent=with_reserve,
        battery_available_after_reserve_percent=100 - with_reserve,
    )


@dataclass(slots=True)
class DroneMetrics:
    """Derived performance figures shown alongside a drone profile."""

    total_thrust_kg: Optional[float]
    thrust_to_weight: Optional[float]
    estimated_flight_minutes: Optional[float]
    estimated_range_km: Optional[float]
    battery_voltage: Optional[float]

    def as_dict(self) -> dict:
        return {
            "totalThrustKg": self.total_thrust_kg,
            "thrustToWeight": self.thrust_to_weight,
            "estimatedFlightMinutes": self.estimated_flight_minutes,
            "estimatedRangeKm": self.estimated_range_km,
            "batteryVoltage": self.battery_voltage,
        }


def summarise_drone_performance(drone: DroneProfile) -> DroneMetrics:
    """Compute thrust, endurance, range and pack voltage from a profile."""

    total_thrust = None
    thrust_to_weight = None
    if drone.motor_count and drone.motor_thrust:
        total_thrust = drone.motor_count * drone.motor_thrust / 1000
        if drone.weight:
            thrust_to_weight = total_thrust / drone.weight

    voltage = drone.battery_voltage
    if voltage is None and drone.battery_cells:
        per_cell = NOMINAL_CELL_VOLTAGE.get((drone.battery_type or "").lower(), DEFAULT_CELL_VOLTAGE)
        voltage = round(drone.battery_cells * per_cell, 1)

    return DroneMetrics(
        total_thrust_kg=total_thrust,
        thrust_to_weight=thrust_to_weight,
        estimated_flight_minutes=derived_max_flight_minutes(drone),
        estimated_range_km=estimate_range_km(drone),
        battery_voltage=voltage,
    )
