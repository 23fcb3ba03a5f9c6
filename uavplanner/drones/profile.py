"""Mini README: Drone profile record consumed by the feasibility engine.

Structure:
    * DroneProfile - immutable aircraft description with optional figures.
    * DEFAULT_WIND_RESISTANCE - wind tolerance assumed when none is recorded.

The engine only reads ``cruise_speed``, ``max_flight_time``,
``battery_capacity``, ``hover_current``, ``max_altitude`` and
``wind_resistance``. The physical fields (weight, motors, battery pack) feed
the drone metrics summary shown next to a profile. Profiles are stored as
camelCase JSON so saved data stays compatible with exported missions.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

DEFAULT_WIND_RESISTANCE = 10.0

_CAMEL_CASE_FIELDS = {
    "cruise_speed": "cruiseSpeed",
    "max_flight_time": "maxFlightTime",
    "battery_capacity": "batteryCapacity",
    "hover_current": "hoverCurrent",
    "max_altitude": "maxAltitude",
    "wind_resistance": "windResistance",
    "motor_count": "motorCount",
    "motor_thrust": "motorThrust",
    "battery_cells": "batteryCells",
    "battery_type": "batteryType",
    "battery_voltage": "batteryVoltage",
    "max_speed": "maxSpeed",
}


@dataclass(frozen=True, slots=True)
class DroneProfile:
    """Aircraft performance figures; optional values are ``None`` when unknown."""

    id: str
    name: str
    cruise_speed: float
    type: str = "multirotor"
    max_flight_time: Optional[float] = None
    battery_capacity: Optional[float] = None
    hover_current: Optional[float] = None
    max_altitude: Optional[float] = None
    wind_resistance: Optional[float] = None
    weight: Optional[float] = None
    motor_count: Optional[int] = None
    motor_thrust: Optional[float] = None
    battery_cells: Optional[int] = None
    battery_type: Optional[str] = None
    battery_voltage: Optional[float] = None
    max_speed: Optional[float] = None

    @property
    def effective_wind_resistance(self) -> float:
        return self.wind_resistance or DEFAULT_WIND_RESISTANCE

    def as_dict(self) -> Dict[str, Any]:
        """Export the profile with camelCase keys."""

        return {
            _CAMEL_CASE_FIELDS.get(field.name, field.name): getattr(self, field.name)
            for field in fields(self)
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "DroneProfile":
        """Build a profile from camelCase or snake_case keys.

        Zero or empty optional figures are treated as unknown, the way the
        profile editor stores blank inputs.
        """

        values: Dict[str, Any] = {}
        for field in fields(cls):
            camel = _CAMEL_CASE_FIELDS.get(field.name, field.name)
            if camel in payload:
                values[field.name] = payload[camel]
            elif field.name in payload:
                values[field.name] = payload[field.name]

        for required in ("id", "name", "cruise_speed"):
            if values.get(required) in (None, ""):
                raise ValueError(f"Drone profile is missing '{required}'")

        values["cruise_speed"] = float(values["cruise_speed"])
        for name in (
            "max_flight_time",
            "battery_capacity",
            "hover_current",
            "max_altitude",
            "wind_resistance",
            "weight",
            "motor_thrust",
            "battery_voltage",
            "max_speed",
        ):
            values[name] = _optional_float(values.get(name))
        for name in ("motor_count", "battery_cells"):
            number = _optional_float(values.get(name))
            values[name] = int(number) if number is not None else None
        if not values.get("battery_type"):
            values["battery_type"] = None
        values["id"] = str(values["id"])
        values["name"] = str(values["name"])
        return cls(**values)


def _optional_float(value: Any) -> Optional[float]:
    """Coerce blank, zero, or missing values to ``None``."""

    if value in (None, ""):
        return None
    number = float(value)
    return number or None
