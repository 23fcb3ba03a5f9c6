"""Mini README: Waypoint and mission parameter records.

Structure:
    * WaypointRole - ordinary waypoint, home anchor, or return-to-launch anchor.
    * Waypoint - immutable point the vehicle must visit.
    * MissionParameters - defaults and environment shared by a mission.
    * validate_coordinate - latitude/longitude range check.

Both records are frozen: the mission store swaps in edited copies with
``dataclasses.replace`` so that any sequence handed to the smoother,
optimiser or energy model is a read-only snapshot.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Dict

from ..errors import InvalidCoordinateError, MissionPlanningError
from .geometry import Coordinate


class WaypointRole(str, Enum):
    """Enumerate waypoint roles; values match the mission document ``type``."""

    WAYPOINT = "waypoint"
    HOME = "home"
    RTL = "rtl"

    @classmethod
    def from_str(cls, value: str) -> "WaypointRole":
        """Coerce arbitrary casing into a valid role."""

        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported waypoint type: {value}") from error

    @property
    def is_anchor(self) -> bool:
        return self is not WaypointRole.WAYPOINT


def validate_coordinate(latitude: float, longitude: float) -> Coordinate:
    """Return ``(latitude, longitude)`` as floats or raise ``InvalidCoordinateError``."""

    try:
        latitude = float(latitude)
        longitude = float(longitude)
    except (TypeError, ValueError) as error:
        raise InvalidCoordinateError(
            f"Coordinates must be numeric, got ({latitude!r}, {longitude!r})"
        ) from error
    if not math.isfinite(latitude) or not -90.0 <= latitude <= 90.0:
        raise InvalidCoordinateError(f"Latitude {latitude} is outside [-90, 90]")
    if not math.isfinite(longitude) or not -180.0 <= longitude <= 180.0:
        raise InvalidCoordinateError(f"Longitude {longitude} is outside [-180, 180]")
    return latitude, longitude


@dataclass(frozen=True, slots=True)
class Waypoint:
    """A point on the route, in visiting order within its mission."""

    id: str
    latitude: float
    longitude: float
    altitude: float
    speed: float
    hover_time: float = 0.0
    role: WaypointRole = WaypointRole.WAYPOINT

    @property
    def position(self) -> Coordinate:
        return (self.latitude, self.longitude)


@dataclass(frozen=True, slots=True)
class MissionParameters:
    """Mission-wide defaults. ``default_speed`` of 0 means "use cruise speed"."""

    default_altitude: float = 50.0
    default_speed: float = 0.0
    safety_reserve_percent: float = 20.0
    wind_speed: float = 0.0

    def updated(self, **values: float) -> "MissionParameters":
        """Return a copy with ``values`` applied after validation."""

        known = {field.name for field in fields(self)}
        coerced: Dict[str, float] = {}
        for name, value in values.items():
            if name not in known:
                raise ValueError(f"Unknown mission parameter '{name}'")
            number = float(value)
            if not math.isfinite(number) or number < 0:
                raise MissionPlanningError(f"Mission parameter '{name}' must be a non-negative number")
            coerced[name] = number
        return replace(self, **coerced)
