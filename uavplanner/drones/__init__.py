"""Mini README: Drone profile subsystem.

``profile`` defines the read-only aircraft record the feasibility engine
consumes and ``registry`` persists those records through the key-value
store so missions can refer to drones by identifier.
"""

from .profile import DEFAULT_WIND_RESISTANCE, DroneProfile
from .registry import DRONES_STORAGE_KEY, DroneProfileRegistry

__all__ = [
    "DEFAULT_WIND_RESISTANCE",
    "DRONES_STORAGE_KEY",
    "DroneProfile",
    "DroneProfileRegistry",
]
