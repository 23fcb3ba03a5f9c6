"""Mini README: Drone profile registry backed by the key-value store.

Structure:
    * DroneProfileRegistry - create, update, look up and delete profiles.
    * DRONES_STORAGE_KEY - storage key holding the JSON list of profiles.

Profiles are loaded once from storage and written back after every change
so the store always mirrors the registry. Identifiers are generated
sequentially (``drone_0001``) unless the caller supplies one.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping

from ..logging_utils import get_logger
from ..utils.storage import KeyValueStore
from .profile import DroneProfile

LOGGER = get_logger(__name__)

DRONES_STORAGE_KEY = "uav_drones"


class DroneProfileRegistry:
    """Map drone identifiers to profiles persisted in a key-value store."""

    def __init__(self, storage: KeyValueStore) -> None:
        self._storage = storage
        self._profiles: Dict[str, DroneProfile] = {}
        self._sequence = 0
        raw = storage.get(DRONES_STORAGE_KEY)
        if raw:
            try:
                records = json.loads(raw)
            except json.JSONDecodeError as error:
                raise ValueError(f"Stored drone profiles are not valid JSON: {error}") from error
            for record in records:
                self._remember(DroneProfile.from_dict(record))
        LOGGER.debug("Drone registry initialised with %s profiles", len(self._profiles))

    def _remember(self, profile: DroneProfile) -> None:
        self._profiles[profile.id] = profile
        suffix = profile.id.rsplit("_", 1)[-1]
        if suffix.isdigit():
            self._sequence = max(self._sequence, int(suffix))

    def _next_id(self) -> str:
        self._sequence += 1
        return f"drone_{self._sequence:04d}"

    def _persist(self, records: Dict[str, DroneProfile]) -> None:
        """Write ``records`` to storage; callers adopt them only after this succeeds."""

        payload = [profile.as_dict() for profile in records.values()]
        self._storage.set(DRONES_STORAGE_KEY, json.dumps(payload))

    def list_profiles(self) -> List[DroneProfile]:
        """Return profiles ordered by name for selection lists."""

        return sorted(self._profiles.values(), key=lambda profile: (profile.name.lower(), profile.id))

    def get(self, drone_id: str) -> DroneProfile:
        """Retrieve a profile, raising ``KeyError`` for unknown identifiers."""

        if drone_id not in self._profiles:
            raise KeyError(f"Unknown drone profile '{drone_id}'")
        return self._profiles[drone_id]

    def save(self, payload: Mapping[str, Any]) -> DroneProfile:
        """Create or update a profile from a camelCase or snake_case mapping."""

        values = dict(payload)
        if not values.get("id"):
            values["id"] = self._next_id()
        profile = DroneProfile.from_dict(values)
        action = "Updated" if profile.id in self._profiles else "Registered"
        self._persist({**self._profiles, profile.id: profile})
        self._remember(profile)
        LOGGER.info("%s drone profile '%s' (%s)", action, profile.name, profile.id)
        return profile

    def delete(self, drone_id: str) -> None:
        """Remove a profile from the registry and storage."""

        self.get(drone_id)
        remaining = {key: value for key, value in self._profiles.items() if key != drone_id}
        self._persist(remaining)
        self._profiles = remaining
        LOGGER.info("Deleted drone profile %s", drone_id)
