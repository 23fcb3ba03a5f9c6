"""Mini README: Saved-mission library persisted in the key-value store.

Structure:
    * SavedMission - mission document plus identifier, name and timestamp.
    * SavedMissionLibrary - save, list, load and delete named missions.
    * MISSIONS_STORAGE_KEY - storage key holding the JSON list of missions.

Saved missions reuse the export document format so a mission saved here
can also be downloaded and re-imported elsewhere. Identifiers are
generated sequentially (``mission_0001``).
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import Field, ValidationError

from ..drones.registry import DroneProfileRegistry
from ..errors import MissionPlanningError
from ..feasibility import FeasibilityResult
from ..logging_utils import get_logger
from ..utils.storage import KeyValueStore
from .document import MissionDocument, export_mission, import_mission
from .store import MissionStore

LOGGER = get_logger(__name__)

MISSIONS_STORAGE_KEY = "uav_missions"


class SavedMission(MissionDocument):
    id: str
    name: str
    created_at: str = Field(alias="createdAt")


class SavedMissionLibrary:
    """Manage named mission snapshots."""

    def __init__(self, storage: KeyValueStore) -> None:
        self._storage = storage
        self._missions: Dict[str, SavedMission] = {}
        self._sequence = 0
        raw = storage.get(MISSIONS_STORAGE_KEY)
        if raw:
            try:
                records = json.loads(raw)
                for record in records:
                    self._remember(SavedMission.model_validate(record))
            except (json.JSONDecodeError, ValidationError) as error:
                raise ValueError(f"Stored missions could not be read: {error}") from error
        LOGGER.debug("Mission library initialised with %s missions", len(self._missions))

    def _remember(self, mission: SavedMission) -> None:
        self._missions[mission.id] = mission
        suffix = mission.id.rsplit("_", 1)[-1]
        if suffix.isdigit():
            self._sequence = max(self._sequence, int(suffix))

    def _next_id(self) -> str:
        self._sequence += 1
        return f"mission_{self._sequence:04d}"

    def _persist(self, records: Dict[str, SavedMission]) -> None:
        """Write ``records`` to storage; callers adopt them only after this succeeds."""

        payload = [mission.model_dump(by_alias=True) for mission in records.values()]
        self._storage.set(MISSIONS_STORAGE_KEY, json.dumps(payload))

    def list_missions(self) -> List[SavedMission]:
        """Return saved missions, newest first."""

        return sorted(
            self._missions.values(),
            key=lambda mission: (mission.created_at, mission.id),
            reverse=True,
        )

    def get(self, mission_id: str) -> SavedMission:
        """Retrieve a saved mission, raising ``KeyError`` when unknown."""

        if mission_id not in self._missions:
            raise KeyError(f"Saved mission {mission_id} not found")
        return self._missions[mission_id]

    def save(self, store: MissionStore, name: Optional[str] = None) -> SavedMission:
        """Snapshot ``store`` under ``name``; empty missions are rejected."""

        if not store.waypoints:
            raise MissionPlanningError("Add waypoints before saving a mission")
        created_at = datetime.now(timezone.utc)
        name = (name or "").strip() or f"Mission {created_at.date().isoformat()}"
        document = export_mission(store)
        mission = SavedMission(
            id=self._next_id(),
            name=name,
            created_at=created_at.isoformat(),
            **document.model_dump(),
        )
        self._persist({**self._missions, mission.id: mission})
        self._remember(mission)
        LOGGER.info("Saved mission '%s' as %s", name, mission.id)
        return mission

    def load(
        self,
        mission_id: str,
        store: MissionStore,
        *,
        registry: Optional[DroneProfileRegistry] = None,
    ) -> FeasibilityResult:
        """Replace the contents of ``store`` with a saved mission."""

        mission = self.get(mission_id)
        result = import_mission(store, mission, registry=registry)
        LOGGER.info("Loaded saved mission %s ('%s')", mission_id, mission.name)
        return result

    def delete(self, mission_id: str) -> None:
        """Remove a saved mission."""

        self.get(mission_id)
        remaining = {key: value for key, value in self._missions.items() if key != mission_id}
        self._persist(remaining)
        self._missions = remaining
        LOGGER.info("Deleted saved mission %s", mission_id)
