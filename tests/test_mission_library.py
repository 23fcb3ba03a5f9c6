"""Mini README: Tests covering the saved-mission library.

Structure:
    * test_save_and_load_restores_mission - snapshots reload into a fresh store.
    * test_library_persists_between_instances - records survive through storage.
    * test_empty_missions_and_unknown_ids - invalid requests raise clear errors.
"""

from __future__ import annotations

import pytest

from uavplanner.configuration import UavPlannerSettings
from uavplanner.drones import DroneProfileRegistry
from uavplanner.errors import MissionPlanningError
from uavplanner.missions import MISSIONS_STORAGE_KEY, MissionStore, SavedMissionLibrary
from uavplanner.route_planning import WaypointRole
from uavplanner.utils.storage import InMemoryKeyValueStore

SETTINGS = UavPlannerSettings(storage_backend="memory")


def _store_with_route(registry: DroneProfileRegistry) -> MissionStore:
    store = MissionStore(settings=SETTINGS)
    store.select_drone(registry.save({"name": "Scout", "cruiseSpeed": 12, "maxFlightTime": 20}))
    store.add_waypoint(45.0, 7.0, role=WaypointRole.HOME)
    store.add_waypoint(45.01, 7.0, hover_time=30.0)
    store.add_return_to_launch()
    return store


def test_save_and_load_restores_mission() -> None:
    """Loading a snapshot should rebuild waypoints, drone and verdict."""

    storage = InMemoryKeyValueStore()
    registry = DroneProfileRegistry(storage)
    library = SavedMissionLibrary(storage)
    original = _store_with_route(registry)

    saved = library.save(original, "  Ridge survey  ")
    assert saved.id == "mission_0001"
    assert saved.name == "Ridge survey"
    assert saved.summary is not None and saved.summary.waypoint_count == 3

    restored = MissionStore(settings=SETTINGS)
    result = library.load(saved.id, restored, registry=registry)

    assert [waypoint.role for waypoint in restored.waypoints] == [
        WaypointRole.HOME,
        WaypointRole.WAYPOINT,
        WaypointRole.RTL,
    ]
    assert restored.drone == original.drone
    assert result.status is original.feasibility().status
    assert result.total_distance_m == pytest.approx(original.feasibility().total_distance_m)


def test_library_persists_between_instances() -> None:
    """A new library over the same storage should see earlier saves, newest first."""

    storage = InMemoryKeyValueStore()
    registry = DroneProfileRegistry(storage)
    library = SavedMissionLibrary(storage)
    store = _store_with_route(registry)
    library.save(store, "First")
    unnamed = library.save(store)

    reopened = SavedMissionLibrary(storage)
    missions = reopened.list_missions()
    assert [mission.id for mission in missions] == ["mission_0002", "mission_0001"]
    assert unnamed.name.startswith("Mission ")
    assert reopened.save(store, "Third").id == "mission_0003"

    reopened.delete("mission_0001")
    assert [mission.id for mission in SavedMissionLibrary(storage).list_missions()] == [
        "mission_0003",
        "mission_0002",
    ]


def test_empty_missions_and_unknown_ids() -> None:
    """Saving nothing or referencing a missing mission should fail loudly."""

    library = SavedMissionLibrary(InMemoryKeyValueStore())

    with pytest.raises(MissionPlanningError):
        library.save(MissionStore(settings=SETTINGS), "Empty")
    with pytest.raises(KeyError):
        library.get("mission_0042")
    with pytest.raises(KeyError):
        library.load("mission_0042", MissionStore(settings=SETTINGS))
    with pytest.raises(KeyError):
        library.delete("mission_0042")


class _ReadOnlyStore(InMemoryKeyValueStore):
    def set(self, key: str, value: str) -> None:
        raise OSError("storage is read-only")


def test_failed_write_leaves_library_unchanged() -> None:
    """A storage error should not leave an unsaved mission behind in memory."""

    seeded = InMemoryKeyValueStore()
    store = _store_with_route(DroneProfileRegistry(seeded))
    SavedMissionLibrary(seeded).save(store, "Kept")
    library = SavedMissionLibrary(_ReadOnlyStore({MISSIONS_STORAGE_KEY: seeded.get(MISSIONS_STORAGE_KEY)}))

    with pytest.raises(OSError):
        library.save(store, "Lost")
    with pytest.raises(OSError):
        library.delete("mission_0001")

    assert [mission.name for mission in library.list_missions()] == ["Kept"]
