"""Mini README: Mission state, document exchange and saved missions.

``store`` holds the authoritative waypoint sequence and command layer,
``document`` converts that state to and from the JSON exchange format, and
``library`` keeps named snapshots in the key-value store.
"""

from .document import (
    MissionDocument,
    export_mission,
    import_mission,
    parse_mission_document,
)
from .library import MISSIONS_STORAGE_KEY, SavedMission, SavedMissionLibrary
from .store import MissionAnalysis, MissionStore

__all__ = [
    "MISSIONS_STORAGE_KEY",
    "MissionAnalysis",
    "MissionDocument",
    "MissionStore",
    "SavedMission",
    "SavedMissionLibrary",
    "export_mission",
    "import_mission",
    "parse_mission_document",
]
