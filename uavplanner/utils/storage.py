"""Mini README: String-keyed persistence used for drones and saved missions.

Structure:
    * KeyValueStore - protocol with ``get``/``set``/``delete`` of JSON text.
    * InMemoryKeyValueStore - dict-backed store for tests and demos.
    * JsonFileKeyValueStore - one ``<key>.json`` file per key on disk.
    * create_store - build the backend selected in the settings.

The planner treats persistence as an opaque key to blob mapping; there is
no querying. Callers serialise their own payloads.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Optional, Protocol

from ..configuration import UavPlannerSettings, get_settings
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(Protocol):
    """Minimal persistence interface shared by registries and libraries."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class InMemoryKeyValueStore:
    """Keep values in a dictionary for the lifetime of the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class JsonFileKeyValueStore:
    """Persist each key as a JSON text file inside ``directory``."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        LOGGER.debug("Key-value storage directory set to %s", self.directory)

    def _path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key '{key}'")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        temporary = path.with_suffix(".json.tmp")
        temporary.write_text(value, encoding="utf-8")
        temporary.replace(path)
        LOGGER.debug("Stored %s bytes under key '%s'", len(value), key)

    def delete(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)


def create_store(settings: Optional[UavPlannerSettings] = None) -> KeyValueStore:
    """Instantiate the storage backend configured for this process."""

    settings = settings or get_settings()
    if settings.storage_backend == "memory":
        LOGGER.info("Using in-memory storage; data is lost on exit")
        return InMemoryKeyValueStore()
    LOGGER.info("Using JSON file storage in %s", settings.data_directory)
    return JsonFileKeyValueStore(settings.data_directory)
