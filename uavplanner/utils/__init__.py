"""Mini README: Utility helpers for the flight planner.

Exports the key-value storage backends and the GeoJSON converters used by
the web control centre's map overlays.
"""

from .geojson import mission_feature_collection, path_feature
from .storage import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore, create_store

__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "create_store",
    "mission_feature_collection",
    "path_feature",
]
