"""Mini README: GeoJSON helpers for mission map overlays.

This module converts waypoints and interpolated paths into GeoJSON so the
browser map can draw them without knowing the planner's data model.
GeoJSON positions are ``[longitude, latitude]``, the reverse of the
planner's ``(latitude, longitude)`` tuples.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..route_planning.geometry import Coordinate
from ..route_planning.waypoints import Waypoint


def path_feature(points: Sequence[Coordinate], properties: Optional[Dict[str, Any]] = None) -> Dict:
    """Return a LineString Feature through ``points``."""

    return {
        "type": "Feature",
        "geometry": {
            "type": "LineString",
            "coordinates": [[longitude, latitude] for latitude, longitude in points],
        },
        "properties": dict(properties or {}),
    }


def mission_feature_collection(
    waypoints: Sequence[Waypoint], smoothed_path: Sequence[Coordinate]
) -> Dict:
    """Bundle waypoint markers, the straight route and the smoothed route."""

    features = [
        {
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [waypoint.longitude, waypoint.latitude]},
            "properties": {
                "id": waypoint.id,
                "index": index,
                "type": waypoint.role.value,
                "altitude": waypoint.altitude,
                "speed": waypoint.speed,
                "hoverTime": waypoint.hover_time,
            },
        }
        for index, waypoint in enumerate(waypoints)
    ]
    if len(waypoints) >= 2:
        features.append(
            path_feature([waypoint.position for waypoint in waypoints], {"style": "straight"})
        )
        features.append(path_feature(smoothed_path, {"style": "smooth"}))
    return {"type": "FeatureCollection", "features": features}
