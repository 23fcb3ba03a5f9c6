"""Mini README: Mission export/import document.

Structure:
    * MissionDocument (and nested models) - pydantic schema of the JSON file.
    * export_mission - snapshot a ``MissionStore`` into a document.
    * parse_mission_document - validate JSON text or a mapping.
    * import_mission - load a document into a store atomically.

Field names follow the exchanged file format (camelCase). ``index`` is
informational only; array order is the flight order. The ``metadata`` and
``summary`` blocks are written on export and ignored on import.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from ..drones.profile import DroneProfile
from ..drones.registry import DroneProfileRegistry
from ..errors import ImportParseError, MissionPlanningError
from ..feasibility import FeasibilityResult
from ..logging_utils import get_logger
from ..route_planning import MissionParameters
from .store import MissionStore

LOGGER = get_logger(__name__)

DOCUMENT_VERSION = "1.0"
APPLICATION_NAME = "UAV Flight Planner"


class _CamelModel(BaseModel):
    class Config:
        populate_by_name = True


class DocumentMetadata(_CamelModel):
    export_date: str = Field(alias="exportDate")
    version: str = DOCUMENT_VERSION
    application: str = APPLICATION_NAME


class DocumentDrone(_CamelModel):
    id: str
    name: str = ""
    type: str = ""


class DocumentParameters(_CamelModel):
    default_altitude: float = Field(50.0, alias="defaultAltitude", ge=0)
    default_speed: float = Field(0.0, alias="defaultSpeed", ge=0)
    safety_reserve: float = Field(20.0, alias="safetyReserve", ge=0)
    wind_speed: float = Field(0.0, alias="windSpeed", ge=0)


class DocumentWaypoint(_CamelModel):
    index: Optional[int] = None
    latitude: float
    longitude: float
    altitude: Optional[float] = None
    speed: Optional[float] = None
    hover_time: float = Field(0.0, alias="hoverTime", ge=0)
    type: Literal["waypoint", "home", "rtl"] = "waypoint"


class DocumentSummary(_CamelModel):
    total_distance_km: float = Field(alias="totalDistanceKm")
    waypoint_count: int = Field(alias="waypointCount")
    estimated_flight_minutes: Optional[float] = Field(None, alias="estimatedFlightMinutes")
    battery_required_percent: Optional[float] = Field(None, alias="batteryRequiredPercent")
    status: str


class MissionDocument(_CamelModel):
    metadata: Optional[DocumentMetadata] = None
    drone: Optional[DocumentDrone] = None
    parameters: DocumentParameters = Field(default_factory=DocumentParameters)
    waypoints: List[DocumentWaypoint] = Field(default_factory=list)
    summary: Optional[DocumentSummary] = None

    def to_json(self) -> str:
        return json.dumps(self.model_dump(by_alias=True), indent=2)


def _summary(feasibility: FeasibilityResult, waypoint_count: int) -> DocumentSummary:
    return DocumentSummary(
        total_distance_km=round(feasibility.total_distance_m / 1000, 3),
        waypoint_count=waypoint_count,
        estimated_flight_minutes=feasibility.estimated_flight_minutes,
        battery_required_percent=feasibility.battery_required_percent,
        status=feasibility.status.value,
    )


def export_mission(store: MissionStore) -> MissionDocument:
    """Snapshot the store's drone, parameters and ordered waypoints."""

    drone = store.drone
    parameters = store.parameters
    waypoints = store.waypoints
    document = MissionDocument(
        metadata=DocumentMetadata(export_date=datetime.now(timezone.utc).isoformat()),
        drone=DocumentDrone(id=drone.id, name=drone.name, type=drone.type) if drone else None,
        parameters=DocumentParameters(
            default_altitude=parameters.default_altitude,
            default_speed=parameters.default_speed,
            safety_reserve=parameters.safety_reserve_percent,
            wind_speed=parameters.wind_speed,
        ),
        waypoints=[
            DocumentWaypoint(
                index=index,
                latitude=waypoint.latitude,
                longitude=waypoint.longitude,
                altitude=waypoint.altitude,
                speed=waypoint.speed,
                hover_time=waypoint.hover_time,
                type=waypoint.role.value,
            )
            for index, waypoint in enumerate(waypoints)
        ],
        summary=_summary(store.feasibility(), len(waypoints)),
    )
    LOGGER.info("Exported mission with %s waypoints", len(waypoints))
    return document


def parse_mission_document(payload: Union[str, bytes, Mapping[str, Any]]) -> MissionDocument:
    """Validate ``payload`` (JSON text or decoded mapping) as a mission document."""

    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as error:
            raise ImportParseError(f"Mission file is not valid JSON: {error}") from error
    if not isinstance(payload, Mapping):
        raise ImportParseError("Mission file must contain a JSON object")
    try:
        return MissionDocument.model_validate(dict(payload))
    except ValidationError as error:
        details = "; ".join(
            f"{'.'.join(str(part) for part in issue['loc'])}: {issue['msg']}"
            for issue in error.errors()
        )
        raise ImportParseError(f"Mission file is invalid: {details}") from error


def resolve_drone(
    document: MissionDocument, registry: Optional[DroneProfileRegistry]
) -> Optional[DroneProfile]:
    """Look up the document's drone in ``registry``; unknown drones resolve to ``None``."""

    if document.drone is None or registry is None:
        return None
    try:
        return registry.get(document.drone.id)
    except KeyError:
        LOGGER.warning(
            "Drone %s (%s) from mission file is not registered",
            document.drone.id,
            document.drone.name,
        )
        return None


def import_mission(
    store: MissionStore,
    payload: Union[str, bytes, Mapping[str, Any], MissionDocument],
    *,
    registry: Optional[DroneProfileRegistry] = None,
) -> FeasibilityResult:
    """Replace the store's contents with the document; the store is untouched on failure."""

    document = payload if isinstance(payload, MissionDocument) else parse_mission_document(payload)
    parameters = MissionParameters(
        default_altitude=document.parameters.default_altitude,
        default_speed=document.parameters.default_speed,
        safety_reserve_percent=document.parameters.safety_reserve,
        wind_speed=document.parameters.wind_speed,
    )
    entries = [
        {
            "latitude": waypoint.latitude,
            "longitude": waypoint.longitude,
            "altitude": waypoint.altitude,
            "speed": waypoint.speed,
            "hover_time": waypoint.hover_time,
            "role": waypoint.type,
        }
        for waypoint in document.waypoints
    ]
    try:
        result = store.replace_contents(
            entries, parameters=parameters, drone=resolve_drone(document, registry)
        )
    except MissionPlanningError as error:
        raise ImportParseError(f"Mission file is invalid: {error}") from error
    LOGGER.info("Imported mission with %s waypoints", len(entries))
    return result
