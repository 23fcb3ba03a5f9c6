"""Mini README: FastAPI-powered control centre for the flight planner.

Structure:
    * create_application - application factory wiring routes and templates.
    * _mission_payload - JSON view of the mission store for the browser.

Every mission command maps onto one endpoint and answers with the fresh
mission state, so the map and summary panels re-render from data instead
of mutating the engine themselves. Each application instance owns one
``MissionStore``; drones and saved missions live in the configured
key-value storage.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from ..configuration import UavPlannerSettings, get_settings
from ..drones import DroneProfileRegistry
from ..errors import MissionPlanningError
from ..feasibility import summarise_drone_performance
from ..logging_utils import get_logger
from ..missions import (
    MissionStore,
    SavedMissionLibrary,
    export_mission,
    import_mission,
)
from ..utils.geojson import mission_feature_collection
from ..utils.storage import KeyValueStore, create_store

LOGGER = get_logger(__name__)


def _mission_payload(store: MissionStore) -> Dict[str, Any]:
    """Serialise the store's state, verdict and analysis."""

    parameters = store.parameters
    drone = store.drone
    return {
        "drone": drone.as_dict() if drone else None,
        "parameters": {
            "defaultAltitude": parameters.default_altitude,
            "defaultSpeed": parameters.default_speed,
            "safetyReserve": parameters.safety_reserve_percent,
            "windSpeed": parameters.wind_speed,
        },
        "waypoints": [
            {
                "id": waypoint.id,
                "index": index,
                "latitude": waypoint.latitude,
                "longitude": waypoint.longitude,
                "altitude": waypoint.altitude,
                "speed": waypoint.speed,
                "hoverTime": waypoint.hover_time,
                "type": waypoint.role.value,
            }
            for index, waypoint in enumerate(store.waypoints)
        ],
        "feasibility": store.feasibility().as_dict(),
        "analysis": store.analysis().as_dict(),
    }


def _not_found(error: KeyError) -> HTTPException:
    return HTTPException(status_code=404, detail=str(error.args[0]) if error.args else "Not found")


def create_application(
    settings: Optional[UavPlannerSettings] = None,
    storage: Optional[KeyValueStore] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    storage = storage or create_store(settings)
    app = FastAPI(title="UAV Flight Planner", version="1.0.0")
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

    registry = DroneProfileRegistry(storage)
    library = SavedMissionLibrary(storage)
    store = MissionStore(settings=settings)
    app.state.mission_store = store
    app.state.drone_registry = registry
    app.state.mission_library = library

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(request: Request) -> HTMLResponse:
        """Render the mission summary, warnings and drone selection."""

        feasibility = store.feasibility()
        LOGGER.debug(
            "Rendering dashboard: %s waypoints status=%s",
            len(store.waypoints),
            feasibility.status.value,
        )
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "request": request,
                "drones": registry.list_profiles(),
                "selected_drone": store.drone,
                "waypoints": store.waypoints,
                "parameters": store.parameters,
                "feasibility": feasibility,
                "analysis": store.analysis(),
                "saved_missions": library.list_missions(),
            },
        )

    # ------------------------------------------------------------------ drones
    @app.get("/api/drones")
    async def list_drones() -> JSONResponse:
        return JSONResponse({"drones": [profile.as_dict() for profile in registry.list_profiles()]})

    @app.post("/api/drones")
    async def save_drone(payload: Dict[str, Any] = Body(...)) -> JSONResponse:
        """Create or update a drone profile."""

        try:
            profile = registry.save(payload)
        except (TypeError, ValueError) as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse({"drone": profile.as_dict()}, status_code=201)

    @app.get("/api/drones/{drone_id}/metrics")
    async def drone_metrics(drone_id: str) -> JSONResponse:
        try:
            profile = registry.get(drone_id)
        except KeyError as error:
            raise _not_found(error) from error
        return JSONResponse({"id": drone_id, "metrics": summarise_drone_performance(profile).as_dict()})

    @app.delete("/api/drones/{drone_id}")
    async def delete_drone(drone_id: str) -> JSONResponse:
        try:
            registry.delete(drone_id)
        except KeyError as error:
            raise _not_found(error) from error
        if store.drone is not None and store.drone.id == drone_id:
            store.select_drone(None)
        return JSONResponse({"deleted": drone_id})

    # ----------------------------------------------------------------- mission
    @app.get("/api/mission")
    async def mission_state() -> JSONResponse:
        return JSONResponse(_mission_payload(store))

    @app.post("/api/mission/drone")
    async def select_drone(drone_id: Optional[str] = Form(None)) -> JSONResponse:
        """Select a registered drone; an empty identifier clears the selection."""

        try:
            profile = registry.get(drone_id) if drone_id else None
        except KeyError as error:
            raise _not_found(error) from error
        store.select_drone(profile)
        return JSONResponse(_mission_payload(store))

    @app.post("/api/mission/waypoints")
    async def add_waypoint(
        latitude: float = Form(...),
        longitude: float = Form(...),
        altitude: Optional[float] = Form(None),
        speed: Optional[float] = Form(None),
        hover_time: float = Form(0.0),
        role: str = Form("waypoint"),
    ) -> JSONResponse:
        try:
            store.add_waypoint(
                latitude,
                longitude,
                altitude=altitude,
                speed=speed,
                hover_time=hover_time,
                role=role,
            )
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(_mission_payload(store), status_code=201)

    @app.patch("/api/mission/waypoints/{waypoint_id}")
    async def edit_waypoint(
        waypoint_id: str,
        latitude: Optional[float] = Form(None),
        longitude: Optional[float] = Form(None),
        altitude: Optional[float] = Form(None),
        speed: Optional[float] = Form(None),
        hover_time: Optional[float] = Form(None),
    ) -> JSONResponse:
        """Move a waypoint and/or edit its altitude, speed or hover time."""

        try:
            store.update_waypoint(
                waypoint_id,
                latitude=latitude,
                longitude=longitude,
                altitude=altitude,
                speed=speed,
                hover_time=hover_time,
            )
        except KeyError as error:
            raise _not_found(error) from error
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(_mission_payload(store))

    @app.delete("/api/mission/waypoints/{waypoint_id}")
    async def remove_waypoint(waypoint_id: str) -> JSONResponse:
        try:
            store.remove_waypoint(waypoint_id)
        except KeyError as error:
            raise _not_found(error) from error
        return JSONResponse(_mission_payload(store))

    @app.post("/api/mission/parameters")
    async def set_parameters(
        default_altitude: Optional[float] = Form(None),
        default_speed: Optional[float] = Form(None),
        safety_reserve: Optional[float] = Form(None),
        wind_speed: Optional[float] = Form(None),
    ) -> JSONResponse:
        values = {
            "default_altitude": default_altitude,
            "default_speed": default_speed,
            "safety_reserve_percent": safety_reserve,
            "wind_speed": wind_speed,
        }
        try:
            store.set_parameters(**{name: value for name, value in values.items() if value is not None})
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(_mission_payload(store))

    @app.post("/api/mission/home")
    async def set_home() -> JSONResponse:
        try:
            store.set_home_point()
        except MissionPlanningError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(_mission_payload(store))

    @app.post("/api/mission/return-to-launch")
    async def return_to_launch() -> JSONResponse:
        try:
            store.add_return_to_launch()
        except MissionPlanningError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(_mission_payload(store))

    @app.post("/api/mission/optimize")
    async def optimize() -> JSONResponse:
        """Reorder waypoints; the outcome tells the UI when there was nothing to do."""

        result = store.optimize()
        payload = _mission_payload(store)
        payload["optimization"] = {
            "outcome": result.outcome.value,
            "distanceBeforeMeters": result.distance_before_m,
            "distanceAfterMeters": result.distance_after_m,
        }
        return JSONResponse(payload)

    @app.post("/api/mission/clear")
    async def clear() -> JSONResponse:
        store.clear()
        return JSONResponse(_mission_payload(store))

    @app.get("/api/mission/path")
    async def mission_path() -> JSONResponse:
        """Return waypoints plus straight and smoothed paths as GeoJSON."""

        return JSONResponse(mission_feature_collection(store.waypoints, store.smoothed_path()))

    @app.get("/api/mission/export")
    async def export() -> JSONResponse:
        document = export_mission(store)
        drone_label = (store.drone.name if store.drone else "mission").replace(" ", "_")
        return JSONResponse(
            document.model_dump(by_alias=True),
            headers={"Content-Disposition": f'attachment; filename="mission_{drone_label}.json"'},
        )

    @app.post("/api/mission/import")
    async def import_file(mission_file: UploadFile = File(...)) -> JSONResponse:
        data = await mission_file.read()
        LOGGER.info("Received mission upload %s (%s bytes)", mission_file.filename, len(data))
        try:
            import_mission(store, data, registry=registry)
        except MissionPlanningError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(_mission_payload(store))

    # ---------------------------------------------------------- saved missions
    @app.get("/api/missions/saved")
    async def saved_missions() -> JSONResponse:
        return JSONResponse(
            {
                "missions": [
                    {
                        "id": mission.id,
                        "name": mission.name,
                        "createdAt": mission.created_at,
                        "drone": mission.drone.name if mission.drone else None,
                        "waypointCount": len(mission.waypoints),
                        "totalDistanceKm": mission.summary.total_distance_km if mission.summary else None,
                    }
                    for mission in library.list_missions()
                ]
            }
        )

    @app.post("/api/missions/saved")
    async def save_mission(name: Optional[str] = Form(None)) -> JSONResponse:
        try:
            mission = library.save(store, name)
        except MissionPlanningError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse({"id": mission.id, "name": mission.name}, status_code=201)

    @app.post("/api/missions/saved/{mission_id}/load")
    async def load_mission(mission_id: str) -> JSONResponse:
        try:
            library.load(mission_id, store, registry=registry)
        except KeyError as error:
            raise _not_found(error) from error
        except MissionPlanningError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(_mission_payload(store))

    @app.delete("/api/missions/saved/{mission_id}")
    async def delete_mission(mission_id: str) -> JSONResponse:
        try:
            library.delete(mission_id)
        except KeyError as error:
            raise _not_found(error) from error
        return JSONResponse({"deleted": mission_id})

    return app
