"""Mini README: Entry point CLI for the UAV flight planner.

This script exposes a Typer CLI that starts the FastAPI control centre and
evaluates mission files offline. Settings come from ``UAVPLANNER_``
environment variables (or ``.env``) when options are omitted.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import uvicorn

from uavplanner.configuration import get_settings
from uavplanner.drones import DroneProfileRegistry
from uavplanner.errors import MissionPlanningError
from uavplanner.logging_utils import configure_root_logger
from uavplanner.missions import MissionStore, import_mission, parse_mission_document
from uavplanner.utils.storage import create_store

cli = typer.Typer(help="Plan UAV missions and check their feasibility.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # 0.0.0.0 is a bind address, not something a browser can open.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        "Starting UAV Flight Planner on "
        f"{effective_host}:{effective_port}.\n"
        "Open your browser at "
        f"http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "uavplanner.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def evaluate(
    mission_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Mission JSON file."),
    drone_id: Optional[str] = typer.Option(
        None, help="Registered drone to use instead of the one named in the file."
    ),
) -> None:
    """Print distance, flight time, battery demand and warnings for a mission file."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    registry = DroneProfileRegistry(create_store(settings))
    store = MissionStore(settings=settings)
    try:
        document = parse_mission_document(mission_file.read_text(encoding="utf-8"))
        import_mission(store, document, registry=registry)
        if drone_id:
            store.select_drone(registry.get(drone_id))
    except KeyError as error:
        typer.echo(f"Unknown drone: {error.args[0]}", err=True)
        raise typer.Exit(code=1) from error
    except MissionPlanningError as error:
        typer.echo(str(error), err=True)
        raise typer.Exit(code=1) from error

    result = store.feasibility()

    def _format(value: Optional[float], suffix: str) -> str:
        return f"{value:.1f}{suffix}" if value is not None else "N/A"

    typer.echo(f"Drone: {store.drone.name if store.drone else 'none'}")
    typer.echo(f"Waypoints: {len(store.waypoints)}")
    typer.echo(f"Distance: {result.total_distance_m / 1000:.2f} km")
    typer.echo(f"Flight time: {_format(result.estimated_flight_minutes, ' min')}")
    typer.echo(f"Battery required: {_format(result.battery_required_percent, '%')}")
    typer.echo(
        f"Battery after reserve: {_format(result.battery_available_after_reserve_percent, '%')}"
    )
    typer.echo(f"Status: {result.status.value.replace('_', ' ').upper()}")
    for warning in result.warnings:
        typer.echo(f"[{warning.severity.value}] {warning.message}")


@cli.command()
def drones() -> None:
    """List registered drone profiles."""

    registry = DroneProfileRegistry(create_store(get_settings()))
    profiles = registry.list_profiles()
    if not profiles:
        typer.echo("No drone profiles registered.")
        return
    for profile in profiles:
        typer.echo(f"{profile.id}\t{profile.name} ({profile.type})\tcruise {profile.cruise_speed} m/s")


if __name__ == "__main__":
    cli()
