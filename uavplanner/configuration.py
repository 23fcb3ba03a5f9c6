"""Mini README: Centralised configuration models and helpers for the planner.

Structure:
    * UavPlannerSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read environment variables (prefixed with
    ``UAVPLANNER_``), choose the persistence backend, and tune mission
    defaults such as the initial altitude or the safety reserve. The
    configuration is cached so validation happens once per process.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class UavPlannerSettings(BaseSettings):
    """Runtime configuration for the flight planner."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level name applied by the CLI entry points.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding saved missions and drone profiles.",
    )
    storage_backend: Literal["file", "memory"] = Field(
        "file",
        description="Persist drones and missions as JSON files or keep them in memory.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the control centre to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the control centre exposes.",
        ge=1,
        le=65535,
    )
    default_altitude: float = Field(
        50.0,
        description="Altitude in metres given to new waypoints when none is supplied.",
        gt=0,
    )
    default_safety_reserve: float = Field(
        20.0,
        description="Battery safety reserve percentage applied to new missions.",
        ge=0,
    )
    fallback_waypoint_speed: float = Field(
        15.0,
        description="Waypoint speed (m/s) used when neither mission nor drone define one.",
        gt=0,
    )
    smoothing_samples: int = Field(
        20,
        description="Interpolated samples emitted per segment of the display path.",
        ge=1,
    )

    class Config:
        env_prefix = "UAVPLANNER_"
        env_file = ".env"
        case_sensitive = False

    @validator("data_directory", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Expand user directories; creation is left to the file store."""

        return Path(value).expanduser().resolve()


@lru_cache()
def get_settings() -> UavPlannerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return UavPlannerSettings()
