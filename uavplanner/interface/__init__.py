"""Mini README: Interactive interfaces for the flight planner.

Exports the FastAPI application factory that powers the browser-based
mission control centre. The CLI lives in ``main_flight_planner.py`` at the
repository root.
"""

from .web_app import create_application

__all__ = ["create_application"]
