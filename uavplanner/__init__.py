"""Mini README: Core package initializer for the UAV flight planner.

The package is organised leaves-first: ``route_planning`` holds the pure
geometry (distance, smoothing, optimisation), ``feasibility`` turns a route
into energy figures and a verdict, ``drones`` stores aircraft profiles and
``missions`` owns the editable mission state together with its JSON
document and saved-mission library. Only the logger factory is re-exported
here so importing the package stays cheap.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
