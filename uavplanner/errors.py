"""Mini README: Exception hierarchy for mission planning failures.

All errors derive from ``MissionPlanningError`` which itself subclasses
``ValueError`` so callers that only care about "bad input" can keep catching
``ValueError``. Unknown identifiers are reported with ``KeyError`` instead,
matching the registries and the mission store.
"""

from __future__ import annotations


class MissionPlanningError(ValueError):
    """Base exception for recoverable mission planning errors."""


class InvalidCoordinateError(MissionPlanningError):
    """Raised when a latitude or longitude falls outside its valid range."""


class InvalidWaypointError(MissionPlanningError):
    """Raised when a waypoint would break the mission's anchor or value rules."""


class ImportParseError(MissionPlanningError):
    """Raised when a mission document cannot be parsed or validated."""
