"""Mini README: Great-circle helpers used by every route calculation.

Structure:
    * Coordinate - ``(latitude, longitude)`` tuple in degrees.
    * haversine_distance - distance in metres between two coordinates.
    * total_path_length - length of the straight waypoint-to-waypoint route.
    * max_distance_from - furthest excursion from an origin (e.g. home).

Distances assume a spherical Earth with the mean radius below, which is
accurate to well under one percent for the few-kilometre legs a mission
consists of.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence, Tuple

Coordinate = Tuple[float, float]

EARTH_RADIUS_M = 6_371_000.0


def haversine_distance(a: Coordinate, b: Coordinate) -> float:
    """Return the great-circle distance between ``a`` and ``b`` in metres."""

    lat1, lon1 = a
    lat2, lon2 = b
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    h = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def total_path_length(points: Sequence[Coordinate]) -> float:
    """Sum the leg distances of an ordered route; 0 for fewer than two points."""

    if len(points) < 2:
        return 0.0
    return sum(haversine_distance(points[i], points[i + 1]) for i in range(len(points) - 1))


def max_distance_from(origin: Coordinate, points: Iterable[Coordinate]) -> float:
    """Return the largest distance between ``origin`` and any of ``points``."""

    return max((haversine_distance(origin, point) for point in points), default=0.0)
