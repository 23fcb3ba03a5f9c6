"""Mini README: Tests for the great-circle helpers.

Pins the haversine constant with a known one-degree distance and checks
the symmetry, identity and path-length rules the rest of the planner
relies on.
"""

from __future__ import annotations

import pytest

from uavplanner.route_planning import haversine_distance, max_distance_from, total_path_length


def test_one_degree_of_longitude_on_equator() -> None:
    """One degree along the equator is about 111.195 km with R = 6371 km."""

    assert haversine_distance((0.0, 0.0), (0.0, 1.0)) == pytest.approx(111_195.0, abs=50.0)


def test_distance_is_symmetric() -> None:
    pairs = [
        ((37.7749, -122.4194), (37.7849, -122.4294)),
        ((-33.8688, 151.2093), (51.5074, -0.1278)),
        ((89.9, 10.0), (-89.9, -170.0)),
    ]
    for a, b in pairs:
        assert haversine_distance(a, b) == pytest.approx(haversine_distance(b, a))


def test_distance_to_self_is_zero() -> None:
    assert haversine_distance((51.5, -0.12), (51.5, -0.12)) == pytest.approx(0.0, abs=1e-9)


def test_total_path_length_sums_legs() -> None:
    """Short routes have no length; longer ones add up each leg."""

    assert total_path_length([]) == 0.0
    assert total_path_length([(10.0, 10.0)]) == 0.0

    points = [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0)]
    expected = haversine_distance(points[0], points[1]) + haversine_distance(points[1], points[2])
    assert total_path_length(points) == pytest.approx(expected)


def test_max_distance_from_origin() -> None:
    origin = (0.0, 0.0)
    points = [(0.0, 0.01), (0.0, 0.05), (0.0, 0.02)]
    assert max_distance_from(origin, points) == pytest.approx(haversine_distance(origin, (0.0, 0.05)))
    assert max_distance_from(origin, []) == 0.0
