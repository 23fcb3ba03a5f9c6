"""Mini README: Tests for the Catmull-Rom display path.

Structure:
    * short routes pass through unchanged;
    * sample counts, end points and interpolated values for longer routes;
    * repeated calls return identical output.
"""

from __future__ import annotations

import pytest

from uavplanner.route_planning import catmull_rom, smooth_path


def test_short_routes_are_returned_unchanged() -> None:
    assert smooth_path([]) == []
    assert smooth_path([(1.0, 2.0)]) == [(1.0, 2.0)]
    assert smooth_path([(1.0, 2.0), (3.0, 4.0)]) == [(1.0, 2.0), (3.0, 4.0)]


def test_sample_count_and_endpoints() -> None:
    """Each segment yields 20 samples and the path ends on the last waypoint."""

    points = [(0.0, 0.0), (0.01, 0.02), (0.03, 0.01), (0.02, -0.01)]
    smoothed = smooth_path(points)

    assert len(smoothed) == 20 * (len(points) - 1) + 1
    assert smoothed[-1] == points[-1]
    assert smoothed[0] == pytest.approx(points[0])
    # Samples at t = 0 of each segment hit the waypoint the segment starts on.
    for index, point in enumerate(points[:-1]):
        assert smoothed[index * 20] == pytest.approx(point)


def test_samples_follow_catmull_rom_basis_with_clamped_ends() -> None:
    points = [(0.0, 0.0), (1.0, 2.0), (3.0, 1.0)]
    smoothed = smooth_path(points)

    t = 5 / 20
    expected_first_segment = (
        catmull_rom(0.0, 0.0, 1.0, 3.0, t),
        catmull_rom(0.0, 0.0, 2.0, 1.0, t),
    )
    assert smoothed[5] == pytest.approx(expected_first_segment)

    expected_last_segment = (
        catmull_rom(0.0, 1.0, 3.0, 3.0, t),
        catmull_rom(0.0, 2.0, 1.0, 1.0, t),
    )
    assert smoothed[25] == pytest.approx(expected_last_segment)


def test_collinear_points_stay_on_the_line() -> None:
    points = [(0.0, 0.0), (1.0, 1.0), (2.0, 2.0), (3.0, 3.0)]
    for latitude, longitude in smooth_path(points):
        assert latitude == pytest.approx(longitude)


def test_smoothing_is_repeatable() -> None:
    points = [(37.77, -122.41), (37.78, -122.43), (37.79, -122.40), (37.80, -122.42)]
    assert smooth_path(points) == smooth_path(points)


def test_custom_sample_count() -> None:
    points = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)]
    assert len(smooth_path(points, samples_per_segment=5)) == 11
    with pytest.raises(ValueError):
        smooth_path(points, samples_per_segment=0)
