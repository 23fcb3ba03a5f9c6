"""Mini README: Catmull-Rom smoothing of the displayed flight path.

Structure:
    * CATMULL_ROM_BASIS - 4x4 basis matrix (already scaled by 0.5).
    * catmull_rom - scalar evaluation for one component at parameter ``t``.
    * smooth_path - dense polyline through every waypoint of a route.

The smoothed path is for map display only. Distance and energy figures are
always computed on the straight waypoint-to-waypoint route.
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from .geometry import Coordinate

DEFAULT_SAMPLES_PER_SEGMENT = 20

CATMULL_ROM_BASIS = 0.5 * np.array(
    [
        [0.0, 2.0, 0.0, 0.0],
        [-1.0, 0.0, 1.0, 0.0],
        [2.0, -5.0, 4.0, -1.0],
        [-1.0, 3.0, -3.0, 1.0],
    ]
)


def catmull_rom(p0: float, p1: float, p2: float, p3: float, t: float) -> float:
    """Evaluate the uniform Catmull-Rom cubic between ``p1`` and ``p2``."""

    t2 = t * t
    t3 = t2 * t
    return 0.5 * (
        (2 * p1)
        + (-p0 + p2) * t
        + (2 * p0 - 5 * p1 + 4 * p2 - p3) * t2
        + (-p0 + 3 * p1 - 3 * p2 + p3) * t3
    )


def smooth_path(
    points: Sequence[Coordinate],
    samples_per_segment: int = DEFAULT_SAMPLES_PER_SEGMENT,
) -> List[Coordinate]:
    """Interpolate ``points`` into a smooth polyline ending on the last point.

    Routes with fewer than three points are returned unchanged. Otherwise each
    segment contributes ``samples_per_segment`` samples at ``t = k / samples``
    with end control points clamped to the first/last waypoint, and the final
    waypoint is appended once, giving ``samples * (n - 1) + 1`` coordinates.
    """

    if samples_per_segment < 1:
        raise ValueError("samples_per_segment must be at least 1")
    if len(points) < 3:
        return [tuple(point) for point in points]

    controls = np.asarray(points, dtype=float)
    last_index = len(controls) - 1
    t = np.arange(samples_per_segment, dtype=float) / samples_per_segment
    powers = np.stack([np.ones_like(t), t, t * t, t * t * t], axis=1)
    weights = powers @ CATMULL_ROM_BASIS

    smoothed: List[Coordinate] = []
    for i in range(last_index):
        indices = [max(0, i - 1), i, i + 1, min(last_index, i + 2)]
        samples = weights @ controls[indices]
        smoothed.extend((float(lat), float(lon)) for lat, lon in samples)

    smoothed.append((float(controls[-1][0]), float(controls[-1][1])))
    return smoothed
