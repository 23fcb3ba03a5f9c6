"""Mini README: Feasibility subsystem turning routes into verdicts.

``energy`` converts distance, speed, wind and hover time into flight time
and battery demand (plus profile-level metrics such as range), and
``evaluator`` classifies that demand and produces the ordered warning list.
"""

from .energy import (
    DroneMetrics,
    EnergyEstimate,
    derived_max_flight_minutes,
    estimate_energy,
    estimate_range_km,
    max_flight_minutes,
    summarise_drone_performance,
)
from .evaluator import (
    FeasibilityResult,
    FeasibilityStatus,
    MissionWarning,
    WarningSeverity,
    classify_status,
    evaluate_feasibility,
)

__all__ = [
    "DroneMetrics",
    "EnergyEstimate",
    "FeasibilityResult",
    "FeasibilityStatus",
    "MissionWarning",
    "WarningSeverity",
    "classify_status",
    "derived_max_flight_minutes",
    "estimate_energy",
    "estimate_range_km",
    "evaluate_feasibility",
    "max_flight_minutes",
    "summarise_drone_performance",
]
