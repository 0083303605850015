"""
Wear analytics and unit handling.

All calculations work in millimetres and kilometres; see units for
conversion of readings recorded otherwise.
"""

from tirelife.analytics.wear import (
    LEGAL_MIN_DEPTH_MM,
    CostPerTime,
    CpkFigures,
    ProjectionResult,
    build_inspection,
    compute_cost_per_time,
    compute_inspection_cpk,
    compute_wear_state,
    min_depth,
    project_remaining_distance,
    tire_cost_per_time,
    wear_percent,
    wear_state_or_none,
)
from tirelife.analytics.units import (
    DepthUnit,
    DistanceUnit,
    Preferences,
    depth_to_mm,
    distance_to_km,
    km_to,
    mm_to,
    normalize_tire,
)

__all__ = [
    "LEGAL_MIN_DEPTH_MM",
    "CostPerTime",
    "CpkFigures",
    "ProjectionResult",
    "build_inspection",
    "compute_cost_per_time",
    "compute_inspection_cpk",
    "compute_wear_state",
    "min_depth",
    "project_remaining_distance",
    "tire_cost_per_time",
    "wear_percent",
    "wear_state_or_none",
    "DepthUnit",
    "DistanceUnit",
    "Preferences",
    "depth_to_mm",
    "distance_to_km",
    "km_to",
    "mm_to",
    "normalize_tire",
]
