"""
Wear analytics for a single tire.

Turns the last inspection of a tire into a WearState: minimum tread depth,
percentage of tread consumed and projected distance over the tread life.
Also provides the CPK computation done when an inspection is recorded and
the cost per day and month of service.
"""

import datetime
import logging
import math
from dataclasses import dataclass
from typing import Optional

from tirelife.errors import InvalidInitialDepth, NoInspectionData
from tirelife.models.inputs import Inspection, Tire
from tirelife.models.outputs import ProjectionTier, WearState

logger = logging.getLogger(__name__)

# Legal minimum tread depth (mm)
LEGAL_MIN_DEPTH_MM = 2.0

# Average month length used to turn days in service into months
DAYS_PER_MONTH = 30.44


@dataclass(frozen=True)
class ProjectionResult:
    """Projected distance and the rule that produced it."""
    distance: Optional[float]
    tier: ProjectionTier


@dataclass(frozen=True)
class CpkFigures:
    """CPK figures computed when an inspection is recorded."""
    cpk: Optional[float]
    cpk_projected: Optional[float]
    km_projected: Optional[float]


@dataclass(frozen=True)
class CostPerTime:
    """Cost of a tire spread over its time in service."""
    per_day: Optional[float]
    per_month: float
    days: int
    months: int


def min_depth(inspection: Inspection) -> float:
    """Shallowest of the three readings of an inspection."""
    return min(inspection.depth_inner, inspection.depth_center, inspection.depth_outer)


def wear_percent(initial_depth: float, current_min_depth: float) -> float:
    """
    Percentage of tread consumed, clamped to [0, 100].

    Args:
        initial_depth: Tread depth when new (mm)
        current_min_depth: Shallowest current reading (mm)

    Returns:
        Wear percentage
    """
    if initial_depth <= 0:
        raise InvalidInitialDepth(initial_depth)
    percent = (1 - current_min_depth / initial_depth) * 100
    return max(0.0, min(100.0, percent))


def project_remaining_distance(
    initial_depth: float,
    traveled_distance: float,
    total_cost: float,
    inspection: Inspection,
    legal_min_depth: float = LEGAL_MIN_DEPTH_MM,
) -> ProjectionResult:
    """
    Project the distance a tire will cover over its tread life.

    Rules are tried in order and the first one with its data present wins:

    1. Explicit projected CPK: total_cost / cpk_projected
    2. Explicit projected distance carried by the inspection
    3. Linear wear rate: traveled + km_per_mm * (min_depth - legal_min_depth)

    Args:
        initial_depth: Tread depth when new (mm)
        traveled_distance: Distance covered so far (km)
        total_cost: Sum of the tire's cost entries
        inspection: Last inspection of the tire
        legal_min_depth: Depth at which the tire must come off (mm)

    Returns:
        ProjectionResult; distance is None when no rule applies
    """
    cpk_projected = inspection.cpk_projected
    if cpk_projected is not None and cpk_projected > 0 and total_cost > 0:
        return ProjectionResult(total_cost / cpk_projected, ProjectionTier.EXPLICIT_CPK)

    km_projected = inspection.km_projected
    if km_projected is not None and km_projected > 0:
        return ProjectionResult(km_projected, ProjectionTier.EXPLICIT_DISTANCE)

    current_min = min_depth(inspection)
    mm_worn = initial_depth - current_min
    if initial_depth > 0 and current_min > 0 and traveled_distance > 0 and mm_worn > 0:
        km_per_mm = traveled_distance / mm_worn
        mm_remaining = max(current_min - legal_min_depth, 0.0)
        return ProjectionResult(
            traveled_distance + km_per_mm * mm_remaining,
            ProjectionTier.WEAR_RATE,
        )

    return ProjectionResult(None, ProjectionTier.UNKNOWN)


def compute_wear_state(tire: Tire, legal_min_depth: float = LEGAL_MIN_DEPTH_MM) -> WearState:
    """
    Compute the current wear state of a tire from its last inspection.

    Raises:
        NoInspectionData: The tire has never been inspected
        InvalidInitialDepth: The tire's initial depth is not positive
    """
    inspection = tire.last_inspection
    if inspection is None:
        raise NoInspectionData(tire.id)
    if tire.initial_depth <= 0:
        raise InvalidInitialDepth(tire.initial_depth)

    current_min = min_depth(inspection)
    projection = project_remaining_distance(
        tire.initial_depth,
        tire.traveled_distance,
        tire.total_cost,
        inspection,
        legal_min_depth=legal_min_depth,
    )
    logger.debug(
        "Tire %s: min depth %.2f mm, projection via %s",
        tire.id, current_min, projection.tier.value,
    )

    return WearState(
        min_depth=current_min,
        wear_percent=wear_percent(tire.initial_depth, current_min),
        projected_remaining_distance=projection.distance,
        projection_tier=projection.tier,
        cpk=inspection.cpk,
        cpk_projected=inspection.cpk_projected,
    )


def wear_state_or_none(
    tire: Tire,
    legal_min_depth: float = LEGAL_MIN_DEPTH_MM,
) -> Optional[WearState]:
    """Wear state of a tire, or None when it has no inspections."""
    try:
        return compute_wear_state(tire, legal_min_depth=legal_min_depth)
    except NoInspectionData:
        return None


def compute_inspection_cpk(
    initial_depth: float,
    traveled_distance: float,
    total_cost: float,
    current_min_depth: float,
    km_diff: float = 0.0,
    legal_min_depth: float = LEGAL_MIN_DEPTH_MM,
) -> CpkFigures:
    """
    CPK figures for an inspection about to be recorded.

    Args:
        initial_depth: Tread depth when new (mm)
        traveled_distance: Distance before this inspection (km)
        total_cost: Sum of the tire's cost entries
        current_min_depth: Shallowest reading of the new inspection (mm)
        km_diff: Distance covered since the previous inspection (km)
        legal_min_depth: Depth at which the tire must come off (mm)

    Returns:
        CpkFigures; a figure is None when its inputs leave it undefined
    """
    if initial_depth <= 0:
        raise InvalidInitialDepth(initial_depth)

    new_km = traveled_distance + km_diff
    mm_worn = initial_depth - current_min_depth

    cpk = total_cost / new_km if new_km > 0 else None

    cpk_projected = None
    km_projected = None
    if new_km > 0 and mm_worn > 0:
        # Distance the whole tread would last at the current wear rate
        full_life_km = (new_km / mm_worn) * initial_depth
        cpk_projected = total_cost / full_life_km
        if current_min_depth > legal_min_depth:
            wear_rate = mm_worn / new_km
            km_projected = float(round((current_min_depth - legal_min_depth) / wear_rate))

    return CpkFigures(cpk=cpk, cpk_projected=cpk_projected, km_projected=km_projected)


def build_inspection(
    tire: Tire,
    depth_inner: float,
    depth_center: float,
    depth_outer: float,
    date: datetime.date,
    km_diff: float = 0.0,
    legal_min_depth: float = LEGAL_MIN_DEPTH_MM,
) -> Inspection:
    """
    Build an inspection for a tire with its CPK figures filled in.

    The inspection is not appended; pass it to Tire.record_inspection
    together with the same km_diff.
    """
    figures = compute_inspection_cpk(
        tire.initial_depth,
        tire.traveled_distance,
        tire.total_cost,
        min(depth_inner, depth_center, depth_outer),
        km_diff=km_diff,
        legal_min_depth=legal_min_depth,
    )
    return Inspection(
        depth_inner=depth_inner,
        depth_center=depth_center,
        depth_outer=depth_outer,
        date=date,
        cpk=figures.cpk,
        cpk_projected=figures.cpk_projected,
        km_projected=figures.km_projected,
    )


def compute_cost_per_time(
    total_cost: float,
    start_date: datetime.date,
    reference_date: datetime.date,
) -> CostPerTime:
    """
    Cost per day and per month since a tire went into service.

    Months are days / DAYS_PER_MONTH rounded half up, and never fewer than
    one, so the monthly figure is always defined.

    Args:
        total_cost: Sum of the tire's cost entries
        start_date: Date the tire went into service
        reference_date: Date the figures are computed for

    Returns:
        CostPerTime; per_day is None when no full day has elapsed
    """
    days = (reference_date - start_date).days
    months = max(1, math.floor(days / DAYS_PER_MONTH + 0.5))
    per_day = total_cost / days if days > 0 else None
    return CostPerTime(per_day=per_day, per_month=total_cost / months, days=days, months=months)


def tire_cost_per_time(tire: Tire, reference_date: datetime.date) -> Optional[CostPerTime]:
    """
    Cost per time of a tire, from its first life entry (or first cost).

    Returns None when the tire has neither.
    """
    if tire.life_history:
        start = tire.life_history[0].date
    elif tire.cost_history:
        start = min(entry.date for entry in tire.cost_history)
    else:
        return None
    return compute_cost_per_time(tire.total_cost, start, reference_date)
