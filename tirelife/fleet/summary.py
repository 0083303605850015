"""
Fleet-level aggregation of tire analytics.

Computes the figures behind the fleet dashboards: condition counts, spend,
average CPK, tread remaining, per-axle depth and the list of tires that
need immediate replacement. The reference date is always passed in.
"""

import datetime
from collections import Counter, defaultdict
from typing import Iterable, Optional

from tirelife.analytics.wear import wear_percent, wear_state_or_none
from tirelife.classify.classifier import ConditionClassifier
from tirelife.models.inputs import Tire
from tirelife.models.outputs import (
    CostTotals,
    CpkAverages,
    CriticalTire,
    FleetSummary,
    RiskLevel,
    Status,
    TireReport,
)

# Any single reading at or below this depth flags a tire as critical (mm)
CRITICAL_DEPTH_MM = 2.0

# Average depth at or below which a critical tire is still only a warning (mm)
WARNING_AVERAGE_DEPTH_MM = 4.0

UNKNOWN_LABEL = "unknown"


def active_tires(tires: Iterable[Tire]) -> list[Tire]:
    """Tires that are not retired."""
    return [tire for tire in tires if not tire.is_retired]


def tire_report(tire: Tire, classifier: Optional[ConditionClassifier] = None) -> TireReport:
    """Wear state and condition of one tire."""
    classifier = classifier or ConditionClassifier()
    wear_state = wear_state_or_none(tire, classifier.legal_min_depth)
    return TireReport(
        tire_id=tire.id,
        brand=tire.brand,
        position=tire.position,
        current_stage=tire.current_stage,
        retired=tire.is_retired,
        wear_state=wear_state,
        status=classifier.classify(wear_state),
    )


def analyze_tires(
    tires: Iterable[Tire],
    classifier: Optional[ConditionClassifier] = None,
) -> list[TireReport]:
    """Reports for every tire, in input order."""
    classifier = classifier or ConditionClassifier()
    return [tire_report(tire, classifier) for tire in tires]


def condition_counts(
    tires: Iterable[Tire],
    classifier: Optional[ConditionClassifier] = None,
) -> dict[Status, int]:
    """Number of tires in each condition bucket, every bucket present."""
    classifier = classifier or ConditionClassifier()
    counts = {status: 0 for status in Status}
    for tire in tires:
        counts[classifier.classify_tire(tire)] += 1
    return counts


def cpk_averages(tires: Iterable[Tire]) -> CpkAverages:
    """
    Average realized and projected CPK from each tire's last inspection.

    Only tires whose last inspection reports a positive realized CPK are
    counted, and both averages share that denominator.
    """
    total_cpk = 0.0
    total_projected = 0.0
    count = 0
    for tire in tires:
        inspection = tire.last_inspection
        if inspection is None or not inspection.cpk:
            continue
        total_cpk += inspection.cpk
        total_projected += inspection.cpk_projected or 0.0
        count += 1

    if count == 0:
        return CpkAverages()
    return CpkAverages(
        average_cpk=total_cpk / count,
        average_cpk_projected=total_projected / count,
        sample_size=count,
    )


def cost_totals(tires: Iterable[Tire], reference_date: datetime.date) -> CostTotals:
    """Total spend and spend within the month of reference_date."""
    total = 0.0
    current_month = 0.0
    for tire in tires:
        for entry in tire.cost_history:
            total += entry.amount
            if entry.date.year == reference_date.year and entry.date.month == reference_date.month:
                current_month += entry.amount
    return CostTotals(total=total, current_month=current_month)


def average_min_depth_by_axle(tires: Iterable[Tire]) -> dict[str, float]:
    """Mean minimum depth of inspected tires, grouped by axle label."""
    groups: dict[str, list[float]] = defaultdict(list)
    for tire in tires:
        inspection = tire.last_inspection
        if inspection is None:
            continue
        groups[tire.axle or UNKNOWN_LABEL].append(inspection.min_depth)
    return {axle: sum(depths) / len(depths) for axle, depths in sorted(groups.items())}


def count_by_life_stage(tires: Iterable[Tire]) -> dict[str, int]:
    """Tires per current life stage; tires without life entries are skipped."""
    counts = Counter(tire.current_stage.value for tire in tires if tire.current_stage is not None)
    return dict(sorted(counts.items()))


def count_by_brand(tires: Iterable[Tire]) -> dict[str, int]:
    counts = Counter(tire.brand or UNKNOWN_LABEL for tire in tires)
    return dict(sorted(counts.items()))


def remaining_tread_percent(tires: Iterable[Tire]) -> Optional[float]:
    """
    Mean tread remaining over inspected tires, in percent.

    Returns None when no tire has been inspected.
    """
    remaining = [
        100.0 - wear_percent(tire.initial_depth, tire.last_inspection.min_depth)
        for tire in tires
        if tire.last_inspection is not None
    ]
    if not remaining:
        return None
    return sum(remaining) / len(remaining)


def risk_level(average_depth: float) -> RiskLevel:
    """Risk level from the average of the three readings."""
    if average_depth <= CRITICAL_DEPTH_MM:
        return RiskLevel.CRITICAL
    if average_depth <= WARNING_AVERAGE_DEPTH_MM:
        return RiskLevel.WARNING
    return RiskLevel.SAFE


def critical_tires(
    tires: Iterable[Tire],
    limit: float = CRITICAL_DEPTH_MM,
) -> list[CriticalTire]:
    """
    Tires whose last inspection has any reading at or below limit.

    Sorted by average depth, shallowest first.
    """
    found = []
    for tire in tires:
        inspection = tire.last_inspection
        if inspection is None or inspection.min_depth > limit:
            continue
        found.append(CriticalTire(
            tire_id=tire.id,
            brand=tire.brand,
            vehicle_id=tire.vehicle_id,
            position=tire.position,
            inspection_date=inspection.date,
            depth_inner=inspection.depth_inner,
            depth_center=inspection.depth_center,
            depth_outer=inspection.depth_outer,
            average_depth=inspection.average_depth,
            risk=risk_level(inspection.average_depth),
        ))
    return sorted(found, key=lambda c: (c.average_depth, c.tire_id))


def summarize_fleet(
    tires: Iterable[Tire],
    reference_date: datetime.date,
    classifier: Optional[ConditionClassifier] = None,
    include_retired: bool = False,
) -> FleetSummary:
    """
    Build the full fleet summary.

    Args:
        tires: Tires to summarize
        reference_date: Date whose month is reported as current spend
        classifier: Classifier to use (default thresholds if None)
        include_retired: Keep tires whose current stage is "end"

    Returns:
        FleetSummary
    """
    tires = list(tires)
    if not include_retired:
        tires = active_tires(tires)

    return FleetSummary(
        tire_count=len(tires),
        inspected_count=sum(1 for tire in tires if tire.last_inspection is not None),
        condition_counts=condition_counts(tires, classifier),
        costs=cost_totals(tires, reference_date),
        cpk=cpk_averages(tires),
        average_min_depth_by_axle=average_min_depth_by_axle(tires),
        count_by_life_stage=count_by_life_stage(tires),
        count_by_brand=count_by_brand(tires),
        remaining_tread_percent=remaining_tread_percent(tires),
        critical_tires=critical_tires(tires),
    )
