"""
Helpers to print tire reports, fleet summaries and change-sets as compact,
human-readable console output. Distances and depths are shown in the
caller's preferred units.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from tirelife.analytics.units import DepthUnit, DistanceUnit, Preferences, km_to, mm_to
from tirelife.models.outputs import ChangeRecord, FleetSummary, TireReport, VehicleLayout

_DEPTH_SUFFIX = {
    DepthUnit.MILLIMETER: "mm",
    DepthUnit.THIRTY_SECOND_INCH: "/32 in",
}
_DISTANCE_SUFFIX = {
    DistanceUnit.KILOMETER: "km",
    DistanceUnit.MILE: "mi",
}


def _fmt_float(value: Any, unit: str = "", zero_default: str = "n/a") -> str:
    """Safely format a float with optional unit suffix."""
    try:
        fval = float(value)
    except (TypeError, ValueError):
        return zero_default
    suffix = f" {unit}" if unit else ""
    if abs(fval) >= 100:
        return f"{fval:,.0f}{suffix}"
    return f"{fval:.2f}{suffix}"


def format_depth(value_mm: Optional[float], preferences: Preferences) -> str:
    if value_mm is None:
        return "n/a"
    unit = preferences.depth_unit
    return _fmt_float(mm_to(value_mm, unit), _DEPTH_SUFFIX[unit])


def format_distance(value_km: Optional[float], preferences: Preferences) -> str:
    """Projected distances that are unknown print as 'unknown', never 0."""
    if value_km is None:
        return "unknown"
    unit = preferences.distance_unit
    return _fmt_float(km_to(value_km, unit), _DISTANCE_SUFFIX[unit])


def print_tire_reports(reports: Sequence[TireReport], preferences: Preferences) -> None:
    """One line per tire: position, status, min depth, wear and projection."""
    print(f"{'Tire':<12} {'Brand':<14} {'Position':<11} {'Status':<14} "
          f"{'Min depth':>12} {'Wear':>7} {'Projected life':>16}")
    for report in reports:
        state = report.wear_state
        depth = format_depth(state.min_depth if state else None, preferences)
        wear = f"{state.wear_percent:.0f}%" if state else "n/a"
        projection = format_distance(state.projected_remaining_distance, preferences) if state else "unknown"
        retired = " (retired)" if report.retired else ""
        print(f"{report.tire_id:<12} {report.brand[:14]:<14} {report.position.label:<11} "
              f"{report.status.value:<14} {depth:>12} {wear:>7} {projection:>16}{retired}")


def print_fleet_summary(summary: FleetSummary, preferences: Preferences) -> None:
    """Dashboard-style summary of a fleet."""
    print("=" * 60)
    print(f"Fleet summary: {summary.tire_count} tires, {summary.inspected_count} inspected")
    print("=" * 60)

    print("\nCondition:")
    for status, count in summary.condition_counts.items():
        print(f"  {status.value:<14} {count:>5}")

    print(f"\nSpend: total {_fmt_float(summary.costs.total)} | "
          f"this month {_fmt_float(summary.costs.current_month)}")
    print(f"CPK: average {_fmt_float(summary.cpk.average_cpk)} | "
          f"projected {_fmt_float(summary.cpk.average_cpk_projected)} "
          f"(n={summary.cpk.sample_size})")
    print(f"Tread remaining: {_fmt_float(summary.remaining_tread_percent, '%')}")

    if summary.average_min_depth_by_axle:
        print("\nAverage min depth by axle:")
        for axle, depth in summary.average_min_depth_by_axle.items():
            print(f"  {axle:<14} {format_depth(depth, preferences):>12}")

    if summary.count_by_life_stage:
        print("\nBy life stage: " + ", ".join(
            f"{stage}={count}" for stage, count in summary.count_by_life_stage.items()
        ))
    if summary.count_by_brand:
        print("By brand: " + ", ".join(
            f"{brand}={count}" for brand, count in summary.count_by_brand.items()
        ))

    if summary.critical_tires:
        print("\nNeeds immediate replacement:")
        for tire in summary.critical_tires:
            print(f"  {tire.tire_id:<12} {tire.position.label:<11} "
                  f"avg {format_depth(tire.average_depth, preferences)} [{tire.risk.value}]")


def print_change_set(records: Sequence[ChangeRecord]) -> None:
    if not records:
        print("No pending position changes.")
        return
    print(f"{len(records)} position change(s):")
    for record in records:
        print(f"  {record.tire_id:<12} {record.brand[:14]:<14} "
              f"{record.original_position.label:>11} -> {record.new_position.label}")


def print_layout(layout: VehicleLayout) -> None:
    """Draw the axle layout, left slots | right slots."""
    print(f"{layout.axle_count} axles, {len(layout.slots)} slots")
    for axle in layout.axles:
        left = " ".join(f"[{slot:>2}]" for slot in axle.left)
        right = " ".join(f"[{slot:>2}]" for slot in axle.right)
        print(f"  Axle {axle.index}: {left} ====== {right}")
