"""
Fleet-level summaries built on the per-tire analytics.
"""

from tirelife.fleet.summary import (
    active_tires,
    analyze_tires,
    average_min_depth_by_axle,
    condition_counts,
    cost_totals,
    count_by_brand,
    count_by_life_stage,
    cpk_averages,
    critical_tires,
    remaining_tread_percent,
    risk_level,
    summarize_fleet,
    tire_report,
)

__all__ = [
    "active_tires",
    "analyze_tires",
    "average_min_depth_by_axle",
    "condition_counts",
    "cost_totals",
    "count_by_brand",
    "count_by_life_stage",
    "cpk_averages",
    "critical_tires",
    "remaining_tread_percent",
    "risk_level",
    "summarize_fleet",
    "tire_report",
]
