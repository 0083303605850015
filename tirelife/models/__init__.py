"""
Pydantic models for tire histories, rosters and analytics results.
"""

from tirelife.models.inputs import (
    CostEntry,
    Inspection,
    LifeEntry,
    LifeStage,
    MoveCommand,
    Position,
    PositionKind,
    Roster,
    Tire,
    Vehicle,
)
from tirelife.models.outputs import (
    Axle,
    ChangeRecord,
    CostTotals,
    CpkAverages,
    CriticalTire,
    FleetSummary,
    ProjectionTier,
    RiskLevel,
    Status,
    TireReport,
    VehicleLayout,
    WearState,
)

__all__ = [
    "CostEntry",
    "Inspection",
    "LifeEntry",
    "LifeStage",
    "MoveCommand",
    "Position",
    "PositionKind",
    "Roster",
    "Tire",
    "Vehicle",
    "Axle",
    "ChangeRecord",
    "CostTotals",
    "CpkAverages",
    "CriticalTire",
    "FleetSummary",
    "ProjectionTier",
    "RiskLevel",
    "Status",
    "TireReport",
    "VehicleLayout",
    "WearState",
]
