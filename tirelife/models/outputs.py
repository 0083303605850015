"""
Output models for wear analytics, condition classification, position
change-sets and fleet summaries.
"""

import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field, field_serializer, field_validator

from tirelife.models.inputs import LifeStage, Position


class Status(str, Enum):
    """Traffic-light condition bucket for a tire."""
    OPTIMAL = "optimal"
    WARN_60 = "warn_60"
    WARN_30 = "warn_30"
    URGENT = "urgent"
    NO_INSPECTION = "no_inspection"


class ProjectionTier(str, Enum):
    """Which rule produced the projected distance."""
    EXPLICIT_CPK = "explicit_cpk"
    EXPLICIT_DISTANCE = "explicit_distance"
    WEAR_RATE = "wear_rate"
    UNKNOWN = "unknown"


class RiskLevel(str, Enum):
    """Risk level of a critical tire, from its average depth."""
    CRITICAL = "critical"
    WARNING = "warning"
    SAFE = "safe"


class WearState(BaseModel):
    """
    Current wear of a tire, derived from its last inspection.

    projected_remaining_distance is None when no projection rule applies; it
    serializes as "unknown" and must never be read as zero.
    """
    min_depth: float = Field(..., ge=0, description="Shallowest current reading (mm)")
    wear_percent: float = Field(..., ge=0, le=100, description="Tread consumed (%)")
    projected_remaining_distance: Optional[float] = Field(
        default=None,
        description="Projected distance over the tread life (km), or unknown",
    )
    projection_tier: ProjectionTier = Field(default=ProjectionTier.UNKNOWN)
    cpk: Optional[float] = Field(default=None, description="Realized CPK from the inspection")
    cpk_projected: Optional[float] = Field(default=None, description="Projected CPK from the inspection")

    @field_validator("projected_remaining_distance", mode="before")
    @classmethod
    def parse_unknown(cls, v):
        if isinstance(v, str) and v.strip().lower() in ("unknown", "-"):
            return None
        return v

    @field_serializer("projected_remaining_distance")
    def serialize_projection(self, v: Optional[float]) -> Union[float, str]:
        return "unknown" if v is None else v

    @property
    def has_projection(self) -> bool:
        return self.projected_remaining_distance is not None


class TireReport(BaseModel):
    """Wear state and condition of a single tire."""
    tire_id: str
    brand: str = ""
    position: Position
    current_stage: Optional[LifeStage] = None
    retired: bool = False
    wear_state: Optional[WearState] = Field(
        default=None,
        description="None when the tire has no inspections",
    )
    status: Status


class ChangeRecord(BaseModel):
    """A tire whose position differs from the snapshot taken at load."""
    tire_id: str
    brand: str = ""
    original_position: Position
    new_position: Position


class Axle(BaseModel):
    """One axle of a derived vehicle layout."""
    index: int = Field(..., ge=1, description="Axle number, front first")
    left: list[int] = Field(..., description="Slot numbers on the left side")
    right: list[int] = Field(..., description="Slot numbers on the right side")

    @property
    def slots(self) -> list[int]:
        return self.left + self.right


class VehicleLayout(BaseModel):
    """Axle grouping of slot numbers, for display only."""
    tire_count: int = Field(..., ge=0)
    axles: list[Axle]

    @property
    def axle_count(self) -> int:
        return len(self.axles)

    @property
    def slots(self) -> list[int]:
        return [slot for axle in self.axles for slot in axle.slots]


class CriticalTire(BaseModel):
    """A tire with at least one reading at or below the critical depth."""
    tire_id: str
    brand: str = ""
    vehicle_id: Optional[str] = None
    position: Position
    inspection_date: datetime.date
    depth_inner: float
    depth_center: float
    depth_outer: float
    average_depth: float
    risk: RiskLevel


class CostTotals(BaseModel):
    """Spend across a set of tires."""
    total: float = Field(..., ge=0)
    current_month: float = Field(..., ge=0, description="Spend in the reference month")


class CpkAverages(BaseModel):
    """Mean CPK figures over tires whose last inspection reports a CPK."""
    average_cpk: Optional[float] = None
    average_cpk_projected: Optional[float] = None
    sample_size: int = Field(default=0, ge=0)


class FleetSummary(BaseModel):
    """Aggregated dashboard figures for a set of tires."""
    tire_count: int = Field(..., ge=0)
    inspected_count: int = Field(..., ge=0)
    condition_counts: dict[Status, int]
    costs: CostTotals
    cpk: CpkAverages
    average_min_depth_by_axle: dict[str, float]
    count_by_life_stage: dict[str, int]
    count_by_brand: dict[str, int]
    remaining_tread_percent: Optional[float] = Field(
        default=None,
        description="Mean remaining tread over inspected tires (%)",
    )
    critical_tires: list[CriticalTire] = Field(default_factory=list)
