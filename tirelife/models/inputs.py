"""
Input models for tire measurement histories and vehicle rosters.

These models are the immutable value objects the analytics and the position
engine consume. Depths are in millimetres, distances in kilometres and costs
in the fleet's currency. Readings taken in other units are converted at the
input boundary (see tirelife.analytics.units).
"""

import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator


class LifeStage(str, Enum):
    """Life stage of a tire casing."""
    NEW = "new"
    RETREAD1 = "retread1"
    RETREAD2 = "retread2"
    RETREAD3 = "retread3"
    END = "end"

    @classmethod
    def _missing_(cls, value: object) -> Optional["LifeStage"]:
        # Rosters exported by the fleet backend use Spanish stage names
        if isinstance(value, str):
            key = value.strip().lower()
            aliases = {
                "nueva": cls.NEW,
                "reencauche1": cls.RETREAD1,
                "reencauche2": cls.RETREAD2,
                "reencauche3": cls.RETREAD3,
                "fin": cls.END,
            }
            if key in aliases:
                return aliases[key]
            for member in cls:
                if member.value == key:
                    return member
        return None


class CostEntry(BaseModel):
    """A purchase, retread or repair cost charged to a tire."""
    model_config = ConfigDict(frozen=True)

    amount: float = Field(..., ge=0, description="Cost amount")
    date: datetime.date = Field(..., description="Date the cost was incurred")


class LifeEntry(BaseModel):
    """A life-stage transition. The last entry is the tire's current stage."""
    model_config = ConfigDict(frozen=True)

    stage: LifeStage = Field(..., description="Stage entered")
    date: datetime.date = Field(..., description="Date of the transition")


class Inspection(BaseModel):
    """
    A tread depth inspection.

    Inspections are append-only; the last one in a tire's history is the
    authoritative current wear state. CPK figures are computed upstream when
    the inspection is recorded and carried here as-is.
    """
    model_config = ConfigDict(frozen=True)

    depth_inner: float = Field(..., ge=0, description="Inner groove depth (mm)")
    depth_center: float = Field(..., ge=0, description="Center groove depth (mm)")
    depth_outer: float = Field(..., ge=0, description="Outer groove depth (mm)")
    date: datetime.date = Field(..., description="Inspection date")
    cpk: Optional[float] = Field(default=None, ge=0, description="Realized cost per km")
    cpk_projected: Optional[float] = Field(
        default=None,
        ge=0,
        description="Projected cost per km over the full tread life",
    )
    km_projected: Optional[float] = Field(
        default=None,
        ge=0,
        description="Precomputed projected distance (km)",
    )

    @property
    def depths(self) -> tuple[float, float, float]:
        """Inner, center and outer readings."""
        return (self.depth_inner, self.depth_center, self.depth_outer)

    @property
    def min_depth(self) -> float:
        """Shallowest of the three readings."""
        return min(self.depths)

    @property
    def average_depth(self) -> float:
        """Mean of the three readings."""
        return sum(self.depths) / 3


class PositionKind(str, Enum):
    """Discriminator for Position."""
    UNASSIGNED = "unassigned"
    INVENTORY = "inventory"
    SLOT = "slot"


def _raw_position_fields(raw: Any) -> dict[str, Any]:
    """Translate a wire/command position value into Position fields."""
    if raw is None:
        return {"kind": PositionKind.UNASSIGNED}
    if isinstance(raw, bool):
        raise ValueError(f"Invalid position: {raw!r}")
    if isinstance(raw, float):
        if not raw.is_integer():
            raise ValueError(f"Slot number must be an integer, got {raw}")
        raw = int(raw)
    if isinstance(raw, int):
        if raw == 0:
            return {"kind": PositionKind.INVENTORY}
        return {"kind": PositionKind.SLOT, "slot": raw}
    if isinstance(raw, str):
        text = raw.strip().lower()
        if text in ("", "unassigned"):
            return {"kind": PositionKind.UNASSIGNED}
        # "none" is what the drag-and-drop inventory zone sends
        if text in ("inventory", "none"):
            return {"kind": PositionKind.INVENTORY}
        if text.lstrip("-").isdigit():
            return _raw_position_fields(int(text))
    raise ValueError(f"Invalid position: {raw!r}")


class Position(BaseModel):
    """
    Where a tire sits: Unassigned, Inventory or Slot(n).

    On the wire Inventory is "0", Unassigned is null and Slot(n) is the slot
    number as a string. Conversion happens only in the validator and the
    serializer below.
    """
    model_config = ConfigDict(frozen=True)

    kind: PositionKind
    slot: Optional[int] = Field(default=None, ge=1)

    @model_validator(mode="before")
    @classmethod
    def coerce_wire_value(cls, data: Any) -> Any:
        """Accept wire and command values as well as field dicts."""
        if isinstance(data, (dict, Position)):
            return data
        return _raw_position_fields(data)

    @model_validator(mode="after")
    def check_slot_number(self) -> "Position":
        """Only Slot positions carry a slot number."""
        if self.kind == PositionKind.SLOT and self.slot is None:
            raise ValueError("Slot position requires a slot number")
        if self.kind != PositionKind.SLOT and self.slot is not None:
            raise ValueError(f"{self.kind.value} position cannot carry a slot number")
        return self

    @model_serializer(mode="plain")
    def to_wire(self) -> Optional[str]:
        """Serialize to the backend representation."""
        if self.kind == PositionKind.INVENTORY:
            return "0"
        if self.kind == PositionKind.SLOT:
            return str(self.slot)
        return None

    @classmethod
    def unassigned(cls) -> "Position":
        return cls(kind=PositionKind.UNASSIGNED)

    @classmethod
    def inventory(cls) -> "Position":
        return cls(kind=PositionKind.INVENTORY)

    @classmethod
    def at_slot(cls, number: int) -> "Position":
        return cls(kind=PositionKind.SLOT, slot=number)

    @classmethod
    def parse(cls, raw: Any) -> "Position":
        """Build a Position from a wire value, a command value or a Position."""
        if isinstance(raw, Position):
            return raw
        return cls.model_validate(raw)

    @property
    def is_slot(self) -> bool:
        return self.kind == PositionKind.SLOT

    @property
    def is_inventory(self) -> bool:
        return self.kind == PositionKind.INVENTORY

    @property
    def is_unassigned(self) -> bool:
        return self.kind == PositionKind.UNASSIGNED

    @property
    def label(self) -> str:
        """Human-readable label."""
        if self.is_slot:
            return f"slot {self.slot}"
        return self.kind.value

    def __str__(self) -> str:
        return self.label


class Tire(BaseModel):
    """
    A tire with its full measurement, cost and life history.

    Histories are ordered oldest first. Retired tires (last life entry "end")
    are still valid input for analytics; excluding them from fleet views is
    left to the caller.
    """

    id: str = Field(..., min_length=1, description="Opaque tire identifier")
    brand: str = Field(default="", description="Tire brand")
    plate: Optional[str] = Field(default=None, description="Tire marking/plate number")
    axle: Optional[str] = Field(default=None, description="Axle label, e.g. 'direccion', 'traccion'")
    initial_depth: float = Field(..., gt=0, description="Tread depth when new (mm)")
    traveled_distance: float = Field(default=0.0, ge=0, description="Distance traveled (km)")
    cost_history: list[CostEntry] = Field(default_factory=list)
    life_history: list[LifeEntry] = Field(default_factory=list)
    inspection_history: list[Inspection] = Field(default_factory=list)
    position: Position = Field(default_factory=Position.unassigned)
    vehicle_id: Optional[str] = Field(
        default=None,
        description="Owning vehicle; kept for audit when the tire is unmounted",
    )

    @property
    def last_inspection(self) -> Optional[Inspection]:
        """Most recent inspection, or None."""
        return self.inspection_history[-1] if self.inspection_history else None

    @property
    def current_stage(self) -> Optional[LifeStage]:
        """Current life stage, or None when no life entry exists."""
        return self.life_history[-1].stage if self.life_history else None

    @property
    def is_retired(self) -> bool:
        return self.current_stage == LifeStage.END

    @property
    def is_mounted(self) -> bool:
        return self.position.is_slot

    @property
    def total_cost(self) -> float:
        """Sum of all cost entries."""
        return sum(entry.amount for entry in self.cost_history)

    def record_inspection(self, inspection: Inspection, km_diff: float = 0.0) -> None:
        """
        Append an inspection and advance the traveled distance.

        Args:
            inspection: The new inspection
            km_diff: Distance covered since the previous inspection (km)
        """
        if km_diff < 0:
            raise ValueError("Traveled distance cannot decrease (km_diff < 0)")
        self.inspection_history.append(inspection)
        self.traveled_distance += km_diff

    def add_cost(self, entry: CostEntry) -> None:
        self.cost_history.append(entry)

    def add_life_entry(self, entry: LifeEntry) -> None:
        self.life_history.append(entry)


class Vehicle(BaseModel):
    """Vehicle identity. The axle layout is derived, never stored."""
    id: str = Field(..., min_length=1, description="Vehicle identifier")
    plate: str = Field(..., description="License plate")
    vehicle_type: Optional[str] = Field(
        default=None,
        description="Vehicle type tag, e.g. 'camion_3_ejes'",
    )


class Roster(BaseModel):
    """Tires of one vehicle or one company, as loaded from the backend."""
    vehicle: Optional[Vehicle] = Field(default=None, description="Vehicle, for single-vehicle rosters")
    tires: list[Tire] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_ids(self) -> "Roster":
        """Tire ids must be unique within a roster."""
        seen: set[str] = set()
        for tire in self.tires:
            if tire.id in seen:
                raise ValueError(f"Duplicate tire id in roster: {tire.id}")
            seen.add(tire.id)
        return self


class MoveCommand(BaseModel):
    """
    A request to move a tire.

    target accepts "unassigned", "inventory" or a positive slot number.
    """
    tire_id: str = Field(..., min_length=1)
    target: Position = Field(..., description="Destination position")
