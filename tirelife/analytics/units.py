"""
Unit registry and conversions for tread depth, distance and CPK.

The core works in millimetres and kilometres. Fleets that record depth in
32nds of an inch or distance in miles state so through Preferences, and
their rosters are converted once at the input boundary with pint.
"""

from enum import Enum

import pint
from pydantic import BaseModel, Field

from tirelife.models.inputs import Inspection, Tire

# Shared unit registry for the whole package
ureg = pint.UnitRegistry()
ureg.define("thirty_second_inch = inch / 32 = th32")

# Shorthand for creating quantities
Q_ = ureg.Quantity


class DepthUnit(str, Enum):
    """Units tread depth may be recorded in."""
    MILLIMETER = "millimeter"
    THIRTY_SECOND_INCH = "thirty_second_inch"


class DistanceUnit(str, Enum):
    """Units odometer distance may be recorded in."""
    KILOMETER = "kilometer"
    MILE = "mile"


class Preferences(BaseModel):
    """
    Measurement preferences of the caller.

    Passed explicitly to whatever needs it; nothing in the core reads
    preferences from ambient state.
    """
    depth_unit: DepthUnit = Field(default=DepthUnit.MILLIMETER)
    distance_unit: DistanceUnit = Field(default=DistanceUnit.KILOMETER)

    @property
    def is_metric(self) -> bool:
        return (
            self.depth_unit == DepthUnit.MILLIMETER
            and self.distance_unit == DistanceUnit.KILOMETER
        )


def magnitude_in(quantity: pint.Quantity, unit: str) -> float:
    """Get the magnitude of a quantity in specified units."""
    return quantity.to(unit).magnitude


def depth_to_mm(value: float, unit: DepthUnit) -> float:
    """Convert a tread depth reading to millimetres."""
    return magnitude_in(Q_(value, unit.value), "millimeter")


def mm_to(value_mm: float, unit: DepthUnit) -> float:
    """Convert a depth in millimetres to the given unit."""
    return magnitude_in(Q_(value_mm, "millimeter"), unit.value)


def distance_to_km(value: float, unit: DistanceUnit) -> float:
    """Convert a distance to kilometres."""
    return magnitude_in(Q_(value, unit.value), "kilometer")


def km_to(value_km: float, unit: DistanceUnit) -> float:
    """Convert a distance in kilometres to the given unit."""
    return magnitude_in(Q_(value_km, "kilometer"), unit.value)


def cost_per_distance_to_per_km(value: float, unit: DistanceUnit) -> float:
    """Convert a cost per distance unit (e.g. per mile) to cost per km."""
    return magnitude_in(Q_(value, f"1/{unit.value}"), "1/kilometer")


def _normalize_inspection(inspection: Inspection, preferences: Preferences) -> Inspection:
    depth_unit = preferences.depth_unit
    distance_unit = preferences.distance_unit
    update = {
        "depth_inner": depth_to_mm(inspection.depth_inner, depth_unit),
        "depth_center": depth_to_mm(inspection.depth_center, depth_unit),
        "depth_outer": depth_to_mm(inspection.depth_outer, depth_unit),
    }
    if inspection.cpk is not None:
        update["cpk"] = cost_per_distance_to_per_km(inspection.cpk, distance_unit)
    if inspection.cpk_projected is not None:
        update["cpk_projected"] = cost_per_distance_to_per_km(inspection.cpk_projected, distance_unit)
    if inspection.km_projected is not None:
        update["km_projected"] = distance_to_km(inspection.km_projected, distance_unit)
    return inspection.model_copy(update=update)


def normalize_tire(tire: Tire, preferences: Preferences) -> Tire:
    """
    Return a copy of a tire with all readings converted to mm and km.

    Args:
        tire: Tire as recorded, in the units named by preferences
        preferences: Units the tire was recorded in

    Returns:
        The same tire when preferences are already metric, otherwise a copy
    """
    if preferences.is_metric:
        return tire
    return tire.model_copy(
        update={
            "initial_depth": depth_to_mm(tire.initial_depth, preferences.depth_unit),
            "traveled_distance": distance_to_km(tire.traveled_distance, preferences.distance_unit),
            "inspection_history": [
                _normalize_inspection(inspection, preferences)
                for inspection in tire.inspection_history
            ],
        }
    )
