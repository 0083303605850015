"""
Position assignment: moving tires between slots, inventory and unassigned.
"""

from tirelife.positions.engine import (
    MoveOutcome,
    PositionEngine,
    apply_move,
    compute_change_set,
)
from tirelife.positions.layout import (
    AXLE_TABLES,
    axle_count_from_type,
    derive_layout,
    layout_for_vehicle_type,
)

__all__ = [
    "MoveOutcome",
    "PositionEngine",
    "apply_move",
    "compute_change_set",
    "AXLE_TABLES",
    "axle_count_from_type",
    "derive_layout",
    "layout_for_vehicle_type",
]
