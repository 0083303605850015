"""
Axle layout derivation.

Groups slot numbers into axles and sides for display. The layout is pure
bookkeeping: it is recomputed whenever the tire set changes and has no
effect on which positions are valid.
"""

import math
import re
from typing import Optional

from tirelife.models.outputs import Axle, VehicleLayout

# Axle sizes (tires per axle, front first) for vehicle types that state
# their axle count, keyed by axle count. Each entry is (max tire count, sizes);
# the last entry of each table has no upper bound.
AXLE_TABLES: dict[int, list[tuple[Optional[int], list[int]]]] = {
    2: [
        (4, [2, 2]),
        (6, [2, 4]),
        (None, [4, 4]),
    ],
    3: [
        (6, [2, 2, 2]),
        (8, [2, 2, 4]),
        (10, [2, 4, 4]),
        (None, [4, 4, 4]),
    ],
}

_AXLE_COUNT_PATTERN = re.compile(r"(\d+)_ejes")


def _build_layout(tire_count: int, axle_sizes: list[int]) -> VehicleLayout:
    """Number slots sequentially from 1, half of each axle per side."""
    axles = []
    next_slot = 1
    for index, size in enumerate(axle_sizes, start=1):
        slots = list(range(next_slot, next_slot + size))
        next_slot += size
        half = size // 2
        axles.append(Axle(index=index, left=slots[:half], right=slots[half:]))
    return VehicleLayout(tire_count=tire_count, axles=axles)


def derive_layout(tire_count: int) -> VehicleLayout:
    """
    Derive an axle layout from a tire count.

    2 axles up to 8 tires, 3 axles up to 12, otherwise one axle per 4 tires.
    The first axle carries one tire per side; later axles carry two per side
    when the vehicle has more than 6 tires, otherwise one.

    Args:
        tire_count: Number of tires on the vehicle

    Returns:
        VehicleLayout with slots numbered from 1
    """
    if tire_count < 0:
        raise ValueError("tire_count must be >= 0")

    if tire_count <= 8:
        axle_count = 2
    elif tire_count <= 12:
        axle_count = 3
    else:
        axle_count = math.ceil(tire_count / 4)

    sizes = []
    for i in range(axle_count):
        per_side = 1 if i == 0 else (2 if tire_count > 6 else 1)
        sizes.append(per_side * 2)
    return _build_layout(tire_count, sizes)


def axle_count_from_type(vehicle_type: Optional[str]) -> Optional[int]:
    """Axle count encoded in a vehicle type tag such as 'camion_3_ejes'."""
    if not vehicle_type:
        return None
    match = _AXLE_COUNT_PATTERN.search(vehicle_type)
    return int(match.group(1)) if match else None


def layout_for_vehicle_type(vehicle_type: Optional[str], tire_count: int) -> VehicleLayout:
    """
    Layout for a vehicle whose type tag states its axle count.

    2- and 3-axle vehicles use the fixed tables in AXLE_TABLES; any other
    type falls back to derive_layout.
    """
    axle_count = axle_count_from_type(vehicle_type)
    table = AXLE_TABLES.get(axle_count) if axle_count is not None else None
    if table is None:
        return derive_layout(tire_count)

    for max_count, sizes in table[:-1]:
        if tire_count <= max_count:
            return _build_layout(tire_count, sizes)
    return _build_layout(tire_count, table[-1][1])
