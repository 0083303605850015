"""
Position assignment engine.

Keeps the mapping tire id -> Position for a roster, with slots scoped by
vehicle, applies move commands with swap-with-displacement, and diffs the current mapping against
the snapshot taken at load (or at the last commit).
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Union

from tirelife.errors import UnknownTire
from tirelife.models.inputs import MoveCommand, Position, Roster, Tire, Vehicle
from tirelife.models.outputs import ChangeRecord, VehicleLayout
from tirelife.positions.layout import derive_layout, layout_for_vehicle_type

logger = logging.getLogger(__name__)

# Tire count used for the layout when no tire is mounted
DEFAULT_LAYOUT_TIRES = 4

PositionLike = Union[Position, int, str, None]


@dataclass(frozen=True)
class MoveOutcome:
    """Result of a single move."""
    tire_id: str
    target: Position
    positions: dict[str, Position]
    displaced: Optional[str] = None


def apply_move(
    positions: Mapping[str, Position],
    tire_id: str,
    target: PositionLike,
    vehicles: Optional[Mapping[str, Optional[str]]] = None,
) -> MoveOutcome:
    """
    Move a tire, displacing the current occupant of a target slot.

    The input mapping is not modified. If another tire on the same vehicle
    holds the target slot it is moved to Unassigned in the same update.
    Moving to Inventory or Unassigned never displaces anything.

    Args:
        positions: Current mapping of tire id to position
        tire_id: Tire to move
        target: Destination, a Position or a command value
        vehicles: Tire id -> vehicle id; when omitted all tires share one vehicle

    Returns:
        MoveOutcome with the new mapping and the displaced tire, if any

    Raises:
        UnknownTire: tire_id is not in the mapping
    """
    if tire_id not in positions:
        raise UnknownTire(tire_id)
    target = Position.parse(target)

    updated = dict(positions)
    displaced = None
    if target.is_slot:
        vehicle_id = vehicles.get(tire_id) if vehicles is not None else None
        for other_id, position in positions.items():
            if other_id == tire_id or position != target:
                continue
            if vehicles is None or vehicles.get(other_id) == vehicle_id:
                updated[other_id] = Position.unassigned()
                displaced = other_id
                break
    updated[tire_id] = target

    return MoveOutcome(tire_id=tire_id, target=target, positions=updated, displaced=displaced)


def compute_change_set(
    current: Mapping[str, Position],
    snapshot: Mapping[str, Position],
    brands: Optional[Mapping[str, str]] = None,
) -> list[ChangeRecord]:
    """
    Records for every tire whose current position differs from the snapshot.

    Tires missing from the snapshot count as originally Unassigned. Output
    is sorted by tire id.
    """
    brands = brands or {}
    records = []
    for tire_id in sorted(current):
        original = snapshot.get(tire_id, Position.unassigned())
        new = current[tire_id]
        if original != new:
            records.append(ChangeRecord(
                tire_id=tire_id,
                brand=brands.get(tire_id, ""),
                original_position=original,
                new_position=new,
            ))
    return records


class PositionEngine:
    """
    Position state of a roster's tires during an editing session.

    Slots are scoped by vehicle: two tires on different vehicles may both
    sit in slot 1. The engine is a single-writer, in-memory object: moves
    are applied in the order they are issued, nothing is persisted, and
    discarding the engine cancels every pending move.
    """

    def __init__(self, tires: Iterable[Tire], vehicle: Optional[Vehicle] = None):
        """
        Load a roster.

        When several tires claim the same slot of the same vehicle the first
        one keeps it and the others are loaded as Unassigned. Tires without
        a vehicle id belong to `vehicle` when one is given.

        Args:
            tires: Tires of one vehicle or of a whole company
            vehicle: Vehicle identity, used for layout and persistence
        """
        self.vehicle = vehicle
        self._brands: dict[str, str] = {}
        self._vehicles: dict[str, Optional[str]] = {}
        positions: dict[str, Position] = {}
        claimed: dict[tuple[Optional[str], int], str] = {}

        for tire in tires:
            if tire.id in positions:
                raise ValueError(f"Duplicate tire id in roster: {tire.id}")
            vehicle_id = tire.vehicle_id or (vehicle.id if vehicle is not None else None)
            self._brands[tire.id] = tire.brand
            self._vehicles[tire.id] = vehicle_id
            position = tire.position
            if position.is_slot:
                key = (vehicle_id, position.slot)
                if key in claimed:
                    logger.warning(
                        "Tire %s claims slot %d already held by %s; loading it as unassigned",
                        tire.id, position.slot, claimed[key],
                    )
                    position = Position.unassigned()
                else:
                    claimed[key] = tire.id
            positions[tire.id] = position

        self._current = positions
        self._snapshot = MappingProxyType(dict(positions))

    @classmethod
    def from_roster(cls, roster: Roster) -> "PositionEngine":
        """Build an engine from a Roster."""
        return cls(roster.tires, vehicle=roster.vehicle)

    @property
    def positions(self) -> dict[str, Position]:
        """Copy of the current mapping."""
        return dict(self._current)

    @property
    def snapshot(self) -> Mapping[str, Position]:
        """Read-only baseline the change-set is computed against."""
        return self._snapshot

    @property
    def tire_ids(self) -> list[str]:
        return sorted(self._current)

    @property
    def vehicle_ids(self) -> list[str]:
        """Distinct vehicle ids of the loaded tires."""
        return sorted({vid for vid in self._vehicles.values() if vid is not None})

    @property
    def has_changes(self) -> bool:
        return any(self._snapshot.get(tid) != pos for tid, pos in self._current.items())

    def _resolve_vehicle(self, vehicle_id: Optional[str]) -> Optional[str]:
        """Vehicle the slot queries refer to when none is named."""
        if vehicle_id is not None:
            return vehicle_id
        if self.vehicle is not None:
            return self.vehicle.id
        ids = set(self._vehicles.values())
        if len(ids) > 1:
            named = ", ".join(sorted(str(vid) for vid in ids))
            raise ValueError(f"Roster spans several vehicles ({named}); name one")
        return next(iter(ids), None)

    def vehicle_of(self, tire_id: str) -> Optional[str]:
        if tire_id not in self._vehicles:
            raise UnknownTire(tire_id)
        return self._vehicles[tire_id]

    def position_of(self, tire_id: str) -> Position:
        if tire_id not in self._current:
            raise UnknownTire(tire_id)
        return self._current[tire_id]

    def occupant(self, slot: int, vehicle_id: Optional[str] = None) -> Optional[str]:
        """Tire currently in a slot of a vehicle, if any."""
        return self.mounted(vehicle_id).get(slot)

    def mounted(self, vehicle_id: Optional[str] = None) -> dict[int, str]:
        """
        Slot number -> tire id for one vehicle, ordered by slot.

        Raises:
            ValueError: No vehicle is named and the roster spans several
        """
        vehicle_id = self._resolve_vehicle(vehicle_id)
        slots = {
            pos.slot: tid
            for tid, pos in self._current.items()
            if pos.is_slot and self._vehicles[tid] == vehicle_id
        }
        return dict(sorted(slots.items()))

    def in_inventory(self) -> list[str]:
        return sorted(tid for tid, pos in self._current.items() if pos.is_inventory)

    def unassigned(self) -> list[str]:
        return sorted(tid for tid, pos in self._current.items() if pos.is_unassigned)

    def move_tire(self, tire_id: str, target: PositionLike) -> MoveOutcome:
        """Apply a move in place. See apply_move."""
        outcome = apply_move(self._current, tire_id, target, vehicles=self._vehicles)
        self._current = outcome.positions
        if outcome.displaced:
            logger.debug(
                "Moved %s to %s, displacing %s", tire_id, outcome.target, outcome.displaced
            )
        else:
            logger.debug("Moved %s to %s", tire_id, outcome.target)
        return outcome

    def apply_commands(self, commands: Iterable[MoveCommand]) -> list[MoveOutcome]:
        """Apply move commands in order."""
        return [self.move_tire(command.tire_id, command.target) for command in commands]

    def remove_from_inventory(self, tire_id: str) -> bool:
        """
        Take a tire out of Inventory, leaving it Unassigned.

        Returns:
            True if the tire was in Inventory, False if it was elsewhere
        """
        if not self.position_of(tire_id).is_inventory:
            return False
        self.move_tire(tire_id, Position.unassigned())
        return True

    def reset(self) -> None:
        """Discard all pending moves."""
        self._current = dict(self._snapshot)

    def change_set(self) -> list[ChangeRecord]:
        """Pending changes against the snapshot, sorted by tire id."""
        return compute_change_set(self._current, self._snapshot, self._brands)

    def persistence_payload(self, vehicle_id: Optional[str] = None) -> dict[str, str]:
        """Slot number (as string) -> tire id, for the save-positions call."""
        return {str(slot): tire_id for slot, tire_id in self.mounted(vehicle_id).items()}

    def commit(self) -> Mapping[str, Position]:
        """
        Adopt the current mapping as the new snapshot.

        Call only after the external save succeeded.
        """
        self._snapshot = MappingProxyType(dict(self._current))
        logger.debug("Committed %d tire positions", len(self._current))
        return self._snapshot

    def layout(self, vehicle_id: Optional[str] = None) -> VehicleLayout:
        """Axle layout large enough for every slot in use on a vehicle."""
        mounted = self.mounted(vehicle_id)
        count = max(len(mounted), max(mounted, default=0)) or DEFAULT_LAYOUT_TIRES
        if self.vehicle is not None and self.vehicle.vehicle_type:
            return layout_for_vehicle_type(self.vehicle.vehicle_type, count)
        return derive_layout(count)
