"""
Tests for Pydantic models.

Tests input validation, position coercion, and JSON serialization.
"""

import json
from datetime import date

import pytest
from pydantic import ValidationError

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
)
from tirelife.models.outputs import ChangeRecord, ProjectionTier, WearState


class TestPosition:
    """Tests for the Position sum type."""

    @pytest.mark.parametrize("raw", [None, "", "unassigned", "  Unassigned "])
    def test_parse_unassigned(self, raw):
        """Test values that mean Unassigned."""
        assert Position.parse(raw) == Position.unassigned()

    @pytest.mark.parametrize("raw", ["inventory", "none", "0", 0])
    def test_parse_inventory(self, raw):
        """Test values that mean Inventory, including the wire value "0"."""
        assert Position.parse(raw) == Position.inventory()

    @pytest.mark.parametrize("raw", [3, "3", " 3 "])
    def test_parse_slot(self, raw):
        """Test slot numbers as int or numeric string."""
        position = Position.parse(raw)

        assert position.kind == PositionKind.SLOT
        assert position.slot == 3

    @pytest.mark.parametrize("raw", [-1, "-2", "front-left", 2.5, True])
    def test_parse_rejects_invalid_values(self, raw):
        """Test that negative, fractional and free-text positions are rejected."""
        with pytest.raises(ValueError):
            Position.parse(raw)

    def test_wire_values(self):
        """Test serialization at the wire boundary."""
        assert Position.inventory().model_dump() == "0"
        assert Position.unassigned().model_dump() is None
        assert Position.at_slot(7).model_dump() == "7"

    def test_wire_value_round_trips_inside_a_tire(self):
        """Test that a tire's position survives JSON dump and reload."""
        tire = Tire(id="T1", initial_depth=12.0, position=Position.inventory())

        data = json.loads(tire.model_dump_json())
        assert data["position"] == "0"
        assert Tire.model_validate(data).position == Position.inventory()

    def test_unassigned_tire_serializes_null(self):
        """Test that Unassigned serializes as null."""
        tire = Tire(id="T1", initial_depth=12.0)

        data = json.loads(tire.model_dump_json())
        assert data["position"] is None
        assert Tire.model_validate(data).position.is_unassigned

    def test_slot_requires_number(self):
        """Test that a slot kind without a number is rejected."""
        with pytest.raises(ValidationError):
            Position(kind=PositionKind.SLOT)

    def test_inventory_cannot_carry_slot(self):
        """Test that only slot positions carry a number."""
        with pytest.raises(ValidationError):
            Position(kind=PositionKind.INVENTORY, slot=2)

    def test_positions_are_hashable(self):
        """Test that equal positions hash equally."""
        assert len({Position.at_slot(1), Position.parse("1"), Position.inventory()}) == 2

    def test_labels(self):
        """Test human-readable labels."""
        assert Position.at_slot(4).label == "slot 4"
        assert str(Position.inventory()) == "inventory"
        assert Position.unassigned().label == "unassigned"


class TestLifeStage:
    """Tests for LifeStage parsing."""

    @pytest.mark.parametrize("raw,expected", [
        ("nueva", LifeStage.NEW),
        ("reencauche1", LifeStage.RETREAD1),
        ("reencauche3", LifeStage.RETREAD3),
        ("fin", LifeStage.END),
        ("retread2", LifeStage.RETREAD2),
    ])
    def test_source_spellings_accepted(self, raw, expected):
        """Test that both spellings of a stage parse."""
        assert LifeEntry(stage=raw, date=date(2024, 1, 1)).stage == expected

    def test_unknown_stage_rejected(self):
        """Test that an unknown stage fails validation."""
        with pytest.raises(ValidationError):
            LifeEntry(stage="reencauche9", date=date(2024, 1, 1))


class TestInspection:
    """Tests for Inspection model."""

    def test_min_and_average_depth(self):
        """Test derived depth properties."""
        inspection = Inspection(
            depth_inner=4.0, depth_center=5.0, depth_outer=6.0, date=date(2024, 6, 1),
        )

        assert inspection.min_depth == 4.0
        assert inspection.average_depth == pytest.approx(5.0)

    def test_negative_depth_rejected(self):
        """Test that depths must be non-negative."""
        with pytest.raises(ValidationError):
            Inspection(depth_inner=-1.0, depth_center=5.0, depth_outer=6.0, date=date(2024, 6, 1))

    def test_inspection_is_frozen(self):
        """Test that recorded inspections cannot be edited."""
        inspection = Inspection(
            depth_inner=4.0, depth_center=5.0, depth_outer=6.0, date=date(2024, 6, 1),
        )
        with pytest.raises(ValidationError):
            inspection.depth_inner = 10.0


class TestTire:
    """Tests for Tire model."""

    def test_initial_depth_must_be_positive(self):
        """Test that initial depth <= 0 is rejected at construction."""
        with pytest.raises(ValidationError):
            Tire(id="T1", initial_depth=0.0)

    def test_empty_id_rejected(self):
        """Test that a tire needs an id."""
        with pytest.raises(ValidationError):
            Tire(id="", initial_depth=12.0)

    def test_defaults(self):
        """Test default values of an unmounted new tire."""
        tire = Tire(id="T1", initial_depth=12.0)

        assert tire.position.is_unassigned
        assert tire.traveled_distance == 0.0
        assert tire.last_inspection is None
        assert tire.current_stage is None
        assert not tire.is_mounted
        assert not tire.is_retired

    def test_total_cost_and_stage(self):
        """Test cost sum and current stage from histories."""
        tire = Tire(id="T1", initial_depth=12.0)
        tire.add_cost(CostEntry(amount=1000.0, date=date(2024, 1, 1)))
        tire.add_cost(CostEntry(amount=400.0, date=date(2024, 3, 1)))
        tire.add_life_entry(LifeEntry(stage=LifeStage.NEW, date=date(2024, 1, 1)))
        tire.add_life_entry(LifeEntry(stage=LifeStage.END, date=date(2024, 9, 1)))

        assert tire.total_cost == pytest.approx(1400.0)
        assert tire.current_stage == LifeStage.END
        assert tire.is_retired

    def test_record_inspection_advances_distance(self):
        """Test that recording an inspection appends and adds km_diff."""
        tire = Tire(id="T1", initial_depth=12.0, traveled_distance=1000.0)
        first = Inspection(depth_inner=10, depth_center=10, depth_outer=10, date=date(2024, 2, 1))
        second = Inspection(depth_inner=9, depth_center=9, depth_outer=9, date=date(2024, 3, 1))

        tire.record_inspection(first, km_diff=500.0)
        tire.record_inspection(second, km_diff=700.0)

        assert tire.last_inspection == second
        assert len(tire.inspection_history) == 2
        assert tire.traveled_distance == pytest.approx(2200.0)

    def test_record_inspection_rejects_negative_distance(self):
        """Test that traveled distance never decreases."""
        tire = Tire(id="T1", initial_depth=12.0, traveled_distance=1000.0)
        inspection = Inspection(depth_inner=10, depth_center=10, depth_outer=10, date=date(2024, 2, 1))

        with pytest.raises(ValueError):
            tire.record_inspection(inspection, km_diff=-1.0)

        assert tire.inspection_history == []
        assert tire.traveled_distance == 1000.0


class TestRoster:
    """Tests for Roster model."""

    def test_duplicate_ids_rejected(self):
        """Test that tire ids are unique within a roster."""
        with pytest.raises(ValidationError):
            Roster(tires=[
                Tire(id="T1", initial_depth=12.0),
                Tire(id="T1", initial_depth=10.0),
            ])

    def test_sample_roster_round_trips(self, sample_roster):
        """Test that the example roster reloads from its own JSON."""
        reloaded = Roster.model_validate_json(sample_roster.model_dump_json())

        assert reloaded.model_dump() == sample_roster.model_dump()


class TestMoveCommand:
    """Tests for MoveCommand parsing."""

    def test_command_targets(self):
        """Test the three command target forms."""
        assert MoveCommand(tire_id="T1", target="unassigned").target.is_unassigned
        assert MoveCommand(tire_id="T1", target="inventory").target.is_inventory
        assert MoveCommand(tire_id="T1", target=3).target == Position.at_slot(3)

    def test_zero_slot_is_inventory(self):
        """Test that the wire value 0 maps to Inventory, not a slot."""
        assert MoveCommand(tire_id="T1", target=0).target.is_inventory


class TestOutputModels:
    """Tests for output model serialization."""

    def test_unknown_projection_serializes_as_unknown(self):
        """Test that a missing projection is never written as zero."""
        state = WearState(min_depth=4.0, wear_percent=60.0)

        data = state.model_dump(mode="json")
        assert data["projected_remaining_distance"] == "unknown"
        assert data["projection_tier"] == "unknown"
        assert not state.has_projection

    def test_unknown_projection_parses_back_to_none(self):
        """Test that "unknown" and "-" read back as no projection."""
        for raw in ("unknown", "-"):
            state = WearState(min_depth=4.0, wear_percent=60.0, projected_remaining_distance=raw)
            assert state.projected_remaining_distance is None

    def test_projection_value_serialized(self):
        """Test that a known projection serializes as a number."""
        state = WearState(
            min_depth=3.0,
            wear_percent=75.0,
            projected_remaining_distance=44444.4,
            projection_tier=ProjectionTier.WEAR_RATE,
        )

        assert state.model_dump(mode="json")["projected_remaining_distance"] == pytest.approx(44444.4)

    def test_change_record_positions_use_wire_values(self):
        """Test that change records carry "0", null and slot strings."""
        record = ChangeRecord(
            tire_id="T1",
            brand="Michelin",
            original_position=Position.at_slot(2),
            new_position=Position.inventory(),
        )

        data = record.model_dump(mode="json")
        assert data["original_position"] == "2"
        assert data["new_position"] == "0"
