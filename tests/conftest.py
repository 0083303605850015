"""
Pytest configuration and shared fixtures.
"""

from datetime import date

import pytest

from tirelife.models.inputs import (
    CostEntry,
    Inspection,
    LifeEntry,
    LifeStage,
    Position,
    Roster,
    Tire,
    Vehicle,
)
from tirelife.positions.engine import PositionEngine
from tirelife.sample import example_roster


def make_tire(
    tire_id: str,
    position: Position = None,
    depths=None,
    initial_depth: float = 12.0,
    traveled_distance: float = 0.0,
    cost: float = 0.0,
    brand: str = "Michelin",
    axle: str = None,
    stage: LifeStage = LifeStage.NEW,
    vehicle_id: str = "VH-1",
    **inspection_fields,
) -> Tire:
    """Build a tire with at most one inspection."""
    inspections = []
    if depths is not None:
        inner, center, outer = depths
        inspections.append(Inspection(
            depth_inner=inner,
            depth_center=center,
            depth_outer=outer,
            date=date(2024, 6, 1),
            **inspection_fields,
        ))
    return Tire(
        id=tire_id,
        brand=brand,
        axle=axle,
        initial_depth=initial_depth,
        traveled_distance=traveled_distance,
        cost_history=[CostEntry(amount=cost, date=date(2024, 6, 10))] if cost else [],
        life_history=[LifeEntry(stage=stage, date=date(2024, 1, 1))],
        inspection_history=inspections,
        position=position or Position.unassigned(),
        vehicle_id=vehicle_id,
    )


@pytest.fixture
def tire_factory():
    """Provide the make_tire helper to tests."""
    return make_tire


@pytest.fixture
def vehicle() -> Vehicle:
    """Provide a two-axle truck."""
    return Vehicle(id="VH-1", plate="XYZ789", vehicle_type="camion_2_ejes")


@pytest.fixture
def mounted_tires() -> list[Tire]:
    """Four mounted tires, one spare in inventory and one unassigned."""
    return [
        make_tire("T1", Position.at_slot(1), brand="Michelin"),
        make_tire("T2", Position.at_slot(2), brand="Michelin"),
        make_tire("T3", Position.at_slot(3), brand="Bridgestone"),
        make_tire("T4", Position.at_slot(4), brand="Bridgestone"),
        make_tire("T5", Position.inventory(), brand="Goodyear"),
        make_tire("T6", Position.unassigned(), brand="Goodyear"),
    ]


@pytest.fixture
def engine(mounted_tires, vehicle) -> PositionEngine:
    """Provide a position engine loaded with mounted_tires."""
    return PositionEngine(mounted_tires, vehicle=vehicle)


@pytest.fixture
def sample_roster() -> Roster:
    """Provide the example roster shipped with the CLI."""
    return example_roster()
