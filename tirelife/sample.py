"""
Example roster used by `tirelife make-example` and the API's /example.
"""

from datetime import date

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


def _tire(
    tire_id: str,
    brand: str,
    axle: str,
    position: Position,
    depths: tuple[float, float, float],
    traveled_km: float,
    cost: float,
    stage: LifeStage = LifeStage.NEW,
) -> Tire:
    inner, center, outer = depths
    return Tire(
        id=tire_id,
        brand=brand,
        axle=axle,
        initial_depth=16.0,
        traveled_distance=traveled_km,
        cost_history=[CostEntry(amount=cost, date=date(2024, 1, 15))],
        life_history=[LifeEntry(stage=stage, date=date(2024, 1, 15))],
        inspection_history=[
            Inspection(
                depth_inner=inner,
                depth_center=center,
                depth_outer=outer,
                date=date(2024, 6, 1),
            )
        ],
        position=position,
        vehicle_id="VH-001",
    )


def example_roster() -> Roster:
    """A six-slot truck with one spare in inventory and one new tire."""
    tires = [
        _tire("T-001", "Michelin", "steer", Position.at_slot(1), (9.5, 9.0, 9.2), 32000, 1_450_000),
        _tire("T-002", "Michelin", "steer", Position.at_slot(2), (7.0, 6.8, 7.1), 32000, 1_450_000),
        _tire("T-003", "Bridgestone", "drive", Position.at_slot(3), (5.5, 5.0, 5.8), 48000, 1_200_000),
        _tire("T-004", "Bridgestone", "drive", Position.at_slot(4), (4.2, 3.9, 4.4), 48000, 1_200_000),
        _tire("T-005", "Continental", "drive", Position.at_slot(5), (2.8, 2.5, 3.0), 61000, 650_000,
              stage=LifeStage.RETREAD1),
        _tire("T-006", "Continental", "drive", Position.at_slot(6), (1.9, 2.2, 2.4), 64000, 650_000,
              stage=LifeStage.RETREAD1),
        _tire("T-007", "Goodyear", "drive", Position.inventory(), (12.0, 12.0, 12.0), 15000, 1_300_000),
    ]
    tires.append(Tire(
        id="T-008",
        brand="Goodyear",
        initial_depth=16.0,
        cost_history=[CostEntry(amount=1_350_000, date=date(2024, 5, 20))],
        life_history=[LifeEntry(stage=LifeStage.NEW, date=date(2024, 5, 20))],
    ))
    return Roster(
        vehicle=Vehicle(id="VH-001", plate="ABC123", vehicle_type="camion_2_ejes"),
        tires=tires,
    )
