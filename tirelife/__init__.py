"""
Tire Lifecycle Analytics (tirelife)

Turns tire inspection readings into wear percentages, CPK figures,
remaining-life projections and traffic-light conditions, and plans tire
moves between vehicle slots and the inventory pool with an auditable
change-set.

Usage:
    python -m tirelife make-example
    python -m tirelife analyze --input example_roster.json --readable
    python -m tirelife summary --input example_roster.json --date 2024-06-30
    python -m tirelife reassign --input example_roster.json --moves moves.json
    python -m tirelife serve --port 8000
"""

__version__ = "0.1.0"

from tirelife.analytics.wear import compute_wear_state, project_remaining_distance, wear_percent
from tirelife.classify.classifier import ConditionClassifier, ConditionThresholds, classify
from tirelife.errors import InvalidInitialDepth, NoInspectionData, TireLifeError, UnknownTire
from tirelife.models.inputs import Inspection, MoveCommand, Position, Roster, Tire, Vehicle
from tirelife.models.outputs import ChangeRecord, Status, WearState
from tirelife.positions.engine import PositionEngine

__all__ = [
    "compute_wear_state",
    "project_remaining_distance",
    "wear_percent",
    "ConditionClassifier",
    "ConditionThresholds",
    "classify",
    "InvalidInitialDepth",
    "NoInspectionData",
    "TireLifeError",
    "UnknownTire",
    "Inspection",
    "MoveCommand",
    "Position",
    "Roster",
    "Tire",
    "Vehicle",
    "ChangeRecord",
    "Status",
    "WearState",
    "PositionEngine",
]
