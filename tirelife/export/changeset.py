"""
Change-set export and persistence interfaces.

The engine only produces change records and a save payload. Rendering them
(PDF, spreadsheet) and saving them belong to external collaborators that
implement the protocols below.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Protocol, Sequence

from tirelife.models.inputs import Vehicle
from tirelife.models.outputs import ChangeRecord
from tirelife.positions.engine import PositionEngine

logger = logging.getLogger(__name__)


class ChangeSetExporter(Protocol):
    """Turns a change-set into a persisted or printable artifact."""

    def export(self, vehicle: Optional[Vehicle], records: Sequence[ChangeRecord]) -> Any:
        ...


class PositionStore(Protocol):
    """Saves a vehicle's slot -> tire id map. Returns True on success."""

    def save_positions(self, vehicle: Optional[Vehicle], payload: dict[str, str]) -> bool:
        ...


def change_set_document(
    vehicle: Optional[Vehicle],
    records: Sequence[ChangeRecord],
) -> dict[str, Any]:
    """JSON-ready document describing a change-set."""
    return {
        "vehicle": vehicle.model_dump(mode="json") if vehicle is not None else None,
        "change_count": len(records),
        "changes": [record.model_dump(mode="json") for record in records],
    }


class JsonChangeSetExporter:
    """Writes the change-set document to a JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def export(self, vehicle: Optional[Vehicle], records: Sequence[ChangeRecord]) -> Path:
        document = change_set_document(vehicle, records)
        with open(self.path, "w") as f:
            f.write(json.dumps(document, indent=2))
        return self.path


class JsonFilePositionStore:
    """Position store that writes the save payload to a JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def save_positions(self, vehicle: Optional[Vehicle], payload: dict[str, str]) -> bool:
        document = {
            "plate": vehicle.plate if vehicle is not None else None,
            "updates": payload,
        }
        with open(self.path, "w") as f:
            f.write(json.dumps(document, indent=2))
        return True


def commit_with(engine: PositionEngine, store: PositionStore) -> bool:
    """
    Save the engine's positions and advance its snapshot on success.

    A falsy result from the store leaves the engine untouched, so the call
    can be retried. Exceptions raised by the store propagate, also leaving
    the engine untouched.

    Returns:
        True if the positions were saved and committed
    """
    payload = engine.persistence_payload()
    saved = store.save_positions(engine.vehicle, payload)
    if not saved:
        logger.warning("Position save was rejected; keeping %d pending changes", len(engine.change_set()))
        return False
    engine.commit()
    return True
