"""
FastAPI server for tire lifecycle analytics.

Provides REST API endpoints for wear analysis, fleet summaries and tire
position planning. Nothing is persisted: position plans are computed from
the roster sent with each request.
"""

import datetime
import logging
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from tirelife import __version__
from tirelife.analytics.units import normalize_tire
from tirelife.classify.classifier import ConditionClassifier
from tirelife.config import get_settings
from tirelife.errors import TireLifeError
from tirelife.export.changeset import change_set_document
from tirelife.fleet.summary import analyze_tires, summarize_fleet, tire_report
from tirelife.models.inputs import MoveCommand, Roster, Tire, Vehicle
from tirelife.models.outputs import FleetSummary, Status, TireReport, VehicleLayout
from tirelife.positions.engine import PositionEngine
from tirelife.positions.layout import derive_layout, layout_for_vehicle_type
from tirelife.sample import example_roster

logger = logging.getLogger(__name__)

settings = get_settings()

# Create FastAPI app
app = FastAPI(
    title="Tire Lifecycle API",
    description="""
    Wear, CPK and condition analytics for fleet tires, plus position
    planning with swap-with-displacement.

    Depths are reported in mm and distances in km.
    """,
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


class PlanRequest(BaseModel):
    """Request body for the position planning endpoint."""
    vehicle: Optional[Vehicle] = None
    tires: list[Tire] = Field(default_factory=list)
    moves: list[MoveCommand] = Field(default_factory=list)


class PlanResponse(BaseModel):
    """Result of applying moves to a vehicle roster."""
    positions: dict[str, Optional[str]]
    displaced: list[str]
    change_set: dict[str, Any]
    payload: dict[str, str]
    layout: VehicleLayout


def _classifier() -> ConditionClassifier:
    return ConditionClassifier(settings.thresholds(), settings.legal_min_depth_mm)


def _normalized(tires: list[Tire]) -> list[Tire]:
    preferences = settings.preferences()
    if preferences.is_metric:
        return tires
    return [normalize_tire(tire, preferences) for tire in tires]


@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Check if the API is running."""
    return HealthResponse(status="healthy", version=__version__)


@app.get("/example", response_model=Roster, tags=["Reference"])
async def get_example():
    """Get an example roster for one vehicle."""
    return example_roster()


@app.post("/wear", response_model=TireReport, tags=["Analytics"])
async def wear(tire: Tire):
    """
    Wear state and condition of a single tire.

    A tire without inspections is not an error: it comes back with
    wear_state null and status no_inspection.
    """
    try:
        return tire_report(_normalized([tire])[0], _classifier())
    except (TireLifeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/analyze", response_model=list[TireReport], tags=["Analytics"])
async def analyze(roster: Roster):
    """Wear state and condition of every tire in a roster."""
    try:
        return analyze_tires(_normalized(roster.tires), _classifier())
    except (TireLifeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/fleet/summary", response_model=FleetSummary, tags=["Analytics"])
async def fleet_summary(
    roster: Roster,
    reference_date: Optional[datetime.date] = Query(
        default=None,
        description="Date whose month is reported as current spend (default: today)",
    ),
    include_retired: bool = Query(default=False, description="Keep retired tires"),
):
    """
    Aggregate figures for a fleet: condition counts, spend, average CPK,
    tread remaining and tires that need immediate replacement.
    """
    try:
        return summarize_fleet(
            _normalized(roster.tires),
            reference_date or datetime.date.today(),
            classifier=_classifier(),
            include_retired=include_retired,
        )
    except (TireLifeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/positions/plan", response_model=PlanResponse, tags=["Positions"])
async def plan_positions(request: PlanRequest):
    """
    Apply moves to a vehicle roster and return the resulting plan.

    Moves are applied in order. A tire moved onto an occupied slot displaces
    that vehicle's occupant to unassigned. The change-set lists every tire
    whose position differs from the roster as sent.
    """
    try:
        engine = PositionEngine(request.tires, vehicle=request.vehicle)
        outcomes = engine.apply_commands(request.moves)
        payload = engine.persistence_payload()
        layout = engine.layout()
    except (TireLifeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return PlanResponse(
        positions={tid: pos.to_wire() for tid, pos in sorted(engine.positions.items())},
        displaced=[outcome.displaced for outcome in outcomes if outcome.displaced],
        change_set=change_set_document(request.vehicle, engine.change_set()),
        payload=payload,
        layout=layout,
    )


@app.get("/layout", response_model=VehicleLayout, tags=["Positions"])
async def layout(
    tires: int = Query(..., ge=0, description="Number of mounted tires"),
    vehicle_type: Optional[str] = Query(default=None, description="e.g. camion_3_ejes"),
):
    """Axle layout for a tire count."""
    if vehicle_type:
        return layout_for_vehicle_type(vehicle_type, tires)
    return derive_layout(tires)


@app.get("/statuses", tags=["Reference"])
async def list_statuses():
    """Get the condition buckets and the thresholds in effect."""
    thresholds = settings.thresholds()
    return {
        "statuses": [status.value for status in Status],
        "thresholds_mm": thresholds.model_dump(),
        "legal_min_depth_mm": settings.legal_min_depth_mm,
        "descriptions": {
            "optimal": f"Min depth above {thresholds.optimal_above:g} mm",
            "warn_60": f"Min depth above {thresholds.warn_60_above:g} mm",
            "warn_30": f"Min depth above {thresholds.warn_30_above:g} mm",
            "urgent": f"Min depth at or below {thresholds.warn_30_above:g} mm",
            "no_inspection": "Tire has never been inspected",
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)
