"""
Traffic-light condition classifier.

Maps the minimum tread depth of a tire's last inspection to one of five
buckets:
- optimal:        min depth above 7 mm
- warn_60:        above 6 mm (replace within ~60 days)
- warn_30:        above 3 mm (replace within ~30 days)
- urgent:         3 mm or less
- no_inspection:  the tire has never been inspected
"""

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from tirelife.analytics.wear import LEGAL_MIN_DEPTH_MM, wear_state_or_none
from tirelife.models.inputs import Tire
from tirelife.models.outputs import Status, WearState


class ConditionThresholds(BaseModel):
    """
    Lower bounds (exclusive, mm) for each non-urgent bucket.

    Must be strictly decreasing from optimal to warn_30.
    """
    optimal_above: float = Field(default=7.0, ge=0)
    warn_60_above: float = Field(default=6.0, ge=0)
    warn_30_above: float = Field(default=3.0, ge=0)

    @model_validator(mode="after")
    def check_order(self) -> "ConditionThresholds":
        if not (self.optimal_above > self.warn_60_above > self.warn_30_above):
            raise ValueError(
                "Thresholds must satisfy optimal_above > warn_60_above > warn_30_above"
            )
        return self


DEFAULT_THRESHOLDS = ConditionThresholds()


def classify(
    wear_state: Optional[WearState],
    thresholds: ConditionThresholds = DEFAULT_THRESHOLDS,
) -> Status:
    """
    Classify a wear state.

    Args:
        wear_state: Current wear state, or None when the tire has no inspections
        thresholds: Bucket boundaries

    Returns:
        The condition bucket; never raises
    """
    if wear_state is None:
        return Status.NO_INSPECTION

    depth = wear_state.min_depth
    if depth > thresholds.optimal_above:
        return Status.OPTIMAL
    if depth > thresholds.warn_60_above:
        return Status.WARN_60
    if depth > thresholds.warn_30_above:
        return Status.WARN_30
    return Status.URGENT


class ConditionClassifier:
    """
    Classifies tires with a fixed threshold set.

    Thresholds and the legal minimum depth are injected once so callers
    never need to pass them around per tire.
    """

    def __init__(
        self,
        thresholds: ConditionThresholds = DEFAULT_THRESHOLDS,
        legal_min_depth: float = LEGAL_MIN_DEPTH_MM,
    ):
        self.thresholds = thresholds
        self.legal_min_depth = legal_min_depth

    def classify(self, wear_state: Optional[WearState]) -> Status:
        return classify(wear_state, self.thresholds)

    def classify_tire(self, tire: Tire) -> Status:
        """Classify a tire straight from its inspection history."""
        return self.classify(wear_state_or_none(tire, self.legal_min_depth))
