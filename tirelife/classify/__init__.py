"""
Condition classification of tires into traffic-light buckets.
"""

from tirelife.classify.classifier import (
    DEFAULT_THRESHOLDS,
    ConditionClassifier,
    ConditionThresholds,
    classify,
)

__all__ = ["DEFAULT_THRESHOLDS", "ConditionClassifier", "ConditionThresholds", "classify"]
