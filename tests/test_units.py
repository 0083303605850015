"""
Tests for unit conversions and input normalization.
"""

import pytest

from tirelife.analytics.units import (
    DepthUnit,
    DistanceUnit,
    Preferences,
    cost_per_distance_to_per_km,
    depth_to_mm,
    distance_to_km,
    km_to,
    mm_to,
    normalize_tire,
)


class TestConversions:
    """Tests for pint-backed conversions."""

    def test_thirty_seconds_to_mm(self):
        """Test that 32/32 in is 25.4 mm."""
        assert depth_to_mm(32.0, DepthUnit.THIRTY_SECOND_INCH) == pytest.approx(25.4)

    def test_mm_to_thirty_seconds(self):
        """Test the reverse depth conversion."""
        assert mm_to(25.4, DepthUnit.THIRTY_SECOND_INCH) == pytest.approx(32.0)

    def test_mm_is_identity(self):
        """Test that millimetres pass through unchanged."""
        assert depth_to_mm(7.5, DepthUnit.MILLIMETER) == pytest.approx(7.5)

    def test_miles_to_km(self):
        """Test distance conversion."""
        assert distance_to_km(100.0, DistanceUnit.MILE) == pytest.approx(160.9344)
        assert km_to(160.9344, DistanceUnit.MILE) == pytest.approx(100.0)

    def test_cost_per_mile_to_per_km(self):
        """Test that cost per mile becomes a smaller cost per km."""
        assert cost_per_distance_to_per_km(1.609344, DistanceUnit.MILE) == pytest.approx(1.0)


class TestPreferences:
    """Tests for Preferences and normalize_tire."""

    def test_default_is_metric(self):
        """Test default preferences."""
        assert Preferences().is_metric

    def test_metric_tire_returned_unchanged(self, tire_factory):
        """Test that metric preferences do not copy the tire."""
        tire = tire_factory("T1", depths=(8, 8, 8))

        assert normalize_tire(tire, Preferences()) is tire

    def test_imperial_tire_normalized(self, tire_factory):
        """Test converting depths, distances and CPK to mm and km."""
        tire = tire_factory(
            "T1",
            depths=(16, 12, 8),
            initial_depth=32.0,
            traveled_distance=1000.0,
            cpk=1.609344,
            km_projected=500.0,
        )
        preferences = Preferences(
            depth_unit=DepthUnit.THIRTY_SECOND_INCH,
            distance_unit=DistanceUnit.MILE,
        )

        normalized = normalize_tire(tire, preferences)

        inspection = normalized.last_inspection
        assert normalized.initial_depth == pytest.approx(25.4)
        assert normalized.traveled_distance == pytest.approx(1609.344)
        assert inspection.depth_inner == pytest.approx(12.7)
        assert inspection.min_depth == pytest.approx(6.35)
        assert inspection.cpk == pytest.approx(1.0)
        assert inspection.km_projected == pytest.approx(804.672)
        # Original is left as recorded
        assert tire.initial_depth == 32.0
