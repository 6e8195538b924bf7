"""
Unit tests for domain/converters/units.py

Tests for:
- Garmin native weight (grams) to pounds
- Pass-through of weights already in pounds
- Pounds back to grams
"""

import pytest

from domain.converters.units import (
    GRAMS_PER_POUND,
    NATIVE_WEIGHT_UNIT,
    to_display_weight,
    to_native_weight,
    unit_key,
)
from domain.models import WeightUnit


@pytest.mark.unit
class TestToDisplayWeight:
    """Test grams -> pounds conversion."""

    def test_one_pound_in_grams(self):
        """Exactly one pound of grams converts to 1."""
        assert to_display_weight(453.59237) == 1

    def test_rounds_to_nearest_pound(self):
        """102261 g is about 225.45 lb and rounds to 225."""
        assert to_display_weight(102261) == 225

    @pytest.mark.parametrize("unit", [None, "pound", {"unitKey": "gram"}, {"unitKey": "kilogram"}])
    def test_zero_is_zero_for_any_unit(self, unit):
        """Zero never goes through division or rounding."""
        assert to_display_weight(0, unit) == 0

    def test_pound_unit_passes_through(self):
        """Values already in pounds are only rounded."""
        assert to_display_weight(100, {"unitKey": "pound"}) == 100

    def test_pound_unit_is_rounded(self):
        """Fractional pounds round half up."""
        assert to_display_weight(52.5, {"unitKey": "pound"}) == 53

    def test_pound_unit_as_model(self):
        """A parsed WeightUnit is recognized too."""
        assert to_display_weight(50, WeightUnit(unit_key="pound")) == 50

    def test_unknown_unit_treated_as_grams(self):
        """Anything but pound is treated as Garmin's native grams."""
        assert to_display_weight(45359.237, {"unitKey": "gram"}) == 100


@pytest.mark.unit
class TestToNativeWeight:
    """Test pounds -> grams conversion."""

    def test_225_pounds(self):
        """225 lb is 102058 g after rounding."""
        assert to_native_weight(225) == 102058

    def test_converts_back_to_same_pounds(self):
        """Whole pounds survive a trip to grams and back."""
        for pounds in (1, 45, 135, 225, 315, 500, 1000):
            assert to_display_weight(to_native_weight(pounds)) == pounds

    def test_zero(self):
        assert to_native_weight(0) == 0


@pytest.mark.unit
class TestNativeWeightUnit:
    """Test the native unit descriptor."""

    def test_descriptor(self):
        assert dict(NATIVE_WEIGHT_UNIT) == {"unitId": 11, "unitKey": "gram", "factor": 1.0}

    def test_descriptor_is_read_only(self):
        with pytest.raises(TypeError):
            NATIVE_WEIGHT_UNIT["unitKey"] = "pound"

    def test_constant(self):
        assert GRAMS_PER_POUND == 453.59237


@pytest.mark.unit
class TestUnitKey:
    """Test reading unit keys from the shapes Garmin data arrives in."""

    def test_none(self):
        assert unit_key(None) is None

    def test_string(self):
        assert unit_key("pound") == "pound"

    def test_dict(self):
        assert unit_key({"unitId": 9, "unitKey": "pound"}) == "pound"
