"""
Weight conversion between Garmin's native unit and pounds.

Garmin stores ``weightValue`` in grams unless the step's ``weightUnit`` says
pounds. Planning files always use whole pounds.
"""

import math
from types import MappingProxyType
from typing import Any, Mapping, Optional

GRAMS_PER_POUND = 453.59237
POUND_UNIT_KEY = "pound"
PERCENT_UNIT_KEY = "percent"

# Unit descriptor attached to every weight we send back to Garmin.
NATIVE_WEIGHT_UNIT: Mapping[str, Any] = MappingProxyType(
    {"unitId": 11, "unitKey": "gram", "factor": 1.0}
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3), unlike round()."""
    return int(math.floor(value + 0.5))


def unit_key(unit: Any) -> Optional[str]:
    """Read the unit key from a string, a camelCase dict or a WeightUnit model."""
    if unit is None:
        return None
    if isinstance(unit, str):
        return unit
    if isinstance(unit, Mapping):
        return unit.get("unitKey")
    return getattr(unit, "unit_key", None)


def to_display_weight(value: float, unit: Any = None) -> int:
    """
    Convert a Garmin weight to whole pounds.

    Args:
        value: Garmin ``weightValue``
        unit: Garmin ``weightUnit``; values already in pounds are only rounded

    Returns:
        Weight in pounds, rounded to the nearest integer. Zero stays zero.
    """
    if value == 0:
        return 0
    if unit_key(unit) == POUND_UNIT_KEY:
        return round_half_up(value)
    return round_half_up(value / GRAMS_PER_POUND)


def to_native_weight(display_value: float) -> int:
    """Convert pounds to Garmin's native grams, rounded to the nearest integer."""
    return round_half_up(display_value * GRAMS_PER_POUND)
