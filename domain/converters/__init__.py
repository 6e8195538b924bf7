"""
Domain converters from Garmin's formats to the planning formats and back.

- flatten_and_merge: wire step tree -> flat planning steps (export)
- rebuild_steps: flat planning steps -> wire step tree (upload)
- workout_from_wire / workout_to_wire: the same at workout level
- to_display_weight / to_native_weight: grams <-> pounds
- transform_activity: Garmin activity -> slim ActivitySummary

All converters are pure functions with no side effects.

Examples:
    >>> from domain.converters import flatten_and_merge, rebuild_steps

    >>> plan_steps = flatten_and_merge(garmin_workout["workoutSegments"][0]["workoutSteps"])
    >>> wire_steps = rebuild_steps(plan_steps)
"""

from domain.converters.activities import transform_activities, transform_activity
from domain.converters.plan_to_wire import rebuild_steps
from domain.converters.units import to_display_weight, to_native_weight
from domain.converters.wire_to_plan import (
    flatten_and_merge,
    flatten_steps,
    merge_rest_steps,
    normalize_step,
)
from domain.converters.workouts import workout_from_wire, workout_to_wire

__all__ = [
    "normalize_step",
    "flatten_steps",
    "merge_rest_steps",
    "flatten_and_merge",
    "rebuild_steps",
    "to_display_weight",
    "to_native_weight",
    "workout_from_wire",
    "workout_to_wire",
    "transform_activity",
    "transform_activities",
]
