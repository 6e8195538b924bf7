"""Domain services: strict validation of planning workouts."""

from domain.services.step_validator import (
    validate_step,
    validate_weekly_plan,
    validate_workout,
    validate_workout_or_raise,
    validate_workouts,
)

__all__ = [
    "validate_step",
    "validate_workout",
    "validate_workout_or_raise",
    "validate_workouts",
    "validate_weekly_plan",
]
