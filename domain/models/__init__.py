"""
Domain models for Garmin workouts.

Two shapes of the same workout:
- wire: Garmin Connect's nested step tree (ExecutableStep / RepeatGroup)
- plan: the flat, human-editable planning format (PlanStep, PlannedWorkout)

plus the fixed lookup tables in ``codes`` that translate between them, and
the slim activity summaries used for weekly planning (``activity``).

Usage:
    >>> from domain.models import PlanStep, parse_wire_steps

    >>> wire = parse_wire_steps(workout["workoutSegments"][0]["workoutSteps"])
    >>> step = PlanStep(step_type="exercise", end_condition="reps", end_condition_value=10)
"""

from domain.models.activity import ActivitySummary, ExerciseSet, ExtractedActivities
from domain.models.codes import EndCondition, StepType, TargetType
from domain.models.plan import (
    PlannedWorkout,
    PlanStep,
    WeeklyWorkoutPlan,
    format_exercise_name,
)
from domain.models.wire import (
    EndConditionRef,
    ExecutableStep,
    RepeatGroup,
    StepTypeRef,
    TargetTypeRef,
    WeightUnit,
    WireStep,
    dump_wire_steps,
    parse_wire_steps,
)

__all__ = [
    # Lookup keys
    "StepType",
    "EndCondition",
    "TargetType",
    # Planning format
    "PlanStep",
    "PlannedWorkout",
    "WeeklyWorkoutPlan",
    "format_exercise_name",
    # Activity summaries
    "ActivitySummary",
    "ExerciseSet",
    "ExtractedActivities",
    # Wire format
    "WireStep",
    "ExecutableStep",
    "RepeatGroup",
    "StepTypeRef",
    "EndConditionRef",
    "TargetTypeRef",
    "WeightUnit",
    "parse_wire_steps",
    "dump_wire_steps",
]
