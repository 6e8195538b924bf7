"""
Planning format: the flat, human-editable shape of a workout.

A planning workout lists its steps in execution order with no nesting.
Repeat groups are expressed by ``numberOfRepeats`` on each member step and
rest steps that follow an exercise are folded into ``restTimeSeconds``.
Weights are in pounds.

These models are what gets written to (and read back from) plan files, so
they dump with camelCase aliases and skip unset fields.

Usage:
    >>> step = PlanStep(
    ...     step_type="exercise",
    ...     exercise_name="BARBELL_BENCH_PRESS",
    ...     end_condition="reps",
    ...     end_condition_value=8,
    ...     reps=8,
    ...     weight=225,
    ...     rest_time_seconds=90,
    ... )
    >>> step.to_plan_dict()["restTimeSeconds"]
    90
"""

from datetime import date
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Number = Union[int, float]


def _iso_date(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    return value


class PlanModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_plan_dict(self) -> Dict[str, Any]:
        """Dump to planning JSON (camelCase keys, unset fields omitted)."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class PlanStep(PlanModel):
    """One flat step in a planning workout."""

    step_type: str = Field(default="exercise", description="Planning step type key")
    exercise_name: Optional[str] = Field(
        default=None, description="Garmin exercise key, e.g. BARBELL_BENCH_PRESS"
    )
    target_type: Optional[str] = None
    target_value_one: Optional[Number] = None
    target_value_two: Optional[Number] = None
    end_condition: Optional[str] = None
    end_condition_value: Optional[Number] = None
    weight: Optional[Number] = Field(default=None, description="Weight in pounds")
    weight_percentage: Optional[Number] = Field(
        default=None, description="Percentage of a benchmark (e.g. 1RM)"
    )
    benchmark_key: Optional[str] = None
    step_order: Optional[int] = Field(default=None, description="1-based position after flattening")
    reps: Optional[Number] = None
    duration_seconds: Optional[Number] = None
    distance_meters: Optional[Number] = None
    rest_time_seconds: Optional[Number] = Field(
        default=None, description="Rest folded in from the following rest step"
    )
    number_of_repeats: Optional[int] = Field(
        default=None, description="Iterations of the enclosing repeat group"
    )


class PlannedWorkout(PlanModel):
    """A workout in planning format."""

    workout_id: Optional[Union[int, str]] = None
    workout_name: str
    workout_type: Optional[str] = Field(default=None, description="Sport type key, e.g. strength_training")
    description: Optional[str] = None
    distance_meters: Optional[Number] = None
    scheduled_date: Optional[str] = Field(default=None, description="YYYY-MM-DD")
    steps: Optional[List[PlanStep]] = None
    total_reps: Optional[Number] = None
    estimated_duration_seconds: Optional[Number] = None

    @field_validator("scheduled_date", mode="before")
    @classmethod
    def date_to_iso(cls, v: Any) -> Any:
        """YAML plan files may carry unquoted dates."""
        return _iso_date(v)


class WeeklyWorkoutPlan(PlanModel):
    """A week of workouts, as produced by the template and copy commands."""

    generated_at: Optional[str] = None
    week_start: str
    week_end: str
    source: Optional[str] = None
    workouts: List[PlannedWorkout] = Field(default_factory=list)

    @field_validator("generated_at", "week_start", "week_end", mode="before")
    @classmethod
    def dates_to_iso(cls, v: Any) -> Any:
        return _iso_date(v)


def format_exercise_name(exercise_name: Optional[str]) -> str:
    """
    Turn a Garmin exercise key into a readable name.

    Examples:
        >>> format_exercise_name("BARBELL_BENCH_PRESS")
        'Barbell Bench Press'
        >>> format_exercise_name(None)
        'Unknown Exercise'
    """
    if not exercise_name:
        return "Unknown Exercise"
    return " ".join(word.capitalize() for word in exercise_name.split("_"))
