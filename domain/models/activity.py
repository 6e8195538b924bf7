"""
Slim activity summaries for weekly planning.

A Garmin activity carries hundreds of fields. The summary keeps the ones
that matter when planning next week: duration, heart rate, training
effect, self evaluation, and per-exercise or per-lap breakdowns.
Distances are in kilometers and paces in minutes per kilometer.

Usage:
    >>> summary = ActivitySummary(
    ...     id=21045,
    ...     activity_name="Morning Run",
    ...     activity_type="running",
    ...     duration=2400,
    ...     distance=8.0,
    ... )
    >>> summary.to_plan_dict()["activityName"]
    'Morning Run'
"""

from typing import List, Optional, Union

from pydantic import ConfigDict, Field

from domain.models.plan import Number, PlanModel

ACTIVITY_TYPES = ("running", "strength_training", "cycling", "swimming", "other")


class ExerciseSet(PlanModel):
    """
    One line of an activity breakdown.

    Strength sessions produce one entry per exercise (main lifts are split
    into warmup, top and backoff sets). Runs produce one entry per interval
    or lap, with the interval stats filled in.
    """

    exercise_name: str
    category: str
    sets: Number = 0
    reps: Number = Field(default=0, description="Reps per set")
    weight: Optional[Number] = Field(default=None, description="Pounds")
    volume: Optional[Number] = Field(default=None, description="sets x reps x weight")
    duration: Optional[Number] = Field(default=None, description="Seconds")
    distance: Optional[Number] = Field(default=None, description="Kilometers")
    pace: Optional[Number] = Field(default=None, description="Minutes per kilometer")
    avg_hr: Optional[Number] = Field(default=None, alias="avgHR")
    max_hr: Optional[Number] = Field(default=None, alias="maxHR")
    split_type: Optional[str] = None


class ActivitySummary(PlanModel):
    """
    Planning view of one Garmin activity.

    Extra keys are kept, so an already summarized activity read back from
    an activities file passes through unchanged.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[Union[int, str]] = None
    activity_name: str = "Unknown Activity"
    activity_type: str = Field(default="other", description="One of ACTIVITY_TYPES")
    start_time: Optional[str] = None
    duration: Number = Field(default=0, description="Seconds")
    distance: Optional[Number] = Field(default=None, description="Kilometers")

    avg_hr: Optional[Number] = Field(default=None, alias="avgHR")
    max_hr: Optional[Number] = Field(default=None, alias="maxHR")
    avg_pace: Optional[Number] = Field(default=None, description="Minutes per kilometer")

    aerobic_training_effect: Optional[Number] = None
    anaerobic_training_effect: Optional[Number] = None
    training_effect_label: Optional[str] = None

    self_evaluation_feeling: Optional[Number] = None
    direct_workout_feel: Optional[Number] = None
    direct_workout_rpe: Optional[Number] = None

    difference_body_battery: Optional[Number] = None
    moderate_intensity_minutes: Optional[Number] = None
    vigorous_intensity_minutes: Optional[Number] = None

    avg_cadence: Optional[Number] = None
    elevation_gain: Optional[Number] = None

    total_sets: Optional[Number] = None
    total_reps: Optional[Number] = None
    exercise_sets: Optional[List[ExerciseSet]] = None


class ExtractedActivities(PlanModel):
    """Document written by export-activities."""

    extracted_at: str
    week_start: str
    week_end: str
    total_activities: int
    activities: List[ActivitySummary] = Field(default_factory=list)
