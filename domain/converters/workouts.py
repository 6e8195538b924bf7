"""
Converter: whole Garmin workouts to and from planning workouts.

Wraps the step-level converters with the workout envelope: name, sport
type, description and segments.
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from domain.converters.plan_to_wire import rebuild_steps
from domain.converters.wire_to_plan import flatten_steps, merge_rest_steps
from domain.models.codes import sport_type
from domain.models.plan import PlannedWorkout, PlanStep
from domain.models.wire import dump_wire_steps, parse_wire_steps

UNNAMED_WORKOUT = "Unnamed Workout"


def _segment_steps(raw: Mapping[str, Any]) -> List[PlanStep]:
    steps: List[PlanStep] = []
    segments = raw.get("workoutSegments")
    if not isinstance(segments, list):
        return steps
    for segment in segments:
        wire_steps = segment.get("workoutSteps") if isinstance(segment, Mapping) else None
        if isinstance(wire_steps, list):
            # each segment is numbered from 1
            steps.extend(merge_rest_steps(flatten_steps(parse_wire_steps(wire_steps))))
    return steps


def _total_reps(steps: List[PlanStep]) -> Optional[Union[int, float]]:
    total = sum(step.reps * (step.number_of_repeats or 1) for step in steps if step.reps)
    return total or None


def workout_from_wire(raw: Mapping[str, Any]) -> PlannedWorkout:
    """
    Convert a Garmin workout (summary or full detail) to planning format.

    Summaries carry no segments, so their ``steps`` stay unset.
    """
    steps = _segment_steps(raw)
    sport = raw.get("sportType") or {}
    return PlannedWorkout(
        workout_id=raw.get("workoutId"),
        workout_name=raw.get("workoutName") or UNNAMED_WORKOUT,
        workout_type=sport.get("sportTypeKey"),
        description=raw.get("description"),
        steps=steps or None,
        total_reps=_total_reps(steps),
        estimated_duration_seconds=raw.get("estimatedDurationInSecs") or None,
    )


def _wire_workout_id(workout_id: Optional[Union[int, str]]) -> Optional[int]:
    if workout_id is None:
        return None
    try:
        return int(workout_id)
    except (TypeError, ValueError):
        return None


def workout_to_wire(workout: PlannedWorkout) -> Dict[str, Any]:
    """
    Build the Garmin create-workout payload for a planning workout.

    All steps go into a single segment.
    """
    sport = sport_type(workout.workout_type)
    return {
        "workoutId": _wire_workout_id(workout.workout_id),
        "workoutName": workout.workout_name,
        "description": workout.description,
        "sportType": sport,
        "estimatedDurationInSecs": workout.estimated_duration_seconds or 0,
        "workoutSegments": [
            {
                "segmentOrder": 1,
                "sportType": dict(sport),
                "workoutSteps": dump_wire_steps(rebuild_steps(workout.steps or [])),
            }
        ],
    }
