"""
Strict validation of planning workouts before upload.

Plan files are edited by hand, so every step is checked against the closed
key sets and numeric ranges before it is rebuilt into Garmin's format.
Checks run in a fixed order and the first violation stops that step.

Two entry points:
- validate_workout_or_raise: raise SchemaError on the first problem
- validate_workouts: collect every problem across every workout, so a user
  can fix a whole plan file in one pass

Validation runs on raw planning dicts rather than PlanStep models, since
the point is to catch wrong types (a string weight, a boolean rep count)
before pydantic would coerce or reject them.
"""

from typing import Any, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel

from domain.exceptions import SchemaError
from domain.models.codes import EndCondition, StepType, TargetType

VALID_STEP_TYPES: Tuple[str, ...] = tuple(member.value for member in StepType)
VALID_END_CONDITIONS: Tuple[str, ...] = tuple(member.value for member in EndCondition)
VALID_TARGET_TYPES: Tuple[str, ...] = tuple(member.value for member in TargetType)

MAX_WEIGHT_POUNDS = 1000
MAX_WEIGHT_PERCENTAGE = 200

# endCondition -> parallel field that must agree with endConditionValue
_PARALLEL_FIELDS = (
    (EndCondition.REPS.value, "reps"),
    (EndCondition.TIME.value, "durationSeconds"),
    (EndCondition.DISTANCE.value, "distanceMeters"),
)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _type_name(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _as_mapping(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True)
    return value


def _check_number(step: Mapping[str, Any], field: str, fail) -> Optional[float]:
    value = step.get(field)
    if value is None:
        return None
    if not _is_number(value):
        fail(f"Field '{field}' must be a number, got {_type_name(value)}")
    return value


def _check_string(step: Mapping[str, Any], field: str, fail) -> None:
    value = step.get(field)
    if value is not None and not isinstance(value, str):
        fail(f"Field '{field}' must be a string, got {_type_name(value)}")


def validate_step(step: Any, index: int, workout_name: Optional[str] = None) -> None:
    """
    Validate one planning step.

    Args:
        step: Planning step dict (camelCase keys) or PlanStep
        index: 1-based position of the step in its workout
        workout_name: Name used to prefix the error message

    Raises:
        SchemaError: On the first violated rule
    """

    def fail(detail: str) -> None:
        raise SchemaError(detail, workout_name=workout_name, step_index=index)

    step = _as_mapping(step)
    if not isinstance(step, Mapping):
        fail(f"Step must be an object, got {_type_name(step)}")

    step_type = step.get("stepType")
    if not step_type:
        fail("Missing required field 'stepType'")
    if step_type not in VALID_STEP_TYPES:
        fail(f"Invalid stepType '{step_type}'. Must be one of: {', '.join(VALID_STEP_TYPES)}")

    end_condition = step.get("endCondition")
    if not end_condition and step_type != StepType.REST.value:
        fail(f"Missing required field 'endCondition' for {step_type}")
    if end_condition and end_condition not in VALID_END_CONDITIONS:
        fail(
            f"Invalid endCondition '{end_condition}'. "
            f"Must be one of: {', '.join(VALID_END_CONDITIONS)}"
        )
    if end_condition and step.get("endConditionValue") is None:
        fail(
            f"Missing required field 'endConditionValue' when endCondition is '{end_condition}'"
        )
    end_condition_value = _check_number(step, "endConditionValue", fail)
    if end_condition_value is not None and end_condition_value <= 0:
        fail(f"Field 'endConditionValue' must be positive, got {end_condition_value}")

    target_type = step.get("targetType")
    if not target_type:
        fail("Missing required field 'targetType'")
    if target_type not in VALID_TARGET_TYPES:
        fail(f"Invalid targetType '{target_type}'. Must be one of: {', '.join(VALID_TARGET_TYPES)}")
    _check_number(step, "targetValueOne", fail)
    _check_number(step, "targetValueTwo", fail)
    _check_string(step, "exerciseName", fail)

    weight = _check_number(step, "weight", fail)
    if weight is not None:
        if weight < 0:
            fail(f"Field 'weight' cannot be negative, got {weight}")
        if weight > MAX_WEIGHT_POUNDS:
            fail(
                f"Field 'weight' seems unreasonably high ({weight} lbs). "
                "Check if value is correct."
            )

    percentage = _check_number(step, "weightPercentage", fail)
    if percentage is not None:
        if percentage <= 0 or percentage > MAX_WEIGHT_PERCENTAGE:
            fail(
                f"Field 'weightPercentage' must be between 0 and {MAX_WEIGHT_PERCENTAGE}, "
                f"got {percentage}"
            )
        if not step.get("benchmarkKey"):
            fail("Field 'benchmarkKey' is required when 'weightPercentage' is set")
        _check_string(step, "benchmarkKey", fail)

    for field in ("reps", "durationSeconds", "distanceMeters"):
        value = _check_number(step, field, fail)
        if value is not None and value <= 0:
            fail(f"Field '{field}' must be positive, got {value}")

    rest = _check_number(step, "restTimeSeconds", fail)
    if rest is not None and rest < 0:
        fail(f"Field 'restTimeSeconds' cannot be negative, got {rest}")

    repeats = _check_number(step, "numberOfRepeats", fail)
    if repeats is not None and repeats <= 0:
        fail(f"Field 'numberOfRepeats' must be positive, got {repeats}")
    if repeats is not None and not float(repeats).is_integer():
        fail(f"Field 'numberOfRepeats' must be a whole number, got {repeats}")

    for condition, field in _PARALLEL_FIELDS:
        value = step.get(field)
        if end_condition == condition and value is not None and value != end_condition_value:
            fail(
                f"Mismatch between '{field}' ({value}) and "
                f"'endConditionValue' ({end_condition_value})"
            )


def _check_header(workout: Any) -> Tuple[str, Sequence[Any]]:
    workout = _as_mapping(workout)
    if not isinstance(workout, Mapping):
        raise SchemaError("Invalid workout: expected an object")

    name = workout.get("workoutName")
    if not name or not isinstance(name, str):
        raise SchemaError("Invalid workout: Missing or invalid 'workoutName'")

    steps = workout.get("steps")
    if not isinstance(steps, list):
        raise SchemaError(f"Invalid workout '{name}': Missing or invalid 'steps' array")
    return name, steps


def validate_workout_or_raise(workout: Any) -> None:
    """
    Validate a planning workout, raising on the first problem.

    Raises:
        SchemaError: Message prefixed with the workout name and step index
    """
    name, steps = _check_header(workout)
    for index, step in enumerate(steps, start=1):
        validate_step(step, index, workout_name=name)


def validate_workout(workout: Any) -> List[str]:
    """
    Validate a planning workout, collecting one error per bad step.

    Returns:
        Error messages; empty when the workout is valid
    """
    try:
        name, steps = _check_header(workout)
    except SchemaError as exc:
        return [str(exc)]

    errors = []
    for index, step in enumerate(steps, start=1):
        try:
            validate_step(step, index, workout_name=name)
        except SchemaError as exc:
            errors.append(str(exc))
    return errors


def validate_workouts(workouts: Sequence[Any]) -> List[str]:
    """Validate a batch, prefixing each error with the 1-based workout position."""
    errors = []
    for position, workout in enumerate(workouts, start=1):
        errors.extend(f"Workout {position}: {error}" for error in validate_workout(workout))
    return errors


def validate_weekly_plan(plan: Any) -> None:
    """
    Check the outer shape of a weekly plan document.

    Raises:
        SchemaError: When week bounds or the workouts array are missing, or a
            workout has no name
    """
    plan = _as_mapping(plan)
    if (
        not isinstance(plan, Mapping)
        or not plan.get("weekStart")
        or not plan.get("weekEnd")
        or not isinstance(plan.get("workouts"), list)
    ):
        raise SchemaError("Invalid workout plan: missing weekStart, weekEnd, or workouts")

    for index, workout in enumerate(plan["workouts"]):
        if not isinstance(workout, Mapping) or not workout.get("workoutName"):
            raise SchemaError(f"Invalid workout plan: workout name missing at index {index}")
