"""
Converter: Garmin wire steps to flat planning steps.

Export direction. A fetched step tree is flattened depth-first, every leaf
is normalized to a PlanStep, and each rest step that directly follows
another step is folded into that step's ``restTimeSeconds``. Steps are then
renumbered 1..N.

All functions return new objects and leave their input untouched.
"""

import logging
from typing import Any, Iterable, List, Sequence, Union

from domain.converters.units import PERCENT_UNIT_KEY, to_display_weight, unit_key
from domain.models.codes import (
    DEFAULT_STEP_TYPE,
    END_CONDITION_KEYS,
    STEP_TYPE_KEYS,
    TARGET_TYPE_KEYS,
    EndCondition,
    StepType,
    TargetType,
    decode_key,
)
from domain.models.plan import PlanStep
from domain.models.wire import ExecutableStep, RepeatGroup, parse_wire_steps

logger = logging.getLogger(__name__)

# endCondition -> planning field mirroring endConditionValue
PARALLEL_FIELDS = {
    EndCondition.REPS.value: "reps",
    EndCondition.TIME.value: "duration_seconds",
    EndCondition.DISTANCE.value: "distance_meters",
}


def normalize_step(step: ExecutableStep) -> PlanStep:
    """
    Convert a single wire leaf to a planning step.

    Target values are kept when non-zero, or when the target type is a real
    target (zero can be a meaningful zone bound). Percent-based weights are
    read from ``weightValue`` when the display unit is ``percent``, otherwise
    from ``benchmarkPercentage``.

    Args:
        step: Wire leaf step

    Returns:
        PlanStep carrying the wire ``stepOrder`` (renumbered later by the merger)
    """
    fields = {
        "step_type": decode_key(
            step.step_type.step_type_key if step.step_type else None,
            step.step_type.step_type_id if step.step_type else None,
            STEP_TYPE_KEYS,
        )
        or DEFAULT_STEP_TYPE,
        "step_order": step.step_order,
    }

    if step.exercise_name:
        fields["exercise_name"] = step.exercise_name

    target_type = None
    if step.target_type:
        target_type = decode_key(
            step.target_type.workout_target_type_key,
            step.target_type.workout_target_type_id,
            TARGET_TYPE_KEYS,
        )
    fields["target_type"] = target_type

    meaningful_target = target_type is not None and target_type != TargetType.NO_TARGET.value
    for name in ("target_value_one", "target_value_two"):
        value = getattr(step, name)
        if value is not None and (value != 0 or meaningful_target):
            fields[name] = value

    end_condition = None
    if step.end_condition:
        end_condition = decode_key(
            step.end_condition.condition_type_key,
            step.end_condition.condition_type_id,
            END_CONDITION_KEYS,
        )
    fields["end_condition"] = end_condition

    if step.end_condition_value is not None:
        fields["end_condition_value"] = step.end_condition_value
        parallel = PARALLEL_FIELDS.get(end_condition or "")
        if parallel:
            fields[parallel] = step.end_condition_value

    if step.weight_value is not None:
        fields["weight"] = to_display_weight(step.weight_value, step.weight_unit)

    percentage = None
    if unit_key(step.weight_display_unit) == PERCENT_UNIT_KEY and step.weight_value is not None:
        percentage = step.weight_value
    elif step.benchmark_percentage is not None:
        percentage = step.benchmark_percentage
    if percentage is not None:
        fields["weight_percentage"] = percentage
        if step.benchmark_key:
            fields["benchmark_key"] = step.benchmark_key

    return PlanStep(**fields)


def flatten_steps(steps: Iterable[Union[ExecutableStep, RepeatGroup]]) -> List[PlanStep]:
    """
    Flatten a wire step tree depth-first into planning steps.

    Every step produced from inside a repeat group carries the group's
    ``numberOfIterations`` as ``numberOfRepeats``. For nested groups the
    outermost group's count wins.
    """
    flattened: List[PlanStep] = []
    for step in steps:
        if isinstance(step, RepeatGroup):
            repeats = step.number_of_iterations
            for nested in flatten_steps(step.workout_steps):
                flattened.append(nested.model_copy(update={"number_of_repeats": repeats}))
        else:
            flattened.append(normalize_step(step))
    return flattened


def _rest_seconds(rest_step: PlanStep):
    if rest_step.duration_seconds is not None:
        return rest_step.duration_seconds
    return rest_step.end_condition_value


def merge_rest_steps(steps: Sequence[PlanStep]) -> List[PlanStep]:
    """
    Fold each rest step into the step immediately before it.

    Only the first of several consecutive rest steps is merged; the next one
    stays as its own step. The result is renumbered so ``stepOrder`` runs 1..N.
    """
    merged: List[PlanStep] = []
    index = 0
    while index < len(steps):
        current = steps[index]
        following = steps[index + 1] if index + 1 < len(steps) else None

        if following is not None and following.step_type == StepType.REST.value:
            rest = _rest_seconds(following)
            if rest is not None:
                current = current.model_copy(update={"rest_time_seconds": rest})
            merged.append(current)
            index += 2
        else:
            merged.append(current)
            index += 1

    return [
        step.model_copy(update={"step_order": position})
        for position, step in enumerate(merged, start=1)
    ]


def flatten_and_merge(wire_steps: Iterable[Any]) -> List[PlanStep]:
    """
    Full export transform: parse, flatten, merge rest and renumber.

    Args:
        wire_steps: Garmin ``workoutSteps`` as raw dicts or wire models

    Returns:
        Planning steps numbered 1..N
    """
    parsed = parse_wire_steps(wire_steps)
    flat = flatten_steps(parsed)
    merged = merge_rest_steps(flat)
    logger.debug(f"Flattened {len(flat)} wire steps into {len(merged)} planning steps")
    return merged
