"""
Converter: flat planning steps back to Garmin wire steps.

Upload direction, the inverse of ``flatten_and_merge``. Contiguous runs of
steps sharing a ``numberOfRepeats`` become one repeat group (when the count
is above 1), and every ``restTimeSeconds`` is expanded back into an explicit
rest step.

Unknown step type, end condition or target keys are encoded with the
default id for their table instead of raising, so a partially validated
plan file still rebuilds.
"""

from itertools import groupby
from typing import Any, Iterable, List, Union

from domain.converters.units import NATIVE_WEIGHT_UNIT, to_native_weight
from domain.models.codes import (
    DEFAULT_TARGET_TYPE,
    EndCondition,
    StepType,
    end_condition_id,
    step_type_id,
    target_type_id,
    to_wire_key,
)
from domain.models.plan import PlanStep
from domain.models.wire import (
    EndConditionRef,
    ExecutableStep,
    RepeatGroup,
    StepTypeRef,
    TargetTypeRef,
    WeightUnit,
)

WireNode = Union[ExecutableStep, RepeatGroup]


def _target_ref(target_type: str) -> TargetTypeRef:
    return TargetTypeRef(
        workout_target_type_id=target_type_id(target_type),
        workout_target_type_key=to_wire_key(target_type),
    )


def build_leaf(step: PlanStep) -> ExecutableStep:
    """Encode one planning step as a wire leaf (without its rest)."""
    end_condition = None
    if step.end_condition:
        end_condition = EndConditionRef(
            condition_type_id=end_condition_id(step.end_condition),
            condition_type_key=to_wire_key(step.end_condition),
        )

    weight_value = None
    weight_unit = None
    if step.weight is not None:
        weight_value = to_native_weight(step.weight)
        weight_unit = WeightUnit.model_validate(dict(NATIVE_WEIGHT_UNIT))

    return ExecutableStep(
        step_type=StepTypeRef(
            step_type_id=step_type_id(step.step_type),
            step_type_key=to_wire_key(step.step_type),
        ),
        end_condition=end_condition,
        end_condition_value=step.end_condition_value,
        target_type=_target_ref(step.target_type or DEFAULT_TARGET_TYPE),
        target_value_one=step.target_value_one,
        target_value_two=step.target_value_two,
        exercise_name=step.exercise_name,
        weight_value=weight_value,
        weight_unit=weight_unit,
        benchmark_percentage=step.weight_percentage,
        benchmark_key=step.benchmark_key,
    )


def build_rest_leaf(seconds: Union[int, float]) -> ExecutableStep:
    """Explicit rest step: timed, no target."""
    return ExecutableStep(
        step_type=StepTypeRef(
            step_type_id=step_type_id(StepType.REST.value),
            step_type_key=StepType.REST.value,
        ),
        end_condition=EndConditionRef(
            condition_type_id=end_condition_id(EndCondition.TIME.value),
            condition_type_key=EndCondition.TIME.value,
        ),
        end_condition_value=seconds,
        target_type=_target_ref(DEFAULT_TARGET_TYPE),
    )


def rebuild_steps(steps: Iterable[Any]) -> List[WireNode]:
    """
    Rebuild a Garmin step tree from planning steps.

    Args:
        steps: PlanStep models or planning dicts (camelCase keys)

    Returns:
        Wire nodes with ``stepOrder`` left unset for Garmin to assign
    """
    plan_steps = [PlanStep.model_validate(step) for step in steps]

    wire: List[WireNode] = []
    for repeats, run in groupby(plan_steps, key=lambda step: step.number_of_repeats):
        leaves: List[WireNode] = []
        for step in run:
            leaves.append(build_leaf(step))
            if step.rest_time_seconds is not None and step.rest_time_seconds > 0:
                leaves.append(build_rest_leaf(step.rest_time_seconds))

        if repeats is not None and repeats > 1:
            wire.append(RepeatGroup(number_of_iterations=repeats, workout_steps=leaves))
        else:
            wire.extend(leaves)
    return wire
