"""
Garmin Connect wire format for workout steps.

A workout segment holds a tree of steps: leaves (``ExecutableStepDTO``)
and repeat groups (``RepeatGroupDTO``) that nest further steps. Field names
follow Garmin's camelCase JSON via an alias generator, so models can be
validated straight from API responses and dumped back with ``by_alias=True``.

Unknown Garmin fields are ignored on parse. ``dump_wire_steps`` always emits
every modelled field, which makes two dumps comparable with ``==``.
"""

from typing import Annotated, Any, Dict, Iterable, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter
from pydantic.alias_generators import to_camel

Number = Union[int, float]

EXECUTABLE_STEP = "ExecutableStepDTO"
REPEAT_GROUP = "RepeatGroupDTO"


class WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class StepTypeRef(WireModel):
    step_type_id: Optional[int] = None
    step_type_key: Optional[str] = None


class EndConditionRef(WireModel):
    condition_type_id: Optional[int] = None
    condition_type_key: Optional[str] = None


class TargetTypeRef(WireModel):
    workout_target_type_id: Optional[int] = None
    workout_target_type_key: Optional[str] = None


class WeightUnit(WireModel):
    unit_id: Optional[int] = None
    unit_key: Optional[str] = None
    factor: Optional[float] = None


class ExecutableStep(WireModel):
    """A single leaf step as Garmin stores it."""

    type: Literal["ExecutableStepDTO"] = EXECUTABLE_STEP
    step_id: Optional[int] = None
    step_order: Optional[int] = Field(
        default=None, description="Assigned by Garmin; discarded on import"
    )
    child_step_id: Optional[int] = None
    description: Optional[str] = None
    step_type: Optional[StepTypeRef] = None
    end_condition: Optional[EndConditionRef] = None
    end_condition_value: Optional[Number] = None
    preferred_end_condition_unit: Optional[Dict[str, Any]] = None
    target_type: Optional[TargetTypeRef] = None
    target_value_one: Optional[Number] = None
    target_value_two: Optional[Number] = None
    zone_number: Optional[int] = None
    secondary_target_type: Optional[Dict[str, Any]] = None
    secondary_target_value_one: Optional[Number] = None
    secondary_target_value_two: Optional[Number] = None
    secondary_zone_number: Optional[int] = None
    exercise_name: Optional[str] = None
    weight_value: Optional[Number] = None
    weight_unit: Optional[WeightUnit] = None
    weight_display_unit: Optional[WeightUnit] = None
    benchmark_percentage: Optional[Number] = None
    benchmark_key: Optional[str] = None


class RepeatGroup(WireModel):
    """A repeat group wrapping nested steps, performed ``number_of_iterations`` times."""

    type: Literal["RepeatGroupDTO"] = REPEAT_GROUP
    step_order: Optional[int] = None
    repeat_group_id: Optional[int] = None
    number_of_iterations: int = Field(..., ge=1)
    smart_repeat: bool = False
    child_step_id: Optional[int] = None
    workout_steps: List["WireStep"] = Field(default_factory=list)


def _wire_tag(value: Any) -> str:
    if isinstance(value, dict):
        tag = value.get("type")
    else:
        tag = getattr(value, "type", None)
    return REPEAT_GROUP if tag == REPEAT_GROUP else EXECUTABLE_STEP


WireStep = Annotated[
    Union[
        Annotated[ExecutableStep, Tag(EXECUTABLE_STEP)],
        Annotated[RepeatGroup, Tag(REPEAT_GROUP)],
    ],
    Discriminator(_wire_tag),
]

RepeatGroup.model_rebuild()

_wire_steps_adapter = TypeAdapter(List[WireStep])


def parse_wire_steps(raw_steps: Iterable[Any]) -> List[Union[ExecutableStep, RepeatGroup]]:
    """Validate raw Garmin step dicts (or already-parsed models) into wire models."""
    return _wire_steps_adapter.validate_python(list(raw_steps))


def dump_wire_steps(steps: Iterable[Union[ExecutableStep, RepeatGroup]]) -> List[Dict[str, Any]]:
    """Dump wire models to Garmin's camelCase JSON shape."""
    return [step.model_dump(by_alias=True, mode="json") for step in steps]
