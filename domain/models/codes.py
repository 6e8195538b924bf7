"""
Fixed lookup tables between planning keys and Garmin's coded descriptors.

Planning files spell keys with hyphens (``lap-button``, ``no-target``,
``heart-rate-zone``). Garmin's wire format spells the same keys with dots
(``lap.button``, ``no.target``) and pairs each with a numeric id.

Encoding never fails: an unknown key keeps its spelling and is paired with
the documented default id for its table. Decoding prefers the key Garmin
sent and only falls back to the id when the key is missing.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class StepType(str, Enum):
    """Closed set of planning step types."""

    WARMUP = "warmup"
    COOLDOWN = "cooldown"
    INTERVAL = "interval"
    RECOVERY = "recovery"
    REST = "rest"
    EXERCISE = "exercise"
    REPEAT = "repeat"
    OTHER = "other"


class EndCondition(str, Enum):
    """Closed set of step end conditions."""

    REPS = "reps"
    TIME = "time"
    DISTANCE = "distance"
    LAP_BUTTON = "lap-button"
    ITERATIONS = "iterations"
    CALORIES = "calories"
    HEART_RATE = "heart-rate"


class TargetType(str, Enum):
    """Closed set of step target types."""

    NO_TARGET = "no-target"
    HEART_RATE_ZONE = "heart-rate-zone"
    PACE_ZONE = "pace-zone"
    SPEED_ZONE = "speed-zone"
    POWER_ZONE = "power-zone"
    CADENCE_ZONE = "cadence-zone"
    OPEN = "open"


STEP_TYPE_IDS: Mapping[str, int] = MappingProxyType(
    {
        StepType.WARMUP.value: 1,
        StepType.COOLDOWN.value: 2,
        StepType.INTERVAL.value: 3,
        StepType.REST.value: 3,
        StepType.RECOVERY.value: 4,
        StepType.EXERCISE.value: 6,
        StepType.REPEAT.value: 7,
        StepType.OTHER.value: 8,
    }
)

END_CONDITION_IDS: Mapping[str, int] = MappingProxyType(
    {
        EndCondition.LAP_BUTTON.value: 1,
        EndCondition.TIME.value: 2,
        EndCondition.DISTANCE.value: 3,
        EndCondition.CALORIES.value: 4,
        EndCondition.HEART_RATE.value: 5,
        EndCondition.REPS.value: 6,
        EndCondition.ITERATIONS.value: 7,
    }
)

TARGET_TYPE_IDS: Mapping[str, int] = MappingProxyType(
    {
        TargetType.NO_TARGET.value: 1,
        TargetType.HEART_RATE_ZONE.value: 2,
        TargetType.PACE_ZONE.value: 3,
        TargetType.SPEED_ZONE.value: 4,
        TargetType.POWER_ZONE.value: 6,
        TargetType.CADENCE_ZONE.value: 7,
        TargetType.OPEN.value: 8,
    }
)

# Garmin sport types, keyed by the planning workoutType.
SPORT_TYPE_IDS: Mapping[str, int] = MappingProxyType(
    {
        "running": 1,
        "cycling": 2,
        "cardio": 3,
        "swimming": 5,
        "strength_training": 13,
        "other": 0,
    }
)

DEFAULT_STEP_TYPE = StepType.EXERCISE.value
DEFAULT_END_CONDITION = EndCondition.LAP_BUTTON.value
DEFAULT_TARGET_TYPE = TargetType.NO_TARGET.value
DEFAULT_SPORT_TYPE = "running"


def _reverse(table: Mapping[str, int]) -> Mapping[int, str]:
    # interval and rest share id 3; the first key listed wins
    reversed_table = {}
    for key, code in table.items():
        reversed_table.setdefault(code, key)
    return MappingProxyType(reversed_table)


STEP_TYPE_KEYS = _reverse(STEP_TYPE_IDS)
END_CONDITION_KEYS = _reverse(END_CONDITION_IDS)
TARGET_TYPE_KEYS = _reverse(TARGET_TYPE_IDS)


def to_wire_key(plan_key: str) -> str:
    """``heart-rate-zone`` -> ``heart.rate.zone``"""
    return plan_key.replace("-", ".")


def to_plan_key(wire_key: str) -> str:
    """``lap.button`` -> ``lap-button``"""
    return wire_key.replace(".", "-")


def step_type_id(key: Optional[str]) -> int:
    return STEP_TYPE_IDS.get(key or "", STEP_TYPE_IDS[DEFAULT_STEP_TYPE])


def end_condition_id(key: Optional[str]) -> int:
    return END_CONDITION_IDS.get(key or "", END_CONDITION_IDS[DEFAULT_END_CONDITION])


def target_type_id(key: Optional[str]) -> int:
    return TARGET_TYPE_IDS.get(key or "", TARGET_TYPE_IDS[DEFAULT_TARGET_TYPE])


def decode_key(
    wire_key: Optional[str],
    code: Optional[int],
    keys_by_id: Mapping[int, str],
) -> Optional[str]:
    """
    Decode a coded descriptor to its planning key.

    Args:
        wire_key: The dotted key Garmin sent, if any
        code: The numeric id Garmin sent, if any
        keys_by_id: Reverse lookup table for the descriptor kind

    Returns:
        Hyphenated planning key, or None when neither key nor a known id is present
    """
    if wire_key:
        return to_plan_key(wire_key)
    if code is not None:
        return keys_by_id.get(code)
    return None


def sport_type(workout_type: Optional[str]) -> dict:
    """Build Garmin's sportType descriptor; unknown types map to id 0."""
    key = workout_type or DEFAULT_SPORT_TYPE
    return {"sportTypeId": SPORT_TYPE_IDS.get(key, 0), "sportTypeKey": key}
