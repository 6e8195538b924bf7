"""
Sample Garmin workouts for ``--mock`` runs.

Shaped like real Garmin Connect workout details: one strength workout
with a repeat group and explicit rest steps, and one running interval
session.
"""
import copy
from typing import Any, Dict, List


def _step(order: int, step_type: str, type_id: int, **fields: Any) -> Dict[str, Any]:
    step = {
        "type": "ExecutableStepDTO",
        "stepId": 10000 + order,
        "stepOrder": order,
        "stepType": {"stepTypeId": type_id, "stepTypeKey": step_type},
        "targetType": {"workoutTargetTypeId": 1, "workoutTargetTypeKey": "no.target"},
    }
    step.update(fields)
    return step


def _reps(count: int) -> Dict[str, Any]:
    return {
        "endCondition": {"conditionTypeId": 10, "conditionTypeKey": "reps"},
        "endConditionValue": count,
    }


def _seconds(count: int) -> Dict[str, Any]:
    return {
        "endCondition": {"conditionTypeId": 2, "conditionTypeKey": "time"},
        "endConditionValue": count,
    }


_SAMPLE_WORKOUTS: List[Dict[str, Any]] = [
    {
        "workoutId": 100000001,
        "workoutName": "Push Day",
        "description": "Bench focus",
        "sportType": {"sportTypeId": 13, "sportTypeKey": "strength_training"},
        "estimatedDurationInSecs": 2700,
        "workoutSegments": [
            {
                "segmentOrder": 1,
                "sportType": {"sportTypeId": 13, "sportTypeKey": "strength_training"},
                "workoutSteps": [
                    _step(1, "warmup", 1, **_seconds(300)),
                    {
                        "type": "RepeatGroupDTO",
                        "stepId": 10002,
                        "stepOrder": 2,
                        "numberOfIterations": 4,
                        "smartRepeat": False,
                        "workoutSteps": [
                            _step(
                                3,
                                "interval",
                                3,
                                exerciseName="BARBELL_BENCH_PRESS",
                                weightValue=83914.58,
                                weightUnit={"unitId": 8, "unitKey": "gram", "factor": 1.0},
                                **_reps(8),
                            ),
                            _step(4, "rest", 5, **_seconds(120)),
                        ],
                    },
                    _step(
                        5,
                        "interval",
                        3,
                        exerciseName="DUMBBELL_SHOULDER_PRESS",
                        weightValue=50,
                        weightUnit={"unitId": 9, "unitKey": "pound", "factor": 453.59237},
                        **_reps(12),
                    ),
                    _step(6, "rest", 5, **_seconds(90)),
                    _step(7, "cooldown", 2, **_seconds(300)),
                ],
            }
        ],
    },
    {
        "workoutId": 100000002,
        "workoutName": "Tempo Intervals",
        "description": "3 x 1 km at threshold",
        "sportType": {"sportTypeId": 1, "sportTypeKey": "running"},
        "estimatedDurationInSecs": 2400,
        "workoutSegments": [
            {
                "segmentOrder": 1,
                "sportType": {"sportTypeId": 1, "sportTypeKey": "running"},
                "workoutSteps": [
                    _step(1, "warmup", 1, **_seconds(600)),
                    {
                        "type": "RepeatGroupDTO",
                        "stepId": 10002,
                        "stepOrder": 2,
                        "numberOfIterations": 3,
                        "smartRepeat": False,
                        "workoutSteps": [
                            _step(
                                3,
                                "interval",
                                3,
                                endCondition={"conditionTypeId": 3, "conditionTypeKey": "distance"},
                                endConditionValue=1000.0,
                                targetType={
                                    "workoutTargetTypeId": 6,
                                    "workoutTargetTypeKey": "pace.zone",
                                },
                                targetValueOne=3.7,
                                targetValueTwo=3.9,
                            ),
                            _step(4, "recovery", 4, **_seconds(120)),
                        ],
                    },
                    _step(5, "cooldown", 2, **_seconds(600)),
                ],
            }
        ],
    },
]


def sample_workouts() -> List[Dict[str, Any]]:
    """Fresh copy of the sample workouts."""
    return copy.deepcopy(_SAMPLE_WORKOUTS)
