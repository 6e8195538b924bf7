"""
Garmin activity -> slim ActivitySummary converter.

Garmin reports speed in m/s, distance in meters and set weights in grams.
Summaries use min/km, km and whole pounds. Interval and lap lists come
under different keys depending on the activity source, so the first
non-empty one is used.

Main lifts (bench, squat, deadlift, overhead press) are logged by Garmin
as one line per exercise with the heaviest weight. They are split into
warmup, top and backoff entries so the summary reads like the session was
actually trained.
"""

import logging
import math
from typing import Any, Iterable, List, Mapping, Optional

from domain.converters.units import round_half_up, to_display_weight
from domain.models.activity import ActivitySummary, ExerciseSet
from domain.models.plan import format_exercise_name

logger = logging.getLogger(__name__)

INTERVAL_SOURCES = (
    "intervals",
    "laps",
    "splits",
    "splitSummaries",
    "intervalSummaries",
    "lapSummaries",
)

# Garmin run/walk detection splits, not real intervals
EXCLUDED_SPLIT_TYPES = frozenset({"RWD_WALK", "RWD_RUN", "RWD_STAND"})

MAIN_LIFTS = ("BENCH_PRESS", "SQUAT", "DEADLIFT", "OVERHEAD_PRESS")

# Interval distances above this are taken to be meters
METERS_THRESHOLD_KM = 20

WARMUP_WEIGHT_FACTOR = 0.6
WARMUP_REPS_FACTOR = 0.8
BACKOFF_WEIGHT_FACTOR = 0.85


def _first(source: Mapping[str, Any], *keys: str, details: Any = None) -> Any:
    for key in keys:
        value = source.get(key)
        if value is not None:
            return value
    # detail fetches nest self evaluation under summaryDTO
    if isinstance(details, Mapping):
        return _first(details, *keys)
    return None


def speed_to_pace(speed_mps: Optional[float]) -> Optional[float]:
    """
    Convert m/s to min/km.

    Examples:
        >>> speed_to_pace(4.0)
        4.166666666666667
        >>> speed_to_pace(0) is None
        True
    """
    if not speed_mps or speed_mps <= 0:
        return None
    return 1000 / speed_mps / 60


def normalize_distance_km(distance: Optional[float]) -> Optional[float]:
    """Interval distances come in meters or kilometers; return kilometers."""
    if distance is None:
        return None
    return distance / 1000 if distance > METERS_THRESHOLD_KM else distance


def pace_from_duration(
    duration_seconds: Optional[float], distance_km: Optional[float]
) -> Optional[float]:
    if not duration_seconds or not distance_km or distance_km <= 0:
        return None
    return duration_seconds / 60 / distance_km


def normalize_activity_type(raw_type: Any) -> str:
    """
    Map Garmin's activity type key onto the planning activity types.

    Examples:
        >>> normalize_activity_type("trail_running")
        'running'
        >>> normalize_activity_type({"typeKey": "road_biking"})
        'cycling'
        >>> normalize_activity_type(None)
        'other'
    """
    if isinstance(raw_type, Mapping):
        raw_type = raw_type.get("typeKey")
    key = raw_type.lower() if isinstance(raw_type, str) else ""
    if "run" in key or "trail" in key:
        return "running"
    if "strength" in key or "weight" in key:
        return "strength_training"
    if "cycl" in key or "bik" in key:
        return "cycling"
    if "swim" in key or "pool" in key:
        return "swimming"
    return "other"


def _split_type(interval: Mapping[str, Any]) -> Any:
    return _first(
        interval, "splitType", "type", "intervalType", "stepType", "splitTypeKey", "lapType"
    )


def _is_excluded(interval: Mapping[str, Any]) -> bool:
    split_type = _split_type(interval)
    return isinstance(split_type, str) and split_type in EXCLUDED_SPLIT_TYPES


def build_interval_sets(activity: Mapping[str, Any]) -> List[ExerciseSet]:
    """
    One ExerciseSet per interval or lap of a run.

    Returns:
        Interval entries numbered after run/walk detection splits are
        dropped; empty when the activity has no interval data
    """
    intervals = next(
        (
            activity[key]
            for key in INTERVAL_SOURCES
            if isinstance(activity.get(key), list) and activity[key]
        ),
        [],
    )
    kept = [
        interval
        for interval in intervals
        if isinstance(interval, Mapping) and not _is_excluded(interval)
    ]

    entries = []
    for number, interval in enumerate(kept, start=1):
        duration = _first(
            interval, "duration", "elapsedDuration", "lapDuration", "timerDuration", "totalTime"
        )
        distance = normalize_distance_km(
            _first(interval, "distance", "lapDistance", "totalDistance", "meters")
        )
        pace = _first(interval, "pace", "avgPace")
        if pace is None:
            pace = speed_to_pace(_first(interval, "averageSpeed", "avgSpeed"))
        if pace is None:
            pace = pace_from_duration(duration, distance)

        name = _first(interval, "intervalName", "lapName", "name", "splitName")
        split_type = _split_type(interval)
        entries.append(
            ExerciseSet(
                exercise_name=name or f"Interval {number}",
                category="INTERVAL",
                sets=1,
                reps=0,
                weight=0,
                volume=0,
                duration=duration,
                distance=distance,
                pace=pace,
                avg_hr=_first(interval, "avgHR", "averageHR", "averageHeartRate"),
                max_hr=_first(interval, "maxHR", "maxHeartRate"),
                split_type=split_type if isinstance(split_type, str) else None,
            )
        )
    return entries


def is_main_lift(category: str) -> bool:
    return any(lift in category for lift in MAIN_LIFTS)


def split_warmup_top_backoff_sets(raw_set: Mapping[str, Any]) -> List[ExerciseSet]:
    """
    Expand one Garmin exercise summary into ExerciseSet entries.

    Anything that is not a main lift, or has no sets or weight, stays a
    single entry. A main lift becomes warmup sets (a quarter of the sets,
    1 or 2, at 60% weight and 80% reps), one top set at the logged weight,
    and backoff sets for the rest at 85% weight.
    """
    category = raw_set.get("category") or "UNKNOWN"
    base_name = format_exercise_name(raw_set.get("subCategory") or raw_set.get("category"))
    weight = to_display_weight(raw_set.get("maxWeight") or 0)
    total_sets = raw_set.get("sets") or 0
    reps = raw_set.get("reps") or 0

    if not is_main_lift(raw_set.get("category") or "") or total_sets <= 0 or weight == 0:
        return [
            ExerciseSet(
                exercise_name=base_name,
                category=category,
                sets=total_sets,
                reps=reps,
                weight=weight,
                volume=raw_set.get("volume"),
            )
        ]

    if total_sets == 1:
        top_reps = max(reps, 1)
        return [
            ExerciseSet(
                exercise_name=f"{base_name} (Top Set)",
                category=category,
                sets=1,
                reps=top_reps,
                weight=weight,
                volume=top_reps * weight,
            )
        ]

    if total_sets == 2:
        warmup_count = 1
    else:
        warmup_count = min(max(1, math.ceil(total_sets * 0.25)), 2)
    backoff_count = max(total_sets - warmup_count - 1, 0)

    reps_per_set = max(round_half_up(reps / total_sets), 1)
    warmup_reps = max(round_half_up(reps_per_set * WARMUP_REPS_FACTOR), 1)
    warmup_weight = round_half_up(weight * WARMUP_WEIGHT_FACTOR)
    backoff_weight = round_half_up(weight * BACKOFF_WEIGHT_FACTOR)

    entries = [
        ExerciseSet(
            exercise_name=f"{base_name} (Warmup)",
            category=category,
            sets=warmup_count,
            reps=warmup_reps,
            weight=warmup_weight,
            volume=warmup_count * warmup_reps * warmup_weight,
        ),
        ExerciseSet(
            exercise_name=f"{base_name} (Top Set)",
            category=category,
            sets=1,
            reps=reps_per_set,
            weight=weight,
            volume=reps_per_set * weight,
        ),
    ]
    if backoff_count > 0:
        entries.append(
            ExerciseSet(
                exercise_name=f"{base_name} (Backoff Set)",
                category=category,
                sets=backoff_count,
                reps=reps_per_set,
                weight=backoff_weight,
                volume=backoff_count * reps_per_set * backoff_weight,
            )
        )
    return entries


def _is_summarized(activity: Mapping[str, Any]) -> bool:
    return bool(
        not activity.get("activityId")
        and activity.get("id")
        and activity.get("activityType")
        and activity.get("startTime")
    )


def _resummarize(activity: Mapping[str, Any]) -> ActivitySummary:
    if activity.get("activityType") == "running" and not activity.get("exerciseSets"):
        interval_sets = build_interval_sets(activity)
        if interval_sets:
            kept = {key: value for key, value in activity.items() if key not in INTERVAL_SOURCES}
            return ActivitySummary.model_validate({**kept, "exerciseSets": interval_sets})
    return ActivitySummary.model_validate(dict(activity))


def transform_activity(activity: Mapping[str, Any]) -> ActivitySummary:
    """
    Summarize one Garmin activity (list entry merged with its details).

    An activity that is already a summary (``id`` and ``startTime`` instead
    of Garmin's ``activityId``) is kept as is, except that a run without
    exercise sets gets its interval breakdown built.
    """
    if _is_summarized(activity):
        return _resummarize(activity)

    activity_type = normalize_activity_type(activity.get("activityType"))
    details = activity.get("summaryDTO")
    summary = ActivitySummary(
        id=activity.get("activityId"),
        activity_name=activity.get("activityName") or "Unknown Activity",
        activity_type=activity_type,
        start_time=activity.get("startTimeGMT") or activity.get("startTimeLocal"),
        duration=activity.get("duration") or activity.get("elapsedDuration") or 0,
        avg_hr=activity.get("averageHR"),
        max_hr=activity.get("maxHR"),
        aerobic_training_effect=activity.get("aerobicTrainingEffect"),
        anaerobic_training_effect=activity.get("anaerobicTrainingEffect"),
        training_effect_label=activity.get("trainingEffectLabel"),
        self_evaluation_feeling=activity.get("selfEvaluationFeeling"),
        direct_workout_feel=_first(activity, "directWorkoutFeel", details=details),
        direct_workout_rpe=_first(activity, "directWorkoutRpe", details=details),
        difference_body_battery=activity.get("differenceBodyBattery"),
        moderate_intensity_minutes=activity.get("moderateIntensityMinutes"),
        vigorous_intensity_minutes=activity.get("vigorousIntensityMinutes"),
    )

    if activity_type in ("running", "cycling"):
        interval_sets = build_interval_sets(activity) if activity_type == "running" else []
        distance = activity.get("distance")
        return summary.model_copy(
            update={
                "distance": distance / 1000 if distance else None,
                "avg_pace": speed_to_pace(activity.get("averageSpeed")),
                "avg_cadence": activity.get("averageRunningCadenceInStepsPerMinute"),
                "elevation_gain": activity.get("elevationGain"),
                "exercise_sets": interval_sets or None,
            }
        )

    if activity_type == "strength_training":
        raw_sets = activity.get("summarizedExerciseSets") or activity.get("exerciseSets") or []
        return summary.model_copy(
            update={
                "total_sets": activity.get("totalSets"),
                "total_reps": activity.get("totalReps"),
                "exercise_sets": [
                    entry
                    for raw_set in raw_sets
                    for entry in split_warmup_top_backoff_sets(raw_set)
                ],
            }
        )

    return summary


def transform_activities(activities: Iterable[Mapping[str, Any]]) -> List[ActivitySummary]:
    summaries = [transform_activity(activity) for activity in activities]
    logger.debug(f"Summarized {len(summaries)} activities")
    return summaries
