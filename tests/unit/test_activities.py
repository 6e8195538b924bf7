"""
Unit tests for domain/converters/activities.py

Tests for:
- Unit helpers: speed_to_pace, normalize_distance_km, pace_from_duration
- normalize_activity_type
- build_interval_sets: source selection, run/walk splits, pace fallbacks
- split_warmup_top_backoff_sets: main lift expansion
- transform_activity: Garmin activities and already summarized ones
"""

from datetime import datetime, timezone

import pytest

from domain.converters.activities import (
    build_interval_sets,
    normalize_activity_type,
    normalize_distance_km,
    pace_from_duration,
    speed_to_pace,
    split_warmup_top_backoff_sets,
    transform_activities,
    transform_activity,
)
from domain.models import ActivitySummary
from infrastructure.garmin import sample_activities


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def activities():
    """Sample ride, run, strength session and yoga, in that order."""
    return sample_activities(datetime(2026, 10, 14, 12, tzinfo=timezone.utc))


@pytest.fixture
def ride(activities):
    return activities[0]


@pytest.fixture
def run(activities):
    return activities[1]


@pytest.fixture
def strength(activities):
    return activities[2]


@pytest.fixture
def yoga(activities):
    return activities[3]


def bench(**overrides):
    raw_set = {
        "category": "BENCH_PRESS",
        "subCategory": "BARBELL_BENCH_PRESS",
        "sets": 5,
        "reps": 25,
        "maxWeight": 102058,
    }
    raw_set.update(overrides)
    return raw_set


# =============================================================================
# Unit helpers
# =============================================================================


@pytest.mark.unit
class TestUnitHelpers:
    """Test speed, distance and pace helpers."""

    def test_speed_to_pace(self):
        assert speed_to_pace(4.0) == pytest.approx(4.1667, abs=1e-4)

    def test_no_speed_has_no_pace(self):
        assert speed_to_pace(None) is None
        assert speed_to_pace(0) is None
        assert speed_to_pace(-1.0) is None

    def test_meters_become_kilometers(self):
        assert normalize_distance_km(1500.0) == 1.5

    def test_small_distances_are_already_kilometers(self):
        assert normalize_distance_km(5.0) == 5.0
        assert normalize_distance_km(20) == 20

    def test_missing_distance(self):
        assert normalize_distance_km(None) is None

    def test_pace_from_duration(self):
        assert pace_from_duration(600, 2.0) == 5.0

    def test_pace_needs_duration_and_distance(self):
        assert pace_from_duration(0, 2.0) is None
        assert pace_from_duration(600, None) is None
        assert pace_from_duration(600, 0) is None


@pytest.mark.unit
class TestNormalizeActivityType:
    """Test mapping Garmin type keys onto planning activity types."""

    @pytest.mark.parametrize(
        "type_key, expected",
        [
            ("running", "running"),
            ("treadmill_running", "running"),
            ("trail_running", "running"),
            ("strength_training", "strength_training"),
            ("indoor_cycling", "cycling"),
            ("mountain_biking", "cycling"),
            ("lap_swimming", "swimming"),
            ("yoga", "other"),
            ("indoor_rowing", "other"),
        ],
    )
    def test_type_keys(self, type_key, expected):
        assert normalize_activity_type(type_key) == expected

    def test_reads_type_key_from_descriptor(self):
        assert normalize_activity_type({"typeId": 10, "typeKey": "road_biking"}) == "cycling"

    def test_case_insensitive(self):
        assert normalize_activity_type("Running") == "running"

    def test_missing_type(self):
        assert normalize_activity_type(None) == "other"
        assert normalize_activity_type({}) == "other"


# =============================================================================
# Interval sets
# =============================================================================


@pytest.mark.unit
class TestBuildIntervalSets:
    """Test per-lap breakdown of runs."""

    def test_one_entry_per_lap(self, run):
        sets = build_interval_sets(run)

        assert [s.exercise_name for s in sets] == ["Interval 1", "Interval 2", "Interval 3"]
        assert {s.category for s in sets} == {"INTERVAL"}

    def test_run_walk_splits_dropped(self, run):
        """The walk split is the fourth lap and is not numbered."""
        sets = build_interval_sets(run)

        assert len(sets) == 3
        assert all(s.split_type is None for s in sets)

    def test_distances_in_kilometers(self, run):
        assert [s.distance for s in build_interval_sets(run)] == [2.0, 4.0, 2.0]

    def test_pace_from_speed(self, run):
        first = build_interval_sets(run)[0]

        assert first.pace == pytest.approx(5.0)
        assert first.avg_hr == 145.0
        assert first.max_hr == 155.0

    def test_pace_from_duration_when_no_speed(self, run):
        second, third = build_interval_sets(run)[1:]

        assert second.pace == 4.0
        assert third.pace == 7.0
        assert third.max_hr is None

    def test_explicit_pace_wins(self):
        sets = build_interval_sets(
            {"intervals": [{"pace": 4.5, "averageSpeed": 2.0, "distance": 1.0, "duration": 300}]}
        )

        assert sets[0].pace == 4.5

    def test_first_non_empty_source(self):
        activity = {
            "intervals": [],
            "laps": [{"lapName": "Warm up", "lapDistance": 1000.0, "lapDuration": 360.0}],
            "splits": [{"distance": 500.0}],
        }

        sets = build_interval_sets(activity)

        assert len(sets) == 1
        assert sets[0].exercise_name == "Warm up"
        assert sets[0].distance == 1.0
        assert sets[0].duration == 360.0

    def test_other_split_types_kept(self):
        sets = build_interval_sets(
            {"splitSummaries": [{"splitType": "INTERVAL_ACTIVE", "distance": 400.0}]}
        )

        assert sets[0].split_type == "INTERVAL_ACTIVE"

    def test_interval_heart_rate_aliases(self):
        sets = build_interval_sets({"laps": [{"averageHeartRate": 150, "maxHeartRate": 171}]})

        assert (sets[0].avg_hr, sets[0].max_hr) == (150, 171)

    def test_no_interval_data(self, ride):
        assert build_interval_sets(ride) == []


# =============================================================================
# Strength sets
# =============================================================================


@pytest.mark.unit
class TestSplitWarmupTopBackoffSets:
    """Test expanding main lifts into warmup, top and backoff entries."""

    def test_main_lift_expanded(self):
        warmup, top, backoff = split_warmup_top_backoff_sets(bench())

        assert warmup.exercise_name == "Barbell Bench Press (Warmup)"
        assert (warmup.sets, warmup.reps, warmup.weight, warmup.volume) == (2, 4, 135, 1080)
        assert top.exercise_name == "Barbell Bench Press (Top Set)"
        assert (top.sets, top.reps, top.weight, top.volume) == (1, 5, 225, 1125)
        assert backoff.exercise_name == "Barbell Bench Press (Backoff Set)"
        assert (backoff.sets, backoff.reps, backoff.weight, backoff.volume) == (2, 5, 191, 1910)

    def test_category_kept_on_every_entry(self):
        assert {e.category for e in split_warmup_top_backoff_sets(bench())} == {"BENCH_PRESS"}

    def test_two_sets_have_no_backoff(self):
        entries = split_warmup_top_backoff_sets(
            {"category": "SQUAT", "sets": 2, "reps": 10, "maxWeight": 136078}
        )

        assert [e.exercise_name for e in entries] == ["Squat (Warmup)", "Squat (Top Set)"]
        assert (entries[0].sets, entries[0].reps, entries[0].weight) == (1, 4, 180)
        assert (entries[1].reps, entries[1].weight) == (5, 300)

    def test_single_set_is_top_set(self):
        (top,) = split_warmup_top_backoff_sets(
            bench(category="DEADLIFT", subCategory="BARBELL_DEADLIFT", sets=1, reps=3,
                  maxWeight=181437)
        )

        assert top.exercise_name == "Barbell Deadlift (Top Set)"
        assert (top.sets, top.reps, top.weight, top.volume) == (1, 3, 400, 1200)

    def test_single_set_without_reps_counts_one(self):
        (top,) = split_warmup_top_backoff_sets(bench(sets=1, reps=0))

        assert top.reps == 1

    def test_warmup_capped_at_two_sets(self):
        warmup, top, backoff = split_warmup_top_backoff_sets(bench(sets=8, reps=40))

        assert warmup.sets == 2
        assert backoff.sets == 5

    def test_accessory_lift_single_entry(self):
        (entry,) = split_warmup_top_backoff_sets(
            {
                "category": "CURL",
                "subCategory": "DUMBBELL_BICEPS_CURL",
                "sets": 3,
                "reps": 30,
                "maxWeight": 13608,
                "volume": 408240,
            }
        )

        assert entry.exercise_name == "Dumbbell Biceps Curl"
        assert (entry.sets, entry.reps, entry.weight, entry.volume) == (3, 30, 30, 408240)

    def test_unweighted_main_lift_single_entry(self):
        (entry,) = split_warmup_top_backoff_sets(bench(maxWeight=0))

        assert entry.exercise_name == "Barbell Bench Press"
        assert entry.weight == 0

    def test_missing_category(self):
        (entry,) = split_warmup_top_backoff_sets({"sets": 2, "reps": 20})

        assert entry.exercise_name == "Unknown Exercise"
        assert entry.category == "UNKNOWN"


# =============================================================================
# transform_activity
# =============================================================================


@pytest.mark.unit
class TestTransformActivity:
    """Test summarizing whole activities."""

    def test_base_fields(self, run):
        summary = transform_activity(run)

        assert isinstance(summary, ActivitySummary)
        assert summary.id == 7002
        assert summary.activity_name == "Tempo Intervals"
        assert summary.activity_type == "running"
        assert summary.start_time == run["startTimeGMT"]
        assert summary.duration == 2520.0
        assert (summary.avg_hr, summary.max_hr) == (158.0, 181.0)
        assert summary.training_effect_label == "TEMPO"

    def test_running_fields(self, run):
        summary = transform_activity(run)

        assert summary.distance == 8.0
        assert summary.avg_pace == pytest.approx(4.1667, abs=1e-4)
        assert summary.avg_cadence == 176.0
        assert summary.elevation_gain == 35.0
        assert len(summary.exercise_sets) == 3

    def test_self_evaluation_from_details(self, run):
        summary = transform_activity(run)

        assert (summary.direct_workout_feel, summary.direct_workout_rpe) == (50, 70)

    def test_top_level_self_evaluation_wins_even_when_zero(self, run):
        run["directWorkoutFeel"] = 0

        assert transform_activity(run).direct_workout_feel == 0

    def test_cycling_has_no_interval_sets(self, ride):
        summary = transform_activity(ride)

        assert summary.activity_type == "cycling"
        assert summary.distance == 30.0
        assert summary.avg_pace == pytest.approx(2.0833, abs=1e-4)
        assert summary.exercise_sets is None

    def test_strength_fields(self, strength):
        summary = transform_activity(strength)

        assert (summary.total_sets, summary.total_reps) == (8, 55)
        assert [s.exercise_name for s in summary.exercise_sets] == [
            "Barbell Bench Press (Warmup)",
            "Barbell Bench Press (Top Set)",
            "Barbell Bench Press (Backoff Set)",
            "Dumbbell Biceps Curl",
        ]
        assert summary.distance is None

    def test_strength_reads_exercise_sets_key(self, strength):
        strength["exerciseSets"] = strength.pop("summarizedExerciseSets")

        assert len(transform_activity(strength).exercise_sets) == 4

    def test_other_activity_keeps_base_fields_only(self, yoga):
        summary = transform_activity(yoga)

        assert summary.activity_type == "other"
        assert summary.distance is None
        assert summary.exercise_sets is None
        assert summary.direct_workout_feel is None

    def test_defaults(self):
        summary = transform_activity(
            {"activityId": 1, "activityType": {"typeKey": "hiit"}, "elapsedDuration": 900.0}
        )

        assert summary.activity_name == "Unknown Activity"
        assert summary.duration == 900.0
        assert summary.start_time is None

    def test_start_time_falls_back_to_local(self):
        summary = transform_activity(
            {"activityId": 1, "startTimeLocal": "2026-10-13 09:00:00"}
        )

        assert summary.start_time == "2026-10-13 09:00:00"

    def test_input_not_mutated(self, run):
        transform_activity(run)

        assert len(run["laps"]) == 4

    def test_dump_uses_planning_keys(self, run):
        dumped = transform_activity(run).to_plan_dict()

        assert dumped["activityName"] == "Tempo Intervals"
        assert dumped["avgHR"] == 158.0
        assert dumped["exerciseSets"][0]["exerciseName"] == "Interval 1"
        assert "laps" not in dumped
        assert "totalSets" not in dumped


@pytest.mark.unit
class TestSummarizedActivities:
    """Activities read back from an activities file pass through."""

    def test_summary_kept_as_is(self):
        summary = {
            "id": "activity-1",
            "activityName": "Evening Yoga",
            "activityType": "other",
            "startTime": "2026-10-13T19:00:00Z",
            "duration": 2700,
            "mood": "calm",
        }

        dumped = transform_activity(summary).to_plan_dict()

        assert dumped == summary

    def test_summarized_run_gets_interval_sets(self):
        summary = {
            "id": "activity-2",
            "activityName": "Easy Run",
            "activityType": "running",
            "startTime": "2026-10-13T07:00:00Z",
            "duration": 1800,
            "laps": [{"distance": 5000.0, "duration": 1800.0}],
        }

        dumped = transform_activity(summary).to_plan_dict()

        assert "laps" not in dumped
        assert dumped["exerciseSets"][0]["distance"] == 5.0
        assert dumped["exerciseSets"][0]["pace"] == 6.0

    def test_summarized_run_with_sets_untouched(self):
        summary = {
            "id": "activity-3",
            "activityType": "running",
            "startTime": "2026-10-13T07:00:00Z",
            "exerciseSets": [{"exerciseName": "Interval 1", "category": "INTERVAL"}],
            "laps": [{"distance": 5000.0}],
        }

        dumped = transform_activity(summary).to_plan_dict()

        assert dumped["laps"] == [{"distance": 5000.0}]
        assert len(dumped["exerciseSets"]) == 1

    def test_transform_activities_keeps_order(self, activities):
        summaries = transform_activities(activities)

        assert [s.id for s in summaries] == [7001, 7002, 7003, 7004]
