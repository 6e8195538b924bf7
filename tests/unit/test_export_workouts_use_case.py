"""
Unit tests for ExportWorkoutsUseCase.

Tests for:
- Listing and fetching every workout, converted to planning format
- Pacing between detail fetches
- Keeping summaries when a detail fetch fails
- Authentication errors aborting the export
"""

import pytest

from application.exceptions import GarminAuthenticationError
from application.use_cases import ExportWorkoutsResult, ExportWorkoutsUseCase
from infrastructure.garmin import InMemoryWorkoutClient, sample_workouts
from tests.fakes import FailingWorkoutClient


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def client():
    """In-memory client seeded with the sample workouts."""
    return InMemoryWorkoutClient(sample_workouts())


@pytest.fixture
def failing_client():
    """Client that can be told to fail specific calls."""
    return FailingWorkoutClient(sample_workouts())


@pytest.fixture
def pauses():
    """Records sleep calls instead of sleeping."""
    return []


@pytest.fixture
def use_case(client, pauses):
    return ExportWorkoutsUseCase(client, sleep=pauses.append)


# =============================================================================
# Tests
# =============================================================================


@pytest.mark.unit
class TestExportWorkouts:
    """Test the export workflow."""

    def test_returns_result(self, use_case):
        result = use_case.execute()

        assert isinstance(result, ExportWorkoutsResult)
        assert result.failed_ids == []

    def test_converts_every_workout(self, use_case):
        result = use_case.execute()

        assert [w.workout_name for w in result.transformed] == ["Push Day", "Tempo Intervals"]
        assert [w.workout_type for w in result.transformed] == ["strength_training", "running"]

    def test_steps_are_flattened(self, use_case):
        push_day = use_case.execute().transformed[0]

        assert len(push_day.steps) == 4
        bench = push_day.steps[1]
        assert bench.exercise_name == "BARBELL_BENCH_PRESS"
        assert bench.weight == 185
        assert bench.number_of_repeats == 4
        assert bench.rest_time_seconds == 120
        assert push_day.steps[2].weight == 50

    def test_total_reps_counts_repeats(self, use_case):
        push_day, tempo = use_case.execute().transformed

        assert push_day.total_reps == 8 * 4 + 12
        assert tempo.total_reps is None

    def test_raw_keeps_garmin_json(self, use_case):
        result = use_case.execute()

        assert result.raw[0]["workoutSegments"][0]["workoutSteps"][1]["type"] == "RepeatGroupDTO"

    def test_fetches_details_per_workout(self, use_case, client):
        use_case.execute()

        assert client.calls == [
            ("list_workouts", (0, 100)),
            ("get_workout", 100000001),
            ("get_workout", 100000002),
        ]

    def test_pauses_between_fetches_only(self, use_case, pauses):
        """Two workouts means one pause; none after the last."""
        use_case.execute()

        assert pauses == [0.5]

    def test_zero_delay_never_sleeps(self, client, pauses):
        ExportWorkoutsUseCase(client, fetch_delay_seconds=0, sleep=pauses.append).execute()

        assert pauses == []

    def test_fetch_limit(self, client, pauses):
        result = ExportWorkoutsUseCase(client, fetch_limit=1, sleep=pauses.append).execute()

        assert len(result.transformed) == 1
        assert client.calls[0] == ("list_workouts", (0, 1))

    def test_summary_only(self, use_case, client, pauses):
        result = use_case.execute(include_details=False)

        assert len(result.transformed) == 2
        assert all(w.steps is None for w in result.transformed)
        assert [name for name, _ in client.calls] == ["list_workouts"]
        assert pauses == []

    def test_empty_account(self, pauses):
        result = ExportWorkoutsUseCase(InMemoryWorkoutClient(), sleep=pauses.append).execute()

        assert result.transformed == []
        assert result.raw == []


@pytest.mark.unit
class TestExportWorkoutsFailures:
    """Test partial failures."""

    def test_failed_detail_keeps_summary(self, failing_client, pauses):
        failing_client.fail_workout_ids({100000001})

        result = ExportWorkoutsUseCase(failing_client, sleep=pauses.append).execute()

        assert result.failed_ids == ["100000001"]
        assert len(result.transformed) == 2
        assert result.transformed[0].workout_name == "Push Day"
        assert result.transformed[0].steps is None
        assert len(result.transformed[1].steps) == 4

    def test_missing_detail_keeps_summary(self, client, pauses):
        client.get_workout = lambda workout_id: None

        result = ExportWorkoutsUseCase(client, sleep=pauses.append).execute()

        assert result.failed_ids == []
        assert all(w.steps is None for w in result.transformed)

    def test_auth_failure_propagates(self, failing_client, pauses):
        failing_client.simulate_auth_failure()

        with pytest.raises(GarminAuthenticationError):
            ExportWorkoutsUseCase(failing_client, sleep=pauses.append).execute()


@pytest.mark.unit
class TestTransformRaw:
    """Test offline conversion of saved raw exports."""

    def test_transform_raw(self):
        workouts = ExportWorkoutsUseCase.transform_raw(sample_workouts())

        assert [w.workout_id for w in workouts] == [100000001, 100000002]
        assert len(workouts[1].steps) == 4
        assert workouts[1].steps[1].target_type == "pace-zone"

    def test_transform_raw_unnamed(self):
        assert ExportWorkoutsUseCase.transform_raw([{}])[0].workout_name == "Unnamed Workout"
