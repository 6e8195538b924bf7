"""
Unit tests for application/use_cases/plan_calendar.py

Tests for:
- next_week_dates / shift_date
- build_next_week_template
- copy_plan_to_next_week
- SchedulePlanUseCase
"""

from datetime import date, datetime, timezone

import pytest

from application.exceptions import GarminAuthenticationError, GarminWorkoutNotFound
from application.use_cases import (
    ExportWorkoutsUseCase,
    SchedulePlanUseCase,
    ScheduleResult,
    build_next_week_template,
    copy_plan_to_next_week,
)
from application.use_cases.plan_calendar import next_week_dates, shift_date
from domain.models import WeeklyWorkoutPlan
from infrastructure.garmin import InMemoryWorkoutClient, sample_workouts
from tests.fakes import FailingWorkoutClient

NOW = datetime(2026, 10, 14, 9, 30, tzinfo=timezone.utc)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def this_week():
    return WeeklyWorkoutPlan.model_validate({
        "generatedAt": "2026-10-05T08:00:00+00:00",
        "weekStart": "2026-10-12",
        "weekEnd": "2026-10-18",
        "source": "garmin-workouts-template",
        "workouts": [
            {"workoutId": 100000001, "workoutName": "Push Day", "scheduledDate": "2026-10-13"},
            {"workoutId": 100000002, "workoutName": "Tempo Intervals",
             "scheduledDate": "2026-10-15"},
            {"workoutId": 100000003, "workoutName": "Mobility"},
        ],
    })


@pytest.fixture
def client():
    return InMemoryWorkoutClient(sample_workouts())


# =============================================================================
# Dates
# =============================================================================


@pytest.mark.unit
class TestDates:
    """Test week arithmetic."""

    def test_next_week_from_wednesday(self):
        assert next_week_dates(date(2026, 10, 14)) == (date(2026, 10, 19), date(2026, 10, 25))

    def test_next_week_from_sunday(self):
        """Sunday still belongs to the current Monday-Sunday week."""
        assert next_week_dates(date(2026, 10, 18)) == (date(2026, 10, 19), date(2026, 10, 25))

    def test_next_week_from_monday(self):
        assert next_week_dates(date(2026, 10, 19)) == (date(2026, 10, 26), date(2026, 11, 1))

    def test_shift_date(self):
        assert shift_date("2026-10-13", 7) == "2026-10-20"

    def test_shift_date_across_year(self):
        assert shift_date("2026-12-28", 7) == "2027-01-04"

    def test_shift_datetime_keeps_date_only(self):
        assert shift_date("2026-10-13T07:00:00Z", 7) == "2026-10-20"

    @pytest.mark.parametrize("value", ["someday", "", None, 20261013])
    def test_shift_unparseable_passes_through(self, value):
        assert shift_date(value, 7) == value


# =============================================================================
# Template and copy
# =============================================================================


@pytest.mark.unit
class TestBuildNextWeekTemplate:
    """Test the next-week template."""

    def test_template(self, client):
        workouts = ExportWorkoutsUseCase(client, sleep=lambda _: None).execute().transformed

        plan = build_next_week_template(workouts, NOW)

        assert plan.week_start == "2026-10-19"
        assert plan.week_end == "2026-10-25"
        assert plan.source == "garmin-workouts-template"
        assert plan.generated_at == "2026-10-14T09:30:00+00:00"
        assert [w.workout_name for w in plan.workouts] == ["Push Day", "Tempo Intervals"]
        assert all(w.scheduled_date is None for w in plan.workouts)
        assert len(plan.workouts[0].steps) == 4

    def test_template_drops_derived_fields(self, client):
        workouts = ExportWorkoutsUseCase(client, sleep=lambda _: None).execute().transformed

        plan = build_next_week_template(workouts, NOW)

        assert plan.workouts[0].total_reps is None
        assert "totalReps" not in plan.to_plan_dict()["workouts"][0]

    def test_empty_template(self):
        plan = build_next_week_template([], NOW)

        assert plan.workouts == []


@pytest.mark.unit
class TestCopyPlanToNextWeek:
    """Test copying a weekly plan forward."""

    def test_week_bounds_move(self, this_week):
        plan = copy_plan_to_next_week(this_week, NOW)

        assert plan.week_start == "2026-10-19"
        assert plan.week_end == "2026-10-25"
        assert plan.source == "copy-last-week"
        assert plan.generated_at == NOW.isoformat()

    def test_scheduled_dates_move(self, this_week):
        plan = copy_plan_to_next_week(this_week, NOW)

        assert [w.scheduled_date for w in plan.workouts] == ["2026-10-20", "2026-10-22", None]

    def test_original_untouched(self, this_week):
        copy_plan_to_next_week(this_week, NOW)

        assert this_week.week_start == "2026-10-12"
        assert this_week.workouts[0].scheduled_date == "2026-10-13"

    def test_unparseable_date_kept(self, this_week):
        this_week.workouts[0].scheduled_date = "next tuesday"

        plan = copy_plan_to_next_week(this_week, NOW)

        assert plan.workouts[0].scheduled_date == "next tuesday"


# =============================================================================
# Scheduling
# =============================================================================


@pytest.mark.unit
class TestSchedulePlan:
    """Test putting a plan on the calendar."""

    def test_schedules_dated_workouts(self, client, this_week):
        result = SchedulePlanUseCase(client).execute(this_week)

        assert isinstance(result, ScheduleResult)
        assert result.scheduled == ["Push Day", "Tempo Intervals"]
        assert result.skipped == ["Mobility"]
        assert client.scheduled == [
            (100000001, date(2026, 10, 13)),
            (100000002, date(2026, 10, 15)),
        ]

    def test_invalid_date_skipped(self, client, this_week):
        this_week.workouts[0].scheduled_date = "someday"

        result = SchedulePlanUseCase(client).execute(this_week)

        assert "Push Day" in result.skipped
        assert result.scheduled == ["Tempo Intervals"]

    def test_unknown_workout_skipped(self, client, caplog):
        """An id missing from the account raises GarminWorkoutNotFound, which is skipped."""
        plan = WeeklyWorkoutPlan(
            week_start="2026-10-19",
            week_end="2026-10-25",
            workouts=[{"workoutId": 12345, "workoutName": "Gone", "scheduledDate": "2026-10-20"}],
        )

        with caplog.at_level("WARNING", logger="application.use_cases.plan_calendar"):
            result = SchedulePlanUseCase(client).execute(plan)

        assert result.skipped == ["Gone"]
        assert result.scheduled == []
        assert client.scheduled == []
        assert client.calls == [("schedule_workout", (12345, date(2026, 10, 20)))]
        assert "Failed to schedule workout: Gone (Workout 12345 not found)" in caplog.text

    def test_unknown_workout_does_not_stop_plan(self, client):
        plan = WeeklyWorkoutPlan(
            week_start="2026-10-19",
            week_end="2026-10-25",
            workouts=[
                {"workoutId": 12345, "workoutName": "Gone", "scheduledDate": "2026-10-20"},
                {"workoutId": 100000002, "workoutName": "Tempo Intervals",
                 "scheduledDate": "2026-10-22"},
            ],
        )

        result = SchedulePlanUseCase(client).execute(plan)

        assert result.skipped == ["Gone"]
        assert result.scheduled == ["Tempo Intervals"]
        assert client.scheduled == [(100000002, date(2026, 10, 22))]

    def test_in_memory_client_raises_not_found(self, client):
        with pytest.raises(GarminWorkoutNotFound) as exc_info:
            client.schedule_workout(12345, date(2026, 10, 20))

        assert exc_info.value.workout_id == 12345

    def test_running_workout_created_from_distance(self, client):
        plan = WeeklyWorkoutPlan(
            week_start="2026-10-19",
            week_end="2026-10-25",
            workouts=[{
                "workoutName": "Easy 5k",
                "workoutType": "running",
                "distanceMeters": 5000,
                "scheduledDate": "2026-10-21",
            }],
        )

        result = SchedulePlanUseCase(client).execute(plan)

        assert result.scheduled == ["Easy 5k"]
        created = client.get_workout(900000001)
        step = created["workoutSegments"][0]["workoutSteps"][0]
        assert step["endCondition"]["conditionTypeKey"] == "distance"
        assert step["endConditionValue"] == 5000
        assert client.scheduled == [(900000001, date(2026, 10, 21))]

    def test_workout_without_id_skipped(self, client):
        plan = WeeklyWorkoutPlan(
            week_start="2026-10-19",
            week_end="2026-10-25",
            workouts=[{"workoutName": "Leg Day", "workoutType": "strength_training",
                       "scheduledDate": "2026-10-21"}],
        )

        result = SchedulePlanUseCase(client).execute(plan)

        assert result.skipped == ["Leg Day"]
        assert [name for name, _ in client.calls] == []

    def test_client_error_skips_and_continues(self, this_week):
        failing = FailingWorkoutClient(sample_workouts())
        failing.fail_workout_ids({100000001})

        result = SchedulePlanUseCase(failing).execute(this_week)

        assert result.scheduled == ["Tempo Intervals"]
        assert result.skipped == ["Push Day", "Mobility"]

    def test_auth_error_propagates(self, this_week):
        failing = FailingWorkoutClient(sample_workouts())
        failing.simulate_auth_failure()

        with pytest.raises(GarminAuthenticationError):
            SchedulePlanUseCase(failing).execute(this_week)
