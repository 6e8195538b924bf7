"""
Weekly plan workflows: next-week templates, copying a plan forward a
week, and scheduling a plan on the Garmin calendar.

Week boundaries are Monday to Sunday. Callers pass ``now`` in UTC.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Iterable, List, Optional, Tuple

from application.exceptions import GarminAuthenticationError, GarminClientError
from application.ports import WorkoutClient
from domain.converters.workouts import workout_to_wire
from domain.models import PlannedWorkout, PlanStep, WeeklyWorkoutPlan
from domain.models.codes import EndCondition, StepType, TargetType

logger = logging.getLogger(__name__)

TEMPLATE_SOURCE = "garmin-workouts-template"
COPY_SOURCE = "copy-last-week"
DAYS_PER_WEEK = 7


def next_week_dates(today: date) -> Tuple[date, date]:
    """
    Monday and Sunday of the week after ``today``.

    Examples:
        >>> next_week_dates(date(2024, 3, 13))
        (datetime.date(2024, 3, 18), datetime.date(2024, 3, 24))
    """
    this_monday = today - timedelta(days=today.weekday())
    week_start = this_monday + timedelta(days=DAYS_PER_WEEK)
    return week_start, week_start + timedelta(days=DAYS_PER_WEEK - 1)


def _parse_date(value: Any) -> Optional[date]:
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def shift_date(value: Any, days: int) -> Any:
    """Shift an ISO date string by ``days``; anything unparseable comes back unchanged."""
    parsed = _parse_date(value)
    if parsed is None:
        return value
    return (parsed + timedelta(days=days)).isoformat()


def build_next_week_template(
    workouts: Iterable[PlannedWorkout], now: datetime
) -> WeeklyWorkoutPlan:
    """Template for next week holding every workout, none of them scheduled yet."""
    week_start, week_end = next_week_dates(now.date())
    return WeeklyWorkoutPlan(
        generated_at=now.isoformat(),
        week_start=week_start.isoformat(),
        week_end=week_end.isoformat(),
        source=TEMPLATE_SOURCE,
        workouts=[
            PlannedWorkout(
                workout_id=workout.workout_id,
                workout_name=workout.workout_name,
                workout_type=workout.workout_type,
                description=workout.description,
                steps=workout.steps,
            )
            for workout in workouts
        ],
    )


def copy_plan_to_next_week(plan: WeeklyWorkoutPlan, now: datetime) -> WeeklyWorkoutPlan:
    """Same plan one week later: week bounds and every scheduled date move by 7 days."""
    return plan.model_copy(
        update={
            "generated_at": now.isoformat(),
            "week_start": shift_date(plan.week_start, DAYS_PER_WEEK),
            "week_end": shift_date(plan.week_end, DAYS_PER_WEEK),
            "source": COPY_SOURCE,
            "workouts": [
                workout.model_copy(
                    update={
                        "scheduled_date": shift_date(workout.scheduled_date, DAYS_PER_WEEK)
                        if workout.scheduled_date
                        else None
                    }
                )
                for workout in plan.workouts
            ],
        }
    )


@dataclass
class ScheduleResult:
    """Outcome of scheduling a weekly plan."""

    scheduled: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


class SchedulePlanUseCase:
    """
    Put every workout of a weekly plan on the Garmin calendar.

    Workouts without a usable ``scheduledDate`` are skipped. A running
    workout with no ``workoutId`` but a ``distanceMeters`` is created first
    as a single distance step. Failures are logged and the next workout is
    tried.
    """

    def __init__(self, client: WorkoutClient) -> None:
        self._client = client

    def execute(self, plan: WeeklyWorkoutPlan) -> ScheduleResult:
        result = ScheduleResult()
        for workout in plan.workouts:
            name = workout.workout_name
            if not workout.scheduled_date:
                logger.warning(f"Skipping workout without scheduledDate: {name}")
                result.skipped.append(name)
                continue

            on = _parse_date(workout.scheduled_date)
            if on is None:
                logger.warning(f"Invalid scheduledDate for workout: {name}")
                result.skipped.append(name)
                continue

            try:
                workout_id = workout.workout_id or self._create_running_workout(workout)
                if not workout_id:
                    logger.warning(f"Missing workoutId for workout: {name}")
                    result.skipped.append(name)
                    continue

                self._client.schedule_workout(workout_id, on)
            except GarminAuthenticationError:
                raise
            except GarminClientError as e:
                logger.warning(f"Failed to schedule workout: {name} ({e})")
                result.skipped.append(name)
                continue

            logger.info(f"Scheduled workout: {name} on {on.isoformat()}")
            result.scheduled.append(name)
        return result

    def _create_running_workout(self, workout: PlannedWorkout) -> Optional[Any]:
        if workout.workout_type != "running" or not workout.distance_meters:
            return None

        single_run = PlannedWorkout(
            workout_name=workout.workout_name,
            workout_type="running",
            description=workout.description or "",
            steps=[
                PlanStep(
                    step_type=StepType.INTERVAL.value,
                    end_condition=EndCondition.DISTANCE.value,
                    end_condition_value=workout.distance_meters,
                    target_type=TargetType.NO_TARGET.value,
                )
            ],
        )
        created = self._client.create_workout(workout_to_wire(single_run))
        logger.info(f"Created running workout: {workout.workout_name}")
        return created.get("workoutId")
