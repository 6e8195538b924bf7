"""
Application Use Cases for workout planner sync.

Use cases orchestrate the domain converters and the WorkoutClient port.
Dependencies are injected via constructors for testability.

Usage:
    from application.use_cases import (
        ExportActivitiesUseCase,
        ExportWorkoutsUseCase,
        UploadWorkoutsUseCase,
        SchedulePlanUseCase,
    )

    # Export every workout on the account
    result = ExportWorkoutsUseCase(client=client).execute()

    # Summarize last week's activities
    result = ExportActivitiesUseCase(client=client).execute(now, week=LAST_WEEK)

    # Upload a plan file's workouts
    summary = UploadWorkoutsUseCase(client=client).upload_many(workouts)

    # Schedule a weekly plan
    SchedulePlanUseCase(client=client).execute(plan)
"""

from application.use_cases.export_activities import (
    LAST_WEEK,
    THIS_WEEK,
    ExportActivitiesResult,
    ExportActivitiesUseCase,
    week_bounds,
)
from application.use_cases.export_workouts import (
    ExportWorkoutsResult,
    ExportWorkoutsUseCase,
)
from application.use_cases.plan_calendar import (
    ScheduleResult,
    SchedulePlanUseCase,
    build_next_week_template,
    copy_plan_to_next_week,
    next_week_dates,
    shift_date,
)
from application.use_cases.upload_workouts import (
    UploadSummary,
    UploadWorkoutsUseCase,
)

__all__ = [
    # ExportWorkouts
    "ExportWorkoutsUseCase",
    "ExportWorkoutsResult",
    # ExportActivities
    "ExportActivitiesUseCase",
    "ExportActivitiesResult",
    "LAST_WEEK",
    "THIS_WEEK",
    "week_bounds",
    # UploadWorkouts
    "UploadWorkoutsUseCase",
    "UploadSummary",
    # Weekly plans
    "SchedulePlanUseCase",
    "ScheduleResult",
    "build_next_week_template",
    "copy_plan_to_next_week",
    "next_week_dates",
    "shift_date",
]
