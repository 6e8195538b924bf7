"""
Command line interface for workout planner sync.

Usage:
    workout-sync export [-o data/workouts.json] [--raw]
    workout-sync transform data/workouts-raw.json [-o data/workouts.json]
    workout-sync validate data/workouts.json
    workout-sync upload data/workouts.json [--dry-run]
    workout-sync upload-single 123456789 [--file data/workouts.json] [--dry-run]
    workout-sync template [-o data/next-week.workouts.tmp.json]
    workout-sync copy-next-week data/this-week.json [-o data/next-week.workouts.tmp.json]
    workout-sync schedule data/next-week.json
    workout-sync export-activities [--limit 20] [--last-week | --this-week] [--raw]
    workout-sync transform-activities data/activities-raw.json [--week-start 2024-03-04 --week-end 2024-03-10]

Add ``--mock`` to any command to run against the built-in sample workouts
instead of a Garmin account (sample activities for the activity commands).
"""

import argparse
import logging
import sys
from datetime import date, datetime, timezone
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from application.exceptions import GarminClientError
from application.ports import WorkoutClient
from application.use_cases import (
    LAST_WEEK,
    THIS_WEEK,
    ExportActivitiesUseCase,
    ExportWorkoutsUseCase,
    SchedulePlanUseCase,
    UploadWorkoutsUseCase,
    build_next_week_template,
    copy_plan_to_next_week,
)
from backend.settings import Settings, get_settings
from domain.exceptions import WorkoutSyncError
from domain.models import WeeklyWorkoutPlan
from domain.services.step_validator import validate_weekly_plan, validate_workouts
from infrastructure.garmin import (
    GarminConnectClient,
    InMemoryWorkoutClient,
    sample_activities,
    sample_workouts,
)
from infrastructure.plan_files import (
    load_plan,
    load_raw_activities,
    load_workouts,
    save_document,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workout-sync",
        description="Export, edit and upload Garmin Connect workouts as flat plan files",
    )
    parser.add_argument(
        "--mock", action="store_true", help="Use built-in sample workouts instead of Garmin"
    )
    parser.add_argument("--log-level", help="Override LOG_LEVEL (e.g. DEBUG)")
    commands = parser.add_subparsers(dest="command", required=True)

    export = commands.add_parser("export", help="Fetch workouts from Garmin into a plan file")
    export.add_argument("-o", "--output", help="Output file (default: DATA_DIR/workouts.json)")
    export.add_argument("--raw", action="store_true", help="Also save the raw Garmin JSON")
    export.add_argument(
        "--summary-only", action="store_true", help="Skip fetching each workout's steps"
    )

    transform = commands.add_parser("transform", help="Convert a saved raw export offline")
    transform.add_argument("input", help="Raw Garmin workouts file")
    transform.add_argument("-o", "--output", help="Output file")

    validate = commands.add_parser("validate", help="Check a plan file without uploading")
    validate.add_argument("input", help="Workouts or weekly plan file")

    upload = commands.add_parser("upload", help="Upload every workout in a plan file")
    upload.add_argument("input", nargs="?", help="Workouts file (default: DATA_DIR/workouts.json)")
    upload.add_argument("--dry-run", action="store_true", help="Validate and preview only")

    single = commands.add_parser("upload-single", help="Upload one workout by id")
    single.add_argument("workout_id", help="workoutId in the plan file")
    single.add_argument("--file", help="Workouts file (default: DATA_DIR/workouts.json)")
    single.add_argument("--dry-run", action="store_true", help="Validate and preview only")

    template = commands.add_parser("template", help="Write a next-week plan template")
    template.add_argument("-o", "--output", help="Output file")

    copy_week = commands.add_parser("copy-next-week", help="Copy a weekly plan forward 7 days")
    copy_week.add_argument("input", help="Weekly plan file")
    copy_week.add_argument("-o", "--output", help="Output file")

    schedule = commands.add_parser("schedule", help="Schedule a weekly plan on the calendar")
    schedule.add_argument("input", help="Weekly plan file")

    activities = commands.add_parser(
        "export-activities", help="Summarize recent Garmin activities for weekly planning"
    )
    activities.add_argument(
        "--limit", type=int, default=20, help="Number of recent activities to fetch (default: 20)"
    )
    activities.add_argument(
        "-o", "--output", help="Output file (default: DATA_DIR/activities.json)"
    )
    activities.add_argument("--raw", action="store_true", help="Also save the raw Garmin JSON")
    activities.add_argument(
        "--summary-only", action="store_true", help="Skip fetching each activity's details"
    )
    window = activities.add_mutually_exclusive_group()
    window.add_argument("--last-week", action="store_true", help="Keep last week's activities only")
    window.add_argument("--this-week", action="store_true", help="Keep this week's activities only")

    transform_activities = commands.add_parser(
        "transform-activities", help="Summarize a saved raw activity export offline"
    )
    transform_activities.add_argument("input", help="Raw Garmin activities file")
    transform_activities.add_argument("-o", "--output", help="Output file")
    transform_activities.add_argument(
        "--week-start", type=date.fromisoformat, help="Week start (YYYY-MM-DD)"
    )
    transform_activities.add_argument(
        "--week-end", type=date.fromisoformat, help="Week end (YYYY-MM-DD)"
    )

    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_client(settings: Settings, mock: bool) -> WorkoutClient:
    if mock or settings.mock_mode:
        logger.info("Mock mode: using built-in sample workouts and activities")
        return InMemoryWorkoutClient(sample_workouts(), sample_activities(_now()))
    return GarminConnectClient.from_settings(settings)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _export_use_case(client: WorkoutClient, settings: Settings) -> ExportWorkoutsUseCase:
    return ExportWorkoutsUseCase(
        client,
        fetch_limit=settings.fetch_limit,
        fetch_delay_seconds=settings.fetch_delay_seconds,
    )


def _load_weekly_plan(path: str) -> WeeklyWorkoutPlan:
    data = load_plan(path)
    validate_weekly_plan(data)
    return WeeklyWorkoutPlan.model_validate(data)


def _raw_path(output: Path) -> Path:
    return output.with_name(f"{output.stem}-raw{output.suffix}")


def cmd_export(args, settings: Settings, client: WorkoutClient) -> int:
    result = _export_use_case(client, settings).execute(include_details=not args.summary_only)
    output = Path(args.output) if args.output else settings.workouts_path
    save_document(output, [workout.to_plan_dict() for workout in result.transformed])
    if args.raw:
        save_document(_raw_path(output), result.raw)
    print(f"Exported {len(result.transformed)} workouts to {output}")
    return 0


def _transformed_path(args, default: Path) -> Path:
    source = Path(args.input)
    if args.output:
        return Path(args.output)
    if "-raw" in source.name:
        return source.with_name(source.name.replace("-raw", ""))
    return default


def cmd_transform(args, settings: Settings) -> int:
    workouts = ExportWorkoutsUseCase.transform_raw(load_workouts(args.input))
    output = _transformed_path(args, settings.workouts_path)
    save_document(output, [workout.to_plan_dict() for workout in workouts])
    print(f"Transformed {len(workouts)} workouts to {output}")
    return 0


def cmd_validate(args, settings: Settings) -> int:
    workouts = load_workouts(args.input)
    errors = validate_workouts(workouts)
    if errors:
        for error in errors:
            print(error, file=sys.stderr)
        print(f"Validation failed with {len(errors)} error(s)", file=sys.stderr)
        return 1
    print(f"All {len(workouts)} workouts are valid")
    return 0


def cmd_upload(args, settings: Settings, client: WorkoutClient) -> int:
    path = args.input or settings.workouts_path
    workouts = load_workouts(path)
    use_case = UploadWorkoutsUseCase(client, upload_delay_seconds=settings.upload_delay_seconds)
    summary = use_case.upload_many(workouts, dry_run=args.dry_run)
    print(f"Successful: {summary.successful}/{summary.total}")
    if summary.failed:
        print(f"Failed: {summary.failed}/{summary.total}", file=sys.stderr)
        for name in summary.failed_workouts:
            print(f"  - {name}", file=sys.stderr)
        return 1
    return 0


def cmd_upload_single(args, settings: Settings, client: WorkoutClient) -> int:
    workouts = load_workouts(args.file or settings.workouts_path)
    use_case = UploadWorkoutsUseCase(client, upload_delay_seconds=settings.upload_delay_seconds)
    outcome = use_case.upload_by_id(workouts, args.workout_id, dry_run=args.dry_run)
    if outcome is None:
        print(f"Error: Workout with ID {args.workout_id} not found", file=sys.stderr)
        return 1
    return 0 if outcome else 1


def cmd_template(args, settings: Settings, client: WorkoutClient) -> int:
    result = _export_use_case(client, settings).execute()
    plan = build_next_week_template(result.transformed, _now())
    output = Path(args.output) if args.output else settings.next_week_plan_path
    save_document(output, plan.to_plan_dict())
    print(f"Next-week workout template saved to {output}")
    return 0


def cmd_copy_next_week(args, settings: Settings) -> int:
    plan = copy_plan_to_next_week(_load_weekly_plan(args.input), _now())
    output = Path(args.output) if args.output else settings.next_week_plan_path
    save_document(output, plan.to_plan_dict())
    print(f"Next-week workout plan saved to {output}")
    return 0


def cmd_schedule(args, settings: Settings, client: WorkoutClient) -> int:
    plan = _load_weekly_plan(args.input)
    result = SchedulePlanUseCase(client).execute(plan)
    print(f"Scheduled {len(result.scheduled)} workouts, skipped {len(result.skipped)}")
    return 0


def cmd_export_activities(args, settings: Settings, client: WorkoutClient) -> int:
    week = THIS_WEEK if args.this_week else LAST_WEEK if args.last_week else None
    use_case = ExportActivitiesUseCase(client, fetch_delay_seconds=settings.fetch_delay_seconds)
    result = use_case.execute(
        _now(), limit=args.limit, include_details=not args.summary_only, week=week
    )
    if not result.raw:
        print("No activities found", file=sys.stderr)
        return 1

    output = Path(args.output) if args.output else settings.activities_path
    save_document(output, result.document.to_plan_dict())
    if args.raw:
        save_document(_raw_path(output), result.raw)
    print(f"Exported {result.document.total_activities} activities to {output}")
    return 0


def cmd_transform_activities(args, settings: Settings) -> int:
    raw = load_raw_activities(args.input)
    if not raw:
        print("No activities found in file", file=sys.stderr)
        return 1
    document = ExportActivitiesUseCase.transform_raw(
        raw, _now(), week_start=args.week_start, week_end=args.week_end
    )
    output = _transformed_path(args, settings.activities_path)
    save_document(output, document.to_plan_dict())
    print(f"Transformed {document.total_activities} activities to {output}")
    return 0


OFFLINE_COMMANDS = {
    "transform": cmd_transform,
    "validate": cmd_validate,
    "copy-next-week": cmd_copy_next_week,
    "transform-activities": cmd_transform_activities,
}

CLIENT_COMMANDS = {
    "export": cmd_export,
    "upload": cmd_upload,
    "upload-single": cmd_upload_single,
    "template": cmd_template,
    "schedule": cmd_schedule,
    "export-activities": cmd_export_activities,
}


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    args = build_parser().parse_args(argv)
    if settings is None:
        settings = get_settings()
    _configure_logging(args.log_level or settings.log_level)

    try:
        if args.command in OFFLINE_COMMANDS:
            return OFFLINE_COMMANDS[args.command](args, settings)
        client = _build_client(settings, args.mock)
        return CLIENT_COMMANDS[args.command](args, settings, client)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        return 1
    except GarminClientError as e:
        print(f"Error: Garmin: {e}", file=sys.stderr)
        return 1
    except WorkoutSyncError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print(f"Error: Invalid plan file: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
