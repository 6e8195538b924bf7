"""
UploadWorkouts Use Case.

Sends planning workouts back to Garmin. Every workout is validated first.
Garmin has no update call for structured workouts, so an existing workout
is deleted and a new one created in its place (the new id differs; run an
export afterwards to sync ids back into the plan file).
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from application.exceptions import GarminAuthenticationError, GarminClientError
from application.ports import WorkoutClient
from domain.converters.workouts import workout_to_wire
from domain.exceptions import SchemaError
from domain.models import PlannedWorkout, format_exercise_name
from domain.services.step_validator import validate_workout_or_raise, validate_workouts

logger = logging.getLogger(__name__)

PREVIEW_STEPS = 3

WorkoutInput = Union[Mapping[str, Any], PlannedWorkout]


@dataclass
class UploadSummary:
    """Outcome of a batch upload."""

    successful: int = 0
    failed: int = 0
    failed_workouts: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.successful + self.failed


def _workout_name(workout: WorkoutInput, position: int) -> str:
    if isinstance(workout, PlannedWorkout):
        return workout.workout_name
    if isinstance(workout, Mapping) and workout.get("workoutName"):
        return str(workout["workoutName"])
    return f"Workout {position}"


class UploadWorkoutsUseCase:
    """
    Use case for uploading planning workouts to Garmin.

    Usage:
        >>> use_case = UploadWorkoutsUseCase(client=client)
        >>> summary = use_case.upload_many(load_workouts("data/workouts.json"))
        >>> print(f"{summary.successful}/{summary.total} uploaded")
    """

    def __init__(
        self,
        client: WorkoutClient,
        *,
        upload_delay_seconds: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._client = client
        self._upload_delay_seconds = upload_delay_seconds
        self._sleep = sleep

    def upload(self, workout: WorkoutInput, dry_run: bool = False) -> bool:
        """
        Validate and upload one workout.

        Args:
            workout: Planning workout (dict from a plan file, or model)
            dry_run: Validate and log a preview without calling Garmin

        Returns:
            True if the workout was uploaded (or would be, in a dry run)

        Raises:
            GarminAuthenticationError: If Garmin rejects the credentials
        """
        try:
            validate_workout_or_raise(workout)
            planned = PlannedWorkout.model_validate(workout)
        except SchemaError as e:
            logger.error(f"Validation failed: {e}")
            return False
        except ValidationError as e:
            logger.error(f"Validation failed: {e}")
            return False

        if dry_run:
            self._log_preview(planned)
            return True

        try:
            if planned.workout_id:
                logger.info(
                    f"Deleting existing workout: {planned.workout_name} (ID: {planned.workout_id})"
                )
                self._client.delete_workout(planned.workout_id)

            logger.info(f"Creating workout: {planned.workout_name}")
            created = self._client.create_workout(workout_to_wire(planned))
            logger.info(f"Created {planned.workout_name} (New ID: {created.get('workoutId')})")
            return True
        except GarminAuthenticationError:
            raise
        except GarminClientError as e:
            logger.error(f"Upload failed for {planned.workout_name}: {e}")
            return False

    def upload_many(
        self,
        workouts: Sequence[WorkoutInput],
        dry_run: bool = False,
    ) -> UploadSummary:
        """
        Upload a batch of workouts one at a time.

        In a dry run the whole batch is validated first and every error is
        reported at once; nothing is sent to Garmin. In a live run each
        workout is validated on its own, failures are counted and the batch
        continues.

        Raises:
            SchemaError: Dry run only, when any workout is invalid. ``errors``
                holds every message.
        """
        if dry_run:
            errors = validate_workouts(workouts)
            if errors:
                for error in errors:
                    logger.error(error)
                raise SchemaError(
                    f"Validation failed with {len(errors)} error(s)", errors=errors
                )
            summary = UploadSummary()
            for position, workout in enumerate(workouts, start=1):
                if self.upload(workout, dry_run=True):
                    summary.successful += 1
                else:
                    summary.failed += 1
                    summary.failed_workouts.append(_workout_name(workout, position))
            if not summary.failed:
                logger.info("Validation passed - all workouts ready to upload")
            return summary

        summary = UploadSummary()
        for position, workout in enumerate(workouts, start=1):
            name = _workout_name(workout, position)
            logger.info(f"[{position}/{len(workouts)}] {name}")

            if self.upload(workout):
                summary.successful += 1
            else:
                summary.failed += 1
                summary.failed_workouts.append(name)

            if position < len(workouts) and self._upload_delay_seconds > 0:
                self._sleep(self._upload_delay_seconds)

        logger.info(
            f"Upload summary: {summary.successful}/{summary.total} successful, "
            f"{summary.failed}/{summary.total} failed"
        )
        for name in summary.failed_workouts:
            logger.warning(f"Failed workout: {name}")
        return summary

    def upload_by_id(
        self,
        workouts: Sequence[WorkoutInput],
        workout_id: Union[int, str],
        dry_run: bool = False,
    ) -> Optional[bool]:
        """
        Upload the single workout in ``workouts`` whose id matches.

        Returns:
            Upload outcome, or None when no workout has that id
        """
        for workout in workouts:
            if isinstance(workout, PlannedWorkout):
                candidate = workout.workout_id
            elif isinstance(workout, Mapping):
                candidate = workout.get("workoutId")
            else:
                continue
            if candidate is not None and str(candidate) == str(workout_id):
                return self.upload(workout, dry_run=dry_run)
        logger.error(f"Workout with ID {workout_id} not found")
        return None

    @staticmethod
    def _log_preview(workout: PlannedWorkout) -> None:
        steps = workout.steps or []
        logger.info(f"Would upload: {workout.workout_name}")
        logger.info(f"  ID: {workout.workout_id or 'NEW (will be created)'}")
        logger.info(f"  Type: {workout.workout_type or 'N/A'}")
        if steps:
            logger.info(f"  Steps: {len(steps)}")
            for number, step in enumerate(steps[:PREVIEW_STEPS], start=1):
                label = format_exercise_name(step.exercise_name) if step.exercise_name else step.step_type
                logger.info(f"    {number}. {label}")
            if len(steps) > PREVIEW_STEPS:
                logger.info(f"    ... and {len(steps) - PREVIEW_STEPS} more")
