"""
ExportWorkouts Use Case.

Fetches every workout on the Garmin account and converts it to planning
format. Detail fetches are paced so a large account does not trip Garmin's
rate limiting.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List

from application.exceptions import GarminAuthenticationError, GarminClientError
from application.ports import WorkoutClient
from domain.converters.workouts import workout_from_wire
from domain.models import PlannedWorkout

logger = logging.getLogger(__name__)


@dataclass
class ExportWorkoutsResult:
    """Result of the ExportWorkouts use case execution."""

    transformed: List[PlannedWorkout] = field(default_factory=list)
    raw: List[Dict[str, Any]] = field(default_factory=list)
    failed_ids: List[str] = field(default_factory=list)


class ExportWorkoutsUseCase:
    """
    Use case for exporting Garmin workouts to planning format.

    Orchestrates the following workflow:
    1. List workout summaries
    2. Fetch each workout's full step tree (optional)
    3. Convert each workout with ``workout_from_wire``

    A failed detail fetch is logged and the workout is kept with its
    summary fields only, so one bad workout never aborts an export.

    Usage:
        >>> use_case = ExportWorkoutsUseCase(client=client, fetch_delay_seconds=0.5)
        >>> result = use_case.execute()
        >>> print(f"Exported {len(result.transformed)} workouts")
    """

    def __init__(
        self,
        client: WorkoutClient,
        *,
        fetch_limit: int = 100,
        fetch_delay_seconds: float = 0.5,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            client: Remote workout service
            fetch_limit: Maximum number of workouts to list
            fetch_delay_seconds: Pause between detail fetches
            sleep: Pause function (replaced in tests)
        """
        self._client = client
        self._fetch_limit = fetch_limit
        self._fetch_delay_seconds = fetch_delay_seconds
        self._sleep = sleep

    def execute(self, include_details: bool = True) -> ExportWorkoutsResult:
        """
        Execute the export workflow.

        Args:
            include_details: Fetch each workout's steps (False keeps summaries only)

        Returns:
            ExportWorkoutsResult with both converted and raw workouts

        Raises:
            GarminClientError: If the workout list itself cannot be fetched
        """
        logger.info("Fetching workouts from Garmin")
        summaries = self._client.list_workouts(0, self._fetch_limit)
        logger.info(f"Retrieved {len(summaries)} workouts")

        if not include_details:
            return ExportWorkoutsResult(
                transformed=self.transform_raw(summaries),
                raw=list(summaries),
            )

        result = ExportWorkoutsResult()
        for position, summary in enumerate(summaries):
            workout_id = summary.get("workoutId")
            merged = dict(summary)
            try:
                details = self._client.get_workout(workout_id)
            except GarminAuthenticationError:
                raise
            except GarminClientError as e:
                logger.warning(f"Failed to fetch workout details for {workout_id}: {e}")
                result.failed_ids.append(str(workout_id))
            else:
                if details:
                    merged.update(details)
                else:
                    logger.warning(f"No workout details found for {workout_id}")

            result.raw.append(merged)
            result.transformed.append(workout_from_wire(merged))

            if position < len(summaries) - 1 and self._fetch_delay_seconds > 0:
                self._sleep(self._fetch_delay_seconds)

        logger.info(
            f"Exported {len(result.transformed)} workouts "
            f"({len(result.failed_ids)} without details)"
        )
        return result

    @staticmethod
    def transform_raw(raw_workouts: Iterable[Dict[str, Any]]) -> List[PlannedWorkout]:
        """Convert previously saved raw Garmin workouts without touching the network."""
        return [workout_from_wire(raw) for raw in raw_workouts]
