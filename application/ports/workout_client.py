"""
Workout Client Interface (Port).

This module defines the capability interface for the remote Garmin
service: workouts and their calendar, plus recorded activities. The
codec never calls it; the use cases do.
"""
from datetime import date
from typing import Any, Dict, List, Optional, Protocol, Union

WorkoutId = Union[int, str]


class WorkoutClient(Protocol):
    """
    Abstract interface for a Garmin-Connect-like workout service.

    Payloads are Garmin's raw JSON dicts (camelCase keys, nested
    ``workoutSegments``). Implementations raise GarminClientError (or a
    subclass) when the service cannot complete a call.
    """

    def list_workouts(self, start: int = 0, limit: int = 100) -> List[Dict[str, Any]]:
        """
        List workout summaries.

        Args:
            start: Offset into the account's workout list
            limit: Maximum number of workouts to return

        Returns:
            Summary dicts (workoutId, workoutName, sportType, ...), no steps
        """
        ...

    def get_workout(self, workout_id: WorkoutId) -> Optional[Dict[str, Any]]:
        """
        Fetch one workout's full step tree.

        Returns:
            Workout detail dict, or None if the service returned nothing
        """
        ...

    def create_workout(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a workout.

        Args:
            payload: Garmin workout JSON as built by ``workout_to_wire``

        Returns:
            Created workout as stored, including its new ``workoutId``
        """
        ...

    def delete_workout(self, workout_id: WorkoutId) -> bool:
        """
        Delete a workout.

        Returns:
            True if a workout was deleted
        """
        ...

    def schedule_workout(self, workout_id: WorkoutId, on: date) -> Dict[str, Any]:
        """
        Put a workout on the account calendar.

        Args:
            workout_id: Existing workout id
            on: Calendar date

        Returns:
            Schedule entry as returned by the service
        """
        ...

    def list_activities(self, start: int = 0, limit: int = 20) -> List[Dict[str, Any]]:
        """
        List recent activities, newest first.

        Returns:
            Activity dicts as Garmin lists them (activityId, activityType, ...)
        """
        ...

    def get_activity(self, activity_id: WorkoutId) -> Optional[Dict[str, Any]]:
        """
        Fetch one activity's details (self evaluation under ``summaryDTO``).

        Returns:
            Activity detail dict, or None if the service returned nothing
        """
        ...
