"""
In-memory Garmin workout client.

Used by ``--mock`` runs and by tests. Stores workouts in a dict keyed by
workout id, activities in a list (newest first), and keeps a log of calls
so tests can assert on them.
"""
import copy
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from application.exceptions import GarminWorkoutNotFound
from application.ports import WorkoutId

FIRST_GENERATED_ID = 900000001
DETAIL_KEY = "summaryDTO"


class InMemoryWorkoutClient:
    """
    In-memory implementation of WorkoutClient.

    Usage:
        client = InMemoryWorkoutClient()
        client.seed([{"workoutId": 1, "workoutName": "Push", "workoutSegments": [...]}])
        client.get_workout(1)
    """

    def __init__(
        self,
        workouts: Optional[List[Dict[str, Any]]] = None,
        activities: Optional[List[Dict[str, Any]]] = None,
    ):
        self._workouts: Dict[str, Dict[str, Any]] = {}
        self._next_id = FIRST_GENERATED_ID
        self.calls: List[Tuple[str, Any]] = []
        self._activities: List[Dict[str, Any]] = copy.deepcopy(activities or [])
        self.scheduled: List[Tuple[WorkoutId, date]] = []
        if workouts:
            self.seed(workouts)

    def reset(self) -> None:
        """Clear stored workouts and activities along with recorded calls."""
        self._workouts.clear()
        self._activities.clear()
        self.calls.clear()
        self.scheduled.clear()

    def seed(self, workouts: List[Dict[str, Any]]) -> None:
        """
        Seed the store with Garmin workout dicts.

        Workouts without a ``workoutId`` are given a generated one.
        """
        for workout in workouts:
            workout_id = workout.get("workoutId") or self._allocate_id()
            self._workouts[str(workout_id)] = {
                **copy.deepcopy(workout),
                "workoutId": workout_id,
            }

    def get_all(self) -> List[Dict[str, Any]]:
        """Get all stored workouts (test helper)."""
        return [copy.deepcopy(workout) for workout in self._workouts.values()]

    def _allocate_id(self) -> int:
        workout_id = self._next_id
        self._next_id += 1
        return workout_id

    # =========================================================================
    # WorkoutClient Protocol Methods
    # =========================================================================

    def list_workouts(self, start: int = 0, limit: int = 100) -> List[Dict[str, Any]]:
        self.calls.append(("list_workouts", (start, limit)))
        summaries = [
            {
                key: value
                for key, value in workout.items()
                if key != "workoutSegments"
            }
            for workout in self._workouts.values()
        ]
        return copy.deepcopy(summaries[start : start + limit])

    def get_workout(self, workout_id: WorkoutId) -> Optional[Dict[str, Any]]:
        self.calls.append(("get_workout", workout_id))
        workout = self._workouts.get(str(workout_id))
        return copy.deepcopy(workout) if workout else None

    def create_workout(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("create_workout", payload.get("workoutName")))
        workout_id = self._allocate_id()
        stored = {**copy.deepcopy(payload), "workoutId": workout_id}
        self._workouts[str(workout_id)] = stored
        return copy.deepcopy(stored)

    def delete_workout(self, workout_id: WorkoutId) -> bool:
        self.calls.append(("delete_workout", workout_id))
        return self._workouts.pop(str(workout_id), None) is not None

    def schedule_workout(self, workout_id: WorkoutId, on: date) -> Dict[str, Any]:
        self.calls.append(("schedule_workout", (workout_id, on)))
        workout = self._workouts.get(str(workout_id))
        if workout is None:
            raise GarminWorkoutNotFound(workout_id)
        self.scheduled.append((workout_id, on))
        return {
            "workoutScheduleId": len(self.scheduled),
            "calendarDate": on.isoformat(),
            "workout": {
                "workoutId": workout["workoutId"],
                "workoutName": workout.get("workoutName"),
            },
        }

    def list_activities(self, start: int = 0, limit: int = 20) -> List[Dict[str, Any]]:
        self.calls.append(("list_activities", (start, limit)))
        # the activity list has no detail block; get_activity adds it
        listed = [
            {key: value for key, value in activity.items() if key != DETAIL_KEY}
            for activity in self._activities[start : start + limit]
        ]
        return copy.deepcopy(listed)

    def get_activity(self, activity_id: WorkoutId) -> Optional[Dict[str, Any]]:
        self.calls.append(("get_activity", activity_id))
        for activity in self._activities:
            if str(activity.get("activityId")) == str(activity_id):
                return copy.deepcopy(activity)
        return None
