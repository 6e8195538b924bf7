"""
Application-layer exceptions.

These exceptions are raised by workout client adapters and handled by the
use cases and the CLI.
"""

from domain.exceptions import WorkoutSyncError


class GarminClientError(WorkoutSyncError):
    """Base exception for Garmin client errors."""

    pass


class GarminAuthenticationError(GarminClientError):
    """Raised when Garmin credentials are missing or rejected.

    Use cases let this propagate instead of counting it as a single failed
    workout, since every later call would fail the same way.
    """

    pass


class GarminWorkoutNotFound(GarminClientError):
    """Raised when a workout id does not exist on the account."""

    def __init__(self, workout_id):
        super().__init__(f"Workout {workout_id} not found")
        self.workout_id = workout_id
