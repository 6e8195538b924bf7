"""
Ports for workout planner sync.

The use cases talk to Garmin Connect only through the WorkoutClient
protocol. Implementations live in infrastructure/garmin/:
- InMemoryWorkoutClient: seeded fixture store for --mock runs and tests
- GarminConnectClient: the real account, via the garminconnect library

Usage:
    from application.ports import WorkoutClient

    class ExportWorkoutsUseCase:
        def __init__(self, client: WorkoutClient):
            self._client = client
"""

from application.ports.workout_client import WorkoutClient, WorkoutId

__all__ = [
    "WorkoutClient",
    "WorkoutId",
]
