"""
Garmin Connect adapters for the WorkoutClient port.

- GarminConnectClient: real account via the garminconnect library
- InMemoryWorkoutClient: seeded fixture store for --mock runs and tests
- sample_workouts, sample_activities: the data --mock runs are seeded with
"""

from infrastructure.garmin.connect_client import GarminConnectClient
from infrastructure.garmin.in_memory_client import InMemoryWorkoutClient
from infrastructure.garmin.sample_activities import sample_activities
from infrastructure.garmin.sample_workouts import sample_workouts

__all__ = [
    "GarminConnectClient",
    "InMemoryWorkoutClient",
    "sample_activities",
    "sample_workouts",
]
