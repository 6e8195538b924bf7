"""
Test doubles and test data for workout planner sync.

- FailingWorkoutClient: in-memory client that fails selected calls
- garmin_steps: builders for canonical Garmin wire steps

Usage:
    from tests.fakes import FailingWorkoutClient
    from tests.fakes.garmin_steps import canonical_leaf, push_day_steps
"""

from tests.fakes.workout_client import FailingWorkoutClient

__all__ = [
    "FailingWorkoutClient",
]
