"""
Domain exceptions for the workout codec.

SchemaError is raised by the strict validator when a hand-edited planning
workout breaks a field or cross-field rule. FormatError is raised when an
input document cannot be read as workouts at all (bad JSON/YAML, wrong
top-level shape).

Both derive from WorkoutSyncError so callers such as the CLI can catch the
whole family in one place.
"""

from typing import List, Optional


class WorkoutSyncError(Exception):
    """Base exception for workout codec and sync errors."""

    pass


class SchemaError(WorkoutSyncError):
    """
    A planning workout or step failed validation.

    The message is prefixed with the workout name and 1-based step index
    when they are known, e.g.
    ``Workout 'Chest Day': Step 2: Mismatch between 'reps' (8) and 'endConditionValue' (10)``.
    """

    def __init__(
        self,
        detail: str,
        *,
        workout_name: Optional[str] = None,
        step_index: Optional[int] = None,
        errors: Optional[List[str]] = None,
    ):
        self.detail = detail
        self.workout_name = workout_name
        self.step_index = step_index
        self.errors = list(errors) if errors else []
        super().__init__(self._compose())

    def _compose(self) -> str:
        parts = []
        if self.workout_name is not None:
            parts.append(f"Workout '{self.workout_name}'")
        if self.step_index is not None:
            parts.append(f"Step {self.step_index}")
        parts.append(self.detail)
        return ": ".join(parts)


class FormatError(WorkoutSyncError):
    """An input document is malformed or has the wrong top-level shape."""

    def __init__(self, message: str, *, path: Optional[str] = None):
        self.path = path
        super().__init__(message)
