"""
Garmin Connect client for workout sync.

Wraps ``garminconnect.Garmin`` behind the WorkoutClient port. Login is
lazy: the first call authenticates and the session is reused afterwards.
Delete and schedule go through the underlying garth session because
garminconnect has no wrappers for those workout-service endpoints.
"""

import logging
from datetime import date
from typing import Any, Callable, Dict, List, Optional, TypeVar

from garminconnect import (
    Garmin,
    GarminConnectAuthenticationError,
    GarminConnectConnectionError,
    GarminConnectTooManyRequestsError,
)
from garth.exc import GarthHTTPError

from application.exceptions import GarminAuthenticationError, GarminClientError
from application.ports import WorkoutId

logger = logging.getLogger(__name__)

T = TypeVar("T")

WORKOUT_SERVICE = "/workout-service"

_LIBRARY_ERRORS = (
    GarminConnectConnectionError,
    GarminConnectTooManyRequestsError,
    GarthHTTPError,
)


class GarminConnectClient:
    """
    WorkoutClient backed by a real Garmin Connect account.

    Usage:
        >>> client = GarminConnectClient.from_settings(get_settings())
        >>> summaries = client.list_workouts(limit=20)
    """

    def __init__(
        self,
        email: str,
        password: str,
        *,
        api_factory: Callable[[str, str], Garmin] = Garmin,
    ):
        """
        Initialize the client.

        Args:
            email: Garmin Connect account email
            password: Garmin Connect account password
            api_factory: Builds the underlying Garmin API object (replaced in tests)
        """
        self._email = email
        self._password = password
        self._api_factory = api_factory
        self._api: Optional[Garmin] = None

    @classmethod
    def from_settings(cls, settings) -> "GarminConnectClient":
        """
        Build a client from application settings.

        Raises:
            GarminAuthenticationError: If credentials are not configured
        """
        if not settings.garmin_email or not settings.garmin_password:
            raise GarminAuthenticationError(
                "Garmin credentials not found. Set GARMIN_EMAIL and GARMIN_PASSWORD "
                "in the environment or .env, or run with --mock."
            )
        return cls(settings.garmin_email, settings.garmin_password)

    def _client(self) -> Garmin:
        if self._api is None:
            api = self._api_factory(self._email, self._password)
            try:
                api.login()
            except GarminConnectAuthenticationError as e:
                logger.error(f"Garmin login failed: {e}")
                raise GarminAuthenticationError("Failed to authenticate with Garmin") from e
            except _LIBRARY_ERRORS as e:
                logger.error(f"Garmin login unavailable: {e}")
                raise GarminClientError(f"Garmin Connect is not available: {e}") from e
            logger.info("Authenticated with Garmin Connect")
            self._api = api
        return self._api

    def _call(self, action: str, call: Callable[[Garmin], T]) -> T:
        api = self._client()
        try:
            return call(api)
        except GarminConnectAuthenticationError as e:
            raise GarminAuthenticationError(f"Garmin session rejected while trying to {action}") from e
        except _LIBRARY_ERRORS as e:
            logger.error(f"Garmin Connect error ({action}): {e}")
            raise GarminClientError(f"Failed to {action}: {e}") from e

    # =========================================================================
    # WorkoutClient Protocol Methods
    # =========================================================================

    def list_workouts(self, start: int = 0, limit: int = 100) -> List[Dict[str, Any]]:
        workouts = self._call("list workouts", lambda api: api.get_workouts(start, limit))
        return list(workouts or [])

    def get_workout(self, workout_id: WorkoutId) -> Optional[Dict[str, Any]]:
        return self._call(
            f"fetch workout {workout_id}",
            lambda api: api.get_workout_by_id(workout_id),
        )

    def create_workout(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        created = self._call(
            f"create workout {payload.get('workoutName')}",
            lambda api: api.upload_workout(payload),
        )
        return created or {}

    def delete_workout(self, workout_id: WorkoutId) -> bool:
        self._call(
            f"delete workout {workout_id}",
            lambda api: api.garth.delete(
                "connect", f"{WORKOUT_SERVICE}/workout/{workout_id}", api=True
            ),
        )
        return True

    def schedule_workout(self, workout_id: WorkoutId, on: date) -> Dict[str, Any]:
        response = self._call(
            f"schedule workout {workout_id}",
            lambda api: api.garth.post(
                "connect",
                f"{WORKOUT_SERVICE}/schedule/{workout_id}",
                json={"date": on.isoformat()},
                api=True,
            ),
        )
        if response is None or not response.content:
            return {}
        return response.json()

    def list_activities(self, start: int = 0, limit: int = 20) -> List[Dict[str, Any]]:
        activities = self._call("list activities", lambda api: api.get_activities(start, limit))
        return list(activities or [])

    def get_activity(self, activity_id: WorkoutId) -> Optional[Dict[str, Any]]:
        return self._call(
            f"fetch activity {activity_id}",
            lambda api: api.get_activity(activity_id),
        )
