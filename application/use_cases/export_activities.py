"""
ExportActivities Use Case.

Fetches recent Garmin activities and summarizes them for weekly planning.
Detail fetches (which carry the self evaluation) are paced like workout
detail fetches. Week windows run Monday 00:00 to Sunday 23:59:59 UTC.
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from application.exceptions import GarminAuthenticationError, GarminClientError
from application.ports import WorkoutClient
from domain.converters.activities import transform_activities
from domain.models.activity import ExtractedActivities

logger = logging.getLogger(__name__)

LAST_WEEK = "last"
THIS_WEEK = "this"

DEFAULT_ACTIVITY_LIMIT = 20


def week_bounds(now: datetime, weeks_back: int = 0) -> Tuple[datetime, datetime]:
    """
    Start and end of the UTC week ``weeks_back`` weeks before ``now``'s.

    Examples:
        >>> start, end = week_bounds(datetime(2024, 3, 13, 9, tzinfo=timezone.utc), 1)
        >>> start.isoformat(), end.isoformat()
        ('2024-03-04T00:00:00+00:00', '2024-03-10T23:59:59.999999+00:00')
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    monday = now.date() - timedelta(days=now.weekday() + 7 * weeks_back)
    start = datetime(monday.year, monday.month, monday.day, tzinfo=timezone.utc)
    return start, start + timedelta(days=7) - timedelta(microseconds=1)


def activity_start(activity: Mapping[str, Any]) -> Optional[datetime]:
    """Parse an activity's start time; Garmin sends naive GMT timestamps."""
    value = (
        activity.get("startTimeGMT")
        or activity.get("startTimeLocal")
        or activity.get("startTime")
    )
    if not isinstance(value, str):
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def filter_activities_by_week(
    activities: Iterable[Mapping[str, Any]], start: datetime, end: datetime
) -> List[Mapping[str, Any]]:
    """Activities starting inside ``[start, end]``; undated ones are dropped."""
    selected = []
    for activity in activities:
        started = activity_start(activity)
        if started is not None and start <= started <= end:
            selected.append(activity)
    return selected


def build_activity_document(
    activities: Iterable[Mapping[str, Any]],
    week_start: date,
    week_end: date,
    now: datetime,
) -> ExtractedActivities:
    summaries = transform_activities(activities)
    return ExtractedActivities(
        extracted_at=now.isoformat(),
        week_start=week_start.isoformat(),
        week_end=week_end.isoformat(),
        total_activities=len(summaries),
        activities=summaries,
    )


@dataclass
class ExportActivitiesResult:
    """Result of the ExportActivities use case execution."""

    document: ExtractedActivities
    raw: List[Dict[str, Any]] = field(default_factory=list)
    failed_ids: List[str] = field(default_factory=list)


class ExportActivitiesUseCase:
    """
    Use case for exporting recent Garmin activities as a weekly summary.

    Orchestrates the following workflow:
    1. List the most recent activities
    2. Fetch each activity's details and merge them in (optional)
    3. Keep last week's or this week's activities (optional)
    4. Summarize each with ``transform_activity``

    The document's week bounds are last week's unless ``week`` selects
    this week. Raw output always holds everything fetched.

    Usage:
        >>> use_case = ExportActivitiesUseCase(client=client)
        >>> result = use_case.execute(now, week=LAST_WEEK)
        >>> print(f"Exported {result.document.total_activities} activities")
    """

    def __init__(
        self,
        client: WorkoutClient,
        *,
        fetch_delay_seconds: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._client = client
        self._fetch_delay_seconds = fetch_delay_seconds
        self._sleep = sleep

    def execute(
        self,
        now: datetime,
        limit: int = DEFAULT_ACTIVITY_LIMIT,
        include_details: bool = True,
        week: Optional[str] = None,
    ) -> ExportActivitiesResult:
        """
        Execute the export workflow.

        Args:
            now: Current time (UTC); week windows are computed from it
            limit: Number of recent activities to list
            include_details: Fetch details (self evaluation) per activity
            week: LAST_WEEK or THIS_WEEK to filter, None to keep everything

        Raises:
            GarminClientError: If the activity list itself cannot be fetched
        """
        logger.info(f"Fetching last {limit} activities from Garmin")
        listed = self._client.list_activities(0, limit)
        logger.info(f"Retrieved {len(listed)} activities")

        failed_ids: List[str] = []
        raw = self._with_details(listed, failed_ids) if include_details else list(listed)

        start, end = week_bounds(now, 0 if week == THIS_WEEK else 1)
        selected = raw if week is None else filter_activities_by_week(raw, start, end)
        if week is not None:
            logger.info(f"{len(selected)} of {len(raw)} activities fall in {week} week")

        document = build_activity_document(selected, start.date(), end.date(), now)
        return ExportActivitiesResult(document=document, raw=raw, failed_ids=failed_ids)

    def _with_details(
        self, listed: List[Dict[str, Any]], failed_ids: List[str]
    ) -> List[Dict[str, Any]]:
        merged_activities = []
        for position, activity in enumerate(listed):
            activity_id = activity.get("activityId")
            merged = dict(activity)
            try:
                details = self._client.get_activity(activity_id)
            except GarminAuthenticationError:
                raise
            except GarminClientError as e:
                logger.warning(f"Could not fetch details for activity {activity_id}: {e}")
                failed_ids.append(str(activity_id))
            else:
                if details:
                    merged.update(details)

            merged_activities.append(merged)
            if position < len(listed) - 1 and self._fetch_delay_seconds > 0:
                self._sleep(self._fetch_delay_seconds)
        return merged_activities

    @staticmethod
    def transform_raw(
        raw_activities: Iterable[Mapping[str, Any]],
        now: datetime,
        week_start: Optional[date] = None,
        week_end: Optional[date] = None,
    ) -> ExtractedActivities:
        """
        Summarize previously saved raw activities without touching the network.

        The week bounds default to last week unless both are given.
        """
        if week_start is None or week_end is None:
            start, end = week_bounds(now, 1)
            week_start, week_end = start.date(), end.date()
        return build_activity_document(raw_activities, week_start, week_end, now)
