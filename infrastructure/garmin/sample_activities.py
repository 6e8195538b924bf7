"""
Sample Garmin activities for ``--mock`` runs.

Shaped like Garmin Connect's activity list entries, with the detail-only
``summaryDTO`` block attached. Start times are placed relative to ``now``
so the last-week and this-week filters have something to find: a ride this
week, a lap run and a strength session last week, and yoga the week
before.
"""
from datetime import datetime, time, timedelta, timezone
from typing import Any, Dict, List, Optional

GARMIN_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _start(monday: datetime, days: int, hour: int, minute: int = 0) -> str:
    return (monday + timedelta(days=days, hours=hour, minutes=minute)).strftime(GARMIN_TIME_FORMAT)


def _bench_press() -> Dict[str, Any]:
    # 225 lb top weight
    return {
        "category": "BENCH_PRESS",
        "subCategory": "BARBELL_BENCH_PRESS",
        "sets": 5,
        "reps": 25,
        "maxWeight": 102058,
        "volume": 2551450,
    }


def _biceps_curl() -> Dict[str, Any]:
    return {
        "category": "CURL",
        "subCategory": "DUMBBELL_BICEPS_CURL",
        "sets": 3,
        "reps": 30,
        "maxWeight": 13608,
        "volume": 408240,
    }


def sample_activities(now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """Sample activities, newest first, dated around ``now`` (UTC)."""
    now = now or datetime.now(timezone.utc)
    today = now.date()
    monday = datetime.combine(today - timedelta(days=today.weekday()), time())

    return [
        {
            "activityId": 7001,
            "activityName": "Lunch Ride",
            "activityType": {"typeId": 10, "typeKey": "road_biking"},
            "startTimeGMT": _start(monday, 0, 11, 30),
            "duration": 3600.0,
            "distance": 30000.0,
            "averageSpeed": 8.0,
            "averageHR": 132.0,
            "maxHR": 158.0,
            "elevationGain": 240.0,
            "aerobicTrainingEffect": 2.8,
            "anaerobicTrainingEffect": 0.4,
            "trainingEffectLabel": "AEROBIC_BASE",
            "differenceBodyBattery": -12,
            "moderateIntensityMinutes": 48,
            "vigorousIntensityMinutes": 6,
            "summaryDTO": {"directWorkoutFeel": 75, "directWorkoutRpe": 40},
        },
        {
            "activityId": 7002,
            "activityName": "Tempo Intervals",
            "activityType": {"typeId": 1, "typeKey": "running"},
            "startTimeGMT": _start(monday, -4, 7, 15),
            "duration": 2520.0,
            "distance": 8000.0,
            "averageSpeed": 4.0,
            "averageHR": 158.0,
            "maxHR": 181.0,
            "averageRunningCadenceInStepsPerMinute": 176.0,
            "elevationGain": 35.0,
            "aerobicTrainingEffect": 3.6,
            "anaerobicTrainingEffect": 2.1,
            "trainingEffectLabel": "TEMPO",
            "differenceBodyBattery": -18,
            "moderateIntensityMinutes": 12,
            "vigorousIntensityMinutes": 30,
            "laps": [
                {
                    "distance": 2000.0,
                    "duration": 600.0,
                    "averageSpeed": 3.3333333333,
                    "averageHR": 145.0,
                    "maxHR": 155.0,
                },
                {
                    "distance": 4000.0,
                    "duration": 960.0,
                    "averageHR": 168.0,
                    "maxHR": 181.0,
                },
                {"distance": 2000.0, "duration": 840.0, "averageHR": 150.0},
                {"splitType": "RWD_WALK", "distance": 200.0, "duration": 120.0},
            ],
            "summaryDTO": {"directWorkoutFeel": 50, "directWorkoutRpe": 70},
        },
        {
            "activityId": 7003,
            "activityName": "Chest Day",
            "activityType": {"typeId": 13, "typeKey": "strength_training"},
            "startTimeGMT": _start(monday, -6, 18),
            "duration": 3300.0,
            "averageHR": 112.0,
            "maxHR": 149.0,
            "totalSets": 8,
            "totalReps": 55,
            "summarizedExerciseSets": [_bench_press(), _biceps_curl()],
            "summaryDTO": {"directWorkoutFeel": 100, "directWorkoutRpe": 80},
        },
        {
            "activityId": 7004,
            "activityName": "Evening Yoga",
            "activityType": {"typeId": 43, "typeKey": "yoga"},
            "startTimeGMT": _start(monday, -10, 19),
            "duration": 2700.0,
            "averageHR": 88.0,
            "maxHR": 104.0,
        },
    ]
