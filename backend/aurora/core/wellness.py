"""
Monthly wellness summary built from event mood ratings.

A day's mood is the average rating of the events starting on it, in the
user's local time. Days without rated events are untracked and break streaks.
"""
from calendar import monthrange
from collections import defaultdict
from datetime import date, timedelta, tzinfo
from typing import Dict, Iterable, List, Optional

from aurora.core.overlap import TimedEvent
from aurora.schemas.wellness import (
    CategoryMoodImpact,
    MoodDaySnapshot,
    MoodDistributionSlice,
    MoodStreaks,
    MoodTrendPoint,
    WellnessSummary,
)

POSITIVE_THRESHOLD = 4
NEGATIVE_THRESHOLD = 2


def _local_date(event: TimedEvent, tz: Optional[tzinfo]) -> date:
    return (event.start.astimezone(tz) if tz is not None else event.start).date()


def daily_moods(events: Iterable[TimedEvent], tz: Optional[tzinfo] = None) -> Dict[date, List[int]]:
    by_day: Dict[date, List[int]] = defaultdict(list)
    for event in events:
        if event.mood_rating is not None:
            by_day[_local_date(event, tz)].append(event.mood_rating)
    return by_day


def _average(values: List[int]) -> float:
    return round(sum(values) / len(values), 2)


def mood_streaks(days: List[date], averages: Dict[date, float]) -> MoodStreaks:
    streaks = MoodStreaks()
    positive = negative = 0
    for day in days:
        average = averages.get(day)
        positive = positive + 1 if average is not None and average >= POSITIVE_THRESHOLD else 0
        negative = negative + 1 if average is not None and average <= NEGATIVE_THRESHOLD else 0
        streaks.longest_positive = max(streaks.longest_positive, positive)
        streaks.longest_negative = max(streaks.longest_negative, negative)
    streaks.current_positive = positive
    streaks.current_negative = negative
    return streaks


def mood_distribution(ratings: List[int]) -> List[MoodDistributionSlice]:
    total = len(ratings)
    return [
        MoodDistributionSlice(
            mood_rating=rating,
            count=ratings.count(rating),
            percentage=round(ratings.count(rating) / total, 4) if total else 0.0,
        )
        for rating in range(1, 6)
    ]


def category_impacts(events: Iterable[TimedEvent]) -> List[CategoryMoodImpact]:
    by_category: Dict[object, List[TimedEvent]] = defaultdict(list)
    for event in events:
        if event.mood_rating is not None:
            by_category[event.category_id].append(event)

    impacts = [
        CategoryMoodImpact(
            category_id=category_id,
            category_name=rated[0].category_name or "Sin categoría",
            average_mood=_average([e.mood_rating for e in rated]),
            event_count=len(rated),
            positive_count=sum(1 for e in rated if e.mood_rating >= POSITIVE_THRESHOLD),
            negative_count=sum(1 for e in rated if e.mood_rating <= NEGATIVE_THRESHOLD),
        )
        for category_id, rated in by_category.items()
    ]
    impacts.sort(key=lambda c: (-c.average_mood, -c.event_count))
    return impacts


def wellness_summary(
    events: Iterable[TimedEvent],
    year: int,
    month: int,
    tz: Optional[tzinfo] = None,
) -> WellnessSummary:
    """
    Summarise one calendar month of event moods.

    Events starting outside the month (in local time) are ignored, so callers
    can pass a slightly wider range than the month itself.
    """
    days_in_month = monthrange(year, month)[1]
    first = date(year, month, 1)
    days = [first + timedelta(days=offset) for offset in range(days_in_month)]

    events = [e for e in events if _local_date(e, tz).replace(day=1) == first]
    by_day = daily_moods(events, tz)
    averages = {day: _average(moods) for day, moods in by_day.items()}
    ratings = [rating for moods in by_day.values() for rating in moods]

    summary = WellnessSummary(
        year=year,
        month=month,
        mood_trend=[
            MoodTrendPoint(date=day, average_mood=averages.get(day), entries=len(by_day.get(day, [])))
            for day in days
        ],
        mood_distribution=mood_distribution(ratings),
        streaks=mood_streaks(days, averages),
        category_impacts=category_impacts(events),
        total_tracked_days=len(averages),
        has_event_mood_data=bool(ratings),
    )
    if not ratings:
        return summary

    summary.average_mood = _average(ratings)
    summary.positive_days = sum(1 for a in averages.values() if a >= POSITIVE_THRESHOLD)
    summary.negative_days = sum(1 for a in averages.values() if a <= NEGATIVE_THRESHOLD)
    summary.neutral_days = len(averages) - summary.positive_days - summary.negative_days
    summary.tracking_coverage = round(len(averages) / days_in_month, 4)

    best = max(sorted(averages), key=lambda d: averages[d])
    worst = min(sorted(averages), key=lambda d: averages[d])
    summary.best_day = MoodDaySnapshot(date=best, average_mood=averages[best], entries=len(by_day[best]))
    summary.worst_day = MoodDaySnapshot(date=worst, average_mood=averages[worst], entries=len(by_day[worst]))
    return summary
