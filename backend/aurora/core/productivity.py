"""
Mood-based productivity statistics.

A productivity score is the average mood mapped from the 1..5 scale onto
0..100. Hourly averages are weighted by how many minutes of each rated
event fall inside the hour, in the user's local time.
"""
from collections import defaultdict
from datetime import datetime, timedelta, tzinfo
from typing import Dict, Iterable, List, Optional

from aurora.core.overlap import TimedEvent
from aurora.schemas.productivity import (
    CategoryProductivity,
    DailyProductivity,
    HourlyProductivity,
    HourWindow,
    ProductivityAnalysis,
)

GOLDEN_HOUR_MIN_SCORE = 60.0
LOW_ENERGY_MAX_SCORE = 40.0

DAY_NAMES = ["Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado", "Domingo"]


def mood_score(mood: float) -> float:
    """Map a 1..5 mood onto 0..100."""
    return round(max(0.0, min(1.0, (mood - 1) / 4.0)) * 100, 2)


def time_of_day(hour: int) -> str:
    if 5 <= hour < 12:
        return "Mañana"
    if 12 <= hour < 14:
        return "Mediodía"
    if 14 <= hour < 20:
        return "Tarde"
    if 20 <= hour < 24:
        return "Noche"
    return "Madrugada"


def _hour_segments(event: TimedEvent, tz: Optional[tzinfo]):
    """Yield (local hour, minutes) for each clock hour the event covers."""
    cursor = event.start.astimezone(tz) if tz else event.start
    end = event.end.astimezone(tz) if tz else event.end
    while cursor < end:
        hour_end = cursor.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)
        segment_end = min(hour_end, end)
        yield cursor.hour, (segment_end - cursor).total_seconds() / 60
        cursor = segment_end


def hourly_productivity(events: Iterable[TimedEvent], tz: Optional[tzinfo] = None) -> List[HourlyProductivity]:
    mood_minutes: Dict[int, float] = defaultdict(float)
    weighted_mood: Dict[int, float] = defaultdict(float)
    rated: Dict[int, set] = defaultdict(set)
    touched: Dict[int, set] = defaultdict(set)

    for index, event in enumerate(events):
        if event.is_all_day:
            continue
        for hour, minutes in _hour_segments(event, tz):
            touched[hour].add(index)
            if event.mood_rating is not None:
                rated[hour].add(index)
                mood_minutes[hour] += minutes
                weighted_mood[hour] += event.mood_rating * minutes

    stats = []
    for hour in sorted(touched):
        average = weighted_mood[hour] / mood_minutes[hour] if mood_minutes[hour] else 0.0
        stats.append(HourlyProductivity(
            hour=hour,
            average_mood=round(average, 2),
            rated_events=len(rated[hour]),
            total_events=len(touched[hour]),
            productivity_score=mood_score(average) if rated[hour] else 0.0,
        ))
    return stats


def daily_productivity(events: Iterable[TimedEvent], tz: Optional[tzinfo] = None) -> List[DailyProductivity]:
    totals: Dict[int, int] = defaultdict(int)
    moods: Dict[int, List[int]] = defaultdict(list)

    for event in events:
        weekday = (event.start.astimezone(tz) if tz else event.start).weekday()
        totals[weekday] += 1
        if event.mood_rating is not None:
            moods[weekday].append(event.mood_rating)

    stats = []
    for weekday in sorted(totals):
        average = sum(moods[weekday]) / len(moods[weekday]) if moods[weekday] else 0.0
        stats.append(DailyProductivity(
            day_of_week=weekday,
            day_name=DAY_NAMES[weekday],
            average_mood=round(average, 2),
            productivity_score=mood_score(average) if moods[weekday] else 0.0,
            total_events=totals[weekday],
        ))
    return stats


def _windows(hours: List[HourlyProductivity]) -> List[HourWindow]:
    """Merge consecutive hours into windows."""
    groups: List[List[HourlyProductivity]] = []
    for stat in sorted(hours, key=lambda h: h.hour):
        if groups and stat.hour == groups[-1][-1].hour + 1:
            groups[-1].append(stat)
        else:
            groups.append([stat])

    windows = []
    for group in groups:
        start_hour, end_hour = group[0].hour, group[-1].hour + 1
        windows.append(HourWindow(
            start_hour=start_hour,
            end_hour=end_hour,
            average_productivity_score=round(sum(h.productivity_score for h in group) / len(group), 2),
            description=f"{time_of_day(start_hour)}: {start_hour:02d}:00 - {end_hour % 24:02d}:00",
        ))
    return windows


def golden_hours(hourly: List[HourlyProductivity]) -> List[HourWindow]:
    return _windows([h for h in hourly if h.rated_events and h.productivity_score >= GOLDEN_HOUR_MIN_SCORE])


def low_energy_hours(hourly: List[HourlyProductivity]) -> List[HourWindow]:
    return _windows([h for h in hourly if h.rated_events and h.productivity_score < LOW_ENERGY_MAX_SCORE])


def category_productivity(events: Iterable[TimedEvent], tz: Optional[tzinfo] = None) -> List[CategoryProductivity]:
    by_category: Dict[object, List[TimedEvent]] = defaultdict(list)
    for event in events:
        if event.mood_rating is not None:
            by_category[event.category_id].append(event)

    stats = []
    for category_id, rated in by_category.items():
        average = sum(e.mood_rating for e in rated) / len(rated)

        by_hour: Dict[int, List[int]] = defaultdict(list)
        for event in rated:
            by_hour[(event.start.astimezone(tz) if tz else event.start).hour].append(event.mood_rating)
        best_hour = max(sorted(by_hour), key=lambda h: sum(by_hour[h]) / len(by_hour[h]))

        stats.append(CategoryProductivity(
            category_id=category_id,
            category_name=rated[0].category_name or "Sin categoría",
            average_mood=round(average, 2),
            average_productivity_score=mood_score(average),
            rated_events=len(rated),
            best_hour=best_hour,
        ))

    stats.sort(key=lambda c: c.average_productivity_score, reverse=True)
    return stats


def analyze_productivity(
    events: Iterable[TimedEvent],
    period_start: datetime,
    period_end: datetime,
    tz: Optional[tzinfo] = None,
) -> ProductivityAnalysis:
    """Full productivity picture for one user's events in a period."""
    events = list(events)
    hourly = hourly_productivity(events, tz)
    return ProductivityAnalysis(
        analysis_period_start=period_start,
        analysis_period_end=period_end,
        total_events_analyzed=len(events),
        total_mood_records_analyzed=sum(1 for e in events if e.mood_rating is not None),
        hourly_productivity=hourly,
        daily_productivity=daily_productivity(events, tz),
        golden_hours=golden_hours(hourly),
        low_energy_hours=low_energy_hours(hourly),
        category_productivity=category_productivity(events, tz),
    )
