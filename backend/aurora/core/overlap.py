"""
Time-overlap detection over a user's events.

Intervals are half-open: an event ending at 10:00 and one starting at 10:00
are adjacent, not overlapping. All-day events are left out of every check
here; they mark a day rather than block time in it.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional
import heapq
import uuid


@dataclass(frozen=True)
class TimedEvent:
    """The slice of an event the suggestion engine needs."""
    id: Optional[uuid.UUID]
    title: str
    start: datetime
    end: datetime
    is_all_day: bool = False
    category_id: Optional[uuid.UUID] = None
    category_name: Optional[str] = None
    mood_rating: Optional[int] = None

    @property
    def duration_minutes(self) -> float:
        return (self.end - self.start).total_seconds() / 60

    @classmethod
    def from_event(cls, event) -> "TimedEvent":
        """Build from an ORM Event (or anything with the same attributes)."""
        category = getattr(event, "category", None)
        return cls(
            id=event.id,
            title=event.title,
            start=event.start,
            end=event.end,
            is_all_day=bool(event.is_all_day),
            category_id=getattr(event, "category_id", None),
            category_name=category.name if category is not None else None,
            mood_rating=getattr(event, "mood_rating", None),
        )


@dataclass(frozen=True)
class OverlapPair:
    first: TimedEvent  # earlier start
    second: TimedEvent
    overlap_minutes: float


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    return a_start < b_end and b_start < a_end


def _in_range(
    event: TimedEvent,
    range_start: Optional[datetime],
    range_end: Optional[datetime],
) -> bool:
    if range_start is not None and event.end <= range_start:
        return False
    if range_end is not None and event.start >= range_end:
        return False
    return True


def timed_events(
    events: Iterable[TimedEvent],
    range_start: Optional[datetime] = None,
    range_end: Optional[datetime] = None,
) -> List[TimedEvent]:
    """Non all-day events intersecting the range, ordered by start then end."""
    selected = [
        e for e in events
        if not e.is_all_day and e.end > e.start and _in_range(e, range_start, range_end)
    ]
    selected.sort(key=lambda e: (e.start, e.end))
    return selected


def find_overlaps(
    events: Iterable[TimedEvent],
    range_start: Optional[datetime] = None,
    range_end: Optional[datetime] = None,
) -> List[OverlapPair]:
    """
    Report every overlapping pair of events.

    Sweeps events in start order, keeping a heap of still-active events keyed
    by end time. Anything left on the heap when a new event starts overlaps it.

    Args:
        events: Events for one user
        range_start: Ignore events ending at or before this instant
        range_end: Ignore events starting at or after this instant

    Returns:
        Pairs ordered by the start of the later event
    """
    ordered = timed_events(events, range_start, range_end)
    pairs: List[OverlapPair] = []
    active: List[tuple] = []  # (end, seq, event)

    for seq, event in enumerate(ordered):
        while active and active[0][0] <= event.start:
            heapq.heappop(active)

        for _, _, other in sorted(active, key=lambda item: (item[2].start, item[1])):
            overlap_end = min(other.end, event.end)
            minutes = (overlap_end - event.start).total_seconds() / 60
            pairs.append(OverlapPair(first=other, second=event, overlap_minutes=minutes))

        heapq.heappush(active, (event.end, seq, event))

    return pairs


def find_overlap_groups(
    events: Iterable[TimedEvent],
    range_start: Optional[datetime] = None,
    range_end: Optional[datetime] = None,
) -> List[List[TimedEvent]]:
    """Maximal clusters of transitively overlapping events (two or more each)."""
    groups: List[List[TimedEvent]] = []
    current: List[TimedEvent] = []
    current_end: Optional[datetime] = None

    for event in timed_events(events, range_start, range_end):
        if current and event.start < current_end:
            current.append(event)
            current_end = max(current_end, event.end)
            continue

        if len(current) > 1:
            groups.append(current)
        current = [event]
        current_end = event.end

    if len(current) > 1:
        groups.append(current)

    return groups
