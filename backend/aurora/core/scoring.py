"""
Heuristic schedule suggestions.

Turns overlaps, tight gaps, long unbroken runs, overloaded days, low-mood
categories and uneven weekly load into ranked suggestion candidates. Pure
computation: nothing here touches the database or the AI provider.
"""
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from typing import Dict, Iterable, List, Optional, Tuple
import uuid

from aurora.core.overlap import OverlapPair, TimedEvent, find_overlaps, timed_events
from aurora.models.enums import SuggestionType

CONFLICT_BUFFER_MINUTES = 15
OVERLOADED_DAY_HOURS = 8
LOW_MOOD_THRESHOLD = 3
LOW_MOOD_MIN_OCCURRENCES = 3
LONG_BLOCK_HOURS = 4
LONG_BLOCK = timedelta(hours=LONG_BLOCK_HOURS)
LONG_BLOCK_REST = timedelta(minutes=30)

# Lower rank sorts first
TYPE_RANK = {
    SuggestionType.RESOLVE_CONFLICT: 0,
    SuggestionType.PATTERN_ALERT: 1,
    SuggestionType.SUGGEST_BREAK: 2,
    SuggestionType.MOVE_EVENT: 3,
    SuggestionType.OPTIMIZE_DISTRIBUTION: 4,
    SuggestionType.GENERAL_REORGANIZATION: 5,
}

WEEKDAY_NAMES = ["lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo"]


@dataclass
class SuggestionCandidate:
    type: SuggestionType
    priority: int
    confidence: int
    description: str
    reason: str
    event_id: Optional[uuid.UUID] = None
    suggested_datetime: Optional[datetime] = None
    dedup_key: Tuple = field(default=(), compare=False)


def _local(dt: datetime, tz: Optional[tzinfo]) -> datetime:
    return dt.astimezone(tz) if tz is not None else dt


def _local_day(event: TimedEvent, tz: Optional[tzinfo]) -> date:
    return _local(event.start, tz).date()


def _hhmm(dt: datetime, tz: Optional[tzinfo]) -> str:
    return _local(dt, tz).strftime("%H:%M")


def _identity(event: TimedEvent):
    # Unsaved candidates have no id yet
    return event.id if event.id is not None else id(event)


def _pair_key(a: TimedEvent, b: TimedEvent) -> Tuple:
    return ("pair", frozenset((_identity(a), _identity(b))))


def conflict_confidence(pair: OverlapPair) -> int:
    """95 for a sliver of overlap, down to 80 when one event swallows the other."""
    shorter = min(pair.first.duration_minutes, pair.second.duration_minutes)
    ratio = min(1.0, pair.overlap_minutes / shorter) if shorter > 0 else 1.0
    return int(round(95 - 15 * ratio))


def conflict_suggestions(
    pairs: Iterable[OverlapPair],
    tz: Optional[tzinfo] = None,
) -> List[SuggestionCandidate]:
    suggestions = []
    for pair in pairs:
        first, second = pair.first, pair.second
        suggestions.append(SuggestionCandidate(
            type=SuggestionType.RESOLVE_CONFLICT,
            priority=5,
            confidence=conflict_confidence(pair),
            description=f"Conflicto detectado: '{second.title}' se solapa con '{first.title}'",
            reason=(
                f"'{second.title}' comienza a las {_hhmm(second.start, tz)} pero "
                f"'{first.title}' termina a las {_hhmm(first.end, tz)}"
            ),
            event_id=second.id,
            suggested_datetime=first.end + timedelta(minutes=CONFLICT_BUFFER_MINUTES),
            dedup_key=_pair_key(first, second),
        ))
    return suggestions


def break_suggestions(
    events: List[TimedEvent],
    min_break_minutes: int = 15,
    tz: Optional[tzinfo] = None,
) -> List[SuggestionCandidate]:
    """
    Flag back-to-back events that leave less than min_break_minutes between them.

    Events must be timed and sorted by start. The gap is measured from the
    latest end seen so far that day, so a long event hiding behind a short
    one still counts.
    """
    suggestions = []
    latest: Optional[TimedEvent] = None
    current_day: Optional[date] = None

    for event in events:
        day = _local_day(event, tz)
        if day != current_day:
            current_day = day
            latest = event
            continue

        gap = (event.start - latest.end).total_seconds() / 60
        if 0 <= gap < min_break_minutes:
            midpoint = latest.end + (event.start - latest.end) / 2
            suggestions.append(SuggestionCandidate(
                type=SuggestionType.SUGGEST_BREAK,
                priority=3,
                confidence=80,
                description=f"Muy poco tiempo entre '{latest.title}' y '{event.title}'",
                reason=f"Se recomienda al menos {min_break_minutes} minutos de descanso entre eventos",
                event_id=event.id,
                suggested_datetime=midpoint,
                dedup_key=_pair_key(latest, event),
            ))

        if event.end > latest.end:
            latest = event

    return suggestions


def long_block_alerts(
    events: List[TimedEvent],
    tz: Optional[tzinfo] = None,
) -> List[SuggestionCandidate]:
    """
    One break suggestion per day holding a run of events longer than 4 hours
    in which no gap reaches 30 minutes.

    Events must be timed and sorted by start. The suggested time is the end
    of the first event in the run that finishes two hours or more into it.
    """
    suggestions = []
    flagged = set()
    block: List[TimedEvent] = []
    block_end: Optional[datetime] = None
    current_day: Optional[date] = None

    def check(run: List[TimedEvent], run_end: Optional[datetime]):
        if len(run) < 2 or current_day in flagged:
            return
        if run_end - run[0].start <= LONG_BLOCK:
            return
        pause = next(e.end for e in run if e.end - run[0].start >= LONG_BLOCK / 2)
        flagged.add(current_day)
        suggestions.append(SuggestionCandidate(
            type=SuggestionType.SUGGEST_BREAK,
            priority=3,
            confidence=75,
            description="Período largo sin descansos significativos",
            reason=(
                f"Se detectó un bloque de más de {LONG_BLOCK_HOURS} horas sin descanso adecuado "
                f"({_hhmm(run[0].start, tz)}-{_hhmm(run_end, tz)})"
            ),
            suggested_datetime=pause,
            dedup_key=("long_block", current_day),
        ))

    for event in events:
        day = _local_day(event, tz)
        rested = block_end is not None and event.start - block_end >= LONG_BLOCK_REST
        if day != current_day or rested:
            check(block, block_end)
            current_day = day
            block, block_end = [event], event.end
            continue
        block.append(event)
        block_end = max(block_end, event.end)

    check(block, block_end)
    return suggestions


def low_mood_alerts(events: Iterable[TimedEvent]) -> List[SuggestionCandidate]:
    """One alert per category rated below 3 at least three times."""
    low_by_category: Dict[object, List[TimedEvent]] = defaultdict(list)
    for event in events:
        if event.mood_rating is not None and event.mood_rating < LOW_MOOD_THRESHOLD:
            low_by_category[event.category_id].append(event)

    suggestions = []
    for category_id, low_events in low_by_category.items():
        if len(low_events) < LOW_MOOD_MIN_OCCURRENCES:
            continue
        name = low_events[0].category_name or "Sin categoría"
        average = sum(e.mood_rating for e in low_events) / len(low_events)
        suggestions.append(SuggestionCandidate(
            type=SuggestionType.PATTERN_ALERT,
            priority=4,
            confidence=min(95, 60 + 5 * len(low_events)),
            description=f"Ánimo bajo recurrente en la categoría '{name}'",
            reason=(
                f"{len(low_events)} eventos de '{name}' fueron calificados por debajo de "
                f"{LOW_MOOD_THRESHOLD} (promedio {average:.1f}/5). "
                "Considera cambiar su horario o su frecuencia"
            ),
            dedup_key=("low_mood", category_id),
        ))
    return suggestions


def overloaded_day_alerts(
    events: List[TimedEvent],
    tz: Optional[tzinfo] = None,
) -> List[SuggestionCandidate]:
    hours_by_day: Dict[date, float] = defaultdict(float)
    for event in events:
        hours_by_day[_local_day(event, tz)] += event.duration_minutes / 60

    suggestions = []
    for day, hours in sorted(hours_by_day.items()):
        if hours <= OVERLOADED_DAY_HOURS:
            continue
        suggestions.append(SuggestionCandidate(
            type=SuggestionType.PATTERN_ALERT,
            priority=4,
            confidence=85,
            description=f"Día sobrecargado: {day:%d/%m/%Y}",
            reason=(
                f"Tienes {hours:.1f} horas de eventos programadas. "
                "Se recomienda redistribuir algunas tareas"
            ),
            dedup_key=("overloaded", day),
        ))
    return suggestions


def distribution_suggestions(
    events: Iterable[TimedEvent],
    tz: Optional[tzinfo] = None,
) -> List[SuggestionCandidate]:
    """Point out weeks where one day is packed while another is nearly empty."""
    by_week: Dict[Tuple[int, int], Dict[int, int]] = defaultdict(lambda: defaultdict(int))
    for event in events:
        iso = _local_day(event, tz).isocalendar()
        by_week[(iso[0], iso[1])][iso[2] - 1] += 1

    suggestions = []
    for week, per_day in sorted(by_week.items()):
        average = sum(per_day.values()) / len(per_day)
        overloaded = [d for d, n in sorted(per_day.items()) if n > average * 1.5]
        light = [d for d, n in sorted(per_day.items()) if n < average * 0.5]
        if not overloaded or not light:
            continue

        busy_day, quiet_day = overloaded[0], light[0]
        suggestions.append(SuggestionCandidate(
            type=SuggestionType.OPTIMIZE_DISTRIBUTION,
            priority=2,
            confidence=70,
            description="Distribución desigual de eventos en la semana",
            reason=(
                f"Tienes {per_day[busy_day]} eventos el {WEEKDAY_NAMES[busy_day]} pero solo "
                f"{per_day[quiet_day]} el {WEEKDAY_NAMES[quiet_day]}"
            ),
            dedup_key=("distribution", week),
        ))
    return suggestions


def rank_suggestions(
    candidates: Iterable[SuggestionCandidate],
    page_size: int = 20,
) -> List[SuggestionCandidate]:
    """Sort by type rank then confidence, drop duplicates, cut to page_size."""
    def sort_key(s: SuggestionCandidate):
        when = s.suggested_datetime.timestamp() if s.suggested_datetime else float("inf")
        return (TYPE_RANK.get(s.type, len(TYPE_RANK)), -s.confidence, when)

    ranked = []
    seen = set()
    for suggestion in sorted(candidates, key=sort_key):
        if suggestion.dedup_key:
            if suggestion.dedup_key in seen:
                continue
            seen.add(suggestion.dedup_key)
        ranked.append(suggestion)
        if len(ranked) >= page_size:
            break
    return ranked


def score_suggestions(
    events: Iterable[TimedEvent],
    range_start: Optional[datetime] = None,
    range_end: Optional[datetime] = None,
    *,
    page_size: int = 20,
    min_break_minutes: int = 15,
    tz: Optional[tzinfo] = None,
) -> List[SuggestionCandidate]:
    """
    Build the ranked suggestion list for one user's window of events.

    Args:
        events: The user's events
        range_start: Start of the analysed window
        range_end: End of the analysed window
        page_size: Maximum number of suggestions returned
        min_break_minutes: Gaps shorter than this trigger a break suggestion
        tz: Timezone used to decide which day an event falls on

    Returns:
        Ranked, deduplicated suggestions. Empty input gives an empty list.
    """
    events = list(events)
    if not events:
        return []

    in_window = [
        e for e in events
        if (range_start is None or e.end > range_start) and (range_end is None or e.start < range_end)
    ]
    timed = timed_events(in_window)

    candidates: List[SuggestionCandidate] = []
    candidates.extend(conflict_suggestions(find_overlaps(timed), tz))
    candidates.extend(low_mood_alerts(in_window))
    candidates.extend(overloaded_day_alerts(timed, tz))
    candidates.extend(break_suggestions(timed, min_break_minutes, tz))
    candidates.extend(long_block_alerts(timed, tz))
    candidates.extend(distribution_suggestions(in_window, tz))

    return rank_suggestions(candidates, page_size)
