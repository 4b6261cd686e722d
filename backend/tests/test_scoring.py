"""Tests for the heuristic suggestion scorer."""
from datetime import timedelta
import uuid

from aurora.core.overlap import OverlapPair, TimedEvent
from aurora.core.scoring import (
    SuggestionCandidate,
    conflict_confidence,
    long_block_alerts,
    rank_suggestions,
    score_suggestions,
)
from aurora.models.enums import SuggestionType

from helpers import at, timed


class TestConflictSuggestions:
    def test_two_overlapping_events(self):
        a = timed("A", at(9), at(10, 30))
        b = timed("B", at(10), at(11))

        result = score_suggestions([a, b], at(0), at(0, day=1))
        conflicts = [s for s in result if s.type == SuggestionType.RESOLVE_CONFLICT]

        assert len(conflicts) == 1
        conflict = conflicts[0]
        assert conflict.event_id == b.id
        assert conflict.suggested_datetime == at(10, 45)
        assert conflict.priority == 5
        assert "A" in conflict.description and "B" in conflict.description
        assert 80 <= conflict.confidence <= 95

    def test_full_containment_gets_lowest_confidence(self):
        outer = timed("Outer", at(9), at(12))
        inner = timed("Inner", at(10), at(11))
        pair = OverlapPair(first=outer, second=inner, overlap_minutes=60)

        assert conflict_confidence(pair) == 80

    def test_small_overlap_gets_high_confidence(self):
        a = timed("A", at(9), at(10, 5))
        b = timed("B", at(10), at(11))
        pair = OverlapPair(first=a, second=b, overlap_minutes=5)

        assert conflict_confidence(pair) > 90

    def test_adjacent_events_produce_no_conflict(self):
        a = timed("A", at(9), at(10))
        b = timed("B", at(10), at(11))

        result = score_suggestions([a, b], at(0), at(0, day=1))

        assert not any(s.type == SuggestionType.RESOLVE_CONFLICT for s in result)


class TestBreakSuggestions:
    def test_tight_gap_suggests_break_at_midpoint(self):
        a = timed("A", at(9), at(10))
        b = timed("B", at(10, 10), at(11))

        result = score_suggestions([a, b], at(0), at(0, day=1))
        breaks = [s for s in result if s.type == SuggestionType.SUGGEST_BREAK]

        assert len(breaks) == 1
        assert breaks[0].suggested_datetime == at(10, 5)
        assert breaks[0].priority == 3
        assert breaks[0].confidence == 80

    def test_adjacent_events_need_a_break(self):
        a = timed("A", at(9), at(10))
        b = timed("B", at(10), at(11))

        result = score_suggestions([a, b], at(0), at(0, day=1))

        assert [s.type for s in result] == [SuggestionType.SUGGEST_BREAK]

    def test_enough_gap_is_fine(self):
        a = timed("A", at(9), at(10))
        b = timed("B", at(10, 15), at(11))

        assert score_suggestions([a, b], at(0), at(0, day=1)) == []

    def test_events_on_different_days_are_not_paired(self):
        a = timed("A", at(23), at(23, 55))
        b = timed("B", at(0, day=1), at(1, day=1))

        result = score_suggestions([a, b], at(0), at(0, day=2))

        assert not any(s.type == SuggestionType.SUGGEST_BREAK for s in result)


class TestPatternAlerts:
    def test_three_low_ratings_in_a_category(self):
        category = uuid.uuid4()
        events = [
            timed(f"Gym {i}", at(7, day=i), at(8, day=i), mood=2, category_id=category, category_name="Gimnasio")
            for i in range(3)
        ]

        result = score_suggestions(events, at(0), at(0, day=7))
        alerts = [s for s in result if s.type == SuggestionType.PATTERN_ALERT]

        assert len(alerts) == 1
        assert "Gimnasio" in alerts[0].description
        assert alerts[0].priority == 4
        assert alerts[0].confidence == 75

    def test_two_low_ratings_are_not_a_pattern(self):
        category = uuid.uuid4()
        events = [
            timed(f"Gym {i}", at(7, day=i), at(8, day=i), mood=1, category_id=category)
            for i in range(2)
        ]

        result = score_suggestions(events, at(0), at(0, day=7))

        assert not any(s.type == SuggestionType.PATTERN_ALERT for s in result)

    def test_overloaded_day(self):
        events = [
            timed(f"Bloque {i}", at(8 + 3 * i), at(8 + 3 * i, 30) + timedelta(hours=2))
            for i in range(4)
        ]

        result = score_suggestions(events, at(0), at(0, day=1))
        alerts = [s for s in result if s.type == SuggestionType.PATTERN_ALERT]

        assert len(alerts) == 1
        assert alerts[0].confidence == 85


def test_uneven_week_suggests_redistribution():
    busy = [timed(f"Lunes {i}", at(8 + i), at(8 + i, 30)) for i in range(10)]
    quiet = [timed(f"Día {d}", at(9, day=d), at(9, 30, day=d)) for d in (1, 2, 3)]
    single = [timed("Viernes", at(9, day=4), at(9, 30, day=4))]

    result = score_suggestions(busy + quiet + single, at(0), at(0, day=7))
    distribution = [s for s in result if s.type == SuggestionType.OPTIMIZE_DISTRIBUTION]

    assert len(distribution) == 1
    assert distribution[0].priority == 2
    assert "lunes" in distribution[0].reason


class TestRanking:
    def test_empty_input_gives_empty_list(self):
        assert score_suggestions([], at(0), at(0, day=1)) == []

    def test_conflicts_rank_before_breaks(self):
        events = [
            timed("A", at(9), at(10, 30)),
            timed("B", at(10), at(11)),
            timed("C", at(14), at(15)),
            timed("D", at(15, 5), at(16)),
        ]

        result = score_suggestions(events, at(0), at(0, day=1))

        assert result[0].type == SuggestionType.RESOLVE_CONFLICT
        assert result[-1].type == SuggestionType.SUGGEST_BREAK

    def test_ties_broken_by_confidence_then_time(self):
        def candidate(confidence, hour):
            return SuggestionCandidate(
                type=SuggestionType.MOVE_EVENT,
                priority=3,
                confidence=confidence,
                description="x",
                reason="y",
                suggested_datetime=at(hour),
            )

        ranked = rank_suggestions([candidate(70, 9), candidate(90, 11), candidate(90, 10)])

        assert [(s.confidence, s.suggested_datetime) for s in ranked] == [
            (90, at(10)), (90, at(11)), (70, at(9)),
        ]

    def test_type_order(self):
        order = [
            SuggestionType.GENERAL_REORGANIZATION,
            SuggestionType.OPTIMIZE_DISTRIBUTION,
            SuggestionType.MOVE_EVENT,
            SuggestionType.SUGGEST_BREAK,
            SuggestionType.PATTERN_ALERT,
            SuggestionType.RESOLVE_CONFLICT,
        ]
        candidates = [
            SuggestionCandidate(type=t, priority=1, confidence=100, description="", reason="")
            for t in order
        ]

        ranked = rank_suggestions(candidates)

        assert [s.type for s in ranked] == list(reversed(order))

    def test_same_pair_is_not_suggested_twice(self):
        a = timed("A", at(9), at(10))
        b = timed("B", at(9, 55), at(10, 30))
        key = ("pair", frozenset((a.id, b.id)))
        conflict = SuggestionCandidate(SuggestionType.RESOLVE_CONFLICT, 5, 90, "c", "r", b.id, at(10, 15), key)
        pause = SuggestionCandidate(SuggestionType.SUGGEST_BREAK, 3, 80, "p", "r", b.id, at(10), key)

        ranked = rank_suggestions([pause, conflict])

        assert ranked == [conflict]

    def test_capped_at_page_size(self):
        events = [timed(f"E{i}", at(9), at(10)) for i in range(10)]

        result = score_suggestions(events, at(0), at(0, day=1), page_size=20)

        assert len(result) == 20
        assert len(score_suggestions(events, at(0), at(0, day=1), page_size=5)) == 5

    def test_events_outside_window_are_ignored(self):
        a = timed("A", at(9, day=3), at(10, 30, day=3))
        b = timed("B", at(10, day=3), at(11, day=3))

        assert score_suggestions([a, b], at(0), at(0, day=1)) == []


def test_unsaved_events_keep_one_conflict_per_pair():
    events = [
        TimedEvent(id=None, title="A", start=at(9), end=at(10, 30)),
        TimedEvent(id=None, title="B", start=at(10), end=at(11, 30)),
        TimedEvent(id=None, title="C", start=at(11), end=at(12, 30)),
    ]

    result = score_suggestions(events, at(0), at(0, day=1))
    conflicts = [s for s in result if s.type == SuggestionType.RESOLVE_CONFLICT]

    assert [c.description for c in conflicts] == [
        "Conflicto detectado: 'B' se solapa con 'A'",
        "Conflicto detectado: 'C' se solapa con 'B'",
    ]


class TestLongBlocks:
    def test_run_over_four_hours_without_rest(self):
        events = [
            timed("A", at(8), at(9, 30)),
            timed("B", at(9, 45), at(11)),
            timed("C", at(11, 15), at(12, 30)),
        ]

        alerts = long_block_alerts(events)

        assert len(alerts) == 1
        assert alerts[0].type == SuggestionType.SUGGEST_BREAK
        assert alerts[0].confidence == 75
        assert alerts[0].priority == 3
        assert alerts[0].event_id is None
        assert alerts[0].suggested_datetime == at(11)

    def test_half_hour_gap_breaks_the_run(self):
        events = [
            timed("A", at(8), at(10, 30)),
            timed("B", at(11), at(13)),
        ]

        assert long_block_alerts(events) == []

    def test_one_alert_per_day(self):
        morning = [timed("A", at(6), at(8, 30)), timed("B", at(8, 40), at(10, 30))]
        evening = [timed("C", at(14), at(16, 30)), timed("D", at(16, 40), at(18, 30))]
        next_day = [timed("E", at(8, day=1), at(10, 30, day=1)), timed("F", at(10, 40, day=1), at(12, 30, day=1))]

        alerts = long_block_alerts(morning + evening + next_day)

        assert [a.suggested_datetime for a in alerts] == [at(8, 30), at(10, 30, day=1)]

    def test_single_long_event_is_not_a_run(self):
        assert long_block_alerts([timed("Jornada", at(8), at(13))]) == []

    def test_scored_alongside_short_breaks(self):
        events = [timed("A", at(8), at(10, 30)), timed("B", at(10, 35), at(12, 30))]

        result = score_suggestions(events, at(0), at(0, day=1))

        assert [(s.type, s.confidence) for s in result] == [
            (SuggestionType.SUGGEST_BREAK, 80),
            (SuggestionType.SUGGEST_BREAK, 75),
        ]
