"""Tests for the monthly wellness summary."""
from datetime import date, timedelta, timezone
import uuid

import pytest

from aurora.api.deps import get_wellness_service
from aurora.core.wellness import wellness_summary
from aurora.errors import ValidationError
from aurora.services.wellness import WellnessService

from helpers import at, timed

# BASE_DAY is Monday 2025-03-10
MARCH = (2025, 3)


def rated(day, mood, category_id=None, category_name=None, hour=9):
    return timed(
        f"Evento {day}-{hour}",
        at(hour, day=day),
        at(hour + 1, day=day),
        mood=mood,
        category_id=category_id,
        category_name=category_name,
    )


class TestSummary:
    def test_month_without_ratings(self):
        summary = wellness_summary([timed("Sin ánimo", at(9), at(10))], *MARCH)

        assert summary.has_event_mood_data is False
        assert summary.average_mood == 0
        assert summary.total_tracked_days == 0
        assert summary.best_day is None
        assert len(summary.mood_trend) == 31
        assert all(p.average_mood is None for p in summary.mood_trend)
        assert [s.count for s in summary.mood_distribution] == [0, 0, 0, 0, 0]

    def test_daily_average_and_classification(self):
        events = [
            rated(0, 5), rated(0, 4, hour=11),  # 4.5, positive
            rated(1, 3),                         # neutral
            rated(2, 1), rated(2, 2, hour=11),   # 1.5, negative
        ]

        summary = wellness_summary(events, *MARCH)

        assert summary.average_mood == 3.0
        assert (summary.positive_days, summary.neutral_days, summary.negative_days) == (1, 1, 1)
        assert summary.total_tracked_days == 3
        assert summary.tracking_coverage == round(3 / 31, 4)
        assert summary.best_day.date == date(2025, 3, 10)
        assert summary.best_day.average_mood == 4.5
        assert summary.worst_day.date == date(2025, 3, 12)
        trend = {p.date: p for p in summary.mood_trend}
        assert trend[date(2025, 3, 10)].entries == 2
        assert trend[date(2025, 3, 13)].average_mood is None

    def test_distribution_percentages(self):
        summary = wellness_summary([rated(0, 5), rated(1, 5), rated(2, 3), rated(3, 1)], *MARCH)

        assert [(s.mood_rating, s.count, s.percentage) for s in summary.mood_distribution] == [
            (1, 1, 0.25), (2, 0, 0.0), (3, 1, 0.25), (4, 0, 0.0), (5, 2, 0.5),
        ]

    def test_untracked_day_breaks_a_streak(self):
        events = [rated(0, 5), rated(1, 4), rated(2, 5), rated(4, 4)]

        summary = wellness_summary(events, *MARCH)

        assert summary.streaks.longest_positive == 3
        # the month runs on to the 31st without ratings
        assert summary.streaks.current_positive == 0

    def test_streak_reaching_month_end_is_current(self):
        # 2025-03-30 and 2025-03-31
        events = [rated(20, 1), rated(21, 2)]

        summary = wellness_summary(events, *MARCH)

        assert summary.streaks.current_negative == 2
        assert summary.streaks.longest_negative == 2
        assert summary.streaks.current_positive == 0

    def test_category_impacts_sorted_by_average(self):
        work, sport = uuid.uuid4(), uuid.uuid4()
        events = [
            rated(0, 2, work, "Trabajo"),
            rated(1, 1, work, "Trabajo"),
            rated(0, 5, sport, "Deporte", hour=18),
        ]

        impacts = wellness_summary(events, *MARCH).category_impacts

        assert [c.category_name for c in impacts] == ["Deporte", "Trabajo"]
        assert impacts[1].event_count == 2
        assert impacts[1].negative_count == 2
        assert impacts[0].positive_count == 1

    def test_local_timezone_decides_the_day(self):
        # 02:00 UTC on the 1st of April is still March 31st at GMT-3
        late = timed("Cena", at(2, day=22), at(3, day=22), mood=5)

        summary = wellness_summary([late], *MARCH, tz=timezone(timedelta(hours=-3)))

        assert summary.best_day.date == date(2025, 3, 31)
        assert wellness_summary([late], *MARCH).has_event_mood_data is False


class TestService:
    @pytest.mark.asyncio
    async def test_month_13_is_rejected(self, event_repo, user_id):
        service = WellnessService(db=None, user_id=user_id, events=event_repo)

        with pytest.raises(ValidationError):
            await service.monthly_summary(2025, 13)

        event_repo.list_in_range.assert_not_called()

    @pytest.mark.asyncio
    async def test_queries_the_local_month(self, event_repo, user_id, make_category, make_event):
        event_repo.list_in_range.return_value = [make_event(user_id, make_category(system=True), mood=4)]
        service = WellnessService(db=None, user_id=user_id, events=event_repo)

        summary = await service.monthly_summary(2025, 3, timezone_offset_minutes=-180)

        _, start, end = event_repo.list_in_range.call_args.args
        assert (start.day, start.month, end.month) == (1, 3, 4)
        assert start.utcoffset() == timedelta(hours=-3)
        assert summary.category_impacts[0].category_name == "Trabajo"


class TestEndpoint:
    def test_summary(self, app, client, event_repo, user_id, make_category, make_event):
        event_repo.list_in_range.return_value = [make_event(user_id, make_category(system=True), mood=5)]
        app.dependency_overrides[get_wellness_service] = lambda: WellnessService(None, user_id, events=event_repo)

        response = client.get("/api/wellness/summary", params={"year": 2025, "month": 3})

        assert response.status_code == 200
        body = response.json()
        assert body["average_mood"] == 5
        assert body["best_day"]["date"] == "2025-03-10"
        assert body["has_event_mood_data"] is True

    def test_invalid_month_is_400(self, app, client, event_repo, user_id):
        app.dependency_overrides[get_wellness_service] = lambda: WellnessService(None, user_id, events=event_repo)

        response = client.get("/api/wellness/summary", params={"year": 2025, "month": 0})

        assert response.status_code == 400
        assert response.json()["title"] == "Invalid month"
