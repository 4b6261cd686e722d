"""
Productivity analysis over a trailing window of the user's events.
"""
from datetime import timedelta
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from aurora.core.clock import offset_timezone, utcnow
from aurora.core.overlap import TimedEvent
from aurora.core.productivity import analyze_productivity
from aurora.errors import ValidationError
from aurora.repositories.events import EventRepository
from aurora.schemas.productivity import ProductivityAnalysis

MAX_PERIOD_DAYS = 365


class ProductivityService:
    def __init__(self, db: AsyncSession, user_id: UUID, events: Optional[EventRepository] = None):
        self.db = db
        self.user_id = user_id
        self.events = events or EventRepository(db)

    async def analyze(self, period_days: int = 30, timezone_offset_minutes: int = 0) -> ProductivityAnalysis:
        if not 1 <= period_days <= MAX_PERIOD_DAYS:
            raise ValidationError(f"period_days must be between 1 and {MAX_PERIOD_DAYS}")

        end = utcnow()
        start = end - timedelta(days=period_days)
        events = await self.events.list_in_range(self.user_id, start, end)
        return analyze_productivity(
            [TimedEvent.from_event(e) for e in events],
            start,
            end,
            offset_timezone(timezone_offset_minutes),
        )
