"""
Monthly wellness summary for the dashboard.
"""
import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from aurora.core.clock import offset_timezone, utcnow
from aurora.core.overlap import TimedEvent
from aurora.core.wellness import wellness_summary
from aurora.errors import ValidationError
from aurora.repositories.events import EventRepository
from aurora.schemas.wellness import WellnessSummary

logger = logging.getLogger(__name__)


class WellnessService:
    def __init__(self, db: AsyncSession, user_id: UUID, events: Optional[EventRepository] = None):
        self.db = db
        self.user_id = user_id
        self.events = events or EventRepository(db)

    async def monthly_summary(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        timezone_offset_minutes: int = 0,
    ) -> WellnessSummary:
        """Mood summary for one month; the current month when year or month is omitted."""
        tz = offset_timezone(timezone_offset_minutes)
        today = utcnow().astimezone(tz)
        year = year if year is not None else today.year
        month = month if month is not None else today.month
        if not 1 <= month <= 12:
            raise ValidationError(f"month must be between 1 and 12, got {month}", title="Invalid month")
        if not 1 <= year <= 9998:
            raise ValidationError(f"year out of range: {year}")

        start = datetime(year, month, 1, tzinfo=tz)
        end = datetime(year + 1, 1, 1, tzinfo=tz) if month == 12 else datetime(year, month + 1, 1, tzinfo=tz)
        events = await self.events.list_in_range(self.user_id, start, end)

        summary = wellness_summary([TimedEvent.from_event(e) for e in events], year, month, tz)
        logger.info(
            "Wellness summary for user %s %d-%02d: average=%.2f tracked_days=%d",
            self.user_id, year, month, summary.average_mood, summary.total_tracked_days,
        )
        return summary
