"""
Shared builders for engine tests.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
import uuid

from aurora.core.overlap import TimedEvent

# Monday
BASE_DAY = datetime(2025, 3, 10, tzinfo=timezone.utc)


def at(hour: int, minute: int = 0, day: int = 0) -> datetime:
    """UTC instant on the reference week."""
    return BASE_DAY + timedelta(days=day, hours=hour, minutes=minute)


def timed(
    title: str,
    start: datetime,
    end: datetime,
    *,
    is_all_day: bool = False,
    mood: Optional[int] = None,
    category_id: Optional[uuid.UUID] = None,
    category_name: Optional[str] = None,
) -> TimedEvent:
    return TimedEvent(
        id=uuid.uuid4(),
        title=title,
        start=start,
        end=end,
        is_all_day=is_all_day,
        category_id=category_id,
        category_name=category_name,
        mood_rating=mood,
    )
