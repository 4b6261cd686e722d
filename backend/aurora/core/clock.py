"""
Time helpers shared by services.
"""
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def offset_timezone(offset_minutes: Optional[int]) -> tzinfo:
    """Fixed-offset zone, e.g. -180 for GMT-3. None means UTC."""
    if not offset_minutes:
        return timezone.utc
    return timezone(timedelta(minutes=offset_minutes))


def as_aware(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Attach tz (UTC by default) to naive datetimes; leave aware ones alone."""
    if value.tzinfo is not None:
        return value
    return value.replace(tzinfo=tz or timezone.utc)
