"""
Event schemas.
"""
from datetime import datetime, timedelta
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator
from uuid import UUID

from aurora.models.enums import EventPriority
from aurora.schemas.category import CategoryResponse

MAX_EVENT_DURATION = timedelta(days=7)


class EventCreate(BaseModel):
    """Payload for creating an event, also used for full updates."""
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    start: datetime
    end: datetime
    category_id: Optional[UUID] = None  # first available category when omitted
    is_all_day: bool = False
    location: Optional[str] = Field(default=None, max_length=500)
    color: Optional[str] = Field(default=None, pattern=r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")
    notes: Optional[str] = Field(default=None, max_length=500)
    priority: EventPriority = EventPriority.MEDIUM
    is_recurring: bool = False
    recurrence_pattern: Optional[str] = Field(default=None, max_length=100)
    timezone_offset_minutes: Optional[int] = None

    @model_validator(mode="after")
    def check_dates_and_recurrence(self):
        if self.end <= self.start:
            raise ValueError("end must be after start")
        if self.end - self.start > MAX_EVENT_DURATION:
            raise ValueError("an event cannot last more than 7 days")
        if self.is_recurring and not self.recurrence_pattern:
            raise ValueError("recurrence_pattern is required for recurring events")
        return self


class EventMoodUpdate(BaseModel):
    mood_rating: Optional[int] = Field(default=None, ge=1, le=5)
    mood_notes: Optional[str] = Field(default=None, max_length=500)


class EventResponse(BaseModel):
    id: UUID
    title: str
    description: Optional[str] = None
    start: datetime
    end: datetime
    category_id: UUID
    category: Optional[CategoryResponse] = None
    is_all_day: bool = False
    location: Optional[str] = None
    color: Optional[str] = None
    notes: Optional[str] = None
    priority: int = EventPriority.MEDIUM
    is_recurring: bool = False
    recurrence_pattern: Optional[str] = None
    mood_rating: Optional[int] = None
    mood_notes: Optional[str] = None

    class Config:
        from_attributes = True


class CalendarViewResponse(BaseModel):
    """Events of a week or month together with the categories the user can pick."""
    range_start: datetime
    range_end: datetime
    events: List[EventResponse]
    categories: List[CategoryResponse]
