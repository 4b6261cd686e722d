"""
Event management: CRUD, calendar views, mood feedback and AI validation.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from aurora.core.clock import as_aware, offset_timezone
from aurora.core.overlap import TimedEvent
from aurora.errors import NotFoundError, ValidationError
from aurora.models.event import Event
from aurora.models.event_category import EventCategory
from aurora.repositories.categories import EventCategoryRepository
from aurora.repositories.events import EventRepository
from aurora.schemas.category import CategoryResponse
from aurora.schemas.event import CalendarViewResponse, EventCreate, EventMoodUpdate, EventResponse
from aurora.schemas.validation import AIValidationResult, ParseNaturalLanguageRequest, ParseNaturalLanguageResponse
from aurora.services.ai_validation import ResilientValidator

logger = logging.getLogger(__name__)

# How far around a candidate event to look for conflicts
VALIDATION_CONTEXT = timedelta(days=1)


class EventService:
    """
    Events owned by a single user.
    """

    def __init__(
        self,
        db: AsyncSession,
        user_id: UUID,
        events: Optional[EventRepository] = None,
        categories: Optional[EventCategoryRepository] = None,
        validator: Optional[ResilientValidator] = None,
    ):
        self.db = db
        self.user_id = user_id
        self.events = events or EventRepository(db)
        self.categories = categories or EventCategoryRepository(db)
        self.validator = validator

    async def list_events(self, start: datetime, end: datetime) -> List[Event]:
        start, end = as_aware(start), as_aware(end)
        if end <= start:
            raise ValidationError("end must be after start")
        return await self.events.list_in_range(self.user_id, start, end)

    async def weekly_view(self, week_start: datetime) -> CalendarViewResponse:
        start = as_aware(week_start)
        return await self._view(start, start + timedelta(days=7))

    async def monthly_view(
        self,
        year: int,
        month: int,
        category_id: Optional[UUID] = None,
        timezone_offset_minutes: int = 0,
    ) -> CalendarViewResponse:
        if not 1 <= month <= 12:
            raise ValidationError(f"month must be between 1 and 12, got {month}")
        if not 1 <= year <= 9998:
            raise ValidationError(f"year out of range: {year}")

        tz = offset_timezone(timezone_offset_minutes)
        start = datetime(year, month, 1, tzinfo=tz)
        end = datetime(year + 1, 1, 1, tzinfo=tz) if month == 12 else datetime(year, month + 1, 1, tzinfo=tz)
        return await self._view(start, end, category_id)

    async def _view(
        self,
        start: datetime,
        end: datetime,
        category_id: Optional[UUID] = None,
    ) -> CalendarViewResponse:
        events = await self.events.list_in_range(self.user_id, start, end, category_id)
        categories = await self.categories.get_available_for_user(self.user_id)
        return CalendarViewResponse(
            range_start=start,
            range_end=end,
            events=[EventResponse.model_validate(e) for e in events],
            categories=[CategoryResponse.model_validate(c) for c in categories],
        )

    async def get_event(self, event_id: UUID) -> Event:
        event = await self.events.get_for_user(event_id, self.user_id)
        if not event:
            raise NotFoundError(f"No event exists with id {event_id}", title="Event not found")
        return event

    async def _resolve_category(self, category_id: Optional[UUID]) -> EventCategory:
        if category_id is None:
            available = await self.categories.get_available_for_user(self.user_id)
            if not available:
                raise ValidationError("No categories are available for this user")
            return available[0]

        category = await self.categories.get_by_id(category_id)
        if not category or not category.is_available_for(self.user_id):
            raise ValidationError(
                f"Category {category_id} does not exist or is not available",
                extensions={"category_id": str(category_id)},
            )
        return category

    def _localized(self, data: EventCreate) -> EventCreate:
        """Read naive start/end in the caller's offset (UTC when none is given)."""
        tz = offset_timezone(data.timezone_offset_minutes)
        return data.model_copy(update={"start": as_aware(data.start, tz), "end": as_aware(data.end, tz)})

    async def create_event(self, data: EventCreate) -> Event:
        data = self._localized(data)
        category = await self._resolve_category(data.category_id)

        event = Event(
            user_id=self.user_id,
            category_id=category.id,
            category=category,
            title=data.title,
            description=data.description,
            start=data.start,
            end=data.end,
            is_all_day=data.is_all_day,
            location=data.location,
            color=data.color,
            notes=data.notes,
            priority=int(data.priority),
            is_recurring=data.is_recurring,
            recurrence_pattern=data.recurrence_pattern,
        )
        event = await self.events.add(event)
        logger.info("Created event %s for user %s", event.id, self.user_id)
        return event

    async def update_event(self, event_id: UUID, data: EventCreate) -> Event:
        event = await self.get_event(event_id)
        data = self._localized(data)
        if data.category_id is not None and data.category_id != event.category_id:
            category = await self._resolve_category(data.category_id)
            event.category_id = category.id
            event.category = category

        event.title = data.title
        event.description = data.description
        event.start = data.start
        event.end = data.end
        event.is_all_day = data.is_all_day
        event.location = data.location
        event.color = data.color
        event.notes = data.notes
        event.priority = int(data.priority)
        event.is_recurring = data.is_recurring
        event.recurrence_pattern = data.recurrence_pattern

        return await self.events.save(event)

    async def delete_event(self, event_id: UUID) -> None:
        event = await self.get_event(event_id)
        await self.events.delete(event)
        logger.info("Deleted event %s for user %s", event_id, self.user_id)

    async def update_mood(self, event_id: UUID, data: EventMoodUpdate) -> Event:
        event = await self.get_event(event_id)
        event.mood_rating = data.mood_rating
        event.mood_notes = data.mood_notes
        return await self.events.save(event)

    async def _context_events(self, start: datetime, end: datetime) -> List[TimedEvent]:
        events = await self.events.list_in_range(
            self.user_id,
            as_aware(start) - VALIDATION_CONTEXT,
            as_aware(end) + VALIDATION_CONTEXT,
        )
        return [TimedEvent.from_event(e) for e in events]

    async def validate_event(self, data: EventCreate) -> AIValidationResult:
        """Ask the AI whether the event fits; local rules answer when it cannot."""
        data = self._localized(data)
        existing = await self._context_events(data.start, data.end)
        return await self.validator.validate(
            data,
            self.user_id,
            existing,
            offset_timezone(data.timezone_offset_minutes),
        )

    async def parse_natural_language(self, request: ParseNaturalLanguageRequest) -> ParseNaturalLanguageResponse:
        tz = offset_timezone(request.timezone_offset_minutes)
        categories = await self.categories.get_available_for_user(self.user_id)
        if not categories:
            return ParseNaturalLanguageResponse(
                success=False,
                error_message="No hay categorías disponibles para asignar el evento.",
            )

        today = datetime.now(tz).replace(hour=0, minute=0, second=0, microsecond=0)
        existing = await self._context_events(today, today + timedelta(days=7))
        return await self.validator.parse(request.text, self.user_id, categories, existing, tz)
