"""
Event endpoints: CRUD, calendar views, mood feedback and AI helpers.
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from aurora.api.deps import get_event_service
from aurora.schemas.event import CalendarViewResponse, EventCreate, EventMoodUpdate, EventResponse
from aurora.schemas.validation import (
    AIValidationResult,
    ParseNaturalLanguageRequest,
    ParseNaturalLanguageResponse,
)
from aurora.services.events import EventService

router = APIRouter()


@router.get("", response_model=List[EventResponse])
async def list_events(
    start: datetime = Query(..., description="Range start (ISO format)"),
    end: datetime = Query(..., description="Range end (ISO format)"),
    service: EventService = Depends(get_event_service),
):
    """List the caller's events intersecting [start, end)."""
    return await service.list_events(start, end)


@router.get("/weekly", response_model=CalendarViewResponse)
async def weekly_view(
    week_start: datetime = Query(..., description="First instant of the week"),
    service: EventService = Depends(get_event_service),
):
    return await service.weekly_view(week_start)


@router.get("/monthly", response_model=CalendarViewResponse)
async def monthly_view(
    year: int,
    month: int,
    category_id: Optional[UUID] = None,
    timezone_offset_minutes: int = 0,
    service: EventService = Depends(get_event_service),
):
    """Events of a calendar month, optionally filtered by category."""
    return await service.monthly_view(year, month, category_id, timezone_offset_minutes)


@router.post("/validate", response_model=AIValidationResult)
async def validate_event(
    event_data: EventCreate,
    service: EventService = Depends(get_event_service),
):
    """Review a candidate event without creating it."""
    return await service.validate_event(event_data)


@router.post("/parse", response_model=ParseNaturalLanguageResponse)
async def parse_natural_language(
    request: ParseNaturalLanguageRequest,
    service: EventService = Depends(get_event_service),
):
    """Turn a sentence into a candidate event plus its validation."""
    result = await service.parse_natural_language(request)
    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=result.model_dump(mode="json"),
        )
    return result


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: UUID,
    service: EventService = Depends(get_event_service),
):
    return await service.get_event(event_id)


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    event_data: EventCreate,
    service: EventService = Depends(get_event_service),
):
    return await service.create_event(event_data)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: UUID,
    event_data: EventCreate,
    service: EventService = Depends(get_event_service),
):
    return await service.update_event(event_id, event_data)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: UUID,
    service: EventService = Depends(get_event_service),
):
    await service.delete_event(event_id)


@router.patch("/{event_id}/mood", response_model=EventResponse)
async def update_mood(
    event_id: UUID,
    mood: EventMoodUpdate,
    service: EventService = Depends(get_event_service),
):
    """Record how the user felt about an event."""
    return await service.update_mood(event_id, mood)
