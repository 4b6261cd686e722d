"""
Schedule suggestion endpoints.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from aurora.api.deps import get_suggestion_service
from aurora.schemas.suggestion import RespondToSuggestionRequest, ScheduleSuggestionResponse
from aurora.services.suggestions import SuggestionService

router = APIRouter()


@router.get("", response_model=List[ScheduleSuggestionResponse])
async def list_pending_suggestions(service: SuggestionService = Depends(get_suggestion_service)):
    """Pending suggestions, most important first."""
    suggestions = await service.get_pending()
    return [ScheduleSuggestionResponse.from_model(s) for s in suggestions]


@router.post("/generate", response_model=List[ScheduleSuggestionResponse])
async def generate_suggestions(
    timezone_offset_minutes: Optional[int] = Query(None, description="Minutes from UTC, e.g. -180"),
    service: SuggestionService = Depends(get_suggestion_service),
):
    """Analyse the next two weeks and replace the pending suggestions."""
    suggestions = await service.generate(timezone_offset_minutes)
    return [ScheduleSuggestionResponse.from_model(s) for s in suggestions]


@router.post("/{suggestion_id}/respond", response_model=ScheduleSuggestionResponse)
async def respond_to_suggestion(
    suggestion_id: UUID,
    response: RespondToSuggestionRequest,
    service: SuggestionService = Depends(get_suggestion_service),
):
    suggestion = await service.respond(suggestion_id, response)
    return ScheduleSuggestionResponse.from_model(suggestion)
