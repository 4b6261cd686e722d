"""
Schedule suggestion schemas.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from uuid import UUID

from aurora.models.enums import (
    SUGGESTION_STATUS_LABELS,
    SUGGESTION_TYPE_LABELS,
    SuggestionStatus,
    SuggestionType,
)

RESPONSE_STATUSES = {
    SuggestionStatus.ACCEPTED,
    SuggestionStatus.REJECTED,
    SuggestionStatus.POSTPONED,
}


class ScheduleSuggestionResponse(BaseModel):
    id: UUID
    user_id: UUID
    event_id: Optional[UUID] = None
    event_title: Optional[str] = None
    type: SuggestionType
    type_description: str
    description: str
    reason: str
    priority: int
    confidence_score: int
    suggested_datetime: Optional[datetime] = None
    status: SuggestionStatus
    status_description: str
    responded_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, suggestion) -> "ScheduleSuggestionResponse":
        # Only read the event if already loaded; a lazy load here would need IO
        event = suggestion.__dict__.get("event")
        return cls(
            id=suggestion.id,
            user_id=suggestion.user_id,
            event_id=suggestion.event_id,
            event_title=event.title if event is not None else None,
            type=suggestion.type,
            type_description=SUGGESTION_TYPE_LABELS.get(suggestion.type, "Desconocido"),
            description=suggestion.description,
            reason=suggestion.reason,
            priority=suggestion.priority,
            confidence_score=suggestion.confidence_score,
            suggested_datetime=suggestion.suggested_datetime,
            status=suggestion.status,
            status_description=SUGGESTION_STATUS_LABELS.get(suggestion.status, "Desconocido"),
            responded_at=suggestion.responded_at,
            created_at=suggestion.created_at,
        )


class RespondToSuggestionRequest(BaseModel):
    status: SuggestionStatus
    user_comment: Optional[str] = Field(default=None, max_length=500)

    @field_validator("status")
    @classmethod
    def check_status(cls, value: SuggestionStatus) -> SuggestionStatus:
        if value not in RESPONSE_STATUSES:
            raise ValueError("status must be Accepted, Rejected or Postponed")
        return value
