"""
SQLAlchemy models for the Aurora database.
"""
from aurora.models.user import User
from aurora.models.event_category import EventCategory
from aurora.models.event import Event
from aurora.models.schedule_suggestion import ScheduleSuggestion
from aurora.models.enums import (
    EventPriority,
    SuggestionStatus,
    SuggestionType,
    ValidationSeverity,
)

__all__ = [
    "User",
    "EventCategory",
    "Event",
    "ScheduleSuggestion",
    "EventPriority",
    "SuggestionStatus",
    "SuggestionType",
    "ValidationSeverity",
]
