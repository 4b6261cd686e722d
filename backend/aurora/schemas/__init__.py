"""
Pydantic schemas for API request/response validation.
"""
from aurora.schemas.category import (
    CategoryCreate,
    CategoryResponse,
)
from aurora.schemas.event import (
    EventCreate,
    EventMoodUpdate,
    EventResponse,
    CalendarViewResponse,
)
from aurora.schemas.validation import (
    AIValidationResult,
    ParseNaturalLanguageRequest,
    ParseNaturalLanguageResponse,
)
from aurora.schemas.suggestion import (
    ScheduleSuggestionResponse,
    RespondToSuggestionRequest,
)
from aurora.schemas.productivity import (
    ProductivityAnalysis,
)
from aurora.schemas.wellness import (
    WellnessSummary,
)

__all__ = [
    # Category
    "CategoryCreate",
    "CategoryResponse",
    # Event
    "EventCreate",
    "EventMoodUpdate",
    "EventResponse",
    "CalendarViewResponse",
    # Validation
    "AIValidationResult",
    "ParseNaturalLanguageRequest",
    "ParseNaturalLanguageResponse",
    # Suggestions
    "ScheduleSuggestionResponse",
    "RespondToSuggestionRequest",
    # Productivity
    "ProductivityAnalysis",
    # Wellness
    "WellnessSummary",
]
