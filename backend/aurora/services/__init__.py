"""
Application services. Each one works on behalf of a single user.
"""
from aurora.services.ai_validation import (
    AIValidationService,
    AnthropicValidationService,
    ResilientValidator,
)
from aurora.services.categories import CategoryService
from aurora.services.events import EventService
from aurora.services.productivity import ProductivityService
from aurora.services.suggestions import SuggestionService
from aurora.services.wellness import WellnessService

__all__ = [
    "AIValidationService",
    "AnthropicValidationService",
    "ResilientValidator",
    "CategoryService",
    "EventService",
    "ProductivityService",
    "SuggestionService",
    "WellnessService",
]
