"""
Database access for Aurora entities.
"""
from aurora.repositories.events import EventRepository
from aurora.repositories.categories import EventCategoryRepository
from aurora.repositories.suggestions import ScheduleSuggestionRepository

__all__ = [
    "EventRepository",
    "EventCategoryRepository",
    "ScheduleSuggestionRepository",
]
