"""
API routers for Aurora.
"""
from aurora.api import events, categories, suggestions, productivity, wellness

__all__ = [
    "events",
    "categories",
    "suggestions",
    "productivity",
    "wellness",
]
