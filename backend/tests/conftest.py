"""
Pytest fixtures for Aurora testing.

Provides:
- Fixed user ids
- Builders for ORM events and categories (never attached to a session)
- Repository doubles and a TestClient
"""
from datetime import datetime, timedelta
from typing import Optional
from unittest.mock import AsyncMock
import uuid

import pytest
from fastapi.testclient import TestClient

from aurora.models.event import Event
from aurora.models.event_category import EventCategory
from aurora.repositories.categories import EventCategoryRepository
from aurora.repositories.events import EventRepository
from aurora.repositories.suggestions import ScheduleSuggestionRepository

from helpers import at


# =============================================================================
# IDENTITY FIXTURES
# =============================================================================

@pytest.fixture
def user_id():
    return uuid.UUID("11111111-1111-1111-1111-111111111111")


@pytest.fixture
def other_user_id():
    return uuid.UUID("22222222-2222-2222-2222-222222222222")


# =============================================================================
# MODEL BUILDERS
# =============================================================================

@pytest.fixture
def make_category():
    def _create(
        owner: Optional[uuid.UUID] = None,
        name: str = "Trabajo",
        system: bool = False,
        active: bool = True,
    ) -> EventCategory:
        return EventCategory(
            id=uuid.uuid4(),
            user_id=owner,
            name=name,
            description=None,
            color="#2b7fff",
            icon=None,
            is_system_default=system,
            sort_order=0,
            is_active=active,
        )

    return _create


@pytest.fixture
def make_event():
    def _create(
        owner: uuid.UUID,
        category: EventCategory,
        title: str = "Reunión",
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        mood: Optional[int] = None,
    ) -> Event:
        start = start or at(9)
        return Event(
            id=uuid.uuid4(),
            user_id=owner,
            category_id=category.id,
            category=category,
            title=title,
            description=None,
            start=start,
            end=end or start + timedelta(hours=1),
            is_all_day=False,
            location=None,
            color=None,
            notes=None,
            priority=2,
            is_recurring=False,
            recurrence_pattern=None,
            mood_rating=mood,
            mood_notes=None,
        )

    return _create


# =============================================================================
# REPOSITORY DOUBLES
# =============================================================================

@pytest.fixture
def event_repo():
    return AsyncMock(spec=EventRepository)


@pytest.fixture
def category_repo():
    return AsyncMock(spec=EventCategoryRepository)


@pytest.fixture
def suggestion_repo():
    return AsyncMock(spec=ScheduleSuggestionRepository)


# =============================================================================
# API CLIENT
# =============================================================================

@pytest.fixture
def app():
    from aurora.main import app

    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    # Not used as a context manager, so the lifespan (and its DB connection) never runs
    return TestClient(app)
