"""
Shared FastAPI dependencies: caller identity and per-request services.
"""
from functools import lru_cache
from typing import Optional
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.config import settings
from aurora.database import get_db
from aurora.errors import AuthenticationError
from aurora.services.ai_validation import AnthropicValidationService, ResilientValidator
from aurora.services.categories import CategoryService
from aurora.services.events import EventService
from aurora.services.productivity import ProductivityService
from aurora.services.suggestions import SuggestionService
from aurora.services.wellness import WellnessService


async def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> UUID:
    """
    Resolve the caller from the X-User-Id header set by the auth proxy.

    Falls back to the demo user when anonymous access is allowed.
    """
    if not x_user_id:
        if settings.allow_anonymous_access:
            return settings.demo_user_id
        raise AuthenticationError("Missing X-User-Id header")

    try:
        return UUID(x_user_id)
    except ValueError:
        raise AuthenticationError("X-User-Id is not a valid user id")


@lru_cache
def get_validator() -> ResilientValidator:
    """One Anthropic client for the whole process."""
    return ResilientValidator(AnthropicValidationService())


async def get_event_service(
    db: AsyncSession = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
    validator: ResilientValidator = Depends(get_validator),
) -> EventService:
    return EventService(db, user_id, validator=validator)


async def get_category_service(
    db: AsyncSession = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
) -> CategoryService:
    return CategoryService(db, user_id)


async def get_suggestion_service(
    db: AsyncSession = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
    validator: ResilientValidator = Depends(get_validator),
) -> SuggestionService:
    return SuggestionService(db, user_id, validator=validator)


async def get_productivity_service(
    db: AsyncSession = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
) -> ProductivityService:
    return ProductivityService(db, user_id)


async def get_wellness_service(
    db: AsyncSession = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
) -> WellnessService:
    return WellnessService(db, user_id)
