"""
Event category persistence.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, func, update, delete, or_
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.models.event import Event
from aurora.models.event_category import EventCategory


class EventCategoryRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, category_id: UUID) -> Optional[EventCategory]:
        result = await self.db.execute(
            select(EventCategory).where(EventCategory.id == category_id)
        )
        return result.scalar_one_or_none()

    async def get_available_for_user(self, user_id: UUID) -> List[EventCategory]:
        """Active system categories plus the user's own, in display order."""
        result = await self.db.execute(
            select(EventCategory)
            .where(
                EventCategory.is_active.is_(True),
                or_(
                    EventCategory.is_system_default.is_(True),
                    EventCategory.user_id == user_id,
                ),
            )
            .order_by(EventCategory.sort_order, EventCategory.name)
        )
        return list(result.scalars().all())

    async def get_system_categories(self) -> List[EventCategory]:
        result = await self.db.execute(
            select(EventCategory)
            .where(
                EventCategory.is_active.is_(True),
                EventCategory.is_system_default.is_(True),
            )
            .order_by(EventCategory.sort_order, EventCategory.name)
        )
        return list(result.scalars().all())

    async def get_user_custom_categories(self, user_id: UUID) -> List[EventCategory]:
        result = await self.db.execute(
            select(EventCategory)
            .where(
                EventCategory.is_active.is_(True),
                EventCategory.is_system_default.is_(False),
                EventCategory.user_id == user_id,
            )
            .order_by(EventCategory.sort_order, EventCategory.name)
        )
        return list(result.scalars().all())

    async def exists_with_name(self, name: str, user_id: UUID) -> bool:
        result = await self.db.execute(
            select(func.count(EventCategory.id)).where(
                EventCategory.user_id == user_id,
                func.lower(EventCategory.name) == name.lower(),
            )
        )
        return (result.scalar() or 0) > 0

    async def get_event_count(self, category_id: UUID) -> int:
        result = await self.db.execute(
            select(func.count(Event.id)).where(Event.category_id == category_id)
        )
        return result.scalar() or 0

    async def reassign_events(self, from_category_id: UUID, to_category_id: UUID) -> int:
        """Point every event of one category at another. Returns rows touched."""
        result = await self.db.execute(
            update(Event)
            .where(Event.category_id == from_category_id)
            .values(category_id=to_category_id)
        )
        return result.rowcount or 0

    async def delete(self, category_id: UUID) -> bool:
        result = await self.db.execute(
            delete(EventCategory).where(EventCategory.id == category_id)
        )
        return (result.rowcount or 0) > 0

    async def add(self, category: EventCategory) -> EventCategory:
        self.db.add(category)
        await self.db.commit()
        await self.db.refresh(category)
        return category

    async def save_changes(self) -> None:
        await self.db.commit()
