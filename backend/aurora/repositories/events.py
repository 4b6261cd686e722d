"""
Event persistence.
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.models.event import Event


class EventRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_for_user(self, event_id: UUID, user_id: UUID) -> Optional[Event]:
        result = await self.db.execute(
            select(Event).where(
                and_(
                    Event.id == event_id,
                    Event.user_id == user_id,
                )
            )
        )
        return result.unique().scalar_one_or_none()

    async def list_in_range(
        self,
        user_id: UUID,
        start: datetime,
        end: datetime,
        category_id: Optional[UUID] = None,
    ) -> List[Event]:
        """Events intersecting [start, end), ordered by start then title."""
        query = select(Event).where(
            Event.user_id == user_id,
            Event.start < end,
            Event.end > start,
        )
        if category_id:
            query = query.where(Event.category_id == category_id)

        query = query.order_by(Event.start, Event.title)
        result = await self.db.execute(query)
        return list(result.unique().scalars().all())

    async def add(self, event: Event) -> Event:
        self.db.add(event)
        await self.db.commit()
        await self.db.refresh(event)
        return event

    async def save(self, event: Event) -> Event:
        await self.db.commit()
        await self.db.refresh(event)
        return event

    async def delete(self, event: Event) -> None:
        await self.db.delete(event)
        await self.db.commit()
