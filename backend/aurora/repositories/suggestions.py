"""
Schedule suggestion persistence. Suggestions are never deleted; stale ones
move to Expired.
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.models.enums import SuggestionStatus
from aurora.models.schedule_suggestion import ScheduleSuggestion


class ScheduleSuggestionRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, suggestion_id: UUID) -> Optional[ScheduleSuggestion]:
        result = await self.db.execute(
            select(ScheduleSuggestion).where(ScheduleSuggestion.id == suggestion_id)
        )
        return result.unique().scalar_one_or_none()

    async def get_pending_for_user(self, user_id: UUID) -> List[ScheduleSuggestion]:
        result = await self.db.execute(
            select(ScheduleSuggestion)
            .where(
                ScheduleSuggestion.user_id == user_id,
                ScheduleSuggestion.status == SuggestionStatus.PENDING,
            )
            .order_by(ScheduleSuggestion.priority.desc(), ScheduleSuggestion.confidence_score.desc())
        )
        return list(result.unique().scalars().all())

    async def create_many(self, suggestions: List[ScheduleSuggestion]) -> List[ScheduleSuggestion]:
        self.db.add_all(suggestions)
        await self.db.commit()
        return suggestions

    async def save(self, suggestion: ScheduleSuggestion) -> ScheduleSuggestion:
        await self.db.commit()
        return suggestion

    async def expire_older_than(self, user_id: UUID, before: datetime) -> int:
        result = await self.db.execute(
            update(ScheduleSuggestion)
            .where(
                ScheduleSuggestion.user_id == user_id,
                ScheduleSuggestion.status == SuggestionStatus.PENDING,
                ScheduleSuggestion.created_at < before,
            )
            .values(status=SuggestionStatus.EXPIRED)
        )
        await self.db.commit()
        return result.rowcount or 0

    async def discard_pending(self, user_id: UUID) -> int:
        """Retire the previous batch before a new one is generated."""
        result = await self.db.execute(
            update(ScheduleSuggestion)
            .where(
                ScheduleSuggestion.user_id == user_id,
                ScheduleSuggestion.status == SuggestionStatus.PENDING,
            )
            .values(status=SuggestionStatus.EXPIRED)
        )
        await self.db.commit()
        return result.rowcount or 0
