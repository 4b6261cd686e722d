"""
Schedule suggestion lifecycle: generation, listing and user responses.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from aurora.config import settings
from aurora.core.clock import offset_timezone, utcnow
from aurora.core.overlap import TimedEvent
from aurora.core.scoring import rank_suggestions, score_suggestions
from aurora.errors import AuthorizationError, NotFoundError
from aurora.models.enums import SuggestionStatus, SuggestionType
from aurora.models.schedule_suggestion import ScheduleSuggestion
from aurora.repositories.events import EventRepository
from aurora.repositories.suggestions import ScheduleSuggestionRepository
from aurora.schemas.suggestion import RespondToSuggestionRequest
from aurora.services.ai_validation import ResilientValidator

logger = logging.getLogger(__name__)


class SuggestionService:
    def __init__(
        self,
        db: AsyncSession,
        user_id: UUID,
        suggestions: Optional[ScheduleSuggestionRepository] = None,
        events: Optional[EventRepository] = None,
        validator: Optional[ResilientValidator] = None,
    ):
        self.db = db
        self.user_id = user_id
        self.suggestions = suggestions or ScheduleSuggestionRepository(db)
        self.events = events or EventRepository(db)
        self.validator = validator

    async def get_pending(self) -> List[ScheduleSuggestion]:
        return await self.suggestions.get_pending_for_user(self.user_id)

    async def generate(self, timezone_offset_minutes: Optional[int] = None) -> List[ScheduleSuggestion]:
        """
        Replace the user's pending suggestions with a fresh batch.

        The AI is asked first; the local scorer runs when it returns nothing
        or fails. Old suggestions are expired, never deleted.
        """
        if timezone_offset_minutes is None:
            timezone_offset_minutes = settings.default_timezone_offset_minutes
        tz = offset_timezone(timezone_offset_minutes)
        now = utcnow()

        await self.suggestions.discard_pending(self.user_id)
        await self.suggestions.expire_older_than(
            self.user_id, now - timedelta(days=settings.suggestion_expiry_days)
        )

        horizon_end = now + timedelta(days=settings.suggestion_horizon_days)
        events = await self.events.list_in_range(self.user_id, now, horizon_end)
        timed = [TimedEvent.from_event(e) for e in events]

        candidates = []
        if self.validator is not None and timed:
            candidates = await self.validator.suggest(timed, tz)

        if candidates:
            candidates = rank_suggestions(candidates, settings.suggestion_page_size)
        else:
            candidates = score_suggestions(
                timed,
                now,
                horizon_end,
                page_size=settings.suggestion_page_size,
                min_break_minutes=settings.min_break_minutes,
                tz=tz,
            )

        events_by_id = {e.id: e for e in events}
        created = []
        for candidate in candidates:
            suggestion = ScheduleSuggestion(
                user_id=self.user_id,
                type=candidate.type,
                description=candidate.description,
                reason=candidate.reason,
                priority=candidate.priority,
                confidence_score=candidate.confidence,
                suggested_datetime=candidate.suggested_datetime,
                status=SuggestionStatus.PENDING,
            )
            event = events_by_id.get(candidate.event_id)
            if event is not None:
                suggestion.event_id = event.id
                suggestion.event = event
            created.append(suggestion)

        if created:
            await self.suggestions.create_many(created)
        logger.info("Generated %d suggestions for user %s", len(created), self.user_id)
        return created

    async def respond(
        self,
        suggestion_id: UUID,
        response: RespondToSuggestionRequest,
    ) -> ScheduleSuggestion:
        suggestion = await self.suggestions.get_by_id(suggestion_id)
        if not suggestion:
            raise NotFoundError(f"No suggestion exists with id {suggestion_id}", title="Suggestion not found")
        if suggestion.user_id != self.user_id:
            raise AuthorizationError("This suggestion belongs to another user")

        now = utcnow()
        suggestion.status = response.status
        suggestion.responded_at = now
        if response.user_comment and response.user_comment.strip():
            suggestion.extra = {
                "user_comment": response.user_comment,
                "responded_at": now.isoformat(),
            }

        if response.status == SuggestionStatus.ACCEPTED:
            await self._apply(suggestion)

        return await self.suggestions.save(suggestion)

    async def _apply(self, suggestion: ScheduleSuggestion) -> None:
        """
        Act on an accepted suggestion, keeping the target event's duration.

        A break suggestion's datetime is the break itself, so the event is
        pushed to start min_break_minutes after whatever precedes it. Other
        suggestions move the event to the suggested datetime.
        """
        if suggestion.event_id is None or suggestion.suggested_datetime is None:
            return

        event = await self.events.get_for_user(suggestion.event_id, self.user_id)
        if event is None:
            logger.warning("Suggestion %s targets missing event %s", suggestion.id, suggestion.event_id)
            return

        if suggestion.type == SuggestionType.SUGGEST_BREAK:
            new_start = await self._start_after_break(event)
            if new_start is None:
                return
        else:
            new_start = suggestion.suggested_datetime

        duration = event.end - event.start
        event.start = new_start
        event.end = new_start + duration
        logger.info("Moved event %s to %s", event.id, event.start.isoformat())

    async def _start_after_break(self, event) -> Optional[datetime]:
        """Earliest start leaving a full break after the preceding event, or None if already clear."""
        earlier = await self.events.list_in_range(self.user_id, event.start - timedelta(days=1), event.start)
        ends = [e.end for e in earlier if e.id != event.id and not e.is_all_day and e.end <= event.start]
        if not ends:
            return None
        start = max(ends) + timedelta(minutes=settings.min_break_minutes)
        return start if start > event.start else None
