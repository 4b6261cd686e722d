"""
AI-backed event validation, natural-language parsing and schedule suggestions.

AnthropicValidationService talks to Claude and raises DownstreamFailure for
anything it cannot use. ResilientValidator wraps any adapter with a timeout
and falls back to the local heuristics, so callers never see an AI failure.
"""
import asyncio
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Any, Dict, List, Optional, Protocol, Sequence
from uuid import UUID

import anthropic
from pydantic import ValidationError as PydanticValidationError

from aurora.config import settings
from aurora.core.clock import as_aware, utcnow
from aurora.core.fallback import fallback_validation
from aurora.core.overlap import TimedEvent
from aurora.core.scoring import SuggestionCandidate
from aurora.errors import DownstreamFailure
from aurora.models.enums import EventPriority, SuggestionType, ValidationSeverity
from aurora.schemas.event import EventCreate
from aurora.schemas.validation import AIValidationResult, ParseNaturalLanguageResponse

logger = logging.getLogger(__name__)

# Order matters: the model answers with 1-based indexes into this list
AI_SUGGESTION_TYPES = [
    SuggestionType.MOVE_EVENT,
    SuggestionType.RESOLVE_CONFLICT,
    SuggestionType.OPTIMIZE_DISTRIBUTION,
    SuggestionType.PATTERN_ALERT,
    SuggestionType.SUGGEST_BREAK,
    SuggestionType.GENERAL_REORGANIZATION,
]

PARSE_FAILURE_MESSAGE = (
    "No se pudo interpretar el texto como un evento. "
    "Intenta describirlo con una fecha y una hora."
)


@dataclass
class ParsedEvent:
    event: EventCreate
    validation: Optional[AIValidationResult] = None


class AIValidationService(Protocol):
    """What the rest of the app needs from an AI provider."""

    async def validate_event_creation(
        self,
        candidate: EventCreate,
        user_id: UUID,
        existing_events: Sequence[TimedEvent],
        tz: Optional[tzinfo] = None,
    ) -> AIValidationResult: ...

    async def parse_natural_language(
        self,
        text: str,
        user_id: UUID,
        categories: Sequence[Any],
        existing_events: Sequence[TimedEvent],
        tz: Optional[tzinfo] = None,
    ) -> ParsedEvent: ...

    async def generate_schedule_suggestions(
        self,
        events: Sequence[TimedEvent],
        tz: Optional[tzinfo] = None,
    ) -> List[SuggestionCandidate]: ...


def extract_json(text: str, opening: str = "{", closing: str = "}") -> Any:
    """Pull the outermost JSON object (or array) out of a model reply."""
    start = text.find(opening)
    end = text.rfind(closing)
    if start < 0 or end <= start:
        raise DownstreamFailure("AI response did not contain JSON")

    try:
        return json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        raise DownstreamFailure(f"AI response contained malformed JSON: {e}") from e


def _parse_datetime(value: Any, tz: Optional[tzinfo]) -> Optional[datetime]:
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    # Naive times from the model are local to the user
    return as_aware(parsed, tz)


def _validation_from_json(data: Dict[str, Any]) -> AIValidationResult:
    if not isinstance(data, dict) or "approved" not in data:
        raise DownstreamFailure("AI validation block is missing 'approved'")

    severities = {s.value.lower(): s for s in ValidationSeverity}
    severity = severities.get(str(data.get("severity", "info")).lower(), ValidationSeverity.INFO)
    suggestions = data.get("suggestions") or []
    if not isinstance(suggestions, list):
        suggestions = [str(suggestions)]

    return AIValidationResult(
        is_approved=bool(data["approved"]),
        severity=severity,
        recommendation_message=data.get("message"),
        suggestions=[str(s) for s in suggestions],
        used_ai=True,
    )


def _describe_events(events: Sequence[TimedEvent], tz: Optional[tzinfo]) -> str:
    if not events:
        return "(sin eventos)"

    lines = []
    for event in sorted(events, key=lambda e: e.start):
        start = event.start.astimezone(tz) if tz else event.start
        end = event.end.astimezone(tz) if tz else event.end
        lines.append(
            f"- [{event.id}] {event.title} | {start:%Y-%m-%d %H:%M} - {end:%H:%M}"
            f" | Cat: {event.category_name or 'Sin categoría'}"
        )
    return "\n".join(lines)


class AnthropicValidationService:
    """
    Claude-backed implementation of AIValidationService.

    Every reply is expected to be JSON; replies that are not, or that miss
    required fields, raise DownstreamFailure.
    """

    def __init__(self, client=None, model: Optional[str] = None, max_tokens: Optional[int] = None):
        self.client = client or anthropic.AsyncAnthropic(
            api_key=settings.anthropic_api_key,
            timeout=settings.ai_timeout_seconds,
        )
        self.model = model or settings.ai_model
        self.max_tokens = max_tokens or settings.ai_max_tokens

    async def _complete(self, prompt: str) -> str:
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            raise DownstreamFailure(f"Claude API error: {e}") from e

        if not response.content:
            raise DownstreamFailure("Claude returned an empty response")
        return response.content[0].text

    async def validate_event_creation(
        self,
        candidate: EventCreate,
        user_id: UUID,
        existing_events: Sequence[TimedEvent],
        tz: Optional[tzinfo] = None,
    ) -> AIValidationResult:
        start = candidate.start.astimezone(tz) if tz else candidate.start
        end = candidate.end.astimezone(tz) if tz else candidate.end

        prompt = f"""Eres un asistente de bienestar que revisa calendarios personales.
Evalúa si conviene crear este evento teniendo en cuenta la agenda existente.

EVENTO PROPUESTO:
- Título: {candidate.title}
- Descripción: {candidate.description or '(sin descripción)'}
- Inicio: {start:%Y-%m-%d %H:%M}
- Fin: {end:%Y-%m-%d %H:%M}
- Todo el día: {'sí' if candidate.is_all_day else 'no'}
- Prioridad: {int(candidate.priority)}

EVENTOS EXISTENTES:
{_describe_events(existing_events, tz)}

Revisa conflictos de horario, descanso entre eventos, carga del día y horarios de sueño.
- severity = "critical" para problemas graves (conflicto de horario, más de 12h de trabajo seguido)
- severity = "warning" para señales preocupantes pero no bloqueantes
- severity = "info" si solo son recomendaciones ligeras

Responde SOLO en JSON con esta estructura:
{{"approved": true, "severity": "info", "message": "mensaje", "suggestions": ["sugerencia 1"]}}"""

        text = await self._complete(prompt)
        return _validation_from_json(extract_json(text))

    async def parse_natural_language(
        self,
        text: str,
        user_id: UUID,
        categories: Sequence[Any],
        existing_events: Sequence[TimedEvent],
        tz: Optional[tzinfo] = None,
    ) -> ParsedEvent:
        if not categories:
            raise DownstreamFailure("No categories available to assign the parsed event")

        now = utcnow().astimezone(tz) if tz else utcnow()
        category_lines = "\n".join(f"- {c.id}: {c.name}" for c in categories)

        prompt = f"""Convierte este texto en un evento de calendario.
Fecha y hora actual del usuario: {now:%Y-%m-%d %H:%M %z}

TEXTO: "{text}"

CATEGORÍAS DISPONIBLES:
{category_lines}

EVENTOS EXISTENTES:
{_describe_events(existing_events, tz)}

Responde SOLO en JSON con esta estructura:
{{
  "event": {{
    "title": "Título del evento",
    "description": "Descripción opcional",
    "startDate": "{now:%Y-%m-%dT%H:%M:%S%z}",
    "endDate": "{now:%Y-%m-%dT%H:%M:%S%z}",
    "isAllDay": false,
    "location": "Ubicación opcional",
    "priority": 2,
    "eventCategoryId": "{categories[0].id}",
    "categoryName": "{categories[0].name}"
  }},
  "analysis": {{
    "approved": true,
    "severity": "info",
    "message": "mensaje",
    "suggestions": ["sugerencia 1"]
  }}
}}
Incluye SIEMPRE el objeto analysis."""

        reply = extract_json(await self._complete(prompt))
        if not isinstance(reply, dict):
            raise DownstreamFailure("AI parse response is not an object")

        event_data = reply.get("event") if isinstance(reply.get("event"), dict) else reply
        event = self._event_from_json(event_data, categories, tz)

        validation = None
        if isinstance(reply.get("analysis"), dict):
            try:
                validation = _validation_from_json(reply["analysis"])
            except DownstreamFailure:
                logger.warning("Ignoring malformed analysis block in AI parse response")

        return ParsedEvent(event=event, validation=validation)

    def _event_from_json(
        self,
        data: Dict[str, Any],
        categories: Sequence[Any],
        tz: Optional[tzinfo],
    ) -> EventCreate:
        title = (data.get("title") or "").strip()
        if not title:
            raise DownstreamFailure("AI parse response has no event title")

        start = _parse_datetime(data.get("startDate"), tz) or utcnow()
        end = _parse_datetime(data.get("endDate"), tz)
        if end is None or end <= start:
            end = start + timedelta(hours=1)

        category = self._resolve_category(data, categories)

        try:
            priority = EventPriority(int(data.get("priority") or EventPriority.MEDIUM))
        except (TypeError, ValueError):
            priority = EventPriority.MEDIUM

        try:
            return EventCreate(
                title=title[:200],
                description=data.get("description") or None,
                start=start,
                end=end,
                category_id=category.id,
                is_all_day=bool(data.get("isAllDay", False)),
                location=data.get("location") or None,
                priority=priority,
                timezone_offset_minutes=(
                    int(start.utcoffset().total_seconds() // 60) if start.utcoffset() else 0
                ),
            )
        except PydanticValidationError as e:
            raise DownstreamFailure(f"AI parse response is not a valid event: {e}") from e

    @staticmethod
    def _resolve_category(data: Dict[str, Any], categories: Sequence[Any]):
        raw_id = str(data.get("eventCategoryId") or "")
        for category in categories:
            if str(category.id) == raw_id:
                return category

        name = (data.get("categoryName") or data.get("category") or "").strip().lower()
        if name:
            for category in categories:
                if category.name.lower() == name:
                    return category

        logger.info("AI returned no usable category, using '%s'", categories[0].name)
        return categories[0]

    async def generate_schedule_suggestions(
        self,
        events: Sequence[TimedEvent],
        tz: Optional[tzinfo] = None,
    ) -> List[SuggestionCandidate]:
        if not events:
            return []

        prompt = f"""Analiza este calendario y genera sugerencias de optimización en JSON.

EVENTOS:
{_describe_events(events, tz)}

DETECTA: conflictos, sobrecarga, falta de descansos, mala distribución y eventos duplicados.

RESPONDE SOLO con un array JSON:
[{{
  "eventId": "id del evento o null",
  "type": 1-6 (1=MoveEvent, 2=ResolveConflict, 3=OptimizeDistribution, 4=PatternAlert, 5=SuggestBreak, 6=GeneralReorganization),
  "description": "Texto corto y accionable",
  "reason": "Explicación del por qué",
  "priority": 1-5,
  "suggestedDateTime": "fecha ISO 8601 o null",
  "confidenceScore": 70-100
}}]"""

        items = extract_json(await self._complete(prompt), "[", "]")
        if not isinstance(items, list):
            raise DownstreamFailure("AI suggestions response is not a list")

        known_ids = {str(e.id): e.id for e in events if e.id is not None}
        suggestions = []
        for item in items:
            if not isinstance(item, dict) or not item.get("description"):
                continue
            suggestion_type = self._suggestion_type(item.get("type"))
            if suggestion_type is None:
                continue

            suggestions.append(SuggestionCandidate(
                type=suggestion_type,
                priority=max(1, min(5, int(item.get("priority") or 3))),
                confidence=max(0, min(100, int(item.get("confidenceScore") or 70))),
                description=str(item["description"])[:500],
                reason=str(item.get("reason") or "")[:1000],
                event_id=known_ids.get(str(item.get("eventId"))),
                suggested_datetime=_parse_datetime(item.get("suggestedDateTime"), tz),
            ))

        logger.info("AI generated %d schedule suggestions", len(suggestions))
        return suggestions

    @staticmethod
    def _suggestion_type(value: Any) -> Optional[SuggestionType]:
        if isinstance(value, int) and 1 <= value <= len(AI_SUGGESTION_TYPES):
            return AI_SUGGESTION_TYPES[value - 1]
        if isinstance(value, str):
            if value.isdigit():
                return AnthropicValidationService._suggestion_type(int(value))
            for suggestion_type in SuggestionType:
                if suggestion_type.value.lower() == value.lower():
                    return suggestion_type
        return None


class ResilientValidator:
    """
    Runs an AIValidationService under a timeout and degrades to local rules.

    Timeouts, adapter exceptions and malformed replies are logged at WARNING
    and never propagate.
    """

    def __init__(self, adapter: AIValidationService, timeout: Optional[float] = None):
        self.adapter = adapter
        self.timeout = timeout if timeout is not None else settings.ai_timeout_seconds

    async def _call(self, operation: str, coro):
        try:
            return await asyncio.wait_for(coro, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("AI %s timed out after %.1fs", operation, self.timeout)
        except Exception as e:
            logger.warning("AI %s failed: %s", operation, e)
        return None

    async def validate(
        self,
        candidate: EventCreate,
        user_id: UUID,
        existing_events: Sequence[TimedEvent],
        tz: Optional[tzinfo] = None,
    ) -> AIValidationResult:
        result = await self._call(
            "validation",
            self.adapter.validate_event_creation(candidate, user_id, existing_events, tz),
        )
        if result is not None:
            return result

        return fallback_validation(
            TimedEvent(
                id=None,
                title=candidate.title,
                start=as_aware(candidate.start, tz),
                end=as_aware(candidate.end, tz),
                is_all_day=candidate.is_all_day,
            ),
            existing_events,
            tz,
        )

    async def parse(
        self,
        text: str,
        user_id: UUID,
        categories: Sequence[Any],
        existing_events: Sequence[TimedEvent],
        tz: Optional[tzinfo] = None,
    ) -> ParseNaturalLanguageResponse:
        parsed = await self._call(
            "parsing",
            self.adapter.parse_natural_language(text, user_id, categories, existing_events, tz),
        )
        if parsed is None:
            return ParseNaturalLanguageResponse(success=False, error_message=PARSE_FAILURE_MESSAGE)

        validation = parsed.validation
        if validation is None:
            event = parsed.event
            validation = fallback_validation(
                TimedEvent(
                    id=None,
                    title=event.title,
                    start=as_aware(event.start, tz),
                    end=as_aware(event.end, tz),
                    is_all_day=event.is_all_day,
                ),
                existing_events,
                tz,
            )

        return ParseNaturalLanguageResponse(success=True, event=parsed.event, validation=validation)

    async def suggest(
        self,
        events: Sequence[TimedEvent],
        tz: Optional[tzinfo] = None,
    ) -> List[SuggestionCandidate]:
        """AI suggestions, or an empty list when the adapter cannot help."""
        suggestions = await self._call(
            "suggestion generation",
            self.adapter.generate_schedule_suggestions(events, tz),
        )
        return suggestions or []
