"""Tests for the Claude adapter's response handling."""
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
import json
import uuid

import pytest

from aurora.errors import DownstreamFailure
from aurora.models.enums import SuggestionType, ValidationSeverity
from aurora.schemas.event import EventCreate
from aurora.services.ai_validation import AnthropicValidationService, extract_json

from helpers import at, timed

USER = uuid.uuid4()


def claude_replying(text):
    client = MagicMock()
    client.messages.create = AsyncMock(return_value=SimpleNamespace(content=[SimpleNamespace(text=text)]))
    return client


def category(name):
    return SimpleNamespace(id=uuid.uuid4(), name=name)


class TestExtractJson:
    def test_object_wrapped_in_prose(self):
        assert extract_json('Claro: {"approved": true} ¡listo!') == {"approved": True}

    def test_array(self):
        assert extract_json('```json\n[{"a": 1}]\n```', "[", "]") == [{"a": 1}]

    def test_no_json(self):
        with pytest.raises(DownstreamFailure):
            extract_json("no puedo ayudar con eso")

    def test_malformed_json(self):
        with pytest.raises(DownstreamFailure):
            extract_json('{"approved": tru}')


class TestValidateEventCreation:
    @pytest.mark.asyncio
    async def test_maps_reply_to_result(self):
        reply = {"approved": False, "severity": "critical", "message": "Choca", "suggestions": ["Mover"]}
        service = AnthropicValidationService(client=claude_replying(json.dumps(reply)), model="test")

        result = await service.validate_event_creation(
            EventCreate(title="X", start=at(9), end=at(10)), USER, [timed("Y", at(9), at(10))]
        )

        assert result.is_approved is False
        assert result.severity == ValidationSeverity.CRITICAL
        assert result.suggestions == ["Mover"]
        assert result.used_ai is True

    @pytest.mark.asyncio
    async def test_missing_approved_is_malformed(self):
        service = AnthropicValidationService(client=claude_replying('{"message": "hola"}'), model="test")

        with pytest.raises(DownstreamFailure):
            await service.validate_event_creation(EventCreate(title="X", start=at(9), end=at(10)), USER, [])


class TestParseNaturalLanguage:
    @pytest.mark.asyncio
    async def test_resolves_category_by_name(self):
        work, health = category("Trabajo"), category("Salud")
        reply = {
            "event": {
                "title": "Dentista",
                "startDate": "2025-03-11T15:00:00Z",
                "endDate": "2025-03-11T16:00:00Z",
                "categoryName": "salud",
                "priority": 3,
            },
        }
        service = AnthropicValidationService(client=claude_replying(json.dumps(reply)), model="test")

        parsed = await service.parse_natural_language("dentista mañana a las 3", USER, [work, health], [])

        assert parsed.event.title == "Dentista"
        assert parsed.event.category_id == health.id
        assert parsed.event.end - parsed.event.start == at(1) - at(0)
        assert parsed.validation is None

    @pytest.mark.asyncio
    async def test_unknown_category_uses_first_available(self):
        work = category("Trabajo")
        reply = {"event": {"title": "Algo", "startDate": "2025-03-11T15:00:00Z", "categoryName": "Nueva"}}
        service = AnthropicValidationService(client=claude_replying(json.dumps(reply)), model="test")

        parsed = await service.parse_natural_language("algo", USER, [work], [])

        assert parsed.event.category_id == work.id
        # Missing end defaults to one hour
        assert parsed.event.end - parsed.event.start == at(1) - at(0)

    @pytest.mark.asyncio
    async def test_analysis_block_is_parsed(self):
        reply = {
            "event": {"title": "Algo", "startDate": "2025-03-11T15:00:00Z", "endDate": "2025-03-11T15:30:00Z"},
            "analysis": {"approved": True, "severity": "warning", "message": "Día cargado"},
        }
        service = AnthropicValidationService(client=claude_replying(json.dumps(reply)), model="test")

        parsed = await service.parse_natural_language("algo", USER, [category("Trabajo")], [])

        assert parsed.validation.severity == ValidationSeverity.WARNING

    @pytest.mark.asyncio
    async def test_missing_title_fails(self):
        service = AnthropicValidationService(client=claude_replying('{"event": {}}'), model="test")

        with pytest.raises(DownstreamFailure):
            await service.parse_natural_language("???", USER, [category("Trabajo")], [])


class TestGenerateScheduleSuggestions:
    @pytest.mark.asyncio
    async def test_maps_items_and_drops_unknown_event_ids(self):
        event = timed("Guitarra", at(9), at(10))
        reply = [
            {"eventId": str(event.id), "type": 1, "description": "Mover Guitarra", "reason": "r",
             "priority": 9, "confidenceScore": 85, "suggestedDateTime": "2025-03-10T11:00:00Z"},
            {"eventId": str(uuid.uuid4()), "type": "SuggestBreak", "description": "Descanso", "reason": "r"},
            {"type": 42, "description": "tipo desconocido"},
        ]
        service = AnthropicValidationService(client=claude_replying(json.dumps(reply)), model="test")

        suggestions = await service.generate_schedule_suggestions([event])

        assert [s.type for s in suggestions] == [SuggestionType.MOVE_EVENT, SuggestionType.SUGGEST_BREAK]
        assert suggestions[0].event_id == event.id
        assert suggestions[0].priority == 5
        assert suggestions[0].suggested_datetime == at(11)
        assert suggestions[1].event_id is None

    @pytest.mark.asyncio
    async def test_no_events_skips_the_call(self):
        client = claude_replying("[]")
        service = AnthropicValidationService(client=client, model="test")

        assert await service.generate_schedule_suggestions([]) == []
        client.messages.create.assert_not_called()
