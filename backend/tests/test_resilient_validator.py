"""Tests for the timeout-and-fallback wrapper around the AI adapter."""
import asyncio
from unittest.mock import AsyncMock
import uuid

import pytest

from aurora.core.fallback import FALLBACK_MARKER
from aurora.errors import DownstreamFailure
from aurora.models.enums import SuggestionType, ValidationSeverity
from aurora.schemas.event import EventCreate
from aurora.schemas.validation import AIValidationResult
from aurora.services.ai_validation import ParsedEvent, ResilientValidator

from helpers import at, timed

USER = uuid.uuid4()


def make_candidate(start=None, end=None):
    return EventCreate(title="Estudio", start=start or at(9, 30), end=end or at(10, 30))


def make_adapter():
    adapter = AsyncMock()
    adapter.validate_event_creation = AsyncMock()
    adapter.parse_natural_language = AsyncMock()
    adapter.generate_schedule_suggestions = AsyncMock()
    return adapter


class TestValidate:
    @pytest.mark.asyncio
    async def test_ai_answer_is_returned(self):
        adapter = make_adapter()
        adapter.validate_event_creation.return_value = AIValidationResult(
            is_approved=True, recommendation_message="Todo bien"
        )

        result = await ResilientValidator(adapter, timeout=1).validate(make_candidate(), USER, [])

        assert result.used_ai is True
        assert result.recommendation_message == "Todo bien"

    @pytest.mark.asyncio
    async def test_adapter_error_falls_back(self):
        adapter = make_adapter()
        adapter.validate_event_creation.side_effect = DownstreamFailure("boom")
        existing = [timed("Clase", at(9), at(10))]

        result = await ResilientValidator(adapter, timeout=1).validate(make_candidate(), USER, existing)

        assert result.used_ai is False
        assert result.severity == ValidationSeverity.WARNING
        assert result.is_approved is False
        assert FALLBACK_MARKER in result.recommendation_message
        assert result.suggestions

    @pytest.mark.asyncio
    async def test_unexpected_exception_falls_back(self):
        adapter = make_adapter()
        adapter.validate_event_creation.side_effect = RuntimeError("connection reset")

        result = await ResilientValidator(adapter, timeout=1).validate(make_candidate(), USER, [])

        assert result.used_ai is False
        assert result.is_approved is True

    @pytest.mark.asyncio
    async def test_timeout_falls_back(self):
        async def slow(*args, **kwargs):
            await asyncio.sleep(5)

        adapter = make_adapter()
        adapter.validate_event_creation.side_effect = slow

        result = await ResilientValidator(adapter, timeout=0.01).validate(make_candidate(), USER, [])

        assert result.used_ai is False
        assert FALLBACK_MARKER in result.recommendation_message


class TestParse:
    @pytest.mark.asyncio
    async def test_missing_analysis_gets_fallback_validation(self):
        adapter = make_adapter()
        adapter.parse_natural_language.return_value = ParsedEvent(event=make_candidate())
        existing = [timed("Clase", at(9), at(10))]

        result = await ResilientValidator(adapter, timeout=1).parse("estudiar mañana", USER, [], existing)

        assert result.success is True
        assert result.event.title == "Estudio"
        assert result.validation.used_ai is False
        assert result.validation.severity == ValidationSeverity.WARNING

    @pytest.mark.asyncio
    async def test_ai_analysis_is_kept(self):
        adapter = make_adapter()
        analysis = AIValidationResult(is_approved=True, recommendation_message="Ok")
        adapter.parse_natural_language.return_value = ParsedEvent(event=make_candidate(), validation=analysis)

        result = await ResilientValidator(adapter, timeout=1).parse("estudiar", USER, [], [])

        assert result.validation.used_ai is True

    @pytest.mark.asyncio
    async def test_failure_reports_unsuccessful_parse(self):
        adapter = make_adapter()
        adapter.parse_natural_language.side_effect = DownstreamFailure("no JSON")

        result = await ResilientValidator(adapter, timeout=1).parse("???", USER, [], [])

        assert result.success is False
        assert result.event is None
        assert result.error_message


class TestSuggest:
    @pytest.mark.asyncio
    async def test_failure_gives_empty_list(self):
        adapter = make_adapter()
        adapter.generate_schedule_suggestions.side_effect = DownstreamFailure("bad")

        assert await ResilientValidator(adapter, timeout=1).suggest([timed("A", at(9), at(10))]) == []

    @pytest.mark.asyncio
    async def test_ai_suggestions_pass_through(self):
        from aurora.core.scoring import SuggestionCandidate

        adapter = make_adapter()
        suggestion = SuggestionCandidate(SuggestionType.MOVE_EVENT, 3, 80, "Mover", "Motivo")
        adapter.generate_schedule_suggestions.return_value = [suggestion]

        assert await ResilientValidator(adapter, timeout=1).suggest([]) == [suggestion]
