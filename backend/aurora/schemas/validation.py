"""
AI validation and natural-language parsing schemas.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from aurora.models.enums import ValidationSeverity
from aurora.schemas.event import EventCreate


class AIValidationResult(BaseModel):
    is_approved: bool
    severity: ValidationSeverity = ValidationSeverity.INFO
    recommendation_message: Optional[str] = None
    suggestions: List[str] = []
    used_ai: bool = True  # False when produced by the local fallback


class ParseNaturalLanguageRequest(BaseModel):
    text: str = Field(min_length=1, max_length=1000)
    timezone_offset_minutes: int = 0


class ParseNaturalLanguageResponse(BaseModel):
    success: bool
    event: Optional[EventCreate] = None
    validation: Optional[AIValidationResult] = None
    error_message: Optional[str] = None
