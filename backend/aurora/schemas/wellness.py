"""
Monthly wellness summary schemas.
"""
from datetime import date
from typing import List, Optional
from pydantic import BaseModel, Field
from uuid import UUID


class MoodTrendPoint(BaseModel):
    date: date
    average_mood: Optional[float] = None  # None on days without ratings
    entries: int = 0


class MoodDistributionSlice(BaseModel):
    mood_rating: int
    count: int
    percentage: float  # 0..1


class MoodStreaks(BaseModel):
    current_positive: int = 0
    longest_positive: int = 0
    current_negative: int = 0
    longest_negative: int = 0


class CategoryMoodImpact(BaseModel):
    category_id: Optional[UUID] = None
    category_name: str
    average_mood: float
    event_count: int
    positive_count: int
    negative_count: int


class MoodDaySnapshot(BaseModel):
    date: date
    average_mood: float
    entries: int


class WellnessSummary(BaseModel):
    year: int
    month: int
    average_mood: float = 0.0
    best_day: Optional[MoodDaySnapshot] = None
    worst_day: Optional[MoodDaySnapshot] = None
    mood_trend: List[MoodTrendPoint] = []
    mood_distribution: List[MoodDistributionSlice] = []
    streaks: MoodStreaks = Field(default_factory=MoodStreaks)
    category_impacts: List[CategoryMoodImpact] = []
    total_tracked_days: int = 0
    positive_days: int = 0
    neutral_days: int = 0
    negative_days: int = 0
    tracking_coverage: float = 0.0
    has_event_mood_data: bool = False
