"""
Productivity analysis schemas.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel
from uuid import UUID


class HourlyProductivity(BaseModel):
    hour: int
    average_mood: float
    rated_events: int
    total_events: int
    productivity_score: float


class DailyProductivity(BaseModel):
    day_of_week: int  # 0 = Monday
    day_name: str
    average_mood: float
    productivity_score: float
    total_events: int


class HourWindow(BaseModel):
    start_hour: int
    end_hour: int
    average_productivity_score: float
    description: str


class CategoryProductivity(BaseModel):
    category_id: Optional[UUID] = None
    category_name: str
    average_mood: float
    average_productivity_score: float
    rated_events: int
    best_hour: Optional[int] = None


class ProductivityAnalysis(BaseModel):
    analysis_period_start: datetime
    analysis_period_end: datetime
    total_events_analyzed: int
    total_mood_records_analyzed: int
    hourly_productivity: List[HourlyProductivity] = []
    daily_productivity: List[DailyProductivity] = []
    golden_hours: List[HourWindow] = []
    low_energy_hours: List[HourWindow] = []
    category_productivity: List[CategoryProductivity] = []
