"""
Wellness dashboard endpoint.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from aurora.api.deps import get_wellness_service
from aurora.schemas.wellness import WellnessSummary
from aurora.services.wellness import WellnessService

router = APIRouter()


@router.get("/summary", response_model=WellnessSummary)
async def monthly_summary(
    year: Optional[int] = Query(None, description="Defaults to the current year"),
    month: Optional[int] = Query(None, description="1-12, defaults to the current month"),
    timezone_offset_minutes: int = Query(0, description="Minutes from UTC, e.g. -180"),
    service: WellnessService = Depends(get_wellness_service),
):
    """Daily mood trend, distribution, streaks and category impact for a month."""
    return await service.monthly_summary(year, month, timezone_offset_minutes)
