"""
Productivity analysis endpoint.
"""
from fastapi import APIRouter, Depends, Query

from aurora.api.deps import get_productivity_service
from aurora.schemas.productivity import ProductivityAnalysis
from aurora.services.productivity import ProductivityService

router = APIRouter()


@router.get("/analysis", response_model=ProductivityAnalysis)
async def productivity_analysis(
    period_days: int = Query(30, description="Days to look back"),
    timezone_offset_minutes: int = Query(0, description="Minutes from UTC, e.g. -180"),
    service: ProductivityService = Depends(get_productivity_service),
):
    """Mood by hour, weekday and category, with golden and low-energy hours."""
    return await service.analyze(period_days, timezone_offset_minutes)
