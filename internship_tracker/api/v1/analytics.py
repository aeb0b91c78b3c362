"""Analytics endpoints - trends, top companies and summary statistics."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from internship_tracker.api.deps import get_current_user, get_db
from internship_tracker.models.user import User
from internship_tracker.schemas.analytics import StatsResponse, TopCompaniesResponse, TrendsResponse
from internship_tracker.services import analytics

router = APIRouter()


@router.get("/trends", response_model=TrendsResponse)
async def get_trends(
    period: Optional[str] = Query(
        None, description="week, month, year, 1month, 3months, 6months or 1year (default 6months)"
    ),
    year: Optional[str] = Query(None, description="Calendar year; overrides period"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Application counts over time.

    Buckets are days for `period=week` and months otherwise, oldest first.
    Each bucket lists the statuses seen in it.
    """
    data = await analytics.get_trends(db, current_user.id, period=period, year=year)
    return TrendsResponse(data=data)


@router.get("/top-companies", response_model=TopCompaniesResponse)
async def get_top_companies(
    limit: Optional[str] = Query(None, description="Number of companies (default 10)"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Companies with the most applications, with their acceptance rate."""
    data = await analytics.get_top_companies(db, current_user.id, limit)
    return TopCompaniesResponse(data=data)


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Overall statistics for the caller."""
    data = await analytics.get_stats(db, current_user.id)
    return StatsResponse(data=data)
