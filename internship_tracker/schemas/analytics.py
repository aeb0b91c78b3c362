"""Analytics schemas."""

from datetime import datetime
from typing import List, Optional

from internship_tracker.schemas.common import ApiResponse, CamelModel


class TrendBucket(CamelModel):
    """Applications counted in one day or month."""

    date: str
    year: int
    month: int
    day: Optional[int] = None
    count: int
    statuses: List[str] = []


class StatusCount(CamelModel):
    status: str
    count: int


class TypeCount(CamelModel):
    application_type: str
    count: int


class DateRange(CamelModel):
    start: datetime
    end: datetime


class TrendsData(CamelModel):
    trends: List[TrendBucket]
    status_breakdown: List[StatusCount]
    type_distribution: List[TypeCount]
    period: str
    granularity: str
    date_range: DateRange


class TrendsResponse(ApiResponse):
    data: TrendsData


class CompanyStat(CamelModel):
    company: str
    count: int
    accepted_count: int
    success_rate: float
    latest_application: datetime
    positions: List[str] = []


class TopCompaniesData(CamelModel):
    top_companies: List[CompanyStat]
    total_companies: int


class TopCompaniesResponse(ApiResponse):
    data: TopCompaniesData


class StatsData(CamelModel):
    total_applications: int
    status_counts: List[StatusCount]
    monthly_applications: List[TrendBucket]
    type_distribution: List[TypeCount]
    success_rate: float
    avg_applications_per_month: float


class StatsResponse(ApiResponse):
    data: StatsData
