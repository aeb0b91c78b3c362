"""
Analytics aggregation over one user's applications.

The database hands back a light projection of the owner's rows (ordered by
application date); grouping, bucketing and ranking happen here so every report
shares one grouping function keyed by a selector.

Nothing is cached: each call reads the current rows and computes from scratch.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from internship_tracker.config import settings
from internship_tracker.core.exceptions import ValidationException
from internship_tracker.db.base import utcnow
from internship_tracker.models.application import Application
from internship_tracker.services.application_store import count_applications
from internship_tracker.services.query_builder import owner_condition, year_range
from internship_tracker.utils.constants import (
    DEFAULT_TREND_PERIOD,
    TREND_PERIOD_MONTHS,
    ApplicationStatus,
)
from internship_tracker.utils.pagination import coerce_positive_int
from internship_tracker.utils.validators import parse_year

logger = logging.getLogger(__name__)

DAY = "day"
MONTH = "month"

ACCEPTED = ApplicationStatus.ACCEPTED.value


# --- Grouping ---------------------------------------------------------------


def group_by(records: Iterable[Any], key: Callable[[Any], Hashable]) -> Dict[Hashable, List[Any]]:
    """Group records by ``key``; groups keep first-appearance order."""
    groups: Dict[Hashable, List[Any]] = {}
    for record in records:
        groups.setdefault(key(record), []).append(record)
    return groups


def count_by(records: Iterable[Any], key: Callable[[Any], Hashable]) -> List[Tuple[Hashable, int]]:
    return [(value, len(members)) for value, members in group_by(records, key).items()]


def round2(value: float) -> float:
    """Round half up to two decimal places."""
    return math.floor(value * 100 + 0.5) / 100


# --- Trend windows ----------------------------------------------------------


@dataclass(frozen=True)
class TrendWindow:
    start: datetime
    end: datetime
    period: str

    @property
    def granularity(self) -> str:
        return DAY if self.end - self.start <= timedelta(weeks=1) else MONTH


def shift_months(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move a (year, month) pair by ``delta`` calendar months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def resolve_trend_window(
    period: Optional[str] = None,
    year: Optional[int] = None,
    now: Optional[datetime] = None,
) -> TrendWindow:
    """
    Explicit year wins and covers that calendar year. Otherwise:

    - ``week``: the last seven days
    - ``year``: January 1st of last year until now
    - month tokens (``1month``, ``3months``, ``month``/``6months``, ``1year``):
      from the 1st of the month N months back until now
    - anything else: same as ``6months``
    """
    now = now or utcnow()
    period = period or DEFAULT_TREND_PERIOD

    if year is not None:
        start, end = year_range(year)
        return TrendWindow(start, end, period)

    if period == "week":
        return TrendWindow(now - timedelta(days=7), now, period)

    if period == "year":
        return TrendWindow(datetime(now.year - 1, 1, 1), now, period)

    months_back = TREND_PERIOD_MONTHS.get(period)
    if months_back is None:
        period = DEFAULT_TREND_PERIOD
        months_back = TREND_PERIOD_MONTHS[period]

    start_year, start_month = shift_months(now.year, now.month, -months_back)
    return TrendWindow(datetime(start_year, start_month, 1), now, period)


# --- Pure reports -----------------------------------------------------------


def bucket_key(moment: datetime, granularity: str) -> Tuple[int, int, Optional[int]]:
    return moment.year, moment.month, moment.day if granularity == DAY else None


def build_trends(rows: Sequence[Any], granularity: str) -> List[Dict[str, Any]]:
    """Count rows per day or month bucket, oldest bucket first."""
    groups = group_by(rows, lambda row: bucket_key(row.application_date, granularity))

    trends = []
    for (year, month, day), members in sorted(groups.items(), key=lambda item: (item[0][0], item[0][1], item[0][2] or 0)):
        trends.append({
            "date": date(year, month, day or 1).isoformat(),
            "year": year,
            "month": month,
            "day": day,
            "count": len(members),
            "statuses": [member.status for member in members],
        })
    return trends


def status_breakdown(rows: Sequence[Any]) -> List[Dict[str, Any]]:
    return [{"status": status, "count": count} for status, count in count_by(rows, lambda row: row.status)]


def type_distribution(rows: Sequence[Any]) -> List[Dict[str, Any]]:
    return [
        {"application_type": application_type, "count": count}
        for application_type, count in count_by(rows, lambda row: row.application_type)
    ]


def rank_companies(rows: Sequence[Any], limit: int) -> List[Dict[str, Any]]:
    """
    Group by company, most applications first.

    ``success_rate`` is the accepted fraction (0-1) within the company. Ties
    keep group order, i.e. the company applied to first ranks first.
    """
    companies = []
    for company, members in group_by(rows, lambda row: row.company_name).items():
        accepted = sum(1 for member in members if member.status == ACCEPTED)
        positions = list(dict.fromkeys(member.position for member in members))
        companies.append({
            "company": company,
            "count": len(members),
            "accepted_count": accepted,
            "success_rate": accepted / len(members),
            "latest_application": max(member.application_date for member in members),
            "positions": positions,
        })

    # sorted() is stable, so equal counts stay in group order
    companies = sorted(companies, key=lambda item: item["count"], reverse=True)
    return companies[:limit]


def success_rate(accepted: int, total: int) -> float:
    """Accepted share as a percentage rounded to two places; 0 with no applications."""
    if total <= 0:
        return 0.0
    return round2(accepted / total * 100)


def months_since(first: datetime, now: datetime) -> int:
    """Calendar months from the first application's month to now, inclusive."""
    return (now.year - first.year) * 12 + (now.month - first.month) + 1


def average_per_month(total: int, first: Optional[datetime], now: datetime) -> float:
    if total <= 0 or first is None:
        return 0.0
    months = months_since(first, now)
    if months <= 0:
        return 0.0
    return round2(total / months)


# --- Database-backed reports ------------------------------------------------


async def _fetch_rows(
    db: AsyncSession,
    user_id: UUID,
    columns: Sequence,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[Any]:
    conditions = [owner_condition(user_id)]
    if start is not None:
        conditions.append(Application.application_date >= start)
    if end is not None:
        conditions.append(Application.application_date <= end)

    result = await db.execute(
        select(*columns)
        .where(and_(*conditions))
        .order_by(Application.application_date.asc(), Application.id.asc())
    )
    return list(result.all())


async def get_trends(
    db: AsyncSession,
    user_id: UUID,
    period: Optional[str] = None,
    year: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Bucketed counts plus status/type breakdowns for the requested window."""
    errors: List[str] = []
    parsed_year = parse_year(year, errors)
    if errors:
        raise ValidationException(errors)

    window = resolve_trend_window(period, parsed_year, now)
    rows = await _fetch_rows(
        db,
        user_id,
        (Application.application_date, Application.status, Application.application_type),
        window.start,
        window.end,
    )
    logger.debug(f"Trends for user {user_id}: {len(rows)} applications in {window}")

    return {
        "trends": build_trends(rows, window.granularity),
        "status_breakdown": status_breakdown(rows),
        "type_distribution": type_distribution(rows),
        "period": window.period,
        "granularity": window.granularity,
        "date_range": {"start": window.start, "end": window.end},
    }


async def get_top_companies(db: AsyncSession, user_id: UUID, limit: Optional[Any] = None) -> Dict[str, Any]:
    limit = coerce_positive_int(limit, settings.DEFAULT_TOP_COMPANIES)
    rows = await _fetch_rows(
        db,
        user_id,
        (
            Application.company_name,
            Application.position,
            Application.status,
            Application.application_date,
        ),
    )
    top_companies = rank_companies(rows, limit)
    return {
        "top_companies": top_companies,
        "total_companies": len(top_companies),
    }


async def get_stats(db: AsyncSession, user_id: UUID, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Totals, per-status counts, success rate and monthly averages."""
    now = now or utcnow()

    total = await count_applications(db, [owner_condition(user_id)])
    rows = await _fetch_rows(
        db,
        user_id,
        (Application.application_date, Application.status, Application.application_type),
    )

    accepted = sum(1 for row in rows if row.status == ACCEPTED)
    first_application = rows[0].application_date if rows else None

    recent = resolve_trend_window(DEFAULT_TREND_PERIOD, now=now)
    recent_rows = [row for row in rows if recent.start <= row.application_date <= recent.end]

    return {
        "total_applications": total,
        "status_counts": status_breakdown(rows),
        "monthly_applications": build_trends(recent_rows, MONTH),
        "type_distribution": type_distribution(rows),
        "success_rate": success_rate(accepted, total),
        "avg_applications_per_month": average_per_month(total, first_application, now),
    }
