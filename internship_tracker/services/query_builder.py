"""
Translate request filter parameters into SQLAlchemy conditions.

Every condition list starts with the owner condition, so a query built here can
never see another user's applications. Filters AND together; ``keyword`` is the
one OR group, spanning company, position, notes and location.
"""

import calendar
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.sql.elements import ColumnElement

from internship_tracker.core.exceptions import ValidationException
from internship_tracker.db.base import utcnow
from internship_tracker.models.application import Application
from internship_tracker.utils.constants import APPLICATION_STATUSES, APPLICATION_TYPES
from internship_tracker.utils.validators import clean_text, parse_month, parse_year, validate_choice

DateRange = Tuple[datetime, datetime]


def month_range(year: int, month: int) -> DateRange:
    """First instant of the month through 23:59:59 on its last day."""
    if not 1 <= month <= 12:
        raise ValidationException.for_field("month", "must be between 1 and 12")
    last_day = calendar.monthrange(year, month)[1]
    return datetime(year, month, 1), datetime(year, month, last_day, 23, 59, 59)


def year_range(year: int) -> DateRange:
    """January 1st 00:00:00 through December 31st 23:59:59."""
    return datetime(year, 1, 1), datetime(year, 12, 31, 23, 59, 59)


def resolve_date_range(month: Optional[int], year: Optional[int], now: Optional[datetime] = None) -> Optional[DateRange]:
    """Month and year -> that month; year only -> that year; month only -> that month this year."""
    if month is not None:
        if year is None:
            year = (now or utcnow()).year
        return month_range(year, month)
    if year is not None:
        return year_range(year)
    return None


@dataclass
class ApplicationQuery:
    """Raw filter parameters as they arrive on the query string."""

    status: Optional[str] = None
    job_type: Optional[str] = None
    location: Optional[str] = None
    month: Optional[str] = None
    year: Optional[str] = None
    company: Optional[str] = None
    position: Optional[str] = None
    keyword: Optional[str] = None


@dataclass
class ResolvedQuery:
    """Validated filter values ready to become conditions."""

    status: Optional[str] = None
    application_type: Optional[str] = None
    date_range: Optional[DateRange] = None
    location: Optional[str] = None
    company: Optional[str] = None
    position: Optional[str] = None
    keyword: Optional[str] = None


def resolve_query(params: ApplicationQuery, now: Optional[datetime] = None) -> ResolvedQuery:
    """Validate raw parameters; raises ValidationException listing every bad field."""
    errors: List[str] = []
    status = validate_choice("status", params.status, APPLICATION_STATUSES, errors)
    application_type = validate_choice("jobType", params.job_type, APPLICATION_TYPES, errors)
    month = parse_month(params.month, errors)
    year = parse_year(params.year, errors)

    if errors:
        raise ValidationException(errors)

    return ResolvedQuery(
        status=status,
        application_type=application_type,
        date_range=resolve_date_range(month, year, now),
        location=clean_text(params.location),
        company=clean_text(params.company),
        position=clean_text(params.position),
        keyword=clean_text(params.keyword),
    )


def owner_condition(user_id: UUID) -> ColumnElement:
    return Application.user_id == user_id


def keyword_condition(keyword: str) -> ColumnElement:
    return or_(
        Application.company_name.icontains(keyword, autoescape=True),
        Application.position.icontains(keyword, autoescape=True),
        Application.notes.icontains(keyword, autoescape=True),
        Application.location.icontains(keyword, autoescape=True),
    )


def build_conditions(
    user_id: UUID,
    params: Optional[ApplicationQuery] = None,
    now: Optional[datetime] = None,
) -> List[ColumnElement]:
    """Owner-scoped condition list for the given filter parameters."""
    filters = [owner_condition(user_id)]
    if params is None:
        return filters

    resolved = resolve_query(params, now)

    if resolved.status:
        filters.append(Application.status == resolved.status)

    if resolved.application_type:
        filters.append(Application.application_type == resolved.application_type)

    if resolved.date_range:
        start, end = resolved.date_range
        filters.append(Application.application_date >= start)
        filters.append(Application.application_date <= end)

    # Case-insensitive partial matches
    if resolved.location:
        filters.append(Application.location.icontains(resolved.location, autoescape=True))

    if resolved.company:
        filters.append(Application.company_name.icontains(resolved.company, autoescape=True))

    if resolved.position:
        filters.append(Application.position.icontains(resolved.position, autoescape=True))

    if resolved.keyword:
        filters.append(keyword_condition(resolved.keyword))

    return filters
