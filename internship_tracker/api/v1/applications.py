"""Application endpoints - CRUD, filter, sort and search over the caller's records."""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from internship_tracker.api.deps import get_current_user, get_db
from internship_tracker.db.base import utcnow
from internship_tracker.models.application import Application, InterviewRound
from internship_tracker.models.user import User
from internship_tracker.schemas.application import (
    ApplicationCreate,
    ApplicationEnvelope,
    ApplicationListResponse,
    ApplicationResponse,
    ApplicationUpdate,
    FilteredApplicationResponse,
    InterviewRoundIn,
    OfferDetailsIn,
    SearchApplicationResponse,
    SortedApplicationResponse,
)
from internship_tracker.schemas.common import ApiResponse
from internship_tracker.services.application_store import (
    delete_all_applications,
    find_applications,
    get_owned_application,
)
from internship_tracker.services.query_builder import ApplicationQuery, build_conditions
from internship_tracker.services.sorting import order_by_clause, resolve_sort
from internship_tracker.utils.pagination import paginate

logger = logging.getLogger(__name__)

router = APIRouter()


def _page_payload(applications: List[Application], pagination, total: int) -> dict:
    return {
        "applications": [ApplicationResponse.model_validate(app) for app in applications],
        "pagination": pagination.summary(total),
    }


def _build_rounds(rounds: List[InterviewRoundIn]) -> List[InterviewRound]:
    return [
        InterviewRound(position=index, round=item.round, date=item.date, result=item.result.value)
        for index, item in enumerate(rounds)
    ]


def _apply_offer(application: Application, offer: Optional[OfferDetailsIn]) -> None:
    offer = offer or OfferDetailsIn()
    application.offer_stipend = offer.stipend
    application.offer_duration = offer.duration
    application.offer_start_date = offer.start_date


@router.get("", response_model=ApplicationListResponse)
async def list_applications(
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by status"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="Sort field (applicationDate, companyName, ...)"),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="asc or desc (default desc)"),
    page: Optional[str] = Query(None, description="Page number (default 1)"),
    limit: Optional[str] = Query(None, description="Items per page (default 10)"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Get the caller's applications, optionally filtered by status.

    Unknown sort fields fall back to `applicationDate`; bad `page`/`limit`
    values fall back to their defaults.
    """
    conditions = build_conditions(current_user.id, ApplicationQuery(status=status_filter))
    pagination = paginate(page, limit)
    sort = resolve_sort(sort_by, sort_order)

    applications, total = await find_applications(db, conditions, order_by_clause(sort), pagination)

    return ApplicationListResponse(data=_page_payload(applications, pagination, total))


@router.get("/filter", response_model=FilteredApplicationResponse)
async def filter_applications(
    status_filter: Optional[str] = Query(None, alias="status"),
    month: Optional[str] = Query(None, description="Month number 1-12"),
    year: Optional[str] = Query(None, description="Four-digit year"),
    job_type: Optional[str] = Query(None, alias="jobType", description="Application type"),
    location: Optional[str] = Query(None, description="Case-insensitive partial match"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Filter applications by status, month/year, type and location.

    **Dates:**
    - `month` + `year`: that month
    - `year` only: that calendar year
    - `month` only: that month of the current year
    """
    params = ApplicationQuery(
        status=status_filter,
        job_type=job_type,
        location=location,
        month=month,
        year=year,
    )
    conditions = build_conditions(current_user.id, params)
    pagination = paginate(page, limit)

    applications, total = await find_applications(
        db, conditions, order_by_clause(resolve_sort()), pagination
    )

    payload = _page_payload(applications, pagination, total)
    payload["filters"] = {
        "status": status_filter,
        "month": month,
        "year": year,
        "job_type": job_type,
        "location": location,
    }
    return FilteredApplicationResponse(data=payload)


@router.get("/sort", response_model=SortedApplicationResponse)
async def sort_applications(
    by: Optional[str] = Query(None, description="Sort field"),
    order: Optional[str] = Query(None, description="asc or desc"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Sort all of the caller's applications by an allowed field."""
    sort = resolve_sort(by, order)
    pagination = paginate(page, limit)

    applications, total = await find_applications(
        db, build_conditions(current_user.id), order_by_clause(sort), pagination
    )

    payload = _page_payload(applications, pagination, total)
    payload["sort"] = {"by": sort.field, "order": sort.order}
    return SortedApplicationResponse(data=payload)


@router.get("/search", response_model=SearchApplicationResponse)
async def search_applications(
    company: Optional[str] = Query(None),
    position: Optional[str] = Query(None),
    location: Optional[str] = Query(None),
    keyword: Optional[str] = Query(None, description="Matches company, position, notes or location"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Search applications.

    `company`, `position` and `location` must all match; `keyword` matches if
    any of company, position, notes or location contains it.
    """
    params = ApplicationQuery(company=company, position=position, location=location, keyword=keyword)
    conditions = build_conditions(current_user.id, params)
    pagination = paginate(page, limit)

    applications, total = await find_applications(
        db, conditions, order_by_clause(resolve_sort()), pagination
    )

    payload = _page_payload(applications, pagination, total)
    payload["search"] = {
        "company": company,
        "position": position,
        "location": location,
        "keyword": keyword,
    }
    return SearchApplicationResponse(data=payload)


@router.get("/{application_id}", response_model=ApplicationEnvelope)
async def get_application(
    application_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get one of the caller's applications."""
    application = await get_owned_application(db, application_id, current_user.id)
    return ApplicationEnvelope(data={"application": ApplicationResponse.model_validate(application)})


@router.post("", response_model=ApplicationEnvelope, status_code=status.HTTP_201_CREATED)
async def create_application(
    application_in: ApplicationCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create an application owned by the caller."""
    application = Application(
        user_id=current_user.id,
        company_name=application_in.company_name,
        position=application_in.position,
        location=application_in.location,
        application_date=application_in.application_date or utcnow(),
        status=application_in.status.value,
        application_type=application_in.application_type.value,
        source=application_in.source,
        job_link=application_in.job_link,
        resume_version=application_in.resume_version,
        contact_person=application_in.contact_person,
        contact_email=application_in.contact_email,
        notes=application_in.notes,
        follow_up_date=application_in.follow_up_date,
        interview_rounds=_build_rounds(application_in.interview_rounds),
    )
    _apply_offer(application, application_in.offer_details)

    db.add(application)
    if not current_user.has_application_created:
        current_user.has_application_created = True

    await db.commit()

    application = await get_owned_application(db, application.id, current_user.id)
    logger.info(f"Created application {application.id} for user {current_user.id}")

    return ApplicationEnvelope(
        message="Application created successfully",
        data={"application": ApplicationResponse.model_validate(application)},
    )


@router.put("/{application_id}", response_model=ApplicationEnvelope)
async def update_application(
    application_id: UUID,
    application_update: ApplicationUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Replace the fields sent in the body; everything else is left as is."""
    application = await get_owned_application(db, application_id, current_user.id)

    update_data = application_update.model_dump(exclude_unset=True)
    # Nested parts are rebuilt from the validated models below
    rounds_sent = update_data.pop("interview_rounds", None) is not None
    offer_sent = update_data.pop("offer_details", None) is not None

    for field, value in update_data.items():
        if field in ("status", "application_type"):
            value = value.value
        setattr(application, field, value)

    if rounds_sent:
        application.interview_rounds = _build_rounds(application_update.interview_rounds)

    if offer_sent:
        _apply_offer(application, application_update.offer_details)

    # Child-only changes don't touch the parent row
    application.touch()

    await db.commit()

    application = await get_owned_application(db, application_id, current_user.id)

    return ApplicationEnvelope(
        message="Application updated successfully",
        data={"application": ApplicationResponse.model_validate(application)},
    )


@router.delete("/{application_id}", response_model=ApiResponse)
async def delete_application(
    application_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete one of the caller's applications."""
    application = await get_owned_application(db, application_id, current_user.id)

    await db.delete(application)
    await db.commit()

    logger.info(f"Deleted application {application_id} for user {current_user.id}")
    return ApiResponse(message="Application deleted successfully")


@router.delete("", response_model=ApiResponse)
async def clear_applications(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete every application the caller owns."""
    deleted = await delete_all_applications(db, current_user.id)
    await db.commit()

    return ApiResponse(message=f"Successfully deleted {deleted} applications")
