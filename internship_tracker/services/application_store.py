"""Owner-scoped reads and writes against the applications table."""

import logging
from typing import List, Sequence, Tuple
from uuid import UUID

from sqlalchemy import and_, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from internship_tracker.core.exceptions import ResourceNotFoundException
from internship_tracker.models.application import Application, InterviewRound
from internship_tracker.utils.pagination import Pagination

logger = logging.getLogger(__name__)


async def find_applications(
    db: AsyncSession,
    conditions: Sequence,
    order_by: Sequence,
    pagination: Pagination,
) -> Tuple[List[Application], int]:
    """One page of matching applications plus the total match count."""
    where_clause = and_(*conditions)

    result = await db.execute(
        select(Application)
        .where(where_clause)
        .order_by(*order_by)
        .offset(pagination.offset)
        .limit(pagination.limit)
    )
    applications = list(result.scalars().all())

    total = await count_applications(db, conditions)
    return applications, total


async def count_applications(db: AsyncSession, conditions: Sequence) -> int:
    result = await db.execute(
        select(func.count(Application.id)).where(and_(*conditions))
    )
    return result.scalar_one()


async def get_owned_application(db: AsyncSession, application_id: UUID, user_id: UUID) -> Application:
    """Fetch one application, treating someone else's record as missing."""
    result = await db.execute(
        select(Application)
        .where(Application.id == application_id, Application.user_id == user_id)
        .execution_options(populate_existing=True)
    )
    application = result.scalar_one_or_none()

    if application is None:
        raise ResourceNotFoundException("Application", str(application_id))

    return application


async def delete_all_applications(db: AsyncSession, user_id: UUID) -> int:
    """Remove every application of one user; returns how many were deleted."""
    owned_ids = select(Application.id).where(Application.user_id == user_id)
    count = await count_applications(db, [Application.user_id == user_id])

    # Rounds first; SQLite does not enforce ON DELETE CASCADE by default
    await db.execute(delete(InterviewRound).where(InterviewRound.application_id.in_(owned_ids)))
    await db.execute(delete(Application).where(Application.user_id == user_id))
    logger.info(f"Deleted {count} applications for user {user_id}")
    return count
