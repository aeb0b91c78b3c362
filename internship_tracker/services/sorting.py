"""Sort resolution for application listings."""

from typing import List, NamedTuple, Optional

from sqlalchemy import asc, desc

from internship_tracker.models.application import Application
from internship_tracker.utils.constants import DEFAULT_SORT_FIELD

ASCENDING = 1
DESCENDING = -1

# Public sort names -> model columns. Client strings never reach getattr().
SORT_COLUMNS = {
    "applicationDate": Application.application_date,
    "companyName": Application.company_name,
    "position": Application.position,
    "status": Application.status,
    "createdAt": Application.created_at,
    "updatedAt": Application.updated_at,
}


class SortSpec(NamedTuple):
    field: str
    direction: int

    @property
    def order(self) -> str:
        return "asc" if self.direction == ASCENDING else "desc"


def resolve_sort(by: Optional[str] = None, order: Optional[str] = None) -> SortSpec:
    """Unknown fields fall back to applicationDate; anything but "asc" sorts descending."""
    field = by if by in SORT_COLUMNS else DEFAULT_SORT_FIELD
    direction = ASCENDING if order == "asc" else DESCENDING
    return SortSpec(field, direction)


def order_by_clause(spec: SortSpec) -> List:
    """ORDER BY for a resolved sort, with id as a stable tiebreaker."""
    column = SORT_COLUMNS[spec.field]
    direction = asc if spec.direction == ASCENDING else desc
    return [direction(column), direction(Application.id)]
