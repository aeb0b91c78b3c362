"""Pagination helpers."""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from internship_tracker.config import settings

# Largest OFFSET handed to the database (32-bit signed INTEGER)
MAX_OFFSET = 2**31 - 1


def coerce_positive_int(value: Any, default: int) -> int:
    """Parse ``value`` as a positive integer, falling back to ``default``."""
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


@dataclass(frozen=True)
class Pagination:
    """Requested page window."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.limit) if total > 0 else 0

    def summary(self, total: int) -> Dict[str, int]:
        return {
            "current_page": self.page,
            "total_pages": self.total_pages(total),
            "total_items": total,
            "items_per_page": self.limit,
        }


def paginate(page: Optional[Any] = None, limit: Optional[Any] = None) -> Pagination:
    """Build a page window from raw query values; bad input never raises."""
    page_size = min(coerce_positive_int(limit, settings.DEFAULT_PAGE_SIZE), settings.MAX_PAGE_SIZE)
    # Pages past the largest offset are clamped; they are empty anyway
    page_number = min(coerce_positive_int(page, 1), MAX_OFFSET // page_size + 1)
    return Pagination(page=page_number, limit=page_size)
