"""Validators for raw query-string input."""

from typing import Iterable, List, Optional


def _blank(value: Optional[str]) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_month(value: Optional[str], errors: List[str]) -> Optional[int]:
    """Parse a 1-12 month number, recording a message on failure."""
    if _blank(value):
        return None
    try:
        month = int(str(value).strip())
    except ValueError:
        errors.append("month: must be a number between 1 and 12")
        return None
    if not 1 <= month <= 12:
        errors.append("month: must be between 1 and 12")
        return None
    return month


def parse_year(value: Optional[str], errors: List[str]) -> Optional[int]:
    """Parse a four-digit calendar year, recording a message on failure."""
    if _blank(value):
        return None
    try:
        year = int(str(value).strip())
    except ValueError:
        errors.append("year: must be a valid year")
        return None
    if not 1 <= year <= 9999:
        errors.append("year: must be between 1 and 9999")
        return None
    return year


def validate_choice(field: str, value: Optional[str], choices: Iterable[str], errors: List[str]) -> Optional[str]:
    """Check an enumerated value, recording a message on failure."""
    if _blank(value):
        return None
    choices = list(choices)
    if value not in choices:
        errors.append(f"{field}: must be one of: {', '.join(choices)}")
        return None
    return value


def clean_text(value: Optional[str]) -> Optional[str]:
    """Trim a free-text filter; blank means no filter."""
    if _blank(value):
        return None
    return value.strip()
