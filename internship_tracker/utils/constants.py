"""Common constants."""

from enum import Enum


class ApplicationStatus(str, Enum):
    """Lifecycle status of an application."""

    APPLIED = "Applied"
    UNDER_REVIEW = "Under Review"
    INTERVIEW = "Interview"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    WITHDRAWN = "Withdrawn"


class ApplicationType(str, Enum):
    """Kind of position applied for."""

    SUMMER = "Summer"
    WINTER = "Winter"
    FALL = "Fall"
    SPRING = "Spring"
    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"


class InterviewResult(str, Enum):
    """Outcome of a single interview round."""

    PENDING = "Pending"
    COMPLETED = "Completed"
    PASSED = "Passed"
    FAILED = "Failed"
    CANCELLED = "Cancelled"


APPLICATION_STATUSES = [s.value for s in ApplicationStatus]
APPLICATION_TYPES = [t.value for t in ApplicationType]
INTERVIEW_RESULTS = [r.value for r in InterviewResult]

# Field length limits
SHORT_TEXT_MAX_LENGTH = 100
JOB_LINK_MAX_LENGTH = 500
NOTES_MAX_LENGTH = 1000

# Sorting
SORTABLE_FIELDS = [
    "applicationDate",
    "companyName",
    "position",
    "status",
    "createdAt",
    "updatedAt",
]
DEFAULT_SORT_FIELD = "applicationDate"

# Analytics trend periods (token -> months back, anchored to the 1st)
TREND_PERIOD_MONTHS = {
    "1month": 1,
    "3months": 3,
    "month": 6,
    "6months": 6,
    "1year": 12,
}
DEFAULT_TREND_PERIOD = "6months"
