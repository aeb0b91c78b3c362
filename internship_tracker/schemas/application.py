"""Application schemas for API requests and responses."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import AliasChoices, ConfigDict, Field, field_validator, model_validator

from internship_tracker.schemas.common import (
    ApiResponse,
    CamelModel,
    PaginationInfo,
    blank_to_none,
    to_naive_utc,
)
from internship_tracker.utils.constants import (
    JOB_LINK_MAX_LENGTH,
    NOTES_MAX_LENGTH,
    SHORT_TEXT_MAX_LENGTH,
    ApplicationStatus,
    ApplicationType,
    InterviewResult,
)


class InputModel(CamelModel):
    """Request bodies trim surrounding whitespace from every string."""

    model_config = ConfigDict(str_strip_whitespace=True)


# --- Request bodies ---------------------------------------------------------


class InterviewRoundIn(InputModel):
    round: str = Field(..., min_length=1, max_length=SHORT_TEXT_MAX_LENGTH)
    date: datetime
    result: InterviewResult

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v):
        return to_naive_utc(v)


class OfferDetailsIn(InputModel):
    stipend: str = Field("", max_length=SHORT_TEXT_MAX_LENGTH)
    duration: str = Field("", max_length=SHORT_TEXT_MAX_LENGTH)
    start_date: Optional[datetime] = None

    @field_validator("start_date", mode="before")
    @classmethod
    def blank_start_date(cls, v):
        return blank_to_none(v)

    @field_validator("start_date")
    @classmethod
    def normalize_start_date(cls, v):
        return to_naive_utc(v)


class ApplicationCreate(InputModel):
    """Body of POST /applications."""

    company_name: str = Field(..., min_length=1, max_length=SHORT_TEXT_MAX_LENGTH)
    position: str = Field(..., min_length=1, max_length=SHORT_TEXT_MAX_LENGTH)
    location: str = Field(..., min_length=1, max_length=SHORT_TEXT_MAX_LENGTH)
    application_date: Optional[datetime] = None
    status: ApplicationStatus = ApplicationStatus.APPLIED
    application_type: ApplicationType
    source: str = Field(..., min_length=1, max_length=SHORT_TEXT_MAX_LENGTH)

    job_link: str = Field("", max_length=JOB_LINK_MAX_LENGTH)
    resume_version: str = Field("", max_length=SHORT_TEXT_MAX_LENGTH)
    contact_person: str = Field("", max_length=SHORT_TEXT_MAX_LENGTH)
    contact_email: str = Field("", max_length=SHORT_TEXT_MAX_LENGTH)
    notes: str = Field("", max_length=NOTES_MAX_LENGTH)
    follow_up_date: Optional[datetime] = None

    interview_rounds: List[InterviewRoundIn] = Field(default_factory=list)
    offer_details: Optional[OfferDetailsIn] = None

    @field_validator("application_date", "follow_up_date", mode="before")
    @classmethod
    def blank_dates(cls, v):
        return blank_to_none(v)

    @field_validator("application_date", "follow_up_date")
    @classmethod
    def normalize_dates(cls, v):
        return to_naive_utc(v)


class ApplicationUpdate(InputModel):
    """Body of PUT /applications/{id}; only the fields sent are replaced."""

    company_name: Optional[str] = Field(None, min_length=1, max_length=SHORT_TEXT_MAX_LENGTH)
    position: Optional[str] = Field(None, min_length=1, max_length=SHORT_TEXT_MAX_LENGTH)
    location: Optional[str] = Field(None, min_length=1, max_length=SHORT_TEXT_MAX_LENGTH)
    application_date: Optional[datetime] = None
    status: Optional[ApplicationStatus] = None
    application_type: Optional[ApplicationType] = None
    source: Optional[str] = Field(None, min_length=1, max_length=SHORT_TEXT_MAX_LENGTH)

    job_link: Optional[str] = Field(None, max_length=JOB_LINK_MAX_LENGTH)
    resume_version: Optional[str] = Field(None, max_length=SHORT_TEXT_MAX_LENGTH)
    contact_person: Optional[str] = Field(None, max_length=SHORT_TEXT_MAX_LENGTH)
    contact_email: Optional[str] = Field(None, max_length=SHORT_TEXT_MAX_LENGTH)
    notes: Optional[str] = Field(None, max_length=NOTES_MAX_LENGTH)
    follow_up_date: Optional[datetime] = None

    interview_rounds: Optional[List[InterviewRoundIn]] = None
    offer_details: Optional[OfferDetailsIn] = None

    @field_validator("follow_up_date", mode="before")
    @classmethod
    def blank_follow_up(cls, v):
        return blank_to_none(v)

    @field_validator("application_date", "follow_up_date")
    @classmethod
    def normalize_dates(cls, v):
        return to_naive_utc(v)

    @model_validator(mode="after")
    def fields_not_null(self):
        """Fields may be omitted here, but not nulled; send [] or {} to clear nested parts."""
        not_nullable = (
            "company_name",
            "position",
            "location",
            "application_date",
            "status",
            "application_type",
            "source",
            "interview_rounds",
            "offer_details",
        )
        nulled = [name for name in not_nullable if name in self.model_fields_set and getattr(self, name) is None]
        if nulled:
            raise ValueError(f"{', '.join(nulled)} cannot be null")
        return self


# --- Responses --------------------------------------------------------------


class OwnerBrief(CamelModel):
    id: UUID
    name: str
    email: str


class InterviewRoundResponse(CamelModel):
    round: str
    date: datetime
    result: str


class OfferDetailsResponse(CamelModel):
    stipend: str = ""
    duration: str = ""
    start_date: Optional[datetime] = None


class ApplicationResponse(CamelModel):
    """Application as returned to its owner."""

    id: UUID
    user: OwnerBrief = Field(validation_alias=AliasChoices("owner", "user"))
    company_name: str
    position: str
    location: str
    application_date: datetime
    status: str
    application_type: str
    source: str
    job_link: str = ""
    resume_version: str = ""
    contact_person: str = ""
    contact_email: str = ""
    notes: str = ""
    follow_up_date: Optional[datetime] = None
    interview_rounds: List[InterviewRoundResponse] = Field(default_factory=list)
    offer_details: OfferDetailsResponse = Field(default_factory=OfferDetailsResponse)
    created_at: datetime
    updated_at: datetime


class ApplicationData(CamelModel):
    application: ApplicationResponse


class ApplicationEnvelope(ApiResponse):
    data: ApplicationData


class ApplicationPage(CamelModel):
    applications: List[ApplicationResponse]
    pagination: PaginationInfo


class ApplicationListResponse(ApiResponse):
    data: ApplicationPage


class FilterEcho(CamelModel):
    status: Optional[str] = None
    month: Optional[str] = None
    year: Optional[str] = None
    job_type: Optional[str] = None
    location: Optional[str] = None


class FilteredApplicationPage(ApplicationPage):
    filters: FilterEcho


class FilteredApplicationResponse(ApiResponse):
    data: FilteredApplicationPage


class SortEcho(CamelModel):
    by: str
    order: str


class SortedApplicationPage(ApplicationPage):
    sort: SortEcho


class SortedApplicationResponse(ApiResponse):
    data: SortedApplicationPage


class SearchEcho(CamelModel):
    company: Optional[str] = None
    position: Optional[str] = None
    location: Optional[str] = None
    keyword: Optional[str] = None


class SearchApplicationPage(ApplicationPage):
    search: SearchEcho


class SearchApplicationResponse(ApiResponse):
    data: SearchApplicationPage
