"""Application model."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import relationship

from internship_tracker.db.base import Base
from internship_tracker.utils.constants import ApplicationStatus


class Application(Base):
    """Internship/job application owned by a single user."""

    __tablename__ = "applications"
    __table_args__ = (
        Index("ix_applications_user_date", "user_id", "application_date"),
        Index("ix_applications_user_status", "user_id", "status"),
        Index("ix_applications_user_company", "user_id", "company_name"),
    )

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Required details
    company_name = Column(String(100), nullable=False)
    position = Column(String(100), nullable=False)
    location = Column(String(100), nullable=False)
    application_date = Column(DateTime, nullable=False)
    status = Column(String(20), nullable=False, default=ApplicationStatus.APPLIED.value)
    application_type = Column(String(20), nullable=False)
    source = Column(String(100), nullable=False)

    # Optional details
    job_link = Column(String(500), nullable=False, default="")
    resume_version = Column(String(100), nullable=False, default="")
    contact_person = Column(String(100), nullable=False, default="")
    contact_email = Column(String(100), nullable=False, default="")
    notes = Column(String(1000), nullable=False, default="")
    follow_up_date = Column(DateTime, nullable=True)

    # Offer details (flattened)
    offer_stipend = Column(String(100), nullable=False, default="")
    offer_duration = Column(String(100), nullable=False, default="")
    offer_start_date = Column(DateTime, nullable=True)

    # Relationships
    owner = relationship("User", back_populates="applications", lazy="selectin")
    interview_rounds = relationship(
        "InterviewRound",
        back_populates="application",
        cascade="all, delete-orphan",
        order_by="InterviewRound.position",
        lazy="selectin",
    )

    @property
    def offer_details(self) -> dict:
        return {
            "stipend": self.offer_stipend,
            "duration": self.offer_duration,
            "start_date": self.offer_start_date,
        }

    def __repr__(self):
        return f"<Application {self.company_name} / {self.position} ({self.status})>"


class InterviewRound(Base):
    """One interview round of an application, kept in submission order."""

    __tablename__ = "interview_rounds"

    application_id = Column(
        Uuid(as_uuid=True), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False, default=0)
    round = Column(String(100), nullable=False)
    date = Column(DateTime, nullable=False)
    result = Column(String(20), nullable=False)

    application = relationship("Application", back_populates="interview_rounds")

    def __repr__(self):
        return f"<InterviewRound {self.round} ({self.result})>"
