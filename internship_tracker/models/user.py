"""User model."""

from sqlalchemy import Boolean, Column, String
from sqlalchemy.orm import relationship

from internship_tracker.db.base import Base


class User(Base):
    """User model for authentication."""

    __tablename__ = "users"

    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    has_application_created = Column(Boolean, default=False, nullable=False)

    # Relationships
    applications = relationship(
        "Application",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<User {self.email}>"
