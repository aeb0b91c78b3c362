"""Authentication schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from internship_tracker.schemas.common import ApiResponse, CamelModel


class SignupRequest(CamelModel):
    """Signup request schema."""

    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128, description="Password must be at least 6 characters")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class LoginRequest(CamelModel):
    """Login request schema."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(CamelModel):
    """User response schema."""

    id: UUID
    name: str
    email: str
    has_application_created: bool
    created_at: datetime


class AuthData(CamelModel):
    user: UserResponse
    token: str


class AuthResponse(ApiResponse):
    """Signup/login response schema."""

    data: AuthData


class CurrentUserData(CamelModel):
    user: UserResponse


class CurrentUserResponse(ApiResponse):
    data: CurrentUserData
