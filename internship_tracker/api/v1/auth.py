"""Authentication endpoints."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from internship_tracker.api.deps import get_current_user, get_db
from internship_tracker.core.exceptions import AuthenticationException, DuplicateResourceException
from internship_tracker.core.security import create_access_token, get_password_hash, verify_password
from internship_tracker.models.user import User
from internship_tracker.schemas.auth import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    SignupRequest,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _auth_payload(user: User, message: str) -> AuthResponse:
    return AuthResponse(
        message=message,
        data={
            "user": UserResponse.model_validate(user),
            "token": create_access_token({"sub": str(user.id)}),
        },
    )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(request: SignupRequest, db: AsyncSession = Depends(get_db)):
    """Register a new user."""
    email = request.email.lower()

    # Check if user already exists
    result = await db.execute(select(User).where(User.email == email))
    if result.scalar_one_or_none():
        raise DuplicateResourceException("User", "email")

    new_user = User(
        name=request.name,
        email=email,
        password_hash=get_password_hash(request.password),
        has_application_created=False,
    )

    db.add(new_user)
    await db.commit()
    await db.refresh(new_user)

    logger.info(f"Registered user {new_user.id}")
    return _auth_payload(new_user, "User registered successfully")


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Login with email and password."""
    result = await db.execute(select(User).where(User.email == request.email.lower()))
    user = result.scalar_one_or_none()

    if not user or not verify_password(request.password, user.password_hash):
        logger.warning("Login failed: invalid email or password")
        raise AuthenticationException("Invalid email or password")

    return _auth_payload(user, "Login successful")


@router.get("/me", response_model=CurrentUserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return CurrentUserResponse(data={"user": UserResponse.model_validate(current_user)})
