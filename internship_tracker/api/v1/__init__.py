"""API v1 routes."""

from fastapi import APIRouter

from internship_tracker.api.v1 import analytics, applications, auth

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(applications.router, prefix="/applications", tags=["Applications"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["Analytics"])
