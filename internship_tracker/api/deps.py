"""
API Dependencies
Common dependencies for API endpoints (database session, authenticated user).
"""

from internship_tracker.core.security import get_current_user
from internship_tracker.db.session import get_db

__all__ = ["get_current_user", "get_db"]
