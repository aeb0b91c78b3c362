"""Database models."""

# Import all models in dependency order to ensure proper relationship initialization
from internship_tracker.models.user import User
from internship_tracker.models.application import Application, InterviewRound

# Export all models
__all__ = [
    "User",
    "Application",
    "InterviewRound",
]
