"""Models package - Import all models for SQLAlchemy registration."""
from daydicated.models.user import User
from daydicated.models.entry import MoodEntry
from daydicated.models.preference import Preference

__all__ = [
    "User",
    "MoodEntry",
    "Preference",
]
