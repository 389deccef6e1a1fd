"""
User model for authentication and calendar ownership.
"""
from uuid import uuid4
from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship
from daydicated.db.base import BaseModel


def generate_uid() -> str:
    return uuid4().hex


class User(BaseModel):
    """User model. `uid` is the opaque owner id stamped on entries."""
    __tablename__ = "users"

    uid = Column(String(36), unique=True, nullable=False, index=True, default=generate_uid)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    entries = relationship("MoodEntry", back_populates="owner", cascade="all, delete-orphan")
    preferences = relationship("Preference", back_populates="user", cascade="all, delete-orphan")
