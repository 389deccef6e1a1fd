"""
Preference model for persisted client settings.
"""
from sqlalchemy import Column, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from daydicated.db.base import BaseModel


class Preference(BaseModel):
    """Key-value client setting (theme, accent color) for one user."""
    __tablename__ = "preferences"

    user_uid = Column(String(36), ForeignKey("users.uid"), nullable=False, index=True)
    key = Column(String(50), nullable=False)
    value = Column(String(100), nullable=False)

    # Relationships
    user = relationship("User", back_populates="preferences")

    # Unique constraint: one value per key per user
    __table_args__ = (
        UniqueConstraint('user_uid', 'key', name='uq_user_preference_key'),
    )
