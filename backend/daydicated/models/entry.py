"""
Entry model for daily mood ratings.
"""
from sqlalchemy import Column, String, Text, ForeignKey, Integer
from sqlalchemy.orm import relationship
from daydicated.db.base import Base, TimestampMixin


class MoodEntry(TimestampMixin, Base):
    """One rating and note per owner per date.

    The primary key is the composite "<owner uid>_<date>" string, so writing
    the same day twice replaces the row instead of adding one.
    """
    __tablename__ = "entries"

    id = Column(String(64), primary_key=True)
    owner_id = Column(String(36), ForeignKey("users.uid"), nullable=False, index=True)
    date = Column(String(10), nullable=False, index=True)  # YYYY-MM-DD
    rating = Column(Integer, nullable=False)
    note = Column(Text, nullable=False, default="")

    # Relationships
    owner = relationship("User", back_populates="entries")
