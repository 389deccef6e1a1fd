"""
Pydantic schemas for mood entries.
"""
from pydantic import BaseModel, ConfigDict, Field


class EntryRecord(BaseModel):
    """A full entry as exported: owner, date, rating and note."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    date: str
    rating: int
    note: str = ""


class CachedEntry(BaseModel):
    """Entry as held by the calendar cache, keyed by date elsewhere."""
    id: str
    rating: int
    note: str = ""


class EntryWrite(BaseModel):
    """Schema for saving the current user's entry for a day."""
    rating: int = Field(..., ge=1, le=5)
    note: str = ""


class EntryResponse(CachedEntry):
    """Schema for a saved entry."""
    date: str


class EditForm(BaseModel):
    """Values pre-filled in the edit dialog after a day click."""
    date: str
    rating: int = 3
    note: str = ""
