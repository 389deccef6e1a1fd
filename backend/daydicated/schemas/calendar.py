"""
Pydantic schemas for the rendered calendar grid.
"""
from pydantic import BaseModel
from typing import List, Optional


class DayCellResponse(BaseModel):
    """One day of a month grid."""
    date: str
    day: int
    rating: Optional[int] = None
    note: Optional[str] = None
    stars: str = ""
    note_preview: str = ""
    note_title: str = ""
    editable: bool = False
    css_classes: List[str] = []


class MonthResponse(BaseModel):
    """A month as rows of seven cells; blanks are null."""
    index: int
    name: str
    year: int
    weeks: List[List[Optional[DayCellResponse]]]


class CalendarResponse(BaseModel):
    """Full year calendar of one owner."""
    owner_id: str
    year: int
    editable: bool
    day_names: List[str]
    months: List[MonthResponse]
