"""
Date grid builder: month sizes, first weekdays and week rows for one year.

Months are 0-indexed (0 = January) and weekdays start on Sunday (0 = Sunday).
Passing a month outside 0-11 is a caller error and is not checked here.
"""
import calendar
from dataclasses import dataclass, field
from typing import List, Optional

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

DAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# 6: Sunday
_sunday_calendar = calendar.Calendar(firstweekday=6)


@dataclass
class MonthGrid:
    """Layout of one month: week rows of seven cells, blanks are None."""
    index: int
    year: int
    days: int
    first_weekday: int
    weeks: List[List[Optional[int]]] = field(default_factory=list)

    @property
    def name(self) -> str:
        return MONTH_NAMES[self.index]


def days_in_month(year: int, month: int) -> int:
    """Number of days in a 0-indexed month, leap years included."""
    return calendar.monthrange(year, month + 1)[1]


def first_weekday(year: int, month: int) -> int:
    """Weekday of the 1st of a 0-indexed month, 0 = Sunday."""
    # calendar.weekday counts from Monday = 0
    return (calendar.weekday(year, month + 1, 1) + 1) % 7


def format_date(year: int, month: int, day: int) -> str:
    """YYYY-MM-DD for a 0-indexed month."""
    return f"{year:04d}-{month + 1:02d}-{day:02d}"


def month_weeks(year: int, month: int) -> List[List[Optional[int]]]:
    """
    Week rows for a 0-indexed month.

    The first row starts with `first_weekday` blanks and the last row is padded
    with blanks up to seven cells.
    """
    weeks = _sunday_calendar.monthdayscalendar(year, month + 1)
    return [[day or None for day in week] for week in weeks]


def build_month(year: int, month: int) -> MonthGrid:
    return MonthGrid(
        index=month,
        year=year,
        days=days_in_month(year, month),
        first_weekday=first_weekday(year, month),
        weeks=month_weeks(year, month),
    )


def build_year(year: int) -> List[MonthGrid]:
    """All twelve month grids of a year."""
    return [build_month(year, month) for month in range(12)]
