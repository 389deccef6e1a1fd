"""
Calendar renderer: turns month grids and cached entries into a year of cells.
"""
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable, List, Mapping, Optional
from daydicated.schemas.calendar import CalendarResponse, DayCellResponse, MonthResponse
from daydicated.schemas.entry import CachedEntry
from daydicated.services.date_grid import DAY_NAMES, build_year, format_date

STAR = "★"
NOTE_PREVIEW_LENGTH = 10

DayClickHandler = Callable[[str, Optional[CachedEntry]], Any]


@dataclass
class DayCell:
    date: str
    day: int
    entry: Optional[CachedEntry] = None
    editable: bool = False
    on_click: Optional[Callable[[], Any]] = None

    @property
    def stars(self) -> str:
        if self.entry and self.entry.rating:
            return STAR * self.entry.rating
        return ""

    @property
    def note_preview(self) -> str:
        if self.entry and self.entry.note:
            return self.entry.note[:NOTE_PREVIEW_LENGTH]
        return ""

    @property
    def note_title(self) -> str:
        if self.entry and self.entry.note:
            return self.entry.note
        return ""

    @property
    def css_classes(self) -> List[str]:
        classes = ["day-cell"]
        if self.entry and self.entry.rating:
            classes.append(f"rating-{self.entry.rating}")
        if self.editable:
            classes.append("editable")
        return classes

    def click(self) -> Any:
        """Run the day-click handler; read-only cells have none."""
        if self.on_click is None:
            raise ValueError(f"Day {self.date} has no click handler")
        return self.on_click()

    def to_response(self) -> DayCellResponse:
        return DayCellResponse(
            date=self.date,
            day=self.day,
            rating=self.entry.rating if self.entry else None,
            note=self.entry.note if self.entry else None,
            stars=self.stars,
            note_preview=self.note_preview,
            note_title=self.note_title,
            editable=self.editable,
            css_classes=self.css_classes
        )


@dataclass
class MonthView:
    index: int
    name: str
    year: int
    weeks: List[List[Optional[DayCell]]] = field(default_factory=list)

    def cells(self) -> List[DayCell]:
        return [cell for week in self.weeks for cell in week if cell is not None]


@dataclass
class CalendarView:
    year: int
    editable: bool
    owner_id: Optional[str] = None
    months: List[MonthView] = field(default_factory=list)

    def cell(self, date_str: str) -> Optional[DayCell]:
        for month in self.months:
            for cell in month.cells():
                if cell.date == date_str:
                    return cell
        return None

    def to_response(self) -> CalendarResponse:
        return CalendarResponse(
            owner_id=self.owner_id or "",
            year=self.year,
            editable=self.editable,
            day_names=DAY_NAMES,
            months=[
                MonthResponse(
                    index=month.index,
                    name=month.name,
                    year=month.year,
                    weeks=[
                        [cell.to_response() if cell else None for cell in week]
                        for week in month.weeks
                    ]
                )
                for month in self.months
            ]
        )


def render_calendar(
    year: int,
    entries: Mapping[str, CachedEntry],
    is_editable: bool,
    on_day_click: Optional[DayClickHandler] = None,
    owner_id: Optional[str] = None
) -> CalendarView:
    """
    Build the twelve months of `year` from a snapshot of cached entries.

    Cells only get a click callback when the calendar is editable; the callback
    receives the date string and the entry of that day (or None).
    """
    view = CalendarView(year=year, editable=is_editable, owner_id=owner_id)

    for grid in build_year(year):
        month = MonthView(index=grid.index, name=grid.name, year=year)
        for week in grid.weeks:
            row: List[Optional[DayCell]] = []
            for day in week:
                if day is None:
                    row.append(None)
                    continue
                date_str = format_date(year, grid.index, day)
                entry = entries.get(date_str)
                on_click = None
                if is_editable and on_day_click is not None:
                    on_click = partial(on_day_click, date_str, entry)
                row.append(DayCell(
                    date=date_str,
                    day=day,
                    entry=entry,
                    editable=is_editable,
                    on_click=on_click
                ))
            month.weeks.append(row)
        view.months.append(month)

    return view
