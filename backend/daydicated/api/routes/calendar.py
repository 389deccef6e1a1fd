"""
Calendar routes: rendered year grid, cached entries and the edit flow.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from typing import Dict
from datetime import date
from daydicated.schemas.calendar import CalendarResponse
from daydicated.schemas.entry import CachedEntry, EditForm, EntryResponse, EntryWrite
from daydicated.services.app_controller import AppController
from daydicated.api.dependencies import get_controller, raise_for_failure

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("/days/{entry_date}/edit", response_model=EditForm)
async def open_day_editor(
    entry_date: date,
    controller: AppController = Depends(get_controller)
):
    """Click a day of your own calendar and get the pre-filled edit form."""
    actor = controller.auth.current_actor()
    view = controller.handle_user_change(actor.uid)
    if view is None:
        raise_for_failure(controller)

    cell = view.cell(entry_date.isoformat())
    if cell is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Day is not part of the {view.year} calendar"
        )
    return cell.click()


@router.put("/entries/{entry_date}", response_model=EntryResponse)
async def save_entry(
    entry_date: date,
    entry_data: EntryWrite,
    controller: AppController = Depends(get_controller)
):
    """Set or update the current user's rating and note for a day."""
    entry = controller.handle_edit_submit(entry_date.isoformat(), entry_data.rating, entry_data.note)
    if entry is None:
        raise_for_failure(controller)

    return EntryResponse(date=entry_date.isoformat(), **entry.model_dump())


@router.get("/{owner_id}", response_model=CalendarResponse)
async def get_calendar(
    owner_id: str,
    controller: AppController = Depends(get_controller)
):
    """Full year calendar of a user; editable only for your own."""
    view = controller.handle_user_change(owner_id)
    if view is None:
        raise_for_failure(controller)
    return view.to_response()


@router.get("/{owner_id}/entries", response_model=Dict[str, CachedEntry])
async def get_calendar_entries(
    owner_id: str,
    controller: AppController = Depends(get_controller)
):
    """Entries of a user keyed by date."""
    if controller.handle_user_change(owner_id) is None:
        raise_for_failure(controller)
    return dict(controller.cache.current_entries())
