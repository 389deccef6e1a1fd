"""
Client settings routes: theme mode and accent color.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from daydicated.schemas.preference import PreferenceResponse, ThemeUpdate, AccentColorUpdate
from daydicated.services.app_controller import AppController
from daydicated.services.preference_service import PreferenceService
from daydicated.api.dependencies import get_controller, raise_for_failure

router = APIRouter(prefix="/settings", tags=["settings"])


def require_preferences(controller: AppController) -> PreferenceService:
    preferences = controller.preferences
    if preferences is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Settings are not enabled"
        )
    return preferences


@router.get("", response_model=PreferenceResponse)
async def get_settings(controller: AppController = Depends(get_controller)):
    """Current theme mode and accent color (defaults when never set)."""
    return require_preferences(controller).as_dict()


@router.put("/theme", response_model=PreferenceResponse)
async def set_theme(
    update: ThemeUpdate,
    controller: AppController = Depends(get_controller)
):
    """Switch between dark and light mode."""
    preferences = require_preferences(controller)
    if controller.handle_theme_change(update.mode) is None:
        raise_for_failure(controller)
    return preferences.as_dict()


@router.put("/accent-color", response_model=PreferenceResponse)
async def set_accent_color(
    update: AccentColorUpdate,
    controller: AppController = Depends(get_controller)
):
    """Change the primary accent color (#rrggbb)."""
    preferences = require_preferences(controller)
    if controller.handle_accent_change(update.color) is None:
        raise_for_failure(controller)
    return preferences.as_dict()
