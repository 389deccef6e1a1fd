"""
User routes: current account and the calendar owner selector.
"""
from fastapi import APIRouter, Depends
from typing import List
from daydicated.models.user import User
from daydicated.schemas.user import UserResponse, UserOption
from daydicated.services.app_controller import AppController
from daydicated.api.dependencies import get_current_user, get_controller

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user


@router.get("", response_model=List[UserOption])
async def list_user_options(controller: AppController = Depends(get_controller)):
    """Users whose calendars can be viewed, current user first."""
    return controller.load_user_selector()
