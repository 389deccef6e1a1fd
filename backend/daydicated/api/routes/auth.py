"""
Authentication routes for signup, login, and logout.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from daydicated.db.session import get_db
from daydicated.core.exceptions import AuthError
from daydicated.core.security import create_access_token
from daydicated.schemas.user import UserCreate, UserLogin, Token, UserResponse
from daydicated.services.app_controller import AppController, build_controller
from daydicated.services.auth_service import AuthSession, register_user
from daydicated.api.dependencies import get_controller, raise_for_failure

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user."""
    try:
        return register_user(db, user_data.username, user_data.email, user_data.password)
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )


@router.post("/login", response_model=Token)
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login with email and password and get a JWT token."""
    controller = build_controller(db, AuthSession(db))
    user = controller.handle_login(credentials.email, credentials.password)
    if user is None:
        raise_for_failure(controller)

    access_token = create_access_token(user.uid)
    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/logout")
async def logout(controller: AppController = Depends(get_controller)):
    """Logout (the client drops its token)."""
    if not controller.handle_logout():
        raise_for_failure(controller)
    return {"message": "Logged out successfully"}
