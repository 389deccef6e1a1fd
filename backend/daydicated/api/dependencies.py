"""
Shared API dependencies: current user, per-request controller, error mapping.
"""
from typing import NoReturn
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from daydicated.core.security import token_subject
from daydicated.db.session import get_db
from daydicated.models.user import User
from daydicated.services.app_controller import AppController, build_controller
from daydicated.services.auth_service import AuthSession

bearer_scheme = HTTPBearer()


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the bearer token to an active user."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    uid = token_subject(credentials.credentials)
    if uid is None:
        raise credentials_exception

    user = db.query(User).filter(User.uid == uid).first()
    if not user or not user.is_active:
        raise credentials_exception
    return user


def get_controller(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> AppController:
    """Controller for this request, with the token's user as actor."""
    auth = AuthSession(db)
    auth.restore(current_user)
    return build_controller(db, auth)


def raise_for_failure(controller: AppController) -> NoReturn:
    """Turn the controller's latest error notification into an HTTP error."""
    notification = controller.notifications.latest()
    if notification is None or notification.status_code is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Action failed"
        )
    raise HTTPException(
        status_code=notification.status_code,
        detail=notification.message
    )
