"""
Authentication session and auth-state event channel.

`AuthSession` wraps the users table: it verifies credentials, remembers the
actor and publishes every login/logout on an `AuthChannel`. The channel holds
a single subscriber at a time.
"""
import logging
from typing import Callable, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from daydicated.core.exceptions import AuthError
from daydicated.core.security import verify_password, get_password_hash
from daydicated.models.user import User

logger = logging.getLogger(__name__)

AuthCallback = Callable[[Optional[User]], None]


class AuthChannel:
    """Auth-state event channel with one active subscription."""

    def __init__(self):
        self._callback: Optional[AuthCallback] = None
        self._token = 0

    @property
    def has_subscriber(self) -> bool:
        return self._callback is not None

    def subscribe(self, callback: AuthCallback) -> Callable[[], None]:
        """
        Register `callback`, replacing any previous subscriber.

        Returns an unsubscribe handle. A handle whose subscription has already
        been replaced does nothing.
        """
        self._token += 1
        token = self._token
        self._callback = callback

        def unsubscribe() -> None:
            if self._token == token:
                self._callback = None

        return unsubscribe

    def publish(self, actor: Optional[User]) -> None:
        if self._callback is not None:
            self._callback(actor)


class AuthSession:
    """Email/password authentication for one client session."""

    def __init__(self, db: Session, channel: Optional[AuthChannel] = None):
        self.db = db
        self.channel = channel or AuthChannel()
        self._actor: Optional[User] = None

    def current_actor(self) -> Optional[User]:
        return self._actor

    def login(self, email: str, password: str) -> User:
        try:
            user = self.db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            logger.error(f"Error looking up {email}: {e}")
            raise AuthError("Could not verify credentials") from e
        if not user or not verify_password(password, user.hashed_password):
            logger.warning(f"Login error for {email}: bad credentials")
            raise AuthError("Incorrect email or password")
        if not user.is_active:
            raise AuthError("User account is inactive")

        self._actor = user
        self.channel.publish(user)
        return user

    def logout(self) -> None:
        self._actor = None
        self.channel.publish(None)

    def restore(self, actor: User) -> None:
        """Resume a session from a verified token without publishing."""
        self._actor = actor

    def subscribe(self, callback: AuthCallback) -> Callable[[], None]:
        return self.channel.subscribe(callback)


def register_user(db: Session, username: str, email: str, password: str) -> User:
    """Create a new account. Username and email must both be unused."""
    if db.query(User).filter(User.username == username).first():
        raise AuthError("Username already exists")
    if db.query(User).filter(User.email == email).first():
        raise AuthError("Email already exists")

    user = User(
        username=username,
        email=email,
        hashed_password=get_password_hash(password)
    )
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error registering {email}: {e}")
        raise AuthError("Could not create account") from e
    logger.info(f"Registered user {user.uid}")
    return user
