"""
Password hashing and bearer tokens.

Tokens carry the user's uid as the `sub` claim; nothing else about the user
is put in them.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
import hashlib
import bcrypt
from jose import JWTError, jwt
from daydicated.core.config import settings


def _digest(password: str) -> bytes:
    # bcrypt ignores input past 72 bytes; a SHA-256 digest is 32.
    return hashlib.sha256(password.encode("utf-8")).digest()


def get_password_hash(password: str) -> str:
    """bcrypt hash of the password digest, as text for the users table."""
    return bcrypt.hashpw(_digest(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(_digest(plain_password), hashed_password.encode("utf-8"))


def create_access_token(uid: str, expires_delta: Optional[timedelta] = None) -> str:
    """Signed token for `uid`, valid for ACCESS_TOKEN_EXPIRE_DAYS by default."""
    lifetime = expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    claims = {"sub": uid, "exp": datetime.now(timezone.utc) + lifetime}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def token_subject(token: str) -> Optional[str]:
    """uid named by a valid, unexpired token; None otherwise."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    return payload.get("sub") or None
