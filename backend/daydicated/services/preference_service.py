"""
Persisted client settings: theme mode and primary accent color.
"""
import logging
import re
from typing import Dict, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from daydicated.core.config import settings
from daydicated.core.exceptions import PreferenceError
from daydicated.models.preference import Preference

logger = logging.getLogger(__name__)

THEME_KEY = "theme"
ACCENT_COLOR_KEY = "primaryColor"
THEME_MODES = ("dark", "light")
HEX_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


class PreferenceService:
    """String key-value settings of one user."""

    def __init__(self, db: Session, owner_uid: str):
        self.db = db
        self.owner_uid = owner_uid

    def _row(self, key: str) -> Optional[Preference]:
        return self.db.query(Preference).filter(
            Preference.user_uid == self.owner_uid,
            Preference.key == key
        ).first()

    def get(self, key: str, default: str) -> str:
        try:
            row = self._row(key)
        except SQLAlchemyError as e:
            logger.error(f"Error loading setting {key} of {self.owner_uid}: {e}")
            raise PreferenceError(f"Could not load setting {key}") from e
        return row.value if row else default

    def set(self, key: str, value: str) -> None:
        try:
            row = self._row(key)
            if row:
                row.value = value
            else:
                self.db.add(Preference(user_uid=self.owner_uid, key=key, value=value))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error saving setting {key} of {self.owner_uid}: {e}")
            raise PreferenceError(f"Could not save setting {key}") from e

    def theme(self) -> str:
        return self.get(THEME_KEY, settings.DEFAULT_THEME)

    def accent_color(self) -> str:
        return self.get(ACCENT_COLOR_KEY, settings.DEFAULT_ACCENT_COLOR)

    def set_theme(self, mode: str) -> str:
        if mode not in THEME_MODES:
            raise PreferenceError(f"Theme must be one of {', '.join(THEME_MODES)}")
        self.set(THEME_KEY, mode)
        logger.debug(f"Theme of {self.owner_uid} set to {mode}")
        return mode

    def set_accent_color(self, color: str) -> str:
        if not HEX_COLOR_RE.match(color or ""):
            raise PreferenceError("Accent color must be a hex color like #0d6efd")
        color = color.lower()
        self.set(ACCENT_COLOR_KEY, color)
        return color

    def as_dict(self) -> Dict[str, str]:
        return {"theme": self.theme(), "accent_color": self.accent_color()}
