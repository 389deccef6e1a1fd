"""
Application controller.

Drives login/logout, calendar owner selection, the day-click edit flow and
exports. Every failure of an action is turned into a notification and leaves
the controller state as it was. Built with or without the settings feature
(theme mode and accent color).
"""
import logging
from datetime import date
from typing import List, Optional, Union
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from daydicated.core.config import settings
from daydicated.core.exceptions import DaydicatedError, EntryValidationError
from daydicated.models.user import User
from daydicated.schemas.entry import CachedEntry, EditForm
from daydicated.schemas.user import UserOption
from daydicated.services.auth_service import AuthSession
from daydicated.services.calendar_renderer import CalendarView, render_calendar
from daydicated.services.entry_cache import EntryCache, coerce_rating
from daydicated.services.entry_store import EntryStore
from daydicated.services.export_service import ExportFile, export_csv, export_json
from daydicated.services.notifications import NotificationCenter
from daydicated.services.preference_service import PreferenceService

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5
DEFAULT_RATING = 3


class AppController:

    def __init__(
        self,
        auth: AuthSession,
        cache: EntryCache,
        store: EntryStore,
        db: Session,
        year: int,
        settings_enabled: bool = False,
        notifications: Optional[NotificationCenter] = None
    ):
        self.auth = auth
        self.cache = cache
        self.store = store
        self.db = db
        self.year = year
        self.settings_enabled = settings_enabled
        self.notifications = notifications or NotificationCenter()

        self.calendar_view: Optional[CalendarView] = None
        self.user_options: List[UserOption] = []
        self.edit_form: Optional[EditForm] = None

        self._unsubscribe = self.auth.subscribe(self._on_auth_change)

    @property
    def preferences(self) -> Optional[PreferenceService]:
        """Settings of the actor; None when the feature is off or nobody is logged in."""
        actor = self.auth.current_actor()
        if not self.settings_enabled or actor is None:
            return None
        return PreferenceService(self.db, actor.uid)

    def close(self) -> None:
        self._unsubscribe()

    def _fail(self, prefix: str, error: DaydicatedError) -> None:
        self.notifications.push(f"{prefix}: {error.message}", status_code=error.status_code)

    def _success(self, message: str) -> None:
        self.notifications.push(message, level="success")

    # Authentication

    def handle_login(self, email: str, password: str) -> Optional[User]:
        try:
            return self.auth.login(email, password)
        except DaydicatedError as e:
            self._fail("Login failed", e)
            return None

    def handle_logout(self) -> bool:
        try:
            self.auth.logout()
        except DaydicatedError as e:
            self._fail("Logout failed", e)
            return False
        return True

    def _on_auth_change(self, actor: Optional[User]) -> None:
        if actor is None:
            self.cache.clear()
            self.calendar_view = None
            self.user_options = []
            self.edit_form = None
            return

        self.load_user_selector()
        try:
            self.display_calendar(actor.uid)
        except DaydicatedError as e:
            logger.error(f"Error initializing calendar for {actor.uid}: {e}")
            self.notifications.push("Failed to load calendar data", status_code=e.status_code)

    # Calendar owner selection

    def load_user_selector(self) -> List[UserOption]:
        """Current user first, then every other account."""
        actor = self.auth.current_actor()
        try:
            users = self.db.query(User).order_by(User.id).all()
        except SQLAlchemyError as e:
            logger.error(f"Error loading users: {e}")
            return self.user_options

        options = []
        if actor is not None:
            options.append(UserOption(uid=actor.uid, label=f"{actor.email} (You)", selected=True))
        for user in users:
            if actor is not None and user.uid == actor.uid:
                continue
            label = user.email if user.email else f"{user.uid[:8]}..."
            options.append(UserOption(uid=user.uid, label=label))

        self.user_options = options
        return options

    def display_calendar(self, owner_id: str) -> CalendarView:
        """Load `owner_id`'s entries and render them; editable only for the actor."""
        entries = self.cache.load(owner_id)
        actor = self.auth.current_actor()
        is_editable = actor is not None and actor.uid == owner_id

        self.calendar_view = render_calendar(
            self.year,
            entries,
            is_editable,
            on_day_click=self.handle_day_click,
            owner_id=owner_id
        )
        return self.calendar_view

    def handle_user_change(self, owner_id: Optional[str]) -> Optional[CalendarView]:
        if not owner_id:
            return None
        try:
            return self.display_calendar(owner_id)
        except DaydicatedError as e:
            self._fail("Failed to load calendar", e)
            return None

    # Editing

    def handle_day_click(self, entry_date: str, entry: Optional[CachedEntry]) -> EditForm:
        self.edit_form = EditForm(
            date=entry_date,
            rating=entry.rating if entry and entry.rating else DEFAULT_RATING,
            note=entry.note if entry and entry.note else ""
        )
        return self.edit_form

    def _check_date(self, entry_date: str) -> str:
        """Normalized YYYY-MM-DD of a day inside the calendar year."""
        try:
            parsed = date.fromisoformat(entry_date)
        except (TypeError, ValueError):
            raise EntryValidationError(f"Invalid date {entry_date!r}, expected YYYY-MM-DD")
        if parsed.year != self.year:
            raise EntryValidationError(f"Only days of {self.year} can be rated")
        return parsed.isoformat()

    def handle_edit_submit(
        self,
        entry_date: str,
        rating: Union[int, str],
        note: Optional[str]
    ) -> Optional[CachedEntry]:
        note = (note or "").strip()
        try:
            entry_date = self._check_date(entry_date)
            value = coerce_rating(rating)
            if not MIN_RATING <= value <= MAX_RATING:
                raise EntryValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
            entry = self.cache.upsert(entry_date, value, note)
            self.edit_form = None
            self.display_calendar(self.auth.current_actor().uid)
        except DaydicatedError as e:
            self._fail("Failed to save entry", e)
            return None

        self._success("Entry saved successfully!")
        return entry

    # Export

    def handle_export_csv(self) -> Optional[ExportFile]:
        try:
            export = export_csv(self.store, self.year)
        except DaydicatedError as e:
            self._fail("Export failed", e)
            return None
        self._success("CSV exported successfully!")
        return export

    def handle_export_json(self) -> Optional[ExportFile]:
        try:
            export = export_json(self.store, self.year)
        except DaydicatedError as e:
            self._fail("Export failed", e)
            return None
        self._success("JSON exported successfully!")
        return export

    # Settings

    def handle_theme_change(self, mode: str) -> Optional[str]:
        preferences = self.preferences
        if preferences is None:
            return None
        try:
            return preferences.set_theme(mode)
        except DaydicatedError as e:
            self._fail("Failed to save theme", e)
            return None

    def handle_accent_change(self, color: str) -> Optional[str]:
        preferences = self.preferences
        if preferences is None:
            return None
        try:
            return preferences.set_accent_color(color)
        except DaydicatedError as e:
            self._fail("Failed to save accent color", e)
            return None


def build_controller(
    db: Session,
    auth: AuthSession,
    settings_enabled: Optional[bool] = None,
    notifications: Optional[NotificationCenter] = None
) -> AppController:
    """Wire a controller for one client session from configuration."""
    if settings_enabled is None:
        settings_enabled = settings.SETTINGS_FEATURE_ENABLED

    store = EntryStore(db)
    cache = EntryCache(store, auth)

    return AppController(
        auth=auth,
        cache=cache,
        store=store,
        db=db,
        year=settings.CALENDAR_YEAR,
        settings_enabled=settings_enabled,
        notifications=notifications
    )
