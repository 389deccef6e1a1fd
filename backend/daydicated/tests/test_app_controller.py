"""
Tests for the application controller flows.
"""
import logging
from datetime import datetime, timedelta, timezone
from sqlalchemy.exc import SQLAlchemyError
from daydicated.services.app_controller import build_controller
from daydicated.services.auth_service import AuthSession
from daydicated.services.notifications import NotificationCenter

PASSWORD = "testpassword123"


class BrokenSession:
    def query(self, *args, **kwargs):
        raise SQLAlchemyError("database went away")


def logged_in_controller(db, **kwargs):
    controller = build_controller(db, AuthSession(db), **kwargs)
    assert controller.handle_login("alice@example.com", PASSWORD) is not None
    return controller


def test_login_loads_selector_and_own_calendar(db, alice, bob):
    """Logging in shows the actor's editable calendar and the owner selector."""
    controller = logged_in_controller(db)

    assert controller.calendar_view.owner_id == alice.uid
    assert controller.calendar_view.editable
    assert controller.cache.viewing_owner_id == alice.uid

    options = controller.user_options
    assert options[0].uid == alice.uid
    assert options[0].label == "alice@example.com (You)"
    assert options[0].selected
    assert [o.uid for o in options[1:]] == [bob.uid]
    assert options[1].label == "bob@example.com"


def test_failed_login_notifies(db, alice):
    """Bad credentials produce a notification and no calendar."""
    controller = build_controller(db, AuthSession(db))

    assert controller.handle_login("alice@example.com", "nope") is None
    notification = controller.notifications.latest()
    assert notification.message == "Login failed: Incorrect email or password"
    assert notification.level == "danger"
    assert notification.status_code == 401
    assert controller.calendar_view is None


def test_viewing_another_user_is_read_only(db, alice, bob):
    """Other owners' calendars render without click handlers."""
    controller = logged_in_controller(db)

    view = controller.handle_user_change(bob.uid)

    assert not view.editable
    assert all(cell.on_click is None for month in view.months for cell in month.cells())
    assert controller.cache.viewing_owner_id == bob.uid


def test_empty_selection_is_ignored(db, alice):
    controller = logged_in_controller(db)
    before = controller.calendar_view

    assert controller.handle_user_change("") is None
    assert controller.calendar_view is before
    assert controller.notifications.active() == []


def test_day_click_prefills_edit_form(db, alice):
    """Clicking a day opens the form with the entry's values or defaults."""
    controller = logged_in_controller(db)

    form = controller.calendar_view.cell("2026-03-15").click()
    assert (form.date, form.rating, form.note) == ("2026-03-15", 3, "")

    controller.handle_edit_submit("2026-03-15", 5, "Sunny")
    form = controller.calendar_view.cell("2026-03-15").click()
    assert (form.rating, form.note) == (5, "Sunny")
    assert controller.edit_form == form


def test_edit_submit_saves_and_rerenders(db, alice):
    """Saving trims the note, updates the cache and redraws the calendar."""
    controller = logged_in_controller(db)

    entry = controller.handle_edit_submit("2026-03-15", "4", "  Great hike  ")

    assert entry.rating == 4
    assert entry.note == "Great hike"
    cell = controller.calendar_view.cell("2026-03-15")
    assert cell.stars == "★★★★"
    assert cell.note_preview == "Great hike"
    notification = controller.notifications.latest()
    assert notification.message == "Entry saved successfully!"
    assert notification.level == "success"


def test_edit_submit_rejects_out_of_range_rating(db, alice, store):
    """Ratings outside 1-5 are refused before anything is written."""
    controller = logged_in_controller(db)

    assert controller.handle_edit_submit("2026-03-15", 6, "") is None
    assert controller.notifications.latest().message == (
        "Failed to save entry: Rating must be between 1 and 5"
    )
    assert controller.notifications.latest().status_code == 400
    assert store.query_entries() == []


def test_edit_submit_rejects_day_outside_year(db, alice):
    controller = logged_in_controller(db)

    assert controller.handle_edit_submit("2025-12-31", 3, "") is None
    assert controller.notifications.latest().message == (
        "Failed to save entry: Only days of 2026 can be rated"
    )


def test_edit_submit_requires_login(db):
    """Without an actor the save fails with a notification."""
    controller = build_controller(db, AuthSession(db))

    assert controller.handle_edit_submit("2026-03-15", 3, "") is None
    assert controller.notifications.latest().message == (
        "Failed to save entry: Must be logged in to save entries"
    )


def test_save_failure_keeps_state(db, alice, failing_store):
    """A storage failure leaves the rendered calendar untouched."""
    controller = logged_in_controller(db)
    before = controller.calendar_view
    controller.cache.store = failing_store

    assert controller.handle_edit_submit("2026-03-15", 3, "") is None
    assert controller.calendar_view is before
    assert controller.notifications.latest().message == "Failed to save entry: storage offline"
    assert controller.notifications.latest().status_code == 503


def test_load_failure_notifies(db, alice, bob, failing_store):
    """A failed calendar load keeps the previous view."""
    controller = logged_in_controller(db)
    before = controller.calendar_view
    controller.cache.store = failing_store

    assert controller.handle_user_change(bob.uid) is None
    assert controller.calendar_view is before
    assert controller.notifications.latest().message == "Failed to load calendar: storage offline"


def test_login_with_unavailable_storage(db, alice, failing_store):
    """The initial calendar load failing is reported with a generic message."""
    controller = build_controller(db, AuthSession(db))
    controller.cache.store = failing_store

    assert controller.handle_login("alice@example.com", PASSWORD) is not None
    assert controller.calendar_view is None
    assert controller.notifications.latest().message == "Failed to load calendar data"


def test_user_list_errors_are_only_logged(db, alice, caplog):
    """Selector loading failures never reach the notifications."""
    controller = logged_in_controller(db)
    options = controller.user_options
    controller.db = BrokenSession()

    with caplog.at_level(logging.ERROR):
        assert controller.load_user_selector() == options

    assert "Error loading users" in caplog.text
    assert all(n.level == "success" for n in controller.notifications.active())


def test_exports(db, alice, failing_store):
    """Exports report success, or the failure, as notifications."""
    controller = logged_in_controller(db)
    controller.handle_edit_submit("2026-01-01", 5, "")

    csv_file = controller.handle_export_csv()
    assert csv_file.content.decode("utf-8").splitlines()[1] == f"{alice.uid},2026-01-01,5,"
    assert controller.notifications.latest().message == "CSV exported successfully!"

    assert controller.handle_export_json().filename == "daydicated-2026.json"
    assert controller.notifications.latest().message == "JSON exported successfully!"

    controller.store = failing_store
    assert controller.handle_export_csv() is None
    assert controller.notifications.latest().message == "Export failed: storage offline"


def test_logout_clears_state(db, alice):
    """Logging out drops the calendar, the cache and the selector."""
    controller = logged_in_controller(db)
    controller.handle_edit_submit("2026-01-01", 5, "")

    assert controller.handle_logout()
    assert controller.calendar_view is None
    assert controller.user_options == []
    assert controller.cache.viewing_owner_id is None
    assert dict(controller.cache.current_entries()) == {}


def test_close_unsubscribes(db, alice):
    """A closed controller ignores later auth changes."""
    session = AuthSession(db)
    controller = build_controller(db, session)
    controller.close()

    session.login("alice@example.com", PASSWORD)
    assert controller.calendar_view is None


def test_settings_configurations(db, alice):
    """Settings are only available in the configuration that enables them."""
    without_settings = logged_in_controller(db, settings_enabled=False)
    assert without_settings.preferences is None
    assert without_settings.handle_theme_change("light") is None

    with_settings = logged_in_controller(db, settings_enabled=True)
    assert with_settings.preferences.theme() == "dark"
    assert with_settings.handle_theme_change("light") == "light"
    assert with_settings.preferences.theme() == "light"

    assert with_settings.handle_accent_change("blue") is None
    assert with_settings.notifications.latest().message.startswith("Failed to save accent color")


def test_notifications_expire_after_five_seconds(db, alice):
    """Notifications dismiss themselves after their lifetime."""
    now = [datetime(2026, 1, 1, tzinfo=timezone.utc)]
    center = NotificationCenter(clock=lambda: now[0])
    controller = build_controller(db, AuthSession(db), notifications=center)

    controller.handle_login("alice@example.com", "wrong")
    assert len(center.active()) == 1

    now[0] += timedelta(seconds=4)
    assert len(center.active()) == 1

    now[0] += timedelta(seconds=1)
    assert center.active() == []


def test_login_database_error_notifies(db, alice, monkeypatch, database_down):
    """A database error during login is a failed login, not a crash."""
    controller = build_controller(db, AuthSession(db))

    monkeypatch.setattr(db, "query", database_down)
    assert controller.handle_login("alice@example.com", PASSWORD) is None
    monkeypatch.undo()

    notification = controller.notifications.latest()
    assert notification.message == "Login failed: Could not verify credentials"
    assert notification.status_code == 401
    assert controller.auth.current_actor() is None
    assert controller.calendar_view is None


def test_settings_database_error_notifies(db, alice, monkeypatch, database_down):
    """Failed settings saves are notified and leave the stored settings alone."""
    controller = logged_in_controller(db, settings_enabled=True)

    monkeypatch.setattr(db, "commit", database_down)
    assert controller.handle_theme_change("light") is None
    assert controller.notifications.latest().message == "Failed to save theme: Could not save setting theme"
    assert controller.handle_accent_change("#ffaa00") is None
    assert controller.notifications.latest().message == (
        "Failed to save accent color: Could not save setting primaryColor"
    )
    monkeypatch.undo()

    assert controller.preferences.as_dict() == {"theme": "dark", "accent_color": "#0d6efd"}
