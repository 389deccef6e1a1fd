"""
Transient user-facing notifications that dismiss themselves after a fixed time.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional
from daydicated.core.config import settings


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Notification:
    message: str
    level: str = "danger"  # success, danger, warning, info
    created_at: datetime = field(default_factory=_now)
    lifetime: timedelta = field(
        default_factory=lambda: timedelta(seconds=settings.NOTIFICATION_LIFETIME_SECONDS)
    )
    status_code: Optional[int] = None

    @property
    def expires_at(self) -> datetime:
        return self.created_at + self.lifetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class NotificationCenter:
    def __init__(self, clock: Callable[[], datetime] = _now):
        self.clock = clock
        self._items: List[Notification] = []

    def push(self, message: str, level: str = "danger", status_code: Optional[int] = None) -> Notification:
        notification = Notification(
            message=message,
            level=level,
            created_at=self.clock(),
            status_code=status_code
        )
        self._items.append(notification)
        return notification

    def active(self) -> List[Notification]:
        """Notifications still on screen; expired ones are dropped."""
        now = self.clock()
        self._items = [n for n in self._items if not n.is_expired(now)]
        return list(self._items)

    def latest(self) -> Optional[Notification]:
        return self._items[-1] if self._items else None
