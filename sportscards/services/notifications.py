"""
Transient user notifications (toasts).

Every reported outcome of a user action ends up here. Notifications expire
on their own after ttl_seconds and can be dismissed early.
"""

import itertools
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from sportscards.config import settings
from sportscards.models.failure import KnownError

logger = logging.getLogger(__name__)


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


_LOG_LEVELS: dict[NotificationLevel, int] = {
    NotificationLevel.SUCCESS: logging.INFO,
    NotificationLevel.INFO: logging.INFO,
    NotificationLevel.WARNING: logging.WARNING,
    NotificationLevel.ERROR: logging.WARNING,
}


@dataclass(frozen=True, slots=True)
class Notification:
    id: int
    message: str
    level: NotificationLevel
    expires_at: float


class NotificationCenter:
    """
    Holds the notifications currently visible to the user.

    Args:
        ttl_seconds: Lifetime of each notification
        clock: Monotonic time source (injectable for tests)
    """

    def __init__(
        self,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = settings.notification_ttl_seconds if ttl_seconds is None else ttl_seconds
        self._clock = clock
        self._ids = itertools.count(1)
        self._items: list[Notification] = []

    def show(self, message: str, level: NotificationLevel = NotificationLevel.SUCCESS) -> Notification:
        notification = Notification(
            id=next(self._ids),
            message=message,
            level=level,
            expires_at=self._clock() + self._ttl,
        )
        self._items.append(notification)
        logger.log(_LOG_LEVELS[level], "notify[%s]: %s", level.value, message)
        return notification

    def success(self, message: str) -> Notification:
        return self.show(message, NotificationLevel.SUCCESS)

    def error(self, message: str) -> Notification:
        return self.show(message, NotificationLevel.ERROR)

    def warning(self, message: str) -> Notification:
        return self.show(message, NotificationLevel.WARNING)

    def info(self, message: str) -> Notification:
        return self.show(message, NotificationLevel.INFO)

    def report(self, error: KnownError, prefix: str | None = None) -> Notification:
        """Show a known failure as an error notification."""
        message = f"{prefix}: {error.message}" if prefix else error.message
        return self.error(message)

    def dismiss(self, notification_id: int) -> bool:
        """Remove a notification early. Returns False if it was already gone."""
        before = len(self._items)
        self._items = [n for n in self._items if n.id != notification_id]
        return len(self._items) != before

    def active(self) -> list[Notification]:
        """Visible notifications, oldest first. Expired ones are dropped."""
        now = self._clock()
        self._items = [n for n in self._items if n.expires_at > now]
        return list(self._items)

    def latest(self) -> Notification | None:
        items = self.active()
        return items[-1] if items else None
