"""Transient user-facing notifications for the console page.

The feed is bounded and ordered; the page drains it after each action.
Every entry is also logged so the service log tells the same story.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime

from fireview.domain.enums import NotificationVariant
from fireview.shared.telemetry.logging import get_logger
from fireview.shared.utils import utc_now

logger = get_logger(__name__)


@dataclass(frozen=True)
class Notification:
    """One toast shown by the console page."""

    title: str
    message: str
    variant: NotificationVariant = NotificationVariant.DEFAULT
    created_at: datetime = field(default_factory=utc_now)


class NotificationCenter:
    """Bounded FIFO of notifications; oldest entries drop when full."""

    def __init__(self, limit: int = 50) -> None:
        self._items: deque[Notification] = deque(maxlen=limit)

    def __len__(self) -> int:
        return len(self._items)

    def notify(
        self,
        title: str,
        message: str,
        variant: NotificationVariant = NotificationVariant.DEFAULT,
    ) -> Notification:
        notification = Notification(title=title, message=message, variant=variant)
        self._items.append(notification)
        if variant == NotificationVariant.DESTRUCTIVE:
            logger.warning("%s: %s", title, message)
        else:
            logger.info("%s: %s", title, message)
        return notification

    def error(self, title: str, message: str) -> Notification:
        """Shorthand for a destructive notification."""
        return self.notify(title, message, NotificationVariant.DESTRUCTIVE)

    def peek(self) -> list[Notification]:
        return list(self._items)

    def drain(self) -> list[Notification]:
        """Return all pending notifications (oldest first) and clear the feed."""
        items = list(self._items)
        self._items.clear()
        return items
