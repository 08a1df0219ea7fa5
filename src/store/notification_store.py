# src/store/notification_store.py
import logging
from dataclasses import replace
from datetime import date
from typing import Callable, Iterable, Tuple

from PySide6.QtCore import QObject, Signal

from models.notification import Notification

logger = logging.getLogger(__name__)


class NotificationStore(QObject):
    """Notification feed, newest first. Independent of the task collection."""

    notifications_changed = Signal()

    def __init__(self, clock: Callable[[], date] = date.today, parent=None):
        super().__init__(parent)
        self._clock = clock
        self._items: Tuple[Notification, ...] = ()

    @property
    def notifications(self) -> Tuple[Notification, ...]:
        return self._items

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self._items if not n.read)

    def load(self, items: Iterable[Notification]) -> None:
        self._items = tuple(items)
        self.notifications_changed.emit()

    def add_notification(self, title: str, message: str) -> Notification:
        n = Notification(title=title, message=message, created_at=self._clock().isoformat())
        self._items = (n,) + self._items
        logger.info("Notification added id=%s title=%r", n.id, title)
        self.notifications_changed.emit()
        return n

    def mark_as_read(self, notification_id: str) -> bool:
        changed = False
        items = []
        for n in self._items:
            if n.id == notification_id and not n.read:
                n = replace(n, read=True)
                changed = True
            items.append(n)
        if changed:
            self._items = tuple(items)
            self.notifications_changed.emit()
        return changed

    def mark_all_as_read(self) -> int:
        count = self.unread_count
        if count:
            self._items = tuple(replace(n, read=True) for n in self._items)
            self.notifications_changed.emit()
        return count
