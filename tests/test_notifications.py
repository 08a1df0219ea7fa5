# tests/test_notifications.py

from helpers import SignalSpy
from store.notification_store import NotificationStore
from store.seed import demo_notifications


def test_mark_as_read_and_mark_all(today) -> None:
    store = NotificationStore(clock=lambda: today)
    store.load(demo_notifications())
    spy = SignalSpy(store.notifications_changed)

    assert store.unread_count == 3
    assert store.mark_as_read("2") is True
    assert store.mark_as_read("2") is False
    assert store.mark_as_read("missing") is False
    assert store.unread_count == 2

    assert store.mark_all_as_read() == 2
    assert store.mark_all_as_read() == 0
    assert store.unread_count == 0
    assert len(spy) == 2


def test_new_notifications_go_first(today) -> None:
    store = NotificationStore(clock=lambda: today)
    store.load(demo_notifications())
    n = store.add_notification("Reminder", "Stand-up at 10")
    assert store.notifications[0] is n
    assert n.created_at == "2025-04-22"
    assert not n.read
