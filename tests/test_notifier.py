"""Tests for the change notifier."""

from unittest.mock import MagicMock

from custom_components.freebadges.notifier import ChangeNotifier


def test_notify_calls_each_listener_once() -> None:
    """A listener subscribed twice is delivered once per notify."""
    notifier = ChangeNotifier()
    listener = MagicMock()
    other = MagicMock()
    notifier.async_subscribe(listener)
    notifier.async_subscribe(listener)
    notifier.async_subscribe(other)

    notifier.async_notify()

    assert listener.call_count == 1
    assert other.call_count == 1
    assert len(notifier) == 2


def test_unsubscribe_only_revokes_its_own_token() -> None:
    """Removing one of two subscriptions keeps the listener registered."""
    notifier = ChangeNotifier()
    listener = MagicMock()
    unsub_first = notifier.async_subscribe(listener)
    notifier.async_subscribe(listener)

    unsub_first()
    unsub_first()
    notifier.async_notify()

    assert listener.call_count == 1


def test_unsubscribe_during_notify_still_delivers() -> None:
    """A listener removed mid-round by an earlier listener is still called."""
    notifier = ChangeNotifier()
    calls: list[str] = []
    unsubs = {}

    def first() -> None:
        calls.append("first")
        unsubs["second"]()

    def second() -> None:
        calls.append("second")

    notifier.async_subscribe(first)
    unsubs["second"] = notifier.async_subscribe(second)

    notifier.async_notify()
    assert calls == ["first", "second"]

    notifier.async_notify()
    assert calls == ["first", "second", "first"]


def test_listener_added_during_notify_waits_for_next_round() -> None:
    notifier = ChangeNotifier()
    late = MagicMock()

    def adder() -> None:
        notifier.async_subscribe(late)

    notifier.async_subscribe(adder)
    notifier.async_notify()
    assert late.call_count == 0

    notifier.async_notify()
    assert late.call_count == 1


def test_raising_listener_does_not_stop_delivery() -> None:
    """An exception in one listener is logged and the rest still run."""
    notifier = ChangeNotifier()
    broken = MagicMock(side_effect=RuntimeError("boom"))
    healthy = MagicMock()
    notifier.async_subscribe(broken)
    notifier.async_subscribe(healthy)

    notifier.async_notify()

    healthy.assert_called_once()


def test_clear_drops_all_listeners() -> None:
    notifier = ChangeNotifier()
    listener = MagicMock()
    notifier.async_subscribe(listener)

    notifier.clear()
    notifier.async_notify()

    listener.assert_not_called()
    assert len(notifier) == 0
