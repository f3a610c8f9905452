"""Change notifier for the FreeBadges integration.

Observer registry that decouples background state changes (catalog refresh,
login, submissions) from the entities that render them. Every state-changing
operation calls async_notify() directly after its writes complete; there is
no batching or debouncing.
"""

from __future__ import annotations

from collections.abc import Callable
from itertools import count

from homeassistant.core import CALLBACK_TYPE, callback

from . import const

Listener = Callable[[], None]


class ChangeNotifier:
    """Publish/subscribe fan-out keyed by opaque subscription tokens.

    The same listener may be subscribed several times; it is delivered once per
    notification while each subscription stays independently revocable.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._listeners: dict[int, Listener] = {}
        self._tokens = count()

    @callback
    def async_subscribe(self, listener: Listener) -> CALLBACK_TYPE:
        """Register a zero-argument listener.

        Returns:
            Callback that removes this subscription. Calling it again is a no-op.
        """
        token = next(self._tokens)
        self._listeners[token] = listener

        @callback
        def _unsubscribe() -> None:
            self._listeners.pop(token, None)

        return _unsubscribe

    @callback
    def async_notify(self) -> None:
        """Invoke every registered listener synchronously.

        Iterates over a snapshot taken before delivery starts: listeners removed
        mid-round are still called this round, listeners added mid-round are
        called from the next round on.
        """
        snapshot = list(dict.fromkeys(self._listeners.values()))
        const.LOGGER.debug("DEBUG: Notifying %s listeners", len(snapshot))
        for listener in snapshot:
            try:
                listener()
            except Exception:  # pylint: disable=broad-exception-caught
                # One broken observer must not starve the rest
                const.LOGGER.exception("ERROR: FreeBadges listener %s failed", listener)

    @callback
    def clear(self) -> None:
        """Remove every subscription."""
        self._listeners.clear()

    def __len__(self) -> int:
        return len(set(self._listeners.values()))
