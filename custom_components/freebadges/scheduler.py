"""Periodic catalog refresh for the FreeBadges integration."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from homeassistant.core import CALLBACK_TYPE, callback
from homeassistant.helpers.event import async_track_time_interval

from . import const
from .flow_helpers import normalize_refresh_minutes

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant


def effective_refresh_minutes(value: Any) -> int:
    """Return the interval actually used for a configured value.

    Invalid or non-positive values fall back to the default, and the result
    never drops below the minimum.
    """
    return max(const.MIN_REFRESH_MINUTES, normalize_refresh_minutes(value))


class RefreshScheduler:
    """Runs a non-forced catalog refresh on a recurring timer.

    At most one timer is armed at any time; schedule() re-arms, cancel() stops.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        refresh: Callable[..., Awaitable[Any]],
    ) -> None:
        """Initialize the scheduler.

        Args:
            hass: Home Assistant core object.
            refresh: Cache synchronizer refresh, called with force=False.

        """
        self.hass = hass
        self._refresh = refresh
        self._unsub: CALLBACK_TYPE | None = None
        self._interval: timedelta | None = None

    @property
    def interval(self) -> timedelta | None:
        """Currently armed interval, None when no timer is armed."""
        return self._interval

    @property
    def is_scheduled(self) -> bool:
        """Return True when a timer is armed."""
        return self._unsub is not None

    @callback
    def schedule(self, interval_minutes: Any) -> timedelta:
        """Cancel any armed timer and arm a new one.

        Returns:
            The effective (clamped) interval.
        """
        self.cancel()
        interval = timedelta(minutes=effective_refresh_minutes(interval_minutes))

        async def _async_tick(_now: datetime) -> None:
            const.LOGGER.debug("DEBUG: Scheduled FreeBadges refresh")
            await self._refresh(force=False)

        self._unsub = async_track_time_interval(
            self.hass,
            _async_tick,
            interval,
            name=f"{const.DOMAIN} catalog refresh",
            cancel_on_shutdown=True,
        )
        self._interval = interval
        const.LOGGER.debug(
            "DEBUG: FreeBadges refresh scheduled every %s (requested %s)",
            interval,
            interval_minutes,
        )
        return interval

    @callback
    def cancel(self) -> None:
        """Stop the timer. Safe to call when nothing is armed."""
        if self._unsub is not None:
            self._unsub()
            self._unsub = None
        self._interval = None
