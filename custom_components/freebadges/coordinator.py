# File: coordinator.py
"""Coordinator for the FreeBadges integration.

Explicit state container owned by the config entry. Holds the catalog cache,
the badge index, the session and the submissions of the active local
identity, and wires the managers, scheduler, notifier and badge provider
together with a defined lifecycle (async_initialize / async_dispose).
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from homeassistant.core import CALLBACK_TYPE, HomeAssistant, callback

from . import const
from .api import FreeBadgesApiClient, normalize_base_url
from .badge_provider import FreeBadgesProvider, async_register_badge_provider
from .engines import BadgeIndex
from .managers import CatalogManager, SessionManager, SubmissionManager
from .notifier import ChangeNotifier
from .scheduler import RefreshScheduler
from .store import FreeBadgesStore

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry

    from .type_defs import AuthState, CacheRecord, SubmissionBadge


class FreeBadgesCoordinator:
    """State container for one FreeBadges config entry.

    State is only replaced, never mutated in place, and every change is
    followed by a notification to subscribers.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry,
        store: FreeBadgesStore | None = None,
    ) -> None:
        """Initialize the FreeBadgesCoordinator."""
        self.hass = hass
        self.config_entry = config_entry
        self.store = store or FreeBadgesStore(hass)
        self.api = FreeBadgesApiClient(hass, self.backend_url)
        self.notifier = ChangeNotifier()
        self.badge_index = BadgeIndex()

        self.cache: CacheRecord | None = None
        self.auth_state: AuthState | None = None
        self.submissions: list[SubmissionBadge] = []

        self.catalog_manager = CatalogManager(hass, self)
        self.session_manager = SessionManager(hass, self)
        self.submission_manager = SubmissionManager(hass, self)
        self.scheduler = RefreshScheduler(hass, self.catalog_manager.async_refresh)
        self.badge_provider = FreeBadgesProvider(lambda: self.badge_index)

        self._alive = False
        self._unregister_provider: CALLBACK_TYPE | None = None
        self._loaded_account_id = self.local_account_id

    # -------------------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------------------

    @property
    def backend_url(self) -> str:
        """Backend base URL without trailing slash."""
        return normalize_base_url(self.config_entry.options.get(const.CONF_BACKEND_URL))

    @property
    def client_id(self) -> str | None:
        """Discord OAuth client id."""
        return self.config_entry.options.get(const.CONF_DISCORD_CLIENT_ID)

    @property
    def redirect_uri(self) -> str | None:
        """Discord OAuth redirect URI."""
        return self.config_entry.options.get(const.CONF_OAUTH_REDIRECT_URI)

    @property
    def refresh_minutes(self) -> int:
        """Configured refresh interval in minutes (before clamping)."""
        return self.config_entry.options.get(
            const.CONF_REFRESH_MINUTES, const.DEFAULT_REFRESH_MINUTES
        )

    @property
    def local_account_id(self) -> str | None:
        """Active local identity; scopes session and submission storage."""
        return self.config_entry.options.get(const.CONF_LOCAL_ACCOUNT_ID) or None

    @property
    def requires_reload(self) -> bool:
        """Return True when the backend or local identity changed since setup."""
        return (
            self.api.base_url != self.backend_url
            or self._loaded_account_id != self.local_account_id
        )

    @property
    def alive(self) -> bool:
        """Return True between initialize and dispose."""
        return self._alive

    # -------------------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------------------

    async def async_initialize(self) -> None:
        """Load persisted state, refresh the catalog and start the scheduler."""
        self._alive = True
        await asyncio.gather(
            self.catalog_manager.async_load(),
            self.session_manager.async_load(),
            self.submission_manager.async_load(),
        )
        await self.catalog_manager.async_refresh(force=True)
        if not self._alive:
            return

        self.scheduler.schedule(self.refresh_minutes)
        self._unregister_provider = async_register_badge_provider(
            self.hass, self.badge_provider
        )
        const.LOGGER.info(
            "INFO: FreeBadges ready: %s cached badges, signed %s",
            len(self.cache[const.DATA_CACHE_BADGES]) if self.cache else 0,
            "in" if self.auth_state else "out",
        )
        self.async_notify()

    @callback
    def async_dispose(self) -> None:
        """Stop timers, unregister integrations and drop listeners.

        In-flight requests are not cancelled; their results are ignored.
        """
        self._alive = False
        self.scheduler.cancel()
        if self._unregister_provider is not None:
            self._unregister_provider()
            self._unregister_provider = None
        self.badge_index.clear()
        self.notifier.clear()
        const.LOGGER.debug("DEBUG: FreeBadges coordinator disposed")

    # -------------------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------------------

    @callback
    def async_notify(self) -> None:
        """Notify subscribers of a state change."""
        if self._alive:
            self.notifier.async_notify()

    @callback
    def async_subscribe(self, listener: CALLBACK_TYPE) -> CALLBACK_TYPE:
        """Register a listener for state changes."""
        return self.notifier.async_subscribe(listener)

    @callback
    def async_reschedule(self) -> None:
        """Re-arm the refresh timer after a settings change."""
        if self._alive:
            self.scheduler.schedule(self.refresh_minutes)

    async def async_refresh(self, force: bool = False) -> bool:
        """Refresh the approved badge catalog."""
        return await self.catalog_manager.async_refresh(force=force)
