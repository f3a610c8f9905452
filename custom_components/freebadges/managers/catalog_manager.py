# File: catalog_manager.py
"""Catalog Manager for FreeBadges integration.

Keeps the locally cached copy of the approved badge catalog in sync with the
backend using conditional requests:
- A known ETag is sent as If-None-Match unless the refresh is forced
- 304 Not Modified is a successful no-op (no rebuild, no write, no notify)
- 200 replaces the whole CacheRecord, rebuilds the index, persists, notifies

Refreshes are single-flight: a call made while one is running joins it.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, cast

from homeassistant.exceptions import HomeAssistantError
from homeassistant.util import dt as dt_util

from .. import const
from ..api import parse_badge_list
from ..exceptions import FreeBadgesError
from ..notification_helper import async_show_toast
from .base_manager import BaseManager

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from ..coordinator import FreeBadgesCoordinator
    from ..type_defs import CacheRecord


def is_valid_cache_record(stored: Any) -> bool:
    """Return True when a stored value can be trusted as the current cache."""
    return (
        isinstance(stored, dict)
        and stored.get(const.DATA_CACHE_VERSION) == const.CACHE_VERSION
        and isinstance(stored.get(const.DATA_CACHE_BADGES), list)
    )


class CatalogManager(BaseManager):
    """Cache synchronizer for the approved badge catalog."""

    def __init__(self, hass: HomeAssistant, coordinator: FreeBadgesCoordinator) -> None:
        """Initialize the catalog manager."""
        super().__init__(hass, coordinator)
        self._refresh_task: asyncio.Task[bool] | None = None

    @property
    def is_refreshing(self) -> bool:
        """Return True while a refresh request is in flight."""
        task = self._refresh_task
        return task is not None and not task.done()

    async def async_load(self) -> None:
        """Restore the cached catalog and rebuild the index from it."""
        try:
            stored = await self.store.async_get(const.STORAGE_KEY_CACHE)
        except (HomeAssistantError, OSError, ValueError) as err:
            const.LOGGER.error("ERROR: Failed to load badge cache: %s", err)
            return

        if stored is None:
            const.LOGGER.debug("DEBUG: No cached badge catalog found")
            return
        if not is_valid_cache_record(stored):
            const.LOGGER.warning(
                "WARNING: Ignoring cached badge catalog with unexpected shape or version"
            )
            return

        badges = parse_badge_list(stored, const.STORAGE_KEY_CACHE)
        if len(badges) != len(stored[const.DATA_CACHE_BADGES]):
            const.LOGGER.warning(
                "WARNING: Dropped %s malformed badges from the cached catalog",
                len(stored[const.DATA_CACHE_BADGES]) - len(badges),
            )
        cache = cast("CacheRecord", {**stored, const.DATA_CACHE_BADGES: badges})
        self.coordinator.cache = cache
        self.coordinator.badge_index.rebuild(cache)
        const.LOGGER.debug("DEBUG: Loaded %s cached badges", len(badges))

    async def async_refresh(self, force: bool = False) -> bool:
        """Fetch the catalog, joining a refresh that is already running.

        Args:
            force: Skip the conditional If-None-Match header.

        Returns:
            True when the cache is current (updated or not modified), False on
            failure. Never raises for backend or configuration problems.
        """
        task = self._refresh_task
        if task is not None and self.is_refreshing:
            const.LOGGER.debug("DEBUG: Joining in-flight badge refresh")
        else:
            task = self.hass.async_create_task(
                self._async_refresh(force), f"{const.DOMAIN} catalog refresh"
            )
            self._refresh_task = task
        return await asyncio.shield(task)

    async def _async_refresh(self, force: bool) -> bool:
        cache = self.coordinator.cache
        etag = None if force or not cache else cache.get(const.DATA_CACHE_ETAG)

        try:
            result = await self.api.async_get_approved(etag)
        except FreeBadgesError as err:
            const.LOGGER.error("ERROR: Failed to refresh badges: %s", err)
            if self.coordinator.alive:
                async_show_toast(
                    self.hass,
                    const.MSG_REFRESH_FAILED,
                    notification_id=const.NOTIFICATION_ID_REFRESH,
                    success=False,
                )
            return False

        if not self.coordinator.alive:
            const.LOGGER.debug("DEBUG: Discarding badge refresh result after dispose")
            return False

        if result.not_modified:
            const.LOGGER.debug("DEBUG: Badge catalog not modified (etag %s)", etag)
            return True

        new_cache = cast(
            "CacheRecord",
            {
                const.DATA_CACHE_VERSION: const.CACHE_VERSION,
                const.DATA_CACHE_ETAG: result.etag,
                const.DATA_CACHE_UPDATED_AT: int(dt_util.utcnow().timestamp() * 1000),
                const.DATA_CACHE_BADGES: result.badges,
            },
        )
        self.coordinator.cache = new_cache
        self.coordinator.badge_index.rebuild(new_cache)
        await self.store.async_set(const.STORAGE_KEY_CACHE, new_cache)
        const.LOGGER.info(
            "INFO: Badge catalog refreshed: %s badges from %s owners",
            len(result.badges),
            len(self.coordinator.badge_index),
        )
        self.notify()
        return True
