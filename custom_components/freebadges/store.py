# File: store.py
"""Handles persistent data storage for the FreeBadges integration.

Uses Home Assistant's Storage helper as a key/value store. Every logical key is
its own storage file, so the catalog cache and each local account's record are
written independently and one account's write can never clobber another's.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.storage import Store

from . import const

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant


def account_storage_key(local_id: str) -> str:
    """Return the storage key of one local account's record."""
    return f"{const.STORAGE_KEY_ACCOUNT_PREFIX}.{local_id}"


class FreeBadgesStore:
    """Key/value adapter over Home Assistant's Store API.

    get/set/update semantics; ``async_update`` runs read, transform and write
    under a per-key lock so it is atomic with respect to other updates of the
    same key. Write failures are logged and swallowed so callers can keep
    their in-memory state.
    """

    def __init__(self, hass: HomeAssistant) -> None:
        """Initialize the store.

        Args:
            hass: Home Assistant core object.

        """
        self.hass = hass
        self._stores: dict[str, Store] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def _get_store(self, key: str) -> Store:
        store = self._stores.get(key)
        if store is None:
            store = Store(self.hass, const.STORAGE_VERSION, key)
            self._stores[key] = store
        return store

    def _get_lock(self, key: str) -> asyncio.Lock:
        return self._locks.setdefault(key, asyncio.Lock())

    async def async_get(self, key: str) -> Any:
        """Return the value stored under key, or None when absent."""
        const.LOGGER.debug("DEBUG: FreeBadgesStore: Loading '%s'", key)
        return await self._get_store(key).async_load()

    async def async_set(self, key: str, value: Any) -> None:
        """Persist value under key.

        Raises:
            No exceptions raised - errors are logged but do not stop execution.
        """
        store = self._get_store(key)
        try:
            await store.async_save(value)
            const.LOGGER.debug("DEBUG: Data saved successfully for '%s'", key)
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to save '%s' due to file system error: %s. "
                "Check disk space and file permissions for %s",
                key,
                err,
                store.path,
            )
        except (TypeError, ValueError) as err:
            const.LOGGER.error(
                "ERROR: Failed to save '%s' due to non-serializable data: %s",
                key,
                err,
            )

    async def async_update(self, key: str, mutator: Callable[[Any], Any]) -> Any:
        """Read the current value, transform it and write it back.

        Args:
            key: Storage key to update.
            mutator: Receives the current value (None when absent) and returns
                the value to store.

        Returns:
            The value handed to the store, or None when the current value
            could not be read. Nothing is written in that case so the parts of
            the record the mutator does not touch survive.
        """
        async with self._get_lock(key):
            try:
                current = await self.async_get(key)
            except (HomeAssistantError, OSError, ValueError) as err:
                const.LOGGER.error(
                    "ERROR: Failed to read '%s' before update, skipping write: %s",
                    key,
                    err,
                )
                return None
            value = mutator(current)
            await self.async_set(key, value)
            return value

    async def async_remove(self, key: str) -> None:
        """Delete the storage file of key."""
        try:
            await self._get_store(key).async_remove()
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to remove storage '%s': %s. Check file permissions",
                key,
                err,
            )
