# File: __init__.py
"""Initialization file for the FreeBadges integration.

Handles setting up the integration from a config entry, creating the
coordinator that owns the badge cache and session, and tearing it down again.

Key Features:
- Config entry setup, unload and removal.
- Reload on backend or identity change, reschedule on interval change.
- Service registration shared by all entries.
"""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from . import const
from .coordinator import FreeBadgesCoordinator
from .flow_helpers import normalize_refresh_minutes
from .services import async_setup_services, async_unload_services
from .store import FreeBadgesStore, account_storage_key


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up the integration from a config entry."""
    const.LOGGER.info("INFO: Starting setup for FreeBadges entry: %s", entry.entry_id)

    coordinator = FreeBadgesCoordinator(hass, entry)
    await coordinator.async_initialize()

    hass.data.setdefault(const.DOMAIN, {})[entry.entry_id] = {
        const.COORDINATOR: coordinator,
    }

    async_setup_services(hass)

    await hass.config_entries.async_forward_entry_setups(entry, const.PLATFORMS)

    entry.async_on_unload(entry.add_update_listener(_async_update_listener))

    const.LOGGER.info("INFO: FreeBadges setup complete for entry: %s", entry.entry_id)
    return True


async def _async_update_listener(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Apply changed options.

    A new backend or local identity invalidates every piece of loaded state,
    so the entry is reloaded; anything else only needs the timer re-armed.
    """
    coordinator: FreeBadgesCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]
    if coordinator.requires_reload:
        const.LOGGER.info("INFO: FreeBadges backend or account changed, reloading")
        await hass.config_entries.async_reload(entry.entry_id)
        return

    minutes = entry.options.get(const.CONF_REFRESH_MINUTES)
    normalized = normalize_refresh_minutes(minutes)
    if minutes != normalized:
        const.LOGGER.warning(
            "WARNING: Invalid refresh interval %s, using %s minutes", minutes, normalized
        )
        hass.config_entries.async_update_entry(
            entry, options={**entry.options, const.CONF_REFRESH_MINUTES: normalized}
        )
        return

    coordinator.async_reschedule()
    coordinator.async_notify()


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    const.LOGGER.info("INFO: Unloading FreeBadges entry: %s", entry.entry_id)

    unload_ok = await hass.config_entries.async_unload_platforms(entry, const.PLATFORMS)

    if unload_ok:
        entry_data = hass.data[const.DOMAIN].pop(entry.entry_id)
        entry_data[const.COORDINATOR].async_dispose()

        if not hass.data[const.DOMAIN]:
            await async_unload_services(hass)

    return unload_ok


async def async_remove_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle removal of a config entry by deleting its stored state."""
    const.LOGGER.info("INFO: Removing FreeBadges entry: %s", entry.entry_id)

    store = FreeBadgesStore(hass)
    await store.async_remove(const.STORAGE_KEY_CACHE)
    local_id = entry.options.get(const.CONF_LOCAL_ACCOUNT_ID)
    if local_id:
        await store.async_remove(account_storage_key(local_id))

    const.LOGGER.info("INFO: FreeBadges entry data cleared: %s", entry.entry_id)
