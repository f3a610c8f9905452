"""Diagnostics support for FreeBadges integration.

Exports the entry options, cache metadata, session and submissions with the
session token redacted.
"""

from typing import Any

from homeassistant.components.diagnostics import async_redact_data
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from . import const
from .coordinator import FreeBadgesCoordinator

TO_REDACT = {const.DATA_AUTH_TOKEN}


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    coordinator: FreeBadgesCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]
    cache = coordinator.cache

    return {
        "options": dict(entry.options),
        "cache": {
            const.DATA_CACHE_VERSION: cache[const.DATA_CACHE_VERSION] if cache else None,
            const.DATA_CACHE_ETAG: cache.get(const.DATA_CACHE_ETAG) if cache else None,
            const.DATA_CACHE_UPDATED_AT: (
                cache[const.DATA_CACHE_UPDATED_AT] if cache else None
            ),
            "badge_count": len(cache[const.DATA_CACHE_BADGES]) if cache else 0,
            "owner_count": len(coordinator.badge_index),
        },
        "refresh_interval": (
            str(coordinator.scheduler.interval) if coordinator.scheduler.interval else None
        ),
        "auth": async_redact_data(coordinator.auth_state or {}, TO_REDACT),
        "submissions": coordinator.submissions,
    }
