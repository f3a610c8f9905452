# File: sensor.py
"""Sensors for the FreeBadges integration.

Sensors Defined in This File (3):
01. CatalogSensor: number of approved badges in the local cache
02. SubmissionsSensor: number of the user's own submissions
03. AccountSensor: signed-in user or signed_out
"""

from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import SensorEntity, SensorStateClass
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.util import dt as dt_util

from . import const
from .coordinator import FreeBadgesCoordinator
from .entity import FreeBadgesEntity
from .managers.session_manager import display_name


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
):
    """Set up sensors for FreeBadges integration."""
    coordinator: FreeBadgesCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]
    async_add_entities(
        [
            CatalogSensor(coordinator, entry),
            SubmissionsSensor(coordinator, entry),
            AccountSensor(coordinator, entry),
        ]
    )


class CatalogSensor(FreeBadgesEntity, SensorEntity):
    """Number of approved badges in the cached catalog."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_CATALOG
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:shield-star-outline"

    def __init__(self, coordinator: FreeBadgesCoordinator, entry: ConfigEntry):
        """Initialize the CatalogSensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_CATALOG)

    @property
    def native_value(self) -> int:
        """Return the number of cached badges."""
        cache = self.coordinator.cache
        return len(cache[const.DATA_CACHE_BADGES]) if cache else 0

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return sync metadata of the cache."""
        cache = self.coordinator.cache
        last_synced = None
        if cache:
            last_synced = dt_util.utc_from_timestamp(
                cache[const.DATA_CACHE_UPDATED_AT] / 1000
            ).isoformat()
        return {
            const.ATTR_LAST_SYNCED: last_synced,
            const.ATTR_ETAG: cache.get(const.DATA_CACHE_ETAG) if cache else None,
            const.ATTR_OWNER_COUNT: len(self.coordinator.badge_index),
            const.ATTR_BACKEND_URL: self.coordinator.backend_url,
        }


class SubmissionsSensor(FreeBadgesEntity, SensorEntity):
    """Number of badges the signed-in user submitted."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_SUBMISSIONS
    _attr_icon = "mdi:upload-outline"

    def __init__(self, coordinator: FreeBadgesCoordinator, entry: ConfigEntry):
        """Initialize the SubmissionsSensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_SUBMISSIONS)

    @property
    def native_value(self) -> int:
        return len(self.coordinator.submissions)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        return {
            const.ATTR_PENDING_COUNT: len(
                self.coordinator.submission_manager.pending
            ),
            const.ATTR_SUBMISSIONS: [
                {
                    const.DATA_BADGE_ID: sub.get(const.DATA_BADGE_ID),
                    const.DATA_BADGE_NAME: sub.get(const.DATA_BADGE_NAME),
                    const.DATA_BADGE_STATUS: sub.get(const.DATA_BADGE_STATUS),
                    const.DATA_BADGE_REVIEW_REASON: sub.get(
                        const.DATA_BADGE_REVIEW_REASON
                    ),
                }
                for sub in self.coordinator.submissions
            ],
        }


class AccountSensor(FreeBadgesEntity, SensorEntity):
    """Display name of the signed-in Discord user."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_ACCOUNT
    _attr_icon = "mdi:account-circle-outline"

    def __init__(self, coordinator: FreeBadgesCoordinator, entry: ConfigEntry):
        """Initialize the AccountSensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_ACCOUNT)

    @property
    def native_value(self) -> str:
        """Return the user's display name, or signed_out."""
        auth = self.coordinator.auth_state
        if auth is None:
            return const.STATE_SIGNED_OUT
        return display_name(auth)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the user's public profile fields; the token is never exposed."""
        auth = self.coordinator.auth_state
        if auth is None:
            return {}
        user = auth[const.DATA_AUTH_USER]
        return {
            const.ATTR_USER_ID: user.get(const.DATA_USER_ID),
            const.ATTR_GLOBAL_NAME: user.get(const.DATA_USER_GLOBAL_NAME),
            const.ATTR_AVATAR: user.get(const.DATA_USER_AVATAR),
        }
