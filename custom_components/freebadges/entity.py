"""Base entity classes for FreeBadges integration."""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import callback
from homeassistant.helpers.device_registry import DeviceEntryType, DeviceInfo
from homeassistant.helpers.entity import Entity

from . import const
from .coordinator import FreeBadgesCoordinator


class FreeBadgesEntity(Entity):
    """Base entity for FreeBadges sensors.

    Plays the role CoordinatorEntity plays for polling coordinators: it
    subscribes to the coordinator's change notifier while added to hass and
    writes its state on every notification.
    """

    _attr_has_entity_name = True
    _attr_should_poll = False

    def __init__(
        self, coordinator: FreeBadgesCoordinator, entry: ConfigEntry, uid_suffix: str
    ) -> None:
        """Initialize the entity.

        Args:
            coordinator: FreeBadgesCoordinator owning the state shown.
            entry: ConfigEntry for this integration instance.
            uid_suffix: Suffix making the unique id distinct per sensor.
        """
        self.coordinator = coordinator
        self._entry = entry
        self._attr_unique_id = f"{entry.entry_id}{uid_suffix}"
        self._attr_device_info = DeviceInfo(
            identifiers={(const.DOMAIN, entry.entry_id)},
            name=entry.title,
            manufacturer=const.FREEBADGES_TITLE,
            entry_type=DeviceEntryType.SERVICE,
            configuration_url=coordinator.backend_url or None,
        )

    async def async_added_to_hass(self) -> None:
        """Subscribe to coordinator changes."""
        await super().async_added_to_hass()
        self.async_on_remove(
            self.coordinator.async_subscribe(self._handle_coordinator_update)
        )

    @callback
    def _handle_coordinator_update(self) -> None:
        """Write the new state after a coordinator change."""
        self.async_write_ha_state()
