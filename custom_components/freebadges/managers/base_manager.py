"""Base manager class for FreeBadges managers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from homeassistant.core import callback

from .. import const
from ..store import account_storage_key

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from ..api import FreeBadgesApiClient
    from ..coordinator import FreeBadgesCoordinator
    from ..store import FreeBadgesStore


class BaseManager(ABC):
    """Base class for all FreeBadges managers.

    Managers own one slice of the coordinator's state and follow the same
    write order: replace in memory, persist, then notify.

    Provides:
    - Shared access to the API client and the persistent store
    - Account-scoped storage key of the active local identity
    - notify(), which is a no-op once the coordinator is disposed

    Subclasses must implement:
    - async_load(): Restore their slice from persistent storage
    """

    def __init__(self, hass: HomeAssistant, coordinator: FreeBadgesCoordinator) -> None:
        """Initialize manager.

        Args:
            hass: Home Assistant instance
            coordinator: State container owning this manager
        """
        self.hass = hass
        self.coordinator = coordinator

    @property
    def api(self) -> FreeBadgesApiClient:
        """Backend client of the coordinator."""
        return self.coordinator.api

    @property
    def store(self) -> FreeBadgesStore:
        """Persistent store of the coordinator."""
        return self.coordinator.store

    @property
    def account_key(self) -> str | None:
        """Storage key of the active local identity, None when unknown."""
        local_id = self.coordinator.local_account_id
        if not local_id:
            return None
        return account_storage_key(local_id)

    @callback
    def notify(self) -> None:
        """Tell subscribers that coordinator state changed."""
        if not self.coordinator.alive:
            const.LOGGER.debug(
                "DEBUG: %s skipped notify after dispose", self.__class__.__name__
            )
            return
        self.coordinator.async_notify()

    @abstractmethod
    async def async_load(self) -> None:
        """Restore this manager's state from persistent storage.

        Called once during coordinator initialization.
        """
