"""Exceptions raised by the FreeBadges integration.

All errors derive from HomeAssistantError so a failing service call is shown
to the user by Home Assistant itself.
"""

from __future__ import annotations

from homeassistant.exceptions import HomeAssistantError


class FreeBadgesError(HomeAssistantError):
    """Base error for FreeBadges operations."""


class FreeBadgesConfigurationError(FreeBadgesError):
    """Backend URL or OAuth settings are missing."""


class FreeBadgesAuthenticationError(FreeBadgesError):
    """An operation needs a signed-in session and there is none."""


class FreeBadgesValidationError(FreeBadgesError):
    """User input was rejected before any network call."""


class FreeBadgesNetworkError(FreeBadgesError):
    """The backend could not be reached."""


class FreeBadgesServerError(FreeBadgesError):
    """The backend answered with a non-success status or a malformed body."""

    def __init__(self, message: str, status: int | None = None) -> None:
        """Initialize with the best available message and HTTP status."""
        super().__init__(message)
        self.status = status
