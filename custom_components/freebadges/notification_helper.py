# File: notification_helper.py
"""Shows short user-visible messages for the FreeBadges integration.

Background operations (scheduled refreshes, login completion) have no caller
to raise to, so outcomes are surfaced as Home Assistant persistent
notifications. Reusing a notification id replaces the previous message.
"""

from __future__ import annotations

from homeassistant.components import persistent_notification
from homeassistant.core import HomeAssistant, callback

from . import const


@callback
def async_show_toast(
    hass: HomeAssistant,
    message: str,
    *,
    notification_id: str,
    success: bool = True,
) -> None:
    """Show message as a persistent notification titled after the integration."""
    title = const.FREEBADGES_TITLE if success else const.TITLE_FAILURE
    const.LOGGER.debug("DEBUG: Toast '%s' (%s): %s", notification_id, title, message)
    persistent_notification.async_create(
        hass,
        message,
        title=title,
        notification_id=notification_id,
    )

