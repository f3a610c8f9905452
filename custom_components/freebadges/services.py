# File: services.py
"""Defines custom services for the FreeBadges integration.

These services expose the user actions (refresh, login, logout, submit) and
the badge lookup to scripts, automations and the developer tools.
"""

import mimetypes
from pathlib import Path
from typing import Any

import voluptuous as vol
from homeassistant.core import (
    HomeAssistant,
    ServiceCall,
    ServiceResponse,
    SupportsResponse,
)
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers import config_validation as cv

from . import const
from .api import IconFile
from .badge_provider import async_get_profile_badges
from .coordinator import FreeBadgesCoordinator
from .exceptions import FreeBadgesAuthenticationError, FreeBadgesValidationError
from .notification_helper import async_show_toast

# --- Service Schemas ---
REFRESH_SCHEMA = vol.Schema(
    {
        vol.Optional(const.FIELD_FORCE, default=True): cv.boolean,
    }
)

COMPLETE_LOGIN_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_CALLBACK_URL): cv.string,
    }
)

SUBMIT_BADGE_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_NAME): cv.string,
        vol.Required(const.FIELD_ICON_PATH): cv.string,
    }
)

GET_USER_BADGES_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_USER_ID): cv.string,
    }
)

EMPTY_SCHEMA = vol.Schema({})

SERVICES = [
    const.SERVICE_REFRESH,
    const.SERVICE_BEGIN_LOGIN,
    const.SERVICE_COMPLETE_LOGIN,
    const.SERVICE_LOGOUT,
    const.SERVICE_SUBMIT_BADGE,
    const.SERVICE_FETCH_SUBMISSIONS,
    const.SERVICE_GET_USER_BADGES,
]


def _get_coordinator(hass: HomeAssistant) -> FreeBadgesCoordinator:
    """Return the coordinator of the first loaded entry."""
    entries: dict[str, Any] = hass.data.get(const.DOMAIN, {})
    for entry_data in entries.values():
        return entry_data[const.COORDINATOR]
    raise HomeAssistantError(const.ERROR_NO_ENTRY_FOUND)


def _read_icon(path: str) -> IconFile:
    """Read an icon file from disk; runs in the executor."""
    file_path = Path(path)
    try:
        content = file_path.read_bytes()
    except OSError as err:
        raise FreeBadgesValidationError(f"Cannot read icon '{path}': {err}") from err
    content_type, _ = mimetypes.guess_type(file_path.name)
    return IconFile(
        content=content,
        filename=file_path.name or const.DEFAULT_ICON_FILENAME,
        content_type=content_type or "application/octet-stream",
    )


def async_setup_services(hass: HomeAssistant):
    """Register FreeBadges services."""
    if hass.services.has_service(const.DOMAIN, const.SERVICE_REFRESH):
        return

    async def handle_refresh(call: ServiceCall):
        """Handle a catalog refresh; forced by default."""
        coordinator = _get_coordinator(hass)
        force = call.data[const.FIELD_FORCE]
        if await coordinator.async_refresh(force=force) and force:
            async_show_toast(
                hass,
                const.MSG_REFRESH_SUCCEEDED,
                notification_id=const.NOTIFICATION_ID_REFRESH,
            )

    async def handle_begin_login(call: ServiceCall) -> ServiceResponse:
        """Handle starting the Discord login."""
        coordinator = _get_coordinator(hass)
        url = await coordinator.session_manager.async_begin_login()
        return {"url": url}

    async def handle_complete_login(call: ServiceCall):
        """Handle the URL the OAuth provider redirected to."""
        coordinator = _get_coordinator(hass)
        await coordinator.session_manager.async_complete_login(
            call.data[const.FIELD_CALLBACK_URL]
        )

    async def handle_logout(call: ServiceCall):
        """Handle logging out."""
        coordinator = _get_coordinator(hass)
        await coordinator.session_manager.async_logout()

    async def handle_submit_badge(call: ServiceCall):
        """Handle submitting a badge image for review."""
        coordinator = _get_coordinator(hass)
        if coordinator.auth_state is None:
            raise FreeBadgesAuthenticationError(const.ERROR_NOT_AUTHENTICATED)

        icon_path = call.data[const.FIELD_ICON_PATH]
        if not hass.config.is_allowed_path(icon_path):
            const.LOGGER.warning(
                "WARNING: Submit Badge: %s",
                const.ERROR_ICON_NOT_ALLOWED_FMT.format(icon_path),
            )
            raise FreeBadgesValidationError(
                const.ERROR_ICON_NOT_ALLOWED_FMT.format(icon_path)
            )

        icon = await hass.async_add_executor_job(_read_icon, icon_path)
        await coordinator.submission_manager.async_submit(call.data[const.FIELD_NAME], icon)
        async_show_toast(
            hass, const.MSG_BADGE_SUBMITTED, notification_id=const.NOTIFICATION_ID_SUBMIT
        )

    async def handle_fetch_submissions(call: ServiceCall):
        """Handle reloading the user's submissions."""
        coordinator = _get_coordinator(hass)
        await coordinator.submission_manager.async_fetch_mine()

    async def handle_get_user_badges(call: ServiceCall) -> ServiceResponse:
        """Return the profile badges of one user."""
        _get_coordinator(hass)
        badges = async_get_profile_badges(hass, call.data[const.FIELD_USER_ID])
        return {"badges": [badge.as_dict() for badge in badges]}

    hass.services.async_register(
        const.DOMAIN, const.SERVICE_REFRESH, handle_refresh, schema=REFRESH_SCHEMA
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_BEGIN_LOGIN,
        handle_begin_login,
        schema=EMPTY_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_COMPLETE_LOGIN,
        handle_complete_login,
        schema=COMPLETE_LOGIN_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN, const.SERVICE_LOGOUT, handle_logout, schema=EMPTY_SCHEMA
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_SUBMIT_BADGE,
        handle_submit_badge,
        schema=SUBMIT_BADGE_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_FETCH_SUBMISSIONS,
        handle_fetch_submissions,
        schema=EMPTY_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_GET_USER_BADGES,
        handle_get_user_badges,
        schema=GET_USER_BADGES_SCHEMA,
        supports_response=SupportsResponse.ONLY,
    )

    const.LOGGER.debug("DEBUG: FreeBadges services registered")


async def async_unload_services(hass: HomeAssistant):
    """Unregister FreeBadges services when the last entry unloads."""
    for service in SERVICES:
        if hass.services.has_service(const.DOMAIN, service):
            hass.services.async_remove(const.DOMAIN, service)

    const.LOGGER.info("INFO: FreeBadges services have been unregistered")
