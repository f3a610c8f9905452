# File: flow_helpers.py
"""Helpers for the FreeBadges config and options flows.

Schema builders, validation and options building shared by both flows so the
initial setup and later edits accept exactly the same settings.
"""

from __future__ import annotations

from typing import Any

import voluptuous as vol
from homeassistant.helpers import selector
from yarl import URL

from . import const
from .api import normalize_base_url


def normalize_refresh_minutes(value: Any) -> int:
    """Return value as minutes, resetting invalid or non-positive values to the default."""
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        return const.DEFAULT_REFRESH_MINUTES
    if minutes <= 0:
        return const.DEFAULT_REFRESH_MINUTES
    return minutes


def build_settings_schema(defaults: dict[str, Any] | None = None) -> vol.Schema:
    """Build the form schema for all FreeBadges settings.

    Args:
        defaults: Current option values used to prefill the form.

    Returns:
        vol.Schema with backend, OAuth, refresh and local account fields
    """
    defaults = defaults or {}
    return vol.Schema(
        {
            vol.Required(
                const.CONF_BACKEND_URL,
                default=defaults.get(const.CONF_BACKEND_URL, const.DEFAULT_BACKEND_URL),
            ): selector.TextSelector(
                selector.TextSelectorConfig(type=selector.TextSelectorType.URL)
            ),
            vol.Optional(
                const.CONF_DISCORD_CLIENT_ID,
                default=defaults.get(
                    const.CONF_DISCORD_CLIENT_ID, const.DEFAULT_DISCORD_CLIENT_ID
                ),
            ): str,
            vol.Optional(
                const.CONF_OAUTH_REDIRECT_URI,
                default=defaults.get(
                    const.CONF_OAUTH_REDIRECT_URI, const.DEFAULT_OAUTH_REDIRECT_URI
                ),
            ): str,
            vol.Required(
                const.CONF_REFRESH_MINUTES,
                default=defaults.get(
                    const.CONF_REFRESH_MINUTES, const.DEFAULT_REFRESH_MINUTES
                ),
            ): vol.Coerce(int),
            vol.Optional(
                const.CONF_LOCAL_ACCOUNT_ID,
                default=defaults.get(const.CONF_LOCAL_ACCOUNT_ID, const.CONF_EMPTY),
            ): str,
        }
    )


def validate_settings_inputs(user_input: dict[str, Any]) -> dict[str, str]:
    """Validate settings form input.

    Only the backend URL can make the form fail; OAuth fields may be left
    empty and are checked when a login starts.

    Returns:
        dict: Errors dictionary (empty if valid)
    """
    errors: dict[str, str] = {}
    backend_url = normalize_base_url(user_input.get(const.CONF_BACKEND_URL))
    try:
        parsed = URL(backend_url)
    except (TypeError, ValueError):
        parsed = None
    if (
        not backend_url
        or parsed is None
        or parsed.scheme not in ("http", "https")
        or not parsed.host
    ):
        errors[const.CFOP_ERROR_BACKEND_URL] = const.TRANS_KEY_CFOF_INVALID_BACKEND_URL
    return errors


def build_settings_data(user_input: dict[str, Any]) -> dict[str, Any]:
    """Build the options dictionary from validated input.

    Strips blanks, drops the trailing slash of the backend URL and resets an
    invalid refresh interval to the default.
    """
    return {
        const.CONF_BACKEND_URL: normalize_base_url(
            user_input.get(const.CONF_BACKEND_URL)
        ),
        const.CONF_DISCORD_CLIENT_ID: (
            user_input.get(const.CONF_DISCORD_CLIENT_ID) or const.CONF_EMPTY
        ).strip(),
        const.CONF_OAUTH_REDIRECT_URI: (
            user_input.get(const.CONF_OAUTH_REDIRECT_URI) or const.CONF_EMPTY
        ).strip(),
        const.CONF_REFRESH_MINUTES: normalize_refresh_minutes(
            user_input.get(const.CONF_REFRESH_MINUTES)
        ),
        const.CONF_LOCAL_ACCOUNT_ID: (
            user_input.get(const.CONF_LOCAL_ACCOUNT_ID) or const.CONF_EMPTY
        ).strip(),
    }
