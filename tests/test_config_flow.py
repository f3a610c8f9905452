"""Tests for the FreeBadges config and options flows."""

# pylint: disable=redefined-outer-name

from typing import Any
from unittest.mock import patch

from homeassistant import config_entries
from homeassistant.core import HomeAssistant
from homeassistant.data_entry_flow import FlowResultType
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.freebadges import const
from custom_components.freebadges.flow_helpers import (
    build_settings_data,
    normalize_refresh_minutes,
)

SETUP_ENTRY = "custom_components.freebadges.async_setup_entry"

USER_INPUT = {
    const.CONF_BACKEND_URL: "https://badges.example/ ",
    const.CONF_DISCORD_CLIENT_ID: " client-123 ",
    const.CONF_OAUTH_REDIRECT_URI: "https://badges.example/auth/discord/callback",
    const.CONF_REFRESH_MINUTES: 15,
    const.CONF_LOCAL_ACCOUNT_ID: "local-1",
}


async def test_user_step_creates_entry(hass: HomeAssistant) -> None:
    """Settings are normalized and stored in options."""
    result = await hass.config_entries.flow.async_init(
        const.DOMAIN, context={"source": config_entries.SOURCE_USER}
    )
    assert result["type"] == FlowResultType.FORM
    assert result["step_id"] == const.CONFIG_FLOW_STEP_USER

    with patch(SETUP_ENTRY, return_value=True):
        result = await hass.config_entries.flow.async_configure(
            result["flow_id"], user_input=USER_INPUT
        )
        await hass.async_block_till_done()

    assert result["type"] == FlowResultType.CREATE_ENTRY
    assert result["title"] == const.FREEBADGES_TITLE
    assert result["data"] == {const.CONF_SCHEMA_VERSION: const.SCHEMA_VERSION}
    entry = hass.config_entries.async_entries(const.DOMAIN)[0]
    assert entry.unique_id == "https://badges.example"
    assert entry.options[const.CONF_BACKEND_URL] == "https://badges.example"
    assert entry.options[const.CONF_DISCORD_CLIENT_ID] == "client-123"
    assert entry.options[const.CONF_REFRESH_MINUTES] == 15


async def test_user_step_rejects_non_http_backend(hass: HomeAssistant) -> None:
    result = await hass.config_entries.flow.async_init(
        const.DOMAIN, context={"source": config_entries.SOURCE_USER}
    )

    result = await hass.config_entries.flow.async_configure(
        result["flow_id"],
        user_input={**USER_INPUT, const.CONF_BACKEND_URL: "ftp://badges.example"},
    )

    assert result["type"] == FlowResultType.FORM
    assert result["errors"] == {
        const.CFOP_ERROR_BACKEND_URL: const.TRANS_KEY_CFOF_INVALID_BACKEND_URL
    }


async def test_same_backend_aborts(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry
) -> None:
    mock_config_entry.add_to_hass(hass)
    result = await hass.config_entries.flow.async_init(
        const.DOMAIN, context={"source": config_entries.SOURCE_USER}
    )

    result = await hass.config_entries.flow.async_configure(
        result["flow_id"], user_input=USER_INPUT
    )

    assert result["type"] == FlowResultType.ABORT
    assert result["reason"] == const.TRANS_KEY_CFOF_ALREADY_CONFIGURED


async def test_options_flow_updates_settings(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry
) -> None:
    """The options flow stores edited settings and resets a bad interval."""
    mock_config_entry.add_to_hass(hass)

    result = await hass.config_entries.options.async_init(mock_config_entry.entry_id)
    assert result["type"] == FlowResultType.FORM
    assert result["step_id"] == const.OPTIONS_FLOW_STEP_INIT

    result = await hass.config_entries.options.async_configure(
        result["flow_id"],
        user_input={
            **mock_config_entry.options,
            const.CONF_REFRESH_MINUTES: -3,
            const.CONF_LOCAL_ACCOUNT_ID: "local-1",
        },
    )

    assert result["type"] == FlowResultType.CREATE_ENTRY
    assert mock_config_entry.options[const.CONF_REFRESH_MINUTES] == 30


def test_build_settings_data_defaults_blank_fields() -> None:
    data: dict[str, Any] = build_settings_data(
        {const.CONF_BACKEND_URL: "https://b.example/", const.CONF_REFRESH_MINUTES: "x"}
    )

    assert data == {
        const.CONF_BACKEND_URL: "https://b.example",
        const.CONF_DISCORD_CLIENT_ID: "",
        const.CONF_OAUTH_REDIRECT_URI: "",
        const.CONF_REFRESH_MINUTES: 30,
        const.CONF_LOCAL_ACCOUNT_ID: "",
    }
    assert normalize_refresh_minutes(12) == 12
