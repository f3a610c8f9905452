"""Shared fixtures for FreeBadges tests."""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.freebadges import const
from custom_components.freebadges.coordinator import FreeBadgesCoordinator

# pylint: disable=invalid-name
pytest_plugins = "pytest_homeassistant_custom_component"
# pylint: enable=invalid-name

BACKEND = "https://badges.example"
APPROVED_URL = f"{BACKEND}{const.API_PATH_APPROVED}"
MINE_URL = f"{BACKEND}{const.API_PATH_MINE}"
SUBMIT_URL = f"{BACKEND}{const.API_PATH_SUBMIT}"
LOGOUT_URL = f"{BACKEND}{const.API_PATH_LOGOUT}"
REDIRECT_URI = f"{BACKEND}/auth/discord/callback"
LOCAL_ACCOUNT = "local-1"
ACCOUNT_KEY = f"{const.STORAGE_KEY_ACCOUNT_PREFIX}.{LOCAL_ACCOUNT}"

USER = {
    const.DATA_USER_ID: "111",
    const.DATA_USER_USERNAME: "alice",
    const.DATA_USER_GLOBAL_NAME: "Alice",
    const.DATA_USER_AVATAR: None,
}
AUTH = {const.DATA_AUTH_TOKEN: "secret-token", const.DATA_AUTH_USER: USER}


def make_badge(badge_id: str, creator_id: str, name: str | None = None) -> dict[str, Any]:
    """Return an approved badge as the backend sends it."""
    return {
        const.DATA_BADGE_ID: badge_id,
        const.DATA_BADGE_NAME: name or f"Badge {badge_id}",
        const.DATA_BADGE_ICON_URL: f"{BACKEND}/icons/{badge_id}.png",
        const.DATA_BADGE_CREATOR_ID: creator_id,
        const.DATA_BADGE_CREATED_AT: "2024-01-01T00:00:00Z",
        const.DATA_BADGE_UPDATED_AT: "2024-01-01T00:00:00Z",
    }


def make_submission(badge_id: str, status: str) -> dict[str, Any]:
    """Return one of the user's submissions as the backend sends it."""
    badge = make_badge(badge_id, USER[const.DATA_USER_ID])
    badge[const.DATA_BADGE_STATUS] = status
    badge[const.DATA_BADGE_REVIEW_REASON] = None
    badge[const.DATA_BADGE_REVIEWER_ID] = None
    return badge


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> Any:
    """Enable custom integrations in tests."""
    # pylint: disable=unused-argument
    yield


@pytest.fixture
def mock_config_entry() -> MockConfigEntry:
    """Return a FreeBadges config entry pointing at the test backend."""
    return MockConfigEntry(
        domain=const.DOMAIN,
        title=const.FREEBADGES_TITLE,
        data={const.CONF_SCHEMA_VERSION: const.SCHEMA_VERSION},
        options={
            const.CONF_BACKEND_URL: BACKEND,
            const.CONF_DISCORD_CLIENT_ID: "client-123",
            const.CONF_OAUTH_REDIRECT_URI: REDIRECT_URI,
            const.CONF_REFRESH_MINUTES: 30,
            const.CONF_LOCAL_ACCOUNT_ID: LOCAL_ACCOUNT,
        },
        unique_id=BACKEND,
    )


@pytest.fixture
async def coordinator(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry
) -> AsyncGenerator[FreeBadgesCoordinator]:
    """Return a live coordinator that has not loaded or refreshed anything.

    Tests drive the managers directly; the scheduler stays unarmed.
    """
    # pylint: disable=protected-access
    mock_config_entry.add_to_hass(hass)
    coord = FreeBadgesCoordinator(hass, mock_config_entry)
    coord._alive = True
    yield coord
    coord.async_dispose()


@pytest.fixture
async def init_integration(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry, aioclient_mock: Any
) -> MockConfigEntry:
    """Set up the integration against a backend serving two badges."""
    aioclient_mock.get(
        APPROVED_URL,
        json={"badges": [make_badge("b1", "owner-1"), make_badge("b2", "owner-2")]},
        headers={"ETag": '"v1"'},
    )
    mock_config_entry.add_to_hass(hass)
    assert await hass.config_entries.async_setup(mock_config_entry.entry_id)
    await hass.async_block_till_done()
    return mock_config_entry
