"""Tests for FreeBadgesStore persistence."""

# pylint: disable=protected-access

import asyncio
from typing import Any
from unittest.mock import patch

from homeassistant.core import HomeAssistant

from custom_components.freebadges.store import FreeBadgesStore, account_storage_key


def test_account_storage_key() -> None:
    assert account_storage_key("abc") == "freebadges-account.abc"


async def test_set_then_get(hass: HomeAssistant, hass_storage: dict[str, Any]) -> None:
    """Values round-trip through the Home Assistant store."""
    store = FreeBadgesStore(hass)

    await store.async_set("freebadges-test", {"a": 1})

    assert hass_storage["freebadges-test"]["data"] == {"a": 1}
    assert await store.async_get("freebadges-test") == {"a": 1}


async def test_get_missing_key_is_none(hass: HomeAssistant) -> None:
    store = FreeBadgesStore(hass)
    assert await store.async_get("freebadges-missing") is None


async def test_concurrent_updates_do_not_lose_writes(
    hass: HomeAssistant, hass_storage: dict[str, Any]
) -> None:
    """Updates of the same key run one after another under the key lock."""
    store = FreeBadgesStore(hass)
    await store.async_set("freebadges-counter", {"count": 0})

    def _increment(current: Any) -> dict[str, int]:
        return {"count": current["count"] + 1}

    await asyncio.gather(
        *(store.async_update("freebadges-counter", _increment) for _ in range(5))
    )

    assert hass_storage["freebadges-counter"]["data"] == {"count": 5}


async def test_update_of_missing_key_receives_none(hass: HomeAssistant) -> None:
    store = FreeBadgesStore(hass)
    seen = []

    def _mutator(current: Any) -> dict[str, str]:
        seen.append(current)
        return {"created": "yes"}

    result = await store.async_update("freebadges-new", _mutator)

    assert seen == [None]
    assert result == {"created": "yes"}


async def test_save_error_is_logged_not_raised(
    hass: HomeAssistant, caplog
) -> None:
    """A failing write never propagates to the caller."""
    store = FreeBadgesStore(hass)
    inner = store._get_store("freebadges-broken")

    with patch.object(inner, "async_save", side_effect=OSError("disk full")):
        await store.async_set("freebadges-broken", {"a": 1})

    assert "Failed to save 'freebadges-broken'" in caplog.text


async def test_remove_deletes_data(
    hass: HomeAssistant, hass_storage: dict[str, Any]
) -> None:
    store = FreeBadgesStore(hass)
    await store.async_set("freebadges-gone", {"a": 1})

    await store.async_remove("freebadges-gone")

    assert "freebadges-gone" not in hass_storage
    assert await store.async_get("freebadges-gone") is None


async def test_update_skips_write_when_read_fails(
    hass: HomeAssistant, hass_storage: dict[str, Any]
) -> None:
    """A failed read leaves the stored record untouched."""
    store = FreeBadgesStore(hass)
    await store.async_set(
        "freebadges-record", {"auth": "kept", "submissions": ["s1"]}
    )
    inner = store._get_store("freebadges-record")
    mutator_calls = []

    def _mutator(current: Any) -> dict[str, Any]:
        mutator_calls.append(current)
        return {"auth": None, "submissions": []}

    with patch.object(inner, "async_load", side_effect=OSError("unreadable")):
        result = await store.async_update("freebadges-record", _mutator)

    assert result is None
    assert mutator_calls == []
    assert hass_storage["freebadges-record"]["data"] == {
        "auth": "kept",
        "submissions": ["s1"],
    }
