"""Tests for profile badge descriptors and the provider registry."""

# pylint: disable=unused-argument  # Some fixtures needed for setup only

from homeassistant.core import HomeAssistant

from custom_components.freebadges import const
from custom_components.freebadges.badge_provider import (
    FreeBadgesProvider,
    ProfileBadge,
    async_get_profile_badges,
    async_register_badge_provider,
)
from custom_components.freebadges.engines import BadgeIndex
from tests.conftest import APPROVED_URL, BACKEND, make_badge


def _provider(*badges) -> FreeBadgesProvider:
    index = BadgeIndex()
    index.rebuild(
        {
            const.DATA_CACHE_VERSION: const.CACHE_VERSION,
            const.DATA_CACHE_UPDATED_AT: 0,
            const.DATA_CACHE_BADGES: list(badges),
        }
    )
    return FreeBadgesProvider(lambda: index)


def test_descriptors_for_owner() -> None:
    """Each approved badge becomes a descriptor keyed by its id."""
    provider = _provider(make_badge("7", "u1", name="Star"), make_badge("8", "u2"))

    badges = provider.get_badges("u1")

    assert badges == [
        ProfileBadge(
            description="Star",
            icon_src=f"{BACKEND}/icons/7.png",
            key="freebadge-7",
            position="end",
        )
    ]
    assert provider.get_badges("unknown") == []


def test_context_menu_items() -> None:
    badge = ProfileBadge(description="Star", icon_src="https://x/7.png", key="freebadge-7")

    items = {item.id: item for item in badge.context_menu()}

    assert items[const.MENU_ITEM_COPY_NAME].label == "Copy badge name"
    assert items[const.MENU_ITEM_COPY_NAME].value == "Star"
    assert items[const.MENU_ITEM_COPY_URL].label == "Copy badge image link"
    assert items[const.MENU_ITEM_COPY_URL].value == "https://x/7.png"


def test_as_dict_includes_menu() -> None:
    data = ProfileBadge(description="Star", icon_src="u", key="k").as_dict()

    assert data["key"] == "k"
    assert [item["id"] for item in data["context_menu"]] == [
        const.MENU_ITEM_COPY_NAME,
        const.MENU_ITEM_COPY_URL,
    ]


async def test_registry_aggregates_and_unregisters(hass: HomeAssistant) -> None:
    """Registered providers answer lookups until they are removed."""
    first = _provider(make_badge("1", "u1"))
    second = _provider(make_badge("2", "u1"))
    unregister_first = async_register_badge_provider(hass, first)
    unregister_second = async_register_badge_provider(hass, second)

    keys = [b.key for b in async_get_profile_badges(hass, "u1")]
    assert keys == ["freebadge-1", "freebadge-2"]

    unregister_first()
    unregister_first()
    assert [b.key for b in async_get_profile_badges(hass, "u1")] == ["freebadge-2"]

    unregister_second()
    assert async_get_profile_badges(hass, "u1") == []


async def test_badge_without_name_or_icon_uses_fallbacks(
    hass: HomeAssistant, aioclient_mock, coordinator
) -> None:
    """A catalog entry missing name or iconUrl still yields a descriptor."""
    aioclient_mock.get(
        APPROVED_URL,
        json={
            "badges": [
                {"id": "b1", "creatorId": "u1", "iconUrl": "x"},
                {"id": "b2", "creatorId": "u1", "name": "Named"},
            ]
        },
    )

    assert await coordinator.async_refresh(force=True) is True

    badges = coordinator.badge_provider.get_badges("u1")
    assert [(b.key, b.description, b.icon_src) for b in badges] == [
        ("freebadge-b1", const.BADGE_FALLBACK_DESCRIPTION, "x"),
        ("freebadge-b2", "Named", ""),
    ]
