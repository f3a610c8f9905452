"""Profile badge provider for the FreeBadges integration.

Badge-display surfaces ask registered providers for the badges of one user.
FreeBadges answers from its owner index; descriptors are only built when a
user is looked up.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any, Protocol

from homeassistant.core import CALLBACK_TYPE, HomeAssistant, callback

from . import const

if TYPE_CHECKING:
    from .engines import BadgeIndex


@dataclass(frozen=True, slots=True)
class BadgeMenuItem:
    """One context menu entry; value is the text the entry copies."""

    id: str
    label: str
    value: str


@dataclass(frozen=True, slots=True)
class ProfileBadge:
    """Descriptor of one badge shown on a profile."""

    description: str
    icon_src: str
    key: str
    position: str = const.BADGE_POSITION_END

    def context_menu(self) -> list[BadgeMenuItem]:
        """Return the context menu entries for this badge."""
        return [
            BadgeMenuItem(
                id=const.MENU_ITEM_COPY_NAME,
                label=const.LABEL_COPY_NAME,
                value=self.description or self.key or const.BADGE_FALLBACK_DESCRIPTION,
            ),
            BadgeMenuItem(
                id=const.MENU_ITEM_COPY_URL,
                label=const.LABEL_COPY_URL,
                value=self.icon_src or const.CONF_EMPTY,
            ),
        ]

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable view including the context menu."""
        data = asdict(self)
        data["context_menu"] = [asdict(item) for item in self.context_menu()]
        return data


class ProfileBadgeProvider(Protocol):
    """Contract badge-display surfaces rely on."""

    position: str

    def get_badges(self, user_id: str) -> list[ProfileBadge]:
        """Return the badges to show for user_id."""


class FreeBadgesProvider:
    """Provides FreeBadges badges from the owner index."""

    position = const.BADGE_POSITION_END

    def __init__(self, index_getter: Callable[[], BadgeIndex]) -> None:
        """Initialize with a callable returning the live badge index."""
        self._index_getter = index_getter

    def get_badges(self, user_id: str) -> list[ProfileBadge]:
        """Return descriptors for every approved badge created by user_id."""
        return [
            ProfileBadge(
                description=badge.get(const.DATA_BADGE_NAME)
                or const.BADGE_FALLBACK_DESCRIPTION,
                icon_src=badge.get(const.DATA_BADGE_ICON_URL) or const.CONF_EMPTY,
                key=f"{const.BADGE_KEY_PREFIX}{badge[const.DATA_BADGE_ID]}",
                position=self.position,
            )
            for badge in self._index_getter().lookup(user_id)
        ]


@callback
def async_register_badge_provider(
    hass: HomeAssistant, provider: ProfileBadgeProvider
) -> CALLBACK_TYPE:
    """Register provider with the host badge registry.

    Returns:
        Callback removing the provider again; safe to call more than once.
    """
    providers: list[ProfileBadgeProvider] = hass.data.setdefault(
        const.DATA_BADGE_PROVIDERS, []
    )
    providers.append(provider)

    @callback
    def _unregister() -> None:
        if provider in providers:
            providers.remove(provider)

    return _unregister


@callback
def async_get_profile_badges(hass: HomeAssistant, user_id: str) -> list[ProfileBadge]:
    """Collect the badges of user_id from every registered provider."""
    badges: list[ProfileBadge] = []
    for provider in list(hass.data.get(const.DATA_BADGE_PROVIDERS, [])):
        badges.extend(provider.get_badges(user_id))
    return badges
