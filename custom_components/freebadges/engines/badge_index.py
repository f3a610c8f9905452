"""Badge Index - Pure lookup of approved badges by owner.

The index is derived from a CacheRecord and never persisted. It is always
rebuilt in full from the latest cache; per-owner lists keep the order the
badges appear in the cache.

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
State ownership belongs in FreeBadgesCoordinator.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const

if TYPE_CHECKING:
    from ..type_defs import ApprovedBadge, CacheRecord, OwnerId


class BadgeIndex:
    """Mapping of creatorId to the approved badges that owner created."""

    def __init__(self) -> None:
        """Initialize an empty index."""
        self._by_owner: dict[OwnerId, list[ApprovedBadge]] = {}

    def rebuild(self, cache: CacheRecord | None) -> None:
        """Replace the whole index with one built from cache.

        An absent cache or an empty badge list produces an empty index.
        """
        by_owner: dict[OwnerId, list[ApprovedBadge]] = {}
        if cache:
            for badge in cache.get(const.DATA_CACHE_BADGES) or []:
                by_owner.setdefault(badge[const.DATA_BADGE_CREATOR_ID], []).append(
                    badge
                )
        self._by_owner = by_owner

    def lookup(self, owner_id: OwnerId | None) -> list[ApprovedBadge]:
        """Return the badges created by owner_id, or an empty list."""
        if not owner_id:
            return []
        return list(self._by_owner.get(owner_id, ()))

    def clear(self) -> None:
        """Drop every entry."""
        self._by_owner = {}

    @property
    def owners(self) -> list[OwnerId]:
        """Owners with at least one approved badge, in first-seen order."""
        return list(self._by_owner)

    def __len__(self) -> int:
        return len(self._by_owner)

    def __contains__(self, owner_id: object) -> bool:
        return owner_id in self._by_owner
