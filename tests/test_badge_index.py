"""Tests for the badge owner index.

The index is pure logic, so these tests need no Home Assistant instance.
"""

from custom_components.freebadges import const
from custom_components.freebadges.engines import BadgeIndex
from tests.conftest import make_badge


def _cache(*badges):
    return {
        const.DATA_CACHE_VERSION: const.CACHE_VERSION,
        const.DATA_CACHE_ETAG: '"v1"',
        const.DATA_CACHE_UPDATED_AT: 0,
        const.DATA_CACHE_BADGES: list(badges),
    }


class TestBadgeIndex:
    """BadgeIndex rebuild and lookup behavior."""

    def test_lookup_returns_owner_badges_in_cache_order(self) -> None:
        """Badges of one owner keep the order they have in the cache."""
        first = make_badge("1", "u1")
        other = make_badge("2", "u2")
        second = make_badge("3", "u1")
        index = BadgeIndex()
        index.rebuild(_cache(first, other, second))

        assert index.lookup("u1") == [first, second]
        assert index.lookup("u2") == [other]
        assert index.owners == ["u1", "u2"]
        assert len(index) == 2
        assert "u1" in index

    def test_unknown_or_empty_owner_is_empty(self) -> None:
        """Lookups never raise and return an empty list for unknown owners."""
        index = BadgeIndex()
        index.rebuild(_cache(make_badge("1", "u1")))

        assert index.lookup("nobody") == []
        assert index.lookup("") == []
        assert index.lookup(None) == []

    def test_rebuild_replaces_previous_contents(self) -> None:
        """A rebuild drops owners that are no longer in the cache."""
        index = BadgeIndex()
        index.rebuild(_cache(make_badge("1", "u1")))
        index.rebuild(_cache(make_badge("2", "u2")))

        assert index.lookup("u1") == []
        assert [b[const.DATA_BADGE_ID] for b in index.lookup("u2")] == ["2"]

    def test_rebuild_from_nothing_is_empty(self) -> None:
        index = BadgeIndex()
        index.rebuild(_cache(make_badge("1", "u1")))
        index.rebuild(None)
        assert len(index) == 0

        index.rebuild(_cache())
        assert index.owners == []

    def test_lookup_returns_a_copy(self) -> None:
        """Mutating a lookup result does not change the index."""
        index = BadgeIndex()
        index.rebuild(_cache(make_badge("1", "u1")))

        index.lookup("u1").clear()

        assert len(index.lookup("u1")) == 1
