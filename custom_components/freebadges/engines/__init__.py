"""Engine modules for FreeBadges integration.

Contains pure computation engines:
- badge_index: Owner -> badges index derived from the catalog cache
"""

# Use relative imports within package to avoid mypy module resolution issues
from .badge_index import BadgeIndex

__all__ = [
    "BadgeIndex",
]
