"""Type definitions for FreeBadges data structures.

Records keep the backend's camelCase wire keys so a cached record is
byte-for-byte what the backend sent. TypedDict is static analysis only; all
runtime shape checks live in the parsing helpers of api.py.

IMPORTANT: This file must NOT import from coordinator.py or any manager to
avoid circular dependencies. Only import from typing.
"""

from typing import Literal, NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

BadgeId = str  # Server assigned badge id
OwnerId = str  # Discord user id of the badge creator
LocalAccountId = str  # Discord user id of the locally active account
EpochMillis = int  # Milliseconds since the Unix epoch

SubmissionStatus = Literal["PENDING", "APPROVED", "REJECTED", "BANNED"]


# =============================================================================
# Catalog
# =============================================================================


class ApprovedBadge(TypedDict):
    """A server-approved badge, identity is ``id``."""

    id: BadgeId
    name: str
    iconUrl: str
    creatorId: OwnerId
    createdAt: str
    updatedAt: str


class CacheRecord(TypedDict):
    """Locally persisted snapshot of the remote catalog.

    ``etag`` is the validator last returned by the backend and is only ever
    used for conditional requests.
    """

    version: int
    etag: NotRequired[str | None]
    updatedAt: EpochMillis
    badges: list[ApprovedBadge]


# =============================================================================
# Submissions
# =============================================================================


class SubmissionBadge(ApprovedBadge):
    """One of the signed-in user's own submissions and its moderation outcome."""

    status: SubmissionStatus
    reviewReason: NotRequired[str | None]
    reviewerId: NotRequired[str | None]


# =============================================================================
# Session
# =============================================================================


class AuthUser(TypedDict):
    """Cached profile of the signed-in user."""

    id: str
    username: str
    globalName: NotRequired[str | None]
    avatar: NotRequired[str | None]


class AuthState(TypedDict):
    """Bearer credential plus cached profile."""

    token: str
    user: AuthUser


class AccountRecord(TypedDict):
    """Per local identity persisted record."""

    auth: AuthState | None
    submissions: list[SubmissionBadge]
