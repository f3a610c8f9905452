# File: submission_manager.py
"""Submission Manager for FreeBadges integration.

Tracks the signed-in user's own badge submissions and their moderation
status. The list is always replaced wholesale by a fetch of /badges/mine;
submitting a badge never appends locally, it refetches so server-assigned
ids and statuses are shown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.exceptions import HomeAssistantError

from .. import const
from ..exceptions import (
    FreeBadgesAuthenticationError,
    FreeBadgesError,
    FreeBadgesValidationError,
)
from .base_manager import BaseManager
from .session_manager import empty_account_record

if TYPE_CHECKING:
    from ..api import IconFile
    from ..type_defs import AccountRecord, SubmissionBadge


class SubmissionManager(BaseManager):
    """Per-identity list of the user's badge submissions."""

    @property
    def pending(self) -> list[SubmissionBadge]:
        """Submissions still awaiting review."""
        return [
            sub
            for sub in self.coordinator.submissions
            if sub.get(const.DATA_BADGE_STATUS) == const.SUBMISSION_STATUS_PENDING
        ]

    async def async_load(self) -> None:
        """Restore the submissions of the active local identity."""
        key = self.account_key
        if key is None:
            return
        try:
            record = await self.store.async_get(key)
        except (HomeAssistantError, OSError, ValueError) as err:
            const.LOGGER.error("ERROR: Failed to load FreeBadges submissions: %s", err)
            return

        submissions = (
            record.get(const.DATA_ACCOUNT_SUBMISSIONS) if isinstance(record, dict) else None
        )
        self.coordinator.submissions = (
            list(submissions) if isinstance(submissions, list) else []
        )

    async def async_persist(self) -> None:
        """Write the current submissions into the active identity's record."""
        key = self.account_key
        if key is None:
            return
        submissions = list(self.coordinator.submissions)

        def _set_submissions(current: Any) -> AccountRecord:
            record = dict(current) if isinstance(current, dict) else empty_account_record()
            record[const.DATA_ACCOUNT_SUBMISSIONS] = submissions
            return record  # type: ignore[return-value]

        await self.store.async_update(key, _set_submissions)

    async def async_submit(self, name: str | None, icon: IconFile | None) -> None:
        """Send a new badge for review, then refetch the user's submissions.

        Raises:
            FreeBadgesAuthenticationError: Nobody is signed in.
            FreeBadgesValidationError: Name is blank, the icon is missing or
                not an accepted image type.
            FreeBadgesError: The backend rejected the submission.
        """
        auth = self.coordinator.auth_state
        if auth is None:
            raise FreeBadgesAuthenticationError(const.ERROR_NOT_AUTHENTICATED)

        trimmed = (name or const.CONF_EMPTY).strip()
        if not trimmed or icon is None or not icon.content:
            raise FreeBadgesValidationError(const.ERROR_NAME_AND_ICON_REQUIRED)
        if icon.content_type not in const.ALLOWED_ICON_CONTENT_TYPES:
            raise FreeBadgesValidationError(
                const.ERROR_ICON_TYPE_FMT.format(icon.content_type)
            )

        await self.api.async_submit(auth[const.DATA_AUTH_TOKEN], trimmed, icon)
        const.LOGGER.info("INFO: Submitted badge '%s' for review", trimmed)
        await self.async_fetch_mine()

    async def async_fetch_mine(self) -> None:
        """Replace the local submissions with the backend's list.

        Silently does nothing when signed out or no backend is configured.
        Failures are logged and leave the current list untouched.
        """
        auth = self.coordinator.auth_state
        if auth is None or not self.api.is_configured:
            return

        try:
            submissions = await self.api.async_get_mine(auth[const.DATA_AUTH_TOKEN])
        except FreeBadgesError as err:
            const.LOGGER.error("ERROR: Failed to load submissions: %s", err)
            return

        if not self.coordinator.alive or self.coordinator.auth_state is not auth:
            const.LOGGER.debug("DEBUG: Discarding stale submissions result")
            return

        self.coordinator.submissions = submissions
        await self.async_persist()
        const.LOGGER.debug("DEBUG: Loaded %s submissions", len(submissions))
        self.notify()
