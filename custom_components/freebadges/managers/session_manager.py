# File: session_manager.py
"""Session Manager for FreeBadges integration.

Owns the signed-in Discord session of the active local identity:
- Login: build the Discord authorize URL, then exchange the redirect location
  at the backend for a bearer token and profile
- Logout: best-effort remote invalidation, then local clear
- Persistence: the session lives in the account record of the active local
  identity, so switching identity never exposes another identity's token
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.exceptions import HomeAssistantError
from yarl import URL

from .. import const
from ..exceptions import (
    FreeBadgesConfigurationError,
    FreeBadgesError,
    FreeBadgesValidationError,
)
from ..notification_helper import async_show_toast
from .base_manager import BaseManager

if TYPE_CHECKING:
    from ..type_defs import AccountRecord, AuthState


def empty_account_record() -> AccountRecord:
    """Return the record stored for an identity that never signed in."""
    return {const.DATA_ACCOUNT_AUTH: None, const.DATA_ACCOUNT_SUBMISSIONS: []}


def is_valid_auth_state(value: Any) -> bool:
    """Return True for a stored session with a token and a user id."""
    return (
        isinstance(value, dict)
        and isinstance(value.get(const.DATA_AUTH_TOKEN), str)
        and isinstance(value.get(const.DATA_AUTH_USER), dict)
        and isinstance(value[const.DATA_AUTH_USER].get(const.DATA_USER_ID), str)
    )


def display_name(auth: AuthState) -> str:
    """Return the global name of the signed-in user, else the username."""
    user = auth[const.DATA_AUTH_USER]
    return user.get(const.DATA_USER_GLOBAL_NAME) or user.get(
        const.DATA_USER_USERNAME, const.CONF_EMPTY
    )


class SessionManager(BaseManager):
    """OAuth session of the active local identity."""

    async def async_load(self) -> None:
        """Restore the session of the active local identity.

        No-op when no local identity is configured.
        """
        key = self.account_key
        if key is None:
            const.LOGGER.debug("DEBUG: No local account configured, skipping session load")
            return
        try:
            record = await self.store.async_get(key)
        except (HomeAssistantError, OSError, ValueError) as err:
            const.LOGGER.error("ERROR: Failed to load FreeBadges session: %s", err)
            return

        auth = record.get(const.DATA_ACCOUNT_AUTH) if isinstance(record, dict) else None
        if auth is None:
            return
        if not is_valid_auth_state(auth):
            const.LOGGER.warning("WARNING: Ignoring malformed stored FreeBadges session")
            return
        self.coordinator.auth_state = auth
        const.LOGGER.debug(
            "DEBUG: Restored FreeBadges session for user %s",
            auth[const.DATA_AUTH_USER][const.DATA_USER_ID],
        )

    async def async_persist(self) -> None:
        """Write the current session into the active identity's record."""
        key = self.account_key
        if key is None:
            return
        auth = self.coordinator.auth_state

        def _set_auth(current: Any) -> AccountRecord:
            record = dict(current) if isinstance(current, dict) else empty_account_record()
            record[const.DATA_ACCOUNT_AUTH] = auth
            return record  # type: ignore[return-value]

        await self.store.async_update(key, _set_auth)

    def build_authorize_url(self) -> str:
        """Return the Discord authorize URL for the configured client.

        Raises:
            FreeBadgesConfigurationError: client id or redirect URI missing.
        """
        client_id = (self.coordinator.client_id or const.CONF_EMPTY).strip()
        redirect_uri = (self.coordinator.redirect_uri or const.CONF_EMPTY).strip()
        if not client_id or not redirect_uri:
            raise FreeBadgesConfigurationError(const.ERROR_OAUTH_NOT_CONFIGURED)

        return str(
            URL(const.OAUTH_AUTHORIZE_URL).with_query(
                {
                    "client_id": client_id,
                    "redirect_uri": redirect_uri,
                    "response_type": const.OAUTH_RESPONSE_TYPE,
                    "scope": " ".join(const.OAUTH_SCOPES),
                    "permissions": const.OAUTH_PERMISSIONS,
                }
            )
        )

    async def async_begin_login(self) -> str:
        """Start the authorization handshake and show the link to open."""
        url = self.build_authorize_url()
        async_show_toast(
            self.hass,
            const.MSG_LOGIN_OPEN.format(
                service=f"{const.DOMAIN}.{const.SERVICE_COMPLETE_LOGIN}", url=url
            ),
            notification_id=const.NOTIFICATION_ID_LOGIN,
        )
        return url

    def _check_callback_location(self, callback_location: str) -> None:
        """Reject redirect locations that do not belong to the redirect URI."""
        redirect_uri = (self.coordinator.redirect_uri or const.CONF_EMPTY).strip()
        if not redirect_uri:
            raise FreeBadgesConfigurationError(const.ERROR_OAUTH_NOT_CONFIGURED)
        try:
            location = URL(callback_location.strip())
        except (TypeError, ValueError) as err:
            raise FreeBadgesValidationError(const.ERROR_CALLBACK_MISMATCH) from err
        expected = URL(redirect_uri)
        if (
            location.scheme != expected.scheme
            or location.host != expected.host
            or location.port != expected.port
            or location.path.rstrip("/") != expected.path.rstrip("/")
        ):
            raise FreeBadgesValidationError(const.ERROR_CALLBACK_MISMATCH)

    async def async_complete_login(self, callback_location: str) -> AuthState:
        """Exchange the OAuth redirect location for a session.

        Raises:
            FreeBadgesError: The location was rejected or the exchange failed.
                No state is changed in that case.
        """
        self._check_callback_location(callback_location)
        auth = await self.api.async_exchange_code(callback_location)

        if not self.coordinator.alive:
            const.LOGGER.debug("DEBUG: Discarding login result after dispose")
            return auth

        self.coordinator.auth_state = auth
        await self.async_persist()
        const.LOGGER.info(
            "INFO: Signed in to FreeBadges as user %s",
            auth[const.DATA_AUTH_USER][const.DATA_USER_ID],
        )
        async_show_toast(
            self.hass,
            const.MSG_LOGIN_SUCCEEDED.format(name=display_name(auth)),
            notification_id=const.NOTIFICATION_ID_LOGIN,
        )
        await self.coordinator.submission_manager.async_fetch_mine()
        self.notify()
        return auth

    async def async_logout(self) -> None:
        """Sign out locally; remote invalidation is fire-and-forget."""
        auth = self.coordinator.auth_state
        if auth is not None and self.api.is_configured:
            try:
                await self.api.async_logout(auth[const.DATA_AUTH_TOKEN])
            except FreeBadgesError as err:
                const.LOGGER.debug("DEBUG: Remote logout failed, ignoring: %s", err)

        self.coordinator.auth_state = None
        self.coordinator.submissions = []
        await self.async_persist()
        await self.coordinator.submission_manager.async_persist()
        const.LOGGER.info("INFO: Signed out of FreeBadges")
        self.notify()
