"""HTTP client for the FreeBadges backend.

Wraps Home Assistant's shared aiohttp session. Every method either returns
parsed data or raises FreeBadgesNetworkError / FreeBadgesServerError; callers
decide whether a failure is surfaced, logged or ignored.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import json
from typing import TYPE_CHECKING, Any, cast

import aiohttp
from homeassistant.helpers.aiohttp_client import async_get_clientsession
from yarl import URL

from . import const
from .exceptions import (
    FreeBadgesConfigurationError,
    FreeBadgesNetworkError,
    FreeBadgesServerError,
)

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from .type_defs import ApprovedBadge, AuthState, SubmissionBadge


@dataclass(frozen=True, slots=True)
class IconFile:
    """Binary icon selected for a submission."""

    content: bytes
    filename: str = const.DEFAULT_ICON_FILENAME
    content_type: str = "image/png"


@dataclass(frozen=True, slots=True)
class CatalogResponse:
    """Outcome of a catalog fetch.

    ``not_modified`` is True for a 304 answer, in which case ``badges`` is
    empty and must not be used.
    """

    not_modified: bool
    badges: list[ApprovedBadge]
    etag: str | None = None


def normalize_base_url(url: str | None) -> str:
    """Return the backend URL without surrounding blanks or a trailing slash."""
    return (url or const.CONF_EMPTY).strip().rstrip("/")


def parse_badge_list(payload: Any, source: str) -> list[dict[str, Any]]:
    """Extract the ``badges`` list from a backend body.

    Entries without a string id or creatorId cannot be indexed and are dropped.

    Raises:
        FreeBadgesServerError: The body is not a JSON object.
    """
    if not isinstance(payload, dict):
        raise FreeBadgesServerError(const.ERROR_MALFORMED_RESPONSE_FMT.format(source))
    raw_badges = payload.get(const.API_FIELD_BADGES) or []
    if not isinstance(raw_badges, list):
        raise FreeBadgesServerError(const.ERROR_MALFORMED_RESPONSE_FMT.format(source))

    badges: list[dict[str, Any]] = []
    for badge in raw_badges:
        if (
            isinstance(badge, dict)
            and isinstance(badge.get(const.DATA_BADGE_ID), str)
            and isinstance(badge.get(const.DATA_BADGE_CREATOR_ID), str)
        ):
            badges.append(badge)
        else:
            const.LOGGER.debug("DEBUG: Dropping malformed badge entry: %s", badge)
    return badges


def parse_auth_state(payload: Any) -> AuthState:
    """Validate an OAuth exchange body.

    Raises:
        FreeBadgesServerError: token or user are missing.
    """
    if not isinstance(payload, dict):
        raise FreeBadgesServerError(const.ERROR_LOGIN_FAILED)
    token = payload.get(const.API_FIELD_TOKEN)
    user = payload.get(const.API_FIELD_USER)
    if (
        not isinstance(token, str)
        or not token
        or not isinstance(user, dict)
        or not isinstance(user.get(const.DATA_USER_ID), str)
    ):
        raise FreeBadgesServerError(const.ERROR_LOGIN_FAILED)
    return cast("AuthState", {const.DATA_AUTH_TOKEN: token, const.DATA_AUTH_USER: user})


async def _read_error_message(response: aiohttp.ClientResponse) -> str | None:
    """Return the structured ``error`` field of a failure body, if any."""
    try:
        body = await response.json(content_type=None)
    except (ValueError, aiohttp.ClientError):
        return None
    if isinstance(body, dict) and isinstance(body.get(const.API_FIELD_ERROR), str):
        return body[const.API_FIELD_ERROR]
    return None


class FreeBadgesApiClient:
    """Thin client for the FreeBadges REST endpoints."""

    def __init__(self, hass: HomeAssistant, backend_url: str | None) -> None:
        """Initialize the client.

        Args:
            hass: Home Assistant core object.
            backend_url: Base URL of the backend; may be empty, in which case
                every call raises FreeBadgesConfigurationError.

        """
        self.hass = hass
        self.base_url = normalize_base_url(backend_url)

    @property
    def is_configured(self) -> bool:
        """Return True when a backend URL is set."""
        return bool(self.base_url)

    def _url(self, path: str) -> str:
        if not self.base_url:
            raise FreeBadgesConfigurationError(const.ERROR_BACKEND_MISSING)
        return f"{self.base_url}{path}"

    @staticmethod
    def _bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    async def _async_read_json(
        self, response: aiohttp.ClientResponse, source: str
    ) -> Any:
        try:
            return await response.json(content_type=None)
        except ValueError as err:
            raise FreeBadgesServerError(
                const.ERROR_MALFORMED_RESPONSE_FMT.format(source), response.status
            ) from err

    async def async_get_approved(self, etag: str | None = None) -> CatalogResponse:
        """Fetch the approved badge catalog.

        Args:
            etag: Validator of the cached catalog; sent as If-None-Match.

        """
        url = self._url(const.API_PATH_APPROVED)
        headers = {"Accept": "application/json"}
        if etag:
            headers["If-None-Match"] = etag

        session = async_get_clientsession(self.hass)
        try:
            async with asyncio.timeout(const.REQUEST_TIMEOUT):
                async with session.get(url, headers=headers) as response:
                    if response.status == 304:
                        return CatalogResponse(not_modified=True, badges=[])
                    if not 200 <= response.status < 300:
                        raise FreeBadgesServerError(
                            const.ERROR_REQUEST_FAILED_FMT.format(url, response.status),
                            response.status,
                        )
                    payload = await self._async_read_json(response, url)
                    new_etag = response.headers.get("ETag")
        except (aiohttp.ClientError, TimeoutError) as err:
            raise FreeBadgesNetworkError(str(err) or type(err).__name__) from err

        return CatalogResponse(
            not_modified=False,
            badges=cast("list[ApprovedBadge]", parse_badge_list(payload, url)),
            etag=new_etag,
        )

    async def async_get_mine(self, token: str) -> list[SubmissionBadge]:
        """Fetch the signed-in user's own submissions."""
        url = self._url(const.API_PATH_MINE)
        headers = {"Accept": "application/json", **self._bearer(token)}

        session = async_get_clientsession(self.hass)
        try:
            async with asyncio.timeout(const.REQUEST_TIMEOUT):
                async with session.get(url, headers=headers) as response:
                    if not 200 <= response.status < 300:
                        message = await response.text()
                        raise FreeBadgesServerError(
                            message
                            or const.ERROR_REQUEST_FAILED_FMT.format(
                                url, response.status
                            ),
                            response.status,
                        )
                    payload = await self._async_read_json(response, url)
        except (aiohttp.ClientError, TimeoutError) as err:
            raise FreeBadgesNetworkError(str(err) or type(err).__name__) from err

        return cast("list[SubmissionBadge]", parse_badge_list(payload, url))

    async def async_submit(self, token: str, name: str, icon: IconFile) -> None:
        """Send a new badge for review as multipart metadata + icon."""
        url = self._url(const.API_PATH_SUBMIT)
        form = aiohttp.FormData()
        form.add_field(
            const.FORM_PART_METADATA,
            json.dumps({const.DATA_BADGE_NAME: name}),
            content_type="application/json",
        )
        form.add_field(
            const.FORM_PART_ICON,
            icon.content,
            filename=icon.filename or const.DEFAULT_ICON_FILENAME,
            content_type=icon.content_type,
        )

        session = async_get_clientsession(self.hass)
        try:
            async with asyncio.timeout(const.REQUEST_TIMEOUT):
                async with session.post(
                    url, headers=self._bearer(token), data=form
                ) as response:
                    if not 200 <= response.status < 300:
                        message = await _read_error_message(response)
                        raise FreeBadgesServerError(
                            message
                            or const.ERROR_SUBMISSION_FAILED_FMT.format(
                                response.status
                            ),
                            response.status,
                        )
        except (aiohttp.ClientError, TimeoutError) as err:
            raise FreeBadgesNetworkError(str(err) or type(err).__name__) from err

    async def async_logout(self, token: str) -> None:
        """Ask the backend to invalidate token. The answer is not inspected."""
        url = self._url(const.API_PATH_LOGOUT)
        session = async_get_clientsession(self.hass)
        try:
            async with asyncio.timeout(const.REQUEST_TIMEOUT):
                async with session.post(url, headers=self._bearer(token)):
                    pass
        except (aiohttp.ClientError, TimeoutError) as err:
            raise FreeBadgesNetworkError(str(err) or type(err).__name__) from err

    async def async_exchange_code(self, callback_location: str) -> AuthState:
        """Exchange the OAuth redirect location for a token and profile.

        The backend serves the redirect target itself; the client marker query
        parameter tells it to answer with JSON.
        """
        try:
            url = URL(callback_location.strip())
        except (TypeError, ValueError) as err:
            raise FreeBadgesServerError(const.ERROR_OAUTH_FAILED) from err
        if not url.is_absolute():
            raise FreeBadgesServerError(const.ERROR_OAUTH_FAILED)
        url = url.update_query(
            {const.OAUTH_CLIENT_MARKER_PARAM: const.OAUTH_CLIENT_MARKER_VALUE}
        )

        session = async_get_clientsession(self.hass)
        try:
            async with asyncio.timeout(const.REQUEST_TIMEOUT):
                async with session.get(
                    url, headers={"Accept": "application/json"}
                ) as response:
                    if not 200 <= response.status < 300:
                        message = await _read_error_message(response)
                        raise FreeBadgesServerError(
                            message or const.ERROR_LOGIN_FAILED, response.status
                        )
                    payload = await self._async_read_json(response, str(url))
        except (aiohttp.ClientError, TimeoutError) as err:
            raise FreeBadgesNetworkError(str(err) or type(err).__name__) from err

        return parse_auth_state(payload)
