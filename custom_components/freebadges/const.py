# File: const.py
"""Constants for the FreeBadges integration.

This file centralizes configuration keys, defaults, storage keys, remote
endpoint paths, service names and user-facing messages so every module
refers to the same values.
"""

import logging

from homeassistant.const import Platform

# ------------------------------------------------------------------------------------------------
# General / Integration Information
# ------------------------------------------------------------------------------------------------
# Integration Name
FREEBADGES_TITLE = "FreeBadges"

# Integration Domain
DOMAIN = "freebadges"

# Logger
LOGGER = logging.getLogger(__package__)

# Supported Platforms
PLATFORMS = [
    Platform.SENSOR,
]

# Coordinator
COORDINATOR = "coordinator"

# hass.data key holding registered profile badge providers
DATA_BADGE_PROVIDERS = f"{DOMAIN}_badge_providers"

# ------------------------------------------------------------------------------------------------
# Storage and Versioning
# ------------------------------------------------------------------------------------------------
STORAGE_VERSION = 1
CACHE_VERSION = 1

# Cache record key embeds the schema version so a bump discards old records
STORAGE_KEY_CACHE = f"{DOMAIN}-cache-v{CACHE_VERSION}"
# One record per local identity: freebadges-account.<local_id>
STORAGE_KEY_ACCOUNT_PREFIX = f"{DOMAIN}-account"

SCHEMA_VERSION = 1

# ------------------------------------------------------------------------------------------------
# Configuration Keys
# ------------------------------------------------------------------------------------------------
CONF_BACKEND_URL = "backend_url"
CONF_DISCORD_CLIENT_ID = "discord_client_id"
CONF_OAUTH_REDIRECT_URI = "oauth_redirect_uri"
CONF_REFRESH_MINUTES = "refresh_minutes"
CONF_LOCAL_ACCOUNT_ID = "local_account_id"
CONF_SCHEMA_VERSION = "schema_version"
CONF_EMPTY = ""

# Defaults
DEFAULT_BACKEND_URL = "https://fbr.kzis.gay"
DEFAULT_DISCORD_CLIENT_ID = "1446692568468291706"
DEFAULT_OAUTH_REDIRECT_URI = "https://fbr.kzis.gay/auth/discord/callback"
DEFAULT_REFRESH_MINUTES = 30
MIN_REFRESH_MINUTES = 5

# Config / options flow
CONFIG_FLOW_STEP_USER = "user"
OPTIONS_FLOW_STEP_INIT = "init"
CFOP_ERROR_BACKEND_URL = "backend_url"
TRANS_KEY_CFOF_INVALID_BACKEND_URL = "invalid_backend_url"
TRANS_KEY_CFOF_ALREADY_CONFIGURED = "already_configured"

# ------------------------------------------------------------------------------------------------
# Remote API
# ------------------------------------------------------------------------------------------------
API_PATH_APPROVED = "/badges/approved"
API_PATH_MINE = "/badges/mine"
API_PATH_SUBMIT = "/badges/submit"
API_PATH_LOGOUT = "/auth/logout"

API_FIELD_BADGES = "badges"
API_FIELD_ERROR = "error"
API_FIELD_TOKEN = "token"
API_FIELD_USER = "user"

FORM_PART_METADATA = "metadata"
FORM_PART_ICON = "icon"
DEFAULT_ICON_FILENAME = "badge.png"
ALLOWED_ICON_CONTENT_TYPES = ("image/png", "image/webp", "image/jpeg")

# Request timeout in seconds
REQUEST_TIMEOUT = 30

# ------------------------------------------------------------------------------------------------
# OAuth
# ------------------------------------------------------------------------------------------------
OAUTH_AUTHORIZE_URL = "https://discord.com/oauth2/authorize"
OAUTH_SCOPES = ["identify"]
OAUTH_RESPONSE_TYPE = "code"
OAUTH_PERMISSIONS = "0"
# Query marker the backend uses to identify the client on the exchange request
OAUTH_CLIENT_MARKER_PARAM = "clientMod"
OAUTH_CLIENT_MARKER_VALUE = "vencord"

# ------------------------------------------------------------------------------------------------
# Data keys (wire format is camelCase and stored as received)
# ------------------------------------------------------------------------------------------------
DATA_CACHE_VERSION = "version"
DATA_CACHE_ETAG = "etag"
DATA_CACHE_UPDATED_AT = "updatedAt"
DATA_CACHE_BADGES = "badges"

DATA_BADGE_ID = "id"
DATA_BADGE_NAME = "name"
DATA_BADGE_ICON_URL = "iconUrl"
DATA_BADGE_CREATOR_ID = "creatorId"
DATA_BADGE_CREATED_AT = "createdAt"
DATA_BADGE_UPDATED_AT = "updatedAt"
DATA_BADGE_STATUS = "status"
DATA_BADGE_REVIEW_REASON = "reviewReason"
DATA_BADGE_REVIEWER_ID = "reviewerId"

DATA_AUTH_TOKEN = "token"
DATA_AUTH_USER = "user"
DATA_USER_ID = "id"
DATA_USER_USERNAME = "username"
DATA_USER_GLOBAL_NAME = "globalName"
DATA_USER_AVATAR = "avatar"

DATA_ACCOUNT_AUTH = "auth"
DATA_ACCOUNT_SUBMISSIONS = "submissions"

SUBMISSION_STATUS_PENDING = "PENDING"
SUBMISSION_STATUS_APPROVED = "APPROVED"
SUBMISSION_STATUS_REJECTED = "REJECTED"
SUBMISSION_STATUS_BANNED = "BANNED"

# ------------------------------------------------------------------------------------------------
# Profile badge descriptors
# ------------------------------------------------------------------------------------------------
BADGE_KEY_PREFIX = "freebadge-"
BADGE_POSITION_END = "end"
BADGE_FALLBACK_DESCRIPTION = "FreeBadge"
MENU_ITEM_COPY_NAME = "freebadges-copy-name"
MENU_ITEM_COPY_URL = "freebadges-copy-url"
LABEL_COPY_NAME = "Copy badge name"
LABEL_COPY_URL = "Copy badge image link"

# ------------------------------------------------------------------------------------------------
# Services
# ------------------------------------------------------------------------------------------------
SERVICE_REFRESH = "refresh"
SERVICE_BEGIN_LOGIN = "begin_login"
SERVICE_COMPLETE_LOGIN = "complete_login"
SERVICE_LOGOUT = "logout"
SERVICE_SUBMIT_BADGE = "submit_badge"
SERVICE_FETCH_SUBMISSIONS = "fetch_submissions"
SERVICE_GET_USER_BADGES = "get_user_badges"

FIELD_FORCE = "force"
FIELD_CALLBACK_URL = "callback_url"
FIELD_NAME = "name"
FIELD_ICON_PATH = "icon_path"
FIELD_USER_ID = "user_id"

# ------------------------------------------------------------------------------------------------
# Sensors
# ------------------------------------------------------------------------------------------------
SENSOR_UID_SUFFIX_CATALOG = "_catalog"
SENSOR_UID_SUFFIX_SUBMISSIONS = "_submissions"
SENSOR_UID_SUFFIX_ACCOUNT = "_account"
TRANS_KEY_SENSOR_CATALOG = "catalog"
TRANS_KEY_SENSOR_SUBMISSIONS = "submissions"
TRANS_KEY_SENSOR_ACCOUNT = "account"

ATTR_LAST_SYNCED = "last_synced"
ATTR_ETAG = "etag"
ATTR_OWNER_COUNT = "owner_count"
ATTR_BACKEND_URL = "backend_url"
ATTR_SUBMISSIONS = "submissions"
ATTR_PENDING_COUNT = "pending_count"
ATTR_USER_ID = "user_id"
ATTR_GLOBAL_NAME = "global_name"
ATTR_AVATAR = "avatar"
STATE_SIGNED_OUT = "signed_out"

# ------------------------------------------------------------------------------------------------
# Notifications (persistent notification "toasts")
# ------------------------------------------------------------------------------------------------
TITLE_FAILURE = f"{FREEBADGES_TITLE} error"
NOTIFICATION_ID_REFRESH = f"{DOMAIN}_refresh"
NOTIFICATION_ID_LOGIN = f"{DOMAIN}_login"
NOTIFICATION_ID_SUBMIT = f"{DOMAIN}_submit"

MSG_REFRESH_FAILED = "Failed to refresh FreeBadges list"
MSG_REFRESH_SUCCEEDED = "FreeBadges cache refreshed"
MSG_LOGIN_SUCCEEDED = "Logged in to FreeBadges as {name}"
MSG_LOGIN_OPEN = "Open this link to sign in with Discord, then call {service} with the URL you were redirected to: {url}"
MSG_BADGE_SUBMITTED = "Badge submitted!"

ERROR_BACKEND_MISSING = "Backend URL missing"
ERROR_OAUTH_NOT_CONFIGURED = (
    "Set Discord client ID and redirect URI in the integration options."
)
ERROR_NOT_AUTHENTICATED = "Not authenticated"
ERROR_NAME_AND_ICON_REQUIRED = "Name and icon are required"
ERROR_ICON_TYPE_FMT = "Unsupported icon type '{}'; use PNG, WEBP or JPEG"
ERROR_ICON_NOT_ALLOWED_FMT = "Icon path '{}' is not in an allowed directory"
ERROR_SUBMISSION_FAILED_FMT = "Submission failed ({})"
ERROR_LOGIN_FAILED = "Login failed"
ERROR_OAUTH_FAILED = "OAuth failed"
ERROR_CALLBACK_MISMATCH = "Callback URL does not match the configured redirect URI"
ERROR_REQUEST_FAILED_FMT = "Request to {} failed with status {}"
ERROR_MALFORMED_RESPONSE_FMT = "Malformed response from {}"
ERROR_NO_ENTRY_FOUND = "No FreeBadges entry found"
