# File: config_flow.py
"""Config flow for the FreeBadges integration.

One entry per backend. The entry data only records the schema version; every
user-editable setting lives in the entry options so the options flow can
change it later.
"""

from typing import Any, Optional

from homeassistant import config_entries
from homeassistant.core import callback

from . import const
from . import flow_helpers as fh
from .options_flow import FreeBadgesOptionsFlowHandler

# pylint: disable=abstract-method


class FreeBadgesConfigFlow(config_entries.ConfigFlow, domain=const.DOMAIN):
    """Config Flow for FreeBadges."""

    VERSION = 1

    async def async_step_user(self, user_input: Optional[dict[str, Any]] = None):
        """Collect backend, OAuth and refresh settings."""
        errors: dict[str, str] = {}

        if user_input is not None:
            errors = fh.validate_settings_inputs(user_input)
            if not errors:
                options = fh.build_settings_data(user_input)
                await self.async_set_unique_id(options[const.CONF_BACKEND_URL])
                self._abort_if_unique_id_configured()

                const.LOGGER.debug(
                    "DEBUG: Creating FreeBadges entry for %s",
                    options[const.CONF_BACKEND_URL],
                )
                return self.async_create_entry(
                    title=const.FREEBADGES_TITLE,
                    data={const.CONF_SCHEMA_VERSION: const.SCHEMA_VERSION},
                    options=options,
                )

        return self.async_show_form(
            step_id=const.CONFIG_FLOW_STEP_USER,
            data_schema=fh.build_settings_schema(user_input),
            errors=errors,
        )

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        """Return the Options Flow."""
        return FreeBadgesOptionsFlowHandler()
