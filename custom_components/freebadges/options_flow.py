# File: options_flow.py
"""Options Flow for the FreeBadges integration.

Edits the same settings as the config flow. Saving triggers the entry's
update listener, which reloads or reschedules as needed.
"""

from typing import Any, Optional

from homeassistant import config_entries

from . import const
from . import flow_helpers as fh


class FreeBadgesOptionsFlowHandler(config_entries.OptionsFlow):
    """Options Flow for editing FreeBadges settings."""

    async def async_step_init(self, user_input: Optional[dict[str, Any]] = None):
        """Show the settings form prefilled with the current options."""
        errors: dict[str, str] = {}

        if user_input is not None:
            errors = fh.validate_settings_inputs(user_input)
            if not errors:
                return self.async_create_entry(
                    title=const.CONF_EMPTY, data=fh.build_settings_data(user_input)
                )

        defaults = user_input if user_input is not None else dict(self.config_entry.options)
        return self.async_show_form(
            step_id=const.OPTIONS_FLOW_STEP_INIT,
            data_schema=fh.build_settings_schema(defaults),
            errors=errors,
        )
