import voluptuous as vol
from homeassistant import config_entries
from homeassistant.core import callback
from homeassistant.helpers.selector import selector

from .const import (
    CONF_CANDLELIGHT_OFFSET,
    CONF_HAVDALAH_OFFSET,
    CONF_TIME_FORMAT,
    DEFAULT_CANDLELIGHT_OFFSET,
    DEFAULT_HAVDALAH_OFFSET,
    DEFAULT_TIME_FORMAT,
    DOMAIN,
)
from .zmanim_lib import TORONTO


def _settings_schema(get) -> vol.Schema:
    """Shared by the setup step and the options flow; `get(key, default)` seeds defaults."""
    return vol.Schema(
        {
            vol.Optional(
                CONF_CANDLELIGHT_OFFSET,
                default=get(CONF_CANDLELIGHT_OFFSET, DEFAULT_CANDLELIGHT_OFFSET),
            ): vol.All(int, vol.Range(min=0, max=60)),
            vol.Optional(
                CONF_HAVDALAH_OFFSET,
                default=get(CONF_HAVDALAH_OFFSET, DEFAULT_HAVDALAH_OFFSET),
            ): vol.All(int, vol.Range(min=0, max=120)),
            vol.Optional(
                CONF_TIME_FORMAT,
                default=get(CONF_TIME_FORMAT, DEFAULT_TIME_FORMAT),
            ): selector({
                "select": {
                    "options": [
                        {"value": "12", "label": "12-hour (AM/PM)"},
                        {"value": "24", "label": "24-hour"},
                    ]
                }
            }),
        }
    )


class TorontoZmanimConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Toronto Zmanim."""
    VERSION = 1

    async def async_step_user(self, user_input=None):
        # Only one instance: the location is fixed
        if self._async_current_entries():
            return self.async_abort(reason="single_instance_allowed")

        if user_input is None:
            schema = _settings_schema(lambda key, default: default)
            return self.async_show_form(step_id="user", data_schema=schema)

        return self.async_create_entry(title=TORONTO.name, data=user_input)

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        return OptionsFlowHandler(config_entry)


class OptionsFlowHandler(config_entries.OptionsFlow):
    """Edit the candle-lighting / havdalah offsets and the time format."""

    def __init__(self, config_entry):
        self._config_entry = config_entry

    async def async_step_init(self, user_input=None):
        data = self._config_entry.data or {}
        opts = self._config_entry.options or {}

        def get(k, default):
            return opts.get(k, data.get(k, default))

        if user_input is None:
            return self.async_show_form(step_id="init", data_schema=_settings_schema(get))

        new_opts = {**self._config_entry.options, **user_input}
        return self.async_create_entry(title="", data=new_opts)
