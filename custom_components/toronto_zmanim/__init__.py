from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .const import (
    CONF_CANDLELIGHT_OFFSET,
    CONF_HAVDALAH_OFFSET,
    CONF_TIME_FORMAT,
    DATA_CALCULATOR,
    DATA_CONFIG,
    DATA_VIEW_REGISTERED,
    DEFAULT_CANDLELIGHT_OFFSET,
    DEFAULT_HAVDALAH_OFFSET,
    DEFAULT_TIME_FORMAT,
    DOMAIN,
)
from .zmanim_lib import TORONTO, CalendarSettings, ZmanimCalculator

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant

_LOGGER = logging.getLogger(__name__)

PLATFORMS = ["sensor"]


def build_config(data: dict | None, options: dict | None) -> dict:
    """Merge options over the initial entry data, falling back to defaults."""
    initial = data or {}
    opts = options or {}

    def get(key, default):
        return opts.get(key, initial.get(key, default))

    return {
        CONF_CANDLELIGHT_OFFSET: int(get(CONF_CANDLELIGHT_OFFSET, DEFAULT_CANDLELIGHT_OFFSET)),
        CONF_HAVDALAH_OFFSET: int(get(CONF_HAVDALAH_OFFSET, DEFAULT_HAVDALAH_OFFSET)),
        CONF_TIME_FORMAT: get(CONF_TIME_FORMAT, DEFAULT_TIME_FORMAT),
        "tzname": TORONTO.tzname,
        "city": TORONTO.name,
        "latitude": TORONTO.latitude,
        "longitude": TORONTO.longitude,
    }


def build_calculator(config: dict) -> ZmanimCalculator:
    settings = CalendarSettings(
        candle_lighting_offset=config[CONF_CANDLELIGHT_OFFSET],
        havdalah_offset=config[CONF_HAVDALAH_OFFSET],
    )
    return ZmanimCalculator(TORONTO, settings)


# ───────────────────────────────────────────────────────────────────────────────
# Home Assistant integration lifecycle
# ───────────────────────────────────────────────────────────────────────────────

async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Toronto Zmanim from a config entry."""
    config = build_config(entry.data, entry.options)
    calculator = build_calculator(config)

    domain_data = hass.data.setdefault(DOMAIN, {})
    domain_data[DATA_CONFIG] = config
    domain_data[DATA_CALCULATOR] = calculator
    _LOGGER.debug(
        "Toronto Zmanim configured: candle=%s havdalah=%s",
        config[CONF_CANDLELIGHT_OFFSET],
        config[CONF_HAVDALAH_OFFSET],
    )

    # Views can't be unregistered; the view reads the calculator from hass.data
    if not domain_data.get(DATA_VIEW_REGISTERED):
        from .http import ZmanimView

        hass.http.register_view(ZmanimView(hass))
        domain_data[DATA_VIEW_REGISTERED] = True

    entry.async_on_unload(entry.add_update_listener(_async_update_options))
    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    return True


async def _async_update_options(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Called when the user hits Submit on the Options page."""
    _LOGGER.debug("Toronto Zmanim: reloading entry %s", entry.entry_id)
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    unloaded = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unloaded:
        domain_data = hass.data.get(DOMAIN, {})
        domain_data.pop(DATA_CONFIG, None)
        domain_data.pop(DATA_CALCULATOR, None)
    return unloaded
