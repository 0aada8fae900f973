# custom_components/toronto_zmanim/device.py
from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from homeassistant.helpers.device_registry import DeviceEntryType, DeviceInfo
from homeassistant.helpers.entity import Entity
from homeassistant.helpers.event import async_track_point_in_time
import homeassistant.util.dt as dt_util

from .const import CONF_TIME_FORMAT, DATA_CALCULATOR, DATA_CONFIG, DEFAULT_TIME_FORMAT, DOMAIN
from .zmanim_lib import ZmanimCalculator
from .zmanim_lib.helper import format_time, next_local_midnight


class ZmanimDevice(Entity):
    """Base mixin for all Toronto Zmanim entities: shared DeviceInfo,
    midnight scheduling and time formatting.
    """

    _attr_device_info = DeviceInfo(
        identifiers={(DOMAIN, "toronto_zmanim")},
        name="Toronto Zmanim",
        model="Zmanim Times",
        entry_type=DeviceEntryType.SERVICE,
    )

    def __init__(self, *args, **kwargs) -> None:
        super().__init__()
        self._midnight_unsub: Callable[[], None] | None = None

    @property
    def _config(self) -> dict:
        return self.hass.data.get(DOMAIN, {}).get(DATA_CONFIG, {})

    @property
    def calculator(self) -> ZmanimCalculator:
        return self.hass.data[DOMAIN][DATA_CALCULATOR]

    # --- Time format helpers ---
    def _get_time_format(self) -> str:
        """Return configured time format ('12' or '24')."""
        fmt = self._config.get(CONF_TIME_FORMAT, DEFAULT_TIME_FORMAT)
        return fmt if fmt in ("12", "24") else DEFAULT_TIME_FORMAT

    def _format_simple_time(self, dt: datetime) -> str:
        """Format an instant for the *_Simple attributes honoring 12/24 option."""
        return format_time(dt, self.calculator.location.tzinfo, self._get_time_format())

    # --- Midnight refresh ---
    def _register_midnight(self, hass, action, after: datetime | None = None):
        """Run `action` at every midnight in the location's timezone, not HA's."""
        when = next_local_midnight(after or dt_util.now(), self.calculator.location.tzinfo)

        async def _fire(fired_at: datetime) -> None:
            self._register_midnight(hass, action, when)
            await action(fired_at)

        self._midnight_unsub = async_track_point_in_time(hass, _fire, when)

    async def async_will_remove_from_hass(self) -> None:
        """On entity removal, cancel the pending midnight refresh."""
        if self._midnight_unsub is not None:
            self._midnight_unsub()
            self._midnight_unsub = None
        await super().async_will_remove_from_hass()
