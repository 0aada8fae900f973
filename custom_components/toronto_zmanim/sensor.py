# custom_components/toronto_zmanim/sensor.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from homeassistant.components.sensor import SensorDeviceClass, SensorEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback
import homeassistant.util.dt as dt_util

from .device import ZmanimDevice
from .zmanim_lib.helper import round_to_minute

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ZmanDescription:
    key: str          # ZmanimTimes field
    name: str
    icon: str
    attr_prefix: str


ZMAN_DESCRIPTIONS: tuple[ZmanDescription, ...] = (
    ZmanDescription("alot_hashachar", "Alos HaShachar", "mdi:weather-sunset-up", "Alos"),
    ZmanDescription("misheyakir", "Misheyakir", "mdi:clock-start", "Misheyakir"),
    ZmanDescription("sunrise", "Netz HaChamah", "mdi:weather-sunny", "Netz"),
    ZmanDescription("sof_zman_shma", "Sof Zman Krias Shma", "mdi:book-open-variant", "Krias_Shma"),
    ZmanDescription("sof_zman_tfilla", "Sof Zman Tefilah", "mdi:book-clock", "Tefilah"),
    ZmanDescription("chatzot", "Chatzos HaYom", "mdi:white-balance-sunny", "Chatzos"),
    ZmanDescription("mincha_gedola", "Mincha Gedola", "mdi:clock-outline", "Mincha_Gedola"),
    ZmanDescription("mincha_ketana", "Mincha Ketana", "mdi:clock-outline", "Mincha_Ketana"),
    ZmanDescription("plag_hamincha", "Plag HaMincha", "mdi:clock-end", "Plag"),
    ZmanDescription("sunset", "Shkias HaChamah", "mdi:weather-sunset-down", "Shkia"),
    ZmanDescription("tzait", "Tzeis HaKochavim", "mdi:weather-night", "Tzeis"),
    ZmanDescription("tzait72", "Tzeis 72", "mdi:weather-night", "Tzeis_72"),
)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    entities: list[SensorEntity] = [ZmanSensor(hass, desc) for desc in ZMAN_DESCRIPTIONS]
    entities += [
        CandleLightingSensor(hass),
        HavdalahSensor(hass),
        ParshaSensor(hass),
        HebrewDateSensor(hass),
    ]
    async_add_entities(entities, update_before_add=False)


class _MidnightSensor(ZmanimDevice, SensorEntity):
    """Recomputes once at startup and then at every local midnight."""

    _attr_should_poll = False

    def __init__(self, hass: HomeAssistant) -> None:
        super().__init__()
        self.hass = hass

    async def async_added_to_hass(self) -> None:
        await super().async_added_to_hass()
        await self.async_update()
        self._register_midnight(self.hass, self._midnight_update)

    async def _midnight_update(self, now: datetime) -> None:
        await self.async_update()
        self.async_write_ha_state()

    def _today(self, now: datetime | None = None):
        return self.calculator.local_date(now or dt_util.now())


# ─── Zman sensors ───────────────────────────────────────────────────────────

class ZmanSensor(_MidnightSensor):
    """Today's value of one zman, rounded to the minute (state in UTC)."""

    _attr_device_class = SensorDeviceClass.TIMESTAMP

    def __init__(self, hass: HomeAssistant, description: ZmanDescription) -> None:
        super().__init__(hass)
        self._desc = description
        self._attr_name = description.name
        self._attr_icon = description.icon
        self._attr_unique_id = f"toronto_zmanim_{description.key}"
        self.entity_id = f"sensor.toronto_zmanim_{description.key}"

    async def async_update(self, now: datetime | None = None) -> None:
        today = self._today(now)
        precise = getattr(self.calculator.zmanim_for_date(today), self._desc.key)
        tomorrow = getattr(
            self.calculator.zmanim_for_date(today + timedelta(days=1)), self._desc.key
        )
        prefix = self._desc.attr_prefix

        self._attr_native_value = round_to_minute(precise).astimezone(timezone.utc)
        self._attr_extra_state_attributes = {
            f"{prefix}_With_Seconds": precise.isoformat(),
            f"{prefix}_Simple": self._format_simple_time(round_to_minute(precise)),
            "Tomorrows_Simple": self._format_simple_time(round_to_minute(tomorrow)),
        }


# ─── Shabbos sensors ────────────────────────────────────────────────────────

class CandleLightingSensor(_MidnightSensor):
    """Candle lighting for the coming Erev Shabbos."""

    _attr_device_class = SensorDeviceClass.TIMESTAMP
    _attr_icon = "mdi:candle"
    _attr_name = "Shabbos Candle Lighting"
    _attr_unique_id = "toronto_zmanim_candle_lighting"

    def __init__(self, hass: HomeAssistant) -> None:
        super().__init__(hass)
        self.entity_id = "sensor.toronto_zmanim_candle_lighting"

    async def async_update(self, now: datetime | None = None) -> None:
        shabbos = self.calculator.find_upcoming_shabbat(self._today(now))
        value = shabbos.candle_lighting
        self._attr_native_value = value.astimezone(timezone.utc) if value else None
        self._attr_extra_state_attributes = {
            "Candle_Lighting_Simple": self._format_simple_time(value) if value else "",
            "Erev_Shabbos_Date": shabbos.erev.isoformat(),
            "Parsha": shabbos.parsha or "",
        }


class HavdalahSensor(_MidnightSensor):
    """Havdalah at the end of the coming Shabbos."""

    _attr_device_class = SensorDeviceClass.TIMESTAMP
    _attr_icon = "mdi:weather-night"
    _attr_name = "Shabbos Havdalah"
    _attr_unique_id = "toronto_zmanim_havdalah"

    def __init__(self, hass: HomeAssistant) -> None:
        super().__init__(hass)
        self.entity_id = "sensor.toronto_zmanim_havdalah"

    async def async_update(self, now: datetime | None = None) -> None:
        shabbos = self.calculator.find_upcoming_shabbat(self._today(now))
        value = shabbos.havdalah
        self._attr_native_value = value.astimezone(timezone.utc) if value else None
        self._attr_extra_state_attributes = {
            "Havdalah_Simple": self._format_simple_time(value) if value else "",
            "Shabbos_Date": shabbos.date.isoformat(),
            "Havdalah_Offset_Minutes": self.calculator.settings.havdalah_offset,
        }


class ParshaSensor(_MidnightSensor):
    """Parsha of the coming Shabbos (empty when Yom Tov displaces it)."""

    _attr_icon = "mdi:book-open-page-variant"
    _attr_name = "Parsha"
    _attr_unique_id = "toronto_zmanim_parsha"

    def __init__(self, hass: HomeAssistant) -> None:
        super().__init__(hass)
        self.entity_id = "sensor.toronto_zmanim_parsha"

    async def async_update(self, now: datetime | None = None) -> None:
        shabbos = self.calculator.find_upcoming_shabbat(self._today(now))
        self._attr_native_value = shabbos.parsha or ""
        self._attr_extra_state_attributes = {
            "Next_Shabbos_Date": shabbos.date.isoformat(),
        }


class HebrewDateSensor(_MidnightSensor):
    _attr_icon = "mdi:calendar-star"
    _attr_name = "Hebrew Date"
    _attr_unique_id = "toronto_zmanim_hebrew_date"

    def __init__(self, hass: HomeAssistant) -> None:
        super().__init__(hass)
        self.entity_id = "sensor.toronto_zmanim_hebrew_date"

    async def async_update(self, now: datetime | None = None) -> None:
        day = self.calculator.compute_for_date(self._today(now))
        self._attr_native_value = day.hebrew_date_hebrew
        self._attr_extra_state_attributes = {
            "Hebrew_Date_English": day.hebrew_date,
            "Special_Day": day.special_day or "",
            "Is_Shabbos": day.is_shabbat,
            "Is_Yom_Tov": day.is_yom_tov,
        }
        _LOGGER.debug("Hebrew date for %s: %s", day.date, day.hebrew_date)
