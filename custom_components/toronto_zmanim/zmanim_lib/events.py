# custom_components/toronto_zmanim/zmanim_lib/events.py
"""
Hebrew-calendar events for a range of civil days.

Festival, fast and parsha names come from pyluach; Yom Tov detection uses
hdate (diaspora aware); candle lighting and havdalah hang off the sunset of
the configured location.
"""

from __future__ import annotations

import datetime
import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from hdate import HDateInfo
from pyluach import dates, parshios
from pyluach.hebrewcal import HebrewDate as PHebrewDate

from .helper import round_to_minute
from .location import TORONTO, Location
from .models import CalendarEvent, CalendarSettings, EventKind, HolidayFlag
from .solar import SolarZmanimSource

if TYPE_CHECKING:
    from .calculator import ZmanimSource

_LOGGER = logging.getLogger(__name__)

# Hebrew month numbers as pyluach counts them (1 = Nissan … 13 = Adar II)
NISSAN = 1
AV = 5
TISHREI = 7
KISLEV = 9
TEVES = 10


def _is_shabbos(d: datetime.date) -> bool:
    return d.weekday() == 5  # Python: Monday=0 … Saturday=5


def _is_taanis_bechoros(d: datetime.date, hd: PHebrewDate) -> bool:
    """Erev Pesach, moved back to Thursday when 14 Nissan falls on Shabbos."""
    if hd.month != NISSAN:
        return False
    erev_pesach = PHebrewDate(hd.year, NISSAN, 14).to_pydate()
    if _is_shabbos(erev_pesach):
        erev_pesach -= timedelta(days=2)
    return d == erev_pesach


class HebrewCalendarEventProvider:
    """Produces typed CalendarEvent objects; no string matching needed downstream."""

    def __init__(
        self,
        location: Location = TORONTO,
        settings: CalendarSettings | None = None,
        solar: ZmanimSource | None = None,
    ) -> None:
        self._location = location
        self._settings = settings or CalendarSettings()
        self._solar = solar or SolarZmanimSource(location)

    @property
    def settings(self) -> CalendarSettings:
        return self._settings

    # ─── Day classification ──────────────────────────────────────────────

    def is_yom_tov(self, d: datetime.date) -> bool:
        return HDateInfo(d, diaspora=self._location.diaspora).is_yom_tov

    def _is_holy_day(self, d: datetime.date) -> bool:
        return _is_shabbos(d) or self.is_yom_tov(d)

    # ─── Event builders ──────────────────────────────────────────────────

    def _holiday_events(self, d: datetime.date) -> list[CalendarEvent]:
        hd = PHebrewDate.from_pydate(d)
        israel = self._location.in_israel
        events: list[CalendarEvent] = []

        name = hd.festival(israel=israel, include_working_days=True)
        if name:
            if self.is_yom_tov(d):
                flag = HolidayFlag.CHAG
            elif hd.month in (NISSAN, TISHREI):
                # working days inside Pesach / Succos
                flag = HolidayFlag.CHOL_HAMOED
            elif hd.month in (KISLEV, TEVES):
                flag = HolidayFlag.CHANUKAH
            else:
                flag = HolidayFlag.MINOR_HOLIDAY
            events.append(CalendarEvent(d, EventKind.HOLIDAY, name, flag=flag))

        yom_kippur = hd.month == TISHREI and hd.day == 10
        fast = hd.fast_day() or ("Yom Kippur" if yom_kippur else None)
        if fast:
            major = hd.month == AV or yom_kippur
            flag = HolidayFlag.MAJOR_FAST if major else HolidayFlag.MINOR_FAST
            events.append(CalendarEvent(d, EventKind.HOLIDAY, fast, flag=flag))
        elif _is_taanis_bechoros(d, hd):
            events.append(
                CalendarEvent(
                    d, EventKind.HOLIDAY, "Taanis Bechoros", flag=HolidayFlag.MINOR_FAST
                )
            )

        if hd.day == 30 or (hd.day == 1 and hd.month != TISHREI):
            next_month = (hd + 1).month_name() if hd.day == 30 else hd.month_name()
            events.append(
                CalendarEvent(
                    d,
                    EventKind.HOLIDAY,
                    f"Rosh Chodesh {next_month}",
                    flag=HolidayFlag.ROSH_CHODESH,
                )
            )
        return events

    def _portion_event(self, d: datetime.date) -> CalendarEvent | None:
        if not _is_shabbos(d):
            return None
        greg = dates.GregorianDate(d.year, d.month, d.day)
        name = parshios.getparsha_string(greg, israel=self._location.in_israel)
        if not name:
            return None
        # Join double parshiyos with a hyphen
        return CalendarEvent(d, EventKind.PORTION, name.replace(", ", "-").strip())

    def _lighting_events(self, d: datetime.date) -> list[CalendarEvent]:
        """
        Candle lighting when tomorrow is Shabbos or Yom Tov:
          - before sunset on an ordinary Erev
          - after nightfall (sunset + havdalah offset) when today is itself
            Shabbos or Yom Tov (2nd night, Shabbos → Yom Tov)
        Havdalah when today is Shabbos / Yom Tov and tomorrow is neither.
        """
        tomorrow = d + timedelta(days=1)
        holy_today = self._is_holy_day(d)
        holy_tomorrow = self._is_holy_day(tomorrow)
        if not holy_today and not holy_tomorrow:
            return []

        sunset = self._solar.zmanim_for_date(d).sunset
        candle_delta = timedelta(minutes=self._settings.candle_lighting_offset)
        havdalah_delta = timedelta(minutes=self._settings.havdalah_offset)
        events: list[CalendarEvent] = []

        if holy_tomorrow:
            if holy_today and not _is_shabbos(tomorrow):
                when = sunset + havdalah_delta
            else:
                when = sunset - candle_delta
            events.append(
                CalendarEvent(
                    d, EventKind.CANDLE_LIGHTING, "Candle lighting", time=round_to_minute(when)
                )
            )
        else:
            events.append(
                CalendarEvent(
                    d,
                    EventKind.HAVDALAH,
                    f"Havdalah ({self._settings.havdalah_offset} min)",
                    time=round_to_minute(sunset + havdalah_delta),
                )
            )
        return events

    # ─── Public interface ────────────────────────────────────────────────

    def events_for_date(self, d: datetime.date) -> list[CalendarEvent]:
        events = self._holiday_events(d)
        portion = self._portion_event(d)
        if portion is not None:
            events.append(portion)
        events.extend(self._lighting_events(d))
        return events

    def events_for_date_range(
        self, start: datetime.date, end: datetime.date
    ) -> list[CalendarEvent]:
        """All events from `start` through `end` inclusive, in date order."""
        if end < start:
            raise ValueError(f"Range end {end} precedes start {start}")

        events: list[CalendarEvent] = []
        d = start
        while d <= end:
            events.extend(self.events_for_date(d))
            d += timedelta(days=1)
        _LOGGER.debug("Generated %d calendar events for %s..%s", len(events), start, end)
        return events
