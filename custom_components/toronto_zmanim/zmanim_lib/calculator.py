# custom_components/toronto_zmanim/zmanim_lib/calculator.py
"""
ZmanimCalculator: everything the portal shows about one day.

The calculator never reads the clock. Callers hand it an explicit date;
"today" is decided at the HTTP / sensor boundary.
"""

from __future__ import annotations

import datetime
import logging
from datetime import timedelta
from typing import Protocol

from .events import HebrewCalendarEventProvider
from .exceptions import InvalidDateError
from .helper import format_long_date, hebrew_date_strings
from .location import TORONTO, Location
from .models import (
    LABELLED_FLAGS,
    CalendarEvent,
    CalendarSettings,
    EventKind,
    HolidayFlag,
    UpcomingShabbat,
    ZmanimResponse,
    ZmanimTimes,
)
from .solar import SolarZmanimSource

_LOGGER = logging.getLogger(__name__)

FRIDAY = 4
SATURDAY = 5


def _shift(day: datetime.date, days: int) -> datetime.date:
    try:
        return day + timedelta(days=days)
    except OverflowError as err:
        raise InvalidDateError(f"Date out of range: {day.isoformat()} + {days} days") from err


class ZmanimSource(Protocol):
    def zmanim_for_date(self, day: datetime.date) -> ZmanimTimes: ...


class EventSource(Protocol):
    def events_for_date_range(
        self, start: datetime.date, end: datetime.date
    ) -> list[CalendarEvent]: ...


class ZmanimCalculator:
    """Combines solar zmanim and Hebrew-calendar events for a fixed location."""

    def __init__(
        self,
        location: Location = TORONTO,
        settings: CalendarSettings | None = None,
        *,
        zmanim_source: ZmanimSource | None = None,
        event_source: EventSource | None = None,
    ) -> None:
        self.location = location
        self.settings = settings or CalendarSettings()
        self._zmanim_source = zmanim_source or SolarZmanimSource(location)
        # default events hang off the same sunsets as the returned zmanim
        self._event_source = event_source or HebrewCalendarEventProvider(
            location, self.settings, self._zmanim_source
        )

    def local_date(self, value: datetime.date | datetime.datetime) -> datetime.date:
        """Reduce a date or datetime to the location's civil day."""
        # datetime is a subclass of date, so check it first
        if isinstance(value, datetime.datetime):
            if value.tzinfo is None:
                return value.date()
            return value.astimezone(self.location.tzinfo).date()
        if isinstance(value, datetime.date):
            return value
        raise InvalidDateError(f"Invalid date: {value!r}")

    def zmanim_for_date(self, value: datetime.date | datetime.datetime) -> ZmanimTimes:
        """Only the twelve zmanim, without the calendar lookup."""
        return self._zmanim_source.zmanim_for_date(self.local_date(value))

    def compute_for_date(self, value: datetime.date | datetime.datetime) -> ZmanimResponse:
        day = self.local_date(value)
        try:
            zmanim = self._zmanim_source.zmanim_for_date(day)
            events = self._event_source.events_for_date_range(day, day)
        except OverflowError as err:
            raise InvalidDateError(f"Date out of range: {day.isoformat()}") from err

        parsha: str | None = None
        special_day: str | None = None
        candle_lighting: datetime.datetime | None = None
        havdalah: datetime.datetime | None = None
        is_shabbat = False
        is_yom_tov = False

        # first match wins within each category
        for ev in events:
            if ev.kind is EventKind.PORTION:
                if parsha is None:
                    parsha = ev.title
            elif ev.kind is EventKind.CANDLE_LIGHTING:
                if candle_lighting is None:
                    candle_lighting = ev.time
                    # the civil day carries the Erev designation
                    if day.weekday() == FRIDAY:
                        is_shabbat = True
                    else:
                        is_yom_tov = True
            elif ev.kind is EventKind.HAVDALAH:
                if havdalah is None:
                    havdalah = ev.time
            elif ev.kind is EventKind.HOLIDAY and ev.flag in LABELLED_FLAGS:
                if special_day is None:
                    special_day = ev.title
                if ev.flag is HolidayFlag.CHAG:
                    is_yom_tov = True

        if day.weekday() == SATURDAY:
            is_shabbat = True

        hebrew_date, hebrew_date_hebrew = hebrew_date_strings(day)
        _LOGGER.debug(
            "%s: parsha=%s special=%s shabbat=%s yomtov=%s",
            day, parsha, special_day, is_shabbat, is_yom_tov,
        )
        return ZmanimResponse(
            date=day,
            date_display=format_long_date(day),
            hebrew_date=hebrew_date,
            hebrew_date_hebrew=hebrew_date_hebrew,
            parsha=parsha,
            special_day=special_day,
            zmanim=zmanim,
            candle_lighting=candle_lighting,
            havdalah=havdalah,
            is_shabbat=is_shabbat,
            is_yom_tov=is_yom_tov,
        )

    def compute_for_week(self, start: datetime.date | datetime.datetime) -> list[ZmanimResponse]:
        """Seven consecutive days starting at `start`."""
        first = self.local_date(start)
        days = [_shift(first, i) for i in range(7)]
        return [self.compute_for_date(day) for day in days]

    def find_upcoming_shabbat(
        self, reference: datetime.date | datetime.datetime
    ) -> UpcomingShabbat:
        """
        Candle lighting, havdalah and parsha for the coming Shabbos.

        A Friday reference returns that same Friday; a Saturday reference
        moves on to the following week.
        """
        today = self.local_date(reference)
        days_until_friday = (FRIDAY - today.weekday()) % 7
        friday = _shift(today, days_until_friday)
        saturday = _shift(friday, 1)

        erev = self.compute_for_date(friday)
        shabbos = self.compute_for_date(saturday)

        return UpcomingShabbat(
            candle_lighting=erev.candle_lighting,
            havdalah=shabbos.havdalah,
            parsha=shabbos.parsha or erev.parsha,
            date=saturday,
            erev=friday,
        )
