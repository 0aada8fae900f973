# custom_components/toronto_zmanim/zmanim_lib/solar.py
from __future__ import annotations

import datetime
import logging
from datetime import timedelta

from zmanim.zmanim_calendar import ZmanimCalendar

from .exceptions import ZmanimComputationError
from .location import TORONTO, Location
from .models import ZmanimTimes

_LOGGER = logging.getLogger(__name__)

GEOMETRIC_ZENITH = 90.0

ALOS_DEGREES = 16.1
MISHEYAKIR_DEGREES = 11.5
TZAIS_DEGREES = 8.5
# 72-minute nightfall, expressed as the equivalent depression angle
TZAIS_72_DEGREES = 16.1


def _require(value: datetime.datetime | None, label: str, day: datetime.date) -> datetime.datetime:
    if value is None:
        raise ZmanimComputationError(f"Could not compute {label} for {day.isoformat()}")
    return value


class SolarZmanimSource:
    """Day-by-day zmanim for one location, backed by python-zmanim."""

    def __init__(self, location: Location = TORONTO) -> None:
        self._location = location
        self._geo = location.geo_location()
        self._tz = location.tzinfo

    @property
    def location(self) -> Location:
        return self._location

    def calendar(self, day: datetime.date) -> ZmanimCalendar:
        return ZmanimCalendar(geo_location=self._geo, date=day)

    def zmanim_for_date(self, day: datetime.date) -> ZmanimTimes:
        """
        Compute the twelve zmanim for `day`.

        Degree-based times use the sun's depression below the geometric
        horizon; the day-proportional times split sunrise→sunset into twelve
        sha'os zmaniyos (GRA).
        """
        cal = self.calendar(day)

        sunrise = _require(cal.sunrise(), "sunrise", day).astimezone(self._tz)
        sunset = _require(cal.sunset(), "sunset", day).astimezone(self._tz)
        if sunset <= sunrise:
            raise ZmanimComputationError(f"Sunset precedes sunrise on {day.isoformat()}")

        def before_sunrise(degrees: float, label: str) -> datetime.datetime:
            value = cal.sunrise_offset_by_degrees(GEOMETRIC_ZENITH + degrees)
            return _require(value, label, day).astimezone(self._tz)

        def after_sunset(degrees: float, label: str) -> datetime.datetime:
            value = cal.sunset_offset_by_degrees(GEOMETRIC_ZENITH + degrees)
            return _require(value, label, day).astimezone(self._tz)

        hour_td = (sunset - sunrise) / 12

        def shaos(hours: float) -> datetime.datetime:
            return sunrise + hour_td * hours

        times = ZmanimTimes(
            alot_hashachar=before_sunrise(ALOS_DEGREES, "alos hashachar"),
            misheyakir=before_sunrise(MISHEYAKIR_DEGREES, "misheyakir"),
            sunrise=sunrise,
            sof_zman_shma=shaos(3),
            sof_zman_tfilla=shaos(4),
            chatzot=shaos(6),
            mincha_gedola=shaos(6.5),
            mincha_ketana=shaos(9.5),
            plag_hamincha=shaos(10.75),
            sunset=sunset,
            tzait=after_sunset(TZAIS_DEGREES, "tzais"),
            tzait72=after_sunset(TZAIS_72_DEGREES, "tzais 72"),
        )
        _LOGGER.debug("Computed zmanim for %s at %s", day, self._location.name)
        return times
