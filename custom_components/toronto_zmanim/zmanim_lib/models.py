# custom_components/toronto_zmanim/zmanim_lib/models.py
from __future__ import annotations

import datetime
from dataclasses import dataclass, fields
from enum import Enum


class EventKind(Enum):
    """What a calendar event tells us about the day."""

    PORTION = "portion"
    CANDLE_LIGHTING = "candle_lighting"
    HAVDALAH = "havdalah"
    HOLIDAY = "holiday"


class HolidayFlag(Enum):
    CHAG = "chag"
    MINOR_HOLIDAY = "minor_holiday"
    MAJOR_FAST = "major_fast"
    MINOR_FAST = "minor_fast"
    CHOL_HAMOED = "chol_hamoed"
    CHANUKAH = "chanukah"
    ROSH_CHODESH = "rosh_chodesh"


# Flags that put a label on the day (CHAG also makes it Yom Tov).
LABELLED_FLAGS = frozenset(
    {
        HolidayFlag.CHAG,
        HolidayFlag.MINOR_HOLIDAY,
        HolidayFlag.MAJOR_FAST,
        HolidayFlag.MINOR_FAST,
    }
)


@dataclass(frozen=True)
class CalendarEvent:
    date: datetime.date
    kind: EventKind
    title: str
    time: datetime.datetime | None = None
    flag: HolidayFlag | None = None


@dataclass(frozen=True)
class CalendarSettings:
    """Minute offsets applied around sunset for Shabbat / Yom Tov times."""

    candle_lighting_offset: int = 18
    havdalah_offset: int = 50


# field name → key used by the public JSON endpoint, in chronological order
ZMANIM_JSON_KEYS: dict[str, str] = {
    "alot_hashachar": "alotHaShachar",
    "misheyakir": "misheyakir",
    "sunrise": "sunrise",
    "sof_zman_shma": "sofZmanShma",
    "sof_zman_tfilla": "sofZmanTfilla",
    "chatzot": "chatzot",
    "mincha_gedola": "minchaGedola",
    "mincha_ketana": "minchaKetana",
    "plag_hamincha": "plagHaMincha",
    "sunset": "sunset",
    "tzait": "tzait",
    "tzait72": "tzait72",
}


@dataclass(frozen=True)
class ZmanimTimes:
    """The twelve zmanim of one civil day, listed in chronological order."""

    alot_hashachar: datetime.datetime
    misheyakir: datetime.datetime
    sunrise: datetime.datetime
    sof_zman_shma: datetime.datetime
    sof_zman_tfilla: datetime.datetime
    chatzot: datetime.datetime
    mincha_gedola: datetime.datetime
    mincha_ketana: datetime.datetime
    plag_hamincha: datetime.datetime
    sunset: datetime.datetime
    tzait: datetime.datetime
    tzait72: datetime.datetime

    def ordered(self) -> list[datetime.datetime]:
        return [getattr(self, f.name) for f in fields(self)]

    def as_dict(self, render=None) -> dict:
        """Map to the JSON keys, optionally passing each instant through `render`."""
        render = render or (lambda value: value)
        return {
            key: render(getattr(self, name))
            for name, key in ZMANIM_JSON_KEYS.items()
        }


@dataclass(frozen=True)
class ZmanimResponse:
    date: datetime.date
    date_display: str
    hebrew_date: str
    hebrew_date_hebrew: str
    parsha: str | None
    special_day: str | None
    zmanim: ZmanimTimes
    candle_lighting: datetime.datetime | None
    havdalah: datetime.datetime | None
    is_shabbat: bool
    is_yom_tov: bool


@dataclass(frozen=True)
class UpcomingShabbat:
    candle_lighting: datetime.datetime | None
    havdalah: datetime.datetime | None
    parsha: str | None
    date: datetime.date
    erev: datetime.date
