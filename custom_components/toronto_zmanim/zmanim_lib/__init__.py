"""Zmanim, Hebrew dates and Shabbos times for a fixed location."""

from .calculator import ZmanimCalculator
from .events import HebrewCalendarEventProvider
from .exceptions import (
    InvalidDateError,
    InvalidRequestError,
    ZmanimComputationError,
    ZmanimError,
)
from .helper import PLACEHOLDER, format_instant
from .location import TORONTO, Location
from .models import (
    CalendarEvent,
    CalendarSettings,
    EventKind,
    HolidayFlag,
    UpcomingShabbat,
    ZmanimResponse,
    ZmanimTimes,
)
from .solar import SolarZmanimSource

__all__ = [
    "CalendarEvent",
    "CalendarSettings",
    "EventKind",
    "HebrewCalendarEventProvider",
    "HolidayFlag",
    "InvalidDateError",
    "InvalidRequestError",
    "Location",
    "PLACEHOLDER",
    "SolarZmanimSource",
    "TORONTO",
    "UpcomingShabbat",
    "ZmanimCalculator",
    "ZmanimComputationError",
    "ZmanimError",
    "ZmanimResponse",
    "ZmanimTimes",
    "format_instant",
]
