# custom_components/toronto_zmanim/zmanim_lib/api.py
"""
JSON payloads for `GET /api/zmanim?mode=today|week|shabbat&date=<ISO date>`.

Everything here is independent of the web framework: the Home Assistant view
validates nothing itself, it hands the raw query and today's date over.
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping
from typing import Any

import voluptuous as vol

from .calculator import ZmanimCalculator
from .exceptions import InvalidDateError, InvalidRequestError
from .helper import format_instant, format_long_date
from .models import ZmanimResponse

MODE_TODAY = "today"
MODE_WEEK = "week"
MODE_SHABBAT = "shabbat"
MODES = (MODE_TODAY, MODE_WEEK, MODE_SHABBAT)

# Zmanim for a date don't change intraday
CACHE_MAX_AGE = 3600

QUERY_SCHEMA = vol.Schema(
    {
        vol.Optional("mode", default=MODE_TODAY): vol.In(MODES),
        vol.Optional("date"): vol.Any(None, str),
    },
    extra=vol.REMOVE_EXTRA,
)


def parse_date(text: str) -> datetime.date | datetime.datetime:
    """
    Parse an ISO date (2024-12-13) or datetime (2024-12-13T18:00:00-05:00).

    Unparsable input is a hard error; it never falls back to "now".
    """
    value = (text or "").strip()
    if not value:
        raise InvalidDateError("Invalid date: empty value")
    try:
        if len(value) == 10:
            return datetime.date.fromisoformat(value)
        return datetime.datetime.fromisoformat(value)
    except ValueError as err:
        raise InvalidDateError(f"Invalid date: {text!r}") from err


def validate_query(query: Mapping[str, Any]) -> dict[str, Any]:
    try:
        return QUERY_SCHEMA(dict(query))
    except vol.Invalid as err:
        raise InvalidRequestError(f"Invalid query: {err}") from err


def format_response(response: ZmanimResponse, tz=None) -> dict[str, Any]:
    """Replace every instant of a ZmanimResponse with its display string."""

    def render(value):
        return format_instant(value, tz)

    return {
        "date": response.date_display,
        "isoDate": response.date.isoformat(),
        "hebrewDate": response.hebrew_date,
        "hebrewDateHebrew": response.hebrew_date_hebrew,
        "parsha": response.parsha,
        "specialDay": response.special_day,
        "zmanim": response.zmanim.as_dict(render),
        "candleLighting": render(response.candle_lighting),
        "havdalah": render(response.havdalah),
        "isShabbat": response.is_shabbat,
        "isYomTov": response.is_yom_tov,
    }


def build_payload(
    calculator: ZmanimCalculator,
    query: Mapping[str, Any],
    today: datetime.date | datetime.datetime,
) -> dict[str, Any] | list[dict[str, Any]]:
    """Dispatch on `mode`; `today` is used when the query carries no date."""
    params = validate_query(query)
    date_param = params.get("date")
    reference = parse_date(date_param) if date_param else today
    tz = calculator.location.tzinfo

    if params["mode"] == MODE_WEEK:
        return [format_response(day, tz) for day in calculator.compute_for_week(reference)]

    if params["mode"] == MODE_SHABBAT:
        shabbat = calculator.find_upcoming_shabbat(reference)
        return {
            "parsha": shabbat.parsha,
            "date": format_long_date(shabbat.date, with_year=False),
            "candleLighting": format_instant(shabbat.candle_lighting, tz),
            "havdalah": format_instant(shabbat.havdalah, tz),
        }

    return format_response(calculator.compute_for_date(reference), tz)
