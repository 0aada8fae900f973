# custom_components/toronto_zmanim/zmanim_lib/helper.py

"""
Formatting helpers shared by the calculator, the HTTP view and the sensors.

Hebrew-date lookups use pyluach.
"""

from __future__ import annotations

import datetime
from datetime import timedelta
from zoneinfo import ZoneInfo

from pyluach.hebrewcal import HebrewDate as PHebrewDate

from .location import TORONTO

PLACEHOLDER = "--:--"


def round_to_minute(dt: datetime.datetime) -> datetime.datetime:
    """Round dt to nearest minute: <30s floor, ≥30s ceil."""
    if dt.second >= 30:
        dt += timedelta(minutes=1)
    return dt.replace(second=0, microsecond=0)


def next_local_midnight(now: datetime.datetime, tz: ZoneInfo) -> datetime.datetime:
    """The first 00:00 in `tz` strictly after `now`."""
    tomorrow = now.astimezone(tz).date() + timedelta(days=1)
    return datetime.datetime.combine(tomorrow, datetime.time.min, tzinfo=tz)


def format_time(dt: datetime.datetime, tz: ZoneInfo, fmt: str = "12") -> str:
    """Format an instant in `tz`, either 12-hour (7:05 AM) or 24-hour (07:05)."""
    dt_local = dt.astimezone(tz)
    if fmt == "24":
        return dt_local.strftime("%H:%M")

    hour = dt_local.hour % 12 or 12
    minute = dt_local.minute
    ampm = "AM" if dt_local.hour < 12 else "PM"
    return f"{hour}:{minute:02d} {ampm}"


def format_instant(dt: datetime.datetime | None, tz: ZoneInfo | None = None) -> str:
    """
    Render a zman for display as `H:MM AM/PM` in the location's local time.

    Zmanim that don't apply on a given day (no candle lighting on a plain
    weekday, etc.) come through as None and render as the placeholder.
    """
    if dt is None:
        return PLACEHOLDER
    return format_time(dt, tz or TORONTO.tzinfo)


def format_long_date(day: datetime.date, *, with_year: bool = True) -> str:
    """E.g. 'Friday, December 13, 2024' (or 'Friday, December 13')."""
    text = f"{day.strftime('%A')}, {day.strftime('%B')} {day.day}"
    if with_year:
        text += f", {day.year}"
    return text


def int_to_hebrew(num: int) -> str:
    """
    Convert an integer (1–999) into Hebrew letters with geresh/gershayim.
    E.g. 5 → 'ה׳', 15 → 'ט״ו', 100 → 'ק׳', 785 → 'תשפ״ה'
    """
    if num <= 0:
        raise ValueError(f"Cannot express {num} in Hebrew numerals")

    mapping = [
        (400, "ת"), (300, "ש"), (200, "ר"), (100, "ק"),
        (90,  "צ"),  (80,  "פ"),  (70,  "ע"),  (60,  "ס"),  (50,  "נ"),
        (40,  "מ"),  (30,  "ל"),  (20,  "כ"),  (10,  "י"),
        (9,   "ט"),  (8,   "ח"),  (7,   "ז"),  (6,   "ו"),  (5,   "ה"),
        (4,   "ד"),  (3,   "ג"),  (2,   "ב"),  (1,   "א"),
    ]

    # 15 and 16 are always written ט״ו / ט״ז
    tail = num % 100
    if tail in (15, 16):
        temp = num - tail
        suffix = "טו" if tail == 15 else "טז"
    else:
        temp = num
        suffix = ""

    result = ""
    for value, letter in mapping:
        while temp >= value:
            result += letter
            temp -= value
    result += suffix

    # gershayim before the last letter for multi-letter, geresh after a single one
    if len(result) > 1:
        return f"{result[:-1]}״{result[-1]}"
    return f"{result}׳"


def hebrew_date_strings(day: datetime.date) -> tuple[str, str]:
    """
    Return (numeric, hebrew) forms of the Hebrew date for a civil day.
    Example: 2024-12-13 → ("12 Kislev 5785", "י״ב כסלו תשפ״ה").
    """
    hd = PHebrewDate.from_pydate(day)
    numeric = f"{hd.day} {hd.month_name()} {hd.year}"
    hebrew = (
        f"{int_to_hebrew(hd.day)} {hd.month_name(hebrew=True)} "
        f"{int_to_hebrew(hd.year % 1000)}"
    )
    return numeric, hebrew
