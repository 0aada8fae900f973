from __future__ import annotations

import datetime
from datetime import timedelta, timezone

import pytest

from custom_components.toronto_zmanim.zmanim_lib import (
    CalendarEvent,
    ZmanimCalculator,
    ZmanimTimes,
)


@pytest.fixture(scope="session")
def calculator() -> ZmanimCalculator:
    return ZmanimCalculator()


def make_times(day: datetime.date) -> ZmanimTimes:
    """Twelve evenly spaced instants on `day` (UTC), one hour apart."""
    base = datetime.datetime(day.year, day.month, day.day, 8, 0, tzinfo=timezone.utc)
    return ZmanimTimes(*(base + timedelta(hours=i) for i in range(12)))


class FakeZmanimSource:
    def zmanim_for_date(self, day):
        return make_times(day)


class FakeEventSource:
    """Serves a fixed list of events, filtered to the requested range."""

    def __init__(self, events: list[CalendarEvent] | None = None) -> None:
        self.events = events or []
        self.calls: list[tuple[datetime.date, datetime.date]] = []

    def events_for_date_range(self, start, end):
        self.calls.append((start, end))
        return [ev for ev in self.events if start <= ev.date <= end]


@pytest.fixture
def fake_zmanim_source() -> FakeZmanimSource:
    return FakeZmanimSource()


@pytest.fixture
def fake_calculator_factory():
    def factory(events: list[CalendarEvent] | None = None):
        source = FakeEventSource(events)
        calc = ZmanimCalculator(
            zmanim_source=FakeZmanimSource(), event_source=source
        )
        return calc, source

    return factory
