import datetime
from datetime import timedelta, timezone

import pytest

from custom_components.toronto_zmanim.zmanim_lib import (
    CalendarEvent,
    EventKind,
    HolidayFlag,
    InvalidDateError,
    ZmanimCalculator,
)

FRIDAY = datetime.date(2024, 12, 13)
SHABBOS = datetime.date(2024, 12, 14)
PLAIN_WEDNESDAY = datetime.date(2024, 12, 18)
WHEN = datetime.datetime(2024, 12, 13, 21, 24, tzinfo=timezone.utc)


# ─── Event scan (fake sources) ─────────────────────────────────────────────

def test_saturday_is_shabbat_without_any_events(fake_calculator_factory):
    calc, _ = fake_calculator_factory([])
    assert calc.compute_for_date(SHABBOS).is_shabbat is True
    assert calc.compute_for_date(PLAIN_WEDNESDAY).is_shabbat is False


def test_candle_lighting_on_friday_marks_shabbat(fake_calculator_factory):
    calc, _ = fake_calculator_factory(
        [CalendarEvent(FRIDAY, EventKind.CANDLE_LIGHTING, "Candle lighting", time=WHEN)]
    )
    result = calc.compute_for_date(FRIDAY)
    assert result.candle_lighting == WHEN
    assert result.is_shabbat is True
    assert result.is_yom_tov is False


def test_candle_lighting_on_weekday_marks_yom_tov(fake_calculator_factory):
    calc, _ = fake_calculator_factory(
        [CalendarEvent(PLAIN_WEDNESDAY, EventKind.CANDLE_LIGHTING, "Candle lighting", time=WHEN)]
    )
    result = calc.compute_for_date(PLAIN_WEDNESDAY)
    assert result.is_yom_tov is True
    assert result.is_shabbat is False


def test_first_match_wins_per_category(fake_calculator_factory):
    later = WHEN + timedelta(hours=1)
    calc, _ = fake_calculator_factory(
        [
            CalendarEvent(SHABBOS, EventKind.PORTION, "Vayishlach"),
            CalendarEvent(SHABBOS, EventKind.PORTION, "Vayeishev"),
            CalendarEvent(SHABBOS, EventKind.HAVDALAH, "Havdalah", time=WHEN),
            CalendarEvent(SHABBOS, EventKind.HAVDALAH, "Havdalah", time=later),
            CalendarEvent(SHABBOS, EventKind.HOLIDAY, "Purim", flag=HolidayFlag.MINOR_HOLIDAY),
            CalendarEvent(SHABBOS, EventKind.HOLIDAY, "Taanis Esther", flag=HolidayFlag.MINOR_FAST),
        ]
    )
    result = calc.compute_for_date(SHABBOS)
    assert result.parsha == "Vayishlach"
    assert result.havdalah == WHEN
    assert result.special_day == "Purim"
    assert result.is_yom_tov is False


def test_chag_sets_label_and_yom_tov(fake_calculator_factory):
    calc, _ = fake_calculator_factory(
        [CalendarEvent(PLAIN_WEDNESDAY, EventKind.HOLIDAY, "Shavuos", flag=HolidayFlag.CHAG)]
    )
    result = calc.compute_for_date(PLAIN_WEDNESDAY)
    assert result.special_day == "Shavuos"
    assert result.is_yom_tov is True


def test_unlabelled_flags_are_ignored(fake_calculator_factory):
    calc, _ = fake_calculator_factory(
        [
            CalendarEvent(PLAIN_WEDNESDAY, EventKind.HOLIDAY, "Succos", flag=HolidayFlag.CHOL_HAMOED),
            CalendarEvent(PLAIN_WEDNESDAY, EventKind.HOLIDAY, "Chanuka", flag=HolidayFlag.CHANUKAH),
            CalendarEvent(PLAIN_WEDNESDAY, EventKind.HOLIDAY, "Rosh Chodesh Teves", flag=HolidayFlag.ROSH_CHODESH),
        ]
    )
    result = calc.compute_for_date(PLAIN_WEDNESDAY)
    assert result.special_day is None
    assert result.is_yom_tov is False


def test_events_requested_for_single_day(fake_calculator_factory):
    calc, source = fake_calculator_factory([])
    calc.compute_for_date(FRIDAY)
    assert source.calls == [(FRIDAY, FRIDAY)]


def test_injected_zmanim_source_feeds_default_events(fake_zmanim_source):
    calc = ZmanimCalculator(zmanim_source=fake_zmanim_source)
    result = calc.compute_for_date(FRIDAY)
    assert result.candle_lighting == result.zmanim.sunset - timedelta(minutes=18)


# ─── Date normalization ────────────────────────────────────────────────────

def test_aware_datetime_is_reduced_to_toronto_day(fake_calculator_factory):
    calc, source = fake_calculator_factory([])
    # 03:00 UTC on the 14th is still the evening of the 13th in Toronto
    late = datetime.datetime(2024, 12, 14, 3, 0, tzinfo=timezone.utc)
    assert calc.compute_for_date(late).date == FRIDAY
    assert source.calls == [(FRIDAY, FRIDAY)]


def test_naive_datetime_is_local_wall_time(fake_calculator_factory):
    calc, _ = fake_calculator_factory([])
    assert calc.compute_for_date(datetime.datetime(2024, 12, 13, 23, 30)).date == FRIDAY


@pytest.mark.parametrize("bad", ["2024-12-13", 20241213, None])
def test_non_date_input_is_rejected(fake_calculator_factory, bad):
    calc, _ = fake_calculator_factory([])
    with pytest.raises(InvalidDateError):
        calc.compute_for_date(bad)


# ─── Real calendar ─────────────────────────────────────────────────────────

def test_winter_friday_in_toronto(calculator):
    result = calculator.compute_for_date(FRIDAY)

    assert result.is_shabbat is True
    assert result.candle_lighting is not None
    # lit shortly before sunset, inside the configured offset window
    before_sunset = result.zmanim.sunset - result.candle_lighting
    assert timedelta(minutes=17) <= before_sunset <= timedelta(minutes=19)
    assert result.havdalah is None
    assert result.date_display == "Friday, December 13, 2024"


def test_following_saturday_has_havdalah_and_parsha(calculator):
    result = calculator.compute_for_date(SHABBOS)

    assert result.is_shabbat is True
    assert result.havdalah is not None
    assert result.havdalah > result.zmanim.sunset
    assert result.parsha == "Vayishlach"


def test_plain_weekday(calculator):
    result = calculator.compute_for_date(PLAIN_WEDNESDAY)

    assert result.candle_lighting is None
    assert result.havdalah is None
    assert result.parsha is None
    assert result.special_day is None
    assert result.is_shabbat is False
    assert result.is_yom_tov is False


def test_first_day_of_succos(calculator):
    result = calculator.compute_for_date(datetime.date(2024, 10, 17))

    assert result.is_yom_tov is True
    assert result.special_day is not None
    assert result.candle_lighting is not None
    assert result.candle_lighting > result.zmanim.sunset


def test_erev_yom_tov_on_a_weekday(calculator):
    result = calculator.compute_for_date(datetime.date(2024, 10, 16))
    assert result.candle_lighting is not None
    assert result.is_yom_tov is True
    assert result.is_shabbat is False


def test_minor_fast_sets_label_only(calculator):
    result = calculator.compute_for_date(datetime.date(2024, 10, 6))
    assert result.special_day is not None
    assert result.is_yom_tov is False
    assert result.candle_lighting is None


def test_taanis_bechoros_labels_erev_pesach(calculator):
    result = calculator.compute_for_date(datetime.date(2026, 4, 1))
    assert result.special_day == "Taanis Bechoros"
    assert result.is_yom_tov is True  # candle lighting for the first night


def test_taanis_bechoros_on_thursday_when_erev_pesach_is_shabbos(calculator):
    assert calculator.compute_for_date(datetime.date(2021, 3, 25)).special_day == "Taanis Bechoros"
    assert calculator.compute_for_date(datetime.date(2021, 3, 27)).special_day is None


def test_yom_kippur_on_shabbos(calculator):
    result = calculator.compute_for_date(datetime.date(2024, 10, 12))
    assert result.is_shabbat is True
    assert result.is_yom_tov is True
    assert result.havdalah is not None


def test_compute_for_date_is_pure(calculator):
    assert calculator.compute_for_date(FRIDAY) == calculator.compute_for_date(FRIDAY)


def test_week_is_seven_consecutive_days(calculator):
    week = calculator.compute_for_week(FRIDAY)

    assert [r.date for r in week] == [FRIDAY + timedelta(days=i) for i in range(7)]
    for earlier, later in zip(week, week[1:]):
        assert later.date - earlier.date == timedelta(days=1)
        assert earlier.zmanim.sunrise < later.zmanim.sunrise


# ─── Upcoming Shabbos ──────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "reference, friday",
    [
        (datetime.date(2024, 12, 9), datetime.date(2024, 12, 13)),   # Monday
        (datetime.date(2024, 12, 13), datetime.date(2024, 12, 13)),  # Friday itself
        (datetime.date(2024, 12, 14), datetime.date(2024, 12, 20)),  # Saturday → next week
        (datetime.date(2024, 12, 15), datetime.date(2024, 12, 20)),  # Sunday
    ],
)
def test_upcoming_shabbat_picks_the_right_friday(fake_calculator_factory, reference, friday):
    calc, _ = fake_calculator_factory([])
    result = calc.find_upcoming_shabbat(reference)
    assert result.erev == friday
    assert result.date == friday + timedelta(days=1)


def test_upcoming_shabbat_on_a_friday_uses_that_friday(calculator):
    result = calculator.find_upcoming_shabbat(FRIDAY)

    assert result.candle_lighting == calculator.compute_for_date(FRIDAY).candle_lighting
    assert result.havdalah == calculator.compute_for_date(SHABBOS).havdalah
    assert result.parsha == "Vayishlach"


def test_upcoming_shabbat_parsha_prefers_saturday(fake_calculator_factory):
    calc, _ = fake_calculator_factory(
        [
            CalendarEvent(FRIDAY, EventKind.PORTION, "Vayeitzei"),
            CalendarEvent(SHABBOS, EventKind.PORTION, "Vayishlach"),
        ]
    )
    assert calc.find_upcoming_shabbat(FRIDAY).parsha == "Vayishlach"


def test_upcoming_shabbat_parsha_falls_back_to_friday(fake_calculator_factory):
    calc, _ = fake_calculator_factory(
        [CalendarEvent(FRIDAY, EventKind.PORTION, "Vayeitzei")]
    )
    assert calc.find_upcoming_shabbat(datetime.date(2024, 12, 10)).parsha == "Vayeitzei"


def test_upcoming_shabbat_near_the_end_of_the_calendar(fake_calculator_factory):
    calc, _ = fake_calculator_factory([])
    with pytest.raises(InvalidDateError):
        calc.find_upcoming_shabbat(datetime.date.max)


def test_week_running_past_the_end_of_the_calendar(fake_calculator_factory):
    calc, source = fake_calculator_factory([])
    with pytest.raises(InvalidDateError):
        calc.compute_for_week(datetime.date.max - timedelta(days=1))
    assert source.calls == []
