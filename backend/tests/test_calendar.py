from datetime import date
from types import SimpleNamespace

import pytest

from bible_tracker.services.calendar_service import CalendarService
from bible_tracker.utils.date_utils import (
    MONTH_NAMES,
    days_in_month,
    first_weekday,
    format_date_key,
    is_date_future,
    is_date_past,
    is_date_today,
    month_bounds,
    shift_month,
)


@pytest.mark.parametrize("year, month, expected", [
    (2026, 2, 28),
    (2024, 2, 29),
    (2026, 10, 31),
    (2026, 11, 30),
])
def test_days_in_month(year, month, expected):
    assert days_in_month(year, month) == expected


def test_first_weekday_counts_from_sunday():
    # 1 Feb 2026 is a Sunday, 1 Oct 2026 a Thursday
    assert first_weekday(2026, 2) == 0
    assert first_weekday(2026, 10) == 4


def test_format_date_key_zero_pads():
    assert format_date_key(date(2026, 3, 7)) == "2026-03-07"


@pytest.mark.parametrize("year, month, delta, expected", [
    (2026, 10, 1, (2026, 11)),
    (2026, 12, 1, (2027, 1)),
    (2026, 1, -1, (2025, 12)),
    (2026, 5, -17, (2024, 12)),
])
def test_shift_month(year, month, delta, expected):
    assert shift_month(year, month, delta) == expected


def test_month_bounds():
    assert month_bounds(2026, 2) == (date(2026, 2, 1), date(2026, 2, 28))


def test_relative_day_checks():
    today = date(2026, 10, 19)

    assert is_date_today(2026, 10, 19, today=today)
    assert is_date_past(2026, 10, 18, today=today)
    assert is_date_future(2026, 10, 20, today=today)
    assert not is_date_future(2026, 10, 19, today=today)


def test_month_names():
    assert MONTH_NAMES[0] == "January"
    assert len(MONTH_NAMES) == 12


def test_group_by_day_keeps_order_and_skips_empty_days():
    readings = [
        SimpleNamespace(date_read=date(2026, 10, 3), chapters="1"),
        SimpleNamespace(date_read=date(2026, 10, 3), chapters="2"),
        SimpleNamespace(date_read=date(2026, 10, 9), chapters="7"),
    ]

    days = CalendarService.group_by_day(readings)

    assert list(days) == ["2026-10-03", "2026-10-09"]
    assert [r.chapters for r in days["2026-10-03"]] == ["1", "2"]


@pytest.mark.parametrize("year, month, delta, expected", [
    (2026, 10, 1, {"year": 2026, "month": 11}),
    (9999, 12, 1, None),
    (9999, 12, -1, {"year": 9999, "month": 11}),
    (1, 1, -1, None),
])
def test_month_ref_stays_in_supported_range(year, month, delta, expected):
    assert CalendarService.month_ref(year, month, delta) == expected


def test_format_date_key_pads_early_years():
    assert format_date_key(date(1, 2, 3)) == "0001-02-03"
