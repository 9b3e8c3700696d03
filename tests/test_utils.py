from datetime import date, time

import pytest

from domain import ShiftRecord
from utils import (
    format_currency,
    format_hours,
    month_grid,
    month_range,
    next_payday,
    shift_month,
    shifts_to_dataframe,
    weekday_label,
)

from factories import make_fields


def test_format_currency_groups_digits():
    assert format_currency(1234000) == "1,234,000원"
    assert format_currency(0) == "0원"
    assert format_currency(96000, " KRW") == "96,000 KRW"


def test_format_hours_one_decimal():
    assert format_hours(8.0) == "8.0시간"
    assert format_hours(7.26, "h") == "7.3h"


def test_month_range_handles_leap_years():
    assert month_range(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_range(2025, 12) == (date(2025, 12, 1), date(2025, 12, 31))


@pytest.mark.parametrize("start,delta,expected", [
    ((2025, 1), -1, (2024, 12)),
    ((2025, 12), 1, (2026, 1)),
    ((2025, 6), 0, (2025, 6)),
    ((2025, 3), -15, (2023, 12)),
])
def test_shift_month(start, delta, expected):
    assert shift_month(*start, delta) == expected


def test_month_grid_is_sunday_first():
    # March 2025 starts on a Saturday
    weeks = month_grid(2025, 3)
    assert weeks[0] == [0, 0, 0, 0, 0, 0, 1]
    assert weeks[1][0] == 2
    days = [d for w in weeks for d in w if d]
    assert days == list(range(1, 32))


def test_next_payday():
    assert next_payday(date(2025, 3, 10), 25) == date(2025, 3, 25)
    assert next_payday(date(2025, 3, 25), 25) == date(2025, 3, 25)
    assert next_payday(date(2025, 3, 26), 25) == date(2025, 4, 25)
    # clamps to short months
    assert next_payday(date(2025, 2, 1), 31) == date(2025, 2, 28)
    assert next_payday(date(2025, 12, 31), 30) == date(2026, 1, 30)


def test_weekday_label():
    assert weekday_label(date(2025, 3, 10)) == "월"
    assert weekday_label(date(2025, 3, 16)) == "일"


def test_shifts_to_dataframe():
    older = ShiftRecord.from_fields(make_fields(day=date(2025, 3, 1), memo="마감"))
    newer = ShiftRecord.from_fields(make_fields(day=date(2025, 3, 2), start=time(10), end=time(14), break_minutes=0))
    df = shifts_to_dataframe([older, newer])

    assert list(df["Date"]) == ["2025-03-02", "2025-03-01"]
    assert list(df["Hours"]) == [4.0, 8.0]
    assert list(df["Pay"]) == [48000, 96000]
    assert list(df["Memo"]) == ["", "마감"]


def test_shifts_to_dataframe_empty():
    assert shifts_to_dataframe([]).empty
