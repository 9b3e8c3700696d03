from dataclasses import replace
from datetime import date, datetime

import pytest

from domain import (
    Settings,
    ShiftFields,
    ShiftRecord,
    ShiftSummary,
    calculate_hours,
    calculate_pay,
)


def dt(h: int, m: int = 0) -> datetime:
    return datetime(2025, 3, 10, h, m)


def test_nine_to_six_with_one_hour_break():
    hours = calculate_hours(dt(9), dt(18), 60)
    assert hours == 8.0
    assert calculate_pay(hours, 12000) == 96000


def test_hours_never_negative_when_break_exceeds_shift():
    assert calculate_hours(dt(9), dt(10), 90) == 0.0


def test_hours_zero_exactly_when_break_equals_shift():
    assert calculate_hours(dt(9), dt(10), 60) == 0.0
    assert calculate_hours(dt(9), dt(10), 59) > 0.0


def test_pay_is_truncated_not_rounded():
    # 9:00-9:50 -> 0.8333 h * 10030 = 8358.33...
    hours = calculate_hours(dt(9), dt(9, 50), 0)
    assert calculate_pay(hours, 10030) == 8358
    assert calculate_pay(0.99999, 1) == 0


def test_record_derives_from_own_fields():
    r = ShiftRecord(work_date=date(2025, 3, 10), start_time=dt(13), end_time=dt(17, 30), hourly_wage=10000, break_minutes=30)
    assert r.worked_hours == pytest.approx(4.0)
    assert r.daily_pay == 40000


def test_record_ids_are_unique_and_records_frozen():
    a = ShiftRecord(work_date=date(2025, 3, 10), start_time=dt(9), end_time=dt(10), hourly_wage=1)
    b = ShiftRecord(work_date=date(2025, 3, 10), start_time=dt(9), end_time=dt(10), hourly_wage=1)
    assert a.id != b.id
    with pytest.raises(AttributeError):
        a.hourly_wage = 2


def test_from_fields_keeps_given_id_and_drops_empty_memo():
    fields = ShiftFields(work_date=date(2025, 3, 10), start_time=dt(9), end_time=dt(10), hourly_wage=5000, memo="")
    r = ShiftRecord.from_fields(fields, record_id="abc")
    assert r.id == "abc"
    assert r.memo is None
    assert r.to_fields() == replace(fields, memo=None)


def test_prefilled_takes_wage_from_settings():
    s = Settings(default_hourly_wage=11000, payday_day_of_month=10)
    fields = ShiftFields.prefilled(s, work_date=date(2025, 3, 10), start_time=dt(9), end_time=dt(12))
    assert fields.hourly_wage == 11000
    assert fields.daily_pay == 33000


def test_summary_addition():
    total = ShiftSummary(1, 2.5, 100) + ShiftSummary(2, 3.0, 50)
    assert total == ShiftSummary(3, 5.5, 150)
    assert ShiftSummary() == ShiftSummary(0, 0.0, 0)
