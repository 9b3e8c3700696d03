# utils.py
import calendar
from datetime import date
from typing import Iterable

import pandas as pd

from domain import ShiftRecord

WEEKDAYS_KO = ["월", "화", "수", "목", "금", "토", "일"]


def format_currency(amount: int, unit: str = "원") -> str:
    """1234000 -> '1,234,000원'"""
    return f"{int(amount):,}{unit}"


def format_hours(hours: float, unit: str = "시간") -> str:
    return f"{hours:.1f}{unit}"


def month_range(year: int, month: int) -> tuple[date, date]:
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Moves (year, month) by ``delta`` months."""
    idx = year * 12 + (month - 1) + delta
    return idx // 12, idx % 12 + 1


def month_grid(year: int, month: int) -> list[list[int]]:
    """Sunday-first weeks of the month; 0 marks cells outside it."""
    return calendar.Calendar(firstweekday=6).monthdayscalendar(year, month)


def next_payday(today: date, payday: int) -> date:
    """Next payday on or after ``today``; short months pay on their last day."""
    def in_month(y: int, m: int) -> date:
        return date(y, m, min(payday, calendar.monthrange(y, m)[1]))

    candidate = in_month(today.year, today.month)
    if candidate < today:
        y, m = shift_month(today.year, today.month, 1)
        candidate = in_month(y, m)
    return candidate


def weekday_label(d: date) -> str:
    return WEEKDAYS_KO[d.weekday()]


def shifts_to_dataframe(shifts: Iterable[ShiftRecord]) -> pd.DataFrame:
    rows = []
    for s in shifts:
        rows.append({
            "ID": s.id,
            "Date": s.work_date.isoformat(),
            "Day": weekday_label(s.work_date),
            "Start": s.start_time.strftime("%H:%M"),
            "End": s.end_time.strftime("%H:%M"),
            "Break (min)": int(s.break_minutes),
            "Hours": round(s.worked_hours, 2),
            "Wage": s.hourly_wage,
            "Pay": s.daily_pay,
            "Memo": s.memo or "",
        })
    df = pd.DataFrame(rows)
    if not df.empty:
        df = df.sort_values(["Date", "Start"], ascending=False).reset_index(drop=True)
    return df
