# domain.py
from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime

DEFAULT_HOURLY_WAGE = 10030
DEFAULT_PAYDAY = 25


def calculate_hours(start: datetime, end: datetime, break_minutes: float = 0) -> float:
    """Net worked hours: (end - start) minus the break, never below zero."""
    interval = (end - start).total_seconds()
    return max(interval / 3600.0 - break_minutes / 60.0, 0.0)


def calculate_pay(hours: float, wage: int) -> int:
    """Pay for the given hours, truncated to a whole currency unit."""
    return math.floor(hours * wage)


def new_record_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Settings:
    """User preferences. The wage only prefills new shifts; payday is display-only."""
    default_hourly_wage: int = DEFAULT_HOURLY_WAGE
    payday_day_of_month: int = DEFAULT_PAYDAY


@dataclass(frozen=True)
class ShiftFields:
    """Editable part of a shift, as entered on the form."""
    work_date: date
    start_time: datetime
    end_time: datetime
    break_minutes: float = 0
    hourly_wage: int = DEFAULT_HOURLY_WAGE
    memo: str | None = None

    @classmethod
    def prefilled(
        cls,
        settings: Settings,
        work_date: date,
        start_time: datetime,
        end_time: datetime,
        break_minutes: float = 0,
        memo: str | None = None,
    ) -> "ShiftFields":
        return cls(
            work_date=work_date,
            start_time=start_time,
            end_time=end_time,
            break_minutes=break_minutes,
            hourly_wage=settings.default_hourly_wage,
            memo=memo,
        )

    @property
    def worked_hours(self) -> float:
        return calculate_hours(self.start_time, self.end_time, self.break_minutes)

    @property
    def daily_pay(self) -> int:
        return calculate_pay(self.worked_hours, self.hourly_wage)


@dataclass(frozen=True)
class ShiftRecord:
    """One logged work shift. The wage is the one in force when it was logged."""
    work_date: date
    start_time: datetime
    end_time: datetime
    hourly_wage: int
    break_minutes: float = 0
    memo: str | None = None
    id: str = field(default_factory=new_record_id)

    @classmethod
    def from_fields(cls, fields: ShiftFields, record_id: str | None = None) -> "ShiftRecord":
        return cls(
            id=record_id or new_record_id(),
            work_date=fields.work_date,
            start_time=fields.start_time,
            end_time=fields.end_time,
            break_minutes=fields.break_minutes,
            hourly_wage=fields.hourly_wage,
            memo=fields.memo or None,
        )

    def to_fields(self) -> ShiftFields:
        return ShiftFields(
            work_date=self.work_date,
            start_time=self.start_time,
            end_time=self.end_time,
            break_minutes=self.break_minutes,
            hourly_wage=self.hourly_wage,
            memo=self.memo,
        )

    @property
    def worked_hours(self) -> float:
        return calculate_hours(self.start_time, self.end_time, self.break_minutes)

    @property
    def daily_pay(self) -> int:
        return calculate_pay(self.worked_hours, self.hourly_wage)


@dataclass(frozen=True)
class ShiftSummary:
    """Totals over a set of shifts. Summaries of disjoint sets add up."""
    count: int = 0
    total_hours: float = 0.0
    total_pay: int = 0

    def __add__(self, other: "ShiftSummary") -> "ShiftSummary":
        if not isinstance(other, ShiftSummary):
            return NotImplemented
        return ShiftSummary(
            count=self.count + other.count,
            total_hours=self.total_hours + other.total_hours,
            total_pay=self.total_pay + other.total_pay,
        )
