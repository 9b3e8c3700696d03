# validators.py
from __future__ import annotations

from datetime import datetime

from domain import Settings, ShiftFields
from exceptions import ValidationError

MAX_BREAK_MINUTES = 480


def require_end_after_start(start: datetime, end: datetime) -> None:
    if end <= start:
        raise ValidationError("퇴근 시간이 출근 시간보다 늦어야 합니다")


def require_positive_wage(wage: int, field_name: str = "시급") -> int:
    if wage is None or int(wage) <= 0:
        raise ValidationError(f"{field_name}은 0보다 커야 합니다")
    return int(wage)


def require_break_range(break_minutes: float) -> float:
    if break_minutes is None or not 0 <= break_minutes <= MAX_BREAK_MINUTES:
        raise ValidationError(f"휴게시간은 0~{MAX_BREAK_MINUTES}분 사이여야 합니다")
    return break_minutes


def require_payday(day: int) -> int:
    if day is None or not 1 <= int(day) <= 31:
        raise ValidationError("급여일은 1~31일 사이여야 합니다")
    return int(day)


def validate_shift_fields(fields: ShiftFields) -> ShiftFields:
    """Gate in front of every ledger write. Raises on the first broken rule."""
    require_end_after_start(fields.start_time, fields.end_time)
    require_positive_wage(fields.hourly_wage)
    require_break_range(fields.break_minutes)
    return fields


def validate_settings(settings: Settings) -> Settings:
    require_positive_wage(settings.default_hourly_wage, "기본 시급")
    require_payday(settings.payday_day_of_month)
    return settings
