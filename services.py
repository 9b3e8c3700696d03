# services.py
from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from domain import ShiftFields, ShiftRecord, ShiftSummary
from exceptions import NotFound
from repository import ShiftRepository
from utils import month_range

logger = logging.getLogger(__name__)

Predicate = Callable[[ShiftRecord], bool]


def in_month(year: int, month: int) -> Predicate:
    return lambda r: r.work_date.year == year and r.work_date.month == month


def on_date(day: date) -> Predicate:
    return lambda r: r.work_date == day


class ShiftLedger:
    """Stores shift records and derives daily/monthly figures from them.

    Writes go straight to the repository. Reads take a fresh snapshot on every
    call, so callers re-query after a mutation instead of holding live views.
    Input is expected to have passed ``validators.validate_shift_fields``.
    """

    def __init__(self, repo: ShiftRepository):
        self.repo = repo

    # ---- writes ----

    def create(self, fields: ShiftFields) -> ShiftRecord:
        record = ShiftRecord.from_fields(fields)
        self.repo.add(record)
        logger.info("Created shift %s on %s (%.2f h)", record.id, record.work_date, record.worked_hours)
        return record

    def update(self, record_id: str, fields: ShiftFields) -> ShiftRecord:
        """Overwrites every editable field. Raises NotFound for unknown ids."""
        record = ShiftRecord.from_fields(fields, record_id=record_id)
        try:
            self.repo.update(record)
        except NotFound:
            logger.warning("Update of missing shift %s", record_id)
            raise
        logger.info("Updated shift %s", record_id)
        return record

    def delete(self, record_id: str) -> None:
        if self.repo.delete(record_id):
            logger.info("Deleted shift %s", record_id)
        else:
            logger.debug("Delete of missing shift %s ignored", record_id)

    # ---- reads ----

    def get(self, record_id: str) -> ShiftRecord:
        record = self.repo.get(record_id)
        if record is None:
            raise NotFound(record_id)
        return record

    def query(self, predicate: Optional[Predicate] = None) -> Iterator[ShiftRecord]:
        """Records matching ``predicate``, newest work date first.

        The snapshot is read here; the returned iterator filters it lazily.
        """
        return self._filter(self.repo.list_all(), predicate)

    def month(self, year: int, month: int, predicate: Optional[Predicate] = None) -> Iterator[ShiftRecord]:
        first, last = month_range(year, month)
        return self._filter(self.repo.list_between(first, last), predicate)

    def on_day(self, day: date) -> List[ShiftRecord]:
        return self.repo.list_between(day, day)

    def recent(self, limit: int = 5) -> List[ShiftRecord]:
        return self.repo.list_recent(limit)

    def month_summary(self, year: int, month: int) -> ShiftSummary:
        return self.aggregate(self.month(year, month))

    @staticmethod
    def _filter(snapshot: List[ShiftRecord], predicate: Optional[Predicate]) -> Iterator[ShiftRecord]:
        if predicate is None:
            return iter(snapshot)
        return (r for r in snapshot if predicate(r))

    # ---- pure aggregation ----

    @staticmethod
    def aggregate(records: Iterable[ShiftRecord]) -> ShiftSummary:
        """Sums per-record hours and pay. Hours are not recomputed from summed intervals."""
        count, hours, pay = 0, 0.0, 0
        for r in records:
            count += 1
            hours += r.worked_hours
            pay += r.daily_pay
        return ShiftSummary(count=count, total_hours=hours, total_pay=pay)

    @staticmethod
    def group_by_calendar_day(records: Iterable[ShiftRecord]) -> Dict[int, List[ShiftRecord]]:
        """Buckets records by day of month of ``work_date``, keeping input order."""
        buckets: Dict[int, List[ShiftRecord]] = {}
        for r in records:
            buckets.setdefault(r.work_date.day, []).append(r)
        return buckets
