# repository.py
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import DateTime, text
from sqlalchemy.pool import NullPool, StaticPool
from sqlmodel import Field, Session, SQLModel, create_engine, select

from domain import Settings, ShiftRecord
from exceptions import NotFound
from validators import validate_settings

logger = logging.getLogger(__name__)


class ShiftRecordDB(SQLModel, table=True):
    __tablename__ = "shift_record"

    id: str = Field(primary_key=True)
    work_date: date = Field(index=True)
    start_time: datetime = Field(sa_type=DateTime)
    end_time: datetime = Field(sa_type=DateTime)
    break_minutes: float = 0
    hourly_wage: int
    memo: Optional[str] = None


class AppSettingDB(SQLModel, table=True):
    __tablename__ = "app_setting"

    key: str = Field(primary_key=True)
    value: str


def build_engine(db_url: str, echo: bool = False):
    kwargs = {
        "echo": echo,
        "pool_pre_ping": True,
        "connect_args": {},
    }
    if db_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # in-memory databases live on one connection
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        # Serverless PG: no local pool, bounded connect
        kwargs["poolclass"] = NullPool
        kwargs["connect_args"] = {"connect_timeout": 10}
        if "sslmode=" not in db_url:
            db_url += ("&" if "?" in db_url else "?") + "sslmode=require"
    return create_engine(db_url, **kwargs)


def _to_domain(r: ShiftRecordDB) -> ShiftRecord:
    return ShiftRecord(
        id=r.id,
        work_date=r.work_date,
        start_time=r.start_time,
        end_time=r.end_time,
        break_minutes=float(r.break_minutes),
        hourly_wage=int(r.hourly_wage),
        memo=r.memo,
    )


def _order(stmt):
    return stmt.order_by(ShiftRecordDB.work_date.desc(), ShiftRecordDB.start_time.desc())


class ShiftRepository:
    """CRUD for shift records. Reads return detached, immutable ShiftRecord copies."""

    def __init__(self, engine):
        self.engine = engine
        SQLModel.metadata.create_all(self.engine)

    @classmethod
    def from_url(cls, url: str, echo: bool = False) -> "ShiftRepository":
        engine = build_engine(url, echo=echo)
        if not url.startswith("sqlite"):
            try:
                with engine.connect() as conn:
                    conn.execute(text("select 1"))
            except Exception as e:
                raise RuntimeError(f"Could not connect to database: {e}") from e
        return cls(engine)

    def add(self, s: ShiftRecord) -> None:
        with Session(self.engine) as session:
            session.add(ShiftRecordDB(
                id=s.id,
                work_date=s.work_date,
                start_time=s.start_time,
                end_time=s.end_time,
                break_minutes=s.break_minutes,
                hourly_wage=s.hourly_wage,
                memo=s.memo,
            ))
            session.commit()

    def update(self, s: ShiftRecord) -> None:
        with Session(self.engine) as session:
            row = session.get(ShiftRecordDB, s.id)
            if row is None:
                raise NotFound(s.id)
            row.work_date = s.work_date
            row.start_time = s.start_time
            row.end_time = s.end_time
            row.break_minutes = s.break_minutes
            row.hourly_wage = s.hourly_wage
            row.memo = s.memo
            session.add(row)
            session.commit()

    def delete(self, record_id: str) -> bool:
        """Returns False when there was nothing to delete."""
        with Session(self.engine) as session:
            row = session.get(ShiftRecordDB, record_id)
            if row is None:
                return False
            session.delete(row)
            session.commit()
            return True

    def get(self, record_id: str) -> Optional[ShiftRecord]:
        with Session(self.engine) as session:
            row = session.get(ShiftRecordDB, record_id)
            return _to_domain(row) if row is not None else None

    def list_all(self) -> List[ShiftRecord]:
        with Session(self.engine) as session:
            rows = session.exec(_order(select(ShiftRecordDB))).all()
            return [_to_domain(r) for r in rows]

    def list_between(self, start: date, end: date) -> List[ShiftRecord]:
        """Records with start <= work_date <= end, newest first."""
        with Session(self.engine) as session:
            rows = session.exec(_order(
                select(ShiftRecordDB)
                .where(ShiftRecordDB.work_date >= start, ShiftRecordDB.work_date <= end)
            )).all()
            return [_to_domain(r) for r in rows]

    def list_recent(self, limit: int) -> List[ShiftRecord]:
        with Session(self.engine) as session:
            rows = session.exec(_order(select(ShiftRecordDB)).limit(limit)).all()
            return [_to_domain(r) for r in rows]


class SettingsRepository:
    """Key/value store for the two app settings, in the same database."""

    WAGE_KEY = "default_hourly_wage"
    PAYDAY_KEY = "payday_day_of_month"

    def __init__(self, engine):
        self.engine = engine
        SQLModel.metadata.create_all(self.engine)

    def get_int(self, key: str, default: int) -> int:
        with Session(self.engine) as session:
            row = session.get(AppSettingDB, key)
            if row is None:
                return default
            try:
                return int(row.value)
            except ValueError:
                logger.warning("Ignoring non-integer setting %s=%r", key, row.value)
                return default

    def set_int(self, key: str, value: int) -> None:
        with Session(self.engine) as session:
            row = session.get(AppSettingDB, key)
            if row is None:
                row = AppSettingDB(key=key, value=str(int(value)))
            else:
                row.value = str(int(value))
            session.add(row)
            session.commit()

    def load(self, defaults: Settings) -> Settings:
        return Settings(
            default_hourly_wage=self.get_int(self.WAGE_KEY, defaults.default_hourly_wage),
            payday_day_of_month=self.get_int(self.PAYDAY_KEY, defaults.payday_day_of_month),
        )

    def save(self, settings: Settings) -> Settings:
        validate_settings(settings)
        self.set_int(self.WAGE_KEY, settings.default_hourly_wage)
        self.set_int(self.PAYDAY_KEY, settings.payday_day_of_month)
        logger.info(
            "Settings saved: wage=%s payday=%s",
            settings.default_hourly_wage, settings.payday_day_of_month,
        )
        return settings


__all__ = ["ShiftRecordDB", "AppSettingDB", "ShiftRepository", "SettingsRepository", "build_engine"]
