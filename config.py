# config.py
# Environment-driven settings, read once at import.
import logging
import os
from pathlib import Path

from domain import DEFAULT_HOURLY_WAGE, DEFAULT_PAYDAY, Settings
from exceptions import ValidationError
from validators import validate_settings

logger = logging.getLogger(__name__)


def _pick_data_dir() -> Path:
    """First writable of $DATA_DIR, /data (container volume mount), ./data."""
    candidates = []
    env = os.getenv("DATA_DIR")
    if env:
        candidates.append(Path(env))
    candidates += [Path("/data"), Path.cwd() / "data"]

    for p in candidates:
        try:
            p.mkdir(parents=True, exist_ok=True)
            t = p / ".rwtest"
            t.write_text("ok")
            t.unlink(missing_ok=True)
            return p
        except OSError:
            continue
    return Path.cwd()


DATA_DIR = _pick_data_dir()
DEFAULT_SQLITE = f"sqlite:///{(DATA_DIR / 'shifts.db').as_posix()}"
DB_URL = os.getenv("DATABASE_URL", DEFAULT_SQLITE)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

APP_TITLE = "알바 근무 기록"
APP_VERSION = "1.0.0"


def default_settings() -> Settings:
    """Settings used until the user saves their own.

    Invalid env values fall back to the built-in defaults.
    """
    try:
        return validate_settings(Settings(
            default_hourly_wage=int(os.getenv("DEFAULT_HOURLY_WAGE", DEFAULT_HOURLY_WAGE)),
            payday_day_of_month=int(os.getenv("DEFAULT_PAYDAY", DEFAULT_PAYDAY)),
        ))
    except (ValueError, ValidationError) as e:
        logger.warning("Ignoring invalid DEFAULT_HOURLY_WAGE/DEFAULT_PAYDAY: %s", e)
        return Settings()


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
