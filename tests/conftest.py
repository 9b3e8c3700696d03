import pytest

from repository import SettingsRepository, ShiftRepository, build_engine
from services import ShiftLedger


@pytest.fixture
def engine():
    eng = build_engine("sqlite://")
    yield eng
    eng.dispose()


@pytest.fixture
def repo(engine) -> ShiftRepository:
    return ShiftRepository(engine)


@pytest.fixture
def settings_repo(engine) -> SettingsRepository:
    return SettingsRepository(engine)


@pytest.fixture
def ledger(repo) -> ShiftLedger:
    return ShiftLedger(repo)
