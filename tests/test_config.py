import logging
from datetime import date

import pytest

import config
from domain import Settings
from utils import next_payday


def test_default_settings_from_environment(monkeypatch):
    monkeypatch.setenv("DEFAULT_HOURLY_WAGE", "12500")
    monkeypatch.setenv("DEFAULT_PAYDAY", "10")
    assert config.default_settings() == Settings(default_hourly_wage=12500, payday_day_of_month=10)


def test_default_settings_fallback(monkeypatch):
    monkeypatch.delenv("DEFAULT_HOURLY_WAGE", raising=False)
    monkeypatch.delenv("DEFAULT_PAYDAY", raising=False)
    assert config.default_settings() == Settings()


def test_configure_logging_quiets_sqlalchemy():
    config.configure_logging("DEBUG")
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_default_database_lives_in_data_dir():
    assert config.DEFAULT_SQLITE.startswith("sqlite:///")
    assert config.DEFAULT_SQLITE.endswith("shifts.db")


@pytest.mark.parametrize("payday", ["0", "32", "40"])
def test_out_of_range_payday_falls_back(monkeypatch, payday):
    monkeypatch.delenv("DEFAULT_HOURLY_WAGE", raising=False)
    monkeypatch.setenv("DEFAULT_PAYDAY", payday)
    settings = config.default_settings()
    assert settings == Settings()
    assert next_payday(date(2025, 3, 10), settings.payday_day_of_month) == date(2025, 3, 25)


@pytest.mark.parametrize("wage", ["abc", "0", "-500"])
def test_invalid_default_wage_falls_back(monkeypatch, wage):
    monkeypatch.setenv("DEFAULT_HOURLY_WAGE", wage)
    monkeypatch.delenv("DEFAULT_PAYDAY", raising=False)
    assert config.default_settings() == Settings()
