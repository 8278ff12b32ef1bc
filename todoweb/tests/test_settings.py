from datetime import date

import pytest

from todoweb.recurrence import SEARCH_HORIZON_DAYS
from todoweb.settings import Settings, get_settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("TODO_LOG_LEVEL", raising=False)
    monkeypatch.delenv("TZ", raising=False)
    settings = get_settings()
    assert settings.search_horizon_days == SEARCH_HORIZON_DAYS
    assert settings.log_level == "INFO"
    assert settings.timezone == "Europe/Zurich"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("TODO_SEARCH_HORIZON_DAYS", "30")
    monkeypatch.setenv("TODO_LOG_LEVEL", "warning")
    monkeypatch.setenv("TZ", "Asia/Tokyo")
    settings = get_settings()
    assert settings == Settings(search_horizon_days=30, log_level="WARNING", timezone="Asia/Tokyo")


@pytest.mark.parametrize("value", ["0", "-5", "ten", "\u00b2", "12\u0663"])
def test_rejects_bad_horizon(monkeypatch, value):
    monkeypatch.setenv("TODO_SEARCH_HORIZON_DAYS", value)
    with pytest.raises(RuntimeError):
        get_settings()


def test_rejects_unknown_timezone(monkeypatch):
    monkeypatch.setenv("TZ", "Mars/Olympus_Mons")
    with pytest.raises(RuntimeError):
        get_settings()


def test_today_is_a_date():
    assert isinstance(Settings().today(), date)
