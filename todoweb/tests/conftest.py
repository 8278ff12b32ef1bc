import os

os.environ["TZ"] = "Europe/Zurich"
os.environ.setdefault("TODO_LOG_LEVEL", "DEBUG")

from datetime import date

import pytest


@pytest.fixture
def today():
    return date(2024, 1, 20)


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch):
    monkeypatch.delenv("TODO_SEARCH_HORIZON_DAYS", raising=False)
