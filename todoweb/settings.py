import os
import re
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from .recurrence import SEARCH_HORIZON_DAYS

BASE_DIR = Path(__file__).resolve().parent
ENV_PATH = BASE_DIR.parent / ".env"
_DIGITS_RE = re.compile(r"[0-9]{1,9}")
load_dotenv(ENV_PATH)


@dataclass(frozen=True)
class Settings:
    search_horizon_days: int = SEARCH_HORIZON_DAYS
    log_level: str = "INFO"
    timezone: str = "Europe/Zurich"

    def today(self) -> date:
        return datetime.now(ZoneInfo(self.timezone)).date()


def get_settings() -> Settings:
    horizon_raw = os.getenv("TODO_SEARCH_HORIZON_DAYS")
    horizon = Settings.search_horizon_days
    if horizon_raw:
        if not _DIGITS_RE.fullmatch(horizon_raw) or int(horizon_raw) <= 0:
            raise RuntimeError(f"TODO_SEARCH_HORIZON_DAYS must be a positive integer, got {horizon_raw!r}")
        horizon = int(horizon_raw)
    log_level = (os.getenv("TODO_LOG_LEVEL") or Settings.log_level).upper()
    timezone = os.getenv("TZ") or Settings.timezone
    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise RuntimeError(f"unknown timezone in TZ: {timezone!r}") from exc
    return Settings(search_horizon_days=horizon, log_level=log_level, timezone=timezone)
