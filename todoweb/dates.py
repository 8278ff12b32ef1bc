from __future__ import annotations

import re
from datetime import date

DATE_LENGTH = 8
_DATE_RE = re.compile(r"[0-9]{8}")


class InvalidDateError(ValueError):
    pass


def parse_date(value: str | None) -> date:
    """Parse an 8-digit ``YYYYMMDD`` string into a calendar date."""
    if value is None or not _DATE_RE.fullmatch(value):
        raise InvalidDateError(f"date must be {DATE_LENGTH} digits in YYYYMMDD form: {value!r}")
    try:
        return date(int(value[:4]), int(value[4:6]), int(value[6:]))
    except ValueError as exc:
        raise InvalidDateError(f"not a calendar date: {value!r}") from exc


def format_date(value: date) -> str:
    # strftime("%Y") does not zero-pad years below 1000 on every platform
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"