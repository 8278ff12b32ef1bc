from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from humanize import naturaldelta, ordinal

from ..dates import format_date
from ..models import Daily, Monthly, Once, RecurrenceRule, Weekly, Yearly

WEEKDAY_LABELS = {1: "Mon", 2: "Tue", 3: "Wed", 4: "Thu", 5: "Fri", 6: "Sat", 7: "Sun"}
MONTH_LABELS = {
    1: "Jan", 2: "Feb", 3: "Mar", 4: "Apr", 5: "May", 6: "Jun",
    7: "Jul", 8: "Aug", 9: "Sep", 10: "Oct", 11: "Nov", 12: "Dec",
}


def month_day_label(day: int) -> str:
    if day == -1:
        return "last day"
    if day < 0:
        return f"{ordinal(-day)}-to-last day"
    return f"day {day}"


def _month_day_order(day: int) -> tuple:
    # positive days first, then counted-from-end days nearest the end last
    return (day < 0, day)


def joined(labels: Iterable[str]) -> str:
    return ", ".join(labels)


def describe_rule(rule: RecurrenceRule) -> str:
    if isinstance(rule, Once):
        return "once"
    if isinstance(rule, Daily):
        return "every day" if rule.interval == 1 else f"every {rule.interval} days"
    if isinstance(rule, Yearly):
        return "every year"
    if isinstance(rule, Weekly):
        return f"weekly on {joined(WEEKDAY_LABELS[d] for d in sorted(rule.days))}"
    if isinstance(rule, Monthly):
        text = f"monthly on {joined(month_day_label(d) for d in sorted(rule.days, key=_month_day_order))}"
        if rule.months:
            text += f" in {joined(MONTH_LABELS[m] for m in sorted(rule.months))}"
        return text
    raise TypeError(f"unsupported recurrence rule: {rule!r}")


def format_next(next_day: Optional[date], reference: date) -> str:
    if next_day is None:
        return "no further occurrence"
    return f"{format_date(next_day)} (in {naturaldelta(next_day - reference)})"
