from __future__ import annotations

import calendar
import logging
import re
from datetime import MAXYEAR, date, datetime, timedelta
from typing import Callable, Dict, FrozenSet, List, Optional, Sequence

from dateutil import rrule
from dateutil.relativedelta import relativedelta

from .models import Daily, ErrorReason, Monthly, Once, RecurrenceRule, RuleKind, Weekly, Yearly

log = logging.getLogger(__name__)

MAX_INTERVAL = 400
# Forward search bound, about ten years. An occurrence further away than this
# is reported as SEARCH_LIMIT_EXCEEDED instead of being searched for.
SEARCH_HORIZON_DAYS = 3660

# longer tokens are never valid rule values
_INTEGER_RE = re.compile(r"-?[0-9]{1,4}")
_ISO_WEEKDAYS = (rrule.MO, rrule.TU, rrule.WE, rrule.TH, rrule.FR, rrule.SA, rrule.SU)


class RecurrenceError(ValueError):
    def __init__(self, reason: ErrorReason, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class RuleParseError(RecurrenceError):
    pass


class AdvanceError(RecurrenceError):
    pass


def _parse_list(token: str, reason: ErrorReason) -> List[int]:
    values = []
    for item in token.split(","):
        if not _INTEGER_RE.fullmatch(item):
            raise RuleParseError(reason, f"not an integer: {item!r}")
        values.append(int(item))
    return values


def _parse_daily(args: Sequence[str]) -> Daily:
    if len(args) != 1:
        raise RuleParseError(ErrorReason.INVALID_INTERVAL, "rule 'd' takes exactly one interval")
    values = _parse_list(args[0], ErrorReason.INVALID_INTERVAL)
    if len(values) != 1 or not 1 <= values[0] <= MAX_INTERVAL:
        raise RuleParseError(
            ErrorReason.INVALID_INTERVAL, f"interval must be between 1 and {MAX_INTERVAL}: {args[0]!r}"
        )
    return Daily(interval=values[0])


def _parse_yearly(args: Sequence[str]) -> Yearly:
    if args:
        raise RuleParseError(ErrorReason.UNEXPECTED_ARGUMENT, f"rule 'y' takes no arguments: {' '.join(args)!r}")
    return Yearly()


def _parse_weekly(args: Sequence[str]) -> Weekly:
    if len(args) != 1:
        raise RuleParseError(ErrorReason.INVALID_WEEKDAY, "rule 'w' takes one list of weekdays")
    days = _parse_list(args[0], ErrorReason.INVALID_WEEKDAY)
    for day in days:
        if not 1 <= day <= 7:
            raise RuleParseError(ErrorReason.INVALID_WEEKDAY, f"weekday must be between 1 and 7: {day}")
    return Weekly(days=frozenset(days))


def _parse_monthly(args: Sequence[str]) -> Monthly:
    if not args:
        raise RuleParseError(ErrorReason.INVALID_MONTH_DAY, "rule 'm' needs at least one day of month")
    if len(args) > 2:
        raise RuleParseError(ErrorReason.UNEXPECTED_ARGUMENT, f"rule 'm' takes at most two lists: {' '.join(args)!r}")
    days = _parse_list(args[0], ErrorReason.INVALID_MONTH_DAY)
    for day in days:
        if day == 0 or not -31 <= day <= 31:
            raise RuleParseError(ErrorReason.INVALID_MONTH_DAY, f"day of month must be in -31..-1 or 1..31: {day}")
    months: List[int] = []
    if len(args) == 2:
        months = _parse_list(args[1], ErrorReason.INVALID_MONTH)
        for month in months:
            if not 1 <= month <= 12:
                raise RuleParseError(ErrorReason.INVALID_MONTH, f"month must be between 1 and 12: {month}")
    return Monthly(days=frozenset(days), months=frozenset(months))


_PARSERS: Dict[str, Callable[[Sequence[str]], RecurrenceRule]] = {
    RuleKind.DAILY.value: _parse_daily,
    RuleKind.YEARLY.value: _parse_yearly,
    RuleKind.WEEKLY.value: _parse_weekly,
    RuleKind.MONTHLY.value: _parse_monthly,
}


def parse_rule(value: str | None) -> RecurrenceRule:
    """Parse a rule such as ``"d 7"``, ``"w 1,3"`` or ``"m -1 2,8"``.

    An empty rule means the task does not repeat. Every argument is validated
    here, so a rule returned by this function can always be advanced.
    """
    if not value or not value.strip():
        return Once()
    kind, *args = value.split()
    parser = _PARSERS.get(kind)
    if parser is None:
        raise RuleParseError(ErrorReason.UNKNOWN_RULE_KIND, f"unknown rule kind: {kind!r}")
    return parser(args)


def _calendar_date(value: object, reason: ErrorReason, label: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise AdvanceError(reason, f"{label} is not a calendar date: {value!r}")


def _as_datetime(value: date) -> datetime:
    return datetime(value.year, value.month, value.day)


def _add_days(value: date, days: int) -> Optional[date]:
    try:
        return value + timedelta(days=days)
    except OverflowError:
        return None


def _advance_daily(reference: date, anchor: date, interval: int) -> Optional[date]:
    current: Optional[date] = anchor
    if reference >= anchor:
        skipped = (reference - anchor).days // interval
        current = _add_days(anchor, skipped * interval)
    while current is not None and current <= reference:
        current = _add_days(current, interval)
    return current


def _advance_yearly(reference: date, anchor: date) -> Optional[date]:
    years = max(0, reference.year - anchor.year - 1)
    while anchor.year + years <= MAXYEAR:
        # relativedelta clamps Feb 29 to Feb 28, always counted from the anchor
        candidate = anchor + relativedelta(years=years)
        if candidate > reference:
            return candidate
        years += 1
    return None


def _advance_weekly(start: date, limit: date, days: FrozenSet[int]) -> Optional[date]:
    rule = rrule.rrule(
        rrule.WEEKLY,
        byweekday=[_ISO_WEEKDAYS[day - 1] for day in sorted(days)],
        dtstart=_as_datetime(start),
        until=_as_datetime(limit),
    )
    found = rule.after(_as_datetime(start), inc=True)
    return found.date() if found else None


def _month_day_exists(days: FrozenSet[int], months: FrozenSet[int]) -> bool:
    # 2000 is a leap year, so February is at its longest
    return any(
        abs(day) <= calendar.monthrange(2000, month)[1] for day in days for month in (months or range(1, 13))
    )


def _advance_monthly(start: date, limit: date, days: FrozenSet[int], months: FrozenSet[int]) -> Optional[date]:
    rule = rrule.rrule(
        rrule.MONTHLY,
        bymonthday=sorted(days),
        bymonth=sorted(months) or None,
        dtstart=_as_datetime(start),
        until=_as_datetime(limit),
    )
    found = rule.after(_as_datetime(start), inc=True)
    return found.date() if found else None


def next_occurrence(
    reference: date,
    anchor: date,
    rule: RecurrenceRule,
    horizon_days: int = SEARCH_HORIZON_DAYS,
) -> Optional[date]:
    """Return the first occurrence of ``rule`` strictly after ``reference``.

    Occurrences are never earlier than ``anchor``; an anchor that is already
    after the reference is returned as is when the rule allows it. ``None``
    means the task does not repeat and its date has passed.
    """
    anchor = _calendar_date(anchor, ErrorReason.MALFORMED_ANCHOR, "anchor")
    reference = _calendar_date(reference, ErrorReason.MALFORMED_REFERENCE, "reference")

    if isinstance(rule, Once):
        return anchor if anchor > reference else None

    after_reference = _add_days(reference, 1)
    if after_reference is None:
        raise AdvanceError(ErrorReason.DATE_OUT_OF_RANGE, f"no calendar date after {reference}")
    start = max(anchor, after_reference)
    horizon_end = _add_days(start, horizon_days)
    limit = horizon_end or date.max

    if isinstance(rule, Daily):
        found = _advance_daily(reference, anchor, rule.interval)
    elif isinstance(rule, Yearly):
        found = _advance_yearly(reference, anchor)
    elif isinstance(rule, Weekly):
        found = _advance_weekly(start, limit, rule.days)
    elif isinstance(rule, Monthly):
        if not _month_day_exists(rule.days, rule.months):
            raise AdvanceError(ErrorReason.SEARCH_LIMIT_EXCEEDED, f"{rule} names no day that exists in its months")
        found = _advance_monthly(start, limit, rule.days, rule.months)
    else:
        raise TypeError(f"unsupported recurrence rule: {rule!r}")

    # daily and yearly steps only run dry at the end of the calendar
    if found is None and (horizon_end is None or isinstance(rule, (Daily, Yearly))):
        raise AdvanceError(ErrorReason.DATE_OUT_OF_RANGE, f"{rule} has no occurrence before {date.max}")
    if found is None or found > limit:
        raise AdvanceError(
            ErrorReason.SEARCH_LIMIT_EXCEEDED,
            f"{rule} has no occurrence within {horizon_days} days of {start}",
        )
    log.debug("next occurrence of %s from %s after %s is %s", rule, anchor, reference, found)
    return found
