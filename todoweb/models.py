from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import FrozenSet, Union


class RuleKind(str, enum.Enum):
    ONCE = ""
    DAILY = "d"
    YEARLY = "y"
    WEEKLY = "w"
    MONTHLY = "m"


class ErrorReason(str, enum.Enum):
    UNKNOWN_RULE_KIND = "unknown_rule_kind"
    INVALID_INTERVAL = "invalid_interval"
    UNEXPECTED_ARGUMENT = "unexpected_argument"
    INVALID_WEEKDAY = "invalid_weekday"
    INVALID_MONTH_DAY = "invalid_month_day"
    INVALID_MONTH = "invalid_month"
    MALFORMED_ANCHOR = "malformed_anchor"
    MALFORMED_REFERENCE = "malformed_reference"
    SEARCH_LIMIT_EXCEEDED = "search_limit_exceeded"
    DATE_OUT_OF_RANGE = "date_out_of_range"


@dataclass(frozen=True)
class Once:
    kind = RuleKind.ONCE


@dataclass(frozen=True)
class Daily:
    interval: int

    kind = RuleKind.DAILY


@dataclass(frozen=True)
class Yearly:
    kind = RuleKind.YEARLY


@dataclass(frozen=True)
class Weekly:
    # ISO weekdays, 1=Monday..7=Sunday
    days: FrozenSet[int]

    kind = RuleKind.WEEKLY


@dataclass(frozen=True)
class Monthly:
    # negative days count back from the end of the month, -1 is the last day
    days: FrozenSet[int]
    months: FrozenSet[int] = frozenset()

    kind = RuleKind.MONTHLY


RecurrenceRule = Union[Once, Daily, Yearly, Weekly, Monthly]
