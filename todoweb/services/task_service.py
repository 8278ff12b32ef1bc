from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Optional

from ..dates import format_date, parse_date
from ..models import Once
from ..recurrence import SEARCH_HORIZON_DAYS, next_occurrence, parse_rule
from ..schemas import Task

log = logging.getLogger(__name__)


class TaskValidationError(ValueError):
    pass


def next_date(
    now: str | None,
    anchor: str | None,
    repeat: str | None,
    today: date | None = None,
    horizon_days: int = SEARCH_HORIZON_DAYS,
) -> str:
    """Next date for the given rule as ``YYYYMMDD``, or ``""`` when there is none.

    ``now`` defaults to ``today`` (itself defaulting to the local date).
    """
    reference = parse_date(now) if now else (today or date.today())
    anchor_date = parse_date(anchor)
    rule = parse_rule(repeat)
    found = next_occurrence(reference, anchor_date, rule, horizon_days=horizon_days)
    return format_date(found) if found else ""


def prepare_task(task: Task, today: date, horizon_days: int = SEARCH_HORIZON_DAYS) -> Task:
    if not task.title.strip():
        raise TaskValidationError("task title is required")
    rule = parse_rule(task.repeat)
    task_date = parse_date(task.date) if task.date else today
    if task_date < today:
        if isinstance(rule, Once):
            task_date = today
        else:
            task_date = next_occurrence(today, task_date, rule, horizon_days=horizon_days)
    return replace(task, date=format_date(task_date))


def complete_task(task: Task, today: date, horizon_days: int = SEARCH_HORIZON_DAYS) -> Optional[Task]:
    """Move a repeating task to its next date; ``None`` means the task is finished."""
    rule = parse_rule(task.repeat)
    if isinstance(rule, Once):
        log.info("task %s does not repeat, removing", task.id or "<new>")
        return None
    current = parse_date(task.date)
    following = next_occurrence(max(current, today), current, rule, horizon_days=horizon_days)
    log.info("task %s moved from %s to %s", task.id or "<new>", task.date, format_date(following))
    return replace(task, date=format_date(following))
