from __future__ import annotations

import argparse
import logging
import sys

from .dates import InvalidDateError, parse_date
from .recurrence import RecurrenceError, parse_rule
from .services.task_service import next_date
from .settings import Settings, get_settings
from .views.formatting import describe_rule, format_next

log = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="todoweb-nextdate", description="Next date on which a task reappears")
    p.add_argument("date", help="anchor date, YYYYMMDD")
    p.add_argument("repeat", nargs="?", default="", help='rule such as "d 7", "y", "w 1,3" or "m -1 2"')
    p.add_argument("--now", default="", help="reference date, YYYYMMDD (default: today)")
    p.add_argument("--describe", action="store_true", help="also print the rule and the distance to the date")
    return p


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    configure_logging(settings)
    args = build_parser().parse_args(argv)

    today = settings.today()
    try:
        result = next_date(args.now, args.date, args.repeat, today=today, horizon_days=settings.search_horizon_days)
    except (InvalidDateError, RecurrenceError) as exc:
        log.warning("cannot compute next date: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(result)
    if args.describe:
        reference = parse_date(args.now) if args.now else today
        print(describe_rule(parse_rule(args.repeat)))
        print(format_next(parse_date(result) if result else None, reference))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
