# inspect_db.py
from __future__ import annotations

import argparse
from datetime import date as _date
from typing import List, Optional

from config import Settings
from database import TaskGateway
from normalize import day_bounds, extract_date_only, parse_day


def iso_day(text: str) -> _date:
    """argparse type: YYYY-MM-DD only, same as the webhook accepts."""
    day = parse_day(extract_date_only(text))
    if day is None:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {text!r}")
    return day


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Print stored tasks with optional date range and course filter."
    )
    parser.add_argument("--from", dest="start", type=iso_day, help="Earliest due date (YYYY-MM-DD)")
    parser.add_argument("--to", dest="end", type=iso_day, help="Latest due date (YYYY-MM-DD)")
    parser.add_argument("--course", help="Only tasks of this course (case-insensitive)")
    parser.add_argument("--all", dest="include_done", action="store_true", help="Include done tasks")
    parser.add_argument("--limit", type=int, default=200, help="Max rows (default 200)")
    return parser


def main(argv: Optional[List[str]] = None, gateway: Optional[TaskGateway] = None, settings: Optional[Settings] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = settings or Settings.from_env()

    owns_gateway = gateway is None
    if owns_gateway:
        gateway = TaskGateway.from_settings(settings)
    try:
        rows = gateway.list_tasks(
            settings.user_id,
            start=day_bounds(args.start)[0] if args.start else None,
            end=day_bounds(args.end)[1] if args.end else None,
            course=args.course,
            include_done=args.include_done,
            limit=args.limit,
        )

        if not rows:
            print("No open tasks." if not args.include_done else "No tasks.")
            return 0

        width = max(len(t.title) for t in rows)
        for t in rows:
            mark = "x" if t.status == "done" else " "
            print(f"[{mark}] {t.due_display}  {t.title:<{width}}  {t.course} ({t.priority}, {t.status})")
        print(f"-- {len(rows)} task(s)")
        return 0
    finally:
        if owns_gateway:
            gateway.close()


if __name__ == "__main__":
    raise SystemExit(main())
