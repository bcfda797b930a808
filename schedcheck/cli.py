"""
CLI (Command Line Interface).

    schedcheck scan [--department ID]
    schedcheck report [--department ID] [--academic-year ID] [--semester S]
    schedcheck serve [--host HOST] [--port PORT]

`scan` recomputes and saves every active schedule's conflict flag.
`report` prints the schedules that are conflicted right now, grouped by
section. Both exit with 1 when conflicts exist, so they can gate a
cron job or CI step. `serve` runs the HTTP API under uvicorn.
"""

from __future__ import annotations

import argparse
from collections import defaultdict
from typing import Callable

import uvicorn
from sqlalchemy.orm import Session

from schedcheck.errors import ConflictScanError
from schedcheck.logging_config import setup_logging
from schedcheck.services.conflict_scanner import ConflictScanner, ConflictedSchedule
from schedcheck.services.schedule_query import SqlAlchemyScheduleQuery
from schedcheck.utils.conflict import format_time_12h
from schedcheck.utils.day_pattern import format_days, parse_day_pattern


def _default_session() -> Session:
    from schedcheck.database import SessionLocal

    return SessionLocal()


def _cmd_scan(args: argparse.Namespace, db: Session) -> int:
    scanner = ConflictScanner(SqlAlchemyScheduleQuery(db))
    try:
        stats = scanner.scan_and_update_all_conflicts(args.department)
    except ConflictScanError as e:
        print(f"Scan failed, nothing saved ({e.attempted} records attempted): {e}")
        return 2

    if stats.total_scanned == 0:
        print("No active schedules found.")
        return 0

    print(f"Scanned:   {stats.total_scanned}")
    print(f"Conflicts: {stats.conflicts_found}")
    print(f"Updated:   {stats.schedules_updated}")
    return 1 if stats.conflicts_found else 0


def _group_key(item: ConflictedSchedule) -> str:
    s = item.schedule
    return f"Section {s.section or 'N/A'} ({s.semester})"


def _cmd_report(args: argparse.Namespace, db: Session) -> int:
    scanner = ConflictScanner(SqlAlchemyScheduleQuery(db))
    items = scanner.get_conflicted_schedules_with_details(
        department_id=args.department,
        academic_year_id=args.academic_year,
        semester=args.semester,
    )
    if not items:
        print("No conflicts found.")
        return 0

    groups: dict[str, list[ConflictedSchedule]] = defaultdict(list)
    for item in items:
        groups[_group_key(item)].append(item)

    print(f"Conflicted schedules: {len(items)}")
    for key in sorted(groups):
        print(f"\n== {key}")
        for item in groups[key]:
            s = item.schedule
            code = s.subject.code if s.subject is not None else "?"
            days = format_days(parse_day_pattern(s.day_pattern)) or "no days"
            print(
                f"- #{s.id} {code} {s.day_pattern} [{days}] "
                f"{format_time_12h(s.start_time)}-{format_time_12h(s.end_time)} "
                f"({item.conflict_count} conflict(s))"
            )
            for c in item.conflicts:
                print(f"    {c.message}")
    return 1


def _cmd_serve(args: argparse.Namespace) -> int:
    uvicorn.run("schedcheck.main:app", host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="schedcheck", description="Schedule conflict checks")
    sub = parser.add_subparsers(dest="command", required=True)

    p_scan = sub.add_parser("scan", help="Recompute and save conflict flags of all active schedules")
    p_scan.add_argument("--department", type=int, default=None, help="Department id")

    p_report = sub.add_parser("report", help="List schedules that are conflicted right now")
    p_report.add_argument("--department", type=int, default=None, help="Department id")
    p_report.add_argument("--academic-year", type=int, default=None, help="Academic year id")
    p_report.add_argument("--semester", type=str, default=None, help="Semester, e.g. '1st Semester'")

    p_serve = sub.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", type=str, default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None, session_factory: Callable[[], Session] = _default_session) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging()
    if args.command == "serve":
        raise SystemExit(_cmd_serve(args))

    db = session_factory()
    try:
        if args.command == "scan":
            raise SystemExit(_cmd_scan(args, db))
        if args.command == "report":
            raise SystemExit(_cmd_report(args, db))
    finally:
        db.close()

    raise SystemExit(2)
