import argparse
import sys
from datetime import date
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from loguru import logger

from myfast.config import Settings
from myfast.core.dates import now_utc
from myfast.core.numbers import format_number, seconds_to_hours
from myfast.core.timer import compute_timer_state, format_duration
from myfast.core.zones import get_current_fasting_zone
from myfast.db.database import Database, build_database_url, open_database
from myfast.db.maintenance import erase_all_data
from myfast.db.migrations import init_database
from myfast.db.repositories.fasts_repo import end_fast, get_active_fast, list_fasts, start_fast
from myfast.db.repositories.goals_repo import get_goal_progress, list_goals, refresh_goal_progress
from myfast.db.repositories.protocols_repo import get_default_protocol, get_protocol
from myfast.db.repositories.water_repo import (
    get_water_intake,
    increment_water_intake,
    reset_water_intake,
    set_water_intake_count,
    set_water_target,
)
from myfast.errors import MyFastError
from myfast.exports.csv_export import export_all_text
from myfast.logging_setup import setup_logging
from myfast.stats.aggregation import adherence_rate, average_duration, duration_trend, weekly_rollup
from myfast.stats.streaks import get_streaks, refresh_streak_cache
from myfast.stats.summary import format_summary_share_text, get_annual_summary, get_monthly_summary


def _load_env() -> None:
    env_path = find_dotenv(usecwd=True)
    if env_path:
        load_dotenv(env_path, override=True)
        logger.debug("Loaded .env from {}", env_path)


def _cmd_init(db: Database, args: argparse.Namespace, config: Settings) -> int:
    print(f"Database ready at schema version {args.schema_version}")
    return 0


def _cmd_start(db: Database, args: argparse.Namespace, config: Settings) -> int:
    protocol = get_protocol(db, args.protocol) if args.protocol else get_default_protocol(db)
    if protocol is None and args.hours is None:
        raise ValueError(f"Unknown protocol: {args.protocol}")

    protocol_id = protocol.id if protocol else args.protocol
    hours = args.hours if args.hours is not None else protocol.fasting_hours
    fast = start_fast(db, protocol_id, hours)
    print(f"Started {fast.protocol} fast ({format_number(fast.target_hours)}h) at {fast.started_at}")
    return 0


def _cmd_end(db: Database, args: argparse.Namespace, config: Settings) -> int:
    fast = end_fast(db, notes=args.notes)
    if fast is None:
        print("No active fast.")
        return 0

    refresh_streak_cache(db)
    refresh_goal_progress(db)
    outcome = "target hit" if fast.hit_target else "target missed"
    print(f"Ended {fast.protocol} fast after {format_duration(fast.duration_seconds)} ({outcome})")
    return 0


def _cmd_status(db: Database, args: argparse.Namespace, config: Settings) -> int:
    state = compute_timer_state(get_active_fast(db), now_utc())
    if state.state == "idle":
        print("No active fast.")
        return 0

    zone = get_current_fasting_zone(state.elapsed)
    print(f"Protocol:  {state.active_fast.protocol}")
    print(f"Elapsed:   {format_duration(state.elapsed)}")
    print(f"Remaining: {format_duration(int(state.remaining))}")
    print(f"Progress:  {state.progress * 100:.0f}%")
    print(f"Zone:      {zone.name}")
    if state.target_reached:
        print("Target reached!")
    return 0


def _cmd_history(db: Database, args: argparse.Namespace, config: Settings) -> int:
    fasts = list_fasts(db, limit=args.limit or config.history_page_size)
    if not fasts:
        print("No completed fasts yet.")
        return 0
    for fast in fasts:
        mark = "+" if fast.hit_target else "-"
        print(f"{mark} {fast.started_at}  {fast.protocol:<5}  {format_duration(fast.duration_seconds)}")
    return 0


def _cmd_stats(db: Database, args: argparse.Namespace, config: Settings) -> int:
    streaks = get_streaks(db)
    print(f"Average fast:   {format_number(seconds_to_hours(average_duration(db)))}h")
    print(f"Adherence:      {format_number(adherence_rate(db))}%")
    print(f"Current streak: {streaks.current_streak} days")
    print(f"Longest streak: {streaks.longest_streak} days")
    print(f"Total fasts:    {streaks.total_fasts}")
    print("Last 7 days:")
    for day in weekly_rollup(db):
        mark = "*" if day.hit_target else " "
        print(f"  {day.date} {mark} {format_number(day.total_hours)}h ({day.fast_count})")
    return 0


def _cmd_trend(db: Database, args: argparse.Namespace, config: Settings) -> int:
    for point in duration_trend(db, days=args.days or config.trend_days):
        average = "-" if point.moving_average is None else f"{format_number(point.moving_average)}h"
        print(f"{point.date}  {format_number(point.duration_hours)}h  avg {average}")
    return 0


def _cmd_summary(db: Database, args: argparse.Namespace, config: Settings) -> int:
    if args.month is None:
        summary = get_annual_summary(db, args.year)
        label = str(args.year)
    else:
        summary = get_monthly_summary(db, args.year, args.month)
        label = date(args.year, args.month, 1).strftime("%B %Y")
    print(format_summary_share_text(summary, label))
    return 0


def _cmd_water(db: Database, args: argparse.Namespace, config: Settings) -> int:
    if args.action in {"set", "target"} and args.value is None:
        raise ValueError(f"water {args.action} needs a value")

    if args.action == "add":
        intake = increment_water_intake(db, args.value if args.value is not None else 1)
    elif args.action == "set":
        intake = set_water_intake_count(db, args.value)
    elif args.action == "target":
        intake = set_water_target(db, args.value)
    elif args.action == "reset":
        intake = reset_water_intake(db)
    else:
        intake = get_water_intake(db)

    done = " (done)" if intake.completed else ""
    print(f"Water {intake.date}: {intake.count}/{intake.target}{done}")
    return 0


def _cmd_goals(db: Database, args: argparse.Namespace, config: Settings) -> int:
    if args.action == "refresh":
        snapshots = refresh_goal_progress(db)
        print(f"Refreshed {len(snapshots)} goal snapshot(s).")
        return 0

    goals = list_goals(db)
    if not goals:
        print("No active goals.")
        return 0

    for goal in goals:
        name = goal.label or goal.type
        if args.action == "list":
            print(f"{goal.id}  {name}: {format_number(goal.target_value)} {goal.unit or ''} ({goal.period})")
            continue
        progress = get_goal_progress(db, goal.id)
        status = "done" if progress.completed else "open"
        print(
            f"{name}: {format_number(progress.current_value)}/{format_number(progress.target_value)} "
            f"[{progress.period_start}..{progress.period_end}] {status}"
        )
    return 0


def _cmd_export(db: Database, args: argparse.Namespace, config: Settings) -> int:
    text = export_all_text(db)
    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
        print(f"Exported to {out_path}")
    else:
        print(text, end="")
    return 0


def _cmd_erase(db: Database, args: argparse.Namespace, config: Settings) -> int:
    if not args.yes:
        print("Refusing to erase without --yes", file=sys.stderr)
        return 1
    erase_all_data(db)
    print("All data erased.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="myfast", description="Intermittent fasting tracker")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init", help="create or upgrade the database").set_defaults(handler=_cmd_init)

    start = sub.add_parser("start", help="start a fast")
    start.add_argument("--protocol", help="protocol id, e.g. 16:8")
    start.add_argument("--hours", type=float, help="target hours (overrides the protocol)")
    start.set_defaults(handler=_cmd_start)

    end = sub.add_parser("end", help="end the active fast")
    end.add_argument("--notes")
    end.set_defaults(handler=_cmd_end)

    sub.add_parser("status", help="show the timer").set_defaults(handler=_cmd_status)

    history = sub.add_parser("history", help="list completed fasts")
    history.add_argument("--limit", type=int)
    history.set_defaults(handler=_cmd_history)

    sub.add_parser("stats", help="averages, adherence and streaks").set_defaults(handler=_cmd_stats)

    trend = sub.add_parser("trend", help="daily totals with a 7-day average")
    trend.add_argument("--days", type=int)
    trend.set_defaults(handler=_cmd_trend)

    summary = sub.add_parser("summary", help="monthly or annual summary")
    summary.add_argument("year", type=int)
    summary.add_argument("month", type=int, nargs="?")
    summary.set_defaults(handler=_cmd_summary)

    water = sub.add_parser("water", help="today's water intake")
    water.add_argument("action", choices=["show", "add", "set", "reset", "target"], nargs="?", default="show")
    water.add_argument("value", type=float, nargs="?")
    water.set_defaults(handler=_cmd_water)

    goals = sub.add_parser("goals", help="goals and their progress")
    goals.add_argument("action", choices=["list", "progress", "refresh"], nargs="?", default="list")
    goals.set_defaults(handler=_cmd_goals)

    export = sub.add_parser("export", help="export fasts and weight entries as CSV text")
    export.add_argument("--out")
    export.set_defaults(handler=_cmd_export)

    erase = sub.add_parser("erase", help="delete all data and restore defaults")
    erase.add_argument("--yes", action="store_true")
    erase.set_defaults(handler=_cmd_erase)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    _load_env()
    config = Settings()
    setup_logging(config)

    with open_database(build_database_url(config.sqlite_path)) as db:
        args.schema_version = init_database(db)
        try:
            return args.handler(db, args, config)
        except (MyFastError, ValueError) as exc:
            logger.warning("command_failed command={} err={}", args.command, exc)
            print(f"Error: {exc}", file=sys.stderr)
            return 1


if __name__ == "__main__":
    raise SystemExit(main())
