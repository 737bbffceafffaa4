from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from myfast.core.dates import month_days
from myfast.core.numbers import format_number, round_half_up, seconds_to_hours
from myfast.db.database import Database
from myfast.stats.streaks import get_streaks


@dataclass(slots=True)
class PeriodSummary:
    total_fasts: int
    total_hours: float
    average_duration_hours: float
    longest_fast_hours: float
    adherence_rate: float
    current_streak: int


def _summarize(db: Database, start: date, end: date) -> PeriodSummary:
    row = db.get(
        "SELECT COUNT(*) AS total, "
        "COALESCE(SUM(duration_seconds), 0) AS total_seconds, "
        "COALESCE(AVG(duration_seconds), 0) AS avg_seconds, "
        "COALESCE(MAX(duration_seconds), 0) AS max_seconds, "
        "SUM(CASE WHEN hit_target = 1 THEN 1 ELSE 0 END) AS hits "
        "FROM fasts WHERE ended_at IS NOT NULL AND date(started_at) BETWEEN ? AND ?",
        [start.isoformat(), end.isoformat()],
    )
    total = int(row["total"]) if row else 0
    hits = int(row["hits"] or 0) if row else 0
    return PeriodSummary(
        total_fasts=total,
        total_hours=seconds_to_hours(row["total_seconds"] if row else 0),
        average_duration_hours=seconds_to_hours(row["avg_seconds"] if row else 0),
        longest_fast_hours=seconds_to_hours(row["max_seconds"] if row else 0),
        adherence_rate=round_half_up(hits / total * 100) if total else 0.0,
        current_streak=get_streaks(db).current_streak,
    )


def get_monthly_summary(db: Database, year: int, month: int) -> PeriodSummary:
    days = month_days(year, month)
    return _summarize(db, days[0], days[-1])


def get_annual_summary(db: Database, year: int) -> PeriodSummary:
    return _summarize(db, date(year, 1, 1), date(year, 12, 31))


def format_summary_share_text(summary: PeriodSummary, label: str) -> str:
    lines = [
        f"{label} Summary",
        f"Total fasts: {summary.total_fasts}",
        f"Total hours: {format_number(summary.total_hours)}",
        f"Average fast: {format_number(summary.average_duration_hours)}h",
        f"Longest fast: {format_number(summary.longest_fast_hours)}h",
        f"Adherence: {format_number(summary.adherence_rate)}%",
        f"Current streak: {summary.current_streak} days",
    ]
    return "\n".join(lines)
