"""Aggregates over completed fasts, grouped by the UTC date of ``started_at``.

Every rollup is zero-filled: a day without fasts still gets an entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Literal

from myfast.core.dates import days_back, month_days, utc_date
from myfast.core.numbers import round_half_up, seconds_to_hours
from myfast.db.database import Database

MOVING_AVERAGE_WINDOW = 7

DayStatus = Literal["none", "fasted", "hit_target"]


@dataclass(slots=True)
class DaySummary:
    date: str
    total_seconds: int
    total_hours: float
    fast_count: int
    hit_target: bool


@dataclass(slots=True)
class MonthDay:
    date: str
    status: DayStatus


@dataclass(slots=True)
class DurationPoint:
    date: str
    duration_seconds: int
    duration_hours: float
    moving_average: float | None


@dataclass(slots=True)
class _DayTotals:
    total_seconds: int = 0
    fast_count: int = 0
    hits: int = 0


def _daily_totals(db: Database, start: date, end: date) -> dict[str, _DayTotals]:
    rows = db.all(
        "SELECT date(started_at) AS day, "
        "COALESCE(SUM(duration_seconds), 0) AS total_seconds, "
        "COUNT(*) AS fast_count, "
        "SUM(CASE WHEN hit_target = 1 THEN 1 ELSE 0 END) AS hits "
        "FROM fasts "
        "WHERE ended_at IS NOT NULL AND date(started_at) BETWEEN ? AND ? "
        "GROUP BY date(started_at)",
        [start.isoformat(), end.isoformat()],
    )
    return {
        row["day"]: _DayTotals(
            total_seconds=int(row["total_seconds"] or 0),
            fast_count=int(row["fast_count"] or 0),
            hits=int(row["hits"] or 0),
        )
        for row in rows
    }


def average_duration(db: Database) -> float:
    """Mean ``duration_seconds`` of completed fasts, 0 when there are none."""
    row = db.get(
        "SELECT AVG(duration_seconds) AS avg_duration FROM fasts "
        "WHERE ended_at IS NOT NULL AND duration_seconds IS NOT NULL"
    )
    if row is None or row["avg_duration"] is None:
        return 0
    return float(row["avg_duration"])


def adherence_rate(db: Database) -> float:
    """Percent of completed fasts that hit their target, one decimal."""
    row = db.get(
        "SELECT COUNT(*) AS total, SUM(CASE WHEN hit_target = 1 THEN 1 ELSE 0 END) AS hits "
        "FROM fasts WHERE ended_at IS NOT NULL"
    )
    if row is None or not row["total"]:
        return 0
    return round_half_up((row["hits"] or 0) / row["total"] * 100)


def weekly_rollup(db: Database, today: date | None = None) -> list[DaySummary]:
    days = days_back(utc_date(today), 7)
    totals = _daily_totals(db, days[0], days[-1])

    summaries = []
    for day in days:
        key = day.isoformat()
        data = totals.get(key, _DayTotals())
        summaries.append(
            DaySummary(
                date=key,
                total_seconds=data.total_seconds,
                total_hours=seconds_to_hours(data.total_seconds),
                fast_count=data.fast_count,
                hit_target=data.hits > 0,
            )
        )
    return summaries


def monthly_rollup(db: Database, year: int, month: int) -> list[MonthDay]:
    days = month_days(year, month)
    totals = _daily_totals(db, days[0], days[-1])

    result = []
    for day in days:
        key = day.isoformat()
        data = totals.get(key)
        status: DayStatus = "none"
        if data is not None and data.fast_count > 0:
            status = "hit_target" if data.hits > 0 else "fasted"
        result.append(MonthDay(date=key, status=status))
    return result


def duration_trend(db: Database, days: int = 30, today: date | None = None) -> list[DurationPoint]:
    """Daily totals oldest to newest, with a trailing 7-day moving average in hours.

    The average is ``None`` until the window inside the returned series is full.
    """
    if days < 1:
        raise ValueError("days must be >= 1")

    window = days_back(utc_date(today), days)
    totals = _daily_totals(db, window[0], window[-1])

    points = []
    hours: list[float] = []
    for day in window:
        key = day.isoformat()
        seconds = totals.get(key, _DayTotals()).total_seconds
        day_hours = seconds_to_hours(seconds)
        hours.append(day_hours)

        moving_average = None
        if len(hours) >= MOVING_AVERAGE_WINDOW:
            recent = hours[-MOVING_AVERAGE_WINDOW:]
            moving_average = round_half_up(sum(recent) / MOVING_AVERAGE_WINDOW)

        points.append(
            DurationPoint(
                date=key,
                duration_seconds=seconds,
                duration_hours=day_hours,
                moving_average=moving_average,
            )
        )
    return points
