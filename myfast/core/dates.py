"""UTC timestamp and calendar-day helpers.

All grouping in myfast is by UTC calendar day; day arithmetic is done on
integer epoch days so results never depend on the host timezone.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta, timezone

EPOCH = date(1970, 1, 1)
SECOND = timedelta(seconds=1)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_iso_utc(value: datetime) -> str:
    return to_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_iso_utc() -> str:
    return to_iso_utc(now_utc())


def parse_iso_utc(value: str) -> datetime:
    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    dt = datetime.fromisoformat(v)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_date(value: datetime | date | None = None) -> date:
    if value is None:
        return now_utc().date()
    if isinstance(value, datetime):
        return to_utc(value).date()
    return value


def iso_date(value: datetime | date | None = None) -> str:
    return utc_date(value).isoformat()


def parse_iso_date(value: str) -> date:
    return date.fromisoformat(value.strip()[:10])


def epoch_day(value: date | str) -> int:
    if isinstance(value, str):
        value = parse_iso_date(value)
    return (value - EPOCH).days


def seconds_between(start: datetime, end: datetime) -> int:
    """Whole seconds from ``start`` to ``end``, floored."""
    return (to_utc(end) - to_utc(start)) // SECOND


def days_back(today: date, count: int) -> list[date]:
    """``count`` consecutive days ending at ``today``, oldest first."""
    return [today - timedelta(days=offset) for offset in range(count - 1, -1, -1)]


def month_days(year: int, month: int) -> list[date]:
    if not 1 <= month <= 12:
        raise ValueError("month must be in 1..12")
    _, last = calendar.monthrange(year, month)
    return [date(year, month, day) for day in range(1, last + 1)]


def week_range(value: date) -> tuple[date, date]:
    """Monday..Sunday week containing ``value``."""
    start = value - timedelta(days=value.weekday())
    return start, start + timedelta(days=6)


def month_range(value: date) -> tuple[date, date]:
    _, last = calendar.monthrange(value.year, value.month)
    return date(value.year, value.month, 1), date(value.year, value.month, last)
