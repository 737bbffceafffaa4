"""Streaks of consecutive target-hit days.

A fast counts for the UTC day it was started on. A day with at least one
target-hit fast is a streak day; several hits the same day count once.
The current streak is alive only if the newest streak day is today or
yesterday.
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from loguru import logger

from myfast.core.dates import epoch_day, now_iso_utc, utc_date
from myfast.db.database import Database
from myfast.db.models import StreakCache

CACHE_KEYS = ("current_streak", "longest_streak", "total_fasts")


def current_streak(day_numbers_desc: Sequence[int], today: int) -> int:
    if not day_numbers_desc or today - day_numbers_desc[0] > 1:
        return 0
    streak = 1
    for newer, older in zip(day_numbers_desc, day_numbers_desc[1:]):
        if newer - older != 1:
            break
        streak += 1
    return streak


def longest_streak(day_numbers_desc: Sequence[int]) -> int:
    if not day_numbers_desc:
        return 0
    longest = run = 1
    for newer, older in zip(day_numbers_desc, day_numbers_desc[1:]):
        if newer - older == 1:
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    return longest


def compute_streaks(db: Database, now: datetime | None = None) -> StreakCache:
    rows = db.all(
        "SELECT DISTINCT date(started_at) AS fast_date FROM fasts "
        "WHERE hit_target = 1 AND ended_at IS NOT NULL "
        "ORDER BY fast_date DESC"
    )
    total = db.get("SELECT COUNT(*) AS count FROM fasts WHERE ended_at IS NOT NULL")
    total_fasts = int(total["count"]) if total else 0

    days = [epoch_day(row["fast_date"]) for row in rows]
    today = epoch_day(utc_date(now))
    return StreakCache(
        current_streak=current_streak(days, today),
        longest_streak=longest_streak(days),
        total_fasts=total_fasts,
    )


def refresh_streak_cache(db: Database, now: datetime | None = None) -> StreakCache:
    """Recompute streaks and overwrite the cached snapshot."""
    streaks = compute_streaks(db, now)
    updated_at = now_iso_utc()
    values = {
        "current_streak": streaks.current_streak,
        "longest_streak": streaks.longest_streak,
        "total_fasts": streaks.total_fasts,
    }

    def _write() -> None:
        for key, value in values.items():
            db.run(
                "INSERT OR REPLACE INTO streak_cache (key, value, updated_at) VALUES (?, ?, ?)",
                [key, value, updated_at],
            )

    db.transaction(_write)
    streaks.updated_at = updated_at
    logger.info(
        "streak_cache_refreshed current={} longest={} total={}",
        streaks.current_streak,
        streaks.longest_streak,
        streaks.total_fasts,
    )
    return streaks


def get_streaks(db: Database, now: datetime | None = None) -> StreakCache:
    """Cached streaks. Stale values are returned as they are; only a missing cache is recomputed."""
    rows = {
        row["key"]: row
        for row in db.all("SELECT key, value, updated_at FROM streak_cache WHERE key IN (?, ?, ?)", list(CACHE_KEYS))
    }
    if any(key not in rows for key in CACHE_KEYS):
        logger.debug("streak_cache_miss keys={}", sorted(rows))
        return refresh_streak_cache(db, now)

    return StreakCache(
        current_streak=int(rows["current_streak"]["value"]),
        longest_streak=int(rows["longest_streak"]["value"]),
        total_fasts=int(rows["total_fasts"]["value"]),
        updated_at=max(row["updated_at"] for row in rows.values()),
    )
