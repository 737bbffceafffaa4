"""Goals and their per-period progress snapshots.

Weekly goals are measured over the Monday..Sunday week containing the
reference date, monthly goals over its calendar month, and milestones from
the goal's start date up to the reference date. Snapshots are keyed by
(goal, period_start, period_end); refreshing the same period overwrites.
"""

from datetime import date

from loguru import logger

from myfast.core.dates import iso_date, month_range, now_iso_utc, parse_iso_date, utc_date, week_range
from myfast.core.numbers import round_half_up
from myfast.db.database import Database
from myfast.db.models import GOAL_DIRECTIONS, GOAL_PERIODS, GOAL_TYPES, Goal, GoalProgress, new_id

DEFAULT_PERIODS = {
    "fasts_per_week": "weekly",
    "hours_per_week": "weekly",
    "hours_per_month": "monthly",
    "weight_milestone": "milestone",
}

DEFAULT_UNITS = {
    "fasts_per_week": "fasts",
    "hours_per_week": "hours",
    "hours_per_month": "hours",
    "weight_milestone": "weight",
}


def _default_direction(goal_type: str) -> str:
    return "at_most" if goal_type == "weight_milestone" else "at_least"


def create_goal(
    db: Database,
    *,
    type: str,
    target_value: float,
    period: str | None = None,
    direction: str | None = None,
    label: str | None = None,
    unit: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    is_active: bool = True,
) -> Goal:
    if type not in GOAL_TYPES:
        raise ValueError(f"Unknown goal type: {type}")
    if period is not None and period not in GOAL_PERIODS:
        raise ValueError(f"Unknown goal period: {period}")
    if direction is not None and direction not in GOAL_DIRECTIONS:
        raise ValueError(f"Unknown goal direction: {direction}")

    goal = Goal(
        id=new_id(),
        type=type,
        target_value=max(0.0, float(target_value)),
        period=period or DEFAULT_PERIODS[type],
        direction=direction or _default_direction(type),
        label=label,
        unit=unit if unit is not None else DEFAULT_UNITS[type],
        start_date=start_date or iso_date(),
        end_date=end_date,
        is_active=is_active,
        created_at=now_iso_utc(),
    )
    upsert_goal(db, goal)
    logger.info("goal_created id={} type={} target={}", goal.id, goal.type, goal.target_value)
    return goal


def upsert_goal(db: Database, goal: Goal) -> None:
    db.run(
        "INSERT OR REPLACE INTO goals "
        "(id, type, target_value, period, direction, label, unit, start_date, end_date, is_active, created_at) "
        "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
        [
            goal.id,
            goal.type,
            goal.target_value,
            goal.period,
            goal.direction,
            goal.label,
            goal.unit,
            goal.start_date,
            goal.end_date,
            1 if goal.is_active else 0,
            goal.created_at or now_iso_utc(),
        ],
    )


def list_goals(db: Database, include_inactive: bool = False) -> list[Goal]:
    if include_inactive:
        rows = db.all("SELECT * FROM goals ORDER BY created_at DESC")
    else:
        rows = db.all("SELECT * FROM goals WHERE is_active = 1 ORDER BY created_at DESC")
    return [Goal.from_row(row) for row in rows]


def get_goal(db: Database, goal_id: str) -> Goal | None:
    row = db.get("SELECT * FROM goals WHERE id = ?", [goal_id])
    return Goal.from_row(row) if row else None


def archive_goal(db: Database, goal_id: str, end_date: str | None = None) -> bool:
    if get_goal(db, goal_id) is None:
        return False
    db.run("UPDATE goals SET is_active = 0, end_date = ? WHERE id = ?", [end_date or iso_date(), goal_id])
    logger.info("goal_archived id={}", goal_id)
    return True


def delete_goal(db: Database, goal_id: str) -> bool:
    def _delete() -> bool:
        if get_goal(db, goal_id) is None:
            return False
        db.run("DELETE FROM goal_progress WHERE goal_id = ?", [goal_id])
        db.run("DELETE FROM goals WHERE id = ?", [goal_id])
        return True

    deleted = db.transaction(_delete)
    if deleted:
        logger.info("goal_deleted id={}", goal_id)
    return deleted


def goal_range(goal: Goal, as_of: date) -> tuple[str, str]:
    if goal.period == "monthly" or goal.type == "hours_per_month":
        start, end = month_range(as_of)
    elif goal.period == "weekly" or goal.type in ("fasts_per_week", "hours_per_week"):
        start, end = week_range(as_of)
    else:
        return goal.start_date, as_of.isoformat()
    return start.isoformat(), end.isoformat()


def _completed_fasts_in_range(db: Database, start: str, end: str) -> int:
    row = db.get(
        "SELECT COUNT(*) AS count FROM fasts WHERE ended_at IS NOT NULL AND date(started_at) BETWEEN ? AND ?",
        [start, end],
    )
    return int(row["count"]) if row else 0


def _completed_hours_in_range(db: Database, start: str, end: str) -> float:
    row = db.get(
        "SELECT COALESCE(SUM(duration_seconds), 0) AS seconds "
        "FROM fasts WHERE ended_at IS NOT NULL AND date(started_at) BETWEEN ? AND ?",
        [start, end],
    )
    return round_half_up((row["seconds"] if row else 0) / 3600)


def _latest_weight(db: Database) -> float:
    # Milestones track the newest reading regardless of the range.
    row = db.get("SELECT weight_value FROM weight_entries ORDER BY date DESC, created_at DESC LIMIT 1")
    return float(row["weight_value"]) if row else 0.0


def _current_value(db: Database, goal: Goal, start: str, end: str) -> float:
    if goal.type == "fasts_per_week":
        return float(_completed_fasts_in_range(db, start, end))
    if goal.type in ("hours_per_week", "hours_per_month"):
        return _completed_hours_in_range(db, start, end)
    if goal.type == "weight_milestone":
        return _latest_weight(db)
    return 0.0


def is_goal_completed(goal: Goal, current_value: float) -> bool:
    if goal.direction == "at_most":
        return current_value <= goal.target_value
    return current_value >= goal.target_value


def _snapshot(db: Database, goal: Goal, as_of: date) -> GoalProgress:
    start, end = goal_range(goal, as_of)
    current = _current_value(db, goal, start, end)
    return GoalProgress(
        goal_id=goal.id,
        period_start=start,
        period_end=end,
        current_value=current,
        target_value=goal.target_value,
        completed=is_goal_completed(goal, current),
    )


def get_goal_progress(db: Database, goal_id: str, as_of: date | None = None) -> GoalProgress | None:
    """Progress for the period containing ``as_of``. Nothing is written."""
    goal = get_goal(db, goal_id)
    if goal is None:
        return None
    return _snapshot(db, goal, utc_date(as_of))


def _save_snapshot(db: Database, progress: GoalProgress) -> GoalProgress:
    progress.id = progress.id or new_id()
    progress.created_at = now_iso_utc()
    db.run(
        "INSERT INTO goal_progress "
        "(id, goal_id, period_start, period_end, current_value, target_value, completed, created_at) "
        "VALUES (?, ?, ?, ?, ?, ?, ?, ?) "
        "ON CONFLICT(goal_id, period_start, period_end) DO UPDATE SET "
        "current_value = excluded.current_value, "
        "target_value = excluded.target_value, "
        "completed = excluded.completed, "
        "created_at = excluded.created_at",
        [
            progress.id,
            progress.goal_id,
            progress.period_start,
            progress.period_end,
            progress.current_value,
            progress.target_value,
            1 if progress.completed else 0,
            progress.created_at,
        ],
    )
    row = db.get(
        "SELECT id FROM goal_progress WHERE goal_id = ? AND period_start = ? AND period_end = ?",
        [progress.goal_id, progress.period_start, progress.period_end],
    )
    progress.id = row["id"]
    return progress


def refresh_goal_progress(db: Database, as_of: date | None = None) -> list[GoalProgress]:
    """Recompute every active goal for the period containing ``as_of`` and persist it."""
    day = utc_date(as_of)

    def _refresh() -> list[GoalProgress]:
        snapshots = []
        for goal in list_goals(db):
            start, _end = goal_range(goal, day)
            if parse_iso_date(start) < parse_iso_date(goal.start_date):
                continue
            if goal.end_date and parse_iso_date(start) > parse_iso_date(goal.end_date):
                continue
            snapshots.append(_save_snapshot(db, _snapshot(db, goal, day)))
        return snapshots

    snapshots = db.transaction(_refresh)
    logger.info("goal_progress_refreshed as_of={} snapshots={}", day.isoformat(), len(snapshots))
    return snapshots


def list_goal_progress(db: Database, goal_id: str, limit: int = 26) -> list[GoalProgress]:
    rows = db.all(
        "SELECT * FROM goal_progress WHERE goal_id = ? ORDER BY period_start DESC LIMIT ?",
        [goal_id, limit],
    )
    return [GoalProgress.from_row(row) for row in rows]
