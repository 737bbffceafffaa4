from datetime import datetime

from loguru import logger

from myfast.core.dates import now_utc, parse_iso_utc, seconds_between, to_iso_utc
from myfast.db.database import Database
from myfast.db.models import ACTIVE_FAST_KEY, ActiveFast, Fast, new_id
from myfast.errors import FastAlreadyActiveError


def get_active_fast(db: Database) -> ActiveFast | None:
    row = db.get("SELECT * FROM active_fast WHERE id = ?", [ACTIVE_FAST_KEY])
    return ActiveFast.from_row(row) if row else None


def get_fast(db: Database, fast_id: str) -> Fast | None:
    row = db.get("SELECT * FROM fasts WHERE id = ?", [fast_id])
    return Fast.from_row(row) if row else None


def start_fast(
    db: Database,
    protocol: str,
    target_hours: float,
    started_at: datetime | None = None,
) -> Fast:
    """Open a new fast. Raises FastAlreadyActiveError while another one is open."""
    fast_id = new_id()
    started = to_iso_utc(started_at or now_utc())

    def _start() -> None:
        active = get_active_fast(db)
        if active is not None:
            raise FastAlreadyActiveError(active.fast_id)
        db.run(
            "INSERT INTO fasts (id, protocol, target_hours, started_at, created_at) VALUES (?, ?, ?, ?, ?)",
            [fast_id, protocol, target_hours, started, started],
        )
        db.run(
            "INSERT INTO active_fast (id, fast_id, protocol, target_hours, started_at) VALUES (?, ?, ?, ?, ?)",
            [ACTIVE_FAST_KEY, fast_id, protocol, target_hours, started],
        )

    db.transaction(_start)
    logger.info("fast_started id={} protocol={} target_hours={}", fast_id, protocol, target_hours)
    return get_fast(db, fast_id)


def end_fast(
    db: Database,
    ended_at: datetime | None = None,
    notes: str | None = None,
) -> Fast | None:
    """Close the active fast. Returns None when nothing is running."""
    ended = to_iso_utc(ended_at or now_utc())

    def _end() -> str | None:
        active = get_active_fast(db)
        if active is None:
            return None
        duration = seconds_between(parse_iso_utc(active.started_at), parse_iso_utc(ended))
        hit_target = duration >= active.target_hours * 3600
        db.run(
            "UPDATE fasts SET ended_at = ?, duration_seconds = ?, hit_target = ?, notes = ? WHERE id = ?",
            [ended, duration, int(hit_target), notes, active.fast_id],
        )
        db.run("DELETE FROM active_fast WHERE id = ?", [ACTIVE_FAST_KEY])
        return active.fast_id

    fast_id = db.transaction(_end)
    if fast_id is None:
        logger.debug("end_fast_noop reason=no_active_fast")
        return None

    fast = get_fast(db, fast_id)
    logger.info("fast_ended id={} duration_seconds={} hit_target={}", fast.id, fast.duration_seconds, fast.hit_target)
    return fast


def list_fasts(db: Database, limit: int = 50, offset: int = 0) -> list[Fast]:
    """Completed fasts, most recently started first."""
    rows = db.all(
        "SELECT * FROM fasts WHERE ended_at IS NOT NULL ORDER BY started_at DESC LIMIT ? OFFSET ?",
        [limit, offset],
    )
    return [Fast.from_row(row) for row in rows]


def list_all_completed_fasts(db: Database) -> list[Fast]:
    rows = db.all("SELECT * FROM fasts WHERE ended_at IS NOT NULL ORDER BY started_at ASC")
    return [Fast.from_row(row) for row in rows]


def count_fasts(db: Database) -> int:
    row = db.get("SELECT COUNT(*) AS count FROM fasts WHERE ended_at IS NOT NULL")
    return int(row["count"]) if row else 0


def delete_fast(db: Database, fast_id: str) -> bool:
    def _delete() -> bool:
        if db.get("SELECT id FROM fasts WHERE id = ?", [fast_id]) is None:
            return False
        db.run("DELETE FROM active_fast WHERE fast_id = ?", [fast_id])
        db.run("DELETE FROM fasts WHERE id = ?", [fast_id])
        return True

    deleted = db.transaction(_delete)
    if deleted:
        logger.info("fast_deleted id={}", fast_id)
    else:
        logger.debug("delete_fast_noop id={}", fast_id)
    return deleted
