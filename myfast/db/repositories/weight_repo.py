from datetime import date, datetime

from loguru import logger

from myfast.core.dates import iso_date, now_iso_utc, parse_iso_utc
from myfast.core.numbers import round_half_up
from myfast.db.database import Database
from myfast.db.models import WEIGHT_UNITS, WeightEntry, new_id

IMPORTED_NOTE = "Imported from health platform"


def _check_unit(unit: str) -> None:
    if unit not in WEIGHT_UNITS:
        raise ValueError(f"Unsupported weight unit: {unit}")


def add_weight_entry(
    db: Database,
    weight: float,
    unit: str = "lbs",
    day: date | None = None,
    notes: str | None = None,
) -> WeightEntry:
    _check_unit(unit)
    entry_id = new_id()
    db.run(
        "INSERT INTO weight_entries (id, weight_value, unit, date, notes, created_at) VALUES (?, ?, ?, ?, ?, ?)",
        [entry_id, weight, unit, iso_date(day), notes, now_iso_utc()],
    )
    logger.info("weight_added id={} unit={}", entry_id, unit)
    return get_weight_entry(db, entry_id)


def get_weight_entry(db: Database, entry_id: str) -> WeightEntry | None:
    row = db.get("SELECT * FROM weight_entries WHERE id = ?", [entry_id])
    return WeightEntry.from_row(row) if row else None


def list_weight_entries(db: Database, limit: int = 50, offset: int = 0) -> list[WeightEntry]:
    rows = db.all(
        "SELECT * FROM weight_entries ORDER BY date DESC, created_at DESC LIMIT ? OFFSET ?",
        [limit, offset],
    )
    return [WeightEntry.from_row(row) for row in rows]


def get_latest_weight_entry(db: Database) -> WeightEntry | None:
    row = db.get("SELECT * FROM weight_entries ORDER BY date DESC, created_at DESC LIMIT 1")
    return WeightEntry.from_row(row) if row else None


def delete_weight_entry(db: Database, entry_id: str) -> bool:
    if get_weight_entry(db, entry_id) is None:
        return False
    db.run("DELETE FROM weight_entries WHERE id = ?", [entry_id])
    logger.info("weight_deleted id={}", entry_id)
    return True


def import_weight_if_missing(db: Database, weight: float, unit: str, recorded_at: datetime | str) -> bool:
    """Insert an externally recorded weight unless the same reading is already logged that day."""
    _check_unit(unit)
    if isinstance(recorded_at, str):
        recorded_at = parse_iso_utc(recorded_at)
    day = iso_date(recorded_at)
    rounded = round_half_up(weight, 3)

    exists = db.get(
        "SELECT COUNT(*) AS count FROM weight_entries WHERE date = ? AND unit = ? AND ABS(weight_value - ?) < 0.001",
        [day, unit, rounded],
    )
    if exists and exists["count"] > 0:
        logger.debug("weight_import_skipped date={} unit={}", day, unit)
        return False

    db.run(
        "INSERT INTO weight_entries (id, weight_value, unit, date, notes, created_at) VALUES (?, ?, ?, ?, ?, ?)",
        [new_id(), rounded, unit, day, IMPORTED_NOTE, now_iso_utc()],
    )
    logger.info("weight_imported date={} unit={}", day, unit)
    return True
