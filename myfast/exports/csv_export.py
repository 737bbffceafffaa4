import csv
import io
from typing import Any

from myfast.db.database import Database

FAST_COLUMNS = [
    "id",
    "protocol",
    "target_hours",
    "started_at",
    "ended_at",
    "duration_seconds",
    "hit_target",
    "notes",
]

WEIGHT_COLUMNS = ["id", "date", "weight", "unit", "notes"]


def _rows_to_csv(columns: list[str], rows: list[dict[str, Any]]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, delimiter=",", lineterminator="\n")
    writer.writerow(columns)
    for row in rows:
        writer.writerow([row.get(col) if row.get(col) is not None else "" for col in columns])
    return buf.getvalue()


def export_fasts_csv(db: Database) -> str:
    rows = db.all(
        "SELECT id, protocol, target_hours, started_at, ended_at, duration_seconds, hit_target, notes "
        "FROM fasts WHERE ended_at IS NOT NULL ORDER BY started_at ASC"
    )
    for row in rows:
        if row["hit_target"] is not None:
            row["hit_target"] = "true" if row["hit_target"] == 1 else "false"
    return _rows_to_csv(FAST_COLUMNS, rows)


def export_weight_csv(db: Database) -> str:
    rows = db.all(
        "SELECT id, date, weight_value AS weight, unit, notes "
        "FROM weight_entries ORDER BY date ASC, created_at ASC"
    )
    return _rows_to_csv(WEIGHT_COLUMNS, rows)


def export_all_text(db: Database) -> str:
    return f"=== Fasts ===\n{export_fasts_csv(db)}\n=== Weight Entries ===\n{export_weight_csv(db)}"
