import math
from datetime import date

from loguru import logger

from myfast.core.dates import iso_date, now_iso_utc
from myfast.core.numbers import round_half_up
from myfast.db.database import Database
from myfast.db.models import WaterIntake
from myfast.db.repositories.settings_repo import get_setting

DEFAULT_WATER_TARGET = 8
WATER_TARGET_SETTING = "waterDailyTarget"


def _default_target(db: Database) -> int:
    raw = get_setting(db, WATER_TARGET_SETTING)
    if raw is None:
        return DEFAULT_WATER_TARGET
    try:
        parsed = float(raw)
    except ValueError:
        return DEFAULT_WATER_TARGET
    if not math.isfinite(parsed) or parsed < 1:
        return DEFAULT_WATER_TARGET
    return int(round_half_up(parsed, 0))


def _save(db: Database, day: str, count: int, target: int) -> None:
    db.run(
        "INSERT OR REPLACE INTO water_intake (date, count, target, updated_at) VALUES (?, ?, ?, ?)",
        [day, count, target, now_iso_utc()],
    )


def get_water_intake(db: Database, day: date | None = None) -> WaterIntake:
    """Intake for ``day`` (UTC today by default). A missing row reads as zero."""
    day_str = iso_date(day)
    row = db.get("SELECT * FROM water_intake WHERE date = ?", [day_str])
    if row is None:
        return WaterIntake(date=day_str, count=0, target=_default_target(db))
    return WaterIntake.from_row(row)


def increment_water_intake(db: Database, amount: float = 1, day: date | None = None) -> WaterIntake:
    step = max(1, math.floor(amount))
    current = get_water_intake(db, day)
    _save(db, current.date, current.count + step, current.target)
    logger.info("water_incremented date={} count={}", current.date, current.count + step)
    return get_water_intake(db, day)


def set_water_target(db: Database, target: float, day: date | None = None) -> WaterIntake:
    """Set the day's target and remember it as the default for new days."""
    rounded = max(1, int(round_half_up(target, 0)))

    def _apply() -> None:
        current = get_water_intake(db, day)
        _save(db, current.date, current.count, rounded)
        db.run("INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)", [WATER_TARGET_SETTING, str(rounded)])

    db.transaction(_apply)
    logger.info("water_target_set date={} target={}", iso_date(day), rounded)
    return get_water_intake(db, day)


def set_water_intake_count(db: Database, count: float, day: date | None = None) -> WaterIntake:
    safe_count = max(0, int(round_half_up(count, 0)))
    current = get_water_intake(db, day)
    _save(db, current.date, safe_count, current.target)
    logger.info("water_count_set date={} count={}", current.date, safe_count)
    return get_water_intake(db, day)


def reset_water_intake(db: Database, day: date | None = None) -> WaterIntake:
    return set_water_intake_count(db, 0, day)
