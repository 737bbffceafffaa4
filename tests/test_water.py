from datetime import date

from myfast.db.repositories.settings_repo import get_setting, set_setting
from myfast.db.repositories.water_repo import (
    get_water_intake,
    increment_water_intake,
    reset_water_intake,
    set_water_intake_count,
    set_water_target,
)

DAY = date(2025, 6, 15)


def test_missing_day_reads_as_zero_with_default_target(db) -> None:
    intake = get_water_intake(db, DAY)
    assert intake.date == "2025-06-15"
    assert (intake.count, intake.target) == (0, 8)
    assert intake.completed is False
    assert db.get("SELECT COUNT(*) AS n FROM water_intake")["n"] == 0


def test_default_target_follows_setting(db) -> None:
    set_setting(db, "waterDailyTarget", "10.6")
    assert get_water_intake(db, DAY).target == 11

    for bad in ("0", "abc", "-3", "nan"):
        set_setting(db, "waterDailyTarget", bad)
        assert get_water_intake(db, DAY).target == 8


def test_increment_floors_and_has_minimum_of_one(db) -> None:
    assert increment_water_intake(db, day=DAY).count == 1
    assert increment_water_intake(db, 2.9, DAY).count == 3
    assert increment_water_intake(db, 0, DAY).count == 4
    assert increment_water_intake(db, -5, DAY).count == 5


def test_completed_is_derived(db) -> None:
    set_water_target(db, 2, DAY)
    increment_water_intake(db, 1, DAY)
    assert get_water_intake(db, DAY).completed is False
    assert increment_water_intake(db, 1, DAY).completed is True


def test_set_target_rounds_and_updates_default(db) -> None:
    increment_water_intake(db, 3, DAY)
    intake = set_water_target(db, 5.5, DAY)
    assert (intake.count, intake.target) == (3, 6)
    assert get_setting(db, "waterDailyTarget") == "6"

    # new days pick up the remembered target
    assert get_water_intake(db, date(2025, 6, 16)).target == 6
    assert set_water_target(db, 0, DAY).target == 1


def test_set_count_clamps_and_reset_keeps_target(db) -> None:
    set_water_target(db, 12, DAY)
    assert set_water_intake_count(db, 7, DAY).count == 7
    assert set_water_intake_count(db, -2, DAY).count == 0

    set_water_intake_count(db, 9, DAY)
    intake = reset_water_intake(db, DAY)
    assert (intake.count, intake.target) == (0, 12)


def test_days_are_independent(db) -> None:
    increment_water_intake(db, 4, DAY)
    assert get_water_intake(db, date(2025, 6, 14)).count == 0
    assert get_water_intake(db, DAY).count == 4
