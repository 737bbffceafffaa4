import pytest

from myfast.db.database import MEMORY_URL, open_database
from myfast.db.migrations import MIGRATIONS, Migration, current_version, init_database, migrate

EXPECTED_TABLES = {
    "fasts",
    "active_fast",
    "weight_entries",
    "protocols",
    "streak_cache",
    "settings",
    "water_intake",
    "goals",
    "goal_progress",
    "notifications_config",
    "schema_version",
}


def _tables(db) -> set[str]:
    rows = db.all("SELECT name FROM sqlite_master WHERE type = 'table'")
    return {row["name"] for row in rows}


def test_fresh_database_reports_version_zero() -> None:
    with open_database(MEMORY_URL) as db:
        assert current_version(db) == 0


def test_init_creates_all_tables_and_seeds() -> None:
    with open_database(MEMORY_URL) as db:
        version = init_database(db)

        assert version == MIGRATIONS[-1].version == 2
        assert EXPECTED_TABLES <= _tables(db)
        assert db.get("SELECT COUNT(*) AS n FROM protocols")["n"] == 6
        assert db.get("SELECT value FROM settings WHERE key = 'waterDailyTarget'")["value"] == "8"
        assert db.get("SELECT COUNT(*) AS n FROM notifications_config")["n"] == 5

        rows = db.all("SELECT version, description, applied_at FROM schema_version ORDER BY version")
        assert [row["version"] for row in rows] == [1, 2]
        assert all(row["description"] and row["applied_at"].endswith("Z") for row in rows)


def test_migrate_is_idempotent() -> None:
    with open_database(MEMORY_URL) as db:
        assert migrate(db) == 2
        assert migrate(db) == 2
        assert db.get("SELECT COUNT(*) AS n FROM schema_version")["n"] == 2
        assert db.get("SELECT COUNT(*) AS n FROM protocols")["n"] == 6


def test_partial_upgrade_applies_only_pending_versions() -> None:
    with open_database(MEMORY_URL) as db:
        assert migrate(db, MIGRATIONS[:1]) == 1
        assert "water_intake" not in _tables(db)

        assert migrate(db) == 2
        assert "water_intake" in _tables(db)
        assert [row["version"] for row in db.all("SELECT version FROM schema_version ORDER BY version")] == [1, 2]


def test_reseeding_keeps_user_values() -> None:
    with open_database(MEMORY_URL) as db:
        migrate(db, MIGRATIONS[:1])
        db.run("UPDATE settings SET value = 'light' WHERE key = 'theme'")
        migrate(db)
        assert db.get("SELECT value FROM settings WHERE key = 'theme'")["value"] == "light"


def test_failed_migration_rolls_back_whole_run() -> None:
    def _broken(db) -> None:
        db.run("CREATE TABLE IF NOT EXISTS half_done (id INTEGER)")
        raise RuntimeError("disk full")

    steps = [*MIGRATIONS, Migration(version=3, description="broken", upgrade=_broken)]
    with open_database(MEMORY_URL) as db:
        with pytest.raises(RuntimeError):
            migrate(db, steps)

        assert current_version(db) == 0
        assert _tables(db) == set()


def test_failed_migration_keeps_prior_version() -> None:
    def _broken(db) -> None:
        db.run("INSERT INTO settings (key, value) VALUES ('marker', 'x')")
        raise RuntimeError("disk full")

    with open_database(MEMORY_URL) as db:
        init_database(db)
        with pytest.raises(RuntimeError):
            migrate(db, [*MIGRATIONS, Migration(version=3, description="broken", upgrade=_broken)])

        assert current_version(db) == 2
        assert db.get("SELECT value FROM settings WHERE key = 'marker'") is None
