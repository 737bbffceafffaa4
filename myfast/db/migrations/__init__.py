"""Versioned schema migrations.

Each module under ``versions`` exposes ``version``, ``description`` and
``upgrade(db)``. ``migrate`` applies everything newer than the highest
row in ``schema_version`` inside a single transaction.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Callable, Sequence

from loguru import logger

from myfast.core.dates import now_iso_utc
from myfast.db.database import Database
from myfast.db.migrations.versions import v0001_init, v0002_water_goals_notifications


@dataclass(frozen=True, slots=True)
class Migration:
    version: int
    description: str
    upgrade: Callable[[Database], None]

    @classmethod
    def from_module(cls, module: ModuleType) -> "Migration":
        return cls(version=module.version, description=module.description, upgrade=module.upgrade)


# Append new versions at the end.
MIGRATIONS: list[Migration] = [
    Migration.from_module(v0001_init),
    Migration.from_module(v0002_water_goals_notifications),
]


def current_version(db: Database) -> int:
    """Highest applied version, 0 for a fresh database."""
    table = db.get("SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'schema_version'")
    if table is None:
        return 0
    row = db.get("SELECT MAX(version) AS version FROM schema_version")
    if row is None or row["version"] is None:
        return 0
    return int(row["version"])


def migrate(db: Database, migrations: Sequence[Migration] | None = None) -> int:
    steps = sorted(MIGRATIONS if migrations is None else migrations, key=lambda m: m.version)
    current = current_version(db)
    pending = [m for m in steps if m.version > current]

    if not pending:
        logger.debug("migrate_noop version={}", current)
        return current

    def _apply() -> int:
        for migration in pending:
            migration.upgrade(db)
            db.run(
                "INSERT INTO schema_version (version, description, applied_at) VALUES (?, ?, ?)",
                [migration.version, migration.description, now_iso_utc()],
            )
            logger.info("migration_applied version={} description={}", migration.version, migration.description)
        return pending[-1].version

    return db.transaction(_apply)


def init_database(db: Database) -> int:
    """Bring the schema up to date and seed defaults. Safe on every startup."""
    return migrate(db)
