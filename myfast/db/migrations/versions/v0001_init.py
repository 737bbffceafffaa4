"""init

Version: 1
Creates: fasts, active_fast, weight_entries, protocols, streak_cache, settings, schema_version
"""

from myfast.db.database import Database
from myfast.db.schema import CORE_TABLES
from myfast.db.seed import seed_protocols, seed_settings

version = 1
description = "Initial schema: fasts, weight_entries, protocols, streak_cache, active_fast, settings, schema_version"


def upgrade(db: Database) -> None:
    for sql in CORE_TABLES:
        db.run(sql)
    seed_protocols(db)
    seed_settings(db)
