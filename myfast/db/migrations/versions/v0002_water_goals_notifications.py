"""water, goals, notifications

Version: 2
Revises: 1
Creates: water_intake, goals, goal_progress, notifications_config
"""

from myfast.db.database import Database
from myfast.db.schema import FEATURE_TABLES
from myfast.db.seed import seed_notification_config, seed_settings

version = 2
description = "Water intake, goals, goal progress, notifications config"


def upgrade(db: Database) -> None:
    for sql in FEATURE_TABLES:
        db.run(sql)
    # waterDailyTarget arrived with this version
    seed_settings(db)
    seed_notification_config(db)
