from loguru import logger

from myfast.db.database import Database

PROTOCOL_PRESETS = [
    {
        "id": "16:8",
        "name": "Lean Gains (16:8)",
        "fasting_hours": 16,
        "eating_hours": 8,
        "description": "Fast 16 hours, eat within an 8-hour window. Most popular protocol for beginners.",
        "sort_order": 1,
        "is_default": 1,
    },
    {
        "id": "18:6",
        "name": "Daily 18:6",
        "fasting_hours": 18,
        "eating_hours": 6,
        "description": "Fast 18 hours, eat within a 6-hour window. Moderate intensity.",
        "sort_order": 2,
        "is_default": 0,
    },
    {
        "id": "20:4",
        "name": "Warrior (20:4)",
        "fasting_hours": 20,
        "eating_hours": 4,
        "description": "Fast 20 hours, eat within a 4-hour window. One main meal with snacks.",
        "sort_order": 3,
        "is_default": 0,
    },
    {
        "id": "23:1",
        "name": "OMAD (23:1)",
        "fasting_hours": 23,
        "eating_hours": 1,
        "description": "One Meal A Day. Fast 23 hours, single eating hour.",
        "sort_order": 4,
        "is_default": 0,
    },
    {
        "id": "36:0",
        "name": "Alternate Day (36h)",
        "fasting_hours": 36,
        "eating_hours": 0,
        "description": "Full 36-hour fast. Skip an entire day of eating.",
        "sort_order": 5,
        "is_default": 0,
    },
    {
        "id": "48:0",
        "name": "Extended (48h)",
        "fasting_hours": 48,
        "eating_hours": 0,
        "description": "Full 48-hour fast. Two days without eating.",
        "sort_order": 6,
        "is_default": 0,
    },
]

DEFAULT_SETTINGS = {
    "defaultProtocol": "16:8",
    "notifyFastComplete": "true",
    "notifyEatingWindowClosing": "false",
    "weightTrackingEnabled": "false",
    "weightUnit": "lbs",
    "theme": "dark",
    "waterDailyTarget": "8",
    "healthSyncEnabled": "false",
    "healthReadWeight": "false",
    "healthWriteFasts": "false",
}

DEFAULT_NOTIFICATIONS = {
    "fastStart": 1,
    "progress25": 0,
    "progress50": 1,
    "progress75": 1,
    "fastComplete": 1,
}


def seed_protocols(db: Database) -> None:
    existing = {row["id"] for row in db.all("SELECT id FROM protocols")}
    created = 0
    for preset in PROTOCOL_PRESETS:
        if preset["id"] in existing:
            continue
        db.run(
            "INSERT OR IGNORE INTO protocols "
            "(id, name, fasting_hours, eating_hours, description, sort_order, is_default) "
            "VALUES (?, ?, ?, ?, ?, ?, ?)",
            [
                preset["id"],
                preset["name"],
                preset["fasting_hours"],
                preset["eating_hours"],
                preset["description"],
                preset["sort_order"],
                preset["is_default"],
            ],
        )
        created += 1

    if created:
        logger.info("seed_protocols created={}", created)


def seed_settings(db: Database) -> None:
    existing = {row["key"] for row in db.all("SELECT key FROM settings")}
    created = 0
    for key, value in DEFAULT_SETTINGS.items():
        if key in existing:
            continue
        db.run("INSERT OR IGNORE INTO settings (key, value) VALUES (?, ?)", [key, value])
        created += 1

    if created:
        logger.info("seed_settings created={}", created)


def seed_notification_config(db: Database) -> None:
    existing = {row["key"] for row in db.all("SELECT key FROM notifications_config")}
    created = 0
    for key, enabled in DEFAULT_NOTIFICATIONS.items():
        if key in existing:
            continue
        db.run("INSERT OR IGNORE INTO notifications_config (key, enabled) VALUES (?, ?)", [key, enabled])
        created += 1

    if created:
        logger.info("seed_notification_config created={}", created)


def seed_defaults(db: Database) -> None:
    """Re-insert every default row that is missing. Existing values are kept."""
    seed_protocols(db)
    seed_settings(db)
    seed_notification_config(db)
