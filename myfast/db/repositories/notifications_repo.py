from loguru import logger

from myfast.db.database import Database
from myfast.db.models import NotificationPreferences
from myfast.errors import UnknownPreferenceError


def get_notification_preferences(db: Database) -> NotificationPreferences:
    """Stored flags over the defaults. Unknown stored keys are ignored."""
    prefs = NotificationPreferences()
    for row in db.all("SELECT key, enabled FROM notifications_config"):
        attr = NotificationPreferences.KEYS.get(row["key"])
        if attr is None:
            continue
        setattr(prefs, attr, int(row["enabled"]) == 1)
    return prefs


def set_notification_preference(db: Database, key: str, enabled: bool) -> None:
    if key not in NotificationPreferences.KEYS:
        raise UnknownPreferenceError(key)
    db.run("INSERT OR REPLACE INTO notifications_config (key, enabled) VALUES (?, ?)", [key, 1 if enabled else 0])
    logger.info("notification_preference_saved key={} enabled={}", key, bool(enabled))
