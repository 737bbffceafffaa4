from loguru import logger

from myfast.db.database import Database

_TRUTHY = {"1", "true", "yes", "on"}


def get_setting(db: Database, key: str, default: str | None = None) -> str | None:
    row = db.get("SELECT value FROM settings WHERE key = ?", [key])
    return row["value"] if row else default


def set_setting(db: Database, key: str, value: str) -> None:
    db.run("INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)", [key, str(value)])
    logger.info("setting_saved key={}", key)


def get_bool_setting(db: Database, key: str, default: bool = False) -> bool:
    value = get_setting(db, key)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def list_settings(db: Database) -> dict[str, str]:
    return {row["key"]: row["value"] for row in db.all("SELECT key, value FROM settings ORDER BY key")}
