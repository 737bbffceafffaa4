"""SQLite DDL for MyFast. Every statement is guarded with IF NOT EXISTS."""

CREATE_SCHEMA_VERSION = """
CREATE TABLE IF NOT EXISTS schema_version (
    version     INTEGER PRIMARY KEY,
    description TEXT,
    applied_at  TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
)
"""

CREATE_FASTS = """
CREATE TABLE IF NOT EXISTS fasts (
    id               TEXT    PRIMARY KEY,
    protocol         TEXT    NOT NULL,
    target_hours     REAL    NOT NULL,
    started_at       TEXT    NOT NULL,
    ended_at         TEXT,
    duration_seconds INTEGER,
    hit_target       INTEGER CHECK(hit_target IN (0, 1)),
    notes            TEXT,
    created_at       TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
)
"""

CREATE_FASTS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS fasts_started_idx ON fasts(started_at)",
    "CREATE INDEX IF NOT EXISTS fasts_protocol_idx ON fasts(protocol)",
    "CREATE INDEX IF NOT EXISTS fasts_hit_target_idx ON fasts(hit_target)",
]

CREATE_ACTIVE_FAST = """
CREATE TABLE IF NOT EXISTS active_fast (
    id           TEXT PRIMARY KEY DEFAULT 'current' CHECK(id = 'current'),
    fast_id      TEXT NOT NULL REFERENCES fasts(id) ON DELETE CASCADE,
    protocol     TEXT NOT NULL,
    target_hours REAL NOT NULL,
    started_at   TEXT NOT NULL
)
"""

CREATE_WEIGHT_ENTRIES = """
CREATE TABLE IF NOT EXISTS weight_entries (
    id           TEXT PRIMARY KEY,
    weight_value REAL NOT NULL,
    unit         TEXT NOT NULL DEFAULT 'lbs' CHECK(unit IN ('lbs', 'kg')),
    date         TEXT NOT NULL,
    notes        TEXT,
    created_at   TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
)
"""

CREATE_WEIGHT_ENTRIES_INDEXES = [
    "CREATE INDEX IF NOT EXISTS weight_date_idx ON weight_entries(date)",
]

CREATE_PROTOCOLS = """
CREATE TABLE IF NOT EXISTS protocols (
    id            TEXT    PRIMARY KEY,
    name          TEXT    NOT NULL,
    fasting_hours REAL    NOT NULL,
    eating_hours  REAL    NOT NULL,
    description   TEXT,
    is_custom     INTEGER NOT NULL DEFAULT 0,
    is_default    INTEGER NOT NULL DEFAULT 0,
    sort_order    INTEGER NOT NULL DEFAULT 0
)
"""

CREATE_STREAK_CACHE = """
CREATE TABLE IF NOT EXISTS streak_cache (
    key        TEXT    PRIMARY KEY,
    value      INTEGER NOT NULL,
    updated_at TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
)
"""

CREATE_SETTINGS = """
CREATE TABLE IF NOT EXISTS settings (
    key   TEXT PRIMARY KEY,
    value TEXT NOT NULL
)
"""

CREATE_WATER_INTAKE = """
CREATE TABLE IF NOT EXISTS water_intake (
    date       TEXT    PRIMARY KEY,
    count      INTEGER NOT NULL DEFAULT 0 CHECK(count >= 0),
    target     INTEGER NOT NULL DEFAULT 8 CHECK(target >= 1),
    updated_at TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
)
"""

CREATE_GOALS = """
CREATE TABLE IF NOT EXISTS goals (
    id           TEXT    PRIMARY KEY,
    type         TEXT    NOT NULL CHECK(type IN ('fasts_per_week','hours_per_week','hours_per_month','weight_milestone')),
    target_value REAL    NOT NULL,
    period       TEXT    NOT NULL CHECK(period IN ('weekly','monthly','milestone')),
    direction    TEXT    NOT NULL DEFAULT 'at_least' CHECK(direction IN ('at_least','at_most')),
    label        TEXT,
    unit         TEXT,
    start_date   TEXT    NOT NULL,
    end_date     TEXT,
    is_active    INTEGER NOT NULL DEFAULT 1,
    created_at   TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
)
"""

CREATE_GOALS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS goals_active_idx ON goals(is_active)",
    "CREATE INDEX IF NOT EXISTS goals_type_idx ON goals(type)",
]

CREATE_GOAL_PROGRESS = """
CREATE TABLE IF NOT EXISTS goal_progress (
    id            TEXT    PRIMARY KEY,
    goal_id       TEXT    NOT NULL REFERENCES goals(id) ON DELETE CASCADE,
    period_start  TEXT    NOT NULL,
    period_end    TEXT    NOT NULL,
    current_value REAL    NOT NULL,
    target_value  REAL    NOT NULL,
    completed     INTEGER NOT NULL DEFAULT 0,
    created_at    TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
    UNIQUE(goal_id, period_start, period_end)
)
"""

CREATE_GOAL_PROGRESS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS goal_progress_goal_idx ON goal_progress(goal_id, period_start)",
]

CREATE_NOTIFICATIONS_CONFIG = """
CREATE TABLE IF NOT EXISTS notifications_config (
    key     TEXT    PRIMARY KEY,
    enabled INTEGER NOT NULL DEFAULT 1 CHECK(enabled IN (0, 1))
)
"""

CORE_TABLES = [
    CREATE_SCHEMA_VERSION,
    CREATE_FASTS,
    *CREATE_FASTS_INDEXES,
    CREATE_WEIGHT_ENTRIES,
    *CREATE_WEIGHT_ENTRIES_INDEXES,
    CREATE_PROTOCOLS,
    CREATE_STREAK_CACHE,
    CREATE_ACTIVE_FAST,
    CREATE_SETTINGS,
]

FEATURE_TABLES = [
    CREATE_WATER_INTAKE,
    CREATE_GOALS,
    *CREATE_GOALS_INDEXES,
    CREATE_GOAL_PROGRESS,
    *CREATE_GOAL_PROGRESS_INDEXES,
    CREATE_NOTIFICATIONS_CONFIG,
]

USER_TABLES = [
    "active_fast",
    "fasts",
    "weight_entries",
    "water_intake",
    "goal_progress",
    "goals",
    "notifications_config",
    "streak_cache",
    "settings",
]
