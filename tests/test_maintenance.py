from datetime import date, datetime, timezone

from myfast.db.maintenance import erase_all_data
from myfast.db.migrations import current_version
from myfast.db.repositories.fasts_repo import count_fasts, get_active_fast, start_fast
from myfast.db.repositories.goals_repo import create_goal, list_goals, refresh_goal_progress
from myfast.db.repositories.notifications_repo import get_notification_preferences, set_notification_preference
from myfast.db.repositories.settings_repo import get_setting, set_setting
from myfast.db.repositories.water_repo import increment_water_intake
from myfast.db.repositories.weight_repo import add_weight_entry, list_weight_entries
from myfast.stats.streaks import refresh_streak_cache


def test_erase_all_data_restores_defaults(db, complete_fast) -> None:
    complete_fast(datetime(2025, 6, 1, 8, tzinfo=timezone.utc), 16)
    start_fast(db, "16:8", 16, datetime(2025, 6, 2, 8, tzinfo=timezone.utc))
    add_weight_entry(db, 180, "lbs", date(2025, 6, 1))
    increment_water_intake(db, 3, date(2025, 6, 1))
    create_goal(db, type="fasts_per_week", target_value=3, start_date="2025-05-01")
    refresh_goal_progress(db, date(2025, 6, 1))
    refresh_streak_cache(db)
    set_setting(db, "theme", "light")
    set_notification_preference(db, "fastStart", False)

    erase_all_data(db)

    assert count_fasts(db) == 0
    assert get_active_fast(db) is None
    assert list_weight_entries(db) == []
    assert list_goals(db, include_inactive=True) == []
    for table in ("water_intake", "goal_progress", "streak_cache"):
        assert db.get(f"SELECT COUNT(*) AS n FROM {table}")["n"] == 0

    assert get_setting(db, "theme") == "dark"
    assert get_notification_preferences(db).fast_start is True
    assert db.get("SELECT COUNT(*) AS n FROM protocols")["n"] == 6
    assert current_version(db) == 2
