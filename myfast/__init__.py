from myfast.core.milestones import Milestone, plan_milestones  # noqa: F401
from myfast.core.timer import TimerState, compute_timer_state, format_duration  # noqa: F401
from myfast.core.zones import FASTING_ZONES, FastingZone, get_current_fasting_zone, get_current_zone_progress  # noqa: F401
from myfast.db.database import Database, SqlDatabase, open_database  # noqa: F401
from myfast.db.maintenance import erase_all_data  # noqa: F401
from myfast.db.migrations import MIGRATIONS, Migration, current_version, init_database, migrate  # noqa: F401
from myfast.db.models import (  # noqa: F401
    ActiveFast,
    Fast,
    Goal,
    GoalProgress,
    NotificationPreferences,
    Protocol,
    StreakCache,
    WaterIntake,
    WeightEntry,
)
from myfast.db.repositories.fasts_repo import (  # noqa: F401
    count_fasts,
    delete_fast,
    end_fast,
    get_active_fast,
    get_fast,
    list_fasts,
    start_fast,
)
from myfast.db.repositories.goals_repo import (  # noqa: F401
    archive_goal,
    create_goal,
    delete_goal,
    get_goal,
    get_goal_progress,
    list_goal_progress,
    list_goals,
    refresh_goal_progress,
    upsert_goal,
)
from myfast.db.repositories.notifications_repo import get_notification_preferences, set_notification_preference  # noqa: F401
from myfast.db.repositories.protocols_repo import get_default_protocol, get_protocol, list_protocols  # noqa: F401
from myfast.db.repositories.settings_repo import get_bool_setting, get_setting, list_settings, set_setting  # noqa: F401
from myfast.db.repositories.water_repo import (  # noqa: F401
    get_water_intake,
    increment_water_intake,
    reset_water_intake,
    set_water_intake_count,
    set_water_target,
)
from myfast.db.repositories.weight_repo import (  # noqa: F401
    add_weight_entry,
    delete_weight_entry,
    get_latest_weight_entry,
    import_weight_if_missing,
    list_weight_entries,
)
from myfast.errors import FastAlreadyActiveError, MyFastError, UnknownPreferenceError  # noqa: F401
from myfast.exports.csv_export import export_all_text, export_fasts_csv, export_weight_csv  # noqa: F401
from myfast.stats.aggregation import (  # noqa: F401
    adherence_rate,
    average_duration,
    duration_trend,
    monthly_rollup,
    weekly_rollup,
)
from myfast.stats.streaks import compute_streaks, get_streaks, refresh_streak_cache  # noqa: F401
from myfast.stats.summary import format_summary_share_text, get_annual_summary, get_monthly_summary  # noqa: F401
