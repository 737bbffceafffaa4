import pytest

from myfast.db.repositories.notifications_repo import get_notification_preferences, set_notification_preference
from myfast.errors import UnknownPreferenceError


def test_seeded_defaults(db) -> None:
    prefs = get_notification_preferences(db)
    assert prefs.as_dict() == {
        "fastStart": True,
        "progress25": False,
        "progress50": True,
        "progress75": True,
        "fastComplete": True,
    }


def test_missing_rows_fall_back_to_defaults(db) -> None:
    db.run("DELETE FROM notifications_config")
    db.run("INSERT INTO notifications_config (key, enabled) VALUES ('legacyKey', 0)")
    assert get_notification_preferences(db).fast_complete is True


def test_set_preference_overwrites_single_key(db) -> None:
    set_notification_preference(db, "progress25", True)
    set_notification_preference(db, "fastComplete", False)
    set_notification_preference(db, "fastComplete", False)

    prefs = get_notification_preferences(db)
    assert prefs.progress25 is True
    assert prefs.fast_complete is False
    assert prefs.fast_start is True
    assert db.get("SELECT COUNT(*) AS n FROM notifications_config")["n"] == 5


def test_unknown_preference_rejected(db) -> None:
    with pytest.raises(UnknownPreferenceError):
        set_notification_preference(db, "progress90", True)
    with pytest.raises(KeyError):
        set_notification_preference(db, "", True)
