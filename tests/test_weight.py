from datetime import date, datetime, timezone

import pytest

from myfast.db.repositories.weight_repo import (
    IMPORTED_NOTE,
    add_weight_entry,
    delete_weight_entry,
    get_latest_weight_entry,
    import_weight_if_missing,
    list_weight_entries,
)


def test_add_and_list_newest_first(db) -> None:
    add_weight_entry(db, 180.2, "lbs", date(2025, 6, 1))
    add_weight_entry(db, 178.0, "lbs", date(2025, 6, 8), notes="after trip")
    add_weight_entry(db, 179.1, "lbs", date(2025, 6, 4))

    entries = list_weight_entries(db)
    assert [e.date for e in entries] == ["2025-06-08", "2025-06-04", "2025-06-01"]
    assert entries[0].notes == "after trip"
    assert get_latest_weight_entry(db).weight == 178.0


def test_unknown_unit_rejected(db) -> None:
    with pytest.raises(ValueError):
        add_weight_entry(db, 80, "stone")


def test_delete_weight_entry(db) -> None:
    entry = add_weight_entry(db, 81.5, "kg", date(2025, 6, 1))
    assert delete_weight_entry(db, entry.id) is True
    assert delete_weight_entry(db, entry.id) is False
    assert get_latest_weight_entry(db) is None


def test_import_dedups_same_day_unit_and_value(db) -> None:
    recorded = datetime(2025, 6, 1, 23, 30, tzinfo=timezone.utc)

    assert import_weight_if_missing(db, 80.12345, "kg", recorded) is True
    assert import_weight_if_missing(db, 80.1234, "kg", "2025-06-01T06:00:00Z") is False

    entries = list_weight_entries(db)
    assert len(entries) == 1
    assert entries[0].weight == 80.123
    assert entries[0].date == "2025-06-01"
    assert entries[0].notes == IMPORTED_NOTE


def test_import_keeps_distinct_readings(db) -> None:
    recorded = datetime(2025, 6, 1, 7, tzinfo=timezone.utc)
    assert import_weight_if_missing(db, 80.0, "kg", recorded) is True
    assert import_weight_if_missing(db, 80.0, "lbs", recorded) is True
    assert import_weight_if_missing(db, 80.5, "kg", recorded) is True
    assert import_weight_if_missing(db, 80.0, "kg", datetime(2025, 6, 2, 7, tzinfo=timezone.utc)) is True
    assert len(list_weight_entries(db)) == 4
