from datetime import date, datetime, timedelta, timezone

import pytest

from myfast.core.dates import (
    days_back,
    epoch_day,
    month_days,
    parse_iso_utc,
    seconds_between,
    to_iso_utc,
    week_range,
)
from myfast.core.numbers import format_number, round_half_up, seconds_to_hours


def test_iso_timestamps_are_utc_with_millis() -> None:
    moscow = timezone(timedelta(hours=3))
    assert to_iso_utc(datetime(2025, 6, 15, 11, 0, tzinfo=moscow)) == "2025-06-15T08:00:00.000Z"
    assert to_iso_utc(datetime(2025, 6, 15, 8, 0, 0, 123456)) == "2025-06-15T08:00:00.123Z"
    assert parse_iso_utc("2025-06-15T08:00:00.000Z") == datetime(2025, 6, 15, 8, tzinfo=timezone.utc)


def test_seconds_between_floors() -> None:
    start = datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert seconds_between(start, start + timedelta(seconds=5, milliseconds=999)) == 5
    assert seconds_between(start, start - timedelta(milliseconds=1)) == -1


def test_epoch_days_and_ranges() -> None:
    assert epoch_day("1970-01-02") == 1
    assert epoch_day(date(2024, 3, 1)) - epoch_day("2024-02-28") == 2
    assert days_back(date(2025, 1, 2), 3) == [date(2024, 12, 31), date(2025, 1, 1), date(2025, 1, 2)]
    assert week_range(date(2025, 6, 15)) == (date(2025, 6, 9), date(2025, 6, 15))
    assert week_range(date(2025, 6, 9)) == (date(2025, 6, 9), date(2025, 6, 15))
    assert len(month_days(2024, 2)) == 29
    with pytest.raises(ValueError):
        month_days(2024, 0)


def test_round_half_up() -> None:
    assert round_half_up(66.66666) == 66.7
    assert round_half_up(0.05) == 0.1
    assert round_half_up(2.25) == 2.3
    assert round_half_up(None) == 0
    assert round_half_up(2.5, 0) == 3
    assert seconds_to_hours(5400) == 1.5


def test_format_number() -> None:
    assert format_number(16.0) == "16"
    assert format_number(16.5) == "16.5"
    assert format_number(0) == "0"
