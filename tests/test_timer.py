from datetime import datetime, timedelta, timezone

from myfast.core.timer import compute_timer_state, format_duration
from myfast.db.models import ActiveFast

START = datetime(2025, 1, 15, 8, 0, tzinfo=timezone.utc)


def _active(target_hours: float = 16, started_at: str = "2025-01-15T08:00:00.000Z") -> ActiveFast:
    return ActiveFast(fast_id="f-1", protocol="16:8", target_hours=target_hours, started_at=started_at)


def test_idle_state_without_active_fast() -> None:
    state = compute_timer_state(None, START)
    assert state.state == "idle"
    assert state.active_fast is None
    assert (state.elapsed, state.remaining, state.progress) == (0, 0, 0)
    assert state.target_reached is False


def test_mid_fast_values() -> None:
    active = _active()
    state = compute_timer_state(active, START + timedelta(hours=4))
    assert state.state == "fasting"
    assert state.active_fast is active
    assert state.elapsed == 4 * 3600
    assert state.remaining == 12 * 3600
    assert state.progress == 0.25
    assert state.target_reached is False


def test_at_start_nothing_elapsed() -> None:
    state = compute_timer_state(_active(), START)
    assert state.elapsed == 0
    assert state.remaining == 16 * 3600
    assert state.progress == 0
    assert state.target_reached is False


def test_target_reached_exactly() -> None:
    state = compute_timer_state(_active(), START + timedelta(hours=16))
    assert state.elapsed == 57600
    assert state.remaining == 0
    assert state.progress == 1
    assert state.target_reached is True


def test_progress_capped_past_target() -> None:
    state = compute_timer_state(_active(), START + timedelta(hours=20))
    assert state.elapsed == 20 * 3600
    assert state.remaining == 0
    assert state.progress == 1
    assert state.target_reached is True


def test_elapsed_is_floored() -> None:
    state = compute_timer_state(_active(), START + timedelta(seconds=59, milliseconds=900))
    assert state.elapsed == 59


def test_degenerate_target_counts_as_reached() -> None:
    for target in (0, -2):
        state = compute_timer_state(_active(target_hours=target), START + timedelta(hours=1))
        assert state.progress == 0
        assert state.remaining == 0
        assert state.target_reached is True


def test_clock_skew_clamps_elapsed_to_zero() -> None:
    state = compute_timer_state(_active(), START - timedelta(minutes=5))
    assert state.elapsed == 0
    assert state.progress == 0
    assert state.remaining == 16 * 3600
    assert state.target_reached is False


def test_naive_now_is_treated_as_utc() -> None:
    state = compute_timer_state(_active(), datetime(2025, 1, 15, 9, 0))
    assert state.elapsed == 3600


def test_format_duration() -> None:
    assert format_duration(0) == "00:00:00"
    assert format_duration(59) == "00:00:59"
    assert format_duration(3661) == "01:01:01"
    assert format_duration(91815) == "25:30:15"
    assert format_duration(100 * 3600) == "100:00:00"
