"""Timer state derived from the active fast and a clock reading.

Nothing here touches storage; the display simply calls
``compute_timer_state`` again on every tick.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from myfast.core.dates import parse_iso_utc, seconds_between
from myfast.db.models import ActiveFast

TimerStatus = Literal["idle", "fasting"]


@dataclass(slots=True)
class TimerState:
    state: TimerStatus
    active_fast: ActiveFast | None
    elapsed: int
    remaining: float
    progress: float
    target_reached: bool


def compute_timer_state(active_fast: ActiveFast | None, now: datetime) -> TimerState:
    if active_fast is None:
        return TimerState(state="idle", active_fast=None, elapsed=0, remaining=0, progress=0, target_reached=False)

    # now < started_at (clock skew) reads as zero elapsed
    elapsed = max(0, seconds_between(parse_iso_utc(active_fast.started_at), now))
    target_seconds = active_fast.target_hours * 3600

    if target_seconds <= 0:
        return TimerState(
            state="fasting",
            active_fast=active_fast,
            elapsed=elapsed,
            remaining=0,
            progress=0,
            target_reached=True,
        )

    return TimerState(
        state="fasting",
        active_fast=active_fast,
        elapsed=elapsed,
        remaining=max(target_seconds - elapsed, 0),
        progress=min(elapsed / target_seconds, 1),
        target_reached=elapsed >= target_seconds,
    )


def format_duration(seconds: int) -> str:
    """HH:MM:SS; hours keep counting past 24."""
    total = max(0, int(seconds))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
