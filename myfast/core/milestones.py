from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from myfast.core.dates import now_utc, parse_iso_utc, to_utc
from myfast.db.models import ActiveFast, NotificationPreferences


@dataclass(frozen=True, slots=True)
class Milestone:
    key: str
    fraction: float
    fire_at: datetime
    title: str
    body: str


# preference key, fraction of target
MILESTONES: tuple[tuple[str, float], ...] = (
    ("progress25", 0.25),
    ("progress50", 0.5),
    ("progress75", 0.75),
    ("fastComplete", 1.0),
)


def _message(key: str, fraction: float, target_hours: float) -> tuple[str, str]:
    if key == "fastComplete":
        return "Target reached!", f"You've hit your {target_hours:g}h fasting target. Great job!"
    percent = int(fraction * 100)
    return f"{percent}% there", f"You're {percent}% through your {target_hours:g}h fast."


def plan_milestones(
    active_fast: ActiveFast | None,
    preferences: NotificationPreferences,
    now: datetime | None = None,
) -> list[Milestone]:
    """Enabled progress milestones of the active fast that are still in the future."""
    if active_fast is None or active_fast.target_hours <= 0:
        return []

    current = to_utc(now or now_utc())
    started = parse_iso_utc(active_fast.started_at)
    target_seconds = active_fast.target_hours * 3600

    planned = []
    for key, fraction in MILESTONES:
        if not preferences.is_enabled(key):
            continue
        fire_at = started + timedelta(seconds=target_seconds * fraction)
        if fire_at <= current:
            continue
        title, body = _message(key, fraction, active_fast.target_hours)
        planned.append(Milestone(key=key, fraction=fraction, fire_at=fire_at, title=title, body=body))
    return planned
