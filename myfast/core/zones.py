from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FastingZone:
    name: str
    start_hour: float
    end_hour: float | None
    description: str


# Sorted by start_hour; the last zone is open-ended.
FASTING_ZONES: tuple[FastingZone, ...] = (
    FastingZone("Fed State", 0, 4, "Body is digesting and absorbing nutrients."),
    FastingZone("Early Fasting", 4, 8, "Insulin drops and the body starts using stored glycogen."),
    FastingZone("Fat Burning", 8, 12, "Glycogen runs low and fat becomes a main fuel source."),
    FastingZone("Ketosis Beginning", 12, 18, "The liver starts producing ketones from fat."),
    FastingZone("Deep Ketosis", 18, 24, "Ketone levels rise and fat burning intensifies."),
    FastingZone("Autophagy Possible", 24, None, "Cellular cleanup processes may increase."),
)


def get_current_fasting_zone(elapsed_seconds: float) -> FastingZone:
    hours = max(0.0, elapsed_seconds / 3600)
    current = FASTING_ZONES[0]
    for zone in FASTING_ZONES:
        if hours >= zone.start_hour:
            current = zone
    return current


def get_current_zone_progress(elapsed_seconds: float) -> float:
    """Fraction of the way through the current zone, 1 for the open-ended one."""
    zone = get_current_fasting_zone(elapsed_seconds)
    if zone.end_hour is None:
        return 1.0
    hours = max(0.0, elapsed_seconds / 3600)
    span = zone.end_hour - zone.start_hour
    return min(max((hours - zone.start_hour) / span, 0.0), 1.0)
