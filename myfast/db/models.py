from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Literal

GoalType = Literal["fasts_per_week", "hours_per_week", "hours_per_month", "weight_milestone"]
GoalPeriod = Literal["weekly", "monthly", "milestone"]
GoalDirection = Literal["at_least", "at_most"]
WeightUnit = Literal["lbs", "kg"]

GOAL_TYPES: tuple[str, ...] = ("fasts_per_week", "hours_per_week", "hours_per_month", "weight_milestone")
GOAL_PERIODS: tuple[str, ...] = ("weekly", "monthly", "milestone")
GOAL_DIRECTIONS: tuple[str, ...] = ("at_least", "at_most")
WEIGHT_UNITS: tuple[str, ...] = ("lbs", "kg")

ACTIVE_FAST_KEY = "current"


def new_id() -> str:
    return str(uuid.uuid4())


def _as_bool(value: Any) -> bool | None:
    if value is None:
        return None
    return int(value) == 1


@dataclass(slots=True)
class Fast:
    id: str
    protocol: str
    target_hours: float
    started_at: str
    ended_at: str | None = None
    duration_seconds: int | None = None
    hit_target: bool | None = None
    notes: str | None = None
    created_at: str | None = None

    @property
    def is_active(self) -> bool:
        return self.ended_at is None

    @property
    def started_on(self) -> str:
        return self.started_at[:10]

    @property
    def duration_hours(self) -> float | None:
        if self.duration_seconds is None:
            return None
        return self.duration_seconds / 3600

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Fast":
        return cls(
            id=row["id"],
            protocol=row["protocol"],
            target_hours=float(row["target_hours"]),
            started_at=row["started_at"],
            ended_at=row.get("ended_at"),
            duration_seconds=row.get("duration_seconds"),
            hit_target=_as_bool(row.get("hit_target")),
            notes=row.get("notes"),
            created_at=row.get("created_at"),
        )


@dataclass(slots=True)
class ActiveFast:
    fast_id: str
    protocol: str
    target_hours: float
    started_at: str
    id: str = ACTIVE_FAST_KEY

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "ActiveFast":
        return cls(
            id=row["id"],
            fast_id=row["fast_id"],
            protocol=row["protocol"],
            target_hours=float(row["target_hours"]),
            started_at=row["started_at"],
        )


@dataclass(slots=True)
class WeightEntry:
    id: str
    weight: float
    unit: str
    date: str
    notes: str | None = None
    created_at: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "WeightEntry":
        return cls(
            id=row["id"],
            weight=float(row["weight_value"]),
            unit=row["unit"],
            date=row["date"],
            notes=row.get("notes"),
            created_at=row.get("created_at"),
        )


@dataclass(slots=True)
class Protocol:
    id: str
    name: str
    fasting_hours: float
    eating_hours: float
    description: str | None = None
    is_custom: bool = False
    is_default: bool = False
    sort_order: int = 0

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Protocol":
        return cls(
            id=row["id"],
            name=row["name"],
            fasting_hours=float(row["fasting_hours"]),
            eating_hours=float(row["eating_hours"]),
            description=row.get("description"),
            is_custom=bool(row.get("is_custom")),
            is_default=bool(row.get("is_default")),
            sort_order=int(row.get("sort_order") or 0),
        )


@dataclass(slots=True)
class Goal:
    id: str
    type: str
    target_value: float
    period: str
    direction: str
    label: str | None
    unit: str | None
    start_date: str
    end_date: str | None = None
    is_active: bool = True
    created_at: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Goal":
        return cls(
            id=row["id"],
            type=row["type"],
            target_value=float(row["target_value"]),
            period=row["period"],
            direction=row["direction"],
            label=row.get("label"),
            unit=row.get("unit"),
            start_date=row["start_date"],
            end_date=row.get("end_date"),
            is_active=bool(row["is_active"]),
            created_at=row.get("created_at"),
        )


@dataclass(slots=True)
class GoalProgress:
    goal_id: str
    period_start: str
    period_end: str
    current_value: float
    target_value: float
    completed: bool
    id: str | None = None
    created_at: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "GoalProgress":
        return cls(
            id=row["id"],
            goal_id=row["goal_id"],
            period_start=row["period_start"],
            period_end=row["period_end"],
            current_value=float(row["current_value"]),
            target_value=float(row["target_value"]),
            completed=bool(row["completed"]),
            created_at=row.get("created_at"),
        )


@dataclass(slots=True)
class WaterIntake:
    date: str
    count: int
    target: int
    updated_at: str | None = None

    @property
    def completed(self) -> bool:
        return self.count >= self.target

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "WaterIntake":
        return cls(
            date=row["date"],
            count=int(row["count"]),
            target=int(row["target"]),
            updated_at=row.get("updated_at"),
        )


@dataclass(slots=True)
class StreakCache:
    current_streak: int
    longest_streak: int
    total_fasts: int
    updated_at: str | None = None


@dataclass(slots=True)
class NotificationPreferences:
    fast_start: bool = True
    progress25: bool = False
    progress50: bool = True
    progress75: bool = True
    fast_complete: bool = True

    # stored key -> attribute
    KEYS = {
        "fastStart": "fast_start",
        "progress25": "progress25",
        "progress50": "progress50",
        "progress75": "progress75",
        "fastComplete": "fast_complete",
    }

    def is_enabled(self, key: str) -> bool:
        return bool(getattr(self, self.KEYS[key]))

    def as_dict(self) -> dict[str, bool]:
        return {key: self.is_enabled(key) for key in self.KEYS}
