"""Value types shared by the focus session planner."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

TIME_OPTIONS: Tuple[int, ...] = (15, 30, 45, 60)


class InvalidPlanArgument(ValueError):
    """Raised when planner inputs fall outside their fixed domains."""


class EnergyLevel(str, Enum):
    SLUGGISH = "sluggish"
    WIRED = "wired"
    ENERGIZED = "energized"
    ANXIOUS = "anxious"
    BALANCED = "balanced"


class FocusArea(str, Enum):
    CREATIVE = "creative"
    ANALYTICAL = "analytical"
    ADMIN = "admin"
    ANY = "any"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class CandidateTask:
    """An incomplete task the planner may schedule. Never mutated by the planner."""

    id: str
    title: str
    priority: Priority = Priority.MEDIUM
    status: str = "pending"
    description: Optional[str] = None


@dataclass(frozen=True)
class TimeSplit:
    focus_time: int
    break_time: int

    @property
    def total_time(self) -> int:
        return self.focus_time + self.break_time


@dataclass(frozen=True)
class FocusTask:
    title: str
    duration_minutes: int
    encouragement: str
    source_task_id: Optional[str] = None


@dataclass(frozen=True)
class FocusSessionPlan:
    tasks: Tuple[FocusTask, ...]
    break_time: int
    break_suggestion: str
    sensory_boost: str
    motivational_message: str
    focus_time: int
    total_time: int
    energy_level: EnergyLevel = EnergyLevel.BALANCED
    focus_area: FocusArea = FocusArea.ANY
    placeholder: bool = field(default=False)


def coerce_energy_level(value: object) -> EnergyLevel:
    try:
        return EnergyLevel(value)
    except ValueError:
        raise InvalidPlanArgument(f"Unknown energy level: {value!r}") from None


def coerce_focus_area(value: object) -> FocusArea:
    try:
        return FocusArea(value)
    except ValueError:
        raise InvalidPlanArgument(f"Unknown focus area: {value!r}") from None


def coerce_time_available(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value not in TIME_OPTIONS:
        raise InvalidPlanArgument(
            f"time_available must be one of {', '.join(str(option) for option in TIME_OPTIONS)}; got {value!r}"
        )
    return int(value)


def coerce_priority(value: object) -> Priority:
    """Map stored priority strings onto the enum, treating unknown values as medium."""
    try:
        return Priority(value)
    except ValueError:
        return Priority.MEDIUM
