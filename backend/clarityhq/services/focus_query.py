"""Keyword heuristics for turning a free-text request into planner inputs."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, TypeVar

from clarityhq.services.focus_copy import RandomSource
from clarityhq.services.focus_planner import generate_plan
from clarityhq.services.focus_types import CandidateTask, EnergyLevel, FocusArea, FocusSessionPlan

T = TypeVar("T")


@dataclass(frozen=True)
class ParsedQuery:
    energy_level: EnergyLevel
    time_available: int
    focus_area: FocusArea


# Checked in order; the first label with a matching keyword wins.
ENERGY_KEYWORDS: List[Tuple[EnergyLevel, List[str]]] = [
    (EnergyLevel.SLUGGISH, ["tired", "exhausted", "sluggish"]),
    (EnergyLevel.WIRED, ["wired", "restless", "can't sit still"]),
    (EnergyLevel.ENERGIZED, ["energized", "motivated", "excited"]),
    (EnergyLevel.ANXIOUS, ["anxious", "worried", "stressed"]),
]
TIME_KEYWORDS: List[Tuple[int, List[str]]] = [
    (15, ["15", "fifteen"]),
    (30, ["30", "thirty", "half hour"]),
    (45, ["45", "forty-five"]),
    (60, ["60", "hour", "sixty"]),
]
AREA_KEYWORDS: List[Tuple[FocusArea, List[str]]] = [
    (FocusArea.CREATIVE, ["creative", "art", "write", "writing"]),
    (FocusArea.ANALYTICAL, ["analytical", "analysis", "data", "research"]),
    (FocusArea.ADMIN, ["admin", "email", "organize"]),
]

DEFAULT_ENERGY = EnergyLevel.BALANCED
DEFAULT_TIME = 30
DEFAULT_AREA = FocusArea.ANY


def parse_query(text: str | None) -> ParsedQuery:
    lowered = _normalize(text)
    return ParsedQuery(
        energy_level=_first_match(lowered, ENERGY_KEYWORDS, DEFAULT_ENERGY),
        time_available=_first_match(lowered, TIME_KEYWORDS, DEFAULT_TIME),
        focus_area=_first_match(lowered, AREA_KEYWORDS, DEFAULT_AREA),
    )


def plan_from_query(
    text: str | None,
    candidate_tasks: Optional[Sequence[CandidateTask]] = None,
    rng: Optional[RandomSource] = None,
) -> Tuple[ParsedQuery, FocusSessionPlan]:
    """Parse ``text`` and generate a plan from the inferred inputs."""
    parsed = parse_query(text)
    plan = generate_plan(
        parsed.energy_level,
        parsed.time_available,
        parsed.focus_area,
        candidate_tasks,
        rng=rng,
    )
    return parsed, plan


def _normalize(text: str | None) -> str:
    if not text:
        return ""
    return text.lower().replace("’", "'")


def _first_match(lowered: str, table: List[Tuple[T, List[str]]], default: T) -> T:
    for label, keywords in table:
        if any(keyword in lowered for keyword in keywords):
            return label
    return default
