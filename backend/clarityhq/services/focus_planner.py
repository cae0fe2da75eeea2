"""Focus session plan generator.

Turns a self-reported energy level, a time budget and (optionally) a list of open
tasks into a time-boxed plan: focus/break split, up to three task slots with
durations, and supporting copy. Everything here is a pure function of its inputs
plus the injected random source used for copy selection; nothing is persisted.
"""
from __future__ import annotations

import logging
import random
from typing import Dict, Iterable, List, Optional, Sequence

from clarityhq.services import focus_copy
from clarityhq.services.focus_copy import RandomSource
from clarityhq.services.focus_types import (
    CandidateTask,
    EnergyLevel,
    FocusArea,
    FocusSessionPlan,
    FocusTask,
    Priority,
    TimeSplit,
    coerce_energy_level,
    coerce_focus_area,
    coerce_time_available,
)

logger = logging.getLogger(__name__)

MAX_PLAN_TASKS = 3
MIN_BREAK_MINUTES = 5
# Sessions at or below this length keep whatever break the fraction produces.
SHORT_SESSION_MINUTES = 15

FOCUS_FRACTIONS: Dict[EnergyLevel, float] = {
    EnergyLevel.SLUGGISH: 0.70,
    EnergyLevel.WIRED: 0.75,
    EnergyLevel.ANXIOUS: 0.75,
    EnergyLevel.ENERGIZED: 0.85,
    EnergyLevel.BALANCED: 0.80,
}

# energy -> (bucket order, result cap)
SELECTION_POLICY: Dict[EnergyLevel, tuple] = {
    EnergyLevel.SLUGGISH: ((Priority.LOW, Priority.MEDIUM), 2),
    EnergyLevel.WIRED: ((Priority.MEDIUM, Priority.LOW), 2),
    EnergyLevel.ANXIOUS: ((Priority.MEDIUM, Priority.LOW), 2),
    EnergyLevel.ENERGIZED: ((Priority.HIGH, Priority.MEDIUM), 3),
    EnergyLevel.BALANCED: ((Priority.HIGH, Priority.MEDIUM), 3),
}
FALLBACK_TASK_COUNT = 2


def compute_time_split(energy_level: EnergyLevel | str, time_available: int) -> TimeSplit:
    """Split ``time_available`` minutes into focus and break time for the given energy level."""
    energy = coerce_energy_level(energy_level)
    minutes = coerce_time_available(time_available)

    fraction = FOCUS_FRACTIONS.get(energy, FOCUS_FRACTIONS[EnergyLevel.BALANCED])
    focus_time = int(minutes * fraction)
    break_time = minutes - focus_time

    if break_time < MIN_BREAK_MINUTES and minutes > SHORT_SESSION_MINUTES:
        break_time = MIN_BREAK_MINUTES
        focus_time = minutes - break_time

    return TimeSplit(focus_time=focus_time, break_time=break_time)


def select_tasks(candidates: Sequence[CandidateTask], energy_level: EnergyLevel | str) -> List[CandidateTask]:
    """
    Pick up to three candidates suited to the energy level.

    Candidates are bucketed by priority (relative order preserved) and the buckets are
    concatenated in the energy level's preferred order before capping. When the
    preferred buckets are empty the first two candidates are used instead.
    """
    energy = coerce_energy_level(energy_level)
    buckets: Dict[Priority, List[CandidateTask]] = {priority: [] for priority in Priority}
    for task in candidates:
        buckets.setdefault(task.priority, []).append(task)

    order, cap = SELECTION_POLICY[energy]
    chosen: List[CandidateTask] = []
    for priority in order:
        chosen.extend(buckets.get(priority, []))
    chosen = chosen[:cap]

    if not chosen and candidates:
        chosen = list(candidates[: min(FALLBACK_TASK_COUNT, len(candidates))])
    return chosen


def split_focus_minutes(focus_time: int, count: int) -> List[int]:
    """Evenly split ``focus_time`` over ``count`` slots; the last slot absorbs the remainder."""
    if count <= 0:
        return []
    focus_time = max(int(focus_time), 0)
    base = focus_time // count
    return [base] * (count - 1) + [focus_time - base * (count - 1)]


def allocate_durations(
    tasks: Sequence[CandidateTask],
    focus_time: int,
    energy_level: EnergyLevel | str = EnergyLevel.BALANCED,
    rng: Optional[RandomSource] = None,
) -> List[FocusTask]:
    energy = coerce_energy_level(energy_level)
    minutes = split_focus_minutes(focus_time, len(tasks))
    return [
        FocusTask(
            title=task.title,
            duration_minutes=duration,
            encouragement=focus_copy.encouragement(energy, rng),
            source_task_id=task.id,
        )
        for task, duration in zip(tasks, minutes)
    ]


def placeholder_task_count(energy_level: EnergyLevel | str, focus_time: int) -> int:
    energy = coerce_energy_level(energy_level)
    if focus_time <= 15:
        return 1
    if focus_time <= 30:
        return 1 if energy is EnergyLevel.SLUGGISH else 2
    if energy is EnergyLevel.SLUGGISH:
        return 2
    if energy in (EnergyLevel.WIRED, EnergyLevel.ANXIOUS):
        return 3
    return 2


def placeholder_tasks(
    energy_level: EnergyLevel | str,
    focus_area: FocusArea | str,
    focus_time: int,
    rng: Optional[RandomSource] = None,
) -> List[FocusTask]:
    """Build self-guided task slots from the focus area's suggestion pool."""
    energy = coerce_energy_level(energy_level)
    area = coerce_focus_area(focus_area)
    minutes = split_focus_minutes(focus_time, placeholder_task_count(energy, focus_time))
    return [
        FocusTask(
            title=focus_copy.placeholder_title(energy, area, index, rng),
            duration_minutes=duration,
            encouragement=focus_copy.encouragement(energy, rng),
        )
        for index, duration in enumerate(minutes)
    ]


def generate_plan(
    energy_level: EnergyLevel | str,
    time_available: int,
    focus_area: FocusArea | str = FocusArea.ANY,
    candidate_tasks: Optional[Iterable[CandidateTask]] = None,
    *,
    selected_task_ids: Optional[Iterable[str]] = None,
    rng: Optional[RandomSource] = None,
) -> FocusSessionPlan:
    """
    Assemble a complete focus session plan.

    ``selected_task_ids`` marks tasks the user picked explicitly; those are scheduled
    as-is (capped at three, in candidate order). Without a selection the planner picks
    from ``candidate_tasks`` by energy level, and with no usable candidates it falls back
    to placeholder slots drawn from the ``focus_area`` pool.

    Raises InvalidPlanArgument before doing any work when an input is out of range.
    """
    energy = coerce_energy_level(energy_level)
    area = coerce_focus_area(focus_area)
    coerce_time_available(time_available)
    draw = rng or random.random

    split = compute_time_split(energy, time_available)
    candidates = list(candidate_tasks or [])
    wanted = {str(task_id) for task_id in (selected_task_ids or [])}

    if wanted:
        chosen = [task for task in candidates if str(task.id) in wanted][:MAX_PLAN_TASKS]
    elif candidates:
        chosen = select_tasks(candidates, energy)
    else:
        chosen = []

    if chosen:
        tasks = allocate_durations(chosen, split.focus_time, energy, draw)
        placeholder = False
    else:
        tasks = placeholder_tasks(energy, area, split.focus_time, draw)
        placeholder = True

    plan = FocusSessionPlan(
        tasks=tuple(tasks),
        break_time=split.break_time,
        break_suggestion=focus_copy.break_suggestion(energy, draw),
        sensory_boost=focus_copy.sensory_boost(energy, draw),
        motivational_message=focus_copy.motivational_message(energy, draw),
        focus_time=split.focus_time,
        total_time=split.total_time,
        energy_level=energy,
        focus_area=area,
        placeholder=placeholder,
    )
    logger.debug(
        "Generated focus plan energy=%s time=%s focus=%s break=%s tasks=%s placeholder=%s",
        energy.value,
        time_available,
        plan.focus_time,
        plan.break_time,
        len(plan.tasks),
        placeholder,
    )
    return plan


def format_plan(plan: FocusSessionPlan) -> str:
    """Render a plan as plain text for sharing or display."""
    mood = plan.tasks[0].encouragement if plan.tasks else "Ready to focus"
    lines = [
        "# Your Personalized Focus Session",
        f"Time Available: {plan.total_time} minutes",
        f"Current Mood: {mood}",
        "",
        "Tasks:",
    ]
    for task in plan.tasks:
        lines.append(f"- Task: ({task.duration_minutes} min) - {task.title} - {task.encouragement}")
    lines.append(f"- Break: {plan.break_time} min - {plan.break_suggestion}")
    lines.append("")
    lines.append(f"Sensory Boost: {plan.sensory_boost}")
    lines.append("")
    lines.append(f'Motivational Message: "{plan.motivational_message}"')
    return "\n".join(lines) + "\n"
