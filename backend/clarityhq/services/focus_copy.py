"""Curated copy pools used when assembling focus session plans."""
from __future__ import annotations

import random
from typing import Callable, Dict, List, Optional, Tuple

from clarityhq.services.focus_types import EnergyLevel, FocusArea

RandomSource = Callable[[], float]

BREAK_SUGGESTIONS: Dict[EnergyLevel, Tuple[str, ...]] = {
    EnergyLevel.SLUGGISH: (
        "Do 10 jumping jacks to get your blood flowing",
        "Take a short walk outside for fresh air",
        "Stretch your arms and legs while taking deep breaths",
        "Do a quick 2-minute dance to upbeat music",
    ),
    EnergyLevel.WIRED: (
        "Practice deep breathing for 2 minutes",
        "Do a quick body scan meditation",
        "Stretch slowly while focusing on your breath",
        "Write down any racing thoughts to clear your mind",
    ),
    EnergyLevel.ENERGIZED: (
        "Take a brisk walk around the block",
        "Do a quick set of bodyweight exercises",
        "Dance to one of your favorite songs",
        "Stretch fully while taking deep breaths",
    ),
    EnergyLevel.ANXIOUS: (
        "Practice 4-7-8 breathing (inhale 4, hold 7, exhale 8)",
        "Put your hand on your chest and feel your heartbeat slow down",
        "Make a cup of calming tea and drink it mindfully",
        "Write down your worries on paper to externalize them",
    ),
    EnergyLevel.BALANCED: (
        "Stretch your body and shoulders",
        "Get some fresh air for a few minutes",
        "Hydrate and rest your eyes",
        "Take a few moments of mindfulness",
    ),
}

SENSORY_BOOSTS: Dict[EnergyLevel, Tuple[str, ...]] = {
    EnergyLevel.SLUGGISH: (
        "Put on upbeat music with around 80-120 BPM",
        "Try bright lighting or natural sunlight",
        "Use a citrus or peppermint essential oil diffuser",
        "Keep a fidget toy or stress ball nearby",
    ),
    EnergyLevel.WIRED: (
        "Play calming instrumental or lo-fi music",
        "Use softer, dimmer lighting",
        "Try lavender or chamomile scents",
        "Keep a weighted item in your lap or on your shoulders",
    ),
    EnergyLevel.ENERGIZED: (
        "Put on music that matches your productivity pace",
        "Adjust lighting to be bright but not harsh",
        "Keep a cold drink nearby to sip",
        "Use a favorite textured object for occasional grounding",
    ),
    EnergyLevel.ANXIOUS: (
        "Play gentle nature sounds or white noise",
        "Use soft, warm lighting",
        "Try lavender, sandalwood, or jasmine scents",
        "Keep a smooth stone or soft fabric to touch when needed",
    ),
    EnergyLevel.BALANCED: (
        "Play instrumental music without lyrics",
        "Ensure comfortable lighting (not too bright/dim)",
        "Keep a glass of water nearby",
        "Have a small object to fidget with if needed",
    ),
}

MOTIVATIONAL_MESSAGES: Dict[EnergyLevel, Tuple[str, ...]] = {
    EnergyLevel.SLUGGISH: (
        "Remember: starting is the hardest part. Just begin, even if it's small.",
        "It's okay to go slowly. Momentum builds over time, not all at once.",
        "One tiny step forward is still progress. Be gentle with yourself.",
        "Low energy days are normal. Give yourself permission to work differently today.",
    ),
    EnergyLevel.WIRED: (
        "Channel your energy into one thing at a time. Your enthusiasm is your superpower.",
        "Take it one step at a time. Your racing mind can focus when given the right challenge.",
        "Harness that energy for brief, powerful bursts of focus.",
        "Your energy can power through this. Just aim it in one direction.",
    ),
    EnergyLevel.ENERGIZED: (
        "Great energy today! Ride this wave while being mindful not to burn out.",
        "You're in the zone! Remember to pause briefly between tasks to maintain this flow.",
        "This is your time to shine. Trust your capabilities and follow through.",
        "Your energy is your ally today. Direct it purposefully and you'll accomplish great things.",
    ),
    EnergyLevel.ANXIOUS: (
        "It's okay to feel anxious. Focus on what you can control right now.",
        "One small step is all you need. The worry often fades when we start.",
        "Your worth isn't measured by productivity. Be kind to yourself today.",
        "Anxiety is just energy waiting for direction. Let's channel it purposefully.",
    ),
    EnergyLevel.BALANCED: (
        "This balanced energy is perfect for steady progress. Trust your pace.",
        "Today is a good day for meaningful work. You've got this.",
        "Steady and consistent wins the race. You're in a great mindset for progress.",
        "This balanced state is your sweet spot for focus. Make the most of it!",
    ),
}

ENCOURAGEMENTS: Dict[EnergyLevel, Tuple[str, ...]] = {
    EnergyLevel.SLUGGISH: (
        "Just focus on getting started",
        "Small progress is still progress",
        "It's okay to work at a slower pace today",
        "One step at a time",
    ),
    EnergyLevel.WIRED: (
        "Channel that energy into this one task",
        "Let's harness that restlessness",
        "This is perfect for your quick mind",
        "Focus this energy right here",
    ),
    EnergyLevel.ENERGIZED: (
        "Great time to tackle this",
        "Your energy is perfect for this",
        "You're on a roll!",
        "Keep that momentum going",
    ),
    EnergyLevel.ANXIOUS: (
        "This task has clear steps to follow",
        "You've got this - one piece at a time",
        "Focus here to calm your mind",
        "Just this one task for now",
    ),
    EnergyLevel.BALANCED: (
        "You're in a great state for this",
        "Steady focus works wonders",
        "Perfect mindset for this task",
        "You've got the right energy for this",
    ),
}

PLACEHOLDER_TITLES: Dict[FocusArea, Tuple[str, ...]] = {
    FocusArea.CREATIVE: (
        "Brainstorm ideas for your current project",
        "Sketch or outline your next creative piece",
        "Write freely for 10 minutes",
        "Design a mock-up or prototype",
    ),
    FocusArea.ANALYTICAL: (
        "Review and analyze recent data",
        "Solve a complex problem step-by-step",
        "Research a topic in depth",
        "Organize information into categories",
    ),
    FocusArea.ADMIN: (
        "Process emails and messages",
        "Organize digital files or physical space",
        "Update your calendar and deadlines",
        "Review and update your to-do list",
    ),
    FocusArea.ANY: (
        "Work on your highest priority task",
        "Complete a task you've been avoiding",
        "Focus on something meaningful to you",
        "Make progress on an ongoing project",
    ),
}

# (energy, requested area) -> (drift target, probability)
AREA_DRIFT: Dict[Tuple[EnergyLevel, FocusArea], Tuple[FocusArea, float]] = {
    (EnergyLevel.SLUGGISH, FocusArea.ANY): (FocusArea.ADMIN, 0.6),
    (EnergyLevel.WIRED, FocusArea.CREATIVE): (FocusArea.ADMIN, 0.5),
    (EnergyLevel.ANXIOUS, FocusArea.CREATIVE): (FocusArea.ADMIN, 0.5),
}


def pick(pool: Tuple[str, ...] | List[str], rng: Optional[RandomSource] = None) -> str:
    """Draw one entry uniformly from ``pool`` using ``rng`` (defaults to ``random.random``)."""
    if not pool:
        raise ValueError("Cannot pick from an empty pool")
    draw = (rng or random.random)()
    index = min(int(draw * len(pool)), len(pool) - 1)
    return pool[max(index, 0)]


def break_suggestion(energy_level: EnergyLevel, rng: Optional[RandomSource] = None) -> str:
    return pick(BREAK_SUGGESTIONS[EnergyLevel(energy_level)], rng)


def sensory_boost(energy_level: EnergyLevel, rng: Optional[RandomSource] = None) -> str:
    return pick(SENSORY_BOOSTS[EnergyLevel(energy_level)], rng)


def motivational_message(energy_level: EnergyLevel, rng: Optional[RandomSource] = None) -> str:
    return pick(MOTIVATIONAL_MESSAGES[EnergyLevel(energy_level)], rng)


def encouragement(energy_level: EnergyLevel, rng: Optional[RandomSource] = None) -> str:
    return pick(ENCOURAGEMENTS[EnergyLevel(energy_level)], rng)


def placeholder_title(
    energy_level: EnergyLevel,
    focus_area: FocusArea,
    index: int,
    rng: Optional[RandomSource] = None,
) -> str:
    """
    Return a suggested task title for a session with no real tasks.

    Low-energy open sessions and restless creative sessions sometimes drift to admin
    work, since concrete tasks are easier to start. The slot index selects the title
    so consecutive placeholders differ; past the end of the pool a random title is used.
    """
    draw = rng or random.random
    area = FocusArea(focus_area)
    drift = AREA_DRIFT.get((EnergyLevel(energy_level), area))
    if drift and draw() < drift[1]:
        area = drift[0]

    pool = PLACEHOLDER_TITLES[area]
    if 0 <= index < len(pool):
        return pool[index]
    return pick(pool, draw)


def seeded_source(seed: Optional[int]) -> Optional[RandomSource]:
    """Return a reproducible random source for ``seed``, or None to use the module RNG."""
    if seed is None:
        return None
    return random.Random(seed).random
