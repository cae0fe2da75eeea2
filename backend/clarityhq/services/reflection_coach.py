"""Supportive post-session reflection prompts and messages."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from clarityhq.services.focus_copy import RandomSource, pick

HIGH_COMPLETION_PERCENT = 75
PARTIAL_COMPLETION_PERCENT = 25

HIGH_COMPLETION_PROMPTS = [
    "What helped you stay focused today?",
    "What was different about today that helped you focus well?",
    "Notice anything that made this session work well for you?",
    "What's one thing from this session you'd like to repeat next time?",
    "What helped you maintain momentum through this session?",
]

PARTIAL_COMPLETION_PROMPTS = [
    "What's one thing that worked, even briefly?",
    "When did you feel most focused during this session?",
    "What's one small thing you noticed about how you focus?",
    "Was there a moment when things clicked? What happened right before?",
    "What would make the next focus session 10% better?",
]

LOW_COMPLETION_PROMPTS = [
    "Focus sessions can be tough. What might help next time?",
    "You showed up and tried for {focus_time} minutes. What did you learn?",
    "What's one tiny adjustment that might help next time?",
    "Focus is hard some days. What would feel supportive next time?",
    "Focus isn't always about what gets done. What did you notice about yourself today?",
]

# First four are general, next four neurodivergence-aware, last four point at the next session.
GROWTH_MESSAGES = [
    "Every focus session builds your 'focusing muscle' - even the challenging ones.",
    "The fact that you tried a focus session shows commitment to your growth.",
    "Focus is a skill that develops with practice, not perfection.",
    "Each session teaches your brain something new about how you focus best.",
    "With ADHD, some days are easier than others. What matters is showing up.",
    "Your brain's unique wiring means some focus sessions will feel different than others.",
    "Small improvements in focus add up over time, especially with ADHD.",
    "Remember: progress isn't linear, especially for neurodivergent brains.",
    "What tiny thing might make your next session 1% better?",
    "Notice what helped today, even if it was just a small thing.",
    "Every data point helps you understand your unique focus patterns.",
    "Your future self thanks you for putting in the practice today.",
]

MOTIVATIONAL_QUOTES = [
    "The goal isn't perfect focus; it's progress and self-understanding.",
    "Focus isn't about forcing your brain to behave; it's about finding your flow.",
    "Every focus session is an experiment, not a test.",
    "Progress happens in small moments of clarity, not giant leaps.",
    "Your neurodivergent brain is learning with each session, even when it doesn't feel like it.",
    "In a world of distractions, simply showing up is a radical act.",
    "The most useful skill isn't perfect focus - it's learning how to refocus when you get distracted.",
    "Sometimes the biggest wins come from the smallest adjustments to your environment.",
    "Your brain is uniquely wired. Your path to focus will be uniquely yours.",
]

REFLECTION_RESPONSES = [
    (["distract"], "Noticing distractions is actually a big step. Each time you catch yourself getting distracted, your awareness grows."),
    (["hard", "difficult"], "It takes courage to acknowledge when things are hard. That self-awareness is really valuable."),
    (["help", "worked"], "Great noticing! Identifying what helps you is one of the most valuable skills for managing focus."),
]
EMPTY_REFLECTION_RESPONSE = "That's okay! Reflection is optional. What matters is that you tried a focus session."
DEFAULT_REFLECTION_RESPONSE = "Thank you for reflecting. These insights help you build better focus habits over time."


@dataclass(frozen=True)
class CoachingCard:
    prompt: str
    celebration: str
    growth_message: str
    quote: str
    progress_percent: float


def progress_percent(completed_tasks: int, total_tasks: int) -> float:
    if total_tasks <= 0:
        return 0.0
    return (completed_tasks / total_tasks) * 100


def reflection_prompt(
    completed_tasks: int,
    total_tasks: int,
    focus_time: int,
    rng: Optional[RandomSource] = None,
) -> str:
    percent = progress_percent(completed_tasks, total_tasks)
    if percent >= HIGH_COMPLETION_PERCENT:
        return pick(HIGH_COMPLETION_PROMPTS, rng)
    if percent >= PARTIAL_COMPLETION_PERCENT:
        return pick(PARTIAL_COMPLETION_PROMPTS, rng)
    return pick(LOW_COMPLETION_PROMPTS, rng).format(focus_time=focus_time)


def celebration(completed_tasks: int, total_tasks: int, focus_time: int) -> str:
    if completed_tasks == 0 and total_tasks > 0:
        return f"You dedicated {focus_time} minutes to focus time today. That's a win!"
    if 0 < completed_tasks < total_tasks:
        return f"You focused for {focus_time} minutes and made progress. That's what matters!"
    if completed_tasks > 0 and completed_tasks == total_tasks:
        return "You completed everything you set out to do. Amazing focus!"
    return f"You spent {focus_time} minutes building your focus muscle. Every minute counts!"


def growth_message(percent: float, rng: Optional[RandomSource] = None) -> str:
    """Pick a growth message; low-completion sessions lean on the more encouraging half."""
    pool: List[str]
    if percent >= HIGH_COMPLETION_PERCENT:
        pool = GROWTH_MESSAGES[:4]
    elif percent >= PARTIAL_COMPLETION_PERCENT:
        pool = GROWTH_MESSAGES[:8]
    else:
        pool = GROWTH_MESSAGES[4:]
    return pick(pool, rng)


def respond_to_reflection(reflection: str | None) -> str:
    if not reflection or not reflection.strip():
        return EMPTY_REFLECTION_RESPONSE
    lowered = reflection.lower()
    for keywords, response in REFLECTION_RESPONSES:
        if any(keyword in lowered for keyword in keywords):
            return response
    return DEFAULT_REFLECTION_RESPONSE


def motivational_quote(rng: Optional[RandomSource] = None) -> str:
    return pick(MOTIVATIONAL_QUOTES, rng)


def build_coaching_card(
    completed_tasks: int,
    total_tasks: int,
    focus_time: int,
    rng: Optional[RandomSource] = None,
) -> CoachingCard:
    percent = progress_percent(completed_tasks, total_tasks)
    return CoachingCard(
        prompt=reflection_prompt(completed_tasks, total_tasks, focus_time, rng),
        celebration=celebration(completed_tasks, total_tasks, focus_time),
        growth_message=growth_message(percent, rng),
        quote=motivational_quote(rng),
        progress_percent=round(percent, 2),
    )
