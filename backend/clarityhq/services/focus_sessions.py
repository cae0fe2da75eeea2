"""Persistence and aggregate stats for completed focus sessions."""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import desc
from sqlalchemy.orm import Session

from clarityhq.db.models.focus_session import FocusSession
from clarityhq.services.focus_types import coerce_energy_level
from clarityhq.services.user_service import get_or_create_user

logger = logging.getLogger(__name__)

TOP_BARRIER_COUNT = 3


class FocusSessionNotFound(LookupError):
    pass


@dataclass
class FocusSessionStats:
    total_sessions: int
    total_time: int
    avg_satisfaction: Optional[float]
    common_barriers: Optional[List[str]]


@dataclass
class ReflectionInput:
    tasks_completed: Optional[int] = 0
    reflection: Optional[str] = None
    satisfaction_rating: Optional[int] = None
    barriers: Optional[Sequence[str]] = None


def create_focus_session(
    db: Session,
    *,
    user_id: UUID,
    energy_level: str,
    duration: int,
    tasks_completed: int = 0,
) -> FocusSession:
    """Record session metadata: energy level, total minutes and how many tasks were done."""
    energy = coerce_energy_level(energy_level)
    if duration < 0:
        raise ValueError("duration must be non-negative")
    if tasks_completed < 0:
        raise ValueError("tasks_completed must be non-negative")

    get_or_create_user(db, user_id)
    session = FocusSession(
        user_id=user_id,
        energy_level=energy.value,
        duration=duration,
        tasks_completed=tasks_completed,
    )
    try:
        db.add(session)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(session)
    logger.info("Recorded focus session %s (%s min, %s)", session.id, duration, energy.value)
    return session


def list_focus_sessions(db: Session, user_id: UUID) -> List[FocusSession]:
    return (
        db.query(FocusSession)
        .filter(FocusSession.user_id == user_id)
        .order_by(desc(FocusSession.created_at))
        .all()
    )


def get_focus_session(db: Session, session_id: UUID) -> FocusSession:
    session = db.get(FocusSession, session_id)
    if not session:
        raise FocusSessionNotFound(str(session_id))
    return session


def save_reflection(db: Session, session_id: UUID, data: ReflectionInput) -> FocusSession:
    """
    Store the post-session reflection.

    Blank reflections become NULL, barriers that are not a list become NULL, and a
    missing completed-task count is stored as zero.
    """
    session = get_focus_session(db, session_id)

    rating = data.satisfaction_rating
    if rating is not None and not 1 <= rating <= 5:
        raise ValueError("satisfaction_rating must be between 1 and 5")

    session.reflection = (data.reflection or "").strip() or None
    session.satisfaction_rating = rating
    session.barriers = list(data.barriers) if isinstance(data.barriers, (list, tuple)) else None
    session.tasks_completed = data.tasks_completed if isinstance(data.tasks_completed, int) else 0
    try:
        db.add(session)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(session)
    return session


def get_focus_session_stats(db: Session, user_id: UUID) -> FocusSessionStats:
    rows = (
        db.query(FocusSession.duration, FocusSession.satisfaction_rating, FocusSession.barriers)
        .filter(FocusSession.user_id == user_id)
        .all()
    )
    return summarize_sessions(rows)


def summarize_sessions(rows) -> FocusSessionStats:
    """Aggregate ``(duration, satisfaction_rating, barriers)`` rows."""
    if not rows:
        return FocusSessionStats(total_sessions=0, total_time=0, avg_satisfaction=None, common_barriers=None)

    total_time = 0
    ratings: List[int] = []
    barrier_counts: Counter = Counter()
    for duration, rating, barriers in rows:
        total_time += duration if isinstance(duration, int) else 0
        if isinstance(rating, int):
            ratings.append(rating)
        if not isinstance(barriers, (list, tuple)):
            continue
        for barrier in barriers:
            if isinstance(barrier, str):
                barrier_counts[barrier] += 1

    avg_satisfaction = sum(ratings) / len(ratings) if ratings else None
    common = [barrier for barrier, _ in barrier_counts.most_common(TOP_BARRIER_COUNT)]
    return FocusSessionStats(
        total_sessions=len(rows),
        total_time=total_time,
        avg_satisfaction=avg_satisfaction,
        common_barriers=common or None,
    )
