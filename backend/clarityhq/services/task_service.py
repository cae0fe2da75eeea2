"""Task storage helpers and the candidate feed for the focus planner."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import asc, nulls_last
from sqlalchemy.orm import Session

from clarityhq.db.models.task import TASK_PRIORITIES, TASK_STATUSES, Task
from clarityhq.services.focus_types import CandidateTask, coerce_priority
from clarityhq.services.user_service import get_or_create_user

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "due_date", "priority", "status")


class TaskNotFound(LookupError):
    pass


class TaskOwnershipError(PermissionError):
    pass


@dataclass
class TaskDraft:
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: str = "medium"
    status: str = "pending"


def list_tasks(db: Session, user_id: UUID, *, include_completed: bool = True) -> List[Task]:
    """Return a user's tasks ordered by due date (undated last), then creation time."""
    query = db.query(Task).filter(Task.user_id == user_id)
    if not include_completed:
        query = query.filter(Task.status != "completed")
    return query.order_by(nulls_last(asc(Task.due_date)), asc(Task.created_at)).all()


def create_task(db: Session, user_id: UUID, draft: TaskDraft) -> Task:
    title = (draft.title or "").strip()
    if not title:
        raise ValueError("Task title is required")
    _validate_choice("priority", draft.priority, TASK_PRIORITIES)
    _validate_choice("status", draft.status, TASK_STATUSES)

    get_or_create_user(db, user_id)
    task = Task(
        user_id=user_id,
        title=title,
        description=draft.description,
        due_date=draft.due_date,
        priority=draft.priority,
        status=draft.status,
    )
    try:
        db.add(task)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(task)
    logger.info("Created task %s for user %s", task.id, user_id)
    return task


def get_owned_task(db: Session, task_id: UUID, user_id: UUID) -> Task:
    task = db.get(Task, task_id)
    if not task:
        raise TaskNotFound(str(task_id))
    if task.user_id != user_id:
        raise TaskOwnershipError(str(task_id))
    return task


def update_task(db: Session, task_id: UUID, user_id: UUID, changes: Dict[str, Any]) -> Task:
    """Apply a partial update; keys outside UPDATABLE_FIELDS are ignored."""
    task = get_owned_task(db, task_id, user_id)
    updates = {key: value for key, value in changes.items() if key in UPDATABLE_FIELDS}
    if "title" in updates:
        title = (updates["title"] or "").strip()
        if not title:
            raise ValueError("Task title is required")
        updates["title"] = title
    if "priority" in updates:
        _validate_choice("priority", updates["priority"], TASK_PRIORITIES)
    if "status" in updates:
        _validate_choice("status", updates["status"], TASK_STATUSES)

    for key, value in updates.items():
        setattr(task, key, value)
    try:
        db.add(task)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(task)
    return task


def delete_task(db: Session, task_id: UUID, user_id: UUID) -> None:
    task = get_owned_task(db, task_id, user_id)
    try:
        db.delete(task)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Deleted task %s for user %s", task_id, user_id)


def load_candidate_tasks(db: Session, user_id: UUID) -> List[CandidateTask]:
    """Open (not completed) tasks for the planner, in list order."""
    return [to_candidate(task) for task in list_tasks(db, user_id, include_completed=False)]


def to_candidate(task: Task) -> CandidateTask:
    return CandidateTask(
        id=str(task.id),
        title=task.title,
        priority=coerce_priority(task.priority),
        status=task.status,
        description=task.description,
    )


def _validate_choice(field: str, value: Any, allowed: tuple) -> None:
    if value not in allowed:
        raise ValueError(f"{field} must be one of {', '.join(allowed)}")
