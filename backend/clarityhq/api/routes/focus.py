"""Focus session plan endpoints."""
from __future__ import annotations

from time import perf_counter
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from clarityhq.api.schemas.focus import (
    FocusPlanPayload,
    FocusPlanRequest,
    FocusPlanResponse,
    FocusQueryRequest,
    FocusQueryResponse,
    FocusTaskPayload,
    ParsedQueryPayload,
)
from clarityhq.core.config import settings
from clarityhq.core.context import current_request_id
from clarityhq.db.deps import get_db
from clarityhq.observability.metrics import log_latency, log_metric
from clarityhq.observability.tracing import trace
from clarityhq.services.focus_copy import seeded_source
from clarityhq.services.focus_planner import format_plan, generate_plan
from clarityhq.services.focus_query import plan_from_query
from clarityhq.services.focus_types import CandidateTask, FocusSessionPlan, InvalidPlanArgument
from clarityhq.services.task_service import load_candidate_tasks

router = APIRouter()


@router.post("/focus/plan", response_model=FocusPlanResponse, tags=["focus"])
def create_focus_plan(
    request: Request,
    payload: FocusPlanRequest,
    db: Session = Depends(get_db),
) -> FocusPlanResponse:
    """Generate an ephemeral focus plan; nothing is stored."""
    request_id = current_request_id(request)
    user_key = str(payload.user_id) if payload.user_id else None
    start = perf_counter()

    if payload.selected_task_ids and payload.user_id is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="selected_task_ids requires user_id",
        )

    with trace(
        "focus_plan.generate",
        metadata={
            "energy_level": payload.energy_level,
            "time_available": payload.time_available,
            "focus_area": payload.focus_area,
            "selected_count": len(payload.selected_task_ids),
        },
        user_id=user_key,
        request_id=request_id,
    ) as plan_trace:
        candidates = _load_candidates(db, payload.user_id)
        try:
            plan = generate_plan(
                payload.energy_level,
                payload.time_available,
                payload.focus_area,
                candidates,
                selected_task_ids=[str(task_id) for task_id in payload.selected_task_ids],
                rng=seeded_source(_effective_seed(payload.seed)),
            )
        except InvalidPlanArgument as exc:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
        if plan_trace:
            plan_trace.update(
                metadata={
                    "focus_time": plan.focus_time,
                    "break_time": plan.break_time,
                    "task_count": len(plan.tasks),
                    "placeholder": plan.placeholder,
                }
            )

    metric_meta = {"energy_level": payload.energy_level, "time_available": payload.time_available}
    log_metric("focus_plan.generate.success", 1, metadata=metric_meta)
    log_metric("focus_plan.generate.task_count", len(plan.tasks), metadata=metric_meta)
    log_metric("focus_plan.generate.placeholder", 1 if plan.placeholder else 0, metadata=metric_meta)
    log_latency("focus_plan.generate", start, metadata=metric_meta)

    return FocusPlanResponse(
        plan=plan_payload(plan),
        rendered=format_plan(plan),
        request_id=request_id or "",
    )


@router.post("/focus/plan/query", response_model=FocusQueryResponse, tags=["focus"])
def create_focus_plan_from_text(
    request: Request,
    payload: FocusQueryRequest,
    db: Session = Depends(get_db),
) -> FocusQueryResponse:
    """Infer energy, time and focus area from free text, then plan."""
    request_id = current_request_id(request)
    start = perf_counter()

    with trace(
        "focus_plan.query",
        metadata={"text_length": len(payload.text)},
        user_id=str(payload.user_id) if payload.user_id else None,
        request_id=request_id,
    ):
        candidates = _load_candidates(db, payload.user_id)
        parsed, plan = plan_from_query(payload.text, candidates, rng=seeded_source(_effective_seed(payload.seed)))

    log_metric(
        "focus_plan.query.success",
        1,
        metadata={"energy_level": parsed.energy_level.value, "time_available": parsed.time_available},
    )
    log_latency("focus_plan.query", start)

    return FocusQueryResponse(
        parsed=ParsedQueryPayload(
            energy_level=parsed.energy_level.value,
            time_available=parsed.time_available,
            focus_area=parsed.focus_area.value,
        ),
        plan=plan_payload(plan),
        rendered=format_plan(plan),
        request_id=request_id or "",
    )


def plan_payload(plan: FocusSessionPlan) -> FocusPlanPayload:
    return FocusPlanPayload(
        energy_level=plan.energy_level.value,
        focus_area=plan.focus_area.value,
        tasks=[
            FocusTaskPayload(
                source_task_id=task.source_task_id,
                title=task.title,
                duration_minutes=task.duration_minutes,
                encouragement=task.encouragement,
            )
            for task in plan.tasks
        ],
        placeholder=plan.placeholder,
        focus_time=plan.focus_time,
        break_time=plan.break_time,
        total_time=plan.total_time,
        break_suggestion=plan.break_suggestion,
        sensory_boost=plan.sensory_boost,
        motivational_message=plan.motivational_message,
    )


def _load_candidates(db: Session, user_id: Optional[UUID]) -> List[CandidateTask]:
    if user_id is None:
        return []
    return load_candidate_tasks(db, user_id)


def _effective_seed(seed: Optional[int]) -> Optional[int]:
    return seed if seed is not None else settings.focus_plan_default_seed
