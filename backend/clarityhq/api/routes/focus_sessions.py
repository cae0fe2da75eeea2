"""Focus session recording, reflection and stats endpoints."""
from __future__ import annotations

from time import perf_counter
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from clarityhq.api.schemas.focus import (
    CoachingCardResponse,
    FocusSessionCreateRequest,
    FocusSessionPayload,
    FocusSessionReflectionRequest,
    FocusSessionReflectionResponse,
    FocusSessionStatsResponse,
)
from clarityhq.core.context import current_request_id
from clarityhq.db.deps import get_db
from clarityhq.observability.metrics import log_latency, log_metric
from clarityhq.observability.tracing import trace
from clarityhq.services.focus_copy import seeded_source
from clarityhq.services.focus_sessions import (
    FocusSessionNotFound,
    ReflectionInput,
    create_focus_session,
    get_focus_session,
    get_focus_session_stats,
    list_focus_sessions,
    save_reflection,
)
from clarityhq.services.reflection_coach import build_coaching_card, respond_to_reflection

router = APIRouter()


@router.post(
    "/focus/sessions",
    response_model=FocusSessionPayload,
    status_code=status.HTTP_201_CREATED,
    tags=["focus-sessions"],
)
def record_focus_session(
    request: Request,
    payload: FocusSessionCreateRequest,
    db: Session = Depends(get_db),
) -> FocusSessionPayload:
    request_id = current_request_id(request)
    start = perf_counter()
    with trace(
        "focus_session.create",
        metadata={"energy_level": payload.energy_level, "duration": payload.duration},
        user_id=str(payload.user_id),
        request_id=request_id,
    ):
        session = create_focus_session(
            db,
            user_id=payload.user_id,
            energy_level=payload.energy_level,
            duration=payload.duration,
            tasks_completed=payload.tasks_completed,
        )

    log_metric("focus_session.create.success", 1, metadata={"user_id": str(payload.user_id)})
    log_metric("focus_session.create.duration", payload.duration, metadata={"energy_level": payload.energy_level})
    log_latency("focus_session.create", start)
    return FocusSessionPayload.model_validate(session)


@router.get("/focus/sessions", response_model=List[FocusSessionPayload], tags=["focus-sessions"])
def list_sessions(
    request: Request,
    user_id: UUID = Query(..., description="User ID"),
    db: Session = Depends(get_db),
) -> List[FocusSessionPayload]:
    request_id = current_request_id(request)
    with trace("focus_session.list", metadata={"route": "/focus/sessions"}, user_id=str(user_id), request_id=request_id):
        sessions = list_focus_sessions(db, user_id)

    log_metric("focus_session.list.count", len(sessions), metadata={"user_id": str(user_id)})
    return [FocusSessionPayload.model_validate(session) for session in sessions]


@router.get("/focus/sessions/stats", response_model=FocusSessionStatsResponse, tags=["focus-sessions"])
def session_stats(
    request: Request,
    user_id: UUID = Query(..., description="User ID"),
    db: Session = Depends(get_db),
) -> FocusSessionStatsResponse:
    request_id = current_request_id(request)
    with trace("focus_session.stats", metadata={"route": "/focus/sessions/stats"}, user_id=str(user_id), request_id=request_id):
        stats = get_focus_session_stats(db, user_id)

    log_metric("focus_session.stats.total_sessions", stats.total_sessions, metadata={"user_id": str(user_id)})
    return FocusSessionStatsResponse(
        user_id=user_id,
        total_sessions=stats.total_sessions,
        total_time=stats.total_time,
        avg_satisfaction=stats.avg_satisfaction,
        common_barriers=stats.common_barriers,
        request_id=request_id or "",
    )


@router.get("/focus/reflection/prompt", response_model=CoachingCardResponse, tags=["focus-sessions"])
def reflection_prompt(
    request: Request,
    completed_tasks: int = Query(0, ge=0),
    total_tasks: int = Query(0, ge=0),
    focus_time: int = Query(0, ge=0),
    seed: Optional[int] = Query(default=None),
) -> CoachingCardResponse:
    """Reflection prompt, celebration and encouragement for a just-finished session."""
    card = build_coaching_card(completed_tasks, total_tasks, focus_time, rng=seeded_source(seed))
    return CoachingCardResponse(
        prompt=card.prompt,
        celebration=card.celebration,
        growth_message=card.growth_message,
        quote=card.quote,
        progress_percent=card.progress_percent,
        request_id=current_request_id(request) or "",
    )


@router.get("/focus/sessions/{session_id}", response_model=FocusSessionPayload, tags=["focus-sessions"])
def get_session(
    session_id: UUID,
    request: Request,
    user_id: UUID = Query(..., description="User ID"),
    db: Session = Depends(get_db),
) -> FocusSessionPayload:
    request_id = current_request_id(request)
    with trace("focus_session.get", metadata={"session_id": str(session_id)}, user_id=str(user_id), request_id=request_id):
        session = _owned_session(db, session_id, user_id)
    return FocusSessionPayload.model_validate(session)


@router.patch(
    "/focus/sessions/{session_id}/reflection",
    response_model=FocusSessionReflectionResponse,
    tags=["focus-sessions"],
)
def update_reflection(
    session_id: UUID,
    request: Request,
    payload: FocusSessionReflectionRequest,
    db: Session = Depends(get_db),
) -> FocusSessionReflectionResponse:
    request_id = current_request_id(request)
    start = perf_counter()
    with trace(
        "focus_session.reflection",
        metadata={
            "session_id": str(session_id),
            "has_reflection": bool(payload.reflection and payload.reflection.strip()),
            "satisfaction_rating": payload.satisfaction_rating,
            "barrier_count": len(payload.barriers or []),
        },
        user_id=str(payload.user_id),
        request_id=request_id,
    ):
        _owned_session(db, session_id, payload.user_id)
        try:
            session = save_reflection(
                db,
                session_id,
                ReflectionInput(
                    tasks_completed=payload.tasks_completed,
                    reflection=payload.reflection,
                    satisfaction_rating=payload.satisfaction_rating,
                    barriers=payload.barriers,
                ),
            )
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))

    log_metric("focus_session.reflection.success", 1, metadata={"user_id": str(payload.user_id)})
    if payload.satisfaction_rating is not None:
        log_metric("focus_session.reflection.satisfaction", payload.satisfaction_rating)
    log_latency("focus_session.reflection", start)

    return FocusSessionReflectionResponse(
        session=FocusSessionPayload.model_validate(session),
        coach_response=respond_to_reflection(session.reflection),
        request_id=request_id or "",
    )


def _owned_session(db: Session, session_id: UUID, user_id: UUID):
    try:
        session = get_focus_session(db, session_id)
    except FocusSessionNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Focus session not found")
    if session.user_id != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Focus session does not belong to user")
    return session
