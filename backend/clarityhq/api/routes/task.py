"""Task API routes."""
from __future__ import annotations

from time import perf_counter
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from clarityhq.api.schemas.task import (
    TaskCreateRequest,
    TaskDeleteResponse,
    TaskSummary,
    TaskUpdateRequest,
)
from clarityhq.core.context import current_request_id
from clarityhq.db.deps import get_db
from clarityhq.observability.metrics import log_latency, log_metric
from clarityhq.observability.tracing import trace
from clarityhq.services.task_service import (
    TaskDraft,
    TaskNotFound,
    TaskOwnershipError,
    create_task,
    delete_task,
    list_tasks,
    update_task,
)

router = APIRouter()


@router.get("/tasks", response_model=List[TaskSummary], tags=["tasks"])
def get_tasks(
    http_request: Request,
    user_id: UUID = Query(..., description="User ID owning the tasks"),
    status_filter: str = Query("all", alias="status", pattern="^(all|open)$"),
    db: Session = Depends(get_db),
) -> List[TaskSummary]:
    """List a user's tasks; ``status=open`` hides completed ones."""
    request_id = current_request_id(http_request)
    with trace(
        "task.list",
        metadata={"route": "/tasks", "status": status_filter},
        user_id=str(user_id),
        request_id=request_id,
    ):
        tasks = list_tasks(db, user_id, include_completed=status_filter == "all")

    log_metric("task.list.count", len(tasks), metadata={"user_id": str(user_id), "status": status_filter})
    return [TaskSummary.model_validate(task) for task in tasks]


@router.post("/tasks", response_model=TaskSummary, status_code=status.HTTP_201_CREATED, tags=["tasks"])
def post_task(
    http_request: Request,
    payload: TaskCreateRequest,
    db: Session = Depends(get_db),
) -> TaskSummary:
    request_id = current_request_id(http_request)
    start = perf_counter()
    with trace(
        "task.create",
        metadata={"priority": payload.priority, "status": payload.status},
        user_id=str(payload.user_id),
        request_id=request_id,
    ):
        try:
            task = create_task(
                db,
                payload.user_id,
                TaskDraft(
                    title=payload.title,
                    description=payload.description,
                    due_date=payload.due_date,
                    priority=payload.priority,
                    status=payload.status,
                ),
            )
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))

    log_metric("task.create.success", 1, metadata={"user_id": str(payload.user_id)})
    log_latency("task.create", start)
    return TaskSummary.model_validate(task)


@router.patch("/tasks/{task_id}", response_model=TaskSummary, tags=["tasks"])
def patch_task(
    task_id: UUID,
    payload: TaskUpdateRequest,
    http_request: Request,
    db: Session = Depends(get_db),
) -> TaskSummary:
    """Partially update a task; only fields present in the body change."""
    request_id = current_request_id(http_request)
    changes = payload.model_dump(exclude_unset=True, exclude={"user_id"})
    with trace(
        "task.update",
        metadata={"task_id": str(task_id), "fields": sorted(changes)},
        user_id=str(payload.user_id),
        request_id=request_id,
    ):
        try:
            task = update_task(db, task_id, payload.user_id, changes)
        except TaskNotFound:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
        except TaskOwnershipError:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Task does not belong to user")
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))

    log_metric(
        "task.update.success",
        1,
        metadata={"task_id": str(task_id), "completed": task.status == "completed"},
    )
    return TaskSummary.model_validate(task)


@router.delete("/tasks/{task_id}", response_model=TaskDeleteResponse, tags=["tasks"])
def remove_task(
    task_id: UUID,
    http_request: Request,
    user_id: UUID = Query(..., description="User ID owning the task"),
    db: Session = Depends(get_db),
) -> TaskDeleteResponse:
    request_id = current_request_id(http_request)
    with trace("task.delete", metadata={"task_id": str(task_id)}, user_id=str(user_id), request_id=request_id):
        try:
            delete_task(db, task_id, user_id)
        except TaskNotFound:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
        except TaskOwnershipError:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Task does not belong to user")

    log_metric("task.delete.success", 1, metadata={"task_id": str(task_id)})
    return TaskDeleteResponse(id=task_id, deleted=True, request_id=request_id or "")
