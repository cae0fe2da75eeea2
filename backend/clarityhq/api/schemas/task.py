"""Schemas for task endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

PriorityValue = Literal["low", "medium", "high"]
StatusValue = Literal["pending", "in_progress", "completed"]


class TaskSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    title: str
    description: Optional[str]
    due_date: Optional[datetime]
    priority: str
    status: str
    created_at: datetime
    updated_at: datetime


class TaskCreateRequest(BaseModel):
    user_id: UUID
    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: PriorityValue = "medium"
    status: StatusValue = "pending"


class TaskUpdateRequest(BaseModel):
    user_id: UUID
    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: Optional[PriorityValue] = None
    status: Optional[StatusValue] = None


class TaskDeleteResponse(BaseModel):
    id: UUID
    deleted: bool
    request_id: str
