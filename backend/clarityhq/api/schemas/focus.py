"""Schemas for focus planning and focus session endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

EnergyLevelValue = Literal["sluggish", "wired", "energized", "anxious", "balanced"]
FocusAreaValue = Literal["creative", "analytical", "admin", "any"]
TimeAvailableValue = Literal[15, 30, 45, 60]


class FocusPlanRequest(BaseModel):
    user_id: Optional[UUID] = Field(default=None, description="Load this user's open tasks as candidates")
    energy_level: EnergyLevelValue
    time_available: TimeAvailableValue
    focus_area: FocusAreaValue = "any"
    selected_task_ids: List[UUID] = Field(default_factory=list, max_length=3)
    seed: Optional[int] = Field(default=None, description="Seed for reproducible suggestion copy")


class FocusTaskPayload(BaseModel):
    source_task_id: Optional[str] = None
    title: str
    duration_minutes: int
    encouragement: str


class FocusPlanPayload(BaseModel):
    energy_level: EnergyLevelValue
    focus_area: FocusAreaValue
    tasks: List[FocusTaskPayload]
    placeholder: bool
    focus_time: int
    break_time: int
    total_time: int
    break_suggestion: str
    sensory_boost: str
    motivational_message: str


class FocusPlanResponse(BaseModel):
    plan: FocusPlanPayload
    rendered: str
    request_id: str


class FocusQueryRequest(BaseModel):
    text: str = Field(default="", max_length=1000)
    user_id: Optional[UUID] = None
    seed: Optional[int] = None


class ParsedQueryPayload(BaseModel):
    energy_level: EnergyLevelValue
    time_available: int
    focus_area: FocusAreaValue


class FocusQueryResponse(BaseModel):
    parsed: ParsedQueryPayload
    plan: FocusPlanPayload
    rendered: str
    request_id: str


class FocusSessionCreateRequest(BaseModel):
    user_id: UUID
    energy_level: EnergyLevelValue
    duration: int = Field(..., ge=0, description="Focus plus break minutes")
    tasks_completed: int = Field(default=0, ge=0)


class FocusSessionPayload(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    energy_level: str
    duration: int
    tasks_completed: int
    reflection: Optional[str]
    satisfaction_rating: Optional[int]
    barriers: Optional[List[str]]
    created_at: datetime


class FocusSessionReflectionRequest(BaseModel):
    user_id: UUID
    tasks_completed: int = Field(default=0, ge=0)
    reflection: Optional[str] = Field(default=None, max_length=2000)
    satisfaction_rating: Optional[int] = Field(default=None, ge=1, le=5)
    barriers: Optional[List[str]] = None


class FocusSessionReflectionResponse(BaseModel):
    session: FocusSessionPayload
    coach_response: str
    request_id: str


class FocusSessionStatsResponse(BaseModel):
    user_id: UUID
    total_sessions: int
    total_time: int
    avg_satisfaction: Optional[float]
    common_barriers: Optional[List[str]]
    request_id: str


class CoachingCardResponse(BaseModel):
    prompt: str
    celebration: str
    growth_message: str
    quote: str
    progress_percent: float
    request_id: str
