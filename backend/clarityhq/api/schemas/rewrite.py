"""Schemas for the LLM rewrite endpoint."""
from __future__ import annotations

from pydantic import BaseModel, Field


class RewriteRequest(BaseModel):
    prompt: str = Field(default="", max_length=4000)


class RewriteResponse(BaseModel):
    result: str
    request_id: str
