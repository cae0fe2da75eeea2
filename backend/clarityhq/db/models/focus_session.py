"""Focus session ORM model."""
from __future__ import annotations

from uuid import uuid4

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, Text, func, text as sa_text
from sqlalchemy.dialects.postgresql import UUID

from clarityhq.db.base import Base
from clarityhq.db.types import StringList


class FocusSession(Base):
    """Metadata and reflection for a completed focus session. The plan itself is not stored."""

    __tablename__ = "focus_sessions"
    __table_args__ = (
        Index("ix_focus_sessions_user_id", "user_id"),
        CheckConstraint(
            "satisfaction_rating IS NULL OR satisfaction_rating BETWEEN 1 AND 5",
            name="ck_focus_sessions_satisfaction_rating",
        ),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    energy_level = Column(Text, nullable=False)
    duration = Column(Integer, nullable=False)
    tasks_completed = Column(Integer, nullable=False, default=0, server_default=sa_text("0"))
    reflection = Column(Text, nullable=True)
    satisfaction_rating = Column(Integer, nullable=True)
    barriers = Column(StringList, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
