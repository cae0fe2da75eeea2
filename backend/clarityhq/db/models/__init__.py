"""ORM models exposed for metadata discovery."""
from clarityhq.db.models.focus_session import FocusSession
from clarityhq.db.models.task import Task
from clarityhq.db.models.user import User

__all__ = [
    "FocusSession",
    "Task",
    "User",
]
