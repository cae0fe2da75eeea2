"""Database utilities and models."""

from clarityhq.db.base import Base
from clarityhq.db import models  # noqa: F401  (imported for side effects)

__all__ = ["Base"]
