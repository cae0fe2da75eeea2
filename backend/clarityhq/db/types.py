"""Database column type helpers."""
from __future__ import annotations

from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import JSON, TypeDecorator


class StringList(TypeDecorator):
    """
    A nullable list of strings stored as JSONB (native JSON on SQLite for tests).

    Non-list values are stored as NULL and non-string members are dropped, so readers
    can always iterate the value without type checks.
    """

    impl = JSONB
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":  # pragma: no cover - dialect specific
            return dialect.type_descriptor(JSON())
        return dialect.type_descriptor(JSONB())

    def process_bind_param(self, value, dialect):
        return _clean(value)

    def process_result_value(self, value, dialect):
        return _clean(value)


def _clean(value):
    if not isinstance(value, (list, tuple)):
        return None
    return [item for item in value if isinstance(item, str)]
