"""Database layer - base model, mixins and session construction."""

from rolegate.core.database.base import Base, TimestampMixin
from rolegate.core.database.session import (
    create_engine,
    create_session_factory,
    create_tables,
)


__all__ = [
    "Base",
    "TimestampMixin",
    "create_engine",
    "create_session_factory",
    "create_tables",
]
