"""Task database model."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from rolegate.core.constants import MAX_ROLE_ID_LENGTH, MAX_TITLE_LENGTH
from rolegate.core.database import Base, TimestampMixin


class TaskRecord(Base, TimestampMixin):
    """Persisted task row.

    ``owner_id`` holds a role or principal identifier; it is not a foreign
    key because roles live in the in-memory graph, not in this database.
    """

    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(MAX_TITLE_LENGTH), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    owner_id: Mapped[str] = mapped_column(
        String(MAX_ROLE_ID_LENGTH),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<TaskRecord(id={self.id}, owner_id={self.owner_id})>"
