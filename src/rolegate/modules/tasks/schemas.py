"""Task request and response schemas."""

from pydantic import BaseModel, ConfigDict, Field

from rolegate.core.constants import MAX_ROLE_ID_LENGTH, MAX_TITLE_LENGTH


class TaskDraft(BaseModel):
    """Content for creating or updating a task.

    ``owner_id`` is only honoured on create, and only when the service is
    configured to take the owner from the draft.
    """

    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    description: str = ""
    owner_id: str | None = Field(None, min_length=1, max_length=MAX_ROLE_ID_LENGTH)


class OwnerTransfer(BaseModel):
    """Request body for changing a task's owner."""

    owner_id: str = Field(..., min_length=1, max_length=MAX_ROLE_ID_LENGTH)


class Task(BaseModel):
    """A stored task."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    owner_id: str


class RolePermissions(BaseModel):
    """Effective permissions of a role."""

    role_id: str
    chain: list[str]
    permissions: list[str]
