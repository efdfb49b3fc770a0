"""Task service: authorization-gated task mutations.

Every mutation checks the acting role's permission before the store is
touched. A denied check raises ``ForbiddenError`` and leaves the store
unchanged; role graph faults propagate as they are.
"""

from typing import Literal

import structlog

from rolegate.core.constants import CREATE_TASK, DELETE_TASK, EDIT_TASK, TRANSFER_TASK
from rolegate.core.errors import ForbiddenError, NotFoundError, ValidationError
from rolegate.core.rbac import AuthorizationResolver
from rolegate.modules.tasks.repos import TaskStore
from rolegate.modules.tasks.schemas import Task, TaskDraft


logger = structlog.get_logger()

OwnerSource = Literal["acting_role", "draft"]


class TaskService:
    """Gates task mutations behind RBAC checks.

    Attributes:
        resolver: Authorization resolver for permission checks
        store: Task persistence collaborator
        owner_source: Where a new task's owner comes from. With
            "acting_role" the creator owns the task and a draft naming
            someone else is rejected; with "draft" an owner named in the
            draft wins, falling back to the acting role.
    """

    def __init__(
        self,
        resolver: AuthorizationResolver,
        store: TaskStore,
        owner_source: OwnerSource = "acting_role",
    ) -> None:
        self.resolver = resolver
        self.store = store
        self.owner_source = owner_source

    def authorize(self, acting_role_id: str, action: str) -> None:
        """Raise ForbiddenError unless the acting role may perform the action.

        Raises:
            ForbiddenError: If no role in the chain grants the action
            RoleGraphError: If the role graph is broken for this role
        """
        if not self.resolver.is_permitted(acting_role_id, action):
            logger.info(
                "authorization_denied",
                role_id=acting_role_id,
                action=action,
            )
            raise ForbiddenError(
                f"Role '{acting_role_id}' is not permitted to {action}",
                error_code="permission_denied",
                details={"role_id": acting_role_id, "action": action},
            )

    def _resolve_owner(self, acting_role_id: str, draft: TaskDraft) -> str:
        if draft.owner_id is None:
            return acting_role_id
        if self.owner_source == "draft":
            return draft.owner_id
        if draft.owner_id != acting_role_id:
            raise ValidationError(
                "Task owner must be the acting role",
                errors=[
                    {
                        "field": "owner_id",
                        "message": (
                            f"Expected '{acting_role_id}', got '{draft.owner_id}'"
                        ),
                    }
                ],
            )
        return acting_role_id

    async def create(self, acting_role_id: str, draft: TaskDraft) -> Task:
        """Create a task owned by the acting role (or the draft's owner).

        Raises:
            ForbiddenError: If the role lacks create_task
            ValidationError: If the draft names a different owner and the
                owner is pinned to the acting role
        """
        self.authorize(acting_role_id, CREATE_TASK)
        owner_id = self._resolve_owner(acting_role_id, draft)

        task = await self.store.insert(draft, owner_id)
        logger.info(
            "task_created",
            task_id=task.id,
            role_id=acting_role_id,
            owner_id=owner_id,
        )
        return task

    async def update(self, acting_role_id: str, task_id: int, draft: TaskDraft) -> Task:
        """Replace a task's title and description. The owner is unchanged.

        Raises:
            ForbiddenError: If the role lacks edit_task
            NotFoundError: If the task does not exist
        """
        self.authorize(acting_role_id, EDIT_TASK)

        task = await self.store.replace(task_id, draft)
        logger.info("task_updated", task_id=task_id, role_id=acting_role_id)
        return task

    async def delete(self, acting_role_id: str, task_id: int) -> None:
        """Delete a task.

        Raises:
            ForbiddenError: If the role lacks delete_task
            NotFoundError: If the task does not exist
        """
        self.authorize(acting_role_id, DELETE_TASK)

        await self.store.remove(task_id)
        logger.info("task_deleted", task_id=task_id, role_id=acting_role_id)

    async def transfer(
        self, acting_role_id: str, task_id: int, new_owner_id: str
    ) -> Task:
        """Hand a task to a new owner.

        Raises:
            ForbiddenError: If the role lacks transfer_task
            NotFoundError: If the task does not exist
        """
        self.authorize(acting_role_id, TRANSFER_TASK)

        task = await self.store.reassign(task_id, new_owner_id)
        logger.info(
            "task_transferred",
            task_id=task_id,
            role_id=acting_role_id,
            owner_id=new_owner_id,
        )
        return task

    async def get(self, task_id: int) -> Task:
        """Read a task. Reads are not gated.

        Raises:
            NotFoundError: If the task does not exist
        """
        task = await self.store.get(task_id)
        if task is None:
            raise NotFoundError(
                f"Task {task_id} not found",
                resource="task",
                resource_id=str(task_id),
            )
        return task
