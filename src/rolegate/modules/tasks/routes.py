"""Task and role permission routes."""

from fastapi import APIRouter, Response, status

from rolegate.api.dependencies import Access, ActingRole, Tasks
from rolegate.modules.tasks.schemas import (
    OwnerTransfer,
    RolePermissions,
    Task,
    TaskDraft,
)


router = APIRouter(tags=["tasks"])


@router.post(
    "/tasks",
    response_model=Task,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
)
async def create_task(draft: TaskDraft, role_id: ActingRole, tasks: Tasks) -> Task:
    """Create a task. Requires create_task."""
    return await tasks.create(role_id, draft)


@router.get("/tasks/{task_id}", response_model=Task, summary="Get a task")
async def get_task(task_id: int, tasks: Tasks) -> Task:
    return await tasks.get(task_id)


@router.put("/tasks/{task_id}", response_model=Task, summary="Update a task")
async def update_task(
    task_id: int, draft: TaskDraft, role_id: ActingRole, tasks: Tasks
) -> Task:
    """Replace a task's title and description. Requires edit_task."""
    return await tasks.update(role_id, task_id, draft)


@router.delete(
    "/tasks/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
)
async def delete_task(task_id: int, role_id: ActingRole, tasks: Tasks) -> Response:
    """Delete a task. Requires delete_task."""
    await tasks.delete(role_id, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/tasks/{task_id}/owner",
    response_model=Task,
    summary="Transfer task ownership",
)
async def transfer_task(
    task_id: int, body: OwnerTransfer, role_id: ActingRole, tasks: Tasks
) -> Task:
    """Hand a task to a new owner. Requires transfer_task."""
    return await tasks.transfer(role_id, task_id, body.owner_id)


@router.get(
    "/roles/{role_id}/permissions",
    response_model=RolePermissions,
    summary="Effective permissions of a role",
)
async def get_role_permissions(role_id: str, access: Access) -> RolePermissions:
    """List the role's ancestor chain and every action it inherits."""
    chain = list(access.graph.ancestor_chain(role_id))
    permissions = access.resolver.permissions_along(chain)
    return RolePermissions(
        role_id=role_id,
        chain=chain,
        permissions=sorted(permissions),
    )
