"""Shared API dependencies."""

from typing import Annotated

from fastapi import Depends, Header, Request

from rolegate.core.rbac import AccessControl
from rolegate.modules.tasks.services import TaskService


def get_access_control(request: Request) -> AccessControl:
    """Return the engine built at startup."""
    return request.app.state.access


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


async def get_acting_role(
    x_role_id: Annotated[str, Header(min_length=1)],
) -> str:
    """Acting role asserted by the caller.

    The header is trusted as-is; establishing that it matches the caller's
    identity belongs to whatever sits in front of this service.
    """
    return x_role_id


# Type aliases for dependency injection
Access = Annotated[AccessControl, Depends(get_access_control)]
Tasks = Annotated[TaskService, Depends(get_task_service)]
ActingRole = Annotated[str, Depends(get_acting_role)]
