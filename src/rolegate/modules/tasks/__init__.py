"""Tasks module - RBAC-gated task resources."""

from rolegate.modules.tasks.repos import InMemoryTaskStore, SqlTaskRepository, TaskStore
from rolegate.modules.tasks.services import TaskService


__all__ = [
    "InMemoryTaskStore",
    "SqlTaskRepository",
    "TaskService",
    "TaskStore",
]
