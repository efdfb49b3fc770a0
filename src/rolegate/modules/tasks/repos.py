"""Task persistence.

The enforcement layer talks to storage only through ``TaskStore``. Two
implementations are provided: an in-memory store and a SQLAlchemy-backed
repository. Both raise ``NotFoundError`` for a missing task.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rolegate.core.errors import NotFoundError
from rolegate.modules.tasks.models import TaskRecord
from rolegate.modules.tasks.schemas import Task, TaskDraft


def _not_found(task_id: int) -> NotFoundError:
    return NotFoundError(
        f"Task {task_id} not found",
        resource="task",
        resource_id=str(task_id),
    )


class TaskStore(Protocol):
    """Persistence operations the enforcement layer delegates to."""

    async def insert(self, draft: TaskDraft, owner_id: str) -> Task: ...

    async def replace(self, task_id: int, draft: TaskDraft) -> Task: ...

    async def reassign(self, task_id: int, owner_id: str) -> Task: ...

    async def remove(self, task_id: int) -> None: ...

    async def get(self, task_id: int) -> Task | None: ...


class InMemoryTaskStore:
    """Dictionary-backed task store with sequential integer ids."""

    def __init__(self) -> None:
        self._tasks: dict[int, Task] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._tasks)

    async def insert(self, draft: TaskDraft, owner_id: str) -> Task:
        task = Task(
            id=self._next_id,
            title=draft.title,
            description=draft.description,
            owner_id=owner_id,
        )
        self._tasks[task.id] = task
        self._next_id += 1
        return task

    async def replace(self, task_id: int, draft: TaskDraft) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            raise _not_found(task_id)
        updated = task.model_copy(
            update={"title": draft.title, "description": draft.description}
        )
        self._tasks[task_id] = updated
        return updated

    async def reassign(self, task_id: int, owner_id: str) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            raise _not_found(task_id)
        updated = task.model_copy(update={"owner_id": owner_id})
        self._tasks[task_id] = updated
        return updated

    async def remove(self, task_id: int) -> None:
        if self._tasks.pop(task_id, None) is None:
            raise _not_found(task_id)

    async def get(self, task_id: int) -> Task | None:
        return self._tasks.get(task_id)


class SqlTaskRepository:
    """Task store backed by a SQL database.

    Each operation runs in its own session and commits on success.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def insert(self, draft: TaskDraft, owner_id: str) -> Task:
        async with self.session_factory() as session, session.begin():
            record = TaskRecord(
                title=draft.title,
                description=draft.description,
                owner_id=owner_id,
            )
            session.add(record)
            await session.flush()
            return Task.model_validate(record)

    async def replace(self, task_id: int, draft: TaskDraft) -> Task:
        async with self.session_factory() as session, session.begin():
            record = await session.get(TaskRecord, task_id)
            if record is None:
                raise _not_found(task_id)
            record.title = draft.title
            record.description = draft.description
            await session.flush()
            return Task.model_validate(record)

    async def reassign(self, task_id: int, owner_id: str) -> Task:
        async with self.session_factory() as session, session.begin():
            record = await session.get(TaskRecord, task_id)
            if record is None:
                raise _not_found(task_id)
            record.owner_id = owner_id
            await session.flush()
            return Task.model_validate(record)

    async def remove(self, task_id: int) -> None:
        async with self.session_factory() as session, session.begin():
            record = await session.get(TaskRecord, task_id)
            if record is None:
                raise _not_found(task_id)
            await session.delete(record)

    async def get(self, task_id: int) -> Task | None:
        async with self.session_factory() as session:
            record = await session.get(TaskRecord, task_id)
            return Task.model_validate(record) if record is not None else None
