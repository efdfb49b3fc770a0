"""Integration tests for the SQL task repository against SQLite."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from rolegate.core.database import create_engine, create_session_factory, create_tables
from rolegate.core.errors import NotFoundError
from rolegate.modules.tasks import SqlTaskRepository
from rolegate.modules.tasks.schemas import TaskDraft


pytestmark = pytest.mark.integration


@pytest.fixture
async def repo(tmp_path: Path) -> AsyncGenerator[SqlTaskRepository, None]:
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'tasks.db'}")
    await create_tables(engine)
    yield SqlTaskRepository(create_session_factory(engine))
    await engine.dispose()


class TestSqlTaskRepository:
    """Tests for SqlTaskRepository."""

    async def test_insert_and_get(self, repo: SqlTaskRepository):
        task = await repo.insert(
            TaskDraft(title="Write report", description="Quarterly numbers"), "editor"
        )

        assert task.id is not None
        assert await repo.get(task.id) == task
        assert task.owner_id == "editor"

    async def test_ids_are_distinct(self, repo: SqlTaskRepository):
        first = await repo.insert(TaskDraft(title="One"), "editor")
        second = await repo.insert(TaskDraft(title="Two"), "editor")

        assert first.id != second.id

    async def test_replace_keeps_owner(self, repo: SqlTaskRepository):
        task = await repo.insert(TaskDraft(title="Draft"), "editor")

        updated = await repo.replace(
            task.id, TaskDraft(title="Final", description="done")
        )

        assert updated.title == "Final"
        assert updated.description == "done"
        assert updated.owner_id == "editor"
        assert await repo.get(task.id) == updated

    async def test_reassign(self, repo: SqlTaskRepository):
        task = await repo.insert(TaskDraft(title="Draft"), "editor")

        moved = await repo.reassign(task.id, "viewer")

        assert moved.owner_id == "viewer"
        assert (await repo.get(task.id)).owner_id == "viewer"

    async def test_remove(self, repo: SqlTaskRepository):
        task = await repo.insert(TaskDraft(title="Draft"), "editor")

        await repo.remove(task.id)

        assert await repo.get(task.id) is None

    async def test_get_missing(self, repo: SqlTaskRepository):
        assert await repo.get(999) is None

    @pytest.mark.parametrize("operation", ["replace", "reassign", "remove"])
    async def test_missing_task_raises(self, repo: SqlTaskRepository, operation: str):
        args = {
            "replace": (999, TaskDraft(title="x")),
            "reassign": (999, "viewer"),
            "remove": (999,),
        }[operation]

        with pytest.raises(NotFoundError) as exc_info:
            await getattr(repo, operation)(*args)

        assert exc_info.value.details == {"resource": "task", "resource_id": "999"}
