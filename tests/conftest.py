"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
import yaml
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from rolegate.config import Settings, get_settings
from rolegate.core.rbac import AccessControl
from rolegate.main import create_app
from rolegate.modules.tasks import InMemoryTaskStore
from tests.fakes import SpyTaskStore


BOOTSTRAP = {
    "roles": [
        {"id": "admin", "name": "Administrator"},
        {"id": "editor", "parent": "admin"},
        {"id": "viewer", "parent": "editor"},
        {"id": "guest"},
    ],
    "grants": [
        {"role": "admin", "action": "delete_task"},
        {"role": "admin", "action": "transfer_task"},
        {"role": "editor", "action": "edit_task"},
        {"role": "editor", "action": "create_task"},
    ],
}


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Keep environment-derived settings from leaking between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings that ignore any local .env file."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def access() -> AccessControl:
    """Engine with admin > editor > viewer plus an unrelated guest role.

    admin grants delete_task and transfer_task; editor grants edit_task and
    create_task; guest grants nothing.
    """
    access = AccessControl()
    access.add_role("admin", name="Administrator")
    access.add_role("editor", parent_id="admin")
    access.add_role("viewer", parent_id="editor")
    access.add_role("guest")
    access.grant("admin", "delete_task")
    access.grant("admin", "transfer_task")
    access.grant("editor", "edit_task")
    access.grant("editor", "create_task")
    return access


@pytest.fixture
def spy_store() -> SpyTaskStore:
    return SpyTaskStore()


@pytest.fixture
def bootstrap_file(tmp_path: Path) -> Path:
    """Bootstrap YAML matching the ``access`` fixture."""
    path = tmp_path / "roles.yaml"
    path.write_text(yaml.safe_dump(BOOTSTRAP, sort_keys=False))
    return path


@pytest.fixture
def cyclic_bootstrap_file(tmp_path: Path) -> Path:
    """Bootstrap YAML where a and b are each other's parent."""
    path = tmp_path / "cyclic.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "roles": [
                    {"id": "a", "parent": "b"},
                    {"id": "b", "parent": "a"},
                    {"id": "ok"},
                ],
                "grants": [{"role": "ok", "action": "read"}],
            }
        )
    )
    return path


@pytest.fixture
def app(settings: Settings, access: AccessControl) -> FastAPI:
    """Application wired to the ``access`` engine and an in-memory store."""
    return create_app(settings, access=access, store=InMemoryTaskStore())


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for the application."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
