"""Integration tests for the task routes.

These tests verify the HTTP surface of the enforcement layer:
- Permitted mutations reach the store
- Denials map to 403 problem details
- Role graph faults map to 500, never 403
- The acting role is read from the X-Role-Id header
"""

import pytest
from httpx import AsyncClient

from rolegate.core.rbac import AccessControl


pytestmark = pytest.mark.integration


def as_role(role_id: str) -> dict[str, str]:
    return {"X-Role-Id": role_id}


async def create(client: AsyncClient, role_id: str = "editor", **body) -> dict:
    response = await client.post(
        "/api/v1/tasks",
        json={"title": "Write report", **body},
        headers=as_role(role_id),
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateTask:
    """Tests for POST /api/v1/tasks."""

    async def test_create_task(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/tasks",
            json={"title": "Write report", "description": "Quarterly numbers"},
            headers=as_role("viewer"),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == 1
        assert data["title"] == "Write report"
        assert data["description"] == "Quarterly numbers"
        assert data["owner_id"] == "viewer"

    async def test_create_denied(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/tasks", json={"title": "Nope"}, headers=as_role("guest")
        )

        assert response.status_code == 403
        data = response.json()
        assert data["status"] == 403
        assert data["type"].endswith("/errors/permission_denied")
        assert data["role_id"] == "guest"
        assert data["action"] == "create_task"

    async def test_create_with_unknown_role(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/tasks", json={"title": "Nope"}, headers=as_role("nobody")
        )

        assert response.status_code == 500
        data = response.json()
        assert data["type"].endswith("/errors/unknown_role")
        assert data["role_id"] == "nobody"

    async def test_create_with_cyclic_role(
        self, client: AsyncClient, access: AccessControl
    ):
        access.add_role("A", parent_id="B")
        access.add_role("B", parent_id="A")

        response = await client.post(
            "/api/v1/tasks", json={"title": "Nope"}, headers=as_role("A")
        )

        assert response.status_code == 500
        assert response.json()["type"].endswith("/errors/cyclic_hierarchy")

    async def test_create_without_role_header(self, client: AsyncClient):
        response = await client.post("/api/v1/tasks", json={"title": "Nope"})

        assert response.status_code == 422
        assert response.json()["errors"]

    async def test_create_with_foreign_owner(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/tasks",
            json={"title": "Nope", "owner_id": "admin"},
            headers=as_role("editor"),
        )

        assert response.status_code == 422

    async def test_create_with_empty_title(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/tasks", json={"title": ""}, headers=as_role("editor")
        )

        assert response.status_code == 422


class TestReadTask:
    """Tests for GET /api/v1/tasks/{task_id}."""

    async def test_get_task(self, client: AsyncClient):
        created = await create(client)

        response = await client.get(f"/api/v1/tasks/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    async def test_get_missing_task(self, client: AsyncClient):
        response = await client.get("/api/v1/tasks/42")

        assert response.status_code == 404
        data = response.json()
        assert data["resource"] == "task"
        assert data["resource_id"] == "42"


class TestUpdateTask:
    """Tests for PUT /api/v1/tasks/{task_id}."""

    async def test_update_task(self, client: AsyncClient):
        created = await create(client)

        response = await client.put(
            f"/api/v1/tasks/{created['id']}",
            json={"title": "Revised", "description": "v2"},
            headers=as_role("viewer"),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Revised"
        assert data["owner_id"] == "editor"

    async def test_update_denied(self, client: AsyncClient):
        created = await create(client)

        response = await client.put(
            f"/api/v1/tasks/{created['id']}",
            json={"title": "Hijacked"},
            headers=as_role("guest"),
        )

        assert response.status_code == 403
        unchanged = await client.get(f"/api/v1/tasks/{created['id']}")
        assert unchanged.json()["title"] == "Write report"

    async def test_update_missing_task(self, client: AsyncClient):
        response = await client.put(
            "/api/v1/tasks/42", json={"title": "Revised"}, headers=as_role("editor")
        )

        assert response.status_code == 404


class TestDeleteTask:
    """Tests for DELETE /api/v1/tasks/{task_id}."""

    async def test_delete_task(self, client: AsyncClient):
        created = await create(client)

        response = await client.delete(
            f"/api/v1/tasks/{created['id']}", headers=as_role("viewer")
        )

        assert response.status_code == 204
        gone = await client.get(f"/api/v1/tasks/{created['id']}")
        assert gone.status_code == 404

    async def test_delete_denied(self, client: AsyncClient, access: AccessControl):
        access.grant("guest", "create_task")
        created = await create(client, role_id="guest")

        response = await client.delete(
            f"/api/v1/tasks/{created['id']}", headers=as_role("guest")
        )

        assert response.status_code == 403
        still_there = await client.get(f"/api/v1/tasks/{created['id']}")
        assert still_there.status_code == 200


class TestTransferTask:
    """Tests for PUT /api/v1/tasks/{task_id}/owner."""

    async def test_transfer_task(self, client: AsyncClient):
        created = await create(client)

        response = await client.put(
            f"/api/v1/tasks/{created['id']}/owner",
            json={"owner_id": "viewer"},
            headers=as_role("admin"),
        )

        assert response.status_code == 200
        assert response.json()["owner_id"] == "viewer"

    async def test_transfer_denied_after_revoke(
        self, client: AsyncClient, access: AccessControl
    ):
        created = await create(client)
        access.revoke("admin", "transfer_task")

        response = await client.put(
            f"/api/v1/tasks/{created['id']}/owner",
            json={"owner_id": "viewer"},
            headers=as_role("viewer"),
        )

        assert response.status_code == 403


class TestRolePermissions:
    """Tests for GET /api/v1/roles/{role_id}/permissions."""

    async def test_chain_walked_once(
        self,
        client: AsyncClient,
        access: AccessControl,
        monkeypatch: pytest.MonkeyPatch,
    ):
        """Chain and permissions come from the same walk."""
        walks: list[str] = []
        ancestor_chain = access.graph.ancestor_chain

        def counting_chain(role_id: str):
            walks.append(role_id)
            return ancestor_chain(role_id)

        monkeypatch.setattr(access.graph, "ancestor_chain", counting_chain)

        response = await client.get("/api/v1/roles/viewer/permissions")

        assert response.status_code == 200
        assert walks == ["viewer"]

    async def test_inherited_permissions(self, client: AsyncClient):
        response = await client.get("/api/v1/roles/viewer/permissions")

        assert response.status_code == 200
        assert response.json() == {
            "role_id": "viewer",
            "chain": ["viewer", "editor", "admin"],
            "permissions": ["create_task", "delete_task", "edit_task", "transfer_task"],
        }

    async def test_unknown_role(self, client: AsyncClient):
        response = await client.get("/api/v1/roles/nobody/permissions")

        assert response.status_code == 500
        assert response.json()["type"].endswith("/errors/unknown_role")
