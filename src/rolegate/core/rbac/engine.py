"""Process-level RBAC engine.

``AccessControl`` bundles one role graph, one permission index and the
resolver over them. Build it once at startup (usually from a snapshot)
and pass it to whatever needs authorization decisions.
"""

from pathlib import Path

import structlog

from rolegate.core.constants import DEFAULT_MAX_HIERARCHY_DEPTH
from rolegate.core.errors import RoleGraphError
from rolegate.core.rbac.graph import Role, RoleGraph
from rolegate.core.rbac.index import PermissionIndex
from rolegate.core.rbac.resolver import AuthorizationResolver
from rolegate.core.rbac.snapshot import GrantRecord, RoleRecord, Snapshot, load_snapshot


logger = structlog.get_logger()


class AccessControl:
    """Role graph, permission index and resolver sharing one state."""

    def __init__(self, max_depth: int = DEFAULT_MAX_HIERARCHY_DEPTH) -> None:
        self.graph = RoleGraph(max_depth=max_depth)
        self.index = PermissionIndex(self.graph)
        self.resolver = AuthorizationResolver(self.graph, self.index)

    @classmethod
    def from_snapshot(
        cls,
        snapshot: Snapshot,
        max_depth: int = DEFAULT_MAX_HIERARCHY_DEPTH,
    ) -> "AccessControl":
        """Rebuild an engine from a snapshot.

        All roles are added before any grant, so grant order in the
        snapshot does not depend on role order.
        """
        access = cls(max_depth=max_depth)
        for record in snapshot.roles:
            access.graph.add_role(record.id, parent_id=record.parent, name=record.name)
        for grant in snapshot.grants:
            access.index.grant(grant.role, grant.action)

        logger.info(
            "access_control_loaded",
            roles=len(access.graph),
            grants=len(access.index),
        )
        return access

    @classmethod
    def from_file(
        cls,
        path: Path,
        max_depth: int = DEFAULT_MAX_HIERARCHY_DEPTH,
    ) -> "AccessControl":
        return cls.from_snapshot(load_snapshot(path), max_depth=max_depth)

    def snapshot(self) -> Snapshot:
        """Export the current state. Roles keep insertion order; grants are sorted."""
        return Snapshot(
            roles=[
                RoleRecord(
                    id=role.id,
                    parent=role.parent_id,
                    name=role.name if role.name != role.id else None,
                )
                for role in self.graph.roles()
            ],
            grants=[
                GrantRecord(role=role_id, action=action)
                for role_id, action in self.index.grants()
            ],
        )

    def add_role(
        self,
        role_id: str,
        parent_id: str | None = None,
        name: str | None = None,
    ) -> Role:
        return self.graph.add_role(role_id, parent_id=parent_id, name=name)

    def remove_role(self, role_id: str) -> Role:
        """Remove a leaf role and every grant it holds, as one write."""
        with self.graph.lock:
            role = self.graph.remove_role(role_id)
            self.index.drop_role(role_id)
        return role

    def grant(self, role_id: str, action: str) -> bool:
        return self.index.grant(role_id, action)

    def revoke(self, role_id: str, action: str) -> bool:
        return self.index.revoke(role_id, action)

    def is_permitted(self, role_id: str, action: str) -> bool:
        return self.resolver.is_permitted(role_id, action)

    def validate(self) -> dict[str, RoleGraphError]:
        """Walk every role's full chain and collect structural faults.

        Returns:
            Mapping of role identifier to the fault its chain raised;
            empty when the hierarchy is sound
        """
        faults: dict[str, RoleGraphError] = {}
        for role in self.graph.roles():
            try:
                list(self.graph.ancestor_chain(role.id))
            except RoleGraphError as e:
                faults[role.id] = e
        return faults
