"""Hierarchical role-based access control.

- RoleGraph: roles and their single-parent links
- PermissionIndex: direct (role, action) grants
- AuthorizationResolver: grant lookup over a role's ancestor chain
- AccessControl: the three wired together, loadable from a snapshot
"""

from rolegate.core.rbac.engine import AccessControl
from rolegate.core.rbac.graph import Role, RoleGraph
from rolegate.core.rbac.index import PermissionIndex
from rolegate.core.rbac.resolver import AuthorizationResolver
from rolegate.core.rbac.snapshot import (
    GrantRecord,
    RoleRecord,
    Snapshot,
    dump_snapshot,
    load_snapshot,
)


__all__ = [
    "AccessControl",
    "AuthorizationResolver",
    "GrantRecord",
    "PermissionIndex",
    "Role",
    "RoleGraph",
    "RoleRecord",
    "Snapshot",
    "dump_snapshot",
    "load_snapshot",
]
