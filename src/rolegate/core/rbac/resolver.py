"""Authorization decisions over the role hierarchy.

A role is permitted an action when the role itself or any of its
ancestors holds a direct grant for it. There is no explicit deny.
"""

from collections.abc import Iterable

import structlog

from rolegate.core.rbac.graph import RoleGraph
from rolegate.core.rbac.index import PermissionIndex


logger = structlog.get_logger()


class AuthorizationResolver:
    """Resolves (role, action) checks against a graph and an index.

    Structural errors from the graph (unknown role, cycle, excessive
    depth) propagate unchanged.
    """

    def __init__(self, graph: RoleGraph, index: PermissionIndex) -> None:
        self.graph = graph
        self.index = index

    def granting_role(self, role_id: str, action: str) -> str | None:
        """Find the nearest role in the chain that grants an action.

        The walk stops at the first grant; roles above it are not visited.

        Args:
            role_id: The acting role
            action: The requested action

        Returns:
            The granting role's identifier, or None if nothing grants it
        """
        for ancestor in self.graph.ancestor_chain(role_id):
            if self.index.is_granted_directly(ancestor, action):
                return ancestor
        return None

    def is_permitted(self, role_id: str, action: str) -> bool:
        """Check whether a role may perform an action.

        Args:
            role_id: The acting role
            action: The requested action

        Returns:
            True if the role or one of its ancestors grants the action
        """
        granted_by = self.granting_role(role_id, action)
        logger.debug(
            "authorization_decision",
            role_id=role_id,
            action=action,
            permitted=granted_by is not None,
            granted_by=granted_by,
        )
        return granted_by is not None

    def effective_permissions(self, role_id: str) -> set[str]:
        """Union of direct grants over the full ancestor chain.

        Unlike ``is_permitted`` this always walks to the root, so a fault
        anywhere in the chain is raised.
        """
        return self.permissions_along(self.graph.ancestor_chain(role_id))

    def permissions_along(self, chain: Iterable[str]) -> set[str]:
        """Union of direct grants over an already walked chain."""
        permissions: set[str] = set()
        for ancestor in chain:
            permissions |= self.index.actions_for(ancestor)
        return permissions
