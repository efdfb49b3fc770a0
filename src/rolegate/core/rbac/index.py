"""Direct (role, action) grants.

The index never looks at the hierarchy; inheritance is the resolver's job.
"""

import threading

import structlog

from rolegate.core.errors import UnknownRoleError, ValidationError
from rolegate.core.rbac.graph import RoleGraph


logger = structlog.get_logger()


class PermissionIndex:
    """Set of actions granted directly to each role.

    When bound to a RoleGraph, grants to roles the graph does not know are
    refused, and mutations share the graph's lock so a role cannot be
    removed between that check and the write. Mutations publish a new
    mapping; lookups read the current mapping without locking.
    """

    def __init__(self, graph: RoleGraph | None = None) -> None:
        self._graph = graph
        self._grants: dict[str, frozenset[str]] = {}
        self._lock = graph.lock if graph is not None else threading.RLock()

    def __len__(self) -> int:
        return sum(len(actions) for actions in self._grants.values())

    def grant(self, role_id: str, action: str) -> bool:
        """Grant an action to a role.

        Granting a pair that already exists is a no-op.

        Returns:
            True if the grant was added, False if it already existed

        Raises:
            UnknownRoleError: If the bound graph has no such role
            ValidationError: If the action is empty
        """
        if not action:
            raise ValidationError("Action must be a non-empty string")

        with self._lock:
            if self._graph is not None and not self._graph.has_role(role_id):
                raise UnknownRoleError(role_id=role_id)
            current = self._grants.get(role_id, frozenset())
            if action in current:
                return False
            grants = dict(self._grants)
            grants[role_id] = current | {action}
            self._grants = grants

        logger.info("permission_granted", role_id=role_id, action=action)
        return True

    def revoke(self, role_id: str, action: str) -> bool:
        """Revoke an action from a role.

        Revoking a pair that was never granted is a no-op.

        Returns:
            True if a grant was removed
        """
        with self._lock:
            current = self._grants.get(role_id, frozenset())
            if action not in current:
                return False
            grants = dict(self._grants)
            remaining = current - {action}
            if remaining:
                grants[role_id] = remaining
            else:
                del grants[role_id]
            self._grants = grants

        logger.info("permission_revoked", role_id=role_id, action=action)
        return True

    def drop_role(self, role_id: str) -> int:
        """Remove every grant held by a role.

        Returns:
            Number of grants removed
        """
        with self._lock:
            removed = self._grants.get(role_id, frozenset())
            if not removed:
                return 0
            grants = dict(self._grants)
            del grants[role_id]
            self._grants = grants

        logger.info("permissions_dropped", role_id=role_id, count=len(removed))
        return len(removed)

    def is_granted_directly(self, role_id: str, action: str) -> bool:
        return action in self._grants.get(role_id, ())

    def actions_for(self, role_id: str) -> frozenset[str]:
        """Actions granted directly to a role (not inherited)."""
        return self._grants.get(role_id, frozenset())

    def grants(self) -> list[tuple[str, str]]:
        """All (role_id, action) pairs, sorted."""
        return sorted(
            (role_id, action)
            for role_id, actions in self._grants.items()
            for action in actions
        )
