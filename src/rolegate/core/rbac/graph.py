"""Role hierarchy storage.

Roles form a forest through single parent links. The graph is append-only:
a role's parent is fixed when the role is added. Writers serialize on a
lock and publish a fresh mapping, so readers always see a complete state.
"""

import threading
from collections.abc import Iterator, Mapping

import structlog
from pydantic import BaseModel, ConfigDict, Field

from rolegate.core.constants import (
    DEFAULT_MAX_HIERARCHY_DEPTH,
    MAX_ROLE_ID_LENGTH,
    MAX_ROLE_NAME_LENGTH,
)
from rolegate.core.errors import (
    CyclicHierarchyError,
    DuplicateRoleError,
    HierarchyTooDeepError,
    RoleInUseError,
    UnknownRoleError,
)


logger = structlog.get_logger()


class Role(BaseModel):
    """A node in the role hierarchy.

    Attributes:
        id: Unique role identifier
        name: Human-readable name
        parent_id: Identifier of the parent role, None for a root
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, max_length=MAX_ROLE_ID_LENGTH)
    name: str = Field(..., min_length=1, max_length=MAX_ROLE_NAME_LENGTH)
    parent_id: str | None = None

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


class RoleGraph:
    """In-memory store of roles and their parent links.

    A parent may be added after its child, which lets bootstrap data arrive
    in any order. Dangling parents and cycles are reported when a chain is
    walked, not at insertion time.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_HIERARCHY_DEPTH) -> None:
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.max_depth = max_depth
        self._roles: dict[str, Role] = {}
        self._lock = threading.RLock()
        self._version = 0

    @property
    def version(self) -> int:
        """Counter bumped on every mutation."""
        return self._version

    @property
    def lock(self) -> threading.RLock:
        """Lock serializing writers to this graph and any index bound to it."""
        return self._lock

    def __len__(self) -> int:
        return len(self._roles)

    def __contains__(self, role_id: object) -> bool:
        return role_id in self._roles

    def has_role(self, role_id: str) -> bool:
        return role_id in self._roles

    def roles(self) -> list[Role]:
        """Return all roles in insertion order."""
        return list(self._roles.values())

    def add_role(
        self,
        role_id: str,
        parent_id: str | None = None,
        name: str | None = None,
    ) -> Role:
        """Add a role to the graph.

        Args:
            role_id: Unique identifier for the new role
            parent_id: Parent role identifier, or None for a root
            name: Human-readable name (defaults to the identifier)

        Returns:
            The stored role

        Raises:
            DuplicateRoleError: If a role with this identifier exists
        """
        role = Role(id=role_id, name=name or role_id, parent_id=parent_id)

        with self._lock:
            if role_id in self._roles:
                raise DuplicateRoleError(
                    f"Role '{role_id}' already exists",
                    details={"role_id": role_id},
                )
            roles = dict(self._roles)
            roles[role_id] = role
            self._roles = roles
            self._version += 1

        logger.info("role_added", role_id=role_id, parent_id=parent_id)
        return role

    def remove_role(self, role_id: str) -> Role:
        """Remove a role that no other role inherits from.

        Raises:
            UnknownRoleError: If the role does not exist
            RoleInUseError: If another role names it as parent
        """
        with self._lock:
            role = self._roles.get(role_id)
            if role is None:
                raise UnknownRoleError(role_id=role_id)

            children = sorted(
                r.id
                for r in self._roles.values()
                if r.parent_id == role_id and r.id != role_id
            )
            if children:
                raise RoleInUseError(
                    f"Role '{role_id}' is the parent of: {', '.join(children)}",
                    details={"role_id": role_id, "children": children},
                )

            roles = dict(self._roles)
            del roles[role_id]
            self._roles = roles
            self._version += 1

        logger.info("role_removed", role_id=role_id)
        return role

    def get_role(self, role_id: str) -> Role:
        """Look up a role.

        Raises:
            UnknownRoleError: If the role does not exist
        """
        role = self._roles.get(role_id)
        if role is None:
            raise UnknownRoleError(role_id=role_id)
        return role

    def get_parent(self, role_id: str) -> str | None:
        """Return the parent identifier of a role, None for a root.

        Raises:
            UnknownRoleError: If the role does not exist
        """
        return self.get_role(role_id).parent_id

    def ancestor_chain(self, role_id: str) -> Iterator[str]:
        """Walk from a role up through its parents to the root.

        The starting role is checked immediately; the rest of the chain is
        produced lazily from the graph state at call time, so a caller that
        stops early never visits the upper part of the hierarchy.

        Args:
            role_id: Role to start from (yielded first)

        Returns:
            Iterator over role identifiers, child first

        Raises:
            UnknownRoleError: If the role, or a parent reached during the
                walk, does not exist
            CyclicHierarchyError: If the walk revisits a role
            HierarchyTooDeepError: If more than ``max_depth`` roles would
                be yielded. A cycle longer than ``max_depth`` hits this
                bound before the repeat is seen and is reported here
        """
        roles = self._roles
        if role_id not in roles:
            raise UnknownRoleError(role_id=role_id)
        return self._walk(roles, role_id)

    def _walk(self, roles: Mapping[str, Role], role_id: str) -> Iterator[str]:
        chain: list[str] = []
        visited: set[str] = set()
        current: str | None = role_id

        while current is not None:
            if current in visited:
                raise CyclicHierarchyError(current, chain)
            if len(chain) >= self.max_depth:
                raise HierarchyTooDeepError(role_id, self.max_depth)

            role = roles.get(current)
            if role is None:
                raise UnknownRoleError(
                    role_id=current,
                    details={"referenced_by": chain[-1]},
                )

            visited.add(current)
            chain.append(current)
            yield current
            current = role.parent_id
