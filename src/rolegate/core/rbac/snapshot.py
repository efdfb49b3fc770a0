"""Bootstrap/snapshot format for the role graph and permission index.

A snapshot is an ordered list of roles plus an ordered list of grants,
enough to rebuild both structures deterministically. On disk it is YAML:

    roles:
      - id: admin
      - id: editor
        parent: admin
        name: Editor
    grants:
      - role: admin
        action: delete_task
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from rolegate.core.constants import MAX_ACTION_LENGTH, MAX_ROLE_ID_LENGTH


class RoleRecord(BaseModel):
    """A role entry in a snapshot."""

    id: str = Field(..., min_length=1, description="Role identifier")
    parent: str | None = Field(None, description="Parent role identifier")
    name: str | None = Field(None, description="Human-readable name")


class GrantRecord(BaseModel):
    """A direct grant entry in a snapshot."""

    role: str = Field(
        ..., min_length=1, max_length=MAX_ROLE_ID_LENGTH, description="Role identifier"
    )
    action: str = Field(
        ..., min_length=1, max_length=MAX_ACTION_LENGTH, description="Granted action"
    )


class Snapshot(BaseModel):
    """Ordered role and grant lists."""

    roles: list[RoleRecord] = Field(default_factory=list)
    grants: list[GrantRecord] = Field(default_factory=list)

    @classmethod
    def from_pairs(
        cls,
        roles: list[tuple[str, str | None]],
        grants: list[tuple[str, str]],
    ) -> "Snapshot":
        """Build a snapshot from (role_id, parent_id) and (role_id, action) tuples."""
        return cls(
            roles=[RoleRecord(id=role_id, parent=parent) for role_id, parent in roles],
            grants=[
                GrantRecord(role=role_id, action=action) for role_id, action in grants
            ],
        )

    def role_pairs(self) -> list[tuple[str, str | None]]:
        return [(r.id, r.parent) for r in self.roles]

    def grant_pairs(self) -> list[tuple[str, str]]:
        return [(g.role, g.action) for g in self.grants]


def load_snapshot(path: Path) -> Snapshot:
    """Load a snapshot from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        The parsed snapshot

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file content is not a valid snapshot
    """
    if not path.exists():
        raise FileNotFoundError(f"Bootstrap file '{path}' not found")

    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
        return Snapshot.model_validate(data)
    except (yaml.YAMLError, PydanticValidationError) as e:
        raise ValueError(f"Invalid bootstrap file '{path}': {e}") from e


def dump_snapshot(snapshot: Snapshot, path: Path) -> None:
    """Write a snapshot to a YAML file, preserving order."""
    data = snapshot.model_dump(mode="json", exclude_none=True)
    with path.open("w") as f:
        yaml.safe_dump(data, f, sort_keys=False)
