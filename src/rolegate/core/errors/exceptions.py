"""Domain exceptions for the application.

These exceptions represent business-logic errors and are automatically
converted to RFC 7807 Problem Details responses by the exception handlers.

Role graph faults (``RoleGraphError`` and its subclasses) describe a broken
hierarchy and are kept apart from ``ForbiddenError``, which is the ordinary
outcome of a check that found no grant.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    All domain exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class RoleGraphError(AppException):
    """Base class for structural faults in the role hierarchy.

    These are data-integrity problems, not authorization outcomes, and
    are never retried.
    """

    message = "Role graph fault"
    error_code = "role_graph_fault"
    status_code = 500


class UnknownRoleError(RoleGraphError):
    """Raised when a role identifier is not present in the role graph.

    Example:
        raise UnknownRoleError(role_id="auditor")
    """

    message = "Unknown role"
    error_code = "unknown_role"

    def __init__(
        self,
        message: str | None = None,
        role_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if role_id is not None:
            details["role_id"] = role_id
            message = message or f"Unknown role '{role_id}'"
        self.role_id = role_id
        super().__init__(message=message, details=details, **kwargs)


class CyclicHierarchyError(RoleGraphError):
    """Raised when an ancestor walk revisits a role.

    Attributes:
        chain: Roles visited before the repeat, in walk order
    """

    message = "Role hierarchy contains a cycle"
    error_code = "cyclic_hierarchy"

    def __init__(self, role_id: str, chain: list[str], **kwargs: Any) -> None:
        details = kwargs.pop("details", {})
        details["role_id"] = role_id
        details["chain"] = chain
        self.role_id = role_id
        self.chain = chain
        path = " -> ".join([*chain, role_id])
        super().__init__(
            message=f"Role '{role_id}' is its own ancestor: {path}",
            details=details,
            **kwargs,
        )


class HierarchyTooDeepError(RoleGraphError):
    """Raised when an ancestor chain grows past the configured bound."""

    message = "Role hierarchy too deep"
    error_code = "hierarchy_too_deep"

    def __init__(self, role_id: str, max_depth: int, **kwargs: Any) -> None:
        details = kwargs.pop("details", {})
        details["role_id"] = role_id
        details["max_depth"] = max_depth
        self.role_id = role_id
        self.max_depth = max_depth
        super().__init__(
            message=f"Ancestor chain of '{role_id}' exceeds {max_depth} roles",
            details=details,
            **kwargs,
        )


class NotFoundError(AppException):
    """Raised when a requested resource is not found.

    Example:
        raise NotFoundError("Task not found", resource="task", resource_id="42")
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class ConflictError(AppException):
    """Raised when there's a conflict with existing data.

    Example:
        raise ConflictError("Role already exists", details={"role_id": role_id})
    """

    message = "Resource conflict"
    error_code = "conflict"
    status_code = 409


class DuplicateRoleError(ConflictError):
    """Raised when adding a role whose identifier is already taken."""

    message = "Role already exists"
    error_code = "duplicate_role"


class RoleInUseError(ConflictError):
    """Raised when removing a role that other roles still inherit from."""

    message = "Role is a parent of other roles"
    error_code = "role_in_use"


class ValidationError(AppException):
    """Raised when request data fails validation.

    Example:
        raise ValidationError(
            "Invalid input data",
            errors=[{"field": "owner_id", "message": "Owner must match acting role"}]
        )
    """

    message = "Validation error"
    error_code = "validation_error"
    status_code = 422

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if errors:
            details["errors"] = errors
        super().__init__(message=message, details=details, **kwargs)


class ForbiddenError(AppException):
    """Raised when the acting role lacks permission for an action.

    Example:
        raise ForbiddenError(
            "Insufficient permissions",
            details={"role_id": "guest", "action": "create_task"}
        )
    """

    message = "Access forbidden"
    error_code = "forbidden"
    status_code = 403
