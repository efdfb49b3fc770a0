"""Error handling module with RFC 7807 Problem Details."""

from rolegate.core.errors.exceptions import (
    AppException,
    ConflictError,
    CyclicHierarchyError,
    DuplicateRoleError,
    ForbiddenError,
    HierarchyTooDeepError,
    NotFoundError,
    RoleGraphError,
    RoleInUseError,
    UnknownRoleError,
    ValidationError,
)
from rolegate.core.errors.handlers import (
    FieldError,
    ProblemDetail,
    register_exception_handlers,
)


__all__ = [
    "AppException",
    "ConflictError",
    "CyclicHierarchyError",
    "DuplicateRoleError",
    "ForbiddenError",
    "HierarchyTooDeepError",
    "NotFoundError",
    "RoleGraphError",
    "RoleInUseError",
    "UnknownRoleError",
    "ValidationError",
    # Handlers
    "FieldError",
    "ProblemDetail",
    "register_exception_handlers",
]
