"""Feature modules guarded by the RBAC engine."""
