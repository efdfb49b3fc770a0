"""Core infrastructure: RBAC engine, errors, logging, database."""
