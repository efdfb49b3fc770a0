"""rolegate - hierarchical role-based access control for task resources."""

__version__ = "0.1.0"
