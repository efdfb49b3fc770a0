"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# Role graph
DEFAULT_MAX_HIERARCHY_DEPTH = 64

# Task actions checked by the enforcement layer
CREATE_TASK = "create_task"
EDIT_TASK = "edit_task"
DELETE_TASK = "delete_task"
TRANSFER_TASK = "transfer_task"

# String field lengths
MAX_ROLE_ID_LENGTH = 100
MAX_ROLE_NAME_LENGTH = 100
MAX_ACTION_LENGTH = 50
MAX_TITLE_LENGTH = 255

# HTTP
ROLE_HEADER = "X-Role-Id"
