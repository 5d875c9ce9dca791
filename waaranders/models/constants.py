"""Constants for Waaranders.

This module centralizes default values and display placeholders used throughout the application.
"""

from waaranders.models.todo import TodoPriority, TodoStatus


# Todo defaults
DEFAULT_TODO_PRIORITY = TodoPriority.NORMAL
DEFAULT_TODO_STATUS = TodoStatus.PLANNED

# Activity defaults
DEFAULT_VOLUNTEERS_NEEDED = 1
TARGET_GROUPS = ("DG1", "DG2", "DG3", "DG4", "DG5", "DG6", "DG7", "DG8")
DEFAULT_TARGET_GROUP = "DG1"

# Display
DEFAULT_DISPLAY_LOCALE = "nl_BE"
UNKNOWN_ASSIGNEE_LABEL = "(onbekend)"
UNKNOWN_NAME_LABEL = "(naam onbekend)"
