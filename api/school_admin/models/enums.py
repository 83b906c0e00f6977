"""
Model enums.
"""
from enum import Enum


class UserRole(str, Enum):
    """Role of a user account."""
    ADMIN = "admin"


class GroupStatus(str, Enum):
    """Lifecycle status of a group."""
    ACTIVE = "active"
    GRADUATE = "graduate"
    INACTIVE = "inactive"


class LessonStatus(str, Enum):
    """Status of a single lesson occurrence."""
    SCHEDULED = "scheduled"
    DONE = "done"
    CANCELED = "canceled"
