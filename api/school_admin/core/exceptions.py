"""
Custom exceptions for the application.
"""


class SchoolAdminException(Exception):
    """Base exception for all school admin application exceptions."""
    pass


class ValidationError(SchoolAdminException):
    """Raised when validation fails."""
    pass


class NotFoundError(SchoolAdminException):
    """Raised when a requested resource is not found."""
    pass


class ConflictError(SchoolAdminException):
    """Raised when there's a conflict (e.g., duplicate entry)."""
    pass


class MalformedGroupError(ValidationError):
    """Raised when a group lacks the fields needed to place its weekly lesson."""

    def __init__(self, group_id: int, message: str):
        super().__init__(message)
        self.group_id = group_id


class InsertConflictError(ConflictError):
    """Raised when a lesson already occupies the (group, date) slot being inserted."""

    def __init__(self, group_id: int, lesson_date):
        super().__init__(f"Lesson for group {group_id} on {lesson_date} already exists")
        self.group_id = group_id
        self.lesson_date = lesson_date


class StoreUnavailableError(SchoolAdminException):
    """Raised when the database cannot be reached."""
    pass
