"""
Models module - re-exports all models.

Importing this module registers every table with SQLModel metadata:
    from school_admin.models.models import Group, Lesson
"""
from school_admin.models.enums import UserRole, GroupStatus, LessonStatus
from school_admin.models.user import User
from school_admin.models.course import Course
from school_admin.models.group import Group
from school_admin.models.lesson import Lesson

__all__ = [
    'UserRole',
    'GroupStatus',
    'LessonStatus',
    'User',
    'Course',
    'Group',
    'Lesson',
]
