"""
Group model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import date, datetime
from sqlalchemy import CheckConstraint, Column, String as SAString
from school_admin.models.enums import GroupStatus

if TYPE_CHECKING:
    from school_admin.models.course import Course
    from school_admin.models.user import User
    from school_admin.models.lesson import Lesson


class Group(SQLModel, table=True):
    """Group table - a recurring weekly class of a course with one teacher."""
    __tablename__ = "groups"
    __table_args__ = (
        CheckConstraint("weekly_day >= 1 AND weekly_day <= 7", name="ck_groups_weekly_day"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    course_id: int = Field(foreign_key="courses.id", index=True)
    title: str
    teacher_id: int = Field(foreign_key="users.id", index=True)
    # Weekly slot; nullable so legacy rows without a slot can still be stored
    weekly_day: Optional[int] = None  # ISO weekday, 1 = Monday ... 7 = Sunday
    start_time: Optional[str] = None  # HH:MM
    duration_minutes: int = Field(default=90)
    timezone: str = Field(default="Europe/Kyiv")
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    capacity: Optional[int] = None
    monthly_price: int = Field(default=0)
    status: GroupStatus = Field(
        default=GroupStatus.ACTIVE,
        sa_column=Column(SAString, nullable=False, index=True, default=GroupStatus.ACTIVE.value)
    )
    note: Optional[str] = None
    is_active: bool = Field(default=True, index=True)  # False when archived
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    course: "Course" = Relationship(back_populates="groups")
    teacher: "User" = Relationship(back_populates="groups")
    lessons: List["Lesson"] = Relationship(back_populates="group")
