"""
Lesson model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING
from datetime import date, datetime
from sqlalchemy import Column, String as SAString, UniqueConstraint
from school_admin.models.enums import LessonStatus

if TYPE_CHECKING:
    from school_admin.models.group import Group


class Lesson(SQLModel, table=True):
    """Lesson table - one concrete calendar occurrence of a group."""
    __tablename__ = "lessons"
    __table_args__ = (
        UniqueConstraint("group_id", "lesson_date", name="uq_lessons_group_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    group_id: int = Field(foreign_key="groups.id", index=True)
    lesson_date: date = Field(index=True)
    start_datetime: datetime
    end_datetime: datetime
    topic: Optional[str] = None
    status: LessonStatus = Field(
        default=LessonStatus.SCHEDULED,
        sa_column=Column(SAString, nullable=False, index=True, default=LessonStatus.SCHEDULED.value)
    )
    created_by: Optional[int] = Field(default=None, foreign_key="users.id")
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    group: "Group" = Relationship(back_populates="lessons")
