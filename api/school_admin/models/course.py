"""
Course model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime

if TYPE_CHECKING:
    from school_admin.models.group import Group


class Course(SQLModel, table=True):
    """Course table - a program that groups are enrolled in."""
    __tablename__ = "courses"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: Optional[str] = None
    is_active: bool = Field(default=True, index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    groups: List["Group"] = Relationship(back_populates="course")
