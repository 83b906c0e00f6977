"""
User model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
from sqlalchemy import Column, String as SAString
from school_admin.models.enums import UserRole

if TYPE_CHECKING:
    from school_admin.models.group import Group


class User(SQLModel, table=True):
    """User table - administrators and teachers."""
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)
    role: UserRole = Field(
        default=UserRole.ADMIN,
        sa_column=Column(SAString, nullable=False, default=UserRole.ADMIN.value)
    )
    phone: Optional[str] = None
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    groups: List["Group"] = Relationship(back_populates="teacher")
