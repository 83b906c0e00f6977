"""
Lesson schemas.
"""
from pydantic import Field, field_validator
from typing import List, Optional
from datetime import date, datetime
from school_admin.schemas.utils import CamelModel, enum_value, normalize_optional_text


class LessonResponse(CamelModel):
    """Lesson response schema."""
    id: int
    group_id: int
    lesson_date: date
    start_datetime: datetime
    end_datetime: datetime
    topic: Optional[str] = None
    status: str
    created_by: Optional[int] = None

    @field_validator("status", mode="before")
    @classmethod
    def unwrap_status(cls, v):
        return enum_value(v)


class LessonsResponse(CamelModel):
    """Response schema for lesson lists."""
    lessons: List[LessonResponse]


class LessonActionResponse(CamelModel):
    """Response for lesson status changes."""
    message: str
    lesson: LessonResponse


class CancelLessonRequest(CamelModel):
    """Request schema for canceling a lesson."""
    reason: Optional[str] = None

    @field_validator("reason")
    @classmethod
    def strip_reason(cls, v: Optional[str]) -> Optional[str]:
        return normalize_optional_text(v)


class UpdateTopicRequest(CamelModel):
    """Request schema for setting a lesson topic."""
    topic: Optional[str] = None

    @field_validator("topic")
    @classmethod
    def strip_topic(cls, v: Optional[str]) -> Optional[str]:
        return normalize_optional_text(v)


class RescheduleLessonRequest(CamelModel):
    """Request schema for moving a lesson to another date or time."""
    new_date: date = Field(..., description="New lesson date (YYYY-MM-DD)")
    new_time: Optional[str] = Field(None, description="New start time (HH:MM); keeps the current time if omitted")
    keep_duration: bool = Field(True, description="Keep the group's lesson duration; otherwise use the default duration")

    class Config:
        json_schema_extra = {
            "example": {
                "newDate": "2024-03-07",
                "newTime": "15:30",
                "keepDuration": True
            }
        }
