"""
Schedule generation and weekly schedule schemas.
"""
from pydantic import Field, field_validator
from typing import Any, List, Optional
import datetime
from datetime import date
from school_admin.schemas.utils import CamelModel, enum_value


class GenerateLessonsRequest(CamelModel):
    """Request to generate lessons for the coming weeks."""
    # Validated by the schedule service so bad values surface as 400, not 422
    weeks_ahead: Optional[Any] = Field(None, description="Number of weeks to generate ahead (1-52, default 8)")

    class Config:
        json_schema_extra = {
            "example": {
                "weeksAhead": 8
            }
        }


class LessonFailure(CamelModel):
    """A single lesson date that could not be stored."""
    lesson_date: date
    error: str


class GroupGenerationResult(CamelModel):
    """Outcome of lesson generation for one group."""
    group_id: int
    group_title: Optional[str] = None
    generated: int = 0
    skipped: int = 0
    failed: int = 0
    errors: List[LessonFailure] = Field(default_factory=list)
    error: Optional[str] = Field(None, description="Set when the whole group was skipped (e.g. malformed slot)")


class GenerationSummary(CamelModel):
    """Aggregated outcome of a generation run over all active groups."""
    total_generated: int = 0
    total_skipped: int = 0
    total_failed: int = 0
    results: List[GroupGenerationResult] = Field(default_factory=list)


class GenerateAllResponse(GenerationSummary):
    """Response from POST /schedule/generate-all."""
    message: str

    class Config:
        json_schema_extra = {
            "example": {
                "message": "Заняття успішно згенеровано",
                "totalGenerated": 16,
                "totalSkipped": 8,
                "totalFailed": 0,
                "results": [
                    {
                        "groupId": 1,
                        "groupTitle": "Робототехніка 1",
                        "generated": 8,
                        "skipped": 0,
                        "failed": 0,
                        "errors": [],
                        "error": None
                    }
                ]
            }
        }


class GenerateGroupLessonsResponse(GroupGenerationResult):
    """Response from POST /groups/{group_id}/generate-lessons."""
    message: str


class ScheduleLesson(CamelModel):
    """A lesson as shown in the schedule grid."""
    id: int
    group_id: int
    group_title: str
    course_title: str
    teacher_id: int
    teacher_name: str
    start_time: str
    end_time: str
    status: str
    topic: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def unwrap_status(cls, v):
        return enum_value(v)


class ScheduleDay(CamelModel):
    """One calendar day of the schedule grid."""
    date: datetime.date
    day_of_week: int
    day_name: str
    lessons: List[ScheduleLesson] = Field(default_factory=list)


class ScheduleResponse(CamelModel):
    """Day-by-day schedule for a date range."""
    week_start: date
    week_end: date
    days: List[ScheduleDay]
    total_lessons: int
