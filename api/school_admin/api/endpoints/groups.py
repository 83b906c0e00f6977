"""
Group endpoints.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session
from typing import Optional
from datetime import date

from school_admin.api.deps import get_today
from school_admin.core.database import get_session
from school_admin.i18n.uk import t
from school_admin.schemas.schedule import GenerateGroupLessonsResponse, GenerateLessonsRequest
from school_admin.schemas.lesson import LessonsResponse, LessonResponse
from school_admin.services.lesson_service import list_group_lessons
from school_admin.services.schedule_service import generate_lessons_for_group

router = APIRouter(prefix="/groups", tags=["groups"])


@router.post(
    "/{group_id}/generate-lessons",
    response_model=GenerateGroupLessonsResponse,
    status_code=status.HTTP_200_OK
)
async def generate_group_lessons(
    group_id: int,
    request: Optional[GenerateLessonsRequest] = None,
    session: Session = Depends(get_session),
    today: date = Depends(get_today),
):
    """Generate missing lessons for one active group."""
    weeks_ahead = request.weeks_ahead if request else None
    result = generate_lessons_for_group(session, group_id, weeks_ahead=weeks_ahead, today=today)
    return GenerateGroupLessonsResponse(message=t("lessons_generated"), **result.model_dump())


@router.get("/{group_id}/lessons", response_model=LessonsResponse)
async def get_group_lessons(
    group_id: int,
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    session: Session = Depends(get_session),
):
    """Get all lessons of a group, optionally limited to a date range."""
    lessons = list_group_lessons(session, group_id, start_date, end_date)
    return LessonsResponse(lessons=[LessonResponse.model_validate(lesson) for lesson in lessons])
