"""
Lesson endpoints.
"""
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from typing import Optional
from datetime import date

from school_admin.api.deps import get_today
from school_admin.core.database import get_session
from school_admin.i18n.uk import t
from school_admin.schemas.lesson import (
    CancelLessonRequest,
    LessonActionResponse,
    LessonResponse,
    LessonsResponse,
    RescheduleLessonRequest,
    UpdateTopicRequest,
)
from school_admin.services.lesson_service import (
    cancel_lesson,
    get_lesson,
    list_group_lessons,
    list_upcoming_lessons,
    mark_lesson_done,
    reschedule_lesson,
    update_lesson_topic,
)

router = APIRouter(prefix="/lessons", tags=["lessons"])


@router.get("", response_model=LessonsResponse)
async def get_lessons(
    group_id: Optional[int] = Query(None, alias="groupId"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    teacher_id: Optional[int] = Query(None, alias="teacherId"),
    limit: Optional[int] = Query(None, ge=1, le=500),
    session: Session = Depends(get_session),
    today: date = Depends(get_today),
):
    """
    List lessons.

    With groupId, returns that group's lessons (optionally within a date
    range). Otherwise returns upcoming, non-canceled lessons.
    """
    if group_id is not None:
        lessons = list_group_lessons(session, group_id, start_date, end_date)
    else:
        lessons = list_upcoming_lessons(session, today, limit=limit, teacher_id=teacher_id)
    return LessonsResponse(lessons=[LessonResponse.model_validate(lesson) for lesson in lessons])


@router.get("/{lesson_id}", response_model=LessonResponse)
async def get_lesson_by_id(
    lesson_id: int,
    session: Session = Depends(get_session),
):
    return LessonResponse.model_validate(get_lesson(session, lesson_id))


@router.post("/{lesson_id}/cancel", response_model=LessonActionResponse)
async def cancel(
    lesson_id: int,
    request: Optional[CancelLessonRequest] = None,
    session: Session = Depends(get_session),
):
    """Cancel a lesson. The lesson keeps its date slot and is not regenerated."""
    reason = request.reason if request else None
    lesson = cancel_lesson(session, lesson_id, reason)
    return LessonActionResponse(message=t("lesson_canceled"), lesson=LessonResponse.model_validate(lesson))


@router.post("/{lesson_id}/done", response_model=LessonActionResponse)
async def mark_done(
    lesson_id: int,
    session: Session = Depends(get_session),
):
    lesson = mark_lesson_done(session, lesson_id)
    return LessonActionResponse(message=t("lesson_done"), lesson=LessonResponse.model_validate(lesson))


@router.patch("/{lesson_id}/topic", response_model=LessonActionResponse)
async def update_topic(
    lesson_id: int,
    request: UpdateTopicRequest,
    session: Session = Depends(get_session),
):
    lesson = update_lesson_topic(session, lesson_id, request.topic)
    return LessonActionResponse(message=t("lesson_topic_updated"), lesson=LessonResponse.model_validate(lesson))


@router.post("/{lesson_id}/reschedule", response_model=LessonActionResponse)
async def reschedule(
    lesson_id: int,
    request: RescheduleLessonRequest,
    session: Session = Depends(get_session),
):
    """Move a lesson to a new date and, optionally, a new start time."""
    lesson = reschedule_lesson(
        session,
        lesson_id,
        new_date=request.new_date,
        new_time=request.new_time,
        keep_duration=request.keep_duration,
    )
    return LessonActionResponse(message=t("lesson_rescheduled"), lesson=LessonResponse.model_validate(lesson))
