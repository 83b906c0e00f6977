"""
Lesson service: queries and status changes for individual lessons.
"""
# pyright: reportAttributeAccessIssue=false
# pyright: reportArgumentType=false
from datetime import date, datetime, timedelta
from typing import List, Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from school_admin.core.config import settings
from school_admin.core.exceptions import ConflictError, NotFoundError, ValidationError
from school_admin.i18n.uk import t
from school_admin.models.models import Group, Lesson, LessonStatus
from school_admin.utils.time_utils import parse_start_time

logger = logging.getLogger(__name__)


def get_lesson(session: Session, lesson_id: int) -> Lesson:
    """
    Fetch a lesson by ID.

    Raises:
        NotFoundError: If the lesson does not exist
    """
    lesson = session.get(Lesson, lesson_id)
    if not lesson:
        raise NotFoundError(t("lesson_not_found"))
    return lesson


def list_group_lessons(
    session: Session,
    group_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[Lesson]:
    """Lessons of one group, optionally within [start_date, end_date], ordered by date."""
    query = select(Lesson).where(Lesson.group_id == group_id)
    if start_date:
        query = query.where(Lesson.lesson_date >= start_date)
    if end_date:
        query = query.where(Lesson.lesson_date <= end_date)
    query = query.order_by(Lesson.lesson_date)
    return list(session.exec(query).all())


def list_upcoming_lessons(
    session: Session,
    today: date,
    limit: Optional[int] = None,
    teacher_id: Optional[int] = None,
) -> List[Lesson]:
    """Lessons from today on that are not canceled, soonest first."""
    query = select(Lesson).where(
        Lesson.lesson_date >= today,
        Lesson.status != LessonStatus.CANCELED.value
    )
    if teacher_id is not None:
        query = query.join(Group, Lesson.group_id == Group.id).where(Group.teacher_id == teacher_id)
    query = query.order_by(Lesson.lesson_date, Lesson.start_datetime)
    query = query.limit(limit or settings.upcoming_lessons_limit)
    return list(session.exec(query).all())


def _save(session: Session, lesson: Lesson) -> Lesson:
    lesson.updated_at = datetime.utcnow()
    session.add(lesson)
    session.commit()
    session.refresh(lesson)
    return lesson


def cancel_lesson(session: Session, lesson_id: int, reason: Optional[str] = None) -> Lesson:
    """
    Cancel a lesson. The reason is kept as the lesson topic.

    A canceled lesson still occupies its date, so generation will not
    recreate it.

    Raises:
        NotFoundError: If the lesson does not exist
        ValidationError: If the lesson is already canceled
    """
    lesson = get_lesson(session, lesson_id)
    if lesson.status == LessonStatus.CANCELED.value:
        raise ValidationError(t("lesson_already_canceled"))

    lesson.status = LessonStatus.CANCELED
    lesson.topic = reason or t("lesson_cancel_default_reason")
    lesson = _save(session, lesson)
    logger.info(f"Canceled lesson {lesson_id} of group {lesson.group_id} on {lesson.lesson_date}")
    return lesson


def mark_lesson_done(session: Session, lesson_id: int) -> Lesson:
    """
    Mark a lesson as held.

    Raises:
        NotFoundError: If the lesson does not exist
        ValidationError: If the lesson was canceled
    """
    lesson = get_lesson(session, lesson_id)
    if lesson.status == LessonStatus.CANCELED.value:
        raise ValidationError(t("lesson_canceled_cannot_complete"))

    lesson.status = LessonStatus.DONE
    return _save(session, lesson)


def update_lesson_topic(session: Session, lesson_id: int, topic: Optional[str]) -> Lesson:
    lesson = get_lesson(session, lesson_id)
    lesson.topic = topic
    return _save(session, lesson)


def reschedule_lesson(
    session: Session,
    lesson_id: int,
    new_date: date,
    new_time: Optional[str] = None,
    keep_duration: bool = True,
) -> Lesson:
    """
    Move a lesson to another date and/or start time.

    The lesson goes back to 'scheduled'. Without keep_duration the default
    lesson duration is used instead of the group's.

    Raises:
        NotFoundError: If the lesson does not exist
        ValidationError: If new_time is not HH:MM
        ConflictError: If the group already has another lesson on new_date
    """
    lesson = get_lesson(session, lesson_id)

    if new_time:
        try:
            start_time = parse_start_time(new_time)
        except ValueError as e:
            raise ValidationError(str(e)) from e
    else:
        start_time = lesson.start_datetime.time()

    if keep_duration:
        group = session.get(Group, lesson.group_id)
        duration = group.duration_minutes if group and group.duration_minutes else settings.default_lesson_duration_minutes
    else:
        duration = settings.default_lesson_duration_minutes

    taken = session.exec(
        select(Lesson).where(
            Lesson.group_id == lesson.group_id,
            Lesson.lesson_date == new_date,
            Lesson.id != lesson.id
        )
    ).first()
    if taken:
        raise ConflictError(t("lesson_date_taken", date=new_date.isoformat()))

    old_date = lesson.lesson_date
    start_datetime = datetime.combine(new_date, start_time)
    lesson.lesson_date = new_date
    lesson.start_datetime = start_datetime
    lesson.end_datetime = start_datetime + timedelta(minutes=duration)
    lesson.status = LessonStatus.SCHEDULED

    try:
        lesson = _save(session, lesson)
    except IntegrityError as e:
        session.rollback()
        raise ConflictError(t("lesson_date_taken", date=new_date.isoformat())) from e

    logger.info(f"Rescheduled lesson {lesson_id} from {old_date} to {new_date} {start_time:%H:%M}")
    return lesson
