"""
Schedule service: recurring lesson generation and the day-by-day schedule view.

Each active group describes a weekly slot (ISO weekday, start time, duration).
Generation walks the coming weeks and makes sure exactly one lesson exists per
(group, date). Missing lessons are inserted; existing ones are never touched,
whatever their status.
"""
# pyright: reportAttributeAccessIssue=false
# pyright: reportArgumentType=false
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional, Set, Union
import logging

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlmodel import Session, select

from school_admin.core.config import settings
from school_admin.core.exceptions import (
    InsertConflictError,
    MalformedGroupError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from school_admin.i18n.uk import t
from school_admin.models.models import Course, Group, GroupStatus, Lesson, LessonStatus, User
from school_admin.schemas.schedule import (
    GenerationSummary,
    GroupGenerationResult,
    LessonFailure,
    ScheduleDay,
    ScheduleLesson,
    ScheduleResponse,
)
from school_admin.utils.time_utils import (
    calculate_end_time,
    day_name_uk,
    parse_start_time,
    week_start,
    weekly_occurrences,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupSlot:
    """Validated weekly slot of a group, detached from the ORM row."""
    group_id: int
    title: str
    weekly_day: int
    start_time: time
    duration_minutes: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @classmethod
    def from_group(cls, group: Group) -> "GroupSlot":
        """
        Build a slot from a group row.

        Raises:
            MalformedGroupError: If the weekly day, start time or duration is unusable
        """
        if group.weekly_day is None:
            raise MalformedGroupError(group.id, t("group_missing_weekly_day"))
        if isinstance(group.weekly_day, bool) or not isinstance(group.weekly_day, int) or not 1 <= group.weekly_day <= 7:
            raise MalformedGroupError(group.id, t("group_invalid_weekly_day", value=group.weekly_day))

        if not group.start_time:
            raise MalformedGroupError(group.id, t("group_missing_start_time"))
        try:
            start_time = parse_start_time(group.start_time)
        except ValueError as e:
            raise MalformedGroupError(group.id, t("group_invalid_start_time", value=group.start_time)) from e

        if not group.duration_minutes or group.duration_minutes <= 0:
            raise MalformedGroupError(group.id, t("group_invalid_duration", value=group.duration_minutes))

        return cls(
            group_id=group.id,
            title=group.title,
            weekly_day=group.weekly_day,
            start_time=start_time,
            duration_minutes=group.duration_minutes,
            start_date=group.start_date,
            end_date=group.end_date,
        )

    def lesson_dates(self, today: date, weeks_ahead: int) -> List[date]:
        """
        Dates this group meets on within the horizon.

        The window opens at today or the group's start date, whichever is later.
        It closes (exclusive) weeks_ahead weeks after today, or after the
        group's end date if that comes first.
        """
        window_start = max(today, self.start_date or today)
        horizon_end = today + timedelta(days=weeks_ahead * 7)
        if self.end_date is not None:
            horizon_end = min(horizon_end, self.end_date + timedelta(days=1))
        return weekly_occurrences(self.weekly_day, window_start, horizon_end)

    def lesson_times(self, lesson_date: date) -> tuple[datetime, datetime]:
        start = datetime.combine(lesson_date, self.start_time)
        return start, start + timedelta(minutes=self.duration_minutes)


def validate_weeks_ahead(weeks_ahead: Any) -> int:
    """
    Check the generation horizon.

    None means "use the default". Anything that is not an integer in the
    configured range raises ValidationError.
    """
    if weeks_ahead is None:
        return settings.schedule_weeks_ahead_default

    message = t(
        "invalid_weeks_ahead",
        min=settings.schedule_weeks_ahead_min,
        max=settings.schedule_weeks_ahead_max,
    )
    # bool is an int subclass; JSON true must not count as 1 week
    if isinstance(weeks_ahead, bool):
        raise ValidationError(message)
    if isinstance(weeks_ahead, float):
        if not weeks_ahead.is_integer():
            raise ValidationError(message)
        weeks_ahead = int(weeks_ahead)
    if not isinstance(weeks_ahead, int):
        raise ValidationError(message)
    if not settings.schedule_weeks_ahead_min <= weeks_ahead <= settings.schedule_weeks_ahead_max:
        raise ValidationError(message)
    return weeks_ahead


def _existing_lesson_dates(session: Session, group_id: int, dates: List[date]) -> Set[date]:
    """Dates among `dates` that already have a lesson for the group, in any status."""
    if not dates:
        return set()
    rows = session.exec(
        select(Lesson.lesson_date).where(
            Lesson.group_id == group_id,
            Lesson.lesson_date.in_(dates)  # type: ignore[attr-defined]
        )
    ).all()
    return set(rows)


def _lesson_exists(session: Session, group_id: int, lesson_date: date) -> bool:
    lesson_id = session.exec(
        select(Lesson.id).where(
            Lesson.group_id == group_id,
            Lesson.lesson_date == lesson_date
        )
    ).first()
    return lesson_id is not None


def _insert_lesson(
    session: Session,
    slot: GroupSlot,
    lesson_date: date,
    created_by: Optional[int],
) -> Lesson:
    """
    Insert one scheduled lesson and commit it on its own.

    Raises:
        InsertConflictError: If another lesson already holds the (group, date) slot
        SQLAlchemyError: On any other storage failure, including integrity
            errors that leave the slot empty (the insert is rolled back)
    """
    start_datetime, end_datetime = slot.lesson_times(lesson_date)
    lesson = Lesson(
        group_id=slot.group_id,
        lesson_date=lesson_date,
        start_datetime=start_datetime,
        end_datetime=end_datetime,
        status=LessonStatus.SCHEDULED,
        created_by=created_by,
    )
    try:
        session.add(lesson)
        session.commit()
    except IntegrityError as e:
        session.rollback()
        if _lesson_exists(session, slot.group_id, lesson_date):
            raise InsertConflictError(slot.group_id, lesson_date) from e
        raise
    except SQLAlchemyError:
        session.rollback()
        raise
    return lesson


def _generate_for_slot(
    session: Session,
    slot: GroupSlot,
    today: date,
    weeks_ahead: int,
    created_by: Optional[int],
) -> GroupGenerationResult:
    """Fill in the missing lessons of one group and report what happened."""
    candidate_dates = slot.lesson_dates(today, weeks_ahead)
    existing_dates = _existing_lesson_dates(session, slot.group_id, candidate_dates)

    generated = 0
    skipped = 0
    errors: List[LessonFailure] = []

    for lesson_date in candidate_dates:
        if lesson_date in existing_dates:
            skipped += 1
            continue

        try:
            _insert_lesson(session, slot, lesson_date, created_by)
        except InsertConflictError:
            # Another run inserted it between our check and insert
            logger.info(
                "Lesson for group %s on %s appeared concurrently, skipping",
                slot.group_id, lesson_date
            )
            skipped += 1
        except SQLAlchemyError as e:
            logger.error(
                "Failed to insert lesson for group %s on %s: %s",
                slot.group_id, lesson_date, str(e)
            )
            errors.append(LessonFailure(lesson_date=lesson_date, error=t("lesson_insert_failed")))
        else:
            generated += 1

    logger.info(
        "Group %s: %s lessons generated, %s skipped, %s failed",
        slot.group_id, generated, skipped, len(errors)
    )

    return GroupGenerationResult(
        group_id=slot.group_id,
        group_title=slot.title,
        generated=generated,
        skipped=skipped,
        failed=len(errors),
        errors=errors,
    )


def _load_active_groups(session: Session) -> List[Group]:
    try:
        return list(session.exec(
            select(Group).where(
                Group.status == GroupStatus.ACTIVE.value,
                Group.is_active == True  # noqa: E712
            ).order_by(Group.id)
        ).all())
    except OperationalError as e:
        session.rollback()
        logger.error("Could not load groups for lesson generation: %s", str(e))
        raise StoreUnavailableError(t("store_unavailable")) from e


def generate_lessons_for_all_groups(
    session: Session,
    weeks_ahead: Any,
    today: date,
    created_by: Optional[int] = None,
) -> GenerationSummary:
    """
    Generate missing lessons for every active group.

    A malformed group, or a single failed insert, is recorded in that group's
    result and the run carries on. Only a store that cannot be read at all
    aborts the run.

    Args:
        session: Database session
        weeks_ahead: Horizon in weeks (validated, None means the default)
        today: Local date the horizon is counted from
        created_by: Optional user ID recorded on new lessons

    Returns:
        GenerationSummary with per-group results and totals

    Raises:
        ValidationError: If weeks_ahead is invalid
        StoreUnavailableError: If the groups cannot be loaded
    """
    weeks_ahead = validate_weeks_ahead(weeks_ahead)
    groups = _load_active_groups(session)

    # Detach scheduling data up front; per-insert rollbacks expire ORM rows
    prepared: List[Union[GroupSlot, GroupGenerationResult]] = []
    for group in groups:
        try:
            prepared.append(GroupSlot.from_group(group))
        except MalformedGroupError as e:
            logger.warning("Skipping malformed group %s: %s", e.group_id, str(e))
            prepared.append(GroupGenerationResult(group_id=group.id, group_title=group.title, error=str(e)))

    results: List[GroupGenerationResult] = []
    for item in prepared:
        if isinstance(item, GroupGenerationResult):
            results.append(item)
            continue
        try:
            results.append(_generate_for_slot(session, item, today, weeks_ahead, created_by))
        except OperationalError as e:
            session.rollback()
            logger.error("Store unavailable while generating lessons for group %s: %s", item.group_id, str(e))
            raise StoreUnavailableError(t("store_unavailable")) from e

    summary = GenerationSummary(
        total_generated=sum(r.generated for r in results),
        total_skipped=sum(r.skipped for r in results),
        total_failed=sum(r.failed for r in results) + sum(1 for r in results if r.error),
        results=results,
    )
    logger.info(
        "Lesson generation for %s groups (%s weeks ahead): %s generated, %s skipped, %s failed",
        len(results), weeks_ahead, summary.total_generated, summary.total_skipped, summary.total_failed
    )
    return summary


def generate_lessons_for_group(
    session: Session,
    group_id: int,
    weeks_ahead: Any,
    today: date,
    created_by: Optional[int] = None,
) -> GroupGenerationResult:
    """
    Generate missing lessons for a single group.

    Raises:
        ValidationError: If weeks_ahead is invalid or the group is not active
        NotFoundError: If the group does not exist
        MalformedGroupError: If the group's weekly slot is unusable
    """
    weeks_ahead = validate_weeks_ahead(weeks_ahead)

    group = session.get(Group, group_id)
    if not group:
        raise NotFoundError(t("group_not_found"))
    if group.status != GroupStatus.ACTIVE.value or not group.is_active:
        raise ValidationError(t("group_not_active"))

    slot = GroupSlot.from_group(group)
    return _generate_for_slot(session, slot, today, weeks_ahead, created_by)


def resolve_schedule_range(
    today: date,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> tuple[date, date]:
    """
    Work out the date range shown by the schedule view.

    Defaults to the current Monday-Sunday week; a lone start date shows
    seven days from it.
    """
    if start_date and end_date:
        if end_date < start_date:
            raise ValidationError(t("invalid_date_range"))
        return start_date, end_date
    if start_date:
        return start_date, start_date + timedelta(days=6)
    if end_date:
        return end_date - timedelta(days=6), end_date
    monday = week_start(today)
    return monday, monday + timedelta(days=6)


def build_schedule(
    session: Session,
    today: date,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    group_id: Optional[int] = None,
    teacher_id: Optional[int] = None,
) -> ScheduleResponse:
    """Project stored lessons into a day-by-day grid."""
    range_start, range_end = resolve_schedule_range(today, start_date, end_date)

    query = (
        select(Lesson, Group, Course, User)
        .join(Group, Lesson.group_id == Group.id)
        .join(Course, Group.course_id == Course.id)
        .join(User, Group.teacher_id == User.id)
        .where(
            Lesson.lesson_date >= range_start,
            Lesson.lesson_date <= range_end
        )
    )
    if group_id is not None:
        query = query.where(Lesson.group_id == group_id)
    if teacher_id is not None:
        query = query.where(Group.teacher_id == teacher_id)
    query = query.order_by(Lesson.lesson_date, Lesson.start_datetime)

    rows = session.exec(query).all()

    days_map: Dict[date, List[ScheduleLesson]] = {}
    day_count = (range_end - range_start).days + 1
    for offset in range(day_count):
        days_map[range_start + timedelta(days=offset)] = []

    for lesson, group, course, teacher in rows:
        start_time = lesson.start_datetime.strftime("%H:%M")
        duration_minutes = (lesson.end_datetime - lesson.start_datetime) // timedelta(minutes=1)
        days_map[lesson.lesson_date].append(
            ScheduleLesson(
                id=lesson.id,
                group_id=group.id,
                group_title=group.title,
                course_title=course.title,
                teacher_id=teacher.id,
                teacher_name=teacher.name,
                start_time=start_time,
                end_time=calculate_end_time(start_time, duration_minutes),
                status=lesson.status,
                topic=lesson.topic,
            )
        )

    days = [
        ScheduleDay(
            date=day,
            day_of_week=day.isoweekday(),
            day_name=day_name_uk(day.isoweekday()),
            lessons=lessons,
        )
        for day, lessons in days_map.items()
    ]

    return ScheduleResponse(
        week_start=range_start,
        week_end=range_end,
        days=days,
        total_lessons=len(rows),
    )
