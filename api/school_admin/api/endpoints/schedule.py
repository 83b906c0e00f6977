"""
Schedule endpoints.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session
from typing import Optional
from datetime import date

from school_admin.api.deps import get_today
from school_admin.core.database import get_session
from school_admin.i18n.uk import t
from school_admin.schemas.schedule import (
    GenerateAllResponse,
    GenerateLessonsRequest,
    ScheduleResponse,
)
from school_admin.services.schedule_service import (
    build_schedule,
    generate_lessons_for_all_groups,
)

router = APIRouter(prefix="/schedule", tags=["schedule"])


@router.get("", response_model=ScheduleResponse)
async def get_schedule(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    group_id: Optional[int] = Query(None, alias="groupId"),
    teacher_id: Optional[int] = Query(None, alias="teacherId"),
    session: Session = Depends(get_session),
    today: date = Depends(get_today),
):
    """Get lessons laid out day by day. Defaults to the current Monday-Sunday week."""
    return build_schedule(
        session,
        today=today,
        start_date=start_date,
        end_date=end_date,
        group_id=group_id,
        teacher_id=teacher_id,
    )


@router.post("/generate-all", response_model=GenerateAllResponse, status_code=status.HTTP_200_OK)
async def generate_all_lessons(
    request: Optional[GenerateLessonsRequest] = None,
    session: Session = Depends(get_session),
    today: date = Depends(get_today),
):
    """
    Generate lessons for all active groups.

    Creates one lesson per group per weekly slot for the coming weeks. Slots
    that already have a lesson (in any status) are skipped. Malformed groups
    and failed inserts are reported per group and do not stop the run.
    """
    weeks_ahead = request.weeks_ahead if request else None
    summary = generate_lessons_for_all_groups(session, weeks_ahead=weeks_ahead, today=today)

    return GenerateAllResponse(
        message=t("lessons_generated"),
        **summary.model_dump(),
    )
