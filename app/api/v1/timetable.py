"""Mobile timetable endpoints."""

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.exceptions import BadRequestException
from app.models.user import Role
from app.schemas.common import error_responses
from app.schemas.timetable import TimetableResponse
from app.services.student_service import get_student_service
from app.services.timetable_service import format_slot, get_timetable_service, group_by_day
from app.utils.permissions import STAFF_ROLES, require_role

router = APIRouter()


async def _build_timetable_response(
    db: AsyncSession,
    student_id: uuid.UUID | None,
    day: str | None,
    start_time: str | None,
    end_time: str | None,
    subject_id: uuid.UUID | None,
    teacher_id: uuid.UUID | None,
) -> TimetableResponse:
    if not student_id:
        raise BadRequestException("Student ID is required.")

    student = await get_student_service().get_student(db, student_id)
    timetable, slots = await get_timetable_service().get_student_timetable(
        db,
        student,
        day=day,
        start_time=start_time,
        end_time=end_time,
        subject_id=subject_id,
        teacher_id=teacher_id,
    )

    views = [format_slot(slot) for slot in slots]
    return TimetableResponse(
        message="Timetable fetched successfully",
        timetable_name=timetable.name,
        data=views,
        days=group_by_day(views),
    )


@router.get(
    "/time-table/{student_id}",
    response_model=TimetableResponse,
    responses=error_responses(400, 401, 403, 404),
)
@require_role(Role.PARENT, *STAFF_ROLES)
async def get_timetable_for_child(
    student_id: uuid.UUID,
    day: str | None = Query(None, description="Weekday, e.g. MONDAY"),
    start_time: str | None = Query(None, alias="startTime", pattern=r"^\d{2}:\d{2}$"),
    end_time: str | None = Query(None, alias="endTime", pattern=r"^\d{2}:\d{2}$"),
    subject_id: uuid.UUID | None = Query(None, alias="subjectId"),
    teacher_id: uuid.UUID | None = Query(None, alias="teacherId"),
    db: AsyncSession = Depends(get_db),
):
    """Get the active timetable of a student's class.

    Slots are returned flat in `data` and grouped per weekday in `days`,
    ordered by start time.
    """
    return await _build_timetable_response(
        db, student_id, day, start_time, end_time, subject_id, teacher_id
    )


@router.get(
    "/time-table",
    response_model=TimetableResponse,
    responses=error_responses(400, 401, 403, 404),
)
@require_role(Role.PARENT, *STAFF_ROLES)
async def get_timetable(
    student_id: uuid.UUID | None = Query(None, alias="studentId"),
    day: str | None = Query(None, description="Weekday, e.g. MONDAY"),
    start_time: str | None = Query(None, alias="startTime", pattern=r"^\d{2}:\d{2}$"),
    end_time: str | None = Query(None, alias="endTime", pattern=r"^\d{2}:\d{2}$"),
    subject_id: uuid.UUID | None = Query(None, alias="subjectId"),
    teacher_id: uuid.UUID | None = Query(None, alias="teacherId"),
    db: AsyncSession = Depends(get_db),
):
    """Same as the path form, with the student given as a query parameter."""
    return await _build_timetable_response(
        db, student_id, day, start_time, end_time, subject_id, teacher_id
    )
