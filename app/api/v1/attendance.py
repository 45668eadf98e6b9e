"""Mobile attendance endpoints."""

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.exceptions import BadRequestException
from app.models.user import Role
from app.schemas.attendance import AttendanceResponse
from app.schemas.common import error_responses
from app.services.attendance_service import get_attendance_service
from app.utils.permissions import STAFF_ROLES, require_role

router = APIRouter()


@router.get(
    "/attendance-record",
    response_model=AttendanceResponse,
    responses=error_responses(400, 401, 403, 404),
)
@require_role(Role.PARENT, *STAFF_ROLES)
async def get_attendance_record(
    student_id: uuid.UUID | None = Query(None, alias="studentId"),
    filter_type: str | None = Query(None, alias="filterType", description="WEEK, MONTH or TERM"),
    term_id: uuid.UUID | None = Query(None, alias="termId"),
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    subject_id: uuid.UUID | None = Query(None, alias="subjectId"),
    db: AsyncSession = Depends(get_db),
):
    """Get a student's attendance over a window.

    Explicit startDate/endDate win over filterType. A lone startDate or
    endDate spans 7 days. Without dates the current week is used unless
    filterType says MONTH or TERM.
    """
    if not student_id:
        raise BadRequestException("Student ID is required.")

    service = get_attendance_service()
    data = await service.get_student_attendance(
        db,
        student_id,
        filter_type=filter_type,
        term_id=term_id,
        start_date=start_date,
        end_date=end_date,
        subject_id=subject_id,
    )

    return AttendanceResponse(message="Attendance records retrieved successfully", data=data)
