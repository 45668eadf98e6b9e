"""Mobile academic calendar endpoint."""

import uuid
from datetime import date, timedelta

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.models.user import Role
from app.schemas.calendar import CalendarResponse
from app.schemas.common import error_responses
from app.services.calendar_service import get_calendar_service, parse_types
from app.utils.permissions import STAFF_ROLES, require_role

router = APIRouter()


@router.get(
    "/academic-calendar",
    response_model=CalendarResponse,
    responses=error_responses(400, 401, 403, 404),
)
@require_role(Role.PARENT, *STAFF_ROLES)
async def get_academic_calendar(
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    types: str | None = Query(
        None, description="Comma-separated subset of EXAM, HOLIDAY, EVENT, ASSIGNMENT"
    ),
    school_id: uuid.UUID | None = Query(None, alias="schoolId"),
    student_id: uuid.UUID | None = Query(None, alias="studentId"),
    db: AsyncSession = Depends(get_db),
):
    """Get exams, holidays, events and assignments of a school, ordered by date."""
    start_date = start_date or date.today()
    end_date = end_date or start_date + timedelta(days=settings.calendar_default_range_days)

    service = get_calendar_service()
    resolved_school_id = await service.resolve_school_id(db, school_id, student_id)
    items = await service.get_calendar(
        db, resolved_school_id, start_date, end_date, parse_types(types)
    )

    return CalendarResponse(
        message="Academic calendar events retrieved successfully",
        start_date=start_date,
        end_date=end_date,
        events=items,
    )
