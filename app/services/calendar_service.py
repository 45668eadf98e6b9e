"""Academic calendar: exams, holidays, events and assignments in one timeline."""

import logging
import uuid
from datetime import date, datetime, time, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import BadRequestException, ForbiddenException
from app.models import Assignment, Event, Exam, Holiday
from app.models.user import Role
from app.schemas.calendar import CalendarItem, CalendarItemType
from app.services.student_service import get_student_service
from app.utils.tenant_context import get_current_user_role, get_school_id_or_none

logger = logging.getLogger(__name__)

TYPE_ALIASES = {"EXAMINATION": CalendarItemType.EXAM.value}


def parse_types(raw: str | None) -> list[CalendarItemType]:
    """Parse a comma-separated list of calendar types.

    Unknown names are ignored; an empty or missing value selects every type.
    """
    if not raw or not raw.strip():
        return list(CalendarItemType)

    selected: list[CalendarItemType] = []
    for name in raw.split(","):
        name = name.strip().upper()
        name = TYPE_ALIASES.get(name, name)
        try:
            item_type = CalendarItemType(name)
        except ValueError:
            logger.debug(f"Ignoring unknown calendar type: {name}")
            continue
        if item_type not in selected:
            selected.append(item_type)
    return selected


def merge_items(*groups: list[CalendarItem]) -> list[CalendarItem]:
    """Concatenate per-type lists and order them by date."""
    items = [item for group in groups for item in group]
    return sorted(items, key=lambda item: item.date)


class AcademicCalendarService:
    """Service for building a school's academic calendar."""

    async def resolve_school_id(
        self,
        db: AsyncSession,
        school_id: uuid.UUID | None = None,
        student_id: uuid.UUID | None = None,
    ) -> uuid.UUID:
        """Pick the school whose calendar to show.

        Order: explicit schoolId, then the caller's school, then the school
        of the given student.

        Raises:
            BadRequestException: If no school can be determined
            ForbiddenException: If a school-bound caller asks for another school
        """
        caller_school_id = get_school_id_or_none()
        is_platform_wide = get_current_user_role() in (Role.SUPER_ADMIN.value, Role.PARENT.value)

        if school_id:
            if caller_school_id and not is_platform_wide and school_id != caller_school_id:
                raise ForbiddenException("You can only view your own school's calendar")
            return school_id

        if caller_school_id:
            return caller_school_id

        if student_id:
            student = await get_student_service().get_student(db, student_id)
            return student.school_id

        raise BadRequestException("School ID is required. Provide schoolId or studentId.")

    async def get_calendar(
        self,
        db: AsyncSession,
        school_id: uuid.UUID,
        start_date: date,
        end_date: date,
        types: list[CalendarItemType],
    ) -> list[CalendarItem]:
        """Get all requested calendar items of a school within a date range."""
        if start_date > end_date:
            raise BadRequestException("startDate must be on or before endDate.")

        groups = []
        # Queries run one after another on the same session
        if CalendarItemType.EXAM in types:
            groups.append(await self._get_exams(db, school_id, start_date, end_date))
        if CalendarItemType.HOLIDAY in types:
            groups.append(await self._get_holidays(db, school_id, start_date, end_date))
        if CalendarItemType.EVENT in types:
            groups.append(await self._get_events(db, school_id, start_date, end_date))
        if CalendarItemType.ASSIGNMENT in types:
            groups.append(await self._get_assignments(db, school_id, start_date, end_date))

        items = merge_items(*groups)
        logger.info(
            f"Academic calendar retrieved: school_id={school_id} start={start_date} "
            f"end={end_date} types={[t.value for t in types]} items={len(items)}"
        )
        return items

    async def _get_exams(
        self, db: AsyncSession, school_id: uuid.UUID, start_date: date, end_date: date
    ) -> list[CalendarItem]:
        result = await db.execute(
            select(Exam).where(
                Exam.school_id == school_id,
                Exam.start_date >= start_date,
                Exam.start_date <= end_date,
            )
        )
        return [
            CalendarItem(
                id=exam.id,
                type=CalendarItemType.EXAM,
                title=exam.title,
                date=exam.start_date,
                description=exam.description,
            )
            for exam in result.scalars().all()
        ]

    async def _get_holidays(
        self, db: AsyncSession, school_id: uuid.UUID, start_date: date, end_date: date
    ) -> list[CalendarItem]:
        result = await db.execute(
            select(Holiday).where(
                Holiday.school_id == school_id,
                Holiday.start_date >= start_date,
                Holiday.start_date <= end_date,
            )
        )
        return [
            CalendarItem(
                id=holiday.id,
                type=CalendarItemType.HOLIDAY,
                title=holiday.name,
                date=holiday.start_date,
                description=holiday.description,
            )
            for holiday in result.scalars().all()
        ]

    async def _get_events(
        self, db: AsyncSession, school_id: uuid.UUID, start_date: date, end_date: date
    ) -> list[CalendarItem]:
        window_start = datetime.combine(start_date, time.min, tzinfo=timezone.utc)
        window_end = datetime.combine(end_date, time.max, tzinfo=timezone.utc)

        result = await db.execute(
            select(Event).where(
                Event.school_id == school_id,
                Event.start_time >= window_start,
                Event.start_time <= window_end,
            )
        )
        return [
            CalendarItem(
                id=event.id,
                type=CalendarItemType.EVENT,
                title=event.title,
                date=event.start_time.date(),
                description=event.description,
            )
            for event in result.scalars().all()
        ]

    async def _get_assignments(
        self, db: AsyncSession, school_id: uuid.UUID, start_date: date, end_date: date
    ) -> list[CalendarItem]:
        result = await db.execute(
            select(Assignment).where(
                Assignment.school_id == school_id,
                Assignment.due_date >= start_date,
                Assignment.due_date <= end_date,
            )
        )
        return [
            CalendarItem(
                id=assignment.id,
                type=CalendarItemType.ASSIGNMENT,
                title=assignment.title,
                date=assignment.due_date,
                description=assignment.description,
                subject=assignment.subject.name if assignment.subject else None,
                class_name=assignment.school_class.name if assignment.school_class else None,
            )
            for assignment in result.scalars().all()
        ]


def get_calendar_service() -> AcademicCalendarService:
    """Get academic calendar service instance."""
    return AcademicCalendarService()
