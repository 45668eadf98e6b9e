"""Attendance records and summaries for a student."""

import logging
import uuid
from datetime import date, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import BadRequestException, NotFoundException
from app.models import Attendance, Lesson, Term
from app.schemas.attendance import (
    AttendanceData,
    AttendanceFilter,
    AttendanceRecordView,
    AttendanceSummary,
    DateRange,
)
from app.services.student_service import get_student_service
from app.utils.calculations import month_range, percentage, week_range

logger = logging.getLogger(__name__)

# Span used when only one end of an explicit window is given
DEFAULT_WINDOW_DAYS = 7
CUSTOM_FILTER = "CUSTOM"


def parse_filter(filter_type: str | None) -> AttendanceFilter:
    """Parse a filterType query value, defaulting to WEEK."""
    if not filter_type:
        return AttendanceFilter.WEEK
    try:
        return AttendanceFilter(filter_type.upper())
    except ValueError:
        raise BadRequestException("Invalid filter type. Use WEEK, MONTH or TERM.")


def explicit_window(
    start_date: date | None,
    end_date: date | None,
) -> tuple[date, date] | None:
    """Window from explicit dates, or None when neither is given.

    A lone start date spans the following 7 days; a lone end date the
    preceding 7 days.
    """
    if start_date and end_date:
        window = (start_date, end_date)
    elif start_date:
        window = (start_date, start_date + timedelta(days=DEFAULT_WINDOW_DAYS))
    elif end_date:
        window = (end_date - timedelta(days=DEFAULT_WINDOW_DAYS), end_date)
    else:
        return None

    if window[0] > window[1]:
        raise BadRequestException("startDate must be on or before endDate.")
    return window


def build_summary(present_days: int, absent_days: int) -> AttendanceSummary:
    total_days = present_days + absent_days
    return AttendanceSummary(
        total_days=total_days,
        present_days=present_days,
        absent_days=absent_days,
        attendance_rate=percentage(present_days, total_days),
    )


def format_record(record: Attendance) -> AttendanceRecordView:
    lesson = record.lesson
    teacher = lesson.teacher if lesson else None

    return AttendanceRecordView(
        id=record.id,
        date=record.date,
        status=record.status,
        present=record.present,
        subject=lesson.subject.name if lesson and lesson.subject else None,
        teacher=teacher.full_name if teacher else None,
    )


class AttendanceService:
    """Service for reading attendance."""

    async def get_student_attendance(
        self,
        db: AsyncSession,
        student_id: uuid.UUID,
        filter_type: str | None = None,
        term_id: uuid.UUID | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        subject_id: uuid.UUID | None = None,
        today: date | None = None,
    ) -> AttendanceData:
        """Get a student's attendance records and summary over a window.

        Explicit dates take precedence over filterType.

        Raises:
            BadRequestException: For an unknown filter, an inverted window or
                a TERM filter without termId
            NotFoundException: If the student or term does not exist
        """
        today = today or date.today()
        selected = parse_filter(filter_type)
        window = explicit_window(start_date, end_date)

        if window is None and selected == AttendanceFilter.TERM and not term_id:
            raise BadRequestException("Term ID is required for term filter.")

        student = await get_student_service().get_student(db, student_id)

        if window is not None:
            label = CUSTOM_FILTER
        elif selected == AttendanceFilter.TERM:
            term = await db.get(Term, term_id)
            if not term:
                raise NotFoundException("Term", "Term not found.")
            window = (term.start_date, term.end_date)
            label = selected.value
        elif selected == AttendanceFilter.MONTH:
            window = month_range(today)
            label = selected.value
        else:
            window = week_range(today)
            label = selected.value

        records = await self.get_records(db, student.id, window[0], window[1], subject_id)
        present_days = sum(1 for record in records if record.present)

        logger.info(
            f"Attendance retrieved: student_id={student.id} filter={label} "
            f"start={window[0]} end={window[1]} records={len(records)}"
        )
        return AttendanceData(
            student_name=student.full_name,
            filter=label,
            date_range=DateRange(start_date=window[0], end_date=window[1]),
            summary=build_summary(present_days, len(records) - present_days),
            records=[format_record(record) for record in records],
        )

    async def get_records(
        self,
        db: AsyncSession,
        student_id: uuid.UUID,
        start_date: date,
        end_date: date,
        subject_id: uuid.UUID | None = None,
    ) -> list[Attendance]:
        """Get a student's attendance rows in an inclusive date range."""
        query = select(Attendance).where(
            Attendance.student_id == student_id,
            Attendance.date >= start_date,
            Attendance.date <= end_date,
        )

        if subject_id:
            query = query.join(Lesson, Attendance.lesson_id == Lesson.id).where(
                Lesson.subject_id == subject_id
            )

        query = query.order_by(Attendance.date)

        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_summary(
        self,
        db: AsyncSession,
        student_id: uuid.UUID,
        days: int,
        today: date | None = None,
    ) -> AttendanceSummary:
        """Presence counts over the last `days` days, today included."""
        today = today or date.today()

        query = (
            select(Attendance.present, func.count())
            .where(
                Attendance.student_id == student_id,
                Attendance.date >= today - timedelta(days=days),
                Attendance.date <= today,
            )
            .group_by(Attendance.present)
        )
        result = await db.execute(query)
        counts = {bool(present): count for present, count in result.all()}

        return build_summary(counts.get(True, 0), counts.get(False, 0))


def get_attendance_service() -> AttendanceService:
    """Get attendance service instance."""
    return AttendanceService()
