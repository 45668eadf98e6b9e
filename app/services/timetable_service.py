"""Timetable lookup for a student's class."""

import logging
import uuid
from datetime import date
from itertools import groupby

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundException
from app.models import Lesson, SchoolClass, Student, Timetable, TimetableSlot
from app.models.timetable import Day
from app.schemas.timetable import TimetableDay, TimetableSlotView
from app.utils.calculations import duration_minutes

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"


def _day_order(day: str) -> int:
    try:
        return Day(day).order
    except ValueError:
        return len(Day)


def sort_slots(slots: list[TimetableSlot]) -> list[TimetableSlot]:
    """Order slots by weekday, then by start time."""
    return sorted(slots, key=lambda slot: (_day_order(slot.day), slot.start_time))


def format_slot(slot: TimetableSlot) -> TimetableSlotView:
    """Flatten a slot and its relations into the mobile view."""
    lesson = slot.lesson
    teacher_user = slot.teacher.user if slot.teacher else None

    return TimetableSlotView(
        id=slot.id,
        day=slot.day,
        period=slot.period,
        start_time=slot.start_time,
        end_time=slot.end_time,
        duration_minutes=duration_minutes(slot.start_time, slot.end_time),
        lesson_name=lesson.name if lesson else NOT_AVAILABLE,
        subject=lesson.subject.name if lesson and lesson.subject else NOT_AVAILABLE,
        teacher=teacher_user.full_name if teacher_user else NOT_AVAILABLE,
        room=slot.room.name if slot.room else NOT_AVAILABLE,
        is_active=slot.is_active,
        notes=slot.notes,
    )


def group_by_day(views: list[TimetableSlotView]) -> list[TimetableDay]:
    """Group already-sorted slot views into one entry per day."""
    return [
        TimetableDay(day=day, slots=list(slots))
        for day, slots in groupby(views, key=lambda view: view.day)
    ]


class TimetableService:
    """Service for reading the active timetable of a student's class."""

    async def get_active_timetable(
        self,
        db: AsyncSession,
        class_id: uuid.UUID,
        today: date | None = None,
    ) -> Timetable:
        """Get the timetable currently in effect for a class.

        Raises:
            NotFoundException: If no active timetable covers today
        """
        today = today or date.today()

        query = (
            select(Timetable)
            .where(
                Timetable.is_active.is_(True),
                Timetable.classes.any(SchoolClass.id == class_id),
                or_(Timetable.effective_from.is_(None), Timetable.effective_from <= today),
                or_(Timetable.effective_to.is_(None), Timetable.effective_to >= today),
            )
            .order_by(Timetable.effective_from.desc())
            .limit(1)
        )
        result = await db.execute(query)
        timetable = result.scalar_one_or_none()

        if not timetable:
            raise NotFoundException(
                "Timetable", "No active timetable found for this student's class."
            )

        return timetable

    async def get_student_timetable(
        self,
        db: AsyncSession,
        student: Student,
        day: str | None = None,
        start_time: str | None = None,
        end_time: str | None = None,
        subject_id: uuid.UUID | None = None,
        teacher_id: uuid.UUID | None = None,
    ) -> tuple[Timetable, list[TimetableSlot]]:
        """Get the active timetable of a student's class and its filtered slots.

        Returns:
            Tuple of (timetable, slots sorted by weekday and start time)

        Raises:
            NotFoundException: If the student has no class or the class no timetable
        """
        if not student.class_id:
            raise NotFoundException(
                "Class", "Student is not assigned to a class, no timetable available."
            )

        timetable = await self.get_active_timetable(db, student.class_id)

        query = select(TimetableSlot).where(TimetableSlot.timetable_id == timetable.id)

        if day:
            query = query.where(TimetableSlot.day == day.upper())
        if start_time:
            query = query.where(TimetableSlot.start_time >= start_time)
        if end_time:
            query = query.where(TimetableSlot.end_time <= end_time)
        if subject_id:
            query = query.join(Lesson, TimetableSlot.lesson_id == Lesson.id).where(
                Lesson.subject_id == subject_id
            )
        if teacher_id:
            query = query.where(TimetableSlot.teacher_id == teacher_id)

        result = await db.execute(query)
        slots = sort_slots(list(result.scalars().all()))

        logger.info(
            f"Timetable retrieved: student_id={student.id} timetable_id={timetable.id} slots={len(slots)}"
        )
        return timetable, slots


def get_timetable_service() -> TimetableService:
    """Get timetable service instance."""
    return TimetableService()
