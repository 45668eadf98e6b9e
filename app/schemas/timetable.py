"""Pydantic schemas for the mobile timetable view."""

import uuid

from app.schemas.common import BaseSchema


class TimetableSlotView(BaseSchema):
    """One formatted timetable slot. Missing relations render as "N/A"."""

    id: uuid.UUID
    day: str
    period: int | None = None
    start_time: str
    end_time: str
    duration_minutes: int
    lesson_name: str
    subject: str
    teacher: str
    room: str
    is_active: bool
    notes: str | None = None


class TimetableDay(BaseSchema):
    """Slots of a single weekday, ordered by start time."""

    day: str
    slots: list[TimetableSlotView]


class TimetableResponse(BaseSchema):
    message: str
    timetable_name: str
    data: list[TimetableSlotView]
    days: list[TimetableDay]
