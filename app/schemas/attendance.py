"""Pydantic schemas for attendance records and summaries."""

import uuid
from datetime import date
from enum import Enum

from app.schemas.common import BaseSchema


class AttendanceFilter(str, Enum):
    """Preset attendance windows."""

    WEEK = "WEEK"
    MONTH = "MONTH"
    TERM = "TERM"


class AttendanceSummary(BaseSchema):
    """Counts over a window. The rate is a percentage rounded to 2 decimals."""

    total_days: int
    present_days: int
    absent_days: int
    attendance_rate: float


class DateRange(BaseSchema):
    start_date: date
    end_date: date


class AttendanceRecordView(BaseSchema):
    id: uuid.UUID
    date: date
    status: str
    present: bool
    subject: str | None = None
    teacher: str | None = None


class AttendanceData(BaseSchema):
    student_name: str
    filter: str
    date_range: DateRange
    summary: AttendanceSummary
    records: list[AttendanceRecordView]


class AttendanceResponse(BaseSchema):
    message: str
    data: AttendanceData
