"""Service layer for business logic."""

from app.services.attendance_service import AttendanceService, get_attendance_service
from app.services.auth_service import AuthService, get_auth_service
from app.services.calendar_service import AcademicCalendarService, get_calendar_service
from app.services.class_service import ClassService, get_class_service
from app.services.fee_service import FeeService, get_fee_service
from app.services.notification_service import NotificationService, get_notification_service
from app.services.parent_service import ParentService, get_parent_service
from app.services.student_service import StudentService, get_student_service
from app.services.timetable_service import TimetableService, get_timetable_service

__all__ = [
    "AuthService",
    "get_auth_service",
    "StudentService",
    "get_student_service",
    "ClassService",
    "get_class_service",
    "TimetableService",
    "get_timetable_service",
    "AttendanceService",
    "get_attendance_service",
    "AcademicCalendarService",
    "get_calendar_service",
    "FeeService",
    "get_fee_service",
    "ParentService",
    "get_parent_service",
    "NotificationService",
    "get_notification_service",
]
