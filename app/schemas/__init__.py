"""Pydantic schemas for request/response validation."""

from app.schemas.attendance import (
    AttendanceData,
    AttendanceFilter,
    AttendanceRecordView,
    AttendanceResponse,
    AttendanceSummary,
    DateRange,
)
from app.schemas.auth import CurrentUserResponse, LoginRequest, LoginResponse, UserInfo
from app.schemas.calendar import CalendarItem, CalendarItemType, CalendarResponse
from app.schemas.common import (
    BaseSchema,
    ErrorDetail,
    ErrorResponse,
    MessageResponse,
    PaginationMeta,
)
from app.schemas.notification import (
    MarkAllReadResponse,
    NotificationEnvelope,
    NotificationListResponse,
    NotificationView,
)
from app.schemas.parent import (
    AssignmentSummary,
    ChildDashboard,
    ChildProfile,
    ChildrenResponse,
    ClassSummary,
    FeeStatus,
    GradeSummary,
    HomeScreenResponse,
    OnboardingProfile,
    OnboardingProfileResponse,
    ParentProfile,
    SchoolSummary,
)
from app.schemas.school_class import (
    SchoolClassCreate,
    SchoolClassEnvelope,
    SchoolClassListResponse,
    SchoolClassResponse,
    SchoolClassUpdate,
)
from app.schemas.timetable import TimetableDay, TimetableResponse, TimetableSlotView

__all__ = [
    # Common
    "BaseSchema",
    "ErrorDetail",
    "ErrorResponse",
    "MessageResponse",
    "PaginationMeta",
    # Auth
    "LoginRequest",
    "LoginResponse",
    "CurrentUserResponse",
    "UserInfo",
    # Classes
    "SchoolClassCreate",
    "SchoolClassUpdate",
    "SchoolClassResponse",
    "SchoolClassListResponse",
    "SchoolClassEnvelope",
    # Timetable
    "TimetableSlotView",
    "TimetableDay",
    "TimetableResponse",
    # Attendance
    "AttendanceFilter",
    "AttendanceSummary",
    "AttendanceRecordView",
    "AttendanceData",
    "AttendanceResponse",
    "DateRange",
    # Calendar
    "CalendarItem",
    "CalendarItemType",
    "CalendarResponse",
    # Parent
    "SchoolSummary",
    "ClassSummary",
    "GradeSummary",
    "ChildProfile",
    "ChildrenResponse",
    "AssignmentSummary",
    "FeeStatus",
    "ChildDashboard",
    "ParentProfile",
    "HomeScreenResponse",
    "OnboardingProfile",
    "OnboardingProfileResponse",
    # Notifications
    "NotificationView",
    "NotificationListResponse",
    "NotificationEnvelope",
    "MarkAllReadResponse",
]
