"""SQLAlchemy models for EduTrack."""

from app.models.base import (
    ApprovalStatus,
    Base,
    BaseModel,
    SchoolScopedModel,
    TimestampMixin,
)
from app.models.school import AcademicYear, Grade, Holiday, Room, School, Term
from app.models.user import Principal, Role, Teacher, User
from app.models.school_class import SchoolClass
from app.models.student import Student
from app.models.academic import (
    Assignment,
    AssignmentSubmission,
    AssignmentType,
    Exam,
    ExamQuestion,
    Lesson,
    Result,
    Subject,
)
from app.models.timetable import Day, Timetable, TimetableSlot, timetable_classes
from app.models.attendance import Attendance
from app.models.fee import (
    FeeBreakdownItem,
    FeeFrequency,
    FeeStructure,
    Payment,
    PaymentStatus,
    StudentFeeOverride,
)
from app.models.event import Announcement, Event, EventRSVP, RSVPStatus
from app.models.message import Chat, Message, chat_participants
from app.models.notification import Notification, NotificationType

__all__ = [
    # Base
    "Base",
    "BaseModel",
    "SchoolScopedModel",
    "TimestampMixin",
    "ApprovalStatus",
    # School
    "School",
    "Grade",
    "AcademicYear",
    "Term",
    "Room",
    "Holiday",
    # User
    "User",
    "Role",
    "Teacher",
    "Principal",
    # Class and student
    "SchoolClass",
    "Student",
    # Academic
    "Subject",
    "Lesson",
    "Assignment",
    "AssignmentSubmission",
    "AssignmentType",
    "Exam",
    "ExamQuestion",
    "Result",
    # Timetable
    "Day",
    "Timetable",
    "TimetableSlot",
    "timetable_classes",
    # Attendance
    "Attendance",
    # Fees
    "FeeStructure",
    "FeeBreakdownItem",
    "FeeFrequency",
    "StudentFeeOverride",
    "Payment",
    "PaymentStatus",
    # Events
    "Event",
    "EventRSVP",
    "RSVPStatus",
    "Announcement",
    # Messaging
    "Chat",
    "Message",
    "chat_participants",
    # Notification
    "Notification",
    "NotificationType",
]
