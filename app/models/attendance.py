"""Attendance model."""

import datetime
import uuid

from sqlalchemy import Boolean, Date, ForeignKey, Index, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel


class Attendance(BaseModel):
    """Presence of one student at one lesson on one date."""

    __tablename__ = "attendances"
    __table_args__ = (
        UniqueConstraint(
            "student_id", "lesson_id", "date", name="uq_attendance_student_lesson_date"
        ),
        Index("idx_attendance_student_date", "student_id", "date"),
    )

    student_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
    )
    lesson_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("lessons.id", ondelete="SET NULL"),
        nullable=True,
    )
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    present: Mapped[bool] = mapped_column(Boolean, nullable=False)

    # Relationships
    lesson = relationship("Lesson", lazy="selectin")

    @property
    def status(self) -> str:
        return "Present" if self.present else "Absent"
