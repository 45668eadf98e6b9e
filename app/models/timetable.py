"""Timetable models: a weekly schedule of lesson slots shared by classes."""

import uuid
from datetime import date
from enum import Enum

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, BaseModel, SchoolScopedModel


class Day(str, Enum):
    """Weekdays a slot can fall on, in week order."""

    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"

    @property
    def order(self) -> int:
        return list(Day).index(self)


timetable_classes = Table(
    "timetable_classes",
    Base.metadata,
    Column(
        "timetable_id",
        UUID(as_uuid=True),
        ForeignKey("timetables.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "class_id",
        UUID(as_uuid=True),
        ForeignKey("classes.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Timetable(SchoolScopedModel):
    """A named timetable applied to one or more classes."""

    __tablename__ = "timetables"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    effective_from: Mapped[date | None] = mapped_column(Date, nullable=True)
    effective_to: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Relationships
    classes = relationship("SchoolClass", secondary=timetable_classes, lazy="raise")


class TimetableSlot(BaseModel):
    """One lesson occurrence in a timetable. Times are zero-padded "HH:MM"."""

    __tablename__ = "timetable_slots"
    __table_args__ = (
        Index("idx_slots_timetable_active", "timetable_id", "is_active"),
    )

    timetable_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("timetables.id", ondelete="CASCADE"),
        nullable=False,
    )
    day: Mapped[str] = mapped_column(String(10), nullable=False)
    period: Mapped[int | None] = mapped_column(Integer, nullable=True)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    lesson_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("lessons.id", ondelete="SET NULL"),
        nullable=True,
    )
    teacher_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("teachers.id", ondelete="SET NULL"),
        nullable=True,
    )
    room_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("rooms.id", ondelete="SET NULL"),
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    lesson = relationship("Lesson", lazy="selectin")
    teacher = relationship("Teacher", lazy="selectin")
    room = relationship("Room", lazy="selectin")
