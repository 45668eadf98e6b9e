"""Student model."""

import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, Index, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import SchoolScopedModel
from app.utils.calculations import calculate_age


class Student(SchoolScopedModel):
    """A student enrolled in a school, optionally placed in a class."""

    __tablename__ = "students"
    __table_args__ = (
        Index("idx_students_parent", "parent_id"),
        Index("idx_students_class", "class_id"),
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    surname: Mapped[str] = mapped_column(String(100), nullable=False)
    birthday: Mapped[date | None] = mapped_column(Date, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    registration_number: Mapped[str | None] = mapped_column(
        String(50), unique=True, nullable=True
    )
    class_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("classes.id", ondelete="SET NULL"),
        nullable=True,
    )
    grade_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("grades.id", ondelete="SET NULL"),
        nullable=True,
    )
    parent_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Relationships
    school = relationship("School", lazy="selectin")
    school_class = relationship("SchoolClass", lazy="selectin")
    grade = relationship("Grade", lazy="selectin")

    @property
    def full_name(self) -> str:
        """Get the student's full name."""
        return f"{self.name} {self.surname}"

    @property
    def age(self) -> int | None:
        """Age in whole years, or None when the birthday is unknown."""
        return calculate_age(self.birthday)
