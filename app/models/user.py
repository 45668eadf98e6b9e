"""User model with role-based access control, plus staff profiles."""

import uuid
from datetime import date, datetime
from enum import Enum

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import ApprovalStatus, BaseModel, SchoolScopedModel


class Role(str, Enum):
    """User roles."""

    SUPER_ADMIN = "SUPER_ADMIN"  # Platform-wide admin (no school)
    SCHOOL_ADMIN = "SCHOOL_ADMIN"
    PRINCIPAL = "PRINCIPAL"
    TEACHER = "TEACHER"
    PARENT = "PARENT"  # Read-only access to own children, may span schools


class User(BaseModel):
    """User account with role-based access."""

    __tablename__ = "users"
    __table_args__ = (
        Index("idx_users_school_role", "school_id", "role"),
    )

    school_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("schools.id", ondelete="SET NULL"),
        nullable=True,  # NULL for SUPER_ADMIN and PARENT
    )
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    surname: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    birthday: Mapped[date | None] = mapped_column(Date, nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    @property
    def full_name(self) -> str:
        """Get the user's full name."""
        return f"{self.name} {self.surname}"

    @property
    def is_parent(self) -> bool:
        """Check if user is a parent."""
        return self.role == Role.PARENT.value

    @property
    def is_super_admin(self) -> bool:
        """Check if user is a super admin."""
        return self.role == Role.SUPER_ADMIN.value


class Teacher(SchoolScopedModel):
    """Teaching staff profile linked one-to-one with a user account."""

    __tablename__ = "teachers"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    approval_status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ApprovalStatus.PENDING.value,
    )

    user = relationship("User", lazy="selectin")

    @property
    def full_name(self) -> str | None:
        return self.user.full_name if self.user else None


class Principal(SchoolScopedModel):
    """Principal profile linked one-to-one with a user account."""

    __tablename__ = "principals"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    approval_status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ApprovalStatus.PENDING.value,
    )

    user = relationship("User", lazy="selectin")
