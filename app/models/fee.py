"""Fee models: fee structures, their breakdown items, overrides and payments."""

import uuid
from datetime import datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel, SchoolScopedModel


class PaymentStatus(str, Enum):
    """Payment lifecycle status."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class FeeFrequency(str, Enum):
    """How often a recurring fee item is billed."""

    MONTHLY = "MONTHLY"
    TERMLY = "TERMLY"
    ANNUALLY = "ANNUALLY"


class FeeStructure(SchoolScopedModel):
    """The set of fees a school charges for an academic year."""

    __tablename__ = "fee_structures"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    academic_year_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("academic_years.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


class FeeBreakdownItem(BaseModel):
    """A single line of a fee structure, either one-time or recurring."""

    __tablename__ = "fee_breakdown_items"

    fee_structure_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("fee_structures.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    is_recurring: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    frequency: Mapped[str | None] = mapped_column(String(20), nullable=True)


class StudentFeeOverride(BaseModel):
    """Per-student exemption or amount override for a breakdown item."""

    __tablename__ = "student_fee_overrides"
    __table_args__ = (
        UniqueConstraint("item_id", "student_id", name="uq_fee_overrides_item_student"),
    )

    item_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("fee_breakdown_items.id", ondelete="CASCADE"),
        nullable=False,
    )
    student_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    is_exempt: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    override_amount: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True
    )
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)


class Payment(BaseModel):
    """A payment made by a parent against a fee structure."""

    __tablename__ = "payments"
    __table_args__ = (
        Index("idx_payments_parent_status", "parent_id", "status"),
    )

    fee_structure_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("fee_structures.id", ondelete="CASCADE"),
        nullable=False,
    )
    parent_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    student_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("students.id", ondelete="SET NULL"),
        nullable=True,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=PaymentStatus.PENDING.value,
    )
    payment_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    reference: Mapped[str | None] = mapped_column(String(100), nullable=True)
