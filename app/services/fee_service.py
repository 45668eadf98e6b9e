"""Fee status of a student, derived from the active fee structures and payments."""

import logging
import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import (
    AcademicYear,
    FeeBreakdownItem,
    FeeStructure,
    Payment,
    Student,
    StudentFeeOverride,
)
from app.models.fee import PaymentStatus
from app.schemas.parent import FeeStatus

logger = logging.getLogger(__name__)

STATUS_OUTSTANDING = "Outstanding"
STATUS_UP_TO_DATE = "Up-to-date"
STATUS_UNAVAILABLE = "Unavailable"


def item_amount(item: FeeBreakdownItem, override: StudentFeeOverride | None) -> Decimal:
    """Amount a student owes for one item: 0 if exempt, else override or list price."""
    if override is not None:
        if override.is_exempt:
            return Decimal("0")
        if override.override_amount is not None:
            return Decimal(override.override_amount)
    return Decimal(item.amount)


def is_item_outstanding(
    item: FeeBreakdownItem,
    last_payment: datetime | None,
    today: date,
) -> bool:
    """Whether an item is still owed given the latest completed payment.

    Recurring items with a billing frequency need a payment in the current
    calendar month; any other item is settled by any payment.
    """
    if last_payment is None:
        return True
    if item.is_recurring and item.frequency:
        return (last_payment.year, last_payment.month) != (today.year, today.month)
    return False


def compute_fee_status(
    items: list[FeeBreakdownItem],
    overrides: dict[uuid.UUID, StudentFeeOverride],
    last_payments: dict[uuid.UUID, datetime],
    today: date,
) -> FeeStatus:
    """Fold breakdown items into an overall fee status.

    Args:
        items: Breakdown items of the active fee structures
        overrides: The student's overrides keyed by item ID
        last_payments: Latest completed payment date keyed by fee structure ID
        today: Reference date for the current month
    """
    outstanding = Decimal("0")
    for item in items:
        if is_item_outstanding(item, last_payments.get(item.fee_structure_id), today):
            outstanding += item_amount(item, overrides.get(item.id))

    return FeeStatus(
        status=STATUS_OUTSTANDING if outstanding > 0 else STATUS_UP_TO_DATE,
        outstanding_amount=float(outstanding),
        last_payment_date=max(last_payments.values(), default=None),
    )


class FeeService:
    """Service for computing a student's fee position."""

    async def get_fee_status(
        self,
        db: AsyncSession,
        student: Student,
        parent_id: uuid.UUID,
        today: date | None = None,
    ) -> FeeStatus:
        """Get the fee status of a student as seen by their parent.

        A database failure is reported as status "Unavailable" instead of
        failing the whole request.
        """
        today = today or date.today()
        try:
            # Savepoint keeps the outer transaction usable after a failure
            async with db.begin_nested():
                return await self._load_fee_status(db, student, parent_id, today)
        except SQLAlchemyError as e:
            logger.warning(f"Fee status unavailable for student {student.id}: {e}")
            return FeeStatus(status=STATUS_UNAVAILABLE, outstanding_amount=None)

    async def _load_fee_status(
        self,
        db: AsyncSession,
        student: Student,
        parent_id: uuid.UUID,
        today: date,
    ) -> FeeStatus:
        result = await db.execute(
            select(AcademicYear)
            .where(
                AcademicYear.school_id == student.school_id,
                AcademicYear.is_active.is_(True),
            )
            .order_by(AcademicYear.start_date.desc())
            .limit(1)
        )
        academic_year = result.scalar_one_or_none()
        if not academic_year:
            return FeeStatus(status=STATUS_UP_TO_DATE, outstanding_amount=0.0)

        result = await db.execute(
            select(FeeStructure.id).where(
                FeeStructure.school_id == student.school_id,
                FeeStructure.academic_year_id == academic_year.id,
            )
        )
        structure_ids = list(result.scalars().all())
        if not structure_ids:
            return FeeStatus(status=STATUS_UP_TO_DATE, outstanding_amount=0.0)

        result = await db.execute(
            select(FeeBreakdownItem).where(FeeBreakdownItem.fee_structure_id.in_(structure_ids))
        )
        items = list(result.scalars().all())

        overrides: dict[uuid.UUID, StudentFeeOverride] = {}
        if items:
            result = await db.execute(
                select(StudentFeeOverride).where(
                    StudentFeeOverride.student_id == student.id,
                    StudentFeeOverride.item_id.in_([item.id for item in items]),
                )
            )
            overrides = {override.item_id: override for override in result.scalars().all()}

        # Newest first, so the first payment seen per structure is the latest
        result = await db.execute(
            select(Payment)
            .where(
                Payment.parent_id == parent_id,
                Payment.status == PaymentStatus.COMPLETED.value,
                Payment.fee_structure_id.in_(structure_ids),
                or_(Payment.student_id.is_(None), Payment.student_id == student.id),
            )
            .order_by(Payment.payment_date.desc())
        )
        last_payments: dict[uuid.UUID, datetime] = {}
        for payment in result.scalars().all():
            last_payments.setdefault(payment.fee_structure_id, payment.payment_date)

        return compute_fee_status(items, overrides, last_payments, today)


def get_fee_service() -> FeeService:
    """Get fee service instance."""
    return FeeService()
