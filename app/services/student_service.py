"""Student lookup with caller-based visibility rules."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ForbiddenException, NotFoundException
from app.models import Student
from app.models.user import Role
from app.utils.tenant_context import (
    get_current_user_id_or_none,
    get_current_user_role,
    get_school_id_or_none,
)

logger = logging.getLogger(__name__)


class StudentService:
    """Service for resolving students on behalf of the current caller."""

    async def get_student(self, db: AsyncSession, student_id: uuid.UUID) -> Student:
        """Get a student the current caller is allowed to see.

        Parents only see their own children. Callers bound to a school only
        see that school's students; anyone else's read as not found.

        Raises:
            NotFoundException: If the student does not exist or is out of scope
            ForbiddenException: If a parent asks for someone else's child
        """
        result = await db.execute(select(Student).where(Student.id == student_id))
        student = result.scalar_one_or_none()

        if not student:
            raise NotFoundException("Student", "Student not found.")

        role = get_current_user_role()
        if role == Role.PARENT.value:
            if student.parent_id != get_current_user_id_or_none():
                logger.warning(
                    f"Parent {get_current_user_id_or_none()} denied access to student {student_id}"
                )
                raise ForbiddenException("Access denied. You can only view your own children.")
        elif role != Role.SUPER_ADMIN.value:
            school_id = get_school_id_or_none()
            if school_id is not None and student.school_id != school_id:
                raise NotFoundException("Student", "Student not found.")

        return student


def get_student_service() -> StudentService:
    """Get student service instance."""
    return StudentService()
