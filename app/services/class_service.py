"""School class service for CRUD operations."""

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import (
    BadRequestException,
    ConflictException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from app.models import Grade, School, SchoolClass, Teacher
from app.models.user import Role
from app.schemas.school_class import SchoolClassCreate, SchoolClassUpdate
from app.utils.tenant_context import (
    get_current_user_id_or_none,
    get_current_user_role,
    get_school_id_or_none,
)

logger = logging.getLogger(__name__)


def _caller_school_id() -> uuid.UUID | None:
    """School the caller is restricted to, or None for platform-wide callers."""
    if get_current_user_role() == Role.SUPER_ADMIN.value:
        return None
    return get_school_id_or_none()


class ClassService:
    """Service for managing school classes."""

    async def get_classes(
        self,
        db: AsyncSession,
        school_id: uuid.UUID | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[SchoolClass], int]:
        """Get a page of classes, optionally for one school."""
        query = select(SchoolClass)

        caller_school_id = _caller_school_id()
        if caller_school_id is not None:
            query = query.where(SchoolClass.school_id == caller_school_id)
        if school_id:
            query = query.where(SchoolClass.school_id == school_id)

        # Get total count
        count_query = select(func.count()).select_from(query.subquery())
        total = (await db.execute(count_query)).scalar() or 0

        # Apply pagination
        query = query.order_by(SchoolClass.name)
        query = query.offset((page - 1) * limit).limit(limit)

        result = await db.execute(query)
        classes = list(result.scalars().all())

        logger.info(
            f"Classes retrieved: user_id={get_current_user_id_or_none()} page={page} limit={limit} total={total}"
        )
        return classes, total

    async def get_class(
        self,
        db: AsyncSession,
        class_id: uuid.UUID,
    ) -> SchoolClass:
        """Get a single class by ID."""
        query = select(SchoolClass).where(SchoolClass.id == class_id)

        caller_school_id = _caller_school_id()
        if caller_school_id is not None:
            query = query.where(SchoolClass.school_id == caller_school_id)

        result = await db.execute(query)
        school_class = result.scalar_one_or_none()

        if not school_class:
            raise NotFoundException("Class")

        return school_class

    async def create_class(
        self,
        db: AsyncSession,
        data: SchoolClassCreate,
    ) -> SchoolClass:
        """Create a new school class.

        Every referenced row is checked before anything is written.
        """
        caller_school_id = _caller_school_id()
        if caller_school_id is not None and data.school_id != caller_school_id:
            raise ForbiddenException("You can only create classes in your own school")

        school = await db.get(School, data.school_id)
        if not school:
            raise NotFoundException("School")

        grade = await db.get(Grade, data.grade_id)
        if not grade:
            raise NotFoundException("Grade")
        if grade.school_id != school.id:
            raise BadRequestException("Grade does not belong to the specified school")

        if data.supervisor_id:
            await self._get_supervisor(db, data.supervisor_id, school.id)

        await self._ensure_unique_name(db, data.school_id, data.name)

        school_class = SchoolClass(
            school_id=data.school_id,
            grade_id=data.grade_id,
            supervisor_id=data.supervisor_id,
            name=data.name,
            capacity=data.capacity,
        )

        db.add(school_class)
        await db.flush()
        await db.refresh(school_class)

        logger.info(f"Class created: class_id={school_class.id} school_id={school_class.school_id}")
        return school_class

    async def update_class(
        self,
        db: AsyncSession,
        class_id: uuid.UUID,
        data: SchoolClassUpdate,
    ) -> SchoolClass:
        """Update a school class."""
        school_class = await self.get_class(db, class_id)

        update_data = data.model_dump(exclude_unset=True)

        null_fields = [f for f in ("name", "capacity") if f in update_data and update_data[f] is None]
        if null_fields:
            raise ValidationException(
                [{"field": field, "message": "Field cannot be null"} for field in null_fields]
            )

        if update_data.get("supervisor_id"):
            await self._get_supervisor(db, update_data["supervisor_id"], school_class.school_id)

        if update_data.get("name") and update_data["name"] != school_class.name:
            await self._ensure_unique_name(
                db, school_class.school_id, update_data["name"], exclude_id=school_class.id
            )

        # Update fields
        for field, value in update_data.items():
            setattr(school_class, field, value)

        await db.flush()
        await db.refresh(school_class)

        logger.info(f"Class updated: class_id={class_id}")
        return school_class

    async def delete_class(
        self,
        db: AsyncSession,
        class_id: uuid.UUID,
    ) -> None:
        """Delete a class. Students in it are left without a class."""
        school_class = await self.get_class(db, class_id)

        await db.delete(school_class)
        await db.flush()

        logger.info(f"Class deleted: class_id={class_id}")

    async def _get_supervisor(
        self,
        db: AsyncSession,
        teacher_id: uuid.UUID,
        school_id: uuid.UUID,
    ) -> Teacher:
        teacher = await db.get(Teacher, teacher_id)
        if not teacher:
            raise NotFoundException("Teacher", "Supervisor not found")
        if teacher.school_id != school_id:
            raise BadRequestException("Supervisor does not belong to the specified school")
        return teacher

    async def _ensure_unique_name(
        self,
        db: AsyncSession,
        school_id: uuid.UUID,
        name: str,
        exclude_id: uuid.UUID | None = None,
    ) -> None:
        query = select(SchoolClass.id).where(
            SchoolClass.school_id == school_id,
            SchoolClass.name == name,
        )
        if exclude_id:
            query = query.where(SchoolClass.id != exclude_id)

        result = await db.execute(query)
        if result.first():
            raise ConflictException("A class with this name already exists in this school")


def get_class_service() -> ClassService:
    """Get class service instance."""
    return ClassService()
