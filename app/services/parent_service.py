"""Parent-facing mobile screens: home dashboard, children and own profile."""

import logging
import uuid

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exceptions import NotFoundException
from app.models import Assignment, AssignmentSubmission, School, Student, User
from app.models.academic import AssignmentType
from app.schemas.parent import (
    AssignmentSummary,
    ChildDashboard,
    ChildProfile,
    ClassSummary,
    GradeSummary,
    OnboardingProfile,
    ParentProfile,
    SchoolSummary,
)
from app.services.attendance_service import get_attendance_service
from app.services.fee_service import get_fee_service
from app.utils.calculations import calculate_age, percentage

logger = logging.getLogger(__name__)


def _school_summary(student: Student) -> SchoolSummary | None:
    school = student.school
    if not school:
        return None
    return SchoolSummary(id=school.id, name=school.name, city=school.city, logo_url=school.logo_url)


def _class_summary(student: Student) -> ClassSummary | None:
    if not student.school_class:
        return None
    return ClassSummary(id=student.school_class.id, name=student.school_class.name)


def _grade_summary(student: Student) -> GradeSummary | None:
    if not student.grade:
        return None
    return GradeSummary(id=student.grade.id, name=student.grade.name, level=student.grade.level)


class ParentService:
    """Service for the parent home screen and profile views."""

    async def get_parent(self, db: AsyncSession, user_id: uuid.UUID) -> User:
        """Get the parent's user record.

        Raises:
            NotFoundException: If the user no longer exists
        """
        result = await db.execute(select(User).where(User.id == user_id))
        parent = result.scalar_one_or_none()

        if not parent:
            logger.warning(f"Parent user not found: user_id={user_id}")
            raise NotFoundException("Parent", "Parent profile not found.")

        return parent

    async def get_children(self, db: AsyncSession, parent_id: uuid.UUID) -> list[Student]:
        """Get a parent's children ordered by school name, then child name."""
        result = await db.execute(
            select(Student)
            .join(School, Student.school_id == School.id)
            .where(Student.parent_id == parent_id)
            .order_by(School.name, Student.name)
        )
        return list(result.scalars().all())

    async def get_children_profiles(
        self, db: AsyncSession, parent_id: uuid.UUID
    ) -> list[ChildProfile]:
        """Get the children list with derived age and placement details."""
        children = await self.get_children(db, parent_id)

        logger.info(f"Children list retrieved: user_id={parent_id} children={len(children)}")
        return [
            ChildProfile(
                id=child.id,
                name=child.name,
                surname=child.surname,
                birthday=child.birthday,
                age=child.age,
                image_url=child.image_url,
                registration_number=child.registration_number,
                school=_school_summary(child),
                school_class=_class_summary(child),
                grade=_grade_summary(child),
            )
            for child in children
        ]

    async def get_assignment_summary(
        self, db: AsyncSession, student: Student
    ) -> AssignmentSummary:
        """Submission progress over the assignments a student is expected to do.

        Those are the assignments of the student's class plus the school's
        class-wide assignments.
        """
        conditions = [
            and_(
                Assignment.assignment_type == AssignmentType.CLASS_WIDE.value,
                Assignment.school_id == student.school_id,
            )
        ]
        if student.class_id:
            conditions.append(Assignment.class_id == student.class_id)
        eligible = or_(*conditions)

        total = (
            await db.execute(select(func.count()).select_from(Assignment).where(eligible))
        ).scalar() or 0

        submitted = (
            await db.execute(
                select(func.count())
                .select_from(AssignmentSubmission)
                .join(Assignment, AssignmentSubmission.assignment_id == Assignment.id)
                .where(AssignmentSubmission.student_id == student.id, eligible)
            )
        ).scalar() or 0

        return AssignmentSummary(
            total_assignments=total,
            submitted_assignments=submitted,
            percentage_completed=percentage(submitted, total),
        )

    async def get_home_screen(
        self, db: AsyncSession, user_id: uuid.UUID
    ) -> tuple[ParentProfile, list[ChildDashboard]]:
        """Get the parent profile and a dashboard entry per child.

        Children are summarized one after another on the same session.
        """
        parent = await self.get_parent(db, user_id)
        children = await self.get_children(db, user_id)

        attendance_service = get_attendance_service()
        fee_service = get_fee_service()

        dashboards = []
        for child in children:
            attendance = await attendance_service.get_summary(
                db, child.id, settings.attendance_summary_days
            )
            assignments = await self.get_assignment_summary(db, child)
            fee_status = await fee_service.get_fee_status(db, child, parent.id)

            dashboards.append(
                ChildDashboard(
                    id=child.id,
                    name=child.name,
                    surname=child.surname,
                    age=child.age,
                    image_url=child.image_url,
                    school=_school_summary(child),
                    school_class=_class_summary(child),
                    grade=_grade_summary(child),
                    attendance_summary=attendance,
                    assignment_summary=assignments,
                    fee_status=fee_status,
                )
            )

        logger.info(f"Home screen data retrieved: user_id={user_id} children={len(dashboards)}")
        profile = ParentProfile(
            id=parent.id,
            name=parent.name,
            surname=parent.surname,
            email=parent.email,
            profile_image_url=parent.profile_image_url,
            role=parent.role,
        )
        return profile, dashboards

    async def get_onboarding_profile(
        self, db: AsyncSession, user_id: uuid.UUID
    ) -> OnboardingProfile:
        """Get the parent's own profile with derived age."""
        parent = await self.get_parent(db, user_id)

        logger.info(f"Parent onboarding profile retrieved: user_id={user_id}")
        return OnboardingProfile(
            id=parent.id,
            name=parent.name,
            surname=parent.surname,
            email=parent.email,
            phone=parent.phone,
            address=parent.address,
            profile_image_url=parent.profile_image_url,
            created_at=parent.created_at,
            birthday=parent.birthday,
            age=calculate_age(parent.birthday),
        )


def get_parent_service() -> ParentService:
    """Get parent service instance."""
    return ParentService()
