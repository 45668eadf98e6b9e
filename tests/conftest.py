"""Shared fixtures: in-memory database, API client and a seeded school."""

import os

os.environ.setdefault("APP_SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("APP_ENV", "development")

from datetime import date
from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import get_db
from app.main import app
from app.models import (
    Base,
    Grade,
    Lesson,
    Room,
    School,
    SchoolClass,
    Student,
    Subject,
    Teacher,
    User,
)
from app.models.base import ApprovalStatus
from app.models.user import Role
from app.utils.security import create_access_token


@pytest.fixture
async def test_engine():
    """One shared in-memory SQLite connection per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def _bearer(user: User) -> dict[str, str]:
    token = create_access_token(
        user_id=user.id,
        role=user.role,
        school_id=user.school_id,
        name=user.full_name,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers():
    """Build a bearer header for a seeded user."""
    return _bearer


def make_user(role: Role, email: str, school_id=None, **kwargs) -> User:
    return User(
        email=email,
        password_hash=kwargs.pop("password_hash", "unusable"),
        name=kwargs.pop("name", role.value.title()),
        surname=kwargs.pop("surname", "Tester"),
        role=role.value,
        school_id=school_id,
        **kwargs,
    )


@pytest.fixture
async def world(db):
    """Two schools, staff of every role, a parent with two children and lessons.

    The first child sits in a class with Mathematics and English lessons;
    the second child has no class.
    """
    school = School(name="Greenfield Primary", tenant_id="greenfield", city="Harare")
    other_school = School(name="Alpha Academy", tenant_id="alpha", city="Bulawayo")
    db.add_all([school, other_school])
    await db.flush()

    grade = Grade(school_id=school.id, name="Grade 3", level=3)
    other_grade = Grade(school_id=other_school.id, name="Grade 3", level=3)
    db.add_all([grade, other_grade])

    super_admin = make_user(Role.SUPER_ADMIN, "root@edutrack.example.com")
    admin = make_user(Role.SCHOOL_ADMIN, "admin@greenfield.example.com", school.id)
    principal = make_user(Role.PRINCIPAL, "principal@greenfield.example.com", school.id)
    teacher_user = make_user(
        Role.TEACHER, "teacher@greenfield.example.com", school.id, name="Tendai", surname="Moyo"
    )
    other_admin = make_user(Role.SCHOOL_ADMIN, "admin@alpha.example.com", other_school.id)
    parent = make_user(
        Role.PARENT,
        "parent@family.example.com",
        name="Rudo",
        surname="Chikore",
        phone="+263770000000",
        birthday=date(1985, 6, 15),
    )
    other_parent = make_user(Role.PARENT, "other@family.example.com", name="Farai")
    db.add_all([super_admin, admin, principal, teacher_user, other_admin, parent, other_parent])
    await db.flush()

    teacher = Teacher(
        school_id=school.id,
        user_id=teacher_user.id,
        approval_status=ApprovalStatus.APPROVED.value,
    )
    db.add(teacher)
    await db.flush()

    school_class = SchoolClass(
        school_id=school.id,
        grade_id=grade.id,
        supervisor_id=teacher.id,
        name="3A",
        capacity=30,
    )
    db.add(school_class)
    await db.flush()

    student = Student(
        school_id=school.id,
        name="Anesu",
        surname="Chikore",
        birthday=date(2015, 3, 10),
        registration_number="GF-001",
        class_id=school_class.id,
        grade_id=grade.id,
        parent_id=parent.id,
    )
    unassigned_student = Student(
        school_id=school.id,
        name="Zoe",
        surname="Chikore",
        registration_number="GF-002",
        grade_id=grade.id,
        parent_id=parent.id,
    )
    db.add_all([student, unassigned_student])

    math = Subject(school_id=school.id, name="Mathematics", code="MATH")
    english = Subject(school_id=school.id, name="English", code="ENG")
    room = Room(school_id=school.id, name="Room 12", capacity=35)
    db.add_all([math, english, room])
    await db.flush()

    math_lesson = Lesson(
        school_id=school.id,
        name="Maths 3A",
        subject_id=math.id,
        class_id=school_class.id,
        teacher_id=teacher.id,
    )
    english_lesson = Lesson(
        school_id=school.id,
        name="English 3A",
        subject_id=english.id,
        class_id=school_class.id,
        teacher_id=teacher.id,
    )
    db.add_all([math_lesson, english_lesson])
    await db.commit()

    return SimpleNamespace(
        school=school,
        other_school=other_school,
        grade=grade,
        other_grade=other_grade,
        super_admin=super_admin,
        admin=admin,
        principal=principal,
        teacher_user=teacher_user,
        teacher=teacher,
        other_admin=other_admin,
        parent=parent,
        other_parent=other_parent,
        school_class=school_class,
        student=student,
        unassigned_student=unassigned_student,
        math=math,
        english=english,
        room=room,
        math_lesson=math_lesson,
        english_lesson=english_lesson,
    )
