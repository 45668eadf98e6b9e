"""API tests: /api/v1/classes CRUD.

Invariants:
    - Creation validates school, grade and supervisor before writing anything
    - Grade and supervisor must belong to the class's school
    - Updates reject explicit nulls for required fields
    - School-bound callers only see and manage their own school's classes
"""

import uuid

from sqlalchemy import func, select

from app.models import SchoolClass, Teacher, User
from app.models.base import ApprovalStatus
from app.models.user import Role

URL = "/api/v1/classes"
MISSING_ID = "0190a000-0000-7000-8000-000000000000"


def _payload(world, **overrides):
    payload = {
        "name": "3B",
        "capacity": 28,
        "schoolId": str(world.school.id),
        "gradeId": str(world.grade.id),
        "supervisorId": str(world.teacher.id),
    }
    payload.update(overrides)
    return payload


async def _class_count(session_factory) -> int:
    async with session_factory() as session:
        return (await session.execute(select(func.count()).select_from(SchoolClass))).scalar()


async def _foreign_teacher(db, world) -> Teacher:
    user = User(
        email="teacher@alpha.example.com",
        password_hash="unusable",
        name="Kuda",
        surname="Ncube",
        role=Role.TEACHER.value,
        school_id=world.other_school.id,
    )
    db.add(user)
    await db.flush()
    teacher = Teacher(
        school_id=world.other_school.id,
        user_id=user.id,
        approval_status=ApprovalStatus.APPROVED.value,
    )
    db.add(teacher)
    await db.commit()
    return teacher


async def test_create_class(client, world, auth_headers):
    resp = await client.post(URL, json=_payload(world), headers=auth_headers(world.admin))

    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Class created successfully"
    created = body["class"]
    assert created["name"] == "3B"
    assert created["capacity"] == 28
    assert created["gradeId"] == str(world.grade.id)
    assert created["supervisorId"] == str(world.teacher.id)
    uuid.UUID(created["id"])


async def test_create_class_without_supervisor(client, world, auth_headers):
    payload = _payload(world)
    del payload["supervisorId"]

    resp = await client.post(URL, json=payload, headers=auth_headers(world.principal))

    assert resp.status_code == 201
    assert resp.json()["class"]["supervisorId"] is None


async def test_missing_school_writes_nothing(client, session_factory, world, auth_headers):
    before = await _class_count(session_factory)

    resp = await client.post(
        URL, json=_payload(world, schoolId=MISSING_ID), headers=auth_headers(world.super_admin)
    )

    assert resp.status_code == 404
    assert await _class_count(session_factory) == before


async def test_missing_grade_writes_nothing(client, session_factory, world, auth_headers):
    before = await _class_count(session_factory)

    resp = await client.post(
        URL, json=_payload(world, gradeId=MISSING_ID), headers=auth_headers(world.admin)
    )

    assert resp.status_code == 404
    assert await _class_count(session_factory) == before


async def test_missing_supervisor_writes_nothing(client, session_factory, world, auth_headers):
    before = await _class_count(session_factory)

    resp = await client.post(
        URL, json=_payload(world, supervisorId=MISSING_ID), headers=auth_headers(world.admin)
    )

    assert resp.status_code == 404
    assert resp.json()["message"] == "Supervisor not found"
    assert await _class_count(session_factory) == before


async def test_grade_from_another_school(client, world, auth_headers):
    resp = await client.post(
        URL,
        json=_payload(world, gradeId=str(world.other_grade.id)),
        headers=auth_headers(world.admin),
    )

    assert resp.status_code == 400


async def test_supervisor_from_another_school_writes_nothing(
    client, db, session_factory, world, auth_headers
):
    outsider = await _foreign_teacher(db, world)
    before = await _class_count(session_factory)

    resp = await client.post(
        URL, json=_payload(world, supervisorId=str(outsider.id)), headers=auth_headers(world.admin)
    )

    assert resp.status_code == 400
    assert resp.json()["message"] == "Supervisor does not belong to the specified school"
    assert await _class_count(session_factory) == before


async def test_duplicate_name_conflicts(client, world, auth_headers):
    resp = await client.post(URL, json=_payload(world, name="3A"), headers=auth_headers(world.admin))

    assert resp.status_code == 409


async def test_create_in_another_school_is_forbidden(client, world, auth_headers):
    resp = await client.post(
        URL,
        json=_payload(world, schoolId=str(world.other_school.id), gradeId=str(world.other_grade.id)),
        headers=auth_headers(world.admin),
    )

    assert resp.status_code == 403


async def test_teacher_cannot_create(client, world, auth_headers):
    resp = await client.post(URL, json=_payload(world), headers=auth_headers(world.teacher_user))

    assert resp.status_code == 403


async def test_invalid_payload(client, world, auth_headers):
    resp = await client.post(
        URL, json=_payload(world, capacity=0, name=""), headers=auth_headers(world.admin)
    )

    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Invalid input"
    assert {e["field"] for e in body["errors"]} >= {"capacity", "name"}


async def test_list_classes_paginates(client, db, world, auth_headers):
    for name in ("1A", "2A", "4A"):
        db.add(
            SchoolClass(
                school_id=world.school.id, grade_id=world.grade.id, name=name, capacity=20
            )
        )
    db.add(
        SchoolClass(
            school_id=world.other_school.id, grade_id=world.other_grade.id, name="9Z", capacity=20
        )
    )
    await db.commit()

    resp = await client.get(URL, params={"page": 1, "limit": 3}, headers=auth_headers(world.admin))

    assert resp.status_code == 200
    body = resp.json()
    assert [c["name"] for c in body["classes"]] == ["1A", "2A", "3A"]
    assert body["pagination"] == {"page": 1, "limit": 3, "total": 4, "pages": 2}


async def test_super_admin_lists_all_schools(client, db, world, auth_headers):
    db.add(
        SchoolClass(
            school_id=world.other_school.id, grade_id=world.other_grade.id, name="9Z", capacity=20
        )
    )
    await db.commit()

    resp = await client.get(URL, headers=auth_headers(world.super_admin))
    filtered = await client.get(
        URL, params={"schoolId": str(world.other_school.id)}, headers=auth_headers(world.super_admin)
    )

    assert resp.json()["pagination"]["total"] == 2
    assert [c["name"] for c in filtered.json()["classes"]] == ["9Z"]


async def test_get_class(client, world, auth_headers):
    resp = await client.get(f"{URL}/{world.school_class.id}", headers=auth_headers(world.teacher_user))

    assert resp.status_code == 200
    assert resp.json()["class"]["name"] == "3A"


async def test_other_schools_class_is_not_found(client, world, auth_headers):
    resp = await client.get(f"{URL}/{world.school_class.id}", headers=auth_headers(world.other_admin))

    assert resp.status_code == 404


async def test_update_class(client, world, auth_headers):
    resp = await client.put(
        f"{URL}/{world.school_class.id}",
        json={"capacity": 35, "name": "3A Blue"},
        headers=auth_headers(world.admin),
    )

    assert resp.status_code == 200
    updated = resp.json()["class"]
    assert updated["capacity"] == 35
    assert updated["name"] == "3A Blue"
    assert updated["supervisorId"] == str(world.teacher.id)


async def test_update_to_existing_name_conflicts(client, db, world, auth_headers):
    db.add(SchoolClass(school_id=world.school.id, grade_id=world.grade.id, name="3B", capacity=20))
    await db.commit()

    resp = await client.put(
        f"{URL}/{world.school_class.id}", json={"name": "3B"}, headers=auth_headers(world.admin)
    )

    assert resp.status_code == 409


async def test_update_with_supervisor_from_another_school(client, db, world, auth_headers):
    outsider = await _foreign_teacher(db, world)

    resp = await client.put(
        f"{URL}/{world.school_class.id}",
        json={"supervisorId": str(outsider.id)},
        headers=auth_headers(world.admin),
    )
    follow_up = await client.get(f"{URL}/{world.school_class.id}", headers=auth_headers(world.admin))

    assert resp.status_code == 400
    assert follow_up.json()["class"]["supervisorId"] == str(world.teacher.id)


async def test_update_rejects_null_name(client, world, auth_headers):
    resp = await client.put(
        f"{URL}/{world.school_class.id}", json={"name": None}, headers=auth_headers(world.admin)
    )

    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Invalid input"
    assert body["errors"] == [{"field": "name", "message": "Field cannot be null"}]


async def test_update_may_clear_supervisor(client, world, auth_headers):
    resp = await client.put(
        f"{URL}/{world.school_class.id}", json={"supervisorId": None}, headers=auth_headers(world.admin)
    )

    assert resp.status_code == 200
    assert resp.json()["class"]["supervisorId"] is None


async def test_delete_class(client, world, auth_headers):
    headers = auth_headers(world.admin)

    resp = await client.delete(f"{URL}/{world.school_class.id}", headers=headers)
    follow_up = await client.get(f"{URL}/{world.school_class.id}", headers=headers)

    assert resp.status_code == 200
    assert resp.json()["message"] == "Class deleted successfully"
    assert follow_up.status_code == 404


async def test_parent_cannot_list_classes(client, world, auth_headers):
    resp = await client.get(URL, headers=auth_headers(world.parent))

    assert resp.status_code == 403


async def test_requires_authentication(client, world):
    resp = await client.get(URL)

    assert resp.status_code == 401
