"""API tests: GET /api/v1/mobile/academic-calendar.

Invariants:
    - Exams, holidays, events and assignments merge into one date-ordered list
    - Only items of the resolved school and within the window are returned
    - Only assignments carry subject and class names
"""

from datetime import date, datetime, timezone

from app.models import Assignment, Event, Exam, Holiday
from app.models.academic import AssignmentType

URL = "/api/v1/mobile/academic-calendar"
WINDOW = {"startDate": "2024-05-01", "endDate": "2024-05-31"}


async def _seed_calendar(db, world):
    db.add_all(
        [
            Exam(
                school_id=world.school.id,
                title="Maths mid-term",
                start_date=date(2024, 5, 20),
                subject_id=world.math.id,
                class_id=world.school_class.id,
            ),
            Holiday(
                school_id=world.school.id,
                name="Africa Day",
                start_date=date(2024, 5, 25),
                end_date=date(2024, 5, 25),
            ),
            Event(
                school_id=world.school.id,
                title="Sports day",
                description="Bring water",
                start_time=datetime(2024, 5, 10, 9, 0, tzinfo=timezone.utc),
            ),
            Assignment(
                school_id=world.school.id,
                title="Fractions worksheet",
                assignment_type=AssignmentType.CLASS_SPECIFIC.value,
                due_date=date(2024, 5, 15),
                class_id=world.school_class.id,
                subject_id=world.math.id,
            ),
            # Outside the window
            Exam(school_id=world.school.id, title="June exam", start_date=date(2024, 6, 3)),
            # Other school
            Holiday(
                school_id=world.other_school.id,
                name="Founders day",
                start_date=date(2024, 5, 12),
                end_date=date(2024, 5, 12),
            ),
        ]
    )
    await db.commit()


async def test_items_merged_and_ordered_by_date(client, db, world, auth_headers):
    await _seed_calendar(db, world)

    resp = await client.get(
        URL, params={**WINDOW, "schoolId": str(world.school.id)}, headers=auth_headers(world.parent)
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Academic calendar events retrieved successfully"
    assert body["startDate"] == "2024-05-01"
    assert [(e["type"], e["date"]) for e in body["events"]] == [
        ("EVENT", "2024-05-10"),
        ("ASSIGNMENT", "2024-05-15"),
        ("EXAM", "2024-05-20"),
        ("HOLIDAY", "2024-05-25"),
    ]

    assignment = body["events"][1]
    assert assignment["subject"] == "Mathematics"
    assert assignment["class"] == "3A"
    assert body["events"][2]["subject"] is None


async def test_types_select_a_subset(client, db, world, auth_headers):
    await _seed_calendar(db, world)

    resp = await client.get(
        URL,
        params={**WINDOW, "schoolId": str(world.school.id), "types": "EXAMINATION,holiday"},
        headers=auth_headers(world.parent),
    )

    assert [e["type"] for e in resp.json()["events"]] == ["EXAM", "HOLIDAY"]


async def test_school_resolved_from_caller(client, db, world, auth_headers):
    await _seed_calendar(db, world)

    resp = await client.get(URL, params=WINDOW, headers=auth_headers(world.teacher_user))

    assert resp.status_code == 200
    assert len(resp.json()["events"]) == 4


async def test_school_resolved_from_student(client, db, world, auth_headers):
    await _seed_calendar(db, world)

    resp = await client.get(
        URL,
        params={**WINDOW, "studentId": str(world.student.id)},
        headers=auth_headers(world.parent),
    )

    assert resp.status_code == 200
    assert "Founders day" not in [e["title"] for e in resp.json()["events"]]


async def test_no_school_is_bad_request(client, world, auth_headers):
    resp = await client.get(URL, params=WINDOW, headers=auth_headers(world.parent))

    assert resp.status_code == 400
    assert resp.json()["message"] == "School ID is required. Provide schoolId or studentId."


async def test_staff_cannot_read_other_school(client, world, auth_headers):
    resp = await client.get(
        URL,
        params={**WINDOW, "schoolId": str(world.other_school.id)},
        headers=auth_headers(world.admin),
    )

    assert resp.status_code == 403


async def test_inverted_window(client, world, auth_headers):
    resp = await client.get(
        URL,
        params={"startDate": "2024-05-31", "endDate": "2024-05-01", "schoolId": str(world.school.id)},
        headers=auth_headers(world.parent),
    )

    assert resp.status_code == 400


async def test_default_window_starts_today(client, world, auth_headers):
    resp = await client.get(
        URL, params={"schoolId": str(world.school.id)}, headers=auth_headers(world.parent)
    )

    body = resp.json()
    assert body["startDate"] == date.today().isoformat()
    assert body["events"] == []
