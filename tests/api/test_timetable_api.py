"""API tests: GET /api/v1/mobile/time-table.

Invariants:
    - Slots are ordered by weekday then start time, flat and grouped per day
    - Missing relations render as "N/A"
    - Parents only see their own children's timetables
"""

from datetime import date, timedelta

from app.models import Timetable, TimetableSlot

URL = "/api/v1/mobile/time-table"


async def _seed_timetable(db, world, **kwargs):
    timetable = Timetable(
        school_id=world.school.id,
        name=kwargs.pop("name", "Term 2 Timetable"),
        is_active=kwargs.pop("is_active", True),
        effective_from=kwargs.pop("effective_from", date.today() - timedelta(days=30)),
        effective_to=kwargs.pop("effective_to", None),
        classes=[world.school_class],
    )
    db.add(timetable)
    await db.flush()

    db.add_all(
        [
            TimetableSlot(
                timetable_id=timetable.id,
                day="TUESDAY",
                period=1,
                start_time="08:00",
                end_time="08:45",
                lesson_id=world.english_lesson.id,
                teacher_id=world.teacher.id,
                room_id=world.room.id,
            ),
            TimetableSlot(
                timetable_id=timetable.id,
                day="MONDAY",
                period=2,
                start_time="09:00",
                end_time="10:00",
                lesson_id=world.math_lesson.id,
                teacher_id=world.teacher.id,
                room_id=world.room.id,
            ),
            TimetableSlot(
                timetable_id=timetable.id,
                day="MONDAY",
                period=1,
                start_time="08:00",
                end_time="08:45",
                lesson_id=world.english_lesson.id,
            ),
            TimetableSlot(
                timetable_id=timetable.id,
                day="WEDNESDAY",
                period=1,
                start_time="08:00",
                end_time="08:30",
                notes="Assembly",
            ),
        ]
    )
    await db.commit()
    return timetable


async def test_timetable_grouped_and_sorted(client, db, world, auth_headers):
    await _seed_timetable(db, world)

    resp = await client.get(f"{URL}/{world.student.id}", headers=auth_headers(world.parent))

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Timetable fetched successfully"
    assert body["timetableName"] == "Term 2 Timetable"
    assert [(s["day"], s["startTime"]) for s in body["data"]] == [
        ("MONDAY", "08:00"),
        ("MONDAY", "09:00"),
        ("TUESDAY", "08:00"),
        ("WEDNESDAY", "08:00"),
    ]
    assert [d["day"] for d in body["days"]] == ["MONDAY", "TUESDAY", "WEDNESDAY"]
    assert len(body["days"][0]["slots"]) == 2

    maths = body["data"][1]
    assert maths["lessonName"] == "Maths 3A"
    assert maths["subject"] == "Mathematics"
    assert maths["teacher"] == "Tendai Moyo"
    assert maths["room"] == "Room 12"
    assert maths["durationMinutes"] == 60


async def test_missing_relations_render_as_not_available(client, db, world, auth_headers):
    await _seed_timetable(db, world)

    resp = await client.get(f"{URL}/{world.student.id}", headers=auth_headers(world.parent))

    assembly = resp.json()["data"][3]
    assert assembly["lessonName"] == "N/A"
    assert assembly["subject"] == "N/A"
    assert assembly["teacher"] == "N/A"
    assert assembly["room"] == "N/A"
    assert assembly["notes"] == "Assembly"

    # Lesson present but no teacher or room on the slot
    first = resp.json()["data"][0]
    assert first["subject"] == "English"
    assert first["teacher"] == "N/A"


async def test_query_parameter_form(client, db, world, auth_headers):
    await _seed_timetable(db, world)

    resp = await client.get(
        URL, params={"studentId": str(world.student.id)}, headers=auth_headers(world.parent)
    )

    assert resp.status_code == 200
    assert len(resp.json()["data"]) == 4


async def test_filters_by_day_and_subject(client, db, world, auth_headers):
    await _seed_timetable(db, world)
    headers = auth_headers(world.parent)

    by_day = await client.get(f"{URL}/{world.student.id}?day=monday", headers=headers)
    by_subject = await client.get(
        f"{URL}/{world.student.id}", params={"subjectId": str(world.english.id)}, headers=headers
    )

    assert {s["day"] for s in by_day.json()["data"]} == {"MONDAY"}
    assert len(by_day.json()["data"]) == 2
    assert {s["subject"] for s in by_subject.json()["data"]} == {"English"}
    assert len(by_subject.json()["data"]) == 2


async def test_filters_by_time_window(client, db, world, auth_headers):
    await _seed_timetable(db, world)

    resp = await client.get(
        f"{URL}/{world.student.id}",
        params={"startTime": "08:30", "endTime": "10:00"},
        headers=auth_headers(world.parent),
    )

    assert [s["startTime"] for s in resp.json()["data"]] == ["09:00"]


async def test_missing_student_id_is_bad_request(client, world, auth_headers):
    resp = await client.get(URL, headers=auth_headers(world.parent))

    assert resp.status_code == 400
    assert resp.json()["message"] == "Student ID is required."


async def test_unknown_student_is_not_found(client, world, auth_headers):
    resp = await client.get(
        f"{URL}/0190a000-0000-7000-8000-000000000000", headers=auth_headers(world.parent)
    )

    assert resp.status_code == 404
    assert resp.json()["message"] == "Student not found."


async def test_student_without_class(client, world, auth_headers):
    resp = await client.get(
        f"{URL}/{world.unassigned_student.id}", headers=auth_headers(world.parent)
    )

    assert resp.status_code == 404
    assert resp.json()["message"] == "Student is not assigned to a class, no timetable available."


async def test_no_active_timetable(client, db, world, auth_headers):
    await _seed_timetable(db, world, is_active=False)

    resp = await client.get(f"{URL}/{world.student.id}", headers=auth_headers(world.parent))

    assert resp.status_code == 404


async def test_expired_timetable_is_not_used(client, db, world, auth_headers):
    await _seed_timetable(db, world, effective_to=date.today() - timedelta(days=1))

    resp = await client.get(f"{URL}/{world.student.id}", headers=auth_headers(world.parent))

    assert resp.status_code == 404


async def test_other_parents_child_is_forbidden(client, db, world, auth_headers):
    await _seed_timetable(db, world)

    resp = await client.get(f"{URL}/{world.student.id}", headers=auth_headers(world.other_parent))

    assert resp.status_code == 403
    assert resp.json()["message"] == "Access denied. You can only view your own children."


async def test_staff_of_other_school_cannot_see_student(client, db, world, auth_headers):
    await _seed_timetable(db, world)

    resp = await client.get(f"{URL}/{world.student.id}", headers=auth_headers(world.other_admin))

    assert resp.status_code == 404


async def test_teacher_of_same_school_can_read(client, db, world, auth_headers):
    await _seed_timetable(db, world)

    resp = await client.get(f"{URL}/{world.student.id}", headers=auth_headers(world.teacher_user))

    assert resp.status_code == 200


async def test_requires_authentication(client, world):
    resp = await client.get(f"{URL}/{world.student.id}")

    assert resp.status_code == 401
