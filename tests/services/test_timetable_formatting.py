"""Tests for timetable slot ordering, formatting and day grouping."""

import uuid

from app.models import Lesson, Room, Subject, Teacher, TimetableSlot, User
from app.services.timetable_service import NOT_AVAILABLE, format_slot, group_by_day, sort_slots


def _slot(day: str, start: str, end: str, **kwargs) -> TimetableSlot:
    return TimetableSlot(
        id=uuid.uuid4(),
        day=day,
        start_time=start,
        end_time=end,
        is_active=kwargs.pop("is_active", True),
        **kwargs,
    )


def test_slots_sort_by_weekday_then_start_time():
    slots = [
        _slot("WEDNESDAY", "08:00", "08:45"),
        _slot("MONDAY", "10:00", "10:45"),
        _slot("MONDAY", "08:00", "08:45"),
        _slot("TUESDAY", "07:30", "08:15"),
    ]

    ordered = sort_slots(slots)

    assert [(s.day, s.start_time) for s in ordered] == [
        ("MONDAY", "08:00"),
        ("MONDAY", "10:00"),
        ("TUESDAY", "07:30"),
        ("WEDNESDAY", "08:00"),
    ]


def test_unknown_day_sorts_last():
    ordered = sort_slots([_slot("HOLIDAY", "08:00", "09:00"), _slot("SUNDAY", "08:00", "09:00")])

    assert [s.day for s in ordered] == ["SUNDAY", "HOLIDAY"]


def test_format_slot_flattens_relations():
    teacher = Teacher(user=User(name="Tendai", surname="Moyo", email="t@example.com", role="TEACHER"))
    lesson = Lesson(name="Maths 3A", subject=Subject(name="Mathematics"), teacher=teacher)
    slot = _slot(
        "MONDAY",
        "08:00",
        "09:30",
        period=1,
        lesson=lesson,
        teacher=teacher,
        room=Room(name="Room 12"),
        notes="Bring calculators",
    )

    view = format_slot(slot)

    assert view.lesson_name == "Maths 3A"
    assert view.subject == "Mathematics"
    assert view.teacher == "Tendai Moyo"
    assert view.room == "Room 12"
    assert view.duration_minutes == 90
    assert view.period == 1
    assert view.notes == "Bring calculators"


def test_format_slot_marks_missing_relations():
    view = format_slot(_slot("FRIDAY", "12:00", "12:30"))

    assert view.lesson_name == NOT_AVAILABLE
    assert view.subject == NOT_AVAILABLE
    assert view.teacher == NOT_AVAILABLE
    assert view.room == NOT_AVAILABLE


def test_group_by_day_keeps_order_within_each_day():
    views = [
        format_slot(s)
        for s in sort_slots(
            [
                _slot("TUESDAY", "09:00", "10:00"),
                _slot("MONDAY", "11:00", "12:00"),
                _slot("MONDAY", "08:00", "09:00"),
            ]
        )
    ]

    days = group_by_day(views)

    assert [d.day for d in days] == ["MONDAY", "TUESDAY"]
    assert [s.start_time for s in days[0].slots] == ["08:00", "11:00"]
    assert len(days[1].slots) == 1
