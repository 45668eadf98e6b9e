"""Tests for calendar type parsing and merging."""

import uuid
from datetime import date

from app.schemas.calendar import CalendarItem, CalendarItemType
from app.services.calendar_service import merge_items, parse_types


def _entry(item_type: CalendarItemType, on: date) -> CalendarItem:
    return CalendarItem(id=uuid.uuid4(), type=item_type, title=item_type.value.title(), date=on)


def test_missing_types_select_everything():
    assert parse_types(None) == list(CalendarItemType)
    assert parse_types("  ") == list(CalendarItemType)


def test_types_are_case_insensitive_and_deduplicated():
    assert parse_types("exam, Holiday,EXAM") == [CalendarItemType.EXAM, CalendarItemType.HOLIDAY]


def test_examination_is_an_alias_for_exam():
    assert parse_types("EXAMINATION") == [CalendarItemType.EXAM]


def test_unknown_types_are_ignored():
    assert parse_types("BIRTHDAY,EVENT") == [CalendarItemType.EVENT]
    assert parse_types("BIRTHDAY") == []


def test_merge_orders_all_groups_by_date():
    exams = [_entry(CalendarItemType.EXAM, date(2024, 5, 20))]
    holidays = [_entry(CalendarItemType.HOLIDAY, date(2024, 5, 18))]
    events = [
        _entry(CalendarItemType.EVENT, date(2024, 5, 22)),
        _entry(CalendarItemType.EVENT, date(2024, 5, 19)),
    ]

    merged = merge_items(exams, holidays, events)

    assert [item.date for item in merged] == [
        date(2024, 5, 18),
        date(2024, 5, 19),
        date(2024, 5, 20),
        date(2024, 5, 22),
    ]


def test_merge_of_nothing_is_empty():
    assert merge_items() == []
