"""Pydantic schemas for the academic calendar."""

import uuid
from datetime import date
from enum import Enum

from pydantic import Field

from app.schemas.common import BaseSchema


class CalendarItemType(str, Enum):
    """Kinds of entries merged into the academic calendar."""

    EXAM = "EXAM"
    HOLIDAY = "HOLIDAY"
    EVENT = "EVENT"
    ASSIGNMENT = "ASSIGNMENT"


class CalendarItem(BaseSchema):
    """A normalized calendar entry. Only assignments carry subject and class."""

    id: uuid.UUID
    type: CalendarItemType
    title: str
    date: date
    description: str | None = None
    subject: str | None = None
    class_name: str | None = Field(None, alias="class")


class CalendarResponse(BaseSchema):
    message: str
    start_date: date
    end_date: date
    events: list[CalendarItem]
