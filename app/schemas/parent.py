"""Pydantic schemas for the parent-facing mobile screens."""

import uuid
from datetime import date, datetime

from pydantic import Field

from app.schemas.attendance import AttendanceSummary
from app.schemas.common import BaseSchema


class SchoolSummary(BaseSchema):
    id: uuid.UUID
    name: str
    city: str | None = None
    logo_url: str | None = None


class ClassSummary(BaseSchema):
    id: uuid.UUID
    name: str


class GradeSummary(BaseSchema):
    id: uuid.UUID
    name: str
    level: int


class ChildProfile(BaseSchema):
    """A child as listed on the parent's children screen."""

    id: uuid.UUID
    name: str
    surname: str
    birthday: date | None = None
    age: int | None = None
    image_url: str | None = None
    registration_number: str | None = None
    school: SchoolSummary | None = None
    school_class: ClassSummary | None = Field(None, alias="class")
    grade: GradeSummary | None = None


class ChildrenResponse(BaseSchema):
    message: str
    children: list[ChildProfile]


class AssignmentSummary(BaseSchema):
    total_assignments: int
    submitted_assignments: int
    percentage_completed: float


class FeeStatus(BaseSchema):
    """Fee position of one child.

    status is "Outstanding", "Up-to-date", or "Unavailable" when the fee
    data could not be read; in that case outstanding_amount is None.
    """

    status: str
    outstanding_amount: float | None = None
    last_payment_date: datetime | None = None


class ChildDashboard(BaseSchema):
    """Per-child summary shown on the parent home screen."""

    id: uuid.UUID
    name: str
    surname: str
    age: int | None = None
    image_url: str | None = None
    school: SchoolSummary | None = None
    school_class: ClassSummary | None = Field(None, alias="class")
    grade: GradeSummary | None = None
    attendance_summary: AttendanceSummary
    assignment_summary: AssignmentSummary
    fee_status: FeeStatus


class ParentProfile(BaseSchema):
    id: uuid.UUID
    name: str
    surname: str
    email: str
    profile_image_url: str | None = None
    role: str


class HomeScreenResponse(BaseSchema):
    message: str
    parent_profile: ParentProfile
    children_data: list[ChildDashboard]


class OnboardingProfile(BaseSchema):
    """The parent's own profile as shown during onboarding."""

    id: uuid.UUID
    name: str
    surname: str
    email: str
    phone: str | None = None
    address: str | None = None
    profile_image_url: str | None = None
    created_at: datetime
    birthday: date | None = None
    age: int | None = None


class OnboardingProfileResponse(BaseSchema):
    message: str
    profile: OnboardingProfile
