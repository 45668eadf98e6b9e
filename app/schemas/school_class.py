"""Pydantic schemas for SchoolClass entities."""

import uuid

from pydantic import Field

from app.schemas.common import BaseSchema, PaginationMeta


class SchoolClassCreate(BaseSchema):
    """Schema for creating a school class."""

    name: str = Field(..., min_length=1, max_length=100)
    capacity: int = Field(..., ge=1)
    school_id: uuid.UUID
    grade_id: uuid.UUID
    supervisor_id: uuid.UUID | None = None


class SchoolClassUpdate(BaseSchema):
    """Schema for updating a school class."""

    name: str | None = Field(None, min_length=1, max_length=100)
    capacity: int | None = Field(None, ge=1)
    supervisor_id: uuid.UUID | None = None


class SchoolClassResponse(BaseSchema):
    """Schema for school class response."""

    id: uuid.UUID
    name: str
    capacity: int
    school_id: uuid.UUID
    grade_id: uuid.UUID
    supervisor_id: uuid.UUID | None = None


class SchoolClassListResponse(BaseSchema):
    message: str
    classes: list[SchoolClassResponse]
    pagination: PaginationMeta


class SchoolClassEnvelope(BaseSchema):
    """A single class wrapped in the response envelope."""

    message: str
    school_class: SchoolClassResponse = Field(..., alias="class")
