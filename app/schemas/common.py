"""Common Pydantic schemas used across the application."""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Base schema with common configuration.

    Fields are exposed in camelCase for the mobile and web clients, while
    snake_case names are still accepted on input.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
    )


class PaginationMeta(BaseSchema):
    """Pagination metadata for list responses."""

    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PaginationMeta":
        return cls(page=page, limit=limit, total=total, pages=math.ceil(total / limit))


class MessageResponse(BaseSchema):
    """Envelope for responses that carry only a message."""

    message: str


class ErrorDetail(BaseModel):
    """Field-level error detail."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Standard error response."""

    message: str
    errors: list[ErrorDetail] | None = None
    error: str | None = None


def error_responses(*status_codes: int) -> dict[int | str, dict[str, Any]]:
    """OpenAPI ``responses`` entries documenting the error envelope."""
    return {code: {"model": ErrorResponse} for code in status_codes}
