"""Pydantic schemas for in-app notifications."""

import uuid
from datetime import datetime
from typing import Any

from pydantic import Field

from app.schemas.common import BaseSchema, PaginationMeta


class NotificationView(BaseSchema):
    id: uuid.UUID
    title: str
    content: str
    notification_type: str = Field(..., alias="type")
    data: dict[str, Any] | None = None
    is_read: bool
    read_at: datetime | None = None
    created_at: datetime


class NotificationListResponse(BaseSchema):
    message: str
    notifications: list[NotificationView]
    pagination: PaginationMeta
    unread_count: int


class NotificationEnvelope(BaseSchema):
    message: str
    notification: NotificationView


class MarkAllReadResponse(BaseSchema):
    message: str
    updated_count: int
