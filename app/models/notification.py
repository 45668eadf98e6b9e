"""Notification model for in-app notifications."""

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class NotificationType(str, Enum):
    """Types of notifications."""

    # Academic
    ASSIGNMENT = "ASSIGNMENT"
    EXAM = "EXAM"
    RESULT = "RESULT"
    ATTENDANCE = "ATTENDANCE"

    # School life
    EVENT = "EVENT"
    ANNOUNCEMENT = "ANNOUNCEMENT"
    MESSAGE = "MESSAGE"

    # Fees
    PAYMENT = "PAYMENT"

    # System
    GENERAL = "GENERAL"


class Notification(BaseModel):
    """In-app notification for a user."""

    __tablename__ = "notifications"
    __table_args__ = (
        Index(
            "idx_notifications_user_unread",
            "user_id",
            "is_read",
            postgresql_where=text("is_read = false"),
        ),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    notification_type: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        default=NotificationType.GENERAL.value,
    )
    data: Mapped[dict | None] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=True,
    )
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    read_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
