"""Notification service for managing in-app notifications."""

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundException
from app.models.notification import Notification

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for managing user notifications."""

    async def get_notifications(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        unread_only: bool = False,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Notification], int]:
        """Get notifications for a user, newest first."""
        # Build query
        query = select(Notification).where(Notification.user_id == user_id)

        if unread_only:
            query = query.where(Notification.is_read.is_(False))

        # Get total count
        count_query = select(func.count()).select_from(query.subquery())
        total = (await db.execute(count_query)).scalar() or 0

        # Apply pagination and ordering
        query = query.order_by(Notification.created_at.desc(), Notification.id.desc())
        query = query.offset((page - 1) * limit).limit(limit)

        result = await db.execute(query)
        notifications = list(result.scalars().all())

        logger.info(f"Notifications retrieved: user_id={user_id} page={page} total={total}")
        return notifications, total

    async def get_unread_count(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
    ) -> int:
        """Get the count of unread notifications for a user."""
        query = select(func.count(Notification.id)).where(
            Notification.user_id == user_id,
            Notification.is_read.is_(False),
        )

        result = await db.execute(query)
        return result.scalar() or 0

    async def mark_as_read(
        self,
        db: AsyncSession,
        notification_id: uuid.UUID,
        user_id: uuid.UUID,
    ) -> Notification:
        """Mark one of the user's notifications as read.

        Raises:
            NotFoundException: If the notification does not exist or belongs
                to someone else
        """
        result = await db.execute(
            select(Notification).where(
                Notification.id == notification_id,
                Notification.user_id == user_id,
            )
        )
        notification = result.scalar_one_or_none()

        if not notification:
            raise NotFoundException("Notification")

        if not notification.is_read:
            notification.is_read = True
            notification.read_at = datetime.now(timezone.utc)
            await db.flush()
            await db.refresh(notification)

        return notification

    async def mark_all_as_read(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
    ) -> int:
        """Mark all notifications as read for a user."""
        stmt = (
            update(Notification)
            .where(
                Notification.user_id == user_id,
                Notification.is_read.is_(False),
            )
            .values(is_read=True, read_at=datetime.now(timezone.utc))
        )

        result = await db.execute(stmt)

        logger.info(f"Notifications marked read: user_id={user_id} count={result.rowcount}")
        return result.rowcount


def get_notification_service() -> NotificationService:
    """Get notification service instance."""
    return NotificationService()
