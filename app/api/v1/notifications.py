"""Notification API endpoints."""

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.schemas.common import PaginationMeta, error_responses
from app.schemas.notification import (
    MarkAllReadResponse,
    NotificationEnvelope,
    NotificationListResponse,
    NotificationView,
)
from app.services.notification_service import get_notification_service
from app.utils.tenant_context import get_current_user_id

router = APIRouter()


@router.get("", response_model=NotificationListResponse, responses=error_responses(400, 401))
async def list_notifications(
    unread_only: bool = Query(False, alias="unreadOnly"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    db: AsyncSession = Depends(get_db),
):
    """List the current user's notifications, newest first."""
    user_id = get_current_user_id()
    service = get_notification_service()

    notifications, total = await service.get_notifications(
        db, user_id, unread_only=unread_only, page=page, limit=limit
    )
    unread_count = await service.get_unread_count(db, user_id)

    return NotificationListResponse(
        message="Notifications retrieved successfully",
        notifications=[NotificationView.model_validate(n) for n in notifications],
        pagination=PaginationMeta.build(page=page, limit=limit, total=total),
        unread_count=unread_count,
    )


@router.put("/read-all", response_model=MarkAllReadResponse, responses=error_responses(401))
async def mark_all_notifications_read(
    db: AsyncSession = Depends(get_db),
):
    """Mark all of the current user's notifications as read."""
    service = get_notification_service()
    count = await service.mark_all_as_read(db, get_current_user_id())
    await db.commit()

    return MarkAllReadResponse(message="All notifications marked as read", updated_count=count)


@router.put(
    "/{notification_id}/read",
    response_model=NotificationEnvelope,
    responses=error_responses(401, 404),
)
async def mark_notification_read(
    notification_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Mark one notification as read."""
    service = get_notification_service()
    notification = await service.mark_as_read(db, notification_id, get_current_user_id())
    await db.commit()

    return NotificationEnvelope(
        message="Notification marked as read",
        notification=NotificationView.model_validate(notification),
    )
