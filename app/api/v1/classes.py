"""School class API endpoints."""

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.models.user import Role
from app.schemas.common import MessageResponse, PaginationMeta, error_responses
from app.schemas.school_class import (
    SchoolClassCreate,
    SchoolClassEnvelope,
    SchoolClassListResponse,
    SchoolClassResponse,
    SchoolClassUpdate,
)
from app.services.class_service import get_class_service
from app.utils.permissions import SCHOOL_MANAGER_ROLES, STAFF_ROLES, require_role

router = APIRouter()


@router.get("", response_model=SchoolClassListResponse, responses=error_responses(400, 401, 403))
@require_role(*STAFF_ROLES)
async def list_classes(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(
        settings.default_page_size, ge=1, le=settings.max_page_size, description="Items per page"
    ),
    school_id: uuid.UUID | None = Query(None, alias="schoolId", description="Filter by school"),
    db: AsyncSession = Depends(get_db),
):
    """List classes.

    Callers bound to a school only see that school's classes.
    """
    service = get_class_service()
    classes, total = await service.get_classes(db, school_id=school_id, page=page, limit=limit)

    return SchoolClassListResponse(
        message="Classes retrieved successfully",
        classes=[SchoolClassResponse.model_validate(c) for c in classes],
        pagination=PaginationMeta.build(page=page, limit=limit, total=total),
    )


@router.get("/{class_id}", response_model=SchoolClassEnvelope, responses=error_responses(401, 403, 404))
@require_role(*STAFF_ROLES)
async def get_class(
    class_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a class by ID."""
    service = get_class_service()
    school_class = await service.get_class(db, class_id)

    return SchoolClassEnvelope(
        message="Class retrieved successfully",
        school_class=SchoolClassResponse.model_validate(school_class),
    )


@router.post(
    "",
    response_model=SchoolClassEnvelope,
    status_code=201,
    responses=error_responses(400, 401, 403, 404, 409),
)
@require_role(*SCHOOL_MANAGER_ROLES)
async def create_class(
    data: SchoolClassCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new school class."""
    service = get_class_service()
    school_class = await service.create_class(db, data)
    await db.commit()

    return SchoolClassEnvelope(
        message="Class created successfully",
        school_class=SchoolClassResponse.model_validate(school_class),
    )


@router.put(
    "/{class_id}",
    response_model=SchoolClassEnvelope,
    responses=error_responses(400, 401, 403, 404, 409),
)
@require_role(*SCHOOL_MANAGER_ROLES)
async def update_class(
    class_id: uuid.UUID,
    data: SchoolClassUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update a class."""
    service = get_class_service()
    school_class = await service.update_class(db, class_id, data)
    await db.commit()

    return SchoolClassEnvelope(
        message="Class updated successfully",
        school_class=SchoolClassResponse.model_validate(school_class),
    )


@router.delete("/{class_id}", response_model=MessageResponse, responses=error_responses(401, 403, 404))
@require_role(*SCHOOL_MANAGER_ROLES)
async def delete_class(
    class_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a class."""
    service = get_class_service()
    await service.delete_class(db, class_id)
    await db.commit()

    return MessageResponse(message="Class deleted successfully")
