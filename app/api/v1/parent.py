"""Mobile endpoints for parents: home screen, children and own profile."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.common import error_responses
from app.schemas.parent import ChildrenResponse, HomeScreenResponse, OnboardingProfileResponse
from app.services.parent_service import get_parent_service
from app.utils.permissions import require_parent
from app.utils.tenant_context import get_current_user_id

router = APIRouter()


@router.get("/home", response_model=HomeScreenResponse, responses=error_responses(401, 403, 404))
@require_parent("Access denied. Only parents can view home screen data.")
async def get_home_screen(
    db: AsyncSession = Depends(get_db),
):
    """Get the parent's profile and a summary per child.

    Each child carries attendance over the last 30 days, assignment
    completion and fee status.
    """
    service = get_parent_service()
    profile, children = await service.get_home_screen(db, get_current_user_id())

    return HomeScreenResponse(
        message="Home screen data retrieved successfully",
        parent_profile=profile,
        children_data=children,
    )


@router.get("/children", response_model=ChildrenResponse, responses=error_responses(401, 403))
@require_parent("Access denied. Only parents can view their children.")
async def get_children(
    db: AsyncSession = Depends(get_db),
):
    """List the parent's children."""
    service = get_parent_service()
    children = await service.get_children_profiles(db, get_current_user_id())

    return ChildrenResponse(message="Children list retrieved successfully", children=children)


@router.get(
    "/profile",
    response_model=OnboardingProfileResponse,
    responses=error_responses(401, 403, 404),
)
@require_parent("Access denied. Only parents can access this profile.")
async def get_onboarding_profile(
    db: AsyncSession = Depends(get_db),
):
    """Get the parent's own profile."""
    service = get_parent_service()
    profile = await service.get_onboarding_profile(db, get_current_user_id())

    return OnboardingProfileResponse(message="Parent profile retrieved successfully", profile=profile)
