"""Authentication API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.schemas.auth import CurrentUserResponse, LoginRequest, LoginResponse, UserInfo
from app.schemas.common import error_responses
from app.services.auth_service import get_auth_service

router = APIRouter()


@router.post("/login", response_model=LoginResponse, responses=error_responses(400, 401))
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """Authenticate a user and return a bearer access token."""
    auth_service = get_auth_service()
    access_token, user = await auth_service.login(db, request)
    await db.commit()

    return LoginResponse(
        message="Login successful",
        user=UserInfo.model_validate(user),
        access_token=access_token,
        expires_in=settings.jwt_access_token_expire_minutes * 60,
    )


@router.get("/me", response_model=CurrentUserResponse, responses=error_responses(401, 404))
async def get_me(
    db: AsyncSession = Depends(get_db),
):
    """Get the currently authenticated user."""
    auth_service = get_auth_service()
    user = await auth_service.get_current_user(db)

    return CurrentUserResponse(
        message="User retrieved successfully",
        user=UserInfo.model_validate(user),
    )
