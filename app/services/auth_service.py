"""Authentication service for login and the current user."""

import logging
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundException, UnauthorizedException
from app.models import User
from app.schemas.auth import LoginRequest
from app.utils.security import create_access_token, verify_password
from app.utils.tenant_context import get_current_user_id

logger = logging.getLogger(__name__)


class AuthService:
    """Service for handling authentication operations."""

    async def login(self, db: AsyncSession, request: LoginRequest) -> tuple[str, User]:
        """Authenticate a user and issue an access token.

        Args:
            db: Database session
            request: Login request with email and password

        Returns:
            Tuple of (access token, User)

        Raises:
            UnauthorizedException: If credentials are invalid or the account is inactive
        """
        stmt = select(User).where(func.lower(User.email) == request.email.lower())
        result = await db.execute(stmt)
        user = result.scalar_one_or_none()

        if not user or not verify_password(request.password, user.password_hash):
            logger.warning(f"Failed login attempt for {request.email}")
            raise UnauthorizedException("Invalid credentials")

        if not user.is_active:
            raise UnauthorizedException("Your account is inactive")

        user.last_login_at = datetime.now(timezone.utc)
        await db.flush()

        access_token = create_access_token(
            user_id=user.id,
            role=user.role,
            school_id=user.school_id,
            name=user.full_name,
        )

        logger.info(f"User logged in: user_id={user.id} role={user.role}")
        return access_token, user

    async def get_current_user(self, db: AsyncSession) -> User:
        """Load the user behind the current request."""
        user_id = get_current_user_id()

        result = await db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()

        if not user or not user.is_active:
            raise NotFoundException("User")

        return user


# Singleton instance
_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Get the auth service singleton."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service
