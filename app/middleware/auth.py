"""Authentication middleware for JWT token validation."""

import logging
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.utils.security import decode_access_token
from app.utils.tenant_context import (
    clear_all_context,
    set_current_user_id,
    set_current_user_role,
    set_school_id,
)

logger = logging.getLogger(__name__)


class AuthMiddleware(BaseHTTPMiddleware):
    """Middleware that extracts the bearer token and fills the request context.

    Requests without a valid token pass through with an empty context;
    role-gated endpoints reject them with 401.
    """

    # Paths that don't require authentication
    EXEMPT_PATHS = {
        "/health",
        "/api/docs",
        "/api/redoc",
        "/api/openapi.json",
        "/api/v1/auth/login",
    }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and extract authentication context."""
        clear_all_context()

        if request.url.path in self.EXEMPT_PATHS:
            return await call_next(request)

        token = self._extract_token(request)
        if token:
            payload = decode_access_token(token)
            if payload:
                self._apply_payload(payload)
            else:
                logger.warning(f"Rejected invalid token on {request.url.path}")

        try:
            return await call_next(request)
        finally:
            clear_all_context()

    @staticmethod
    def _apply_payload(payload: dict) -> None:
        """Copy token claims into the request context."""
        try:
            set_current_user_id(uuid.UUID(payload["sub"]))

            if payload.get("school_id"):
                set_school_id(uuid.UUID(payload["school_id"]))

            if payload.get("role"):
                set_current_user_role(payload["role"])
        except (KeyError, ValueError, TypeError):
            # Malformed claims - leave the context unauthenticated
            clear_all_context()

    @staticmethod
    def _extract_token(request: Request) -> str | None:
        """Extract the JWT from the Authorization header."""
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            return auth_header.removeprefix("Bearer ").strip()
        return None
