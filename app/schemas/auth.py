"""Pydantic schemas for authentication."""

import uuid
from datetime import date

from pydantic import EmailStr, Field

from app.schemas.common import BaseSchema


class LoginRequest(BaseSchema):
    """Login request with email and password."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class UserInfo(BaseSchema):
    """The authenticated user as returned to clients."""

    id: uuid.UUID
    email: str
    name: str
    surname: str
    role: str
    school_id: uuid.UUID | None = None
    phone: str | None = None
    profile_image_url: str | None = None
    birthday: date | None = None


class LoginResponse(BaseSchema):
    """Successful login: the user plus a bearer access token."""

    message: str
    user: UserInfo
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class CurrentUserResponse(BaseSchema):
    message: str
    user: UserInfo
